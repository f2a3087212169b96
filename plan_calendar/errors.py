#!/usr/bin/env python3
"""
Exception types for plan calendar calculations.

Only bad input is an error here. Every valid calendar date, including
Feb 29 and year crossings, must be handled without raising.
"""


class PlanCalendarError(Exception):
    """Base class for plan calendar errors."""
    pass


class InvalidArgument(PlanCalendarError, ValueError):
    """Raised for non-positive week counts and out-of-range week/day numbers."""
    pass


class InvalidDateError(InvalidArgument):
    """Raised when a date value cannot be read as a calendar date."""
    pass


class PlanCalendarValidationError(PlanCalendarError):
    """Raised when a built plan calendar fails its sanity checks."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ConfigError(PlanCalendarError):
    """Raised when a config file exists but cannot be loaded."""
    pass
