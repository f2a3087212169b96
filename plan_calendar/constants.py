#!/usr/bin/env python3
"""
Single source of truth for constants used across the plan calendar.

All shared constants should be defined here to avoid duplication.
"""

from typing import List


# === WEEKS ===

DAYS_PER_WEEK: int = 7


# === DAY MAPPINGS ===
# Monday is always the first day of the week, regardless of locale.

# Indexed by date.weekday() (0=Monday .. 6=Sunday)
DAY_ORDER: List[str] = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
DAY_ORDER_DISPLAY: List[str] = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

# Session payloads number days 1=Monday .. 7=Sunday
SESSION_DAY_MIN: int = 1
SESSION_DAY_MAX: int = 7


# === MONTHS ===

MONTH_ABBREV: List[str] = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                           'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


# === PLAN LENGTH ===

# Anything shorter gets a warning from the calendar validator
RECOMMENDED_MIN_WEEKS: int = 6
