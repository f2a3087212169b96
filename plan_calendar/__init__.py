"""
Plan calendar: start dates and week numbers for race-targeted training plans.
"""

from .calculator import (
    PlanWindow,
    WeekSpan,
    date_for_session,
    is_date_in_week,
    plan_window,
    start_date_for,
    week_bounds,
    week_index_for,
)
from .errors import (
    ConfigError,
    InvalidArgument,
    InvalidDateError,
    PlanCalendarError,
    PlanCalendarValidationError,
)
from .navigation import WeekNavigator
from .schedule import build_plan_calendar, validate_plan_calendar
from .status import PlanStatus, plan_status, summarize

__version__ = '1.0.0'
