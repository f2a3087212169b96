#!/usr/bin/env python3
"""
Where "today" sits relative to a plan: upcoming, active, race day or completed.
"""

from enum import Enum
from typing import Any, Dict, Optional

from .calculator import PlanWindow
from .dates import DateLike, days_between, format_iso, to_date


class PlanStatus(str, Enum):
    UPCOMING = 'upcoming'
    ACTIVE = 'active'
    RACE_DAY = 'race_day'
    COMPLETED = 'completed'


def plan_status(window: PlanWindow, today: DateLike) -> PlanStatus:
    day = to_date(today)
    if day < window.start_date:
        return PlanStatus.UPCOMING
    if day == window.end_date:
        return PlanStatus.RACE_DAY
    if day > window.end_date:
        return PlanStatus.COMPLETED
    return PlanStatus.ACTIVE


def days_until_race(window: PlanWindow, today: DateLike) -> int:
    """Days left until the race; negative once it has passed."""
    return days_between(today, window.end_date)


def current_week_badge(window: PlanWindow, today: DateLike) -> Optional[int]:
    """Week number to highlight, or None when the plan is not running."""
    if plan_status(window, today) in (PlanStatus.UPCOMING, PlanStatus.COMPLETED):
        return None
    return window.week_index(today)


def progress_percent(window: PlanWindow, today: DateLike) -> int:
    """Share of the start-to-race span already elapsed, 0-100."""
    day = to_date(today)
    if day >= window.end_date:
        return 100
    if day <= window.start_date:
        return 0
    span = days_between(window.start_date, window.end_date)
    elapsed = days_between(window.start_date, day)
    return round(100 * elapsed / span)


def summarize(window: PlanWindow, today: DateLike) -> Dict[str, Any]:
    """Everything a plan card needs to show about today."""
    status = plan_status(window, today)
    return {
        'status': status.value,
        'start_date': format_iso(window.start_date),
        'end_date': format_iso(window.end_date),
        'weeks': window.weeks,
        'current_week': current_week_badge(window, today),
        'days_until_race': days_until_race(window, today),
        'progress_percent': progress_percent(window, today),
    }
