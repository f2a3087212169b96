#!/usr/bin/env python3
"""
Week-by-week navigation through a plan.

The viewed week is explicit state owned by the caller. It is seeded from the
current week and can never move before week 1 or past the race week.
"""

from typing import Optional

from .calculator import PlanWindow, require_weeks
from .dates import DateLike


class WeekNavigator:
    """Tracks the viewed week of a plan and clamps every move."""

    def __init__(self, total_weeks: int, current: Optional[int] = None):
        self.total_weeks = require_weeks(total_weeks, 'total_weeks')
        self.current_week = self._clamp(current if current is not None else 1)
        self.viewed_week = self.current_week

    @classmethod
    def for_plan(cls, window: PlanWindow, today: DateLike) -> 'WeekNavigator':
        """Navigator opened on the week containing today."""
        return cls(window.weeks, window.week_index(today))

    def _clamp(self, week: int) -> int:
        return max(1, min(int(week), self.total_weeks))

    @property
    def can_go_previous(self) -> bool:
        return self.viewed_week > 1

    @property
    def can_go_next(self) -> bool:
        return self.viewed_week < self.total_weeks

    @property
    def is_current_week(self) -> bool:
        return self.viewed_week == self.current_week

    def previous(self) -> int:
        self.viewed_week = self._clamp(self.viewed_week - 1)
        return self.viewed_week

    def next(self) -> int:
        self.viewed_week = self._clamp(self.viewed_week + 1)
        return self.viewed_week

    def go_to(self, week: int) -> int:
        self.viewed_week = self._clamp(week)
        return self.viewed_week

    def reset(self) -> int:
        """Jump back to the current week."""
        self.viewed_week = self.current_week
        return self.viewed_week

    def __repr__(self):
        return (f"WeekNavigator(total_weeks={self.total_weeks}, "
                f"current={self.current_week}, viewed={self.viewed_week})")
