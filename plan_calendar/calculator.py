#!/usr/bin/env python3
"""
Calculate plan dates working backwards from race date.

Plan Dating Standards:
- Race week = final week of plan
- Week 1 = first training week (furthest from race)
- Plan starts on Monday of Week 1
- Each week runs Monday-Sunday
- Week numbers for any other date are clamped to [1, weeks]

The server that creates plans runs the same rule, so start_date_for must
give identical results for identical inputs.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from .constants import DAYS_PER_WEEK, SESSION_DAY_MAX, SESSION_DAY_MIN
from .dates import DateLike, days_between, monday_of, shift, sunday_of, to_date
from .errors import InvalidArgument


def require_weeks(weeks, name: str = 'weeks') -> int:
    # bool is an int subclass; True is not a week count
    if isinstance(weeks, bool) or not isinstance(weeks, int):
        raise InvalidArgument(f"{name} must be an integer, got {weeks!r}")
    if weeks < 1:
        raise InvalidArgument(f"{name} must be at least 1, got {weeks}")
    return weeks


def _require_week_number(week_number, total_weeks: int) -> int:
    if isinstance(week_number, bool) or not isinstance(week_number, int):
        raise InvalidArgument(f"week number must be an integer, got {week_number!r}")
    if not 1 <= week_number <= total_weeks:
        raise InvalidArgument(f"week number {week_number} outside 1-{total_weeks}")
    return week_number


def start_date_for(end_date: DateLike, weeks: int) -> date:
    """
    Monday of week 1 for a plan ending on end_date.

    Args:
        end_date: Race date (any weekday)
        weeks: Number of weeks in the plan, race week included

    Returns:
        The Monday (weeks - 1) weeks before the Monday of the race week

    Raises:
        InvalidArgument: If weeks is not a positive integer, or the start
            would fall before the first representable date
    """
    weeks = require_weeks(weeks)
    race_week_monday = monday_of(end_date)
    return shift(race_week_monday, weeks=-(weeks - 1))


def week_index_for(start_date: DateLike, total_weeks: int, reference_date: DateLike) -> int:
    """
    1-based week of the plan containing reference_date, clamped to [1, total_weeks].

    Dates before the plan start give week 1, dates after the final week give
    the last week.
    """
    total_weeks = require_weeks(total_weeks, 'total_weeks')
    raw_index = days_between(start_date, reference_date) // DAYS_PER_WEEK + 1
    return max(1, min(raw_index, total_weeks))


def week_bounds(start_date: DateLike, week_number: int) -> Tuple[date, date]:
    """(Monday, Sunday) of the given week counted from start_date."""
    if isinstance(week_number, bool) or not isinstance(week_number, int) or week_number < 1:
        raise InvalidArgument(f"week number must be a positive integer, got {week_number!r}")
    monday = shift(to_date(start_date), weeks=week_number - 1)
    return monday, shift(monday, days=DAYS_PER_WEEK - 1)


def is_date_in_week(start_date: DateLike, week_number: int, day: DateLike) -> bool:
    """True if day falls within Monday-Sunday of the given plan week."""
    monday, sunday = week_bounds(start_date, week_number)
    return monday <= to_date(day) <= sunday


def date_for_session(start_date: DateLike, week_number: int, day_of_week: int) -> date:
    """
    Calendar date of a session given as (week, dayOfWeek).

    day_of_week follows the session payload convention: 1=Monday .. 7=Sunday.
    """
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) \
            or not SESSION_DAY_MIN <= day_of_week <= SESSION_DAY_MAX:
        raise InvalidArgument(f"day_of_week must be 1-7, got {day_of_week!r}")
    monday, _ = week_bounds(start_date, week_number)
    return shift(monday, days=day_of_week - 1)


@dataclass(frozen=True)
class WeekSpan:
    """One Monday-Sunday bucket of a plan."""

    number: int
    monday: date
    sunday: date
    is_race_week: bool = False

    def contains(self, day: DateLike) -> bool:
        return self.monday <= to_date(day) <= self.sunday

    def days(self) -> List[date]:
        return [shift(self.monday, days=offset) for offset in range(DAYS_PER_WEEK)]


@dataclass(frozen=True)
class PlanWindow:
    """
    A plan's derived timeline.

    start_date is always a Monday and the last week is the race week
    (the Mon-Sun week containing end_date).
    """

    start_date: date
    end_date: date
    weeks: int

    @classmethod
    def for_race(cls, end_date: DateLike, weeks: int) -> 'PlanWindow':
        end = to_date(end_date)
        return cls(start_date=start_date_for(end, weeks), end_date=end, weeks=weeks)

    @property
    def race_week_monday(self) -> date:
        return monday_of(self.end_date)

    @property
    def last_day(self) -> date:
        """Sunday of the race week."""
        return sunday_of(self.end_date)

    def contains(self, day: DateLike) -> bool:
        return self.start_date <= to_date(day) <= self.last_day

    def week(self, number: int) -> WeekSpan:
        number = _require_week_number(number, self.weeks)
        monday, sunday = week_bounds(self.start_date, number)
        return WeekSpan(number=number, monday=monday, sunday=sunday,
                        is_race_week=number == self.weeks)

    def weeks_list(self) -> List[WeekSpan]:
        return [self.week(n) for n in range(1, self.weeks + 1)]

    def week_index(self, reference_date: DateLike) -> int:
        return week_index_for(self.start_date, self.weeks, reference_date)

    def current_week(self, today: DateLike) -> WeekSpan:
        return self.week(self.week_index(today))

    def week_of(self, day: DateLike) -> int:
        """Week number of a day inside the plan; raises for days outside it."""
        if not self.contains(day):
            raise InvalidArgument(f"{to_date(day).isoformat()} is outside the plan")
        return self.week_index(day)


def plan_window(end_date: DateLike, weeks: int) -> PlanWindow:
    """Start date, end date and week count for a plan ending on end_date."""
    return PlanWindow.for_race(end_date, weeks)
