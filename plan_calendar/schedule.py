#!/usr/bin/env python3
"""
Week-by-week plan calendar, its sanity checks and a text rendering.

The calendar is a plain dict of ISO date strings so it can be dumped to YAML
or JSON as-is:
- Week 1 Monday = plan_start
- Final week = race week, containing race_date
- plan_end = Sunday of the race week
"""

from typing import Any, Dict, List, Optional

from .calculator import PlanWindow
from .config_loader import Config
from .constants import DAY_ORDER_DISPLAY, RECOMMENDED_MIN_WEEKS
from .dates import DateLike, format_compact, format_iso, format_short, parse_date, weekday_abbrev
from .errors import PlanCalendarValidationError
from .logger import get_logger


def build_plan_calendar(end_date: DateLike, weeks: int,
                        today: Optional[DateLike] = None) -> Dict[str, Any]:
    """
    Calculate all plan dates working backwards from race date.

    Args:
        end_date: Race date
        weeks: Number of weeks in the plan, race week included
        today: Optional reference day; marks the current week when given

    Returns:
        Dict with plan timing information and one entry per week

    Raises:
        InvalidArgument: If weeks is not a positive integer
    """
    window = PlanWindow.for_race(end_date, weeks)
    current_week = window.week_index(today) if today is not None else None

    week_dates = []
    for span in window.weeks_list():
        days = []
        for day in span.days():
            days.append({
                'day': weekday_abbrev(day),
                'day_name': DAY_ORDER_DISPLAY[day.weekday()],
                'date': format_iso(day),
                'date_short': format_short(day),
                'is_race_day': day == window.end_date,
            })

        week_dates.append({
            'week': span.number,
            'monday': format_iso(span.monday),
            'monday_short': format_compact(span.monday),
            'sunday': format_iso(span.sunday),
            'sunday_short': format_compact(span.sunday),
            'is_race_week': span.is_race_week,
            'is_current_week': span.number == current_week,
            'days': days,
        })

    calendar = {
        'race_date': format_iso(window.end_date),
        'race_weekday': DAY_ORDER_DISPLAY[window.end_date.weekday()],
        'plan_weeks': window.weeks,
        'plan_start': format_iso(window.start_date),
        'plan_start_short': format_short(window.start_date),
        'plan_end': format_iso(window.last_day),
        'race_week_monday': format_iso(window.race_week_monday),
        'weeks': week_dates,
    }
    if current_week is not None:
        calendar['today'] = format_iso(today)
        calendar['current_week'] = current_week

    get_logger().debug("Built plan calendar", race_date=calendar['race_date'],
                       plan_weeks=window.weeks, plan_start=calendar['plan_start'])
    return calendar


def validate_plan_calendar(calendar: Dict[str, Any],
                           config: Optional[Config] = None) -> List[str]:
    """
    Validate a plan calendar for sanity.

    Returns list of 'CRITICAL: ...' and 'WARNING: ...' messages (empty if valid).
    """
    errors = []
    min_weeks = config.recommended_min_weeks if config is not None else RECOMMENDED_MIN_WEEKS

    race_date = parse_date(calendar['race_date'])
    plan_start = parse_date(calendar['plan_start'])
    plan_weeks = calendar['plan_weeks']
    weeks = calendar.get('weeks', [])

    # 1. Race date must be within race week
    if weeks:
        race_week = weeks[-1]
        race_week_monday = parse_date(race_week['monday'])
        race_week_sunday = parse_date(race_week['sunday'])
        if not (race_week_monday <= race_date <= race_week_sunday):
            errors.append(f"CRITICAL: Race date {calendar['race_date']} not in race week "
                          f"({race_week['monday']} - {race_week['sunday']})")

    # 2. Plan must start on a Monday
    if plan_start.weekday() != 0:
        errors.append(f"CRITICAL: Plan start {calendar['plan_start']} is not a Monday")

    # 3. Plan start must not be after race date
    if plan_start > race_date:
        errors.append(f"CRITICAL: Plan start {calendar['plan_start']} is after race date {calendar['race_date']}")

    # 4. Plan weeks must match actual weeks list
    if len(weeks) != plan_weeks:
        errors.append(f"CRITICAL: plan_weeks ({plan_weeks}) doesn't match weeks list length ({len(weeks)})")

    # 5. Week 1 must start on plan_start
    if weeks and weeks[0]['monday'] != calendar['plan_start']:
        errors.append(f"CRITICAL: Week 1 Monday ({weeks[0]['monday']}) doesn't match "
                      f"plan_start ({calendar['plan_start']})")

    # 6. Final week must be race week
    if weeks and not weeks[-1]['is_race_week']:
        errors.append("CRITICAL: Final week must be race week")

    # 7. Weeks must be consecutive
    for i in range(1, len(weeks)):
        prev_sunday = parse_date(weeks[i - 1]['sunday'])
        curr_monday = parse_date(weeks[i]['monday'])
        if (curr_monday - prev_sunday).days != 1:
            errors.append(f"CRITICAL: Gap between week {i} and week {i + 1}")

    # 8. Week numbers must be sequential
    for i, week in enumerate(weeks):
        if week['week'] != i + 1:
            errors.append(f"CRITICAL: Week number mismatch at index {i}: expected {i + 1}, got {week['week']}")

    # 9. Short plans are allowed but flagged
    if plan_weeks < min_weeks:
        errors.append(f"WARNING: Plan is only {plan_weeks} weeks (minimum recommended: {min_weeks})")

    return errors


def critical_errors(errors: List[str]) -> List[str]:
    return [e for e in errors if e.startswith("CRITICAL")]


def ensure_valid_calendar(calendar: Dict[str, Any], config: Optional[Config] = None) -> List[str]:
    """Validate and raise on critical errors; returns the remaining warnings."""
    errors = validate_plan_calendar(calendar, config)
    critical = critical_errors(errors)
    if critical:
        raise PlanCalendarValidationError(critical)
    return errors


def format_week_calendar(calendar: Dict[str, Any]) -> str:
    """Format week dates for display with race and current week markers."""
    lines = []
    lines.append("Week  | Start (Mon) | End (Sun)   | Notes")
    lines.append("------|-------------|-------------|------")

    for week in calendar['weeks']:
        notes = []
        if week['is_race_week']:
            notes.append(f"RACE WEEK - Race on {calendar['race_date']}")
        if week.get('is_current_week'):
            notes.append("CURRENT")

        lines.append(
            f"W{week['week']:02d}   | {week['monday']}  | {week['sunday']}  | {' / '.join(notes)}".rstrip()
        )

    return "\n".join(lines)


def run_sanity_checks(calendar: Dict[str, Any], config: Optional[Config] = None) -> bool:
    """Run all sanity checks and log the results."""
    log = get_logger()
    log.header("SANITY CHECKS")

    errors = validate_plan_calendar(calendar, config)
    for error in errors:
        if error.startswith("CRITICAL"):
            log.error(error)
        else:
            log.warning(error)

    passed = not critical_errors(errors)
    if passed:
        log.success("All sanity checks passed", plan_weeks=calendar['plan_weeks'])
    else:
        log.error("Sanity checks failed - do not use this calendar")
    return passed
