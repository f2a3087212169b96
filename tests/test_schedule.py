#!/usr/bin/env python3
"""
Regression tests for the week-by-week plan calendar.

Run with: pytest tests/test_schedule.py -v
"""

from datetime import datetime

import pytest

from plan_calendar.config_loader import Config
from plan_calendar.errors import InvalidArgument, PlanCalendarValidationError
from plan_calendar.schedule import (
    build_plan_calendar,
    critical_errors,
    ensure_valid_calendar,
    format_week_calendar,
    run_sanity_checks,
    validate_plan_calendar,
)


def _parse(value):
    return datetime.strptime(value, '%Y-%m-%d')


@pytest.fixture
def calendar():
    """12-week plan for a Sunday race on June 28, 2026."""
    return build_plan_calendar("2026-06-28", 12)


class TestBuildPlanCalendar:
    """Calendar structure."""

    def test_basic_calculation(self, calendar):
        assert calendar['race_date'] == "2026-06-28"
        assert calendar['race_weekday'] == 'Sunday'
        assert calendar['plan_weeks'] == 12
        assert len(calendar['weeks']) == 12
        assert calendar['plan_start'] == "2026-04-06"
        assert calendar['plan_start_short'] == "Apr 6"
        assert calendar['plan_end'] == "2026-06-28"
        assert calendar['race_week_monday'] == "2026-06-22"

    @pytest.mark.parametrize("race_date,expected_day", [
        ("2026-06-28", "Sunday"),
        ("2026-06-27", "Saturday"),
        ("2026-06-22", "Monday"),
        ("2026-06-24", "Wednesday"),
    ])
    def test_race_on_different_weekdays(self, race_date, expected_day):
        result = build_plan_calendar(race_date, 12)
        assert result['race_weekday'] == expected_day

        race_week = result['weeks'][-1]
        assert _parse(race_week['monday']) <= _parse(race_date) <= _parse(race_week['sunday'])
        assert race_week['monday'] == "2026-06-22"
        assert result['plan_end'] == "2026-06-28"

    def test_week_continuity(self):
        result = build_plan_calendar("2026-06-28", 19)
        for prev_week, curr_week in zip(result['weeks'], result['weeks'][1:]):
            gap = (_parse(curr_week['monday']) - _parse(prev_week['sunday'])).days
            assert gap == 1, f"Gap between W{prev_week['week']} and W{curr_week['week']}: {gap} days"

    def test_week_numbering(self):
        result = build_plan_calendar("2026-06-28", 19)
        assert [w['week'] for w in result['weeks']] == list(range(1, 20))

    def test_day_entries(self, calendar):
        week1 = calendar['weeks'][0]
        assert len(week1['days']) == 7
        monday = week1['days'][0]
        assert monday == {
            'day': 'Mon',
            'day_name': 'Monday',
            'date': '2026-04-06',
            'date_short': 'Apr 6',
            'is_race_day': False,
        }
        assert week1['monday_short'] == 'Apr6'
        assert week1['sunday_short'] == 'Apr12'

    def test_is_race_day_flag(self, calendar):
        race_days = [d for w in calendar['weeks'] for d in w['days'] if d['is_race_day']]
        assert len(race_days) == 1
        assert race_days[0]['date'] == "2026-06-28"

    def test_only_final_week_is_race_week(self, calendar):
        flags = [w['is_race_week'] for w in calendar['weeks']]
        assert flags == [False] * 11 + [True]

    def test_sunday_race_19_weeks(self):
        """Sunday June 28, 2026, 19 weeks from Feb 16."""
        result = build_plan_calendar("2026-06-28", 19)
        assert result['plan_start'] == "2026-02-16"
        assert result['weeks'][-1]['monday'] == "2026-06-22"
        assert result['weeks'][-1]['sunday'] == "2026-06-28"

    def test_current_week_marked(self, calendar):
        result = build_plan_calendar("2026-06-28", 12, today="2026-04-15")
        assert result['today'] == "2026-04-15"
        assert result['current_week'] == 2
        assert [w['week'] for w in result['weeks'] if w['is_current_week']] == [2]

    def test_no_current_week_without_today(self, calendar):
        assert 'current_week' not in calendar
        assert not any(w['is_current_week'] for w in calendar['weeks'])

    def test_invalid_weeks(self):
        with pytest.raises(InvalidArgument):
            build_plan_calendar("2026-06-28", 0)

    def test_race_week_past_last_date(self):
        with pytest.raises(InvalidArgument, match="outside the supported calendar range"):
            build_plan_calendar("9999-12-31", 1)

    def test_early_year_dates_stay_iso(self):
        result = build_plan_calendar("0999-06-06", 2)
        assert result['race_date'] == "0999-06-06"
        assert result['plan_start'] == "0999-05-27"
        assert validate_plan_calendar(result) == ["WARNING: Plan is only 2 weeks (minimum recommended: 6)"]


class TestValidatePlanCalendar:
    """Validation catches bad data."""

    def test_valid_plan_passes(self, calendar):
        assert critical_errors(validate_plan_calendar(calendar)) == []

    def test_race_date_outside_race_week(self, calendar):
        calendar['weeks'][-1]['monday'] = "2026-07-01"
        calendar['weeks'][-1]['sunday'] = "2026-07-07"
        errors = validate_plan_calendar(calendar)
        assert any("Race date" in e for e in errors)

    def test_week_number_mismatch(self, calendar):
        calendar['weeks'][5]['week'] = 99
        errors = validate_plan_calendar(calendar)
        assert any("Week number" in e for e in errors)

    def test_plan_weeks_mismatch(self, calendar):
        calendar['plan_weeks'] = 99
        errors = validate_plan_calendar(calendar)
        assert any("plan_weeks" in e for e in errors)

    def test_start_not_monday(self, calendar):
        calendar['plan_start'] = "2026-04-07"
        errors = validate_plan_calendar(calendar)
        assert any("not a Monday" in e for e in errors)
        assert any("Week 1 Monday" in e for e in errors)

    def test_gap_between_weeks(self, calendar):
        calendar['weeks'][3]['monday'] = "2026-04-28"
        errors = validate_plan_calendar(calendar)
        assert any("Gap between week 3 and week 4" in e for e in errors)

    def test_final_week_not_race_week(self, calendar):
        calendar['weeks'][-1]['is_race_week'] = False
        errors = validate_plan_calendar(calendar)
        assert "CRITICAL: Final week must be race week" in errors

    def test_short_plan_warning(self):
        result = build_plan_calendar("2026-06-28", 4)
        errors = validate_plan_calendar(result)
        assert errors == ["WARNING: Plan is only 4 weeks (minimum recommended: 6)"]

    def test_short_plan_threshold_from_config(self):
        config = Config({'validation': {'recommended_min_weeks': 3}})
        result = build_plan_calendar("2026-06-28", 4)
        assert validate_plan_calendar(result, config) == []


class TestEnsureValid:

    def test_returns_warnings(self):
        result = build_plan_calendar("2026-06-28", 2)
        warnings = ensure_valid_calendar(result)
        assert len(warnings) == 1
        assert warnings[0].startswith("WARNING")

    def test_raises_on_critical(self, calendar):
        calendar['weeks'][-1]['is_race_week'] = False
        with pytest.raises(PlanCalendarValidationError) as exc_info:
            ensure_valid_calendar(calendar)
        assert exc_info.value.errors == ["CRITICAL: Final week must be race week"]


class TestFormatting:

    def test_table_rows(self, calendar):
        table = format_week_calendar(calendar)
        lines = table.splitlines()
        assert len(lines) == 2 + 12
        assert lines[2].startswith("W01")
        assert "2026-04-06" in lines[2]
        assert "RACE WEEK - Race on 2026-06-28" in lines[-1]

    def test_current_marker(self):
        result = build_plan_calendar("2026-06-28", 12, today="2026-04-15")
        table = format_week_calendar(result)
        assert "CURRENT" in table.splitlines()[3]


class TestSanityChecks:

    def test_passes_for_valid_calendar(self, calendar):
        assert run_sanity_checks(calendar) is True

    def test_fails_for_broken_calendar(self, calendar, caplog):
        calendar['plan_weeks'] = 3
        assert run_sanity_checks(calendar) is False
        assert "Sanity checks failed" in caplog.text
