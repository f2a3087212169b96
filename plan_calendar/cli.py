#!/usr/bin/env python3
"""
Command line entry point.

    plan-calendar start-date 2026-04-26 18
    plan-calendar week-index 2026-02-09 4 --on 2026-02-17
    plan-calendar show 2026-06-28 12 --today 2026-04-01 --output plan_dates.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .atomic_write import write_yaml
from .calculator import require_weeks, start_date_for, week_index_for
from .config_loader import Config
from .dates import format_iso, to_date, today
from .errors import InvalidArgument, PlanCalendarError
from .logger import get_logger
from .schedule import build_plan_calendar, format_week_calendar, run_sanity_checks


def _check_plan_weeks(weeks: int, config: Config) -> int:
    weeks = require_weeks(weeks)
    low, high = config.plan_weeks_range
    if not low <= weeks <= high:
        raise InvalidArgument(f"Plan must be {low}-{high} weeks, got {weeks}")
    return weeks


def cmd_start_date(args, config: Config) -> int:
    weeks = _check_plan_weeks(args.weeks, config)
    start = start_date_for(args.race_date, weeks)
    get_logger().debug("Calculated plan start", race_date=args.race_date, weeks=weeks)
    print(format_iso(start))
    return 0


def cmd_week_index(args, config: Config) -> int:
    reference = args.on if args.on else today()
    print(week_index_for(args.start_date, args.total_weeks, reference))
    return 0


def cmd_show(args, config: Config) -> int:
    log = get_logger()
    weeks = _check_plan_weeks(args.weeks, config)
    reference = args.today if args.today else today()

    calendar = build_plan_calendar(args.race_date, weeks, today=reference)

    log.header(f"Plan Calendar: {calendar['race_date']}")
    log.detail(f"Race Date: {calendar['race_date']} ({calendar['race_weekday']})")
    log.detail(f"Plan Duration: {calendar['plan_weeks']} weeks")
    log.detail(f"Plan Start: {calendar['plan_start']} (Week 1 Monday)")
    log.detail(f"Plan End: {calendar['plan_end']} (Race Week Sunday)")
    log.detail(f"Current Week: {calendar['current_week']}")

    print(format_week_calendar(calendar))

    if not run_sanity_checks(calendar, config):
        log.error("Not saving - fix errors first")
        return 1

    if args.output:
        output_path = Path(args.output)
        if not output_path.is_absolute():
            output_path = Path(config.get('output.directory', '.')) / output_path
        write_yaml(output_path, calendar)
        log.success(f"Saved to: {output_path}")

    return 0


def _date_arg(value: str) -> str:
    """argparse type: validate and normalize an ISO date."""
    try:
        return format_iso(to_date(value))
    except InvalidArgument as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='plan-calendar',
        description='Training plan start dates and week numbers'
    )
    parser.add_argument('--config', help='Path to plan_calendar.yaml')
    parser.add_argument('--json-logs', action='store_true', help='Emit structured JSON logs')
    parser.add_argument('--log-level', help='Console log level (DEBUG, INFO, WARNING, ERROR)')

    sub = parser.add_subparsers(dest='command', required=True)

    p_start = sub.add_parser('start-date', help='Monday of week 1 for a race date')
    p_start.add_argument('race_date', type=_date_arg, help='Race date (YYYY-MM-DD)')
    p_start.add_argument('weeks', type=int, help='Plan length in weeks')
    p_start.set_defaults(func=cmd_start_date)

    p_index = sub.add_parser('week-index', help='Week number containing a date')
    p_index.add_argument('start_date', type=_date_arg, help='Plan start date (YYYY-MM-DD)')
    p_index.add_argument('total_weeks', type=int, help='Plan length in weeks')
    p_index.add_argument('--on', type=_date_arg, help='Reference date (default: today)')
    p_index.set_defaults(func=cmd_week_index)

    p_show = sub.add_parser('show', help='Print the week-by-week calendar')
    p_show.add_argument('race_date', type=_date_arg, help='Race date (YYYY-MM-DD)')
    p_show.add_argument('weeks', type=int, help='Plan length in weeks')
    p_show.add_argument('--today', type=_date_arg, help='Reference date (default: today)')
    p_show.add_argument('--output', help='Write the calendar as YAML to this file')
    p_show.set_defaults(func=cmd_show)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    log = get_logger()

    try:
        config = Config.load(args.config)
        if args.json_logs or str(config.get('logging.format', '')).lower() == 'json':
            log.set_json_mode(True)
        log.set_level(args.log_level or config.get('logging.level', 'INFO'))
        return args.func(args, config)
    except PlanCalendarError as e:
        log.error(str(e), command=args.command)
        return 1


if __name__ == '__main__':
    sys.exit(main())
