#!/usr/bin/env python3
"""
Structured logging for the plan calendar.

Supports two modes:
- Human-readable: Pretty output for interactive use
- JSON: Machine-parseable structured logs for CI/CD

Set PC_LOG_FORMAT=json for structured output and PC_LOG_LEVEL to change the
console level. Logs go to stderr so command results on stdout stay clean.
"""

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = 'plan_calendar'

LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for machine-parseable logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
        }

        if hasattr(record, 'extra_fields'):
            log_obj['fields'] = record.extra_fields

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for interactive use."""

    LEVEL_PREFIXES = {
        'DEBUG': '[DEBUG]',
        'INFO': '',
        'WARNING': '[WARN]',
        'ERROR': '[ERROR]',
        'CRITICAL': '[CRITICAL]',
    }

    def format(self, record: logging.LogRecord) -> str:
        prefix = self.LEVEL_PREFIXES.get(record.levelname, '')
        msg = record.getMessage()

        fields = getattr(record, 'extra_fields', None)
        if fields:
            pairs = ' | '.join(f"{k}={v}" for k, v in fields.items())
            msg = f"{msg} [{pairs}]"

        if prefix:
            return f"{prefix} {msg}"
        return msg


class StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr is at emit time."""

    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


class CalendarLogger:
    """Structured logger wrapping the 'plan_calendar' stdlib logger."""

    def __init__(self, name: str = LOGGER_NAME):
        self._logger = logging.getLogger(name)
        self._json_mode = os.environ.get('PC_LOG_FORMAT', '').lower() == 'json'
        self._console = None
        self._setup_logger()

    def _setup_logger(self):
        self._logger.setLevel(logging.DEBUG)

        # Prevent duplicate handlers
        for handler in self._logger.handlers:
            if getattr(handler, '_plan_calendar_console', False):
                self._console = handler
                return

        console = StderrHandler()
        console._plan_calendar_console = True
        console.setLevel(LEVEL_MAP.get(os.environ.get('PC_LOG_LEVEL', 'INFO').upper(), logging.INFO))
        console.setFormatter(StructuredFormatter() if self._json_mode else HumanFormatter())

        self._logger.addHandler(console)
        self._console = console

    @property
    def json_mode(self) -> bool:
        return self._json_mode

    def set_level(self, level: str):
        """Set console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""
        self._console.setLevel(LEVEL_MAP.get(str(level).upper(), logging.INFO))

    def set_json_mode(self, enabled: bool):
        """Enable or disable JSON output mode."""
        self._json_mode = enabled
        self._console.setFormatter(StructuredFormatter() if enabled else HumanFormatter())

    def add_file_handler(self, log_path: Path, json_format: bool = True):
        """Add file handler for persistent logs."""
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)

        if json_format:
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))

        self._logger.addHandler(file_handler)
        return file_handler

    # === Core logging methods ===

    def _log(self, level: int, msg: str, **kwargs):
        """Internal log method with extra fields support."""
        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "(unknown file)",
            0,
            msg,
            (),
            None,
        )
        if kwargs:
            record.extra_fields = kwargs
        self._logger.handle(record)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    # === Convenience methods for human-readable output ===
    # These produce structured output in JSON mode

    def success(self, msg: str, **kwargs):
        """Success message (INFO level)."""
        if self._json_mode:
            kwargs['status'] = 'success'
            self._log(logging.INFO, msg, **kwargs)
        else:
            self._log(logging.INFO, f"[OK] {msg}", **kwargs)

    def header(self, title: str):
        """Section header."""
        if self._json_mode:
            self._log(logging.INFO, title, section='header')
        else:
            line = "=" * 60
            self._log(logging.INFO, f"\n{line}\n{title}\n{line}")

    def detail(self, msg: str, indent: int = 1, **kwargs):
        """Indented detail message."""
        if self._json_mode:
            kwargs['indent'] = indent
            self._log(logging.INFO, msg, **kwargs)
        else:
            prefix = "   " * indent
            self._log(logging.INFO, f"{prefix}{msg}", **kwargs)


# Lazily created, thread-safe global logger instance
_logger = None
_logger_lock = threading.Lock()


def get_logger() -> CalendarLogger:
    """Get the shared plan calendar logger."""
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                _logger = CalendarLogger()
    return _logger
