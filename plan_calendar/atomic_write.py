#!/usr/bin/env python3
"""
Atomic file writes for calendar exports.

A calendar file is either written completely or left untouched.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict

import yaml


@contextmanager
def atomic_write(target_path: Path, mode: str = 'w'):
    """
    Context manager for atomic file writes.

    Writes to a temp file in the target directory, then renames it over the
    target. On error the temp file is removed and the target is unchanged.

    Usage:
        with atomic_write(Path('plan_calendar.yaml')) as f:
            yaml.dump(data, f)
    """
    target_path = Path(target_path)
    target_dir = target_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)

    # Same directory, so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(
        dir=target_dir,
        prefix=f'.{target_path.name}.',
        suffix='.tmp'
    )

    try:
        with os.fdopen(fd, mode) as f:
            yield f
        os.replace(temp_path, target_path)

    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_yaml(target_path: Path, data: Dict[str, Any]) -> Path:
    """Atomically dump data as block-style YAML, keeping key order."""
    target_path = Path(target_path)
    with atomic_write(target_path) as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    return target_path
