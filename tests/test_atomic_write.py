#!/usr/bin/env python3
"""Tests for atomic calendar exports.

Run with: pytest tests/test_atomic_write.py -v
"""

import pytest
import yaml

from plan_calendar.atomic_write import atomic_write, write_yaml


class TestAtomicWrite:

    def test_writes_target(self, tmp_path):
        target = tmp_path / 'out.txt'
        with atomic_write(target) as f:
            f.write("week 1")
        assert target.read_text() == "week 1"

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / 'a' / 'b' / 'out.txt'
        with atomic_write(target) as f:
            f.write("x")
        assert target.exists()

    def test_failure_leaves_target_untouched(self, tmp_path):
        target = tmp_path / 'out.txt'
        target.write_text("original")
        with pytest.raises(RuntimeError):
            with atomic_write(target) as f:
                f.write("partial")
                raise RuntimeError("boom")
        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ['out.txt']


class TestWriteYaml:

    def test_preserves_key_order(self, tmp_path):
        target = write_yaml(tmp_path / 'plan.yaml', {'race_date': '2026-06-28', 'plan_weeks': 12})
        text = target.read_text()
        assert text.index('race_date') < text.index('plan_weeks')
        assert yaml.safe_load(text) == {'race_date': '2026-06-28', 'plan_weeks': 12}
