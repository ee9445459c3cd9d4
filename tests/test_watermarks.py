"""Tests for the low-power watermark table."""

from __future__ import annotations

import pytest

from batterywatch.policy.watermarks import (
    LOW_POWER_WATERMARKS,
    WatermarkEntry,
    find_crossed_watermark,
    tier_for_level,
)


def test_table_is_ascending() -> None:
    levels = [entry.level for entry in LOW_POWER_WATERMARKS]
    assert levels == [8, 10, 20]
    assert levels == sorted(levels)


@pytest.mark.parametrize(
    "level, idle, proactive, preempt",
    [
        (8, True, True, False),
        (8, False, True, False),
        (10, True, False, False),
        (10, False, True, True),
        (20, True, False, False),
        (20, False, False, False),
    ],
)
def test_tier_policies(level: int, idle: bool, proactive: bool, preempt: bool) -> None:
    entry = next(e for e in LOW_POWER_WATERMARKS if e.level == level)
    assert entry.proactive(idle) is proactive
    assert entry.preempt(idle) is preempt


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (25, 9, 10),  # past 20 and 10, most severe wins
        (25, 19, 20),
        (21, 20, 20),
        (11, 10, 10),
        (9, 8, 8),
        (25, 5, 8),
    ],
)
def test_find_crossed_watermark(previous: int, current: int, expected: int) -> None:
    mark = find_crossed_watermark(previous, current)
    assert mark is not None
    assert mark.level == expected


@pytest.mark.parametrize(
    "previous, current",
    [
        (50, 50),  # unchanged
        (20, 19),  # already at the mark
        (10, 15),  # rising
        (7, 3),  # below every mark
        (30, 21),
    ],
)
def test_no_crossing(previous: int, current: int) -> None:
    assert find_crossed_watermark(previous, current) is None


@pytest.mark.parametrize(
    "level, expected",
    [(3, 8), (8, 8), (9, 10), (10, 10), (15, 20), (20, 20), (21, None), (100, None)],
)
def test_tier_for_level(level: int, expected: int | None) -> None:
    mark = tier_for_level(level)
    assert (mark.level if mark else None) == expected


def test_preempt_defaults_to_never() -> None:
    entry = WatermarkEntry(level=30, proactive=lambda idle: True)
    assert entry.preempt(True) is False
    assert entry.preempt(False) is False
