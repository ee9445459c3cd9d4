"""Low-power watermark table.

Each watermark is a battery level together with two small policies that
decide, given whether the device is idle, if crossing it should notify the
user right away (proactive) and whether that notification may interrupt the
foreground activity (preempt). Entries are ordered by priority: the most
severe, lowest level comes first.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

IdlePredicate = Callable[[bool], bool]


def _never(idle: bool) -> bool:
    return False


def _always(idle: bool) -> bool:
    return True


def _when_active(idle: bool) -> bool:
    return not idle


@dataclass(frozen=True)
class WatermarkEntry:
    """A single low-power threshold and its escalation policy."""

    level: int
    proactive: IdlePredicate
    preempt: IdlePredicate = field(default=_never)

    def is_crossed(self, previous_level: int, current_level: int) -> bool:
        """Return True if the level moved from above this mark to at or below it."""
        return previous_level > self.level >= current_level


LOW_POWER_WATERMARKS: tuple[WatermarkEntry, ...] = (
    # push a notification without announcing
    WatermarkEntry(level=8, proactive=_always, preempt=_never),
    # announce right away unless idle
    WatermarkEntry(level=10, proactive=_when_active, preempt=_when_active),
    # announce lazily on the next wake-up poll
    WatermarkEntry(level=20, proactive=_never),
)


def find_crossed_watermark(
    previous_level: int,
    current_level: int,
    watermarks: tuple[WatermarkEntry, ...] = LOW_POWER_WATERMARKS,
) -> WatermarkEntry | None:
    """Return the first watermark crossed downward between two levels.

    Args:
        previous_level: Battery level of the previous sample
        current_level: Battery level of the current sample
        watermarks: Table to scan, in priority order

    Returns:
        The first crossed entry, or None if no watermark was crossed
    """
    for entry in watermarks:
        if entry.is_crossed(previous_level, current_level):
            return entry
    return None


def tier_for_level(
    level: int,
    watermarks: tuple[WatermarkEntry, ...] = LOW_POWER_WATERMARKS,
) -> WatermarkEntry | None:
    """Return the first watermark *level* is at or below, or None."""
    for entry in watermarks:
        if level <= entry.level:
            return entry
    return None
