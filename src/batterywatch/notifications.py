"""Notification requests sent to the skill invocation collaborator.

A notification is identified by a skill path such as ``low_power_10`` plus an
optional ``is_play`` query parameter telling the skill whether audio is
currently playing. The preemption hint travels separately as an invocation
option.
"""

from __future__ import annotations

from dataclasses import dataclass

from batterywatch.common.enums import DangerState
from batterywatch.constants import DEFAULT_SKILL_BASE_URL


@dataclass(frozen=True)
class Notification:
    """A request to invoke a battery skill."""

    name: str
    is_play: bool | None = None
    preemptive: bool | None = None

    def to_url(self, base_url: str = DEFAULT_SKILL_BASE_URL) -> str:
        """Build the skill URL for this notification.

        Args:
            base_url: Skill URL root, e.g. ``yoda-skill://battery``

        Returns:
            Full skill URL including the ``is_play`` query when set
        """
        url = f"{base_url.rstrip('/')}/{self.name}"
        if self.is_play is not None:
            url += f"?is_play={str(self.is_play).lower()}"
        return url


_LIGHT_CUES = {
    DangerState.HIGH: "temperature_light_55",
    DangerState.LOW: "temperature_light_0",
}

_DANGER_WAKE_UPS = {
    DangerState.HIGH: "temperature_55",
    DangerState.LOW: "temperature_0",
}


def temperature_light(state: DangerState) -> Notification | None:
    """Return the immediate light cue for a dangerous state, or None when NORMAL."""
    name = _LIGHT_CUES.get(state)
    if name is None:
        return None
    return Notification(name, preemptive=False)


def temperature_wake_up(state: DangerState) -> Notification | None:
    """Return the dangerous-temperature wake-up for *state*, or None when NORMAL."""
    name = _DANGER_WAKE_UPS.get(state)
    if name is None:
        return None
    return Notification(name)


def low_power(level: int, idle: bool, preemptive: bool | None = None) -> Notification:
    """Return the low-power notification for the watermark at *level*."""
    return Notification(f"low_power_{level}", is_play=not idle, preemptive=preemptive)


def power_transition(charging_online: bool, idle: bool) -> Notification:
    """Return the charger plugged/unplugged notification."""
    name = "power_on" if charging_online else "power_off"
    return Notification(name, is_play=not idle, preemptive=idle)
