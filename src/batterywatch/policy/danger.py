"""Battery temperature danger classification."""

from __future__ import annotations

from batterywatch.common.enums import DangerState
from batterywatch.constants import DANGER_HIGH_TEMPERATURE, DANGER_LOW_TEMPERATURE


def classify_danger(
    temperature: int,
    high: int = DANGER_HIGH_TEMPERATURE,
    low: int = DANGER_LOW_TEMPERATURE,
) -> DangerState:
    """Classify a battery temperature reading.

    Args:
        temperature: Battery temperature from the current sample
        high: Readings at or above this value are HIGH
        low: Readings at or below this value are LOW

    Returns:
        DangerState for the reading
    """
    if temperature >= high:
        return DangerState.HIGH
    if temperature <= low:
        return DangerState.LOW
    return DangerState.NORMAL
