from enum import Enum


class DangerState(Enum):
    """Operating temperature classification of the battery.

    Re-derived from every supported telemetry sample; nothing about the
    previous value is remembered beyond the current one.
    """

    NORMAL = "normal"
    HIGH = "high"  # at or above the high threshold
    LOW = "low"  # at or below the low threshold
