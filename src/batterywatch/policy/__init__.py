"""Pure decision policies: watermark table and danger classification."""

from batterywatch.policy.danger import classify_danger
from batterywatch.policy.watermarks import (
    LOW_POWER_WATERMARKS,
    WatermarkEntry,
    find_crossed_watermark,
    tier_for_level,
)

__all__ = [
    "LOW_POWER_WATERMARKS",
    "WatermarkEntry",
    "classify_danger",
    "find_crossed_watermark",
    "tier_for_level",
]
