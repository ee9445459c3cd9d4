"""Common utility helpers for the batterywatch package."""

from batterywatch.utils.time import TimeUtils

__all__ = ["TimeUtils"]
