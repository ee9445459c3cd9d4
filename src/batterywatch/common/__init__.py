"""Enumerations shared across batterywatch packages."""

from batterywatch.common.enums import DangerState

__all__ = ["DangerState"]
