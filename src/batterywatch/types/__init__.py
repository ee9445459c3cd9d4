"""Type definitions for batterywatch."""

from .battery import BatteryInfoPayload, BatteryStatusReport

__all__ = ["BatteryInfoPayload", "BatteryStatusReport"]
