"""Type definitions for battery telemetry payloads and reports."""

from typing import TypedDict


class BatteryInfoPayload(TypedDict, total=False):
    """Raw ``battery.info`` message as published by the hardware layer."""

    batSupported: bool
    batChargingOnline: bool
    batLevel: int
    batTemp: int


class BatteryStatusReport(TypedDict, total=False):
    """Battery summary exposed to the rest of the device."""

    hasBattery: bool
    isAcConnected: bool
    batteryTemperature: int
    percent: int
