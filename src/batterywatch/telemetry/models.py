"""Typed model for battery-info telemetry messages.

The hardware publisher emits JSON objects such as::

    {"batSupported": true, "batChargingOnline": false, "batLevel": 42, "batTemp": 31}

Only the fields used by the watchdog are modelled.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from batterywatch.errors import TelemetryParseError
from batterywatch.types.battery import BatteryInfoPayload


class TelemetrySample(BaseModel):
    """A single battery telemetry reading.

    Samples are immutable; each new one replaces the previous. An
    unsupported sample (device without battery) may omit everything but
    ``batSupported``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    supported: bool = Field(False, alias="batSupported")
    charging_online: bool = Field(False, alias="batChargingOnline")
    level: int | None = Field(None, ge=0, le=100, alias="batLevel")
    temperature: int | None = Field(None, alias="batTemp")

    @model_validator(mode="after")
    def check_supported_fields(self) -> TelemetrySample:
        if self.supported and (self.level is None or self.temperature is None):
            raise ValueError("supported battery sample must carry batLevel and batTemp")
        return self

    def is_critical(self, shutdown_level: int) -> bool:
        """Return True if a discharging battery is at or below *shutdown_level*."""
        return not self.charging_online and (self.level or 0) <= shutdown_level


def parse_telemetry(payload: str | bytes | BatteryInfoPayload) -> TelemetrySample:
    """Parse a raw battery-info payload into a sample.

    Args:
        payload: JSON text/bytes or an already-decoded mapping

    Returns:
        Validated TelemetrySample

    Raises:
        TelemetryParseError: If the payload is not valid JSON or fails validation
    """
    if isinstance(payload, dict):
        data: Any = payload
    else:
        try:
            data = json.loads(payload)
        except (TypeError, ValueError, RecursionError) as exc:
            raise TelemetryParseError("Invalid battery info JSON", payload, exc) from exc

    if not isinstance(data, dict):
        raise TelemetryParseError(
            f"Battery info must be a JSON object, got {type(data).__name__}",
            payload if not isinstance(payload, dict) else None,
        )

    try:
        return TelemetrySample.model_validate(data)
    except ValidationError as err:
        raise TelemetryParseError(
            "Battery info failed validation",
            payload if not isinstance(payload, dict) else None,
            err,
        ) from err
