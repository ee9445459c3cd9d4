"""Exception classes for battery telemetry handling.

Telemetry payloads arrive from a hardware-facing publisher and can be
truncated or garbled; these exceptions describe what went wrong so the
watchdog can log and discard the sample.
"""

from __future__ import annotations

from typing import Optional


class BatteryWatchError(Exception):
    """Base class for all batterywatch errors."""

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
        """
        super().__init__(message)
        self.message: str = message


class TelemetryParseError(BatteryWatchError):
    """Raised when a battery-info payload cannot be turned into a sample.

    Covers invalid JSON, wrong field types, out-of-range values and
    supported samples that are missing their level or temperature.
    """

    def __init__(
        self,
        message: str,
        payload: Optional[str | bytes] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            payload: The raw payload that failed to parse
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.payload = payload
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is None:
            return self.message
        return f"{self.message}: {self.original_error}"
