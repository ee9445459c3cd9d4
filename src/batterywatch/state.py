"""Shared mutable battery state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

from batterywatch.common.enums import DangerState
from batterywatch.telemetry.models import TelemetrySample


@dataclass
class TelemetryState:
    """Everything the decision engine and the wake-up arbiter share.

    Telemetry ingestion and wake-up polling may run on different threads,
    so every read-modify-write of these fields happens while holding
    ``lock``.
    """

    battery_supported: bool = False
    previous: TelemetrySample | None = None
    danger_state: DangerState = DangerState.NORMAL
    should_announce_low_power: bool = False
    last_danger_announce: datetime | None = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def has_sample(self) -> bool:
        """Whether a supported sample has been stored as the comparison baseline."""
        return self.previous is not None and self.battery_supported
