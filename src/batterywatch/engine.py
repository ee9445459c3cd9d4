"""Telemetry decision engine.

Compares each new battery sample with the previous one and decides which
notifications fire right away, whether the low-power announcement should be
armed for the wake-up arbiter, and whether the device must shut down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from batterywatch import notifications
from batterywatch.common.enums import DangerState
from batterywatch.constants import (
    CRITICAL_SHUTDOWN_LEVEL,
    DANGER_HIGH_TEMPERATURE,
    DANGER_LOW_TEMPERATURE,
)
from batterywatch.notifications import Notification
from batterywatch.policy.danger import classify_danger
from batterywatch.policy.watermarks import (
    LOW_POWER_WATERMARKS,
    WatermarkEntry,
    find_crossed_watermark,
)
from batterywatch.state import TelemetryState
from batterywatch.telemetry.models import TelemetrySample

logger: Final = logging.getLogger(__name__)


@dataclass
class Decision:
    """Side effects requested by processing one sample."""

    notifications: list[Notification] = field(default_factory=list)
    shutdown: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.notifications and not self.shutdown


class DecisionEngine:
    """Turns telemetry samples into notifications and state changes.

    The engine itself is stateless; everything it reads and writes lives on
    the TelemetryState passed in, which the caller must hold locked for the
    duration of ``process``.
    """

    def __init__(
        self,
        watermarks: tuple[WatermarkEntry, ...] = LOW_POWER_WATERMARKS,
        shutdown_level: int = CRITICAL_SHUTDOWN_LEVEL,
        danger_high: int = DANGER_HIGH_TEMPERATURE,
        danger_low: int = DANGER_LOW_TEMPERATURE,
    ) -> None:
        self.watermarks = watermarks
        self.shutdown_level = shutdown_level
        self.danger_high = danger_high
        self.danger_low = danger_low

    def process(self, state: TelemetryState, sample: TelemetrySample, idle: bool) -> Decision:
        """Apply one telemetry sample to *state*.

        Args:
            state: Shared battery state (mutated in place)
            sample: The newly received sample
            idle: True if no app currently holds foreground visibility

        Returns:
            Decision listing notifications to send and whether to shut down
        """
        decision = Decision()
        if not sample.supported:
            return decision
        state.battery_supported = True

        if sample.is_critical(self.shutdown_level):
            logger.warning("Battery critical at %s%% while discharging, shutting down", sample.level)
            decision.shutdown = True
            return decision

        self._apply_danger(state, sample, decision)

        previous = state.previous
        if previous is None:
            state.previous = sample
            return decision

        self._apply_watermarks(state, previous, sample, idle, decision)

        if previous.charging_online != sample.charging_online:
            decision.notifications.append(
                notifications.power_transition(sample.charging_online, idle)
            )

        state.previous = sample
        return decision

    def _apply_danger(
        self, state: TelemetryState, sample: TelemetrySample, decision: Decision
    ) -> None:
        assert sample.temperature is not None
        danger = classify_danger(sample.temperature, self.danger_high, self.danger_low)
        state.danger_state = danger
        if danger is DangerState.NORMAL:
            return
        logger.info("Battery temperature %s is %s", sample.temperature, danger.value)
        cue = notifications.temperature_light(danger)
        if cue is not None:
            decision.notifications.append(cue)

    def _apply_watermarks(
        self,
        state: TelemetryState,
        previous: TelemetrySample,
        sample: TelemetrySample,
        idle: bool,
        decision: Decision,
    ) -> None:
        assert previous.level is not None and sample.level is not None
        mark = find_crossed_watermark(previous.level, sample.level, self.watermarks)
        if mark is None:
            return

        if mark.proactive(idle):
            logger.info("proactive low power level water mark %d applied", mark.level)
            state.should_announce_low_power = False
            decision.notifications.append(
                notifications.low_power(mark.level, idle, preemptive=mark.preempt(idle))
            )
            return

        logger.info("low power level water mark %d applied", mark.level)
        state.should_announce_low_power = True
