"""Wake-up arbitration for dangerous temperature and low battery.

Both gates are polled by an external scheduler rather than triggered by
telemetry arrival. Each returns the wake-up notification to send, or None
when the user should not be interrupted right now.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Final

from batterywatch import notifications
from batterywatch.common.enums import DangerState
from batterywatch.constants import DANGER_ANNOUNCE_INTERVAL
from batterywatch.notifications import Notification
from batterywatch.policy.watermarks import LOW_POWER_WATERMARKS, WatermarkEntry, tier_for_level
from batterywatch.state import TelemetryState

logger: Final = logging.getLogger(__name__)


class WakeUpArbiter:
    """Debounced wake-up gates over the shared TelemetryState.

    The caller must hold ``state.lock`` while a gate runs.
    """

    def __init__(
        self,
        announce_interval: timedelta = DANGER_ANNOUNCE_INTERVAL,
        watermarks: tuple[WatermarkEntry, ...] = LOW_POWER_WATERMARKS,
    ) -> None:
        self.announce_interval = announce_interval
        self.watermarks = watermarks

    def check_dangerous_status(self, state: TelemetryState, now: datetime) -> Notification | None:
        """Decide whether to wake the user about an unsafe temperature.

        The announce window is shared by HIGH and LOW and only restarts when
        a wake-up is actually issued.

        Args:
            state: Shared battery state
            now: Current time

        Returns:
            Wake-up notification, or None if declined or rate-limited
        """
        if not state.has_sample or state.danger_state is DangerState.NORMAL:
            return None

        last = state.last_danger_announce
        if last is not None and now - last < self.announce_interval:
            logger.info(
                "announced in %d minutes, skip wakeup delegation",
                self.announce_interval.total_seconds() // 60,
            )
            return None

        wake_up = notifications.temperature_wake_up(state.danger_state)
        if wake_up is not None:
            state.last_danger_announce = now
        return wake_up

    def check_battery_insufficient(self, state: TelemetryState, idle: bool) -> Notification | None:
        """Decide whether to wake the user about an armed low-power watermark.

        The armed flag is consumed exactly once. While charging the gate
        declines and leaves the flag armed for a later discharging poll.

        Args:
            state: Shared battery state
            idle: True if no app currently holds foreground visibility

        Returns:
            Wake-up notification, or None if nothing should be announced
        """
        if not state.has_sample or not state.should_announce_low_power:
            return None
        assert state.previous is not None and state.previous.level is not None
        if state.previous.charging_online:
            logger.info("battery is charging, skip wakeup delegation")
            return None

        state.should_announce_low_power = False
        mark = tier_for_level(state.previous.level, self.watermarks)
        if mark is None:
            logger.debug("battery level %d above every water mark", state.previous.level)
            return None
        return notifications.low_power(mark.level, idle)
