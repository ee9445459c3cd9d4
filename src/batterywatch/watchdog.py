# filepath: src/batterywatch/watchdog.py
"""Core controller for the battery watchdog."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Final

from batterywatch.arbiter import WakeUpArbiter
from batterywatch.dispatch import NotificationDispatcher
from batterywatch.engine import Decision, DecisionEngine
from batterywatch.errors import TelemetryParseError
from batterywatch.power import create_lifecycle
from batterywatch.protocols import LifecycleController, SkillInvoker, VisibilityProvider
from batterywatch.remote import LoggingSkillInvoker, create_skill_invoker, create_visibility_provider
from batterywatch.settings import WatchdogSettings
from batterywatch.state import TelemetryState
from batterywatch.telemetry.models import TelemetrySample, parse_telemetry
from batterywatch.types.battery import BatteryInfoPayload, BatteryStatusReport
from batterywatch.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)


class BatteryWatchdog:
    """Main controller tying battery telemetry to notifications.

    This class owns the shared TelemetryState and coordinates:
    - Parsing incoming battery-info payloads
    - Running the decision engine for each supported sample
    - Answering wake-up polls through the arbiter's two gates
    - Sending notifications and shutdown requests to collaborators
    - Reporting battery status to the rest of the device

    Telemetry handling and wake-up polls may be called from different
    threads; state access is serialized on ``state.lock`` and collaborator
    calls happen after the lock is released.
    """

    def __init__(
        self,
        invoker: SkillInvoker,
        visibility: VisibilityProvider,
        lifecycle: LifecycleController,
        settings: WatchdogSettings | None = None,
        dispatcher: NotificationDispatcher | None = None,
        clock: Callable[[], datetime] = TimeUtils.now_localized,
    ) -> None:
        """Initialize the watchdog.

        Args:
            invoker: Skill invocation collaborator
            visibility: Foreground visibility collaborator
            lifecycle: Shutdown collaborator
            settings: Thresholds and URLs (defaults if None)
            dispatcher: Optional custom notification dispatcher
            clock: Source of the current time for debounce decisions
        """
        self.settings = settings or WatchdogSettings()
        self.invoker = invoker
        self.visibility = visibility
        self.lifecycle = lifecycle
        self.dispatcher = dispatcher or NotificationDispatcher(
            invoker, base_url=self.settings.skill_base_url
        )
        self.clock = clock

        self.state = TelemetryState()
        self.engine = DecisionEngine(
            shutdown_level=self.settings.shutdown_level,
            danger_high=self.settings.danger_high_temp,
            danger_low=self.settings.danger_low_temp,
        )
        self.arbiter = WakeUpArbiter(announce_interval=self.settings.danger_announce_interval)

    @classmethod
    def from_settings(cls, settings: WatchdogSettings) -> BatteryWatchdog:
        """Build a watchdog with collaborators created from *settings*."""
        # dry runs route shutdown through the logging invoker as well
        if settings.dry_run:
            invoker: SkillInvoker = LoggingSkillInvoker()
            lifecycle = create_lifecycle("url", invoker, settings.shutdown_url)
        else:
            invoker = create_skill_invoker(settings.invoker_url, settings.http_timeout)
            lifecycle = create_lifecycle(settings.shutdown_mode, invoker, settings.shutdown_url)
        visibility = create_visibility_provider(settings.visibility_url, settings.http_timeout)
        return cls(invoker, visibility, lifecycle, settings=settings)

    # ── Telemetry ────────────────────────────────────────────────────────────
    def handle_message(self, payload: str | bytes | BatteryInfoPayload) -> Decision | None:
        """Handle one raw ``battery.info`` payload.

        Malformed payloads are logged and discarded without touching state.

        Returns:
            The decision taken, or None if the payload was discarded
        """
        try:
            sample = parse_telemetry(payload)
        except TelemetryParseError as err:
            logger.error('Invalid data received from "battery.info": %s', err)
            return None
        return self.handle_sample(sample)

    def handle_sample(self, sample: TelemetrySample) -> Decision:
        """Run the decision engine for *sample* and carry out its decision."""
        if not sample.supported:
            return Decision()

        idle = self.is_idle()
        with self.state.lock:
            decision = self.engine.process(self.state, sample, idle)

        if decision.shutdown:
            self.dispatcher.submit(self.lifecycle.request_shutdown, "shutdown request")
            return decision
        for notification in decision.notifications:
            self.dispatcher.dispatch(notification)
        return decision

    def is_idle(self) -> bool:
        """Return True if no app currently holds foreground visibility."""
        return self.visibility.get_key_and_visible_app_id() is None

    # ── Wake-up interceptions ────────────────────────────────────────────────
    def delegate_wake_up_if_dangerous_status(self) -> bool:
        """Wake the user about an unsafe battery temperature if allowed.

        Returns:
            True if a wake-up was issued and accepted
        """
        with self.state.lock:
            wake_up = self.arbiter.check_dangerous_status(self.state, self.clock())
        if wake_up is None:
            return False
        return self.dispatcher.invoke(wake_up)

    def delegate_wake_up_if_battery_insufficient(self) -> bool:
        """Wake the user about an armed low-power watermark if allowed.

        Returns:
            True if a wake-up was issued and accepted
        """
        with self.state.lock:
            if not self.state.should_announce_low_power:
                return False
        idle = self.is_idle()
        with self.state.lock:
            wake_up = self.arbiter.check_battery_insufficient(self.state, idle)
        if wake_up is None:
            return False
        return self.dispatcher.invoke(wake_up)

    # ── Queries ──────────────────────────────────────────────────────────────
    def is_charging(self) -> bool:
        """Return True if the last stored sample reports the charger online."""
        with self.state.lock:
            logger.debug(
                "is charging? supported=%s sample=%s",
                self.state.battery_supported,
                self.state.previous,
            )
            if not self.state.has_sample:
                return False
            assert self.state.previous is not None
            return self.state.previous.charging_online

    def get_battery_level(self) -> int:
        """Return the last known battery percentage, or 0 if unknown."""
        with self.state.lock:
            if not self.state.has_sample:
                return 0
            assert self.state.previous is not None
            return self.state.previous.level or 0

    def get_status_report(self) -> BatteryStatusReport:
        """Return the battery summary used for external reporting."""
        with self.state.lock:
            if not self.state.battery_supported:
                return {"hasBattery": False}
            report: BatteryStatusReport = {"hasBattery": True}
            sample = self.state.previous
            if sample is not None:
                report["isAcConnected"] = sample.charging_online
                if sample.temperature is not None:
                    report["batteryTemperature"] = sample.temperature
                if sample.level is not None:
                    report["percent"] = sample.level
            return report

    def close(self) -> None:
        """Flush queued notifications and stop the dispatcher worker."""
        self.dispatcher.shutdown(wait=True)
