"""Wake-up poll scheduler for the battery watchdog."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from batterywatch.watchdog import BatteryWatchdog

logger: Final = logging.getLogger(__name__)


class WakeUpResult(Enum):
    """Outcome of a single scheduler tick."""

    NONE = "none"
    DANGEROUS_TEMPERATURE = "dangerous_temperature"
    LOW_POWER = "low_power"


class WakeUpScheduler:
    """Periodically asks the watchdog whether the user should be woken up.

    Each tick polls the dangerous-temperature gate first and only falls
    through to the low-power gate when the first one declines, so at most
    one wake-up is issued per tick.
    """

    def __init__(self, watchdog: BatteryWatchdog, interval_seconds: float = 60.0) -> None:
        self.watchdog = watchdog
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def poll_once(self) -> WakeUpResult:
        """Run both gates once and report which one fired."""
        if self.watchdog.delegate_wake_up_if_dangerous_status():
            logger.info("Dangerous battery temperature wake-up issued")
            return WakeUpResult.DANGEROUS_TEMPERATURE
        if self.watchdog.delegate_wake_up_if_battery_insufficient():
            logger.info("Low battery wake-up issued")
            return WakeUpResult.LOW_POWER
        return WakeUpResult.NONE

    def run(self, once: bool = False) -> None:
        """Poll until stopped (or a single time when *once* is set)."""
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Wake-up poll failed")
            if once:
                break
            self._stop_event.wait(self.interval_seconds)

    def start(self) -> None:
        """Run the poll loop on a daemon thread."""
        if self._thread is not None:
            return
        self._stop_event.clear()
        thread = threading.Thread(target=self.run, name="batterywatch-wakeup", daemon=True)
        self._thread = thread
        thread.start()

    def stop(self) -> None:
        """Stop the background poll loop if running."""
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        thread.join(timeout=5.0)
        self._thread = None
