"""Battery telemetry watchdog.

Turns periodic battery telemetry into shutdown requests, temperature and
low-power notifications, and debounced wake-ups of the user.
"""

from batterywatch.common.enums import DangerState
from batterywatch.engine import Decision, DecisionEngine
from batterywatch.arbiter import WakeUpArbiter
from batterywatch.notifications import Notification
from batterywatch.telemetry.models import TelemetrySample, parse_telemetry
from batterywatch.watchdog import BatteryWatchdog

__all__ = [
    "BatteryWatchdog",
    "DangerState",
    "Decision",
    "DecisionEngine",
    "Notification",
    "TelemetrySample",
    "WakeUpArbiter",
    "parse_telemetry",
]
