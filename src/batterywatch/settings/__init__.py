"""Watchdog settings management.

This package provides:
- WatchdogSettings: User-configurable settings loaded from batterywatch.yaml
"""

from batterywatch.settings.user import WatchdogSettings

__all__ = ["WatchdogSettings"]
