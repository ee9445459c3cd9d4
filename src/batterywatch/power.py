"""Power-management helpers (device shutdown)."""

from __future__ import annotations

import logging
import subprocess
from typing import Final

from batterywatch.constants import DEFAULT_SHUTDOWN_URL
from batterywatch.protocols import LifecycleController, SkillInvoker

logger: Final = logging.getLogger(__name__)


class SystemShutdown:
    """Shuts the host down with ``sudo shutdown -h now``."""

    def request_shutdown(self) -> None:
        """Initiate system shutdown; failures are logged, not raised."""
        try:
            subprocess.run(
                ["sudo", "shutdown", "-h", "now"],
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as exc:
            logger.warning("Shutdown command failed: %s", exc)
        except FileNotFoundError:
            logger.warning("Shutdown command not found (dev environment)")


class UrlShutdown:
    """Asks the runtime to shut down by opening its system shutdown app."""

    def __init__(self, invoker: SkillInvoker, url: str = DEFAULT_SHUTDOWN_URL) -> None:
        self.invoker = invoker
        self.url = url

    def request_shutdown(self) -> None:
        if not self.invoker.open_url(self.url):
            logger.warning("Shutdown request via %s was not accepted", self.url)


def create_lifecycle(
    mode: str, invoker: SkillInvoker, url: str = DEFAULT_SHUTDOWN_URL
) -> LifecycleController:
    """Create the shutdown collaborator for *mode* (``"system"`` or ``"url"``)."""
    if mode == "url":
        return UrlShutdown(invoker, url)
    return SystemShutdown()
