"""HTTP-backed collaborators for skill invocation and visibility queries."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Final

import requests
from requests.exceptions import RequestException
from typing_extensions import TypedDict

from batterywatch.protocols import SkillInvoker, StaticVisibility, VisibilityProvider

logger: Final = logging.getLogger(__name__)


class VisibilityResponse(TypedDict, total=False):
    """Response structure for visibility endpoints."""

    appId: str | None


class InvocationOptions(TypedDict, total=False):
    """Options forwarded alongside a skill URL."""

    preemptive: bool


def _validate_url(url: str) -> str:
    parsed = urllib.parse.urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    return url


class HttpSkillInvoker:
    """SkillInvoker that POSTs skill URLs to an HTTP endpoint."""

    def __init__(self, endpoint: str, timeout: float = 3.0) -> None:
        """Initialize with the invocation endpoint.

        Args:
            endpoint: URL accepting ``{"url": ..., "options": {...}}`` POSTs
            timeout: Timeout for HTTP request in seconds
        """
        self.endpoint = _validate_url(endpoint)
        self.timeout = timeout

    def open_url(self, url: str, preemptive: bool | None = None) -> bool:
        """Forward a skill invocation.

        Returns:
            True only if the endpoint answered with a 2xx status
        """
        options: InvocationOptions = {}
        if preemptive is not None:
            options["preemptive"] = preemptive
        try:
            resp = requests.post(
                self.endpoint,
                json={"url": url, "options": options},
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.warning("open_url %s failed: %s", url, exc)
            return False

        if not 200 <= resp.status_code < 300:
            logger.warning("open_url %s: HTTP %s from %s", url, resp.status_code, self.endpoint)
            return False
        return True


class LoggingSkillInvoker:
    """SkillInvoker that only logs what would have been opened."""

    def open_url(self, url: str, preemptive: bool | None = None) -> bool:
        logger.info("open_url %s (preemptive=%s)", url, preemptive)
        return True


class HttpVisibilityProvider:
    """VisibilityProvider that asks an HTTP endpoint which app is visible."""

    def __init__(self, url: str, timeout: float = 3.0) -> None:
        self.url = _validate_url(url)
        self.timeout = timeout

    def get_key_and_visible_app_id(self) -> str | None:
        """Return the visible app id; any failure is treated as idle."""
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            if resp.status_code != 200:
                logger.debug("visibility: HTTP %s from %s", resp.status_code, self.url)
                return None

            data: VisibilityResponse = resp.json()  # type: ignore[assignment]
            app_id = data.get("appId")
            return str(app_id) if app_id else None

        except (ValueError, AttributeError, RequestException) as exc:
            logger.debug("visibility: request failed (%s)", exc)
            return None


def create_skill_invoker(endpoint: str | None = None, timeout: float = 3.0) -> SkillInvoker:
    """Create a skill invoker based on configuration.

    Args:
        endpoint: HTTP invocation endpoint (empty means log only)
        timeout: Timeout for HTTP requests in seconds

    Returns:
        A SkillInvoker implementation
    """
    if not endpoint:
        return LoggingSkillInvoker()
    return HttpSkillInvoker(endpoint, timeout)


def create_visibility_provider(url: str | None = None, timeout: float = 3.0) -> VisibilityProvider:
    """Create a visibility provider; without a URL the device is always idle."""
    if not url:
        return StaticVisibility()
    return HttpVisibilityProvider(url, timeout)
