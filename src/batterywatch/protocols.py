# src/batterywatch/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SkillInvoker(Protocol):
    """Protocol for the collaborator that renders battery notifications.

    Implementations open a skill URL, optionally with a preemption hint
    telling the receiver it may interrupt the current foreground activity.
    Failures are reported through the return value, never raised.
    """

    def open_url(self, url: str, preemptive: bool | None = None) -> bool:
        """Invoke the skill identified by *url*.

        Args:
            url: Skill URL, e.g. ``yoda-skill://battery/low_power_10?is_play=true``
            preemptive: Optional preemption hint

        Returns:
            True if the invocation was accepted, False otherwise
        """
        ...


@runtime_checkable
class VisibilityProvider(Protocol):
    """Protocol for querying which app holds foreground visibility."""

    def get_key_and_visible_app_id(self) -> str | None:
        """Return the id of the key visible app, or None when nothing is visible."""
        ...


@runtime_checkable
class LifecycleController(Protocol):
    """Protocol for requesting device shutdown."""

    def request_shutdown(self) -> None:
        """Ask the device to power off. Must not raise."""
        ...


class StaticVisibility:
    """VisibilityProvider returning a fixed app id (None means idle)."""

    def __init__(self, app_id: str | None = None) -> None:
        self.app_id = app_id

    def get_key_and_visible_app_id(self) -> str | None:
        return self.app_id


class MockSkillInvoker:
    """Mock implementation of SkillInvoker for testing."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[dict[str, object]] = []

    def open_url(self, url: str, preemptive: bool | None = None) -> bool:
        """Record the invocation and return the configured result."""
        self.calls.append({"url": url, "preemptive": preemptive})
        return self.result

    @property
    def urls(self) -> list[str]:
        """URLs opened so far, in call order."""
        return [str(call["url"]) for call in self.calls]

    def reset_call_history(self) -> None:
        self.calls = []


class FailingSkillInvoker:
    """SkillInvoker that raises on every call, for error-path tests."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("Simulated invocation failure")
        self.attempts = 0

    def open_url(self, url: str, preemptive: bool | None = None) -> bool:
        self.attempts += 1
        raise self.error


class MockLifecycle:
    """Mock implementation of LifecycleController for testing."""

    def __init__(self) -> None:
        self.shutdown_calls = 0

    def request_shutdown(self) -> None:
        self.shutdown_calls += 1
