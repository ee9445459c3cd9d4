"""Shared fixtures for the batterywatch test suite."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor, Future
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from batterywatch.dispatch import NotificationDispatcher
from batterywatch.protocols import MockLifecycle, MockSkillInvoker, StaticVisibility
from batterywatch.telemetry.models import TelemetrySample
from batterywatch.watchdog import BatteryWatchdog


class InlineExecutor(Executor):
    """Executor that runs submitted work immediately on the calling thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class FakeClock:
    """Manually advanced clock for debounce tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 5, 3, 14, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_sample(
    level: int = 50,
    temperature: int = 25,
    charging: bool = False,
    supported: bool = True,
) -> TelemetrySample:
    return TelemetrySample(
        supported=supported,
        charging_online=charging,
        level=level,
        temperature=temperature,
    )


@pytest.fixture
def invoker() -> MockSkillInvoker:
    return MockSkillInvoker()


@pytest.fixture
def lifecycle() -> MockLifecycle:
    return MockLifecycle()


@pytest.fixture
def visibility() -> StaticVisibility:
    # idle by default
    return StaticVisibility()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def watchdog(
    invoker: MockSkillInvoker,
    visibility: StaticVisibility,
    lifecycle: MockLifecycle,
    clock: FakeClock,
) -> BatteryWatchdog:
    dispatcher = NotificationDispatcher(invoker, executor=InlineExecutor())
    return BatteryWatchdog(
        invoker,
        visibility,
        lifecycle,
        dispatcher=dispatcher,
        clock=clock,
    )


@pytest.fixture
def sample() -> Callable[..., TelemetrySample]:
    return make_sample
