"""Tests for the notification dispatcher."""

from __future__ import annotations

import logging

import pytest

from batterywatch.dispatch import NotificationDispatcher
from batterywatch.notifications import Notification
from batterywatch.protocols import FailingSkillInvoker, MockSkillInvoker

from conftest import InlineExecutor


def test_dispatch_passes_url_and_hint() -> None:
    invoker = MockSkillInvoker()
    dispatcher = NotificationDispatcher(invoker, executor=InlineExecutor())

    future = dispatcher.dispatch(Notification("low_power_10", is_play=True, preemptive=True))

    assert future.result() is True
    assert invoker.calls == [
        {"url": "yoda-skill://battery/low_power_10?is_play=true", "preemptive": True}
    ]


def test_dispatch_logs_rejection(caplog: pytest.LogCaptureFixture) -> None:
    dispatcher = NotificationDispatcher(MockSkillInvoker(result=False), executor=InlineExecutor())
    with caplog.at_level(logging.WARNING):
        dispatcher.dispatch(Notification("power_on"))
    assert "was not accepted" in caplog.text


def test_dispatch_logs_exception(caplog: pytest.LogCaptureFixture) -> None:
    invoker = FailingSkillInvoker()
    dispatcher = NotificationDispatcher(invoker, executor=InlineExecutor())
    with caplog.at_level(logging.WARNING):
        future = dispatcher.dispatch(Notification("power_on"))
    assert isinstance(future.exception(), RuntimeError)
    assert "raised" in caplog.text
    assert invoker.attempts == 1


def test_invoke_swallows_failures() -> None:
    dispatcher = NotificationDispatcher(FailingSkillInvoker())
    try:
        assert dispatcher.invoke(Notification("temperature_55")) is False
    finally:
        dispatcher.shutdown()


def test_background_worker_runs_in_order() -> None:
    invoker = MockSkillInvoker()
    dispatcher = NotificationDispatcher(invoker)
    for name in ("a", "b", "c"):
        dispatcher.dispatch(Notification(name))
    dispatcher.shutdown(wait=True)
    assert invoker.urls == [f"yoda-skill://battery/{n}" for n in ("a", "b", "c")]


def test_submit_logs_task_failure(caplog: pytest.LogCaptureFixture) -> None:
    def explode() -> None:
        raise OSError("no power controller")

    dispatcher = NotificationDispatcher(MockSkillInvoker(), executor=InlineExecutor())
    with caplog.at_level(logging.ERROR):
        future = dispatcher.submit(explode, "shutdown request")
    assert isinstance(future.exception(), OSError)
    assert "shutdown request failed" in caplog.text
