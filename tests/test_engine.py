"""Tests for the telemetry decision engine."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from batterywatch.common.enums import DangerState
from batterywatch.engine import DecisionEngine
from batterywatch.notifications import Notification
from batterywatch.state import TelemetryState
from batterywatch.telemetry.models import TelemetrySample

SampleFactory = Callable[..., TelemetrySample]


@pytest.fixture
def engine() -> DecisionEngine:
    return DecisionEngine()


@pytest.fixture
def state() -> TelemetryState:
    return TelemetryState()


def test_unsupported_sample_changes_nothing(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    decision = engine.process(state, sample(level=3, temperature=90, supported=False), idle=True)

    assert decision.is_empty
    assert state == TelemetryState()


def test_first_sample_only_classifies_danger(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    first = sample(level=9, temperature=60, charging=True)
    decision = engine.process(state, first, idle=False)

    assert decision.notifications == [Notification("temperature_light_55", preemptive=False)]
    assert state.battery_supported is True
    assert state.previous == first
    assert state.danger_state is DangerState.HIGH
    assert state.should_announce_low_power is False


def test_critical_level_requests_shutdown_only(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=30, temperature=25, charging=True), idle=True)

    decision = engine.process(state, sample(level=5, temperature=70, charging=False), idle=True)

    assert decision.shutdown is True
    assert decision.notifications == []
    # nothing after the shutdown check ran
    assert state.danger_state is DangerState.NORMAL
    assert state.previous is not None and state.previous.level == 30


def test_critical_level_while_charging_does_not_shut_down(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    decision = engine.process(state, sample(level=3, charging=True), idle=True)
    assert decision.shutdown is False


def test_low_temperature_cue_fires_every_sample(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    cue = Notification("temperature_light_0", preemptive=False)
    for _ in range(3):
        decision = engine.process(state, sample(temperature=-5), idle=True)
        assert decision.notifications == [cue]
    assert state.danger_state is DangerState.LOW


def test_danger_state_resets_to_normal(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(temperature=60), idle=True)
    engine.process(state, sample(temperature=30), idle=True)
    assert state.danger_state is DangerState.NORMAL


@pytest.mark.parametrize(
    "idle, expected",
    [
        # active: level 10 is proactive and preemptive
        (False, [Notification("low_power_10", is_play=True, preemptive=True)]),
        # idle: level 10 is lazy
        (True, []),
    ],
)
def test_crossing_25_to_9_acts_on_one_tier(
    engine: DecisionEngine,
    state: TelemetryState,
    sample: SampleFactory,
    idle: bool,
    expected: list[Notification],
) -> None:
    engine.process(state, sample(level=25), idle=idle)
    decision = engine.process(state, sample(level=9), idle=idle)

    assert decision.notifications == expected
    assert state.should_announce_low_power is idle


def test_level_8_is_always_proactive(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=9), idle=True)
    decision = engine.process(state, sample(level=7), idle=True)

    assert decision.notifications == [Notification("low_power_8", is_play=False, preemptive=False)]
    assert state.should_announce_low_power is False


def test_level_20_arms_flag(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=21), idle=False)
    decision = engine.process(state, sample(level=20), idle=False)

    assert decision.notifications == []
    assert state.should_announce_low_power is True


def test_proactive_crossing_clears_armed_flag(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=25), idle=True)
    engine.process(state, sample(level=15), idle=True)
    assert state.should_announce_low_power is True

    engine.process(state, sample(level=8), idle=True)
    assert state.should_announce_low_power is False


def test_rising_and_repeated_levels_do_nothing(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=9), idle=False)
    assert engine.process(state, sample(level=12), idle=False).is_empty
    assert engine.process(state, sample(level=12), idle=False).is_empty
    assert state.should_announce_low_power is False


@pytest.mark.parametrize(
    "before, after, idle, expected",
    [
        (True, False, True, Notification("power_off", is_play=False, preemptive=True)),
        (True, False, False, Notification("power_off", is_play=True, preemptive=False)),
        (False, True, True, Notification("power_on", is_play=False, preemptive=True)),
    ],
)
def test_charging_transition(
    engine: DecisionEngine,
    state: TelemetryState,
    sample: SampleFactory,
    before: bool,
    after: bool,
    idle: bool,
    expected: Notification,
) -> None:
    engine.process(state, sample(level=60, charging=before), idle=idle)
    decision = engine.process(state, sample(level=60, charging=after), idle=idle)

    assert decision.notifications == [expected]
    assert state.should_announce_low_power is False


def test_watermark_and_transition_in_same_sample(
    engine: DecisionEngine, state: TelemetryState, sample: SampleFactory
) -> None:
    engine.process(state, sample(level=11, charging=True), idle=False)
    decision = engine.process(state, sample(level=10, charging=False), idle=False)

    assert [n.name for n in decision.notifications] == ["low_power_10", "power_off"]


def test_custom_shutdown_level(state: TelemetryState, sample: SampleFactory) -> None:
    engine = DecisionEngine(shutdown_level=10)
    assert engine.process(state, sample(level=10), idle=True).shutdown is True
