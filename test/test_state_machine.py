"""Tests for swarm_mobility.control.state_machine."""

from __future__ import annotations

import logging
import math
from enum import Enum

import pytest

from swarm_mobility.constants import STATE_TEXT_TRANSLATING, STATE_TEXT_UNREACHABLE
from swarm_mobility.control.state_machine import INITIAL_STATE, MotionState, MotionStateMachine
from swarm_mobility.control.velocity import STOP_COMMAND, VelocityCalibration, VelocityEmitter
from swarm_mobility.safety.velocity_watchdog import VelocityWatchdog


class _Bogus(Enum):
    LOST = "LOST"


@pytest.fixture
def sent():
    return []


@pytest.fixture
def machine(clock, sent, quiet_logger):
    wd = VelocityWatchdog(10.0, now_monotonic_s=clock())
    emitter = VelocityEmitter(wd, sent.append, VelocityCalibration(1.0, 1.0), clock=clock)
    return MotionStateMachine(emitter, translate_linear_speed=0.05, clock=clock, logger=quiet_logger)


class TestWaiting:
    def test_manual_mode_emits_nothing(self, machine, sent):
        out = machine.tick(mode_code=1, autonomous=False, correction=0.7)
        assert out.status_text == "WAITING, mode=1"
        assert not out.autonomous
        assert out.command is None
        assert sent == []

    def test_unknown_mode_reported_raw(self, machine):
        out = machine.tick(mode_code=42, autonomous=False, correction=0.0)
        assert out.status_text == "WAITING, mode=42"


class TestTranslate:
    def test_initial_state(self, machine):
        assert machine.state is INITIAL_STATE is MotionState.TRANSLATE

    def test_drives_with_latest_correction(self, machine, sent):
        out = machine.tick(mode_code=2, autonomous=True, correction=math.pi / 4)
        assert out.status_text == STATE_TEXT_TRANSLATING
        assert sent[-1].linear == pytest.approx(0.05)
        assert sent[-1].angular == pytest.approx(math.pi / 4)

    def test_autonomous_entries_counted(self, machine, clock):
        machine.tick(mode_code=2, autonomous=True, correction=0.0)
        first = clock()
        clock.advance(1.0)
        machine.tick(mode_code=2, autonomous=True, correction=0.0)
        machine.tick(mode_code=0, autonomous=False, correction=0.0)
        machine.tick(mode_code=3, autonomous=True, correction=0.0)
        assert machine.autonomous_entries == 2
        assert machine.first_autonomous_s == pytest.approx(first)
        assert machine.tick_count == 4


class TestUnreachableState:
    def test_reports_marker_and_stops(self, machine, sent, caplog):
        machine.transition_to(_Bogus.LOST)
        with caplog.at_level(logging.ERROR, logger="swarm_mobility.test"):
            out = machine.tick(mode_code=2, autonomous=True, correction=1.0)
        assert out.status_text == STATE_TEXT_UNREACHABLE
        assert out.error
        assert sent == [STOP_COMMAND]
        assert machine.error_count == 1
        assert "unreachable_motion_state" in caplog.text

    def test_loop_keeps_running(self, machine, sent):
        machine.transition_to(_Bogus.LOST)
        machine.tick(mode_code=2, autonomous=True, correction=1.0)
        machine.transition_to(MotionState.TRANSLATE)
        out = machine.tick(mode_code=2, autonomous=True, correction=0.2)
        assert out.status_text == STATE_TEXT_TRANSLATING
        assert len(sent) == 2
