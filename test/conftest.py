"""Shared fixtures for swarm_mobility tests (no rclpy required)."""

from __future__ import annotations

import logging
from typing import List, Tuple

import pytest

from swarm_mobility.control.velocity import VelocityCommand
from swarm_mobility.mobility_context import MobilityConfig, MobilityContext
from swarm_mobility.utils.logging import LoggerAdapter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> float:
        self.now += float(dt)
        return self.now


class RecordingOutputs:
    """MobilityOutputs sink that keeps everything it was asked to publish."""

    def __init__(self) -> None:
        self.velocity: List[VelocityCommand] = []
        self.state_machine: List[str] = []
        self.status: List[str] = []
        self.messages: List[str] = []
        self.poses: List[str] = []
        self.headings: List[Tuple[float, float]] = []
        self.angular: List[str] = []
        self.targets_collected: List[int] = []

    def publish_velocity(self, command: VelocityCommand) -> None:
        self.velocity.append(command)

    def publish_state_machine(self, text: str) -> None:
        self.state_machine.append(text)

    def publish_status(self, text: str) -> None:
        self.status.append(text)

    def publish_message(self, text: str) -> None:
        self.messages.append(text)

    def publish_pose(self, text: str) -> None:
        self.poses.append(text)

    def publish_headings(self, global_heading: float, local_heading: float) -> None:
        self.headings.append((global_heading, local_heading))

    def publish_angular(self, text: str) -> None:
        self.angular.append(text)

    def publish_targets_collected(self, count: int) -> None:
        self.targets_collected.append(count)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def outputs():
    return RecordingOutputs()


@pytest.fixture
def peer_outputs():
    return RecordingOutputs()


@pytest.fixture
def quiet_logger():
    std = logging.getLogger("swarm_mobility.test")
    if not std.handlers:
        std.addHandler(logging.NullHandler())
    std.propagate = True
    return LoggerAdapter(target=std, name="swarm_mobility.test")


@pytest.fixture
def make_context(outputs, clock, quiet_logger):
    def _make(**overrides) -> MobilityContext:
        fields = {
            "rover_name": "ajax",
            "roster": ("ajax", "aeneas", "achilles"),
            "kill_switch_timeout_s": 10.0,
        }
        fields.update(overrides)
        return MobilityContext(MobilityConfig(**fields), outputs, clock=clock, logger=quiet_logger)

    return _make
