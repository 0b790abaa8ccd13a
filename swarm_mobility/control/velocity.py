#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/control/velocity.py
------------------------------------------------
Single funnel for every velocity command the rover emits.

set_velocity(linear, angular):
1. kick the velocity watchdog (deadline = now + timeout)
2. apply the actuator calibration (linear x1.5, angular x8 by default)
3. hand the calibrated command to the publish callback

Manual commands, autonomous commands, mode-change stops and watchdog stops all
go through here, so every emitted command refreshes the watchdog.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from swarm_mobility.constants import ANGULAR_SCALE_DEFAULT, LINEAR_SCALE_DEFAULT
from swarm_mobility.safety.velocity_watchdog import VelocityWatchdog, monotonic_time_s


@dataclass(frozen=True)
class VelocityCommand:
    linear: float = 0.0
    angular: float = 0.0

    @property
    def is_zero(self) -> bool:
        return self.linear == 0.0 and self.angular == 0.0


STOP_COMMAND = VelocityCommand()


@dataclass(frozen=True)
class VelocityCalibration:
    """
    Deployment-specific actuator scaling (not part of the control law).
    """
    linear_scale: float = LINEAR_SCALE_DEFAULT
    angular_scale: float = ANGULAR_SCALE_DEFAULT

    def apply(self, linear: float, angular: float) -> VelocityCommand:
        return VelocityCommand(
            linear=float(linear) * self.linear_scale,
            angular=float(angular) * self.angular_scale,
        )


PublishVelocityFn = Callable[[VelocityCommand], None]


class VelocityEmitter:
    """
    Owns the watchdog kick + calibration + publish sequence.
    """

    def __init__(
        self,
        watchdog: VelocityWatchdog,
        publish: PublishVelocityFn,
        calibration: VelocityCalibration = VelocityCalibration(),
        *,
        clock: Callable[[], float] = monotonic_time_s,
    ) -> None:
        self._watchdog = watchdog
        self._publish = publish
        self.calibration = calibration
        self._clock = clock
        self._last_command: Optional[VelocityCommand] = None
        self._emit_count = 0

    @property
    def watchdog(self) -> VelocityWatchdog:
        return self._watchdog

    @property
    def last_command(self) -> Optional[VelocityCommand]:
        return self._last_command

    @property
    def emit_count(self) -> int:
        return self._emit_count

    def set_velocity(self, linear: float, angular: float, *, source: str = "command") -> VelocityCommand:
        self._watchdog.kick(source=source, now_monotonic_s=self._clock())
        cmd = self.calibration.apply(linear, angular)
        self._publish(cmd)
        self._last_command = cmd
        self._emit_count += 1
        return cmd

    def stop(self, *, source: str = "stop") -> VelocityCommand:
        return self.set_velocity(0.0, 0.0, source=source)


__all__ = [
    "VelocityCommand",
    "STOP_COMMAND",
    "VelocityCalibration",
    "PublishVelocityFn",
    "VelocityEmitter",
]
