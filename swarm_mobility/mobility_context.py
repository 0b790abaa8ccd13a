#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/mobility_context.py
------------------------------------------------
Explicit context object for the mobility core.

Role in stack
-------------
Everything the handlers share (control mode, pose roster, latest steering
correction, watchdog deadline, one-shot announcement flag) lives in one
`MobilityContext`. The ROS node owns exactly
one context and forwards every callback and timer tick to it; the context
never touches rclpy. Outbound traffic goes through a `MobilityOutputs` sink,
which the node implements with publishers and tests implement with a recorder.

Handlers (one per inbound event / timer)
----------------------------------------
- on_mode(code)                  -> stop first, then switch mode
- on_manual_command(lin, ang)    -> forwarded only when not autonomous
- on_self_pose(pose)             -> roster self slot, pose broadcast, consensus
- on_pose_broadcast(text)        -> roster other slot, consensus
- on_target(...) / on_obstacle(...) / on_message(...) -> accepted, no behavior
- state_machine_tick()           -> Motion State Machine
- watchdog_tick()                -> forced stop on expiry
- status_tick()                  -> heartbeat + one-shot identity announcement

Concurrency
-----------
Handlers run to completion one at a time (rclpy single-threaded executor).
No handler blocks; all output is fire-and-forget publishing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Tuple

from swarm_mobility.consensus.heading_consensus import (
    NO_CORRECTION,
    ConsensusParams,
    ConsensusResult,
    HeadingConsensusEngine,
)
from swarm_mobility.constants import DEFAULTS
from swarm_mobility.control.liveness import LivenessReport, LivenessReporter
from swarm_mobility.control.state_machine import MotionStateMachine, TickOutcome
from swarm_mobility.control.velocity import VelocityCalibration, VelocityCommand, VelocityEmitter
from swarm_mobility.exceptions import PoseMessageError, UnknownAgentError
from swarm_mobility.models.control_mode import ControlMode, ModeClassifier
from swarm_mobility.models.pose import Pose2D
from swarm_mobility.models.pose_message import decode_pose_message, encode_pose_message
from swarm_mobility.roster.pose_roster import PoseRoster, RosterConfig
from swarm_mobility.safety.velocity_watchdog import VelocityWatchdog, WatchdogCheckResult, monotonic_time_s
from swarm_mobility.utils.logging import LoggerAdapter, RateLimitedLogger, get_logger_adapter, log_event


_COMPONENT = "mobility"


class MobilityOutputs(Protocol):
    """
    Outbound side of the transport. Every method must be non-blocking.
    """

    def publish_velocity(self, command: VelocityCommand) -> None: ...

    def publish_state_machine(self, text: str) -> None: ...

    def publish_status(self, text: str) -> None: ...

    def publish_message(self, text: str) -> None: ...

    def publish_pose(self, text: str) -> None: ...

    def publish_headings(self, global_heading: float, local_heading: float) -> None: ...

    def publish_angular(self, text: str) -> None: ...

    def publish_targets_collected(self, count: int) -> None: ...


@dataclass(frozen=True)
class MobilityConfig:
    """
    Everything the core needs to know, already validated/clamped by the caller.
    """
    rover_name: str
    roster: Tuple[str, ...] = DEFAULTS.roster
    kill_switch_timeout_s: float = DEFAULTS.kill_switch_timeout_s
    translate_linear_speed: float = DEFAULTS.translate_linear_speed
    linear_scale: float = DEFAULTS.linear_scale
    angular_scale: float = DEFAULTS.angular_scale
    neighbor_radius: float = DEFAULTS.neighbor_radius
    heading_gain: float = DEFAULTS.heading_gain
    use_bearing_to_centroid: bool = DEFAULTS.use_bearing_to_centroid
    autonomous_mode_codes: Tuple[int, ...] = field(default=DEFAULTS.autonomous_mode_codes)
    initial_mode: int = int(ControlMode.MANUAL_DIRECT)
    warn_period_s: float = 5.0


class MobilityContext:
    """
    Shared state + handlers of one rover's mobility core.
    """

    def __init__(
        self,
        config: MobilityConfig,
        outputs: MobilityOutputs,
        *,
        clock: Callable[[], float] = monotonic_time_s,
        logger: Optional[LoggerAdapter] = None,
    ) -> None:
        self.config = config
        self._outputs = outputs
        self._clock = clock
        self._logger = logger or get_logger_adapter()
        self._warn_limited = RateLimitedLogger(self._logger, period_s=config.warn_period_s, clock=clock)

        # Raises RosterConfigError: refuse to start with a bad roster.
        self.roster = PoseRoster(RosterConfig.from_names(config.roster, config.rover_name))

        self.modes = ModeClassifier(config.autonomous_mode_codes)
        self.mode_code = int(config.initial_mode)

        self.consensus = HeadingConsensusEngine(
            ConsensusParams(
                neighbor_radius=config.neighbor_radius,
                gain=config.heading_gain,
                use_bearing_to_centroid=config.use_bearing_to_centroid,
            )
        )

        self.watchdog = VelocityWatchdog(config.kill_switch_timeout_s, now_monotonic_s=clock())
        self.velocity = VelocityEmitter(
            self.watchdog,
            outputs.publish_velocity,
            VelocityCalibration(linear_scale=config.linear_scale, angular_scale=config.angular_scale),
            clock=clock,
        )
        self.state_machine = MotionStateMachine(
            self.velocity,
            translate_linear_speed=config.translate_linear_speed,
            clock=clock,
            logger=self._logger,
        )
        self.liveness = LivenessReporter(self.roster.self_identity)

        self._rejected_poses = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def rover_name(self) -> str:
        return self.roster.self_identity

    @property
    def autonomous(self) -> bool:
        return self.modes.is_autonomous(self.mode_code)

    @property
    def correction(self) -> float:
        return self.consensus.correction

    @property
    def latest_consensus(self) -> ConsensusResult:
        return self.consensus.latest

    @property
    def rejected_poses(self) -> int:
        return self._rejected_poses

    # -------------------------------------------------------------------------
    # Velocity funnel
    # -------------------------------------------------------------------------
    def set_velocity(self, linear: float, angular: float, *, source: str = "command") -> VelocityCommand:
        return self.velocity.set_velocity(linear, angular, source=source)

    # -------------------------------------------------------------------------
    # Inbound events
    # -------------------------------------------------------------------------
    def on_mode(self, code: int) -> VelocityCommand:
        """
        Switch control mode. Always stops the rover first.
        """
        previous = self.mode_code
        cmd = self.velocity.stop(source="mode_change")
        self.mode_code = int(code)
        log_event(
            self._logger,
            "mode_changed",
            component=_COMPONENT,
            details={
                "previous": self.modes.label(previous),
                "current": self.modes.label(self.mode_code),
            },
        )
        return cmd

    def on_manual_command(self, linear: float, angular: float) -> Optional[VelocityCommand]:
        if self.autonomous:
            return None
        return self.velocity.set_velocity(linear, angular, source="manual")

    def on_self_pose(self, pose: Pose2D) -> Optional[ConsensusResult]:
        """
        Odometry update: refresh self slot, re-broadcast, recompute consensus.
        Returns None when the pose was dropped as non-finite; the last good
        self pose and correction stay in effect.
        """
        if not pose.is_finite():
            self._rejected_poses += 1
            self._warn_limited.warn(
                "non_finite_odometry",
                f"[{_COMPONENT}] Dropping non-finite odometry pose: {pose.to_dict()}",
            )
            return None

        self.roster.update_self(pose)
        self._outputs.publish_pose(encode_pose_message(self.rover_name, pose))
        return self._recompute()

    def on_pose_broadcast(self, text: str) -> Optional[ConsensusResult]:
        """
        Swarm-mate broadcast. Returns None when the broadcast was rejected
        (malformed or unknown agent) or was this rover's own echo.
        """
        try:
            broadcast = decode_pose_message(text)
        except PoseMessageError as e:
            self._rejected_poses += 1
            self._warn_limited.warn(
                "malformed_pose",
                f"[{_COMPONENT}] Dropping malformed pose broadcast: {e}",
            )
            return None

        if broadcast.identity == self.rover_name:
            return None

        try:
            self.update_other(broadcast.identity, broadcast.pose)
        except UnknownAgentError as e:
            self._rejected_poses += 1
            self._warn_limited.warn(
                f"unknown_agent:{e.identity}",
                f"[{_COMPONENT}] Ignoring pose broadcast: {e}",
            )
            return None

        return self._recompute()

    def update_other(self, identity: str, pose: Pose2D) -> None:
        self.roster.update_other(identity, pose)

    def on_target(self, *_args, **_kwargs) -> None:
        """Target detections are handled by other nodes."""

    def on_obstacle(self, *_args, **_kwargs) -> None:
        """Obstacle reports are handled by other nodes."""

    def on_message(self, *_args, **_kwargs) -> None:
        """Shared swarm channel; nothing to do on receipt."""

    # -------------------------------------------------------------------------
    # Timer ticks
    # -------------------------------------------------------------------------
    def state_machine_tick(self) -> TickOutcome:
        outcome = self.state_machine.tick(
            mode_code=self.mode_code,
            autonomous=self.autonomous,
            correction=self.consensus.correction,
        )
        self._outputs.publish_state_machine(outcome.status_text)
        return outcome

    def watchdog_tick(self) -> WatchdogCheckResult:
        result = self.watchdog.check(now_monotonic_s=self._clock())
        if result.expired:
            self.velocity.stop(source="watchdog")
            log_event(
                self._logger,
                "watchdog_timeout",
                level="WARN",
                component=_COMPONENT,
                details={
                    "reason": result.reason,
                    "expiry_count": result.expiry_count,
                    "now_s": f"{result.now_s:.4f}",
                },
            )
        return result

    def status_tick(self) -> LivenessReport:
        report = self.liveness.tick()
        if report.announcement is not None:
            self._outputs.publish_message(report.announcement)
            log_event(self._logger, "identity_announced", component=_COMPONENT, details={"rover": self.rover_name})
        self._outputs.publish_status(report.status)
        return report

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def start(self) -> None:
        self._outputs.publish_targets_collected(0)

    def shutdown(self) -> VelocityCommand:
        return self.velocity.stop(source="shutdown")

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _recompute(self) -> ConsensusResult:
        result = self.consensus.recompute(self.roster.snapshot(), self.roster.self_slot)
        self._outputs.publish_headings(result.global_heading, result.local_heading)
        self._outputs.publish_angular(f"{result.local_correction}")
        return result

    def summary(self) -> dict:
        latest = self.consensus.latest
        return {
            "rover": self.rover_name,
            "mode": self.modes.label(self.mode_code),
            "autonomous": self.autonomous,
            "motion_state": self.state_machine.state.value,
            "autonomous_entries": self.state_machine.autonomous_entries,
            "correction": latest.correction,
            "consensus_runs": self.consensus.run_count,
            "rejected_poses": self._rejected_poses,
            "watchdog": self.watchdog.as_dict(),
            "consensus": latest.to_dict() if latest is not NO_CORRECTION else None,
        }


__all__ = [
    "MobilityOutputs",
    "MobilityConfig",
    "MobilityContext",
]
