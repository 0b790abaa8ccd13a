#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/ros/params.py
------------------------------------------
ROS 2 Jazzy parameter helpers for `swarm_mobility`.

Purpose
-------
Centralize parameter declaration + reading logic for the mobility node, so the
node body only deals with topics, timers and the `MobilityContext`.

Scope
-----
This module does NOT create publishers/subscribers or run control logic.
It ONLY declares/reads/clamps parameters and turns them into a
`MobilityConfig` for the core.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, List, Optional, Sequence, Tuple

from rclpy.node import Node

from swarm_mobility.constants import (
    DEFAULTS,
    KILL_SWITCH_TIMEOUT_S_MIN,
    LOOP_PERIOD_S_MIN,
)
from swarm_mobility.mobility_context import MobilityConfig


# =============================================================================
# Generic low-level helpers
# =============================================================================
def declare_if_missing(node: Node, name: str, default_value: Any) -> None:
    """
    Declare a parameter only if it has not already been declared.
    """
    if not node.has_parameter(name):
        node.declare_parameter(name, default_value)


def get_param(node: Node, name: str, default: Any = None) -> Any:
    if not node.has_parameter(name):
        return default
    return node.get_parameter(name).value


def get_bool(node: Node, name: str, default: bool = False) -> bool:
    v = get_param(node, name, default)
    return bool(v)


def get_float(
    node: Node,
    name: str,
    default: float = 0.0,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    try:
        out = float(get_param(node, name, default))
    except (TypeError, ValueError):
        out = float(default)

    if min_value is not None and out < min_value:
        out = min_value
    if max_value is not None and out > max_value:
        out = max_value
    return out


def get_str_list(node: Node, name: str, default: Optional[Sequence[str]] = None) -> List[str]:
    """
    Read a string-array parameter (or coerce a scalar to a one-item list).
    """
    if default is None:
        default = []

    v = get_param(node, name, list(default))
    if v is None:
        return list(default)

    if isinstance(v, (list, tuple)):
        return [str(x) for x in v]
    return [str(v)]


def get_int_list(node: Node, name: str, default: Sequence[int]) -> List[int]:
    v = get_param(node, name, list(default))
    if not isinstance(v, (list, tuple)):
        v = [v]
    try:
        return [int(x) for x in v]
    except (TypeError, ValueError):
        return list(default)


# =============================================================================
# Declaration groups
# =============================================================================
def declare_timing_params(node: Node) -> None:
    declare_if_missing(node, "loop_period_s", DEFAULTS.loop_period_s)
    declare_if_missing(node, "status_publish_period_s", DEFAULTS.status_publish_period_s)
    declare_if_missing(node, "kill_switch_timeout_s", DEFAULTS.kill_switch_timeout_s)
    declare_if_missing(node, "watchdog_check_period_s", DEFAULTS.watchdog_check_period_s)


def declare_motion_params(node: Node) -> None:
    declare_if_missing(node, "translate_linear_speed", DEFAULTS.translate_linear_speed)
    declare_if_missing(node, "linear_scale", DEFAULTS.linear_scale)
    declare_if_missing(node, "angular_scale", DEFAULTS.angular_scale)


def declare_consensus_params(node: Node) -> None:
    declare_if_missing(node, "roster", list(DEFAULTS.roster))
    declare_if_missing(node, "neighbor_radius", DEFAULTS.neighbor_radius)
    declare_if_missing(node, "heading_gain", DEFAULTS.heading_gain)
    declare_if_missing(node, "use_bearing_to_centroid", DEFAULTS.use_bearing_to_centroid)
    declare_if_missing(node, "autonomous_mode_codes", list(DEFAULTS.autonomous_mode_codes))


def declare_all_mobility_params(node: Node) -> None:
    declare_timing_params(node)
    declare_motion_params(node)
    declare_consensus_params(node)


# =============================================================================
# Dataclass parameter bundle
# =============================================================================
@dataclass
class MobilityParams:
    roster: Tuple[str, ...] = DEFAULTS.roster

    loop_period_s: float = DEFAULTS.loop_period_s
    status_publish_period_s: float = DEFAULTS.status_publish_period_s
    kill_switch_timeout_s: float = DEFAULTS.kill_switch_timeout_s
    watchdog_check_period_s: float = DEFAULTS.watchdog_check_period_s

    translate_linear_speed: float = DEFAULTS.translate_linear_speed
    linear_scale: float = DEFAULTS.linear_scale
    angular_scale: float = DEFAULTS.angular_scale

    neighbor_radius: float = DEFAULTS.neighbor_radius
    heading_gain: float = DEFAULTS.heading_gain
    use_bearing_to_centroid: bool = DEFAULTS.use_bearing_to_centroid
    autonomous_mode_codes: Tuple[int, ...] = DEFAULTS.autonomous_mode_codes

    def to_config(self, rover_name: str) -> MobilityConfig:
        return MobilityConfig(
            rover_name=rover_name,
            roster=tuple(self.roster),
            kill_switch_timeout_s=self.kill_switch_timeout_s,
            translate_linear_speed=self.translate_linear_speed,
            linear_scale=self.linear_scale,
            angular_scale=self.angular_scale,
            neighbor_radius=self.neighbor_radius,
            heading_gain=self.heading_gain,
            use_bearing_to_centroid=self.use_bearing_to_centroid,
            autonomous_mode_codes=tuple(self.autonomous_mode_codes),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def read_mobility_params(node: Node) -> MobilityParams:
    declare_all_mobility_params(node)

    loop_period_s = get_float(node, "loop_period_s", DEFAULTS.loop_period_s, min_value=LOOP_PERIOD_S_MIN)
    kill_switch_timeout_s = get_float(
        node, "kill_switch_timeout_s", DEFAULTS.kill_switch_timeout_s, min_value=KILL_SWITCH_TIMEOUT_S_MIN
    )
    # The check period bounds how late a stop can be; keep it below the timeout.
    watchdog_check_period_s = get_float(
        node,
        "watchdog_check_period_s",
        DEFAULTS.watchdog_check_period_s,
        min_value=LOOP_PERIOD_S_MIN,
        max_value=kill_switch_timeout_s,
    )

    return MobilityParams(
        roster=tuple(get_str_list(node, "roster", DEFAULTS.roster)),
        loop_period_s=loop_period_s,
        status_publish_period_s=get_float(
            node, "status_publish_period_s", DEFAULTS.status_publish_period_s, min_value=0.1
        ),
        kill_switch_timeout_s=kill_switch_timeout_s,
        watchdog_check_period_s=watchdog_check_period_s,
        translate_linear_speed=get_float(node, "translate_linear_speed", DEFAULTS.translate_linear_speed),
        linear_scale=get_float(node, "linear_scale", DEFAULTS.linear_scale),
        angular_scale=get_float(node, "angular_scale", DEFAULTS.angular_scale),
        neighbor_radius=get_float(node, "neighbor_radius", DEFAULTS.neighbor_radius, min_value=0.0),
        heading_gain=get_float(node, "heading_gain", DEFAULTS.heading_gain),
        use_bearing_to_centroid=get_bool(node, "use_bearing_to_centroid", DEFAULTS.use_bearing_to_centroid),
        autonomous_mode_codes=tuple(
            get_int_list(node, "autonomous_mode_codes", DEFAULTS.autonomous_mode_codes)
        ),
    )


__all__ = [
    "declare_if_missing",
    "get_param",
    "get_bool",
    "get_float",
    "get_str_list",
    "get_int_list",
    "declare_timing_params",
    "declare_motion_params",
    "declare_consensus_params",
    "declare_all_mobility_params",
    "MobilityParams",
    "read_mobility_params",
]
