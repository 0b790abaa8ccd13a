#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/models/pose.py
-------------------------------------------
Planar pose value type and angle helpers.

This module is intentionally ROS-agnostic (no rclpy imports) so it can be used
by the node, the consensus engine and unit tests alike.

A `Pose2D` is an immutable snapshot. Roster slots are replaced wholesale on
every update, never mutated field by field.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def wrap_to_pi(angle_rad: float) -> float:
    """Wrap angle to (-pi, pi]."""
    a = (angle_rad + math.pi) % (2.0 * math.pi) - math.pi
    if a <= -math.pi:
        a += 2.0 * math.pi
    return a


def quat_xyzw_to_yaw(qx: float, qy: float, qz: float, qw: float) -> float:
    """
    Convert quaternion (x,y,z,w) to yaw (rad), wrapped to (-pi, pi].
    """
    siny_cosp = 2.0 * (qw * qz + qx * qy)
    cosy_cosp = 1.0 - 2.0 * (qy * qy + qz * qz)
    return wrap_to_pi(math.atan2(siny_cosp, cosy_cosp))


@dataclass(frozen=True)
class Pose2D:
    """2D pose: position plus heading (rad)."""
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    @classmethod
    def from_odometry(cls, x: float, y: float, qx: float, qy: float, qz: float, qw: float) -> "Pose2D":
        return cls(x=float(x), y=float(y), heading=quat_xyzw_to_yaw(qx, qy, qz, qw))

    def distance_to(self, other: "Pose2D") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.heading)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "heading": self.heading}


ZERO_POSE = Pose2D()


__all__ = [
    "wrap_to_pi",
    "quat_xyzw_to_yaw",
    "Pose2D",
    "ZERO_POSE",
]
