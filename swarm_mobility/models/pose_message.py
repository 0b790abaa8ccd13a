#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/models/pose_message.py
---------------------------------------------------
Text codec for the swarm-wide `pose` broadcast.

Wire format (std_msgs/String payload)
-------------------------------------
    "<rover_name>, <x>, <y>, <heading>"

e.g. "ajax, 1.25, -0.5, 0.785398"

Every rover publishes its own line whenever its odometry updates and decodes
everyone else's lines into its Pose Roster.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from swarm_mobility.exceptions import PoseMessageError
from swarm_mobility.models.pose import Pose2D


FIELD_SEP = ","
_FIELD_COUNT = 4


@dataclass(frozen=True)
class PoseBroadcast:
    identity: str
    pose: Pose2D


def encode_pose_message(identity: str, pose: Pose2D) -> str:
    return f"{identity}, {pose.x}, {pose.y}, {pose.heading}"


def decode_pose_message(text: str) -> PoseBroadcast:
    """
    Parse one broadcast line. Raises PoseMessageError on malformed input.
    """
    raw = "" if text is None else str(text)
    parts = [p.strip() for p in raw.split(FIELD_SEP)]
    if len(parts) != _FIELD_COUNT:
        raise PoseMessageError(
            "Pose broadcast must have 4 comma-separated fields",
            details={"fields": len(parts), "text": raw[:80]},
        )

    identity = parts[0]
    if not identity:
        raise PoseMessageError("Pose broadcast has an empty identity", details={"text": raw[:80]})

    try:
        x, y, heading = (float(p) for p in parts[1:])
    except ValueError as e:
        raise PoseMessageError(
            "Pose broadcast has a non-numeric field",
            details={"text": raw[:80]},
        ) from e

    if not all(math.isfinite(v) for v in (x, y, heading)):
        raise PoseMessageError("Pose broadcast has a non-finite field", details={"text": raw[:80]})

    return PoseBroadcast(identity=identity, pose=Pose2D(x=x, y=y, heading=heading))


__all__ = [
    "FIELD_SEP",
    "PoseBroadcast",
    "encode_pose_message",
    "decode_pose_message",
]
