#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/models/__init__.py
-----------------------------------------------
Public exports for the ROS-free data models.
"""

from .pose import Pose2D, ZERO_POSE, quat_xyzw_to_yaw, wrap_to_pi
from .control_mode import ControlMode, ModeClassifier, parse_control_mode
from .pose_message import PoseBroadcast, decode_pose_message, encode_pose_message

__all__ = [
    "Pose2D",
    "ZERO_POSE",
    "quat_xyzw_to_yaw",
    "wrap_to_pi",
    "ControlMode",
    "ModeClassifier",
    "parse_control_mode",
    "PoseBroadcast",
    "decode_pose_message",
    "encode_pose_message",
]
