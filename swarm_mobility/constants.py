# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/constants.py
-----------------------------------------
Centralized package-wide constants for `swarm_mobility`.

Purpose
-------
Keep stable/default values in one place so the node, the core modules and the
tests agree on roster, topic names, loop timing, gains and calibration.

Notes
-----
- This file is intentionally dependency-free (no ROS imports).
- These are *code defaults* only. Runtime ROS parameters/YAML override them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Tuple


# =============================================================================
# Package / Identity
# =============================================================================
PACKAGE_NAME: Final[str] = "swarm_mobility"
NODE_NAME_SUFFIX: Final[str] = "_MOBILITY"

# Slot order of the six-rover deployment.
DEFAULT_ROSTER: Final[Tuple[str, ...]] = (
    "ajax",
    "aeneas",
    "achilles",
    "diomedes",
    "hector",
    "paris",
)


# =============================================================================
# Topic Names (per-rover suffixes, joined as "<rover>/<suffix>")
# =============================================================================
TOPIC_JOYSTICK: Final[str] = "joystick"
TOPIC_MODE: Final[str] = "mode"
TOPIC_TARGETS: Final[str] = "targets"
TOPIC_OBSTACLE: Final[str] = "obstacle"
TOPIC_ODOMETRY: Final[str] = "odom/ekf"

TOPIC_STATUS: Final[str] = "status"
TOPIC_VELOCITY: Final[str] = "velocity"
TOPIC_STATE_MACHINE: Final[str] = "state_machine"
TOPIC_ANGULAR: Final[str] = "angular"
TOPIC_GLOBAL_HEADING: Final[str] = "global_average_heading"
TOPIC_LOCAL_HEADING: Final[str] = "local_averaging_heading"

# Shared (swarm-wide) topics
TOPIC_MESSAGES: Final[str] = "messages"
TOPIC_POSE: Final[str] = "pose"
TOPIC_TARGETS_COLLECTED: Final[str] = "targetsCollected"


# =============================================================================
# Timing defaults
# =============================================================================
LOOP_PERIOD_S_DEFAULT: Final[float] = 0.1
STATUS_PUBLISH_PERIOD_S_DEFAULT: Final[float] = 5.0
KILL_SWITCH_TIMEOUT_S_DEFAULT: Final[float] = 10.0
WATCHDOG_CHECK_PERIOD_S_DEFAULT: Final[float] = 1.0

LOOP_PERIOD_S_MIN: Final[float] = 0.01
KILL_SWITCH_TIMEOUT_S_MIN: Final[float] = 0.1


# =============================================================================
# Motion / consensus defaults
# =============================================================================
TRANSLATE_LINEAR_SPEED_DEFAULT: Final[float] = 0.05

# Actuator calibration applied inside set_velocity()
LINEAR_SCALE_DEFAULT: Final[float] = 1.5
ANGULAR_SCALE_DEFAULT: Final[float] = 8.0

NEIGHBOR_RADIUS_DEFAULT: Final[float] = 2.0
HEADING_GAIN_DEFAULT: Final[float] = 1.0
USE_BEARING_TO_CENTROID_DEFAULT: Final[bool] = False

# Integer mode codes delivered on "<rover>/mode"
AUTONOMOUS_MODE_CODES_DEFAULT: Final[Tuple[int, ...]] = (2, 3)


# =============================================================================
# Status strings
# =============================================================================
STATUS_ONLINE: Final[str] = "online"
STATE_TEXT_TRANSLATING: Final[str] = "TRANSLATING"
STATE_TEXT_WAITING_PREFIX: Final[str] = "WAITING, mode="
STATE_TEXT_UNREACHABLE: Final[str] = "DEFAULT CASE: SOMETHING WRONG!!!!"
ANNOUNCE_PREFIX: Final[str] = "I "


# =============================================================================
# Structured defaults
# =============================================================================
@dataclass(frozen=True)
class MobilityDefaults:
    roster: Tuple[str, ...] = DEFAULT_ROSTER

    loop_period_s: float = LOOP_PERIOD_S_DEFAULT
    status_publish_period_s: float = STATUS_PUBLISH_PERIOD_S_DEFAULT
    kill_switch_timeout_s: float = KILL_SWITCH_TIMEOUT_S_DEFAULT
    watchdog_check_period_s: float = WATCHDOG_CHECK_PERIOD_S_DEFAULT

    translate_linear_speed: float = TRANSLATE_LINEAR_SPEED_DEFAULT
    linear_scale: float = LINEAR_SCALE_DEFAULT
    angular_scale: float = ANGULAR_SCALE_DEFAULT

    neighbor_radius: float = NEIGHBOR_RADIUS_DEFAULT
    heading_gain: float = HEADING_GAIN_DEFAULT
    use_bearing_to_centroid: bool = USE_BEARING_TO_CENTROID_DEFAULT

    autonomous_mode_codes: Tuple[int, ...] = field(default=AUTONOMOUS_MODE_CODES_DEFAULT)

    def to_dict(self) -> dict:
        return {
            "roster": list(self.roster),
            "timing": {
                "loop_period_s": self.loop_period_s,
                "status_publish_period_s": self.status_publish_period_s,
                "kill_switch_timeout_s": self.kill_switch_timeout_s,
                "watchdog_check_period_s": self.watchdog_check_period_s,
            },
            "motion": {
                "translate_linear_speed": self.translate_linear_speed,
                "linear_scale": self.linear_scale,
                "angular_scale": self.angular_scale,
            },
            "consensus": {
                "neighbor_radius": self.neighbor_radius,
                "heading_gain": self.heading_gain,
                "use_bearing_to_centroid": self.use_bearing_to_centroid,
            },
            "autonomous_mode_codes": list(self.autonomous_mode_codes),
        }


DEFAULTS: Final[MobilityDefaults] = MobilityDefaults()


def rover_topic(rover_name: str, suffix: str) -> str:
    """
    Join a rover name and a topic suffix: ("ajax", "mode") -> "ajax/mode".
    """
    name = str(rover_name).strip().strip("/")
    return f"{name}/{suffix.strip('/')}"


__all__ = [
    "PACKAGE_NAME",
    "NODE_NAME_SUFFIX",
    "DEFAULT_ROSTER",
    "TOPIC_JOYSTICK",
    "TOPIC_MODE",
    "TOPIC_TARGETS",
    "TOPIC_OBSTACLE",
    "TOPIC_ODOMETRY",
    "TOPIC_STATUS",
    "TOPIC_VELOCITY",
    "TOPIC_STATE_MACHINE",
    "TOPIC_ANGULAR",
    "TOPIC_GLOBAL_HEADING",
    "TOPIC_LOCAL_HEADING",
    "TOPIC_MESSAGES",
    "TOPIC_POSE",
    "TOPIC_TARGETS_COLLECTED",
    "LOOP_PERIOD_S_DEFAULT",
    "STATUS_PUBLISH_PERIOD_S_DEFAULT",
    "KILL_SWITCH_TIMEOUT_S_DEFAULT",
    "WATCHDOG_CHECK_PERIOD_S_DEFAULT",
    "LOOP_PERIOD_S_MIN",
    "KILL_SWITCH_TIMEOUT_S_MIN",
    "TRANSLATE_LINEAR_SPEED_DEFAULT",
    "LINEAR_SCALE_DEFAULT",
    "ANGULAR_SCALE_DEFAULT",
    "NEIGHBOR_RADIUS_DEFAULT",
    "HEADING_GAIN_DEFAULT",
    "USE_BEARING_TO_CENTROID_DEFAULT",
    "AUTONOMOUS_MODE_CODES_DEFAULT",
    "STATUS_ONLINE",
    "STATE_TEXT_TRANSLATING",
    "STATE_TEXT_WAITING_PREFIX",
    "STATE_TEXT_UNREACHABLE",
    "ANNOUNCE_PREFIX",
    "MobilityDefaults",
    "DEFAULTS",
    "rover_topic",
]
