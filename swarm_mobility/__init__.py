# -*- coding: utf-8 -*-
"""
Swarm Rover — swarm_mobility/__init__.py
----------------------------------------
Package root exports for `swarm_mobility`.

This file provides:
- package version helpers
- centralized mobility defaults/constants

Design notes
------------
- Keep imports lightweight: nothing here pulls in rclpy.
- Nodes live under `swarm_mobility.nodes` and are imported explicitly.
"""

from __future__ import annotations

from .version import (
    __version__,
    VERSION,
    get_version,
    get_package_version_info,
)
from .constants import (
    DEFAULTS,
    MobilityDefaults,
    PACKAGE_NAME,
    NODE_NAME_SUFFIX,
    DEFAULT_ROSTER,
    rover_topic,
)


def get_package_info() -> dict:
    """
    Return lightweight package metadata and key exported defaults.

    Safe to call from scripts/tools without importing ROS dependencies.
    """
    return {
        "package": PACKAGE_NAME,
        "version": get_version(),
        "node_name_suffix": NODE_NAME_SUFFIX,
        "defaults": DEFAULTS.to_dict(),
    }


__all__ = [
    # version
    "__version__",
    "VERSION",
    "get_version",
    "get_package_version_info",
    # constants/defaults
    "DEFAULTS",
    "MobilityDefaults",
    "PACKAGE_NAME",
    "NODE_NAME_SUFFIX",
    "DEFAULT_ROSTER",
    "rover_topic",
    # metadata helper
    "get_package_info",
]
