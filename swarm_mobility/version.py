#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/version.py
---------------------------------------
Version and package metadata helpers for the `swarm_mobility` package.

Design notes
------------
- No ROS imports (safe in any environment).
- Semantic-version style fields exposed for startup logs and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple


# =============================================================================
# Semantic Version (edit here for releases)
# =============================================================================
VERSION_MAJOR: Final[int] = 0
VERSION_MINOR: Final[int] = 2
VERSION_PATCH: Final[int] = 0

PRERELEASE: Final[str] = ""


# =============================================================================
# Package Identity Metadata
# =============================================================================
PACKAGE_NAME: Final[str] = "swarm_mobility"
SUPPORTED_ROS_DISTRO: Final[str] = "jazzy"


def _build_version_string() -> str:
    base = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
    if PRERELEASE.strip():
        base += f"-{PRERELEASE.strip()}"
    return base


__version__: Final[str] = _build_version_string()
VERSION: Final[str] = __version__
VERSION_TUPLE: Final[Tuple[int, int, int]] = (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)


@dataclass(frozen=True)
class PackageVersionInfo:
    package_name: str
    version: str
    ros_distro: str

    def banner(self, rover_name: str = "") -> str:
        who = f"{rover_name} | " if rover_name else ""
        return f"{who}{self.package_name} {self.version} (ROS 2 {self.ros_distro})"


def get_version() -> str:
    """Return package version string (SemVer-style)."""
    return VERSION


def get_package_version_info() -> PackageVersionInfo:
    return PackageVersionInfo(
        package_name=PACKAGE_NAME,
        version=VERSION,
        ros_distro=SUPPORTED_ROS_DISTRO,
    )


__all__ = [
    "__version__",
    "VERSION",
    "VERSION_TUPLE",
    "PACKAGE_NAME",
    "SUPPORTED_ROS_DISTRO",
    "PackageVersionInfo",
    "get_version",
    "get_package_version_info",
]
