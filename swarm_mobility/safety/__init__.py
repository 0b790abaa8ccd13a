#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/safety/__init__.py
-----------------------------------------------
Public exports for the `swarm_mobility.safety` package.
"""

from .velocity_watchdog import (
    VelocityWatchdog,
    VelocityWatchdogState,
    WatchdogCheckResult,
    monotonic_time_s,
)

__all__ = [
    "VelocityWatchdog",
    "VelocityWatchdogState",
    "WatchdogCheckResult",
    "monotonic_time_s",
]
