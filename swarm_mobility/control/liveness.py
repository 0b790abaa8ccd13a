#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/control/liveness.py
------------------------------------------------
Heartbeat / identity announcement, decoupled from control timing.

Every tick (default period 5 s) yields the "online" status. The very first
tick additionally yields the one-shot identity announcement "I <rover>" for the
shared `messages` channel; it is never repeated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from swarm_mobility.constants import ANNOUNCE_PREFIX, STATUS_ONLINE


@dataclass(frozen=True)
class LivenessReport:
    status: str
    announcement: Optional[str] = None


class LivenessReporter:
    def __init__(self, rover_name: str) -> None:
        self.rover_name = str(rover_name)
        self._announced = False
        self._beat_count = 0

    @property
    def announced(self) -> bool:
        return self._announced

    @property
    def beat_count(self) -> int:
        return self._beat_count

    def tick(self) -> LivenessReport:
        announcement = None
        if not self._announced:
            announcement = f"{ANNOUNCE_PREFIX}{self.rover_name}"
            self._announced = True
        self._beat_count += 1
        return LivenessReport(status=STATUS_ONLINE, announcement=announcement)


__all__ = [
    "LivenessReport",
    "LivenessReporter",
]
