#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/safety/velocity_watchdog.py
--------------------------------------------------------
Deadline watchdog ("kill switch") for the velocity output path.

Purpose
-------
Guarantee that the rover cannot keep moving on an old command: if no velocity
command (manual, autonomous or a stop) was emitted within `timeout_s`, the
next periodic check reports an expiry and the caller forces a zero command.

Core semantics
--------------
- `kick(now)` stores `deadline = now + timeout_s`. Every `set_velocity()` call
  kicks, including zero-velocity commands.
- `check(now)` is called by an independent periodic tick. When
  `now >= deadline` it returns `expired=True` once and re-arms the deadline
  one timeout ahead, so each silent window of `timeout_s` fires exactly once.
  The stop command emitted in response kicks the watchdog again anyway.
- No reliance on timer stop/restart semantics: only a stored monotonic
  timestamp compared by a scheduler tick.

Design goals
------------
- Pure Python (no ROS dependency)
- Monotonic time-based (safe against wall-clock jumps)
- Rich status for logs / telemetry
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from typing import Optional

from swarm_mobility.constants import KILL_SWITCH_TIMEOUT_S_DEFAULT, KILL_SWITCH_TIMEOUT_S_MIN


def monotonic_time_s() -> float:
    """Return monotonic time in seconds."""
    return time.monotonic()


# =============================================================================
# Dataclasses
# =============================================================================
@dataclass
class VelocityWatchdogState:
    """
    Runtime state of the watchdog.
    """
    deadline_s: float = 0.0
    last_kick_s: Optional[float] = None
    last_kick_source: str = "startup"
    last_expiry_s: Optional[float] = None
    expiry_count: int = 0
    kick_count: int = 0
    timeout_s: float = KILL_SWITCH_TIMEOUT_S_DEFAULT


@dataclass(frozen=True)
class WatchdogCheckResult:
    """
    Result returned by check().
    """
    expired: bool
    now_s: float
    deadline_s: float
    silent_for_s: float
    expiry_count: int

    @property
    def reason(self) -> str:
        if not self.expired:
            return "fresh"
        return f"no_velocity_command_for_{self.silent_for_s:.3f}s"


# =============================================================================
# Core watchdog
# =============================================================================
class VelocityWatchdog:
    """
    Monotonic deadline watchdog for command freshness.

    Recommended pattern
    -------------------
    - In set_velocity(): `watchdog.kick(source="manual")`
    - In a periodic timer: `if watchdog.check().expired: set_velocity(0, 0)`
    """

    def __init__(
        self,
        timeout_s: float = KILL_SWITCH_TIMEOUT_S_DEFAULT,
        *,
        now_monotonic_s: Optional[float] = None,
    ) -> None:
        self._timeout_s = max(KILL_SWITCH_TIMEOUT_S_MIN, float(timeout_s))
        self._lock = threading.Lock()

        # The countdown starts when the node starts, like a freshly created timer.
        start_s = self._now(now_monotonic_s)
        self._state = VelocityWatchdogState(
            deadline_s=start_s + self._timeout_s,
            timeout_s=self._timeout_s,
        )
        self._armed_at_s = start_s

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    @property
    def deadline_s(self) -> float:
        with self._lock:
            return self._state.deadline_s

    @property
    def state(self) -> VelocityWatchdogState:
        with self._lock:
            return replace(self._state)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def _now(now_monotonic_s: Optional[float]) -> float:
        return monotonic_time_s() if now_monotonic_s is None else float(now_monotonic_s)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    def kick(self, *, source: str = "command", now_monotonic_s: Optional[float] = None) -> float:
        """
        Register a fresh velocity command. Returns the new deadline.
        """
        now_s = self._now(now_monotonic_s)
        with self._lock:
            self._state.deadline_s = now_s + self._timeout_s
            self._state.last_kick_s = now_s
            self._state.last_kick_source = str(source)
            self._state.kick_count += 1
            self._armed_at_s = now_s
            return self._state.deadline_s

    def check(self, *, now_monotonic_s: Optional[float] = None) -> WatchdogCheckResult:
        """
        Evaluate the deadline. Fires at most once per elapsed deadline.
        """
        now_s = self._now(now_monotonic_s)
        with self._lock:
            deadline = self._state.deadline_s
            silent_for = max(0.0, now_s - self._armed_at_s)

            if now_s < deadline:
                return WatchdogCheckResult(
                    expired=False,
                    now_s=now_s,
                    deadline_s=deadline,
                    silent_for_s=silent_for,
                    expiry_count=self._state.expiry_count,
                )

            self._state.expiry_count += 1
            self._state.last_expiry_s = now_s
            self._state.deadline_s = now_s + self._timeout_s
            self._armed_at_s = now_s
            return WatchdogCheckResult(
                expired=True,
                now_s=now_s,
                deadline_s=deadline,
                silent_for_s=silent_for,
                expiry_count=self._state.expiry_count,
            )

    def remaining_s(self, *, now_monotonic_s: Optional[float] = None) -> float:
        now_s = self._now(now_monotonic_s)
        with self._lock:
            return max(0.0, self._state.deadline_s - now_s)

    def as_dict(self) -> dict:
        s = self.state
        return {
            "timeout_s": s.timeout_s,
            "deadline_s": s.deadline_s,
            "last_kick_s": s.last_kick_s,
            "last_kick_source": s.last_kick_source,
            "last_expiry_s": s.last_expiry_s,
            "expiry_count": s.expiry_count,
            "kick_count": s.kick_count,
        }


__all__ = [
    "monotonic_time_s",
    "VelocityWatchdogState",
    "WatchdogCheckResult",
    "VelocityWatchdog",
]
