#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/control/state_machine.py
-----------------------------------------------------
Periodic motion state machine (default tick: 0.1 s).

Per tick
--------
- Mode not autonomous: emit nothing, report "WAITING, mode=<n>".
- Mode autonomous: dispatch on the current `MotionState`.
    * TRANSLATE: set_velocity(translate_linear_speed, latest correction)
    * anything else: unreachable. Report the error marker, log, force a stop
      and keep the loop alive.

Adding a state means adding an enum member and one `elif` arm in `_dispatch`;
the tick shape does not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from swarm_mobility.constants import (
    STATE_TEXT_TRANSLATING,
    STATE_TEXT_UNREACHABLE,
    STATE_TEXT_WAITING_PREFIX,
    TRANSLATE_LINEAR_SPEED_DEFAULT,
)
from swarm_mobility.control.velocity import VelocityCommand, VelocityEmitter
from swarm_mobility.exceptions import UnreachableStateError
from swarm_mobility.utils.logging import LoggerAdapter, get_logger_adapter, log_event


class MotionState(Enum):
    TRANSLATE = "TRANSLATE"


INITIAL_STATE = MotionState.TRANSLATE


@dataclass(frozen=True)
class TickOutcome:
    status_text: str
    autonomous: bool
    command: Optional[VelocityCommand] = None
    error: Optional[str] = None


class MotionStateMachine:
    """
    Arbitrates autonomous motion on each tick. Manual commands bypass this
    class entirely (they go straight to the velocity emitter).
    """

    def __init__(
        self,
        emitter: VelocityEmitter,
        *,
        translate_linear_speed: float = TRANSLATE_LINEAR_SPEED_DEFAULT,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[LoggerAdapter] = None,
    ) -> None:
        self._emitter = emitter
        self.translate_linear_speed = float(translate_linear_speed)
        self._clock = clock
        self._logger = logger or get_logger_adapter()

        self._state: MotionState = INITIAL_STATE
        self._was_autonomous = False
        self._autonomous_entries = 0
        self._first_autonomous_s: Optional[float] = None
        self._tick_count = 0
        self._error_count = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def state(self) -> MotionState:
        return self._state

    @property
    def autonomous_entries(self) -> int:
        return self._autonomous_entries

    @property
    def first_autonomous_s(self) -> Optional[float]:
        return self._first_autonomous_s

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def error_count(self) -> int:
        return self._error_count

    def transition_to(self, state: MotionState) -> None:
        self._state = state

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------
    def tick(self, *, mode_code: int, autonomous: bool, correction: float) -> TickOutcome:
        self._tick_count += 1

        if not autonomous:
            self._was_autonomous = False
            return TickOutcome(
                status_text=f"{STATE_TEXT_WAITING_PREFIX}{int(mode_code)}",
                autonomous=False,
            )

        if not self._was_autonomous:
            self._autonomous_entries += 1
            if self._first_autonomous_s is None and self._clock is not None:
                self._first_autonomous_s = self._clock()
            self._was_autonomous = True

        try:
            return self._dispatch(correction)
        except UnreachableStateError as e:
            self._error_count += 1
            log_event(
                self._logger,
                "unreachable_motion_state",
                level="ERROR",
                component="state_machine",
                details={"state": repr(self._state), "error": e.message},
            )
            cmd = self._emitter.stop(source="unreachable_state")
            return TickOutcome(
                status_text=STATE_TEXT_UNREACHABLE,
                autonomous=True,
                command=cmd,
                error=str(e),
            )

    def _dispatch(self, correction: float) -> TickOutcome:
        state = self._state
        if state is MotionState.TRANSLATE:
            cmd = self._emitter.set_velocity(
                self.translate_linear_speed,
                float(correction),
                source="autonomous",
            )
            return TickOutcome(status_text=STATE_TEXT_TRANSLATING, autonomous=True, command=cmd)
        else:
            raise UnreachableStateError(
                "Motion state has no dispatch branch",
                details={"state": repr(state)},
            )


__all__ = [
    "MotionState",
    "INITIAL_STATE",
    "TickOutcome",
    "MotionStateMachine",
]
