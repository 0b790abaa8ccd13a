#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility.models.control_mode
================================================

Purpose
-------
Python-side contract for the integer mode code delivered on `<rover>/mode`.

The code itself is owned by the operator UI. The mobility core only needs to
tell "autonomous" from "not autonomous", so unknown codes are kept as raw
integers rather than rejected: they are reported back in the waiting status
and treated as manual.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional, Union

from swarm_mobility.constants import AUTONOMOUS_MODE_CODES_DEFAULT


class ControlMode(IntEnum):
    """
    Known mode codes of the operator UI.
    """
    MANUAL_DIRECT = 0
    MANUAL_SECONDARY = 1
    AUTONOMOUS_FLOCKING = 2
    AUTONOMOUS_OTHER = 3


ModeCode = Union[int, ControlMode]


def parse_control_mode(value: object) -> Optional[ControlMode]:
    """
    Map a raw code onto `ControlMode`, or None if the code is not a known mode.

    Examples
    --------
    parse_control_mode(2)   -> ControlMode.AUTONOMOUS_FLOCKING
    parse_control_mode("1") -> ControlMode.MANUAL_SECONDARY
    parse_control_mode(9)   -> None
    """
    if isinstance(value, ControlMode):
        return value
    try:
        return ControlMode(int(value))
    except (TypeError, ValueError):
        return None


class ModeClassifier:
    """
    Decides which integer codes mean "the state machine drives".
    """

    def __init__(self, autonomous_codes: Optional[Iterable[int]] = None) -> None:
        codes = AUTONOMOUS_MODE_CODES_DEFAULT if autonomous_codes is None else autonomous_codes
        self._autonomous = frozenset(int(c) for c in codes)

    @property
    def autonomous_codes(self) -> frozenset:
        return self._autonomous

    def is_autonomous(self, code: ModeCode) -> bool:
        return int(code) in self._autonomous

    def label(self, code: ModeCode) -> str:
        mode = parse_control_mode(code)
        name = mode.name if mode is not None else "UNKNOWN"
        kind = "auto" if self.is_autonomous(code) else "manual"
        return f"{int(code)} ({name}, {kind})"


__all__ = [
    "ControlMode",
    "ModeCode",
    "parse_control_mode",
    "ModeClassifier",
]
