#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/exceptions.py
------------------------------------------
Exception hierarchy for the mobility core.

Purpose
- One base class (`MobilityError`) so the node can catch every core failure
  at the callback boundary without masking programming errors.
- Each concrete error also derives from the closest builtin so callers that
  only know about `KeyError`/`ValueError` keep working.

Design notes
- No ROS dependencies
- None of these is fatal at runtime: the context logs them and degrades to a
  stop-the-robot response. `RosterConfigError` is raised only at startup.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MobilityError(Exception):
    """
    Base exception for all swarm_mobility core failures.
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = str(message)
        self.details = dict(details or {})
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = " ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} [{extra}]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }


class UnknownAgentError(MobilityError, KeyError):
    """
    A pose update named an identity that is not in the configured roster.
    """

    def __init__(self, identity: str, *, roster: Optional[tuple] = None) -> None:
        self.identity = str(identity)
        details: Dict[str, Any] = {"identity": self.identity}
        if roster is not None:
            details["roster"] = ",".join(roster)
        super().__init__(f"Unknown agent '{self.identity}'", details=details)

    # KeyError.__str__ would quote the whole message
    __str__ = MobilityError.__str__


class RosterConfigError(MobilityError, ValueError):
    """Roster configuration is invalid (empty, duplicate or missing self)."""


class PoseMessageError(MobilityError, ValueError):
    """An inbound pose broadcast could not be decoded."""


class UnreachableStateError(MobilityError, RuntimeError):
    """The motion state machine reached a state it has no branch for."""


__all__ = [
    "MobilityError",
    "UnknownAgentError",
    "RosterConfigError",
    "PoseMessageError",
    "UnreachableStateError",
]
