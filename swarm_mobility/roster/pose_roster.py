#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/roster/pose_roster.py
--------------------------------------------------
Fixed-capacity table of the latest known pose of every rover in the swarm.

Semantics
---------
- The roster is configured once at startup: an ordered tuple of identities,
  where the position of a name is its slot index. The configuration is
  validated (non-empty, unique, self is a member, no name carrying the
  broadcast field separator).
- All slots start at the zero pose and are overwritten wholesale with an
  immutable `Pose2D`. A snapshot therefore never sees a torn pose.
- An identity outside the roster raises `UnknownAgentError`. It is never mapped
  onto a default slot.

Concurrency
-----------
rclpy's default single-threaded executor already serializes every callback.
The lock only matters when the node is spun by a multi-threaded executor.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

from swarm_mobility.exceptions import RosterConfigError, UnknownAgentError
from swarm_mobility.models.pose import ZERO_POSE, Pose2D
from swarm_mobility.models.pose_message import FIELD_SEP


@dataclass(frozen=True)
class RosterConfig:
    """
    Validated identity -> slot mapping.
    """
    identities: Tuple[str, ...]
    self_identity: str

    def __post_init__(self) -> None:
        names = tuple(str(n).strip() for n in self.identities)
        if not names:
            raise RosterConfigError("Roster must contain at least one agent")
        if any(not n for n in names):
            raise RosterConfigError("Roster contains a blank agent name", details={"roster": list(names)})
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise RosterConfigError("Roster contains duplicate agent names", details={"duplicates": dupes})
        bad = [n for n in names if FIELD_SEP in n]
        if bad:
            raise RosterConfigError(
                f"Roster names must not contain '{FIELD_SEP}'",
                details={"names": bad},
            )

        me = str(self.self_identity).strip()
        if me not in names:
            raise RosterConfigError(
                f"Self identity '{me}' is not in the configured roster",
                details={"roster": ",".join(names)},
            )

        object.__setattr__(self, "identities", names)
        object.__setattr__(self, "self_identity", me)

    @classmethod
    def from_names(cls, names: Iterable[str], self_identity: str) -> "RosterConfig":
        return cls(identities=tuple(names), self_identity=self_identity)

    @property
    def size(self) -> int:
        return len(self.identities)

    @property
    def self_slot(self) -> int:
        return self.identities.index(self.self_identity)

    def slot_of(self, identity: str) -> int:
        try:
            return self.identities.index(str(identity).strip())
        except ValueError:
            raise UnknownAgentError(identity, roster=self.identities) from None

    def contains(self, identity: str) -> bool:
        return str(identity).strip() in self.identities


class PoseRoster:
    """
    Latest pose per configured identity.

    Typical use
    -----------
    roster = PoseRoster(RosterConfig.from_names(DEFAULT_ROSTER, "ajax"))
    roster.update_self(pose_from_odometry)
    roster.update_other("hector", pose_from_broadcast)
    poses = roster.snapshot()          # tuple in slot order
    """

    def __init__(self, config: RosterConfig) -> None:
        self._config = config
        self._slots = [ZERO_POSE] * config.size
        self._lock = threading.Lock()
        self._update_count = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def config(self) -> RosterConfig:
        return self._config

    @property
    def self_identity(self) -> str:
        return self._config.self_identity

    @property
    def self_slot(self) -> int:
        return self._config.self_slot

    @property
    def update_count(self) -> int:
        return self._update_count

    def __len__(self) -> int:
        return self._config.size

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def _write(self, slot: int, pose: Pose2D) -> None:
        if not isinstance(pose, Pose2D):
            raise TypeError(f"Expected Pose2D, got {type(pose).__name__}")
        with self._lock:
            self._slots[slot] = pose
            self._update_count += 1

    def update_self(self, pose: Pose2D) -> None:
        self._write(self._config.self_slot, pose)

    def update_other(self, identity: str, pose: Pose2D) -> None:
        """
        Overwrite the slot of `identity`. Raises UnknownAgentError (roster
        unchanged) when the identity is not configured.
        """
        slot = self._config.slot_of(identity)
        self._write(slot, pose)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def snapshot(self) -> Tuple[Pose2D, ...]:
        with self._lock:
            return tuple(self._slots)

    def get(self, identity: str) -> Pose2D:
        slot = self._config.slot_of(identity)
        with self._lock:
            return self._slots[slot]

    def self_pose(self) -> Pose2D:
        with self._lock:
            return self._slots[self._config.self_slot]

    def as_mapping(self) -> Mapping[str, Pose2D]:
        snap = self.snapshot()
        return dict(zip(self._config.identities, snap))

    def as_dict(self) -> Dict[str, dict]:
        return {name: pose.to_dict() for name, pose in self.as_mapping().items()}


__all__ = [
    "RosterConfig",
    "PoseRoster",
]
