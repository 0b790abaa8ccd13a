#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/consensus/heading_consensus.py
-----------------------------------------------------------
Heading consensus over the Pose Roster.

Given the roster snapshot and the self slot `i`:

1. Global heading: circular mean of every slot (self included)
       global = atan2(sum sin(theta_j), sum cos(theta_j))
2. Neighbors: every j != i with |p_j - p_i| < R (strict)
3. Local heading: circular mean over the neighbors only. With no neighbors the
   vector sum is (0, 0) and the local heading is defined as 0.
4. Centroid offset: mean of (p_j - p_i) over the neighbors, (0, 0) without
   neighbors. The target point is p_i + offset and

       target_heading = atan2(target_y, target_x)

   i.e. atan2 of the absolute point, as the deployed swarm does. With
   `use_bearing_to_centroid=True` the bearing atan2(offset_y, offset_x) is used
   instead (no neighbors -> no correction).
5. correction       = Kp * (target_heading - theta_i)    (drives the rover)
   local_correction = Kp * (local_heading  - theta_i)    (telemetry only)

All operations are total over the inputs: the empty-neighbor cases never reach
atan2(0, 0).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from swarm_mobility.constants import (
    HEADING_GAIN_DEFAULT,
    NEIGHBOR_RADIUS_DEFAULT,
    USE_BEARING_TO_CENTROID_DEFAULT,
)
from swarm_mobility.models.pose import Pose2D


@dataclass(frozen=True)
class ConsensusParams:
    neighbor_radius: float = NEIGHBOR_RADIUS_DEFAULT
    gain: float = HEADING_GAIN_DEFAULT
    use_bearing_to_centroid: bool = USE_BEARING_TO_CENTROID_DEFAULT


@dataclass(frozen=True)
class ConsensusResult:
    global_heading: float
    local_heading: float
    neighbor_count: int
    neighbor_slots: Tuple[int, ...]
    centroid_offset: Tuple[float, float]
    target_point: Tuple[float, float]
    target_heading: float
    correction: float
    local_correction: float

    @property
    def has_neighbors(self) -> bool:
        return self.neighbor_count > 0

    def to_dict(self) -> dict:
        return {
            "global_heading": self.global_heading,
            "local_heading": self.local_heading,
            "neighbor_count": self.neighbor_count,
            "neighbor_slots": list(self.neighbor_slots),
            "centroid_offset": list(self.centroid_offset),
            "target_point": list(self.target_point),
            "target_heading": self.target_heading,
            "correction": self.correction,
            "local_correction": self.local_correction,
        }


NO_CORRECTION = ConsensusResult(
    global_heading=0.0,
    local_heading=0.0,
    neighbor_count=0,
    neighbor_slots=(),
    centroid_offset=(0.0, 0.0),
    target_point=(0.0, 0.0),
    target_heading=0.0,
    correction=0.0,
    local_correction=0.0,
)


def _circular_mean(headings: np.ndarray) -> float:
    if headings.size == 0:
        return 0.0
    return float(math.atan2(float(np.sin(headings).sum()), float(np.cos(headings).sum())))


def compute_heading_consensus(
    poses: Sequence[Pose2D],
    self_slot: int,
    params: ConsensusParams = ConsensusParams(),
) -> ConsensusResult:
    """
    Run one consensus evaluation over a roster snapshot (slot order).
    """
    if not 0 <= self_slot < len(poses):
        raise IndexError(f"self_slot {self_slot} outside roster of size {len(poses)}")

    table = np.array([(p.x, p.y, p.heading) for p in poses], dtype=float)
    xy = table[:, :2]
    theta = table[:, 2]

    me = poses[self_slot]
    p_self = xy[self_slot]

    global_heading = _circular_mean(theta)

    dist = np.hypot(xy[:, 0] - p_self[0], xy[:, 1] - p_self[1])
    mask = dist < float(params.neighbor_radius)
    mask[self_slot] = False
    neighbor_slots = tuple(int(j) for j in np.flatnonzero(mask))
    k = len(neighbor_slots)

    local_heading = _circular_mean(theta[mask])

    if k > 0:
        offset = (xy[mask] - p_self).mean(axis=0)
        offset_x, offset_y = float(offset[0]), float(offset[1])
    else:
        offset_x, offset_y = 0.0, 0.0

    target_x = me.x + offset_x
    target_y = me.y + offset_y

    if params.use_bearing_to_centroid:
        target_heading = math.atan2(offset_y, offset_x) if k > 0 else me.heading
    else:
        target_heading = math.atan2(target_y, target_x)

    gain = float(params.gain)
    return ConsensusResult(
        global_heading=global_heading,
        local_heading=local_heading,
        neighbor_count=k,
        neighbor_slots=neighbor_slots,
        centroid_offset=(offset_x, offset_y),
        target_point=(target_x, target_y),
        target_heading=target_heading,
        correction=gain * (target_heading - me.heading),
        local_correction=gain * (local_heading - me.heading),
    )


class HeadingConsensusEngine:
    """
    Holds the parameters and the latest result ("latest value wins").
    """

    def __init__(self, params: ConsensusParams = ConsensusParams()) -> None:
        self.params = params
        self._latest = NO_CORRECTION
        self._run_count = 0

    @property
    def latest(self) -> ConsensusResult:
        return self._latest

    @property
    def correction(self) -> float:
        return self._latest.correction

    @property
    def run_count(self) -> int:
        return self._run_count

    def recompute(self, poses: Sequence[Pose2D], self_slot: int) -> ConsensusResult:
        self._latest = compute_heading_consensus(poses, self_slot, self.params)
        self._run_count += 1
        return self._latest


__all__ = [
    "ConsensusParams",
    "ConsensusResult",
    "NO_CORRECTION",
    "compute_heading_consensus",
    "HeadingConsensusEngine",
]
