"""Tests for swarm_mobility.consensus.heading_consensus."""

from __future__ import annotations

import math

import pytest

from swarm_mobility.consensus.heading_consensus import (
    NO_CORRECTION,
    ConsensusParams,
    HeadingConsensusEngine,
    compute_heading_consensus,
)
from swarm_mobility.models.pose import Pose2D


HALF_PI = math.pi / 2


def _three_agents():
    return (Pose2D(0.0, 0.0, 0.0), Pose2D(1.0, 0.0, 0.0), Pose2D(0.0, 1.0, HALF_PI))


# =====================================================================
# Three-agent scenario
# =====================================================================


class TestThreeAgentScenario:
    """Self at the origin, both mates within radius 2."""

    def setup_method(self):
        self.result = compute_heading_consensus(_three_agents(), 0, ConsensusParams(neighbor_radius=2.0))

    def test_both_mates_are_neighbors(self):
        assert self.result.neighbor_count == 2
        assert self.result.neighbor_slots == (1, 2)
        assert self.result.has_neighbors

    def test_centroid_offset_and_target_point(self):
        assert self.result.centroid_offset == pytest.approx((0.5, 0.5))
        assert self.result.target_point == pytest.approx((0.5, 0.5))

    def test_target_heading_and_correction(self):
        assert self.result.target_heading == pytest.approx(math.pi / 4)
        assert self.result.correction == pytest.approx(math.pi / 4)

    def test_local_heading_uses_neighbors_only(self):
        # mates at 0 and pi/2
        assert self.result.local_heading == pytest.approx(math.pi / 4)
        assert self.result.local_correction == pytest.approx(math.pi / 4)

    def test_global_heading_includes_self(self):
        # headings 0, 0, pi/2
        assert self.result.global_heading == pytest.approx(math.atan2(1.0, 2.0))

    def test_gain_scales_correction(self):
        r = compute_heading_consensus(_three_agents(), 0, ConsensusParams(neighbor_radius=2.0, gain=0.5))
        assert r.correction == pytest.approx(math.pi / 8)


# =====================================================================
# Neighbor selection
# =====================================================================


class TestNeighborSelection:
    def test_boundary_distance_is_excluded(self):
        poses = (Pose2D(0.0, 0.0, 0.0), Pose2D(2.0, 0.0, 1.0))
        r = compute_heading_consensus(poses, 0, ConsensusParams(neighbor_radius=2.0))
        assert r.neighbor_count == 0

    def test_just_inside_boundary_is_included(self):
        poses = (Pose2D(0.0, 0.0, 0.0), Pose2D(1.999, 0.0, 1.0))
        r = compute_heading_consensus(poses, 0, ConsensusParams(neighbor_radius=2.0))
        assert r.neighbor_slots == (1,)

    def test_self_is_never_a_neighbor(self):
        poses = (Pose2D(1.0, 1.0, 0.3), Pose2D(1.0, 1.0, 0.3))
        r = compute_heading_consensus(poses, 1, ConsensusParams(neighbor_radius=2.0))
        assert r.neighbor_slots == (0,)

    def test_bad_self_slot(self):
        with pytest.raises(IndexError):
            compute_heading_consensus(_three_agents(), 3)


# =====================================================================
# No neighbors
# =====================================================================


class TestIsolatedAgent:
    @pytest.mark.parametrize(
        "me",
        [Pose2D(3.0, 4.0, 0.2), Pose2D(-1.0, 0.5, -2.0), Pose2D(0.0, -7.0, 3.0)],
    )
    def test_correction_uses_own_coordinates_only(self, me):
        far = Pose2D(me.x + 50.0, me.y, 1.0)
        r = compute_heading_consensus((me, far), 0, ConsensusParams(neighbor_radius=2.0, gain=1.5))
        assert r.neighbor_count == 0
        assert r.correction == pytest.approx(1.5 * (math.atan2(me.y, me.x) - me.heading))

    def test_degenerate_values_are_defined(self):
        me = Pose2D(3.0, 4.0, 0.2)
        r = compute_heading_consensus((me, Pose2D(100.0, 0.0, 0.0)), 0)
        assert r.local_heading == 0.0
        assert r.centroid_offset == (0.0, 0.0)
        assert r.target_point == (3.0, 4.0)
        assert all(math.isfinite(v) for v in (r.correction, r.local_correction, r.global_heading))

    def test_single_agent_roster(self):
        r = compute_heading_consensus((Pose2D(1.0, 1.0, 0.0),), 0)
        assert r.neighbor_count == 0
        assert r.correction == pytest.approx(math.pi / 4)


# =====================================================================
# Global heading
# =====================================================================


class TestGlobalHeading:
    def test_ignores_distance(self):
        poses = (Pose2D(0.0, 0.0, 0.1), Pose2D(100.0, 0.0, 1.2), Pose2D(0.0, -300.0, -2.5))
        expected = math.atan2(
            sum(math.sin(p.heading) for p in poses),
            sum(math.cos(p.heading) for p in poses),
        )
        for radius in (0.5, 2.0, 1000.0):
            r = compute_heading_consensus(poses, 0, ConsensusParams(neighbor_radius=radius))
            assert r.global_heading == pytest.approx(expected)

    def test_wraps_across_pi(self):
        poses = (Pose2D(0.0, 0.0, math.pi - 0.1), Pose2D(0.0, 0.0, -math.pi + 0.1))
        r = compute_heading_consensus(poses, 0)
        assert abs(r.global_heading) == pytest.approx(math.pi)


# =====================================================================
# Bearing-to-centroid option
# =====================================================================


class TestBearingToCentroid:
    def test_uses_relative_offset(self):
        poses = (Pose2D(10.0, 10.0, 0.0), Pose2D(10.0, 11.0, 0.0))
        literal = compute_heading_consensus(poses, 0, ConsensusParams(neighbor_radius=2.0))
        bearing = compute_heading_consensus(
            poses, 0, ConsensusParams(neighbor_radius=2.0, use_bearing_to_centroid=True)
        )
        assert literal.target_heading == pytest.approx(math.atan2(11.0, 10.0))
        assert bearing.target_heading == pytest.approx(math.pi / 2)

    def test_no_neighbors_means_no_correction(self):
        poses = (Pose2D(10.0, 10.0, 0.4), Pose2D(50.0, 50.0, 0.0))
        r = compute_heading_consensus(poses, 0, ConsensusParams(use_bearing_to_centroid=True))
        assert r.correction == 0.0


# =====================================================================
# Engine
# =====================================================================


class TestEngine:
    def test_starts_with_no_correction(self):
        engine = HeadingConsensusEngine()
        assert engine.latest is NO_CORRECTION
        assert engine.correction == 0.0
        assert engine.run_count == 0

    def test_latest_value_wins(self):
        engine = HeadingConsensusEngine(ConsensusParams(neighbor_radius=2.0))
        engine.recompute(_three_agents(), 0)
        first = engine.correction
        engine.recompute((Pose2D(0.0, 0.0, 0.0), Pose2D(0.0, 1.0, 0.0), Pose2D(0.0, 1.0, 0.0)), 0)
        assert engine.correction != first
        assert engine.correction == pytest.approx(math.pi / 2)
        assert engine.run_count == 2

    def test_idempotent_for_identical_roster(self):
        engine = HeadingConsensusEngine(ConsensusParams(neighbor_radius=2.0))
        a = engine.recompute(_three_agents(), 0)
        b = engine.recompute(_three_agents(), 0)
        assert a == b
