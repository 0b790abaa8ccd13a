"""Tests for swarm_mobility.control.liveness."""

from __future__ import annotations

from swarm_mobility.control.liveness import LivenessReporter


class TestLivenessReporter:
    def test_first_tick_announces(self):
        rep = LivenessReporter("hector")
        report = rep.tick()
        assert report.status == "online"
        assert report.announcement == "I hector"
        assert rep.announced

    def test_announcement_is_one_shot(self):
        rep = LivenessReporter("hector")
        reports = [rep.tick() for _ in range(4)]
        assert [r.announcement for r in reports] == ["I hector", None, None, None]
        assert all(r.status == "online" for r in reports)
        assert rep.beat_count == 4
