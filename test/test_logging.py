"""Tests for swarm_mobility.utils.logging and package metadata."""

from __future__ import annotations

import logging

from swarm_mobility import get_package_info
from swarm_mobility.exceptions import UnknownAgentError
from swarm_mobility.utils.logging import (
    LoggerAdapter,
    RateLimitedLogger,
    format_event,
    get_logger_adapter,
    log_event,
)


class _RosStyleLogger:
    def __init__(self):
        self.lines = []

    def debug(self, msg):
        self.lines.append(("debug", msg))

    def info(self, msg):
        self.lines.append(("info", msg))

    def warn(self, msg):
        self.lines.append(("warn", msg))

    def error(self, msg):
        self.lines.append(("error", msg))


class _FakeNode:
    def __init__(self):
        self.logger = _RosStyleLogger()

    def get_logger(self):
        return self.logger


class TestFormatting:
    def test_flat_details(self):
        line = format_event("watchdog_timeout", level="warn", component="mobility", details={"expiry_count": 1})
        assert line == "[WARN] [mobility] watchdog_timeout expiry_count=1"

    def test_nested_details_as_json(self):
        line = format_event("shutdown", details={"watchdog": {"kick_count": 3}})
        assert line == '[INFO] shutdown details={"watchdog":{"kick_count":3}}'


class TestAdapters:
    def test_node_logger_used(self):
        node = _FakeNode()
        adapter = get_logger_adapter(node)
        log_event(adapter, "mode_changed", level="WARN", details={"mode": 2})
        assert node.logger.lines == [("warn", "[WARN] mode_changed mode=2")]
        assert not adapter.is_std_logger

    def test_adapter_passthrough(self):
        adapter = LoggerAdapter(target=logging.getLogger("swarm_mobility.test"))
        assert get_logger_adapter(adapter) is adapter

    def test_rate_limited_per_key(self):
        ros = _RosStyleLogger()
        rl = RateLimitedLogger(LoggerAdapter(target=ros), period_s=60.0)
        assert rl.warn("a", "first")
        assert not rl.warn("a", "again")
        assert rl.warn("b", "other key")
        assert [m for _, m in ros.lines] == ["first", "other key"]

    def test_quiet_logger_installs_one_handler(self, quiet_logger, make_context):
        make_context()
        std = logging.getLogger("swarm_mobility.test")
        assert quiet_logger.name == "swarm_mobility.test"
        assert sum(isinstance(h, logging.NullHandler) for h in std.handlers) == 1

    def test_rate_limit_follows_injected_clock(self):
        now = [50.0]
        ros = _RosStyleLogger()
        rl = RateLimitedLogger(LoggerAdapter(target=ros), period_s=5.0, clock=lambda: now[0])
        assert rl.warn("a", "first")
        now[0] += 4.0
        assert not rl.warn("a", "too soon")
        now[0] += 1.0
        assert rl.warn("a", "after period")
        assert [m for _, m in ros.lines] == ["first", "after period"]


class TestErrorsAndMetadata:
    def test_unknown_agent_str(self):
        e = UnknownAgentError("zeus", roster=("ajax", "hector"))
        assert str(e) == "Unknown agent 'zeus' [identity=zeus roster=ajax,hector]"
        assert e.to_dict()["type"] == "UnknownAgentError"

    def test_package_info(self):
        info = get_package_info()
        assert info["package"] == "swarm_mobility"
        assert info["node_name_suffix"] == "_MOBILITY"
        assert info["defaults"]["autonomous_mode_codes"] == [2, 3]
