#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/utils/logging.py
---------------------------------------------
Lightweight logging helpers for `swarm_mobility`.

Purpose
-------
Let the ROS-free core log consistently whether it runs:
- inside the ROS 2 node (`rclpy` node logger available), or
- in plain Python (unit tests, tools) through stdlib `logging`

Typical usage
-------------
from swarm_mobility.utils.logging import get_logger_adapter, log_event

logger = get_logger_adapter(self)   # self can be a ROS 2 node
log_event(logger, "mode_changed", component="mobility", details={"mode": 2})
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


_LEVEL_DEBUG = "DEBUG"
_LEVEL_INFO = "INFO"
_LEVEL_WARN = "WARN"
_LEVEL_ERROR = "ERROR"

DEFAULT_LOGGER_NAME = "swarm_mobility"


def _safe_json(payload: Dict[str, Any]) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(payload)


# =============================================================================
# Stdlib logger setup
# =============================================================================
def _ensure_std_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Return a configured stdlib logger (idempotent).
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


# =============================================================================
# Logger adapter (ROS 2 logger or stdlib logger)
# =============================================================================
@dataclass
class LoggerAdapter:
    """
    Hides whether the underlying logger is an rclpy logger or a stdlib
    `logging.Logger`. Methods follow the ROS logger style:
    debug(), info(), warn(), error().
    """
    target: Any = None
    name: str = DEFAULT_LOGGER_NAME

    def __post_init__(self) -> None:
        if self.target is None:
            self.target = _ensure_std_logger(self.name)

    @property
    def is_std_logger(self) -> bool:
        return isinstance(self.target, logging.Logger)

    def _emit(self, level: str, msg: Any) -> None:
        text = str(msg)

        if self.is_std_logger:
            if level == _LEVEL_DEBUG:
                self.target.debug(text)
            elif level == _LEVEL_INFO:
                self.target.info(text)
            elif level == _LEVEL_WARN:
                self.target.warning(text)
            else:
                self.target.error(text)
            return

        # rclpy RcutilsLogger: warn() is the canonical spelling
        if level == _LEVEL_DEBUG:
            self.target.debug(text)
        elif level == _LEVEL_INFO:
            self.target.info(text)
        elif level == _LEVEL_WARN:
            self.target.warn(text)
        else:
            self.target.error(text)

    def debug(self, msg: Any) -> None:
        self._emit(_LEVEL_DEBUG, msg)

    def info(self, msg: Any) -> None:
        self._emit(_LEVEL_INFO, msg)

    def warn(self, msg: Any) -> None:
        self._emit(_LEVEL_WARN, msg)

    def error(self, msg: Any) -> None:
        self._emit(_LEVEL_ERROR, msg)


def get_logger_adapter(source: Any = None, *, name: str = DEFAULT_LOGGER_NAME) -> LoggerAdapter:
    """
    Create a LoggerAdapter from a ROS 2 node, a logger, or None (stdlib).
    """
    if source is None:
        return LoggerAdapter(target=_ensure_std_logger(name), name=name)
    if isinstance(source, LoggerAdapter):
        return source
    if hasattr(source, "get_logger") and callable(source.get_logger):
        return LoggerAdapter(target=source.get_logger(), name=name)
    return LoggerAdapter(target=source, name=name)


# =============================================================================
# Structured logging helpers
# =============================================================================
def format_kv(**kwargs: Any) -> str:
    """
    format_kv(rover="ajax", mode=2) -> "rover=ajax mode=2"
    """
    return " ".join(f"{k}={v}" for k, v in kwargs.items())


def format_event(
    event: str,
    *,
    level: str = _LEVEL_INFO,
    component: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Format a standardized event log line.

    Example output:
      [WARN] [mobility] watchdog_timeout silent_for_s=10.000 expiry_count=1
    """
    comp = f"[{component}] " if component else ""
    base = f"[{str(level).upper()}] {comp}{event}"
    if not details:
        return base
    if all(not isinstance(v, (dict, list, tuple)) for v in details.values()):
        return f"{base} {format_kv(**details)}"
    return f"{base} details={_safe_json(details)}"


def log_event(
    logger: LoggerAdapter,
    event: str,
    *,
    level: str = _LEVEL_INFO,
    component: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    msg = format_event(event, level=level, component=component, details=details)
    lvl = str(level).upper()
    if lvl == _LEVEL_DEBUG:
        logger.debug(msg)
    elif lvl in (_LEVEL_WARN, "WARNING"):
        logger.warn(msg)
    elif lvl == _LEVEL_ERROR:
        logger.error(msg)
    else:
        logger.info(msg)


# =============================================================================
# Rate-limited logging helper
# =============================================================================
@dataclass
class RateLimitedLogger:
    """
    Per-key rate limiter for repeated warnings caused by inbound traffic
    (e.g. a foreign rover broadcasting on the shared pose topic at 10 Hz).

    rl = RateLimitedLogger(logger, period_s=5.0)   # clock=... for tests
    rl.warn("unknown_agent:zeus", "Ignoring pose from unknown agent zeus")
    """
    logger: LoggerAdapter
    period_s: float = 1.0
    clock: Callable[[], float] = time.monotonic
    _last_emit_mono: Dict[str, float] = field(default_factory=dict)

    def _can_emit(self, key: str) -> bool:
        now = float(self.clock())
        last = self._last_emit_mono.get(str(key))
        if last is None or (now - last) >= max(0.0, float(self.period_s)):
            self._last_emit_mono[str(key)] = now
            return True
        return False

    def info(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.info(msg)
            return True
        return False

    def warn(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.warn(msg)
            return True
        return False


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "LoggerAdapter",
    "RateLimitedLogger",
    "get_logger_adapter",
    "format_kv",
    "format_event",
    "log_event",
]
