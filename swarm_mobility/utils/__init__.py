"""
Swarm Rover — swarm_mobility/utils/__init__.py
"""

from .logging import LoggerAdapter, RateLimitedLogger, format_event, get_logger_adapter, log_event

__all__ = [
    "LoggerAdapter",
    "RateLimitedLogger",
    "format_event",
    "get_logger_adapter",
    "log_event",
]
