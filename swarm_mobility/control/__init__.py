"""
Swarm Rover — swarm_mobility/control/__init__.py
"""

from .liveness import LivenessReport, LivenessReporter
from .state_machine import INITIAL_STATE, MotionState, MotionStateMachine, TickOutcome
from .velocity import STOP_COMMAND, VelocityCalibration, VelocityCommand, VelocityEmitter

__all__ = [
    "LivenessReport",
    "LivenessReporter",
    "INITIAL_STATE",
    "MotionState",
    "MotionStateMachine",
    "TickOutcome",
    "STOP_COMMAND",
    "VelocityCalibration",
    "VelocityCommand",
    "VelocityEmitter",
]
