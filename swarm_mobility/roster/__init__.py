"""
Swarm Rover — swarm_mobility/roster/__init__.py
"""

from .pose_roster import PoseRoster, RosterConfig

__all__ = ["PoseRoster", "RosterConfig"]
