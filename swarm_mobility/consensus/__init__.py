"""
Swarm Rover — swarm_mobility/consensus/__init__.py
"""

from .heading_consensus import (
    NO_CORRECTION,
    ConsensusParams,
    ConsensusResult,
    HeadingConsensusEngine,
    compute_heading_consensus,
)

__all__ = [
    "NO_CORRECTION",
    "ConsensusParams",
    "ConsensusResult",
    "HeadingConsensusEngine",
    "compute_heading_consensus",
]
