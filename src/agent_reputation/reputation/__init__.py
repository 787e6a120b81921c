"""Multi-dimensional agent reputation.

Reviews update reliability, quality, and communication; ``overall`` is a
weighted combination of the three and feeds the derived trust score.
"""
from __future__ import annotations

from agent_reputation.reputation.policy import ReputationPolicy
from agent_reputation.reputation.score import (
    ReputationCategory,
    ReputationScore,
    ReviewRatings,
    incremental_average,
    round_half_up,
)
from agent_reputation.reputation.store import ReputationStore

__all__ = [
    "ReputationCategory",
    "ReputationPolicy",
    "ReputationScore",
    "ReputationStore",
    "ReviewRatings",
    "incremental_average",
    "round_half_up",
]
