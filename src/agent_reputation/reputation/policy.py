"""ReputationPolicy — weights, starting score, and trust bonus tiers.

Sensible defaults are provided for all parameters. Operators normally use
the defaults; tests and experiments may override them.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from agent_reputation.reputation.score import ReputationCategory


class ReputationPolicy(BaseModel):
    """Configurable reputation policy.

    Parameters
    ----------
    neutral_score:
        Starting value for every score of a newly registered agent.
    dimension_weights:
        Fractional weight of each review dimension in ``overall``.
        Values must sum to 1.0.
    review_bonus_thresholds:
        Review counts that, once strictly exceeded, each add
        ``review_bonus`` to the trust score.
    review_bonus:
        Trust points granted per crossed threshold.
    max_trust_score:
        Ceiling for the trust score.
    """

    neutral_score: int = Field(default=50, ge=0, le=100)
    dimension_weights: dict[ReputationCategory, float] = Field(
        default_factory=lambda: {
            ReputationCategory.RELIABILITY: 0.4,
            ReputationCategory.QUALITY: 0.4,
            ReputationCategory.COMMUNICATION: 0.2,
        }
    )
    review_bonus_thresholds: list[int] = Field(default_factory=lambda: [10, 50])
    review_bonus: int = 5
    max_trust_score: int = 100

    def validate_weights(self) -> None:
        """Raise ValueError if dimension weights do not sum to 1.0."""
        if ReputationCategory.OVERALL in self.dimension_weights:
            raise ValueError("'overall' is derived and cannot carry a weight.")
        total = sum(self.dimension_weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(
                f"Dimension weights must sum to 1.0, got {total:.6f}"
            )
