"""ReputationScore and the arithmetic used to maintain it.

Every agent carries four integer scores on a 0 – 100 scale. Three are
dimensions updated directly from reviews; ``overall`` is always derived
from them by a fixed weighting.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ReputationCategory(str, Enum):
    """Named reputation scores an agent can be ranked by."""

    OVERALL = "overall"
    RELIABILITY = "reliability"
    QUALITY = "quality"
    COMMUNICATION = "communication"

    @classmethod
    def parse(cls, value: str | None) -> ReputationCategory:
        """Return the category named *value*, or OVERALL if unrecognised."""
        if value is None:
            return cls.OVERALL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OVERALL


# Dimensions folded in by each review, in update order.
REVIEW_DIMENSIONS: tuple[ReputationCategory, ...] = (
    ReputationCategory.RELIABILITY,
    ReputationCategory.QUALITY,
    ReputationCategory.COMMUNICATION,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def incremental_average(current: int, new_value: float, total: int) -> int:
    """Fold *new_value* into *current*, treating *current* as the mean of
    ``total - 1`` prior observations.
    """
    return round_half_up(((current * (total - 1)) + new_value) / total)


@dataclass
class ReviewRatings:
    """Ratings submitted with a single review.

    ``overall`` is optional; when non-zero it is used as the trust edge
    rating instead of the recomputed overall score.
    """

    reliability: float
    quality: float
    communication: float
    overall: float | None = None

    def value_for(self, category: ReputationCategory) -> float:
        return float(getattr(self, category.value))


@dataclass
class ReputationScore:
    """Current reputation for one agent.

    Parameters
    ----------
    overall:
        Weighted combination of the three dimensions.
    reliability, quality, communication:
        Per-dimension scores.
    total_reviews:
        Number of accepted reviews; the weight denominator for updates.
    """

    overall: int = 50
    reliability: int = 50
    quality: int = 50
    communication: int = 50
    total_reviews: int = 0

    @classmethod
    def neutral(cls, midpoint: int = 50) -> ReputationScore:
        return cls(
            overall=midpoint,
            reliability=midpoint,
            quality=midpoint,
            communication=midpoint,
            total_reviews=0,
        )

    @classmethod
    def zero(cls) -> ReputationScore:
        return cls.neutral(0)

    def value_for(self, category: ReputationCategory) -> int:
        """Return the score for *category*."""
        return int(getattr(self, category.value))

    def copy(self) -> ReputationScore:
        return ReputationScore(**self.to_dict())  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, int]:
        return {
            "overall": self.overall,
            "reliability": self.reliability,
            "quality": self.quality,
            "communication": self.communication,
            "total_reviews": self.total_reviews,
        }
