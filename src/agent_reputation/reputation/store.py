"""ReputationStore — per-agent reputation maintained from reviews.

Each review is folded into the agent's current scores with an incremental
average weighted by ``total_reviews``. Only the latest rating and the
current aggregate take part in an update, so a run of extreme ratings moves
the score faster than a true running mean would.
"""
from __future__ import annotations

import logging
import threading

from agent_reputation.registry.agent_directory import AgentDirectory, AgentNotFoundError
from agent_reputation.reputation.policy import ReputationPolicy
from agent_reputation.reputation.score import (
    REVIEW_DIMENSIONS,
    ReputationScore,
    ReviewRatings,
    incremental_average,
    round_half_up,
)

logger = logging.getLogger(__name__)


class ReputationStore:
    """In-memory store of ReputationScore records keyed by agent_id.

    Parameters
    ----------
    directory:
        Agent directory consulted for existence checks.
    policy:
        Reputation policy. Defaults to the standard policy.
    """

    def __init__(
        self,
        directory: AgentDirectory,
        policy: ReputationPolicy | None = None,
    ) -> None:
        self._directory = directory
        self._policy = policy if policy is not None else ReputationPolicy()
        self._policy.validate_weights()
        self._scores: dict[str, ReputationScore] = {}
        self._lock = threading.Lock()

    @property
    def policy(self) -> ReputationPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def initialize(self, agent_id: str) -> ReputationScore:
        """Reset *agent_id* to a fresh neutral score and return a copy."""
        score = ReputationScore.neutral(self._policy.neutral_score)
        with self._lock:
            self._scores[agent_id] = score
        return score.copy()

    def restore(self, agent_id: str, score: ReputationScore) -> None:
        """Install *score* for *agent_id* verbatim (used by state loading)."""
        with self._lock:
            self._scores[agent_id] = score.copy()

    def submit_review(self, agent_id: str, ratings: ReviewRatings) -> ReputationScore:
        """Fold a review into the agent's reputation.

        Parameters
        ----------
        agent_id:
            The agent being reviewed.
        ratings:
            Per-dimension ratings for this review.

        Returns
        -------
        ReputationScore
            A copy of the updated score.

        Raises
        ------
        AgentNotFoundError
            If *agent_id* is not registered.
        """
        if not self._directory.exists(agent_id):
            raise AgentNotFoundError(agent_id)

        with self._lock:
            current = self._scores.get(agent_id)
            if current is None:
                current = ReputationScore.neutral(self._policy.neutral_score)
            total = current.total_reviews + 1

            updated = ReputationScore(total_reviews=total)
            for dim in REVIEW_DIMENSIONS:
                setattr(
                    updated,
                    dim.value,
                    incremental_average(
                        current.value_for(dim), ratings.value_for(dim), total
                    ),
                )
            updated.overall = self.weighted_overall(updated)
            self._scores[agent_id] = updated

        logger.debug(
            "Review #%d applied to %s: overall=%d", total, agent_id, updated.overall
        )
        return updated.copy()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, agent_id: str) -> ReputationScore:
        """Return a copy of the agent's reputation.

        A registered agent without a stored score yields a zeroed score.

        Raises
        ------
        AgentNotFoundError
            If *agent_id* is not registered.
        """
        if not self._directory.exists(agent_id):
            raise AgentNotFoundError(agent_id)
        with self._lock:
            score = self._scores.get(agent_id)
            return score.copy() if score is not None else ReputationScore.zero()

    def find(self, agent_id: str) -> ReputationScore | None:
        """Return a copy of the stored score, or None without existence checks."""
        with self._lock:
            score = self._scores.get(agent_id)
            return score.copy() if score is not None else None

    def trust_score(self, agent_id: str) -> int:
        """Return the derived trust score for *agent_id*.

        The trust score is ``overall`` plus a bonus for each review-count
        threshold the agent has strictly exceeded, capped at the policy
        maximum. Agents without a reputation record score 0.
        """
        score = self.find(agent_id)
        if score is None:
            return 0
        return self.trust_from(score)

    def trust_from(self, score: ReputationScore) -> int:
        trust = score.overall
        for threshold in self._policy.review_bonus_thresholds:
            if score.total_reviews > threshold:
                trust += self._policy.review_bonus
        return min(trust, self._policy.max_trust_score)

    def weighted_overall(self, score: ReputationScore) -> int:
        """Return the policy-weighted overall score of *score*'s dimensions."""
        weights = self._policy.dimension_weights
        return round_half_up(
            sum(score.value_for(dim) * weights.get(dim, 0.0) for dim in REVIEW_DIMENSIONS)
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)
