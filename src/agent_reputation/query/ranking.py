"""Ranking queries over the agent population: search and leaderboard.

Both queries read the stores and recompute everything on demand. Sorting
is stable, so agents with equal scores keep registration order.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from agent_reputation.registry.agent_directory import AgentDirectory, AgentRecord
from agent_reputation.reputation.score import ReputationCategory, ReputationScore
from agent_reputation.reputation.store import ReputationStore
from agent_reputation.skills.verification import SkillVerificationStore


@dataclass
class SearchResult:
    """One agent matched by :func:`search`."""

    agent: AgentRecord
    reputation: ReputationScore
    trust_score: int


@dataclass
class SearchResults:
    """Search matches.

    ``total`` counts every match; ``agents`` holds at most ``limit`` of them.
    """

    total: int
    agents: list[SearchResult] = field(default_factory=list)


@dataclass
class LeaderboardEntry:
    """A single leaderboard row."""

    agent_id: str
    name: str
    wallet: str
    score: int
    total_reviews: int
    trust_score: int

    def to_dict(self) -> dict[str, object]:
        return {
            "agent_id": self.agent_id,
            "name": self.name,
            "wallet": self.wallet,
            "score": self.score,
            "total_reviews": self.total_reviews,
            "trust_score": self.trust_score,
        }


def _scored_agents(
    directory: AgentDirectory, reputation: ReputationStore
) -> list[tuple[AgentRecord, ReputationScore]]:
    pairs: list[tuple[AgentRecord, ReputationScore]] = []
    for record in directory.list_all():
        score = reputation.find(record.agent_id)
        pairs.append((record, score if score is not None else ReputationScore.zero()))
    return pairs


def search(
    directory: AgentDirectory,
    reputation: ReputationStore,
    skills: SkillVerificationStore,
    min_reputation: int = 0,
    required_skills: list[str] | None = None,
    limit: int | None = 20,
) -> SearchResults:
    """Find agents by minimum overall reputation and verified skills.

    Parameters
    ----------
    min_reputation:
        Agents with ``overall`` below this are excluded.
    required_skills:
        If given, agents must hold at least one verification for every
        listed skill.
    limit:
        Maximum number of agents returned. ``None`` returns all matches.

    Returns
    -------
    SearchResults
        Matches sorted by descending ``overall``.
    """
    wanted = [s for s in (required_skills or []) if s]
    matches: list[SearchResult] = []

    for record, score in _scored_agents(directory, reputation):
        if score.overall < min_reputation:
            continue
        if wanted and not all(skills.has_skill(record.agent_id, s) for s in wanted):
            continue
        matches.append(
            SearchResult(
                agent=record,
                reputation=score,
                trust_score=reputation.trust_from(score),
            )
        )

    matches.sort(key=lambda m: m.reputation.overall, reverse=True)
    shown = matches if limit is None else matches[: max(limit, 0)]
    return SearchResults(total=len(matches), agents=shown)


def leaderboard(
    directory: AgentDirectory,
    reputation: ReputationStore,
    category: ReputationCategory | str | None = ReputationCategory.OVERALL,
    limit: int | None = 10,
) -> list[LeaderboardEntry]:
    """Rank all agents by one reputation score.

    An unrecognised or missing *category* ranks by ``overall``.
    """
    if not isinstance(category, ReputationCategory):
        category = ReputationCategory.parse(category)

    rankings = [
        LeaderboardEntry(
            agent_id=record.agent_id,
            name=record.name,
            wallet=record.wallet,
            score=score.value_for(category),
            total_reviews=score.total_reviews,
            trust_score=reputation.trust_from(score),
        )
        for record, score in _scored_agents(directory, reputation)
    ]
    rankings.sort(key=lambda entry: entry.score, reverse=True)
    return rankings if limit is None else rankings[: max(limit, 0)]


def agents_with_skill(
    directory: AgentDirectory,
    skills: SkillVerificationStore,
    skill: str,
) -> list[AgentRecord]:
    """Return registered agents with at least one verification for *skill*."""
    return [
        record
        for record in (directory.find(agent_id) for agent_id in skills.agents_with_skill(skill))
        if record is not None
    ]
