"""Search and ranking queries."""
from __future__ import annotations

from agent_reputation.query.ranking import (
    LeaderboardEntry,
    SearchResult,
    SearchResults,
    agents_with_skill,
    leaderboard,
    search,
)

__all__ = [
    "LeaderboardEntry",
    "SearchResult",
    "SearchResults",
    "agents_with_skill",
    "leaderboard",
    "search",
]
