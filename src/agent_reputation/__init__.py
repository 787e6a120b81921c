"""agent-reputation — In-memory agent reputation and trust-graph engine.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import agent_reputation
>>> agent_reputation.__version__
'0.1.0'

Quick start
-----------
::

    from agent_reputation import ReputationEngine, ReviewRatings

    engine = ReputationEngine()
    engine.register_agent("agent-a", wallet="0xA", name="Alpha")
    engine.register_agent("agent-b", wallet="0xB", name="Beta")
    engine.submit_review(
        "agent-a",
        ReviewRatings(reliability=90, quality=85, communication=70),
        reviewer_id="agent-b",
    )
    print(engine.leaderboard("quality", limit=5))
"""
from __future__ import annotations

__version__: str = "0.1.0"

from agent_reputation.engine import ReputationEngine

# ------------------------------------------------------------------
# Agent directory
# ------------------------------------------------------------------
from agent_reputation.registry.agent_directory import (
    AgentDirectory,
    AgentNotFoundError,
    AgentRecord,
    AgentValidationError,
)

# ------------------------------------------------------------------
# Reputation
# ------------------------------------------------------------------
from agent_reputation.reputation.policy import ReputationPolicy
from agent_reputation.reputation.score import (
    ReputationCategory,
    ReputationScore,
    ReviewRatings,
)
from agent_reputation.reputation.store import ReputationStore

# ------------------------------------------------------------------
# Trust graph
# ------------------------------------------------------------------
from agent_reputation.graph.store import TrustEdge, TrustGraphStore
from agent_reputation.graph.traversal import (
    GraphEdge,
    GraphNode,
    TrustGraph,
    build_trust_graph,
    network_trust_score,
)

# ------------------------------------------------------------------
# Skills and ranking
# ------------------------------------------------------------------
from agent_reputation.skills.verification import (
    SkillSummary,
    SkillVerification,
    SkillVerificationStore,
)
from agent_reputation.query.ranking import (
    LeaderboardEntry,
    SearchResult,
    SearchResults,
    leaderboard,
    search,
)

__all__ = [
    # version
    "__version__",
    "ReputationEngine",
    # directory
    "AgentDirectory",
    "AgentNotFoundError",
    "AgentRecord",
    "AgentValidationError",
    # reputation
    "ReputationCategory",
    "ReputationPolicy",
    "ReputationScore",
    "ReputationStore",
    "ReviewRatings",
    # graph
    "GraphEdge",
    "GraphNode",
    "TrustEdge",
    "TrustGraph",
    "TrustGraphStore",
    "build_trust_graph",
    "network_trust_score",
    # skills
    "SkillSummary",
    "SkillVerification",
    "SkillVerificationStore",
    # ranking
    "LeaderboardEntry",
    "SearchResult",
    "SearchResults",
    "leaderboard",
    "search",
]
