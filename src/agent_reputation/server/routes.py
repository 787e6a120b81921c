"""Route handler functions for the agent-reputation HTTP server.

Each function accepts parsed request data and returns a tuple of
(status_code, response_dict). The HTTP handler in app.py calls these
functions and serializes the results to JSON.
"""
from __future__ import annotations

from pydantic import ValidationError

from agent_reputation import __version__
from agent_reputation.engine import ReputationEngine
from agent_reputation.registry.agent_directory import (
    AgentNotFoundError,
    AgentRecord,
    AgentValidationError,
)
from agent_reputation.reputation.score import ReputationCategory, ReputationScore, ReviewRatings
from agent_reputation.server.models import (
    AgentModel,
    ErrorResponse,
    GraphEdgeModel,
    GraphModel,
    GraphNodeModel,
    HealthResponse,
    LeaderboardEntryModel,
    LeaderboardResponse,
    RegisterAgentRequest,
    RegisterAgentResponse,
    ReputationModel,
    ReputationResponse,
    SearchResponse,
    SearchResultModel,
    SkillAgentsResponse,
    SkillsResponse,
    SkillSummaryModel,
    SubmitReviewRequest,
    SubmitReviewResponse,
    TrustGraphResponse,
    VerifySkillRequest,
    VerifySkillResponse,
)

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_LEADERBOARD_LIMIT = 10
DEFAULT_GRAPH_DEPTH = 1

# The one engine instance served by this process
_engine: ReputationEngine = ReputationEngine()


def reset_state() -> None:
    """Reset all shared state."""
    global _engine
    _engine = ReputationEngine()


def get_engine() -> ReputationEngine:
    """Return the engine currently backing the routes."""
    return _engine


def set_engine(engine: ReputationEngine) -> None:
    """Serve *engine* instead of the default in-memory instance."""
    global _engine
    _engine = engine


# ------------------------------------------------------------------
# Conversion helpers
# ------------------------------------------------------------------


def _validation_error(detail: object) -> tuple[int, dict[str, object]]:
    return 422, ErrorResponse(error="Validation error", detail=str(detail)).model_dump()


def _not_found(exc: AgentNotFoundError) -> tuple[int, dict[str, object]]:
    return 404, ErrorResponse(
        error="Agent not found", detail=f"Agent {exc.agent_id!r} is not registered."
    ).model_dump()


def _agent_model(record: AgentRecord) -> AgentModel:
    return AgentModel(
        id=record.agent_id,
        name=record.name,
        wallet=record.wallet,
        specialties=list(record.specialties),
        registered_at=record.registered_at.isoformat(),
        jobs_completed=record.jobs_completed,
        total_earnings=record.total_earnings,
    )


def _reputation_model(score: ReputationScore) -> ReputationModel:
    return ReputationModel(**score.to_dict())


def _parse_int(
    value: str | None, name: str, default: int
) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise AgentValidationError(f"{name} must be an integer, got {value!r}.") from None


# ------------------------------------------------------------------
# Agents
# ------------------------------------------------------------------


def handle_register(body: dict[str, object]) -> tuple[int, dict[str, object]]:
    """Handle POST /api/agents/register.

    Parameters
    ----------
    body:
        Parsed JSON request body.

    Returns
    -------
    tuple[int, dict[str, object]]
        HTTP status code and response dictionary.
    """
    try:
        request = RegisterAgentRequest.model_validate(body)
    except ValidationError as exc:
        return _validation_error(exc)

    try:
        record, score = _engine.register_agent(
            agent_id=request.agent_id,
            wallet=request.wallet,
            name=request.name,
            specialties=request.specialties,
        )
    except AgentValidationError as exc:
        return _validation_error(exc)

    response = RegisterAgentResponse(
        agent=_agent_model(record), reputation=_reputation_model(score)
    )
    return 200, response.to_wire()


def handle_get_reputation(agent_id: str) -> tuple[int, dict[str, object]]:
    """Handle GET /api/agents/{id}/reputation."""
    try:
        score = _engine.get_reputation(agent_id)
    except AgentNotFoundError as exc:
        return _not_found(exc)

    response = ReputationResponse(
        agent_id=agent_id,
        reputation=_reputation_model(score),
        trust_score=_engine.trust_score(agent_id),
    )
    return 200, response.to_wire()


def handle_submit_review(
    agent_id: str, body: dict[str, object]
) -> tuple[int, dict[str, object]]:
    """Handle POST /api/agents/{id}/reviews.

    An unregistered agent yields 404 before the body is validated.
    """
    if not _engine.agent_exists(agent_id):
        return _not_found(AgentNotFoundError(agent_id))

    try:
        request = SubmitReviewRequest.model_validate(body)
    except ValidationError as exc:
        return _validation_error(exc)

    ratings = ReviewRatings(
        reliability=request.ratings.reliability,
        quality=request.ratings.quality,
        communication=request.ratings.communication,
        overall=request.ratings.overall,
    )
    try:
        updated = _engine.submit_review(agent_id, ratings, reviewer_id=request.reviewer_id)
    except AgentNotFoundError as exc:
        return _not_found(exc)

    return 200, SubmitReviewResponse(reputation=_reputation_model(updated)).to_wire()


def handle_trust_graph(
    agent_id: str, depth: str | None = None
) -> tuple[int, dict[str, object]]:
    """Handle GET /api/agents/{id}/trust-graph?depth=N.

    Unregistered start agents are not an error; their graph simply has no
    start node.
    """
    try:
        parsed_depth = _parse_int(depth, "depth", DEFAULT_GRAPH_DEPTH)
        graph = _engine.trust_graph(agent_id, parsed_depth)
    except AgentValidationError as exc:
        return _validation_error(exc)

    response = TrustGraphResponse(
        agent_id=agent_id,
        depth=parsed_depth,
        graph=GraphModel(
            nodes=[
                GraphNodeModel(id=n.id, name=n.name, reputation=n.reputation)
                for n in graph.nodes
            ],
            edges=[
                GraphEdgeModel(source=e.source, target=e.target, rating=e.rating)
                for e in graph.edges
            ],
        ),
        network_trust_score=_engine.network_trust_score(graph.nodes),
    )
    return 200, response.to_wire()


def handle_search(
    min_reputation: str | None = None,
    skills: str | None = None,
    limit: str | None = None,
) -> tuple[int, dict[str, object]]:
    """Handle GET /api/agents/search?minReputation=&skills=a,b&limit=."""
    try:
        min_rep = _parse_int(min_reputation, "minReputation", 0)
        max_results = _parse_int(limit, "limit", DEFAULT_SEARCH_LIMIT)
    except AgentValidationError as exc:
        return _validation_error(exc)

    required = [s.strip() for s in skills.split(",") if s.strip()] if skills else None
    results = _engine.search(
        min_reputation=min_rep, required_skills=required, limit=max_results
    )

    agents = [
        SearchResultModel(
            **_agent_model(r.agent).model_dump(),
            reputation=_reputation_model(r.reputation),
            trust_score=r.trust_score,
        )
        for r in results.agents
    ]
    return 200, SearchResponse(count=results.total, agents=agents).to_wire()


def handle_leaderboard(
    category: str | None = None, limit: str | None = None
) -> tuple[int, dict[str, object]]:
    """Handle GET /api/leaderboard?category=&limit=.

    Unknown categories rank by ``overall``; the response names the category
    actually used.
    """
    try:
        max_results = _parse_int(limit, "limit", DEFAULT_LEADERBOARD_LIMIT)
    except AgentValidationError as exc:
        return _validation_error(exc)

    resolved = ReputationCategory.parse(category)
    entries = _engine.leaderboard(category=resolved, limit=max_results)
    response = LeaderboardResponse(
        category=resolved.value,
        leaderboard=[LeaderboardEntryModel(**e.to_dict()) for e in entries],
    )
    return 200, response.to_wire()


# ------------------------------------------------------------------
# Skills
# ------------------------------------------------------------------


def handle_verify_skill(body: dict[str, object]) -> tuple[int, dict[str, object]]:
    """Handle POST /api/skills/verify."""
    try:
        request = VerifySkillRequest.model_validate(body)
    except ValidationError as exc:
        return _validation_error(exc)

    if not request.agent_id.strip() or not request.skill.strip():
        return _validation_error("agentId and skill must not be empty.")

    count = _engine.verify_skill(
        request.agent_id, request.skill, request.verifier_id, request.proof
    )
    return 200, VerifySkillResponse(skill=request.skill, verifications=count).to_wire()


def handle_get_skills(agent_id: str) -> tuple[int, dict[str, object]]:
    """Handle GET /api/agents/{id}/skills."""
    summaries = _engine.get_skills(agent_id)
    response = SkillsResponse(
        agent_id=agent_id,
        skills={
            skill: SkillSummaryModel(
                verifications=s.verification_count, verified_by=list(s.verified_by)
            )
            for skill, s in summaries.items()
        },
    )
    return 200, response.to_wire()


def handle_skill_agents(skill: str) -> tuple[int, dict[str, object]]:
    """Handle GET /api/skills/{skill}/agents."""
    records = _engine.agents_with_skill(skill)
    response = SkillAgentsResponse(
        skill=skill,
        count=len(records),
        agents=[_agent_model(r) for r in records],
    )
    return 200, response.to_wire()


# ------------------------------------------------------------------
# Health
# ------------------------------------------------------------------


def handle_health() -> tuple[int, dict[str, object]]:
    """Handle GET /health."""
    stats = _engine.stats()
    response = HealthResponse(
        version=__version__,
        agent_count=stats["agent_count"],
        edge_count=stats["edge_count"],
    )
    return 200, response.to_wire()


__all__ = [
    "get_engine",
    "handle_get_reputation",
    "handle_get_skills",
    "handle_health",
    "handle_leaderboard",
    "handle_register",
    "handle_search",
    "handle_skill_agents",
    "handle_submit_review",
    "handle_trust_graph",
    "handle_verify_skill",
    "reset_state",
    "set_engine",
]
