"""Pydantic request/response models for the agent-reputation HTTP server.

Wire format uses camelCase keys (``agentId``, ``totalReviews``); snake_case
is accepted on input as well.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class RegisterAgentRequest(WireModel):
    """Request body for POST /api/agents/register."""

    agent_id: str
    wallet: str
    name: Optional[str] = None
    specialties: Optional[list[str]] = None


class RatingsModel(WireModel):
    """Per-dimension ratings submitted with a review."""

    reliability: float = Field(ge=0, le=100)
    quality: float = Field(ge=0, le=100)
    communication: float = Field(ge=0, le=100)
    overall: Optional[float] = Field(default=None, ge=0, le=100)


class SubmitReviewRequest(WireModel):
    """Request body for POST /api/agents/{id}/reviews."""

    ratings: RatingsModel
    reviewer_id: Optional[str] = None
    job_id: Optional[str] = None
    review: Optional[str] = None


class VerifySkillRequest(WireModel):
    """Request body for POST /api/skills/verify."""

    agent_id: str
    skill: str
    verifier_id: str
    proof: str = ""


class ReputationModel(WireModel):
    overall: int
    reliability: int
    quality: int
    communication: int
    total_reviews: int


class AgentModel(WireModel):
    id: str
    name: str
    wallet: str
    specialties: list[str] = Field(default_factory=list)
    registered_at: str
    jobs_completed: int = 0
    total_earnings: int = 0


class RegisterAgentResponse(WireModel):
    success: bool = True
    agent: AgentModel
    reputation: ReputationModel


class ReputationResponse(WireModel):
    """Response body for GET /api/agents/{id}/reputation."""

    agent_id: str
    reputation: ReputationModel
    trust_score: int


class SubmitReviewResponse(WireModel):
    success: bool = True
    reputation: ReputationModel


class GraphNodeModel(WireModel):
    id: str
    name: str
    reputation: int


class GraphEdgeModel(BaseModel):
    """Edge keyed by the reserved words ``from``/``to`` on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    rating: int

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class GraphModel(BaseModel):
    nodes: list[GraphNodeModel] = Field(default_factory=list)
    edges: list[GraphEdgeModel] = Field(default_factory=list)


class TrustGraphResponse(WireModel):
    """Response body for GET /api/agents/{id}/trust-graph."""

    agent_id: str
    depth: int
    graph: GraphModel
    network_trust_score: int


class VerifySkillResponse(WireModel):
    success: bool = True
    skill: str
    verifications: int


class SkillSummaryModel(WireModel):
    verifications: int
    verified_by: list[str] = Field(default_factory=list)


class SkillsResponse(WireModel):
    """Response body for GET /api/agents/{id}/skills."""

    agent_id: str
    skills: dict[str, SkillSummaryModel] = Field(default_factory=dict)


class SearchResultModel(AgentModel):
    reputation: ReputationModel
    trust_score: int


class SearchResponse(WireModel):
    """Response body for GET /api/agents/search."""

    count: int
    agents: list[SearchResultModel] = Field(default_factory=list)


class SkillAgentsResponse(WireModel):
    """Response body for GET /api/skills/{skill}/agents."""

    skill: str
    count: int
    agents: list[AgentModel] = Field(default_factory=list)


class LeaderboardEntryModel(WireModel):
    agent_id: str
    name: str
    wallet: str
    score: int
    total_reviews: int
    trust_score: int


class LeaderboardResponse(WireModel):
    """Response body for GET /api/leaderboard."""

    category: str
    leaderboard: list[LeaderboardEntryModel] = Field(default_factory=list)


class HealthResponse(WireModel):
    """Response body for GET /health."""

    status: str = "healthy"
    service: str = "agent-reputation"
    version: str = "0.1.0"
    agent_count: int = 0
    edge_count: int = 0


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str = ""


__all__ = [
    "AgentModel",
    "ErrorResponse",
    "GraphEdgeModel",
    "GraphModel",
    "GraphNodeModel",
    "HealthResponse",
    "LeaderboardEntryModel",
    "LeaderboardResponse",
    "RatingsModel",
    "RegisterAgentRequest",
    "RegisterAgentResponse",
    "ReputationModel",
    "ReputationResponse",
    "SearchResponse",
    "SearchResultModel",
    "SkillAgentsResponse",
    "SkillSummaryModel",
    "SkillsResponse",
    "SubmitReviewRequest",
    "SubmitReviewResponse",
    "TrustGraphResponse",
    "VerifySkillRequest",
    "VerifySkillResponse",
]
