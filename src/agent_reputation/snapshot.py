"""Pydantic models for engine state snapshots.

A snapshot is the JSON document produced by
:meth:`ReputationEngine.export_state`. Loading validates the whole document
through these models before any store is touched.
"""
from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReputationSnapshot(BaseModel):
    overall: int = Field(ge=0, le=100)
    reliability: int = Field(ge=0, le=100)
    quality: int = Field(ge=0, le=100)
    communication: int = Field(ge=0, le=100)
    total_reviews: int = Field(ge=0)


class AgentSnapshot(BaseModel):
    agent_id: str = Field(min_length=1)
    wallet: str = Field(min_length=1)
    name: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    registered_at: Optional[datetime.datetime] = None
    jobs_completed: int = 0
    total_earnings: int = 0
    reputation: Optional[ReputationSnapshot] = None


class EdgeSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    rating: int
    timestamp: Optional[datetime.datetime] = None


class VerificationSnapshot(BaseModel):
    verifier_id: str
    proof: str = ""
    verified_at: Optional[datetime.datetime] = None


class EngineSnapshot(BaseModel):
    """Top-level snapshot document."""

    agents: list[AgentSnapshot] = Field(default_factory=list)
    edges: list[EdgeSnapshot] = Field(default_factory=list)
    skills: dict[str, dict[str, list[VerificationSnapshot]]] = Field(default_factory=dict)
