"""Skill verification attestations."""
from __future__ import annotations

from agent_reputation.skills.verification import (
    SkillSummary,
    SkillVerification,
    SkillVerificationStore,
)

__all__ = ["SkillSummary", "SkillVerification", "SkillVerificationStore"]
