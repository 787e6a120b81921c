"""SkillVerificationStore — append-only skill attestations per agent.

Verifications are not deduplicated: the same verifier attesting the same
skill twice counts twice.
"""
from __future__ import annotations

import datetime
import threading
from dataclasses import dataclass, field


@dataclass
class SkillVerification:
    """One attestation that an agent holds a skill."""

    verifier_id: str
    proof: str = ""
    verified_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    def to_dict(self) -> dict[str, object]:
        return {
            "verifier_id": self.verifier_id,
            "proof": self.proof,
            "verified_at": self.verified_at.isoformat(),
        }


@dataclass
class SkillSummary:
    """Aggregated view of one skill's verifications."""

    verification_count: int
    verified_by: list[str] = field(default_factory=list)


class SkillVerificationStore:
    """In-memory store mapping agent -> skill -> list of verifications."""

    def __init__(self) -> None:
        self._verifications: dict[str, dict[str, list[SkillVerification]]] = {}
        self._lock = threading.Lock()

    def verify(
        self,
        agent_id: str,
        skill: str,
        verifier_id: str,
        proof: str = "",
        verified_at: datetime.datetime | None = None,
    ) -> int:
        """Append a verification and return the skill's new count."""
        entry = SkillVerification(verifier_id=verifier_id, proof=proof)
        if verified_at is not None:
            entry.verified_at = verified_at
        with self._lock:
            entries = self._verifications.setdefault(agent_id, {}).setdefault(skill, [])
            entries.append(entry)
            return len(entries)

    def get_skills(self, agent_id: str) -> dict[str, SkillSummary]:
        """Return a summary per verified skill, in first-verified order."""
        with self._lock:
            skills = self._verifications.get(agent_id, {})
            return {
                skill: SkillSummary(
                    verification_count=len(entries),
                    verified_by=[e.verifier_id for e in entries],
                )
                for skill, entries in skills.items()
            }

    def get_verifications(self, agent_id: str, skill: str) -> list[SkillVerification]:
        with self._lock:
            return list(self._verifications.get(agent_id, {}).get(skill, []))

    def has_skill(self, agent_id: str, skill: str) -> bool:
        """Return True if *agent_id* has at least one verification for *skill*."""
        with self._lock:
            return bool(self._verifications.get(agent_id, {}).get(skill))

    def agents_with_skill(self, skill: str) -> list[str]:
        """Return ids of agents holding at least one verification for *skill*."""
        with self._lock:
            return [
                agent_id
                for agent_id, skills in self._verifications.items()
                if skills.get(skill)
            ]

    def agent_ids(self) -> list[str]:
        with self._lock:
            return list(self._verifications.keys())
