"""Unit tests for agent_reputation.skills.verification."""
from __future__ import annotations

import pytest

from agent_reputation.skills.verification import SkillVerificationStore


@pytest.fixture()
def store() -> SkillVerificationStore:
    return SkillVerificationStore()


class TestVerify:
    def test_returns_running_count(self, store: SkillVerificationStore) -> None:
        assert store.verify("a", "solidity", "v1") == 1
        assert store.verify("a", "solidity", "v2") == 2

    def test_repeat_verifier_counted_twice(self, store: SkillVerificationStore) -> None:
        store.verify("a", "solidity", "v1", "proof-1")
        store.verify("a", "solidity", "v1", "proof-2")
        summary = store.get_skills("a")["solidity"]
        assert summary.verification_count == 2
        assert summary.verified_by == ["v1", "v1"]

    def test_proof_is_kept(self, store: SkillVerificationStore) -> None:
        store.verify("a", "rust", "v1", "ipfs://cid")
        [entry] = store.get_verifications("a", "rust")
        assert entry.proof == "ipfs://cid"
        assert entry.to_dict()["verifier_id"] == "v1"


class TestGetSkills:
    def test_unknown_agent_has_no_skills(self, store: SkillVerificationStore) -> None:
        assert store.get_skills("ghost") == {}

    def test_skills_in_first_verified_order(self, store: SkillVerificationStore) -> None:
        store.verify("a", "python", "v1")
        store.verify("a", "audit", "v2")
        store.verify("a", "python", "v3")
        assert list(store.get_skills("a")) == ["python", "audit"]

    def test_has_skill(self, store: SkillVerificationStore) -> None:
        store.verify("a", "python", "v1")
        assert store.has_skill("a", "python") is True
        assert store.has_skill("a", "rust") is False
        assert store.has_skill("b", "python") is False


class TestAgentsWithSkill:
    def test_lists_holders(self, store: SkillVerificationStore) -> None:
        store.verify("a", "python", "v1")
        store.verify("b", "rust", "v1")
        store.verify("c", "python", "v2")
        assert store.agents_with_skill("python") == ["a", "c"]
        assert store.agents_with_skill("go") == []
