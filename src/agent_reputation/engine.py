"""ReputationEngine — the service object that owns every store.

The engine is the single point of entry for callers (HTTP routes, the CLI,
library users). It holds one AgentDirectory, ReputationStore,
TrustGraphStore, and SkillVerificationStore, and serializes every public
operation on one re-entrant lock. Registration (directory + reputation) and
review submission (reputation + trust edge) are therefore atomic with
respect to each other.
"""
from __future__ import annotations

import logging
import threading

from agent_reputation.graph.store import TrustGraphStore
from agent_reputation.graph.traversal import (
    GraphNode,
    TrustGraph,
    build_trust_graph,
    network_trust_score,
)
from agent_reputation.query.ranking import (
    LeaderboardEntry,
    SearchResults,
    agents_with_skill,
    leaderboard,
    search,
)
from agent_reputation.registry.agent_directory import AgentDirectory, AgentRecord
from agent_reputation.reputation.policy import ReputationPolicy
from agent_reputation.reputation.score import (
    ReputationCategory,
    ReputationScore,
    ReviewRatings,
)
from agent_reputation.reputation.store import ReputationStore
from agent_reputation.skills.verification import SkillSummary, SkillVerificationStore
from agent_reputation.snapshot import EngineSnapshot

logger = logging.getLogger(__name__)


class ReputationEngine:
    """In-memory reputation and trust-graph engine.

    Parameters
    ----------
    policy:
        Reputation policy shared by the reputation store and trust scoring.

    Example
    -------
    ::

        engine = ReputationEngine()
        engine.register_agent("agent-a", wallet="0xA", name="Alpha")
        engine.register_agent("agent-b", wallet="0xB", name="Beta")
        engine.submit_review(
            "agent-a",
            ReviewRatings(reliability=80, quality=80, communication=80),
            reviewer_id="agent-b",
        )
        print(engine.trust_graph("agent-b", depth=1).to_dict())
    """

    def __init__(self, policy: ReputationPolicy | None = None) -> None:
        self._lock = threading.RLock()
        self.directory = AgentDirectory()
        self.reputation = ReputationStore(self.directory, policy=policy)
        self.graph = TrustGraphStore()
        self.skills = SkillVerificationStore()

    # ------------------------------------------------------------------
    # Agents
    # ------------------------------------------------------------------

    def register_agent(
        self,
        agent_id: str,
        wallet: str,
        name: str | None = None,
        specialties: list[str] | None = None,
    ) -> tuple[AgentRecord, ReputationScore]:
        """Register (or re-register) an agent with a fresh neutral reputation.

        Re-registering an existing id overwrites its record and discards
        all prior reputation history. Trust edges and skill verifications
        are left untouched.

        Raises
        ------
        AgentValidationError
            If ``agent_id`` or ``wallet`` is empty.
        """
        with self._lock:
            replacing = agent_id in self.directory
            record = self.directory.register(
                agent_id=agent_id,
                wallet=wallet,
                name=name,
                specialties=specialties,
            )
            score = self.reputation.initialize(agent_id)
        logger.info(
            "%s agent %s (wallet %s)",
            "Re-registered" if replacing else "Registered",
            agent_id,
            wallet,
        )
        return record, score

    def get_agent(self, agent_id: str) -> AgentRecord:
        """Return the agent record; raises AgentNotFoundError if unknown."""
        with self._lock:
            return self.directory.get(agent_id)

    def agent_exists(self, agent_id: str) -> bool:
        with self._lock:
            return self.directory.exists(agent_id)

    # ------------------------------------------------------------------
    # Reputation
    # ------------------------------------------------------------------

    def submit_review(
        self,
        agent_id: str,
        ratings: ReviewRatings,
        reviewer_id: str | None = None,
    ) -> ReputationScore:
        """Apply a review to *agent_id* and record the reviewer's trust edge.

        The edge ``reviewer_id -> agent_id`` carries ``ratings.overall`` when
        it is non-zero, otherwise the recomputed overall score, rounded
        half-up. No edge is recorded without a reviewer.

        Raises
        ------
        AgentNotFoundError
            If *agent_id* is not registered. No state is changed.
        """
        with self._lock:
            updated = self.reputation.submit_review(agent_id, ratings)
            if reviewer_id:
                rating = ratings.overall or updated.overall
                self.graph.record_edge(reviewer_id, agent_id, rating)
        return updated

    def get_reputation(self, agent_id: str) -> ReputationScore:
        with self._lock:
            return self.reputation.get(agent_id)

    def trust_score(self, agent_id: str) -> int:
        with self._lock:
            return self.reputation.trust_score(agent_id)

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    def verify_skill(
        self,
        agent_id: str,
        skill: str,
        verifier_id: str,
        proof: str = "",
    ) -> int:
        """Append a skill verification; returns the skill's verification count."""
        with self._lock:
            count = self.skills.verify(agent_id, skill, verifier_id, proof)
        logger.debug("Skill %r of %s verified by %s (%d total)", skill, agent_id, verifier_id, count)
        return count

    def get_skills(self, agent_id: str) -> dict[str, SkillSummary]:
        with self._lock:
            return self.skills.get_skills(agent_id)

    def agents_with_skill(self, skill: str) -> list[AgentRecord]:
        with self._lock:
            return agents_with_skill(self.directory, self.skills, skill)

    # ------------------------------------------------------------------
    # Graph and ranking queries
    # ------------------------------------------------------------------

    def trust_graph(self, agent_id: str, depth: int = 1) -> TrustGraph:
        """Return the trust graph reachable from *agent_id* within *depth* hops."""
        with self._lock:
            return build_trust_graph(
                agent_id, depth, self.directory, self.reputation, self.graph
            )

    @staticmethod
    def network_trust_score(nodes: list[GraphNode]) -> int:
        return network_trust_score(nodes)

    def search(
        self,
        min_reputation: int = 0,
        required_skills: list[str] | None = None,
        limit: int | None = 20,
    ) -> SearchResults:
        with self._lock:
            return search(
                self.directory,
                self.reputation,
                self.skills,
                min_reputation=min_reputation,
                required_skills=required_skills,
                limit=limit,
            )

    def leaderboard(
        self,
        category: ReputationCategory | str | None = ReputationCategory.OVERALL,
        limit: int | None = 10,
    ) -> list[LeaderboardEntry]:
        with self._lock:
            return leaderboard(self.directory, self.reputation, category=category, limit=limit)

    def stats(self) -> dict[str, int]:
        """Return population counts for health reporting."""
        with self._lock:
            return {
                "agent_count": len(self.directory),
                "edge_count": self.graph.edge_count(),
                "skill_holder_count": len(self.skills.agent_ids()),
            }

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def export_state(self) -> dict[str, object]:
        """Return a JSON-serializable snapshot of every store."""
        with self._lock:
            agents: list[dict[str, object]] = []
            for record in self.directory.list_all():
                entry = record.to_dict()
                score = self.reputation.find(record.agent_id)
                entry["reputation"] = score.to_dict() if score is not None else None
                agents.append(entry)

            skills: dict[str, dict[str, list[dict[str, object]]]] = {}
            for agent_id in self.skills.agent_ids():
                skills[agent_id] = {
                    skill: [v.to_dict() for v in self.skills.get_verifications(agent_id, skill)]
                    for skill in self.skills.get_skills(agent_id)
                }

            return {
                "agents": agents,
                "edges": [edge.to_dict() for edge in self.graph.list_edges()],
                "skills": skills,
            }

    def load_state(self, state: dict[str, object]) -> None:
        """Replace every store with the contents of an :meth:`export_state` snapshot.

        The snapshot is validated and loaded into fresh stores first; the
        engine keeps its current state if any entry is malformed.

        Raises
        ------
        pydantic.ValidationError
            If the snapshot does not match the expected shape.
        AgentValidationError
            If an agent entry has a blank id or wallet.
        """
        snapshot = EngineSnapshot.model_validate(state)

        directory = AgentDirectory()
        reputation = ReputationStore(directory, policy=self.reputation.policy)
        graph = TrustGraphStore()
        skills = SkillVerificationStore()

        for entry in snapshot.agents:
            record = directory.register(
                agent_id=entry.agent_id,
                wallet=entry.wallet,
                name=entry.name,
                specialties=entry.specialties,
                registered_at=entry.registered_at,
            )
            record.jobs_completed = entry.jobs_completed
            record.total_earnings = entry.total_earnings
            if entry.reputation is not None:
                reputation.restore(
                    entry.agent_id, ReputationScore(**entry.reputation.model_dump())
                )

        for edge in snapshot.edges:
            graph.record_edge(edge.source, edge.target, edge.rating, timestamp=edge.timestamp)

        for agent_id, by_skill in snapshot.skills.items():
            for skill, verifications in by_skill.items():
                for v in verifications:
                    skills.verify(
                        agent_id, skill, v.verifier_id, v.proof, verified_at=v.verified_at
                    )

        with self._lock:
            self.directory = directory
            self.reputation = reputation
            self.graph = graph
            self.skills = skills
        logger.info("Loaded state with %d agent(s)", len(directory))
