"""Unit tests for agent_reputation.graph — TrustGraphStore and traversal."""
from __future__ import annotations

import pytest

from agent_reputation.graph.store import TrustGraphStore
from agent_reputation.graph.traversal import (
    GraphNode,
    build_trust_graph,
    network_trust_score,
)
from agent_reputation.registry.agent_directory import AgentDirectory, AgentValidationError
from agent_reputation.reputation.score import ReputationScore
from agent_reputation.reputation.store import ReputationStore


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def directory() -> AgentDirectory:
    return AgentDirectory()


@pytest.fixture()
def reputation(directory: AgentDirectory) -> ReputationStore:
    return ReputationStore(directory)


@pytest.fixture()
def graph() -> TrustGraphStore:
    return TrustGraphStore()


def _register(
    directory: AgentDirectory, reputation: ReputationStore, agent_id: str, overall: int = 50
) -> None:
    directory.register(agent_id=agent_id, wallet=f"0x{agent_id}", name=agent_id.upper())
    reputation.restore(agent_id, ReputationScore(overall=overall))


def _build(
    agent_id: str,
    depth: int,
    directory: AgentDirectory,
    reputation: ReputationStore,
    graph: TrustGraphStore,
):  # type: ignore[no-untyped-def]
    return build_trust_graph(agent_id, depth, directory, reputation, graph)


# ---------------------------------------------------------------------------
# TrustGraphStore
# ---------------------------------------------------------------------------


class TestTrustGraphStore:
    def test_record_edge(self, graph: TrustGraphStore) -> None:
        edge = graph.record_edge("a", "b", 90)
        assert edge.source == "a"
        assert edge.target == "b"
        assert edge.rating == 90
        assert edge.timestamp.tzinfo is not None

    def test_overwrite_keeps_single_edge(self, graph: TrustGraphStore) -> None:
        graph.record_edge("a", "b", 90)
        graph.record_edge("a", "b", 10)
        neighbors = graph.neighbors("a")
        assert len(neighbors) == 1
        assert neighbors[0].rating == 10
        assert graph.edge_count() == 1

    @pytest.mark.parametrize(
        ("rating", "expected"), [(72.9, 73), (72.5, 73), (72.4, 72), (0.5, 1)]
    )
    def test_fractional_rating_rounds_half_up(
        self, graph: TrustGraphStore, rating: float, expected: int
    ) -> None:
        assert graph.record_edge("a", "b", rating).rating == expected

    def test_reverse_direction_is_distinct(self, graph: TrustGraphStore) -> None:
        graph.record_edge("a", "b", 90)
        graph.record_edge("b", "a", 20)
        assert graph.edge("a", "b").rating == 90  # type: ignore[union-attr]
        assert graph.edge("b", "a").rating == 20  # type: ignore[union-attr]
        assert graph.edge_count() == 2

    def test_self_edge_accepted(self, graph: TrustGraphStore) -> None:
        graph.record_edge("a", "a", 70)
        assert graph.edge("a", "a") is not None

    def test_neighbors_in_insertion_order(self, graph: TrustGraphStore) -> None:
        graph.record_edge("a", "c", 1)
        graph.record_edge("a", "b", 2)
        graph.record_edge("a", "c", 3)
        assert [e.target for e in graph.neighbors("a")] == ["c", "b"]

    def test_neighbors_empty_for_unknown(self, graph: TrustGraphStore) -> None:
        assert graph.neighbors("nobody") == []

    def test_to_dict_uses_from_to(self, graph: TrustGraphStore) -> None:
        d = graph.record_edge("a", "b", 5).to_dict()
        assert d["from"] == "a"
        assert d["to"] == "b"


# ---------------------------------------------------------------------------
# build_trust_graph
# ---------------------------------------------------------------------------


class TestBuildTrustGraph:
    def test_depth_zero_returns_only_start(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "a", overall=70)
        _register(directory, reputation, "b")
        graph.record_edge("a", "b", 80)

        result = _build("a", 0, directory, reputation, graph)
        assert result.node_ids() == ["a"]
        assert result.nodes[0].name == "A"
        assert result.nodes[0].reputation == 70
        assert result.edges == []

    def test_depth_one_includes_neighbors(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        for agent_id in ("a", "b", "c", "d"):
            _register(directory, reputation, agent_id)
        graph.record_edge("a", "b", 80)
        graph.record_edge("a", "c", 60)
        graph.record_edge("b", "d", 40)

        result = _build("a", 1, directory, reputation, graph)
        assert result.node_ids() == ["a", "b", "c"]
        assert [(e.source, e.target) for e in result.edges] == [("a", "b"), ("a", "c")]

    def test_depth_two_reaches_second_hop(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        for agent_id in ("a", "b", "c"):
            _register(directory, reputation, agent_id)
        graph.record_edge("a", "b", 80)
        graph.record_edge("b", "c", 40)

        result = _build("a", 2, directory, reputation, graph)
        assert result.node_ids() == ["a", "b", "c"]
        assert [(e.source, e.target, e.rating) for e in result.edges] == [
            ("a", "b", 80),
            ("b", "c", 40),
        ]

    def test_cycle_terminates_and_visits_once(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "a")
        _register(directory, reputation, "b")
        graph.record_edge("a", "b", 90)
        graph.record_edge("b", "a", 70)

        result = _build("a", 3, directory, reputation, graph)
        assert sorted(result.node_ids()) == ["a", "b"]
        assert len(result.nodes) == 2
        assert [(e.source, e.target) for e in result.edges] == [("a", "b"), ("b", "a")]

    def test_edge_into_visited_node_emitted_once_per_owner(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        for agent_id in ("a", "b", "c"):
            _register(directory, reputation, agent_id)
        graph.record_edge("a", "b", 1)
        graph.record_edge("a", "c", 2)
        graph.record_edge("b", "c", 3)

        result = _build("a", 5, directory, reputation, graph)
        assert result.node_ids() == ["a", "b", "c"]
        assert [(e.source, e.target) for e in result.edges] == [
            ("a", "b"),
            ("a", "c"),
            ("b", "c"),
        ]

    def test_unregistered_endpoint_omitted_from_nodes(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "a")
        graph.record_edge("a", "ghost", 55)

        result = _build("a", 1, directory, reputation, graph)
        assert result.node_ids() == ["a"]
        assert [(e.source, e.target) for e in result.edges] == [("a", "ghost")]

    def test_unregistered_start_still_emits_edges(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "b")
        graph.record_edge("ghost", "b", 55)

        result = _build("ghost", 1, directory, reputation, graph)
        assert result.node_ids() == ["b"]
        assert len(result.edges) == 1

    def test_self_edge_does_not_loop(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "a")
        graph.record_edge("a", "a", 99)

        result = _build("a", 4, directory, reputation, graph)
        assert result.node_ids() == ["a"]
        assert len(result.edges) == 1

    def test_negative_depth_rejected(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        with pytest.raises(AgentValidationError):
            _build("a", -1, directory, reputation, graph)

    def test_long_chain_does_not_recurse(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        count = 3000
        for i in range(count):
            _register(directory, reputation, f"n{i}")
        for i in range(count - 1):
            graph.record_edge(f"n{i}", f"n{i + 1}", 50)

        result = _build("n0", count, directory, reputation, graph)
        assert len(result.nodes) == count
        assert len(result.edges) == count - 1

    def test_to_dict(
        self, directory: AgentDirectory, reputation: ReputationStore, graph: TrustGraphStore
    ) -> None:
        _register(directory, reputation, "a")
        graph.record_edge("a", "b", 10)
        d = _build("a", 1, directory, reputation, graph).to_dict()
        assert d["nodes"] == [{"id": "a", "name": "A", "reputation": 50}]
        assert d["edges"] == [{"from": "a", "to": "b", "rating": 10}]


# ---------------------------------------------------------------------------
# network_trust_score
# ---------------------------------------------------------------------------


class TestNetworkTrustScore:
    def test_empty_scores_zero(self) -> None:
        assert network_trust_score([]) == 0

    def test_single_node_scores_zero(self) -> None:
        assert network_trust_score([GraphNode(id="a", name="A", reputation=90)]) == 0

    def test_mean_of_nodes(self) -> None:
        nodes = [
            GraphNode(id="a", name="A", reputation=80),
            GraphNode(id="b", name="B", reputation=60),
            GraphNode(id="c", name="C", reputation=41),
        ]
        # 181 / 3 = 60.33
        assert network_trust_score(nodes) == 60

    def test_mean_rounds_half_up(self) -> None:
        nodes = [
            GraphNode(id="a", name="A", reputation=50),
            GraphNode(id="b", name="B", reputation=51),
        ]
        assert network_trust_score(nodes) == 51
