"""Bounded-depth traversal of the trust graph.

``build_trust_graph`` walks outward from a start agent breadth-first using an
explicit worklist of ``(agent_id, level)`` pairs. A ``visited`` set keeps the
walk finite on cyclic graphs and expands each agent at most once, at the
shallowest level it is reached.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from agent_reputation.graph.store import TrustGraphStore
from agent_reputation.registry.agent_directory import AgentDirectory, AgentValidationError
from agent_reputation.reputation.score import round_half_up
from agent_reputation.reputation.store import ReputationStore


@dataclass
class GraphNode:
    """A registered agent reached by the traversal."""

    id: str
    name: str
    reputation: int

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "reputation": self.reputation}


@dataclass
class GraphEdge:
    """An edge emitted by the traversal."""

    source: str
    target: str
    rating: int

    def to_dict(self) -> dict[str, object]:
        return {"from": self.source, "to": self.target, "rating": self.rating}


@dataclass
class TrustGraph:
    """Result of a bounded traversal: reached nodes and emitted edges."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def to_dict(self) -> dict[str, object]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


def build_trust_graph(
    agent_id: str,
    depth: int,
    directory: AgentDirectory,
    reputation: ReputationStore,
    graph: TrustGraphStore,
) -> TrustGraph:
    """Traverse the trust graph outward from *agent_id*.

    Parameters
    ----------
    agent_id:
        The start agent.
    depth:
        Maximum number of hops. ``0`` returns only the start node.
    directory:
        Directory used to resolve node names. Agents without a record are
        left out of ``nodes`` but their edges are kept.
    reputation:
        Store supplying each node's ``overall`` score.
    graph:
        The edge store to traverse.

    Returns
    -------
    TrustGraph

    Raises
    ------
    AgentValidationError
        If *depth* is negative.
    """
    if depth < 0:
        raise AgentValidationError(f"depth must be non-negative, got {depth}.")

    result = TrustGraph()
    visited: set[str] = {agent_id}
    worklist: deque[tuple[str, int]] = deque([(agent_id, 0)])

    while worklist:
        current, level = worklist.popleft()

        record = directory.find(current)
        if record is not None:
            score = reputation.find(current)
            result.nodes.append(
                GraphNode(
                    id=current,
                    name=record.name,
                    reputation=score.overall if score is not None else 0,
                )
            )

        if level >= depth:
            continue

        for edge in graph.neighbors(current):
            result.edges.append(
                GraphEdge(source=current, target=edge.target, rating=edge.rating)
            )
            if edge.target not in visited:
                visited.add(edge.target)
                worklist.append((edge.target, level + 1))

    return result


def network_trust_score(nodes: list[GraphNode]) -> int:
    """Return the rounded mean reputation of *nodes*.

    A graph with fewer than two nodes has no network to speak of and
    scores 0.
    """
    if len(nodes) <= 1:
        return 0
    return round_half_up(sum(node.reputation for node in nodes) / len(nodes))
