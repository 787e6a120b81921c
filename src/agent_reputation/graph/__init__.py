"""Directed trust graph built from reviews."""
from __future__ import annotations

from agent_reputation.graph.store import TrustEdge, TrustGraphStore
from agent_reputation.graph.traversal import (
    GraphEdge,
    GraphNode,
    TrustGraph,
    build_trust_graph,
    network_trust_score,
)

__all__ = [
    "GraphEdge",
    "GraphNode",
    "TrustEdge",
    "TrustGraph",
    "TrustGraphStore",
    "build_trust_graph",
    "network_trust_score",
]
