"""TrustGraphStore — directed adjacency of the latest rating per agent pair.

The graph is a mapping from source agent to an ordered mapping from target
agent to TrustEdge. Recording an edge for an existing pair replaces it in
place, so there is never more than one edge per ordered pair.
"""
from __future__ import annotations

import datetime
import threading
from dataclasses import dataclass, field

from agent_reputation.reputation.score import round_half_up


@dataclass
class TrustEdge:
    """The most recent rating *source* gave *target*."""

    source: str
    target: str
    rating: int
    timestamp: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    def to_dict(self) -> dict[str, object]:
        return {
            "from": self.source,
            "to": self.target,
            "rating": self.rating,
            "timestamp": self.timestamp.isoformat(),
        }


class TrustGraphStore:
    """In-memory directed trust graph.

    Self-edges are accepted; whether an agent may rate itself is left to
    the caller.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, dict[str, TrustEdge]] = {}
        self._lock = threading.Lock()

    def record_edge(
        self,
        source: str,
        target: str,
        rating: float,
        timestamp: datetime.datetime | None = None,
    ) -> TrustEdge:
        """Insert or overwrite the edge ``source -> target``.

        Parameters
        ----------
        source:
            The rating agent.
        target:
            The rated agent.
        rating:
            The rating value, rounded half-up; replaces any earlier rating
            for this pair.
        timestamp:
            Time of the rating. Defaults to now (UTC).

        Returns
        -------
        TrustEdge
            The stored edge.
        """
        edge = TrustEdge(source=source, target=target, rating=round_half_up(rating))
        if timestamp is not None:
            edge.timestamp = timestamp
        with self._lock:
            self._adjacency.setdefault(source, {})[target] = edge
        return edge

    def neighbors(self, agent_id: str) -> list[TrustEdge]:
        """Return outgoing edges of *agent_id* in insertion order."""
        with self._lock:
            return list(self._adjacency.get(agent_id, {}).values())

    def edge(self, source: str, target: str) -> TrustEdge | None:
        with self._lock:
            return self._adjacency.get(source, {}).get(target)

    def list_edges(self) -> list[TrustEdge]:
        """Return every edge, grouped by source in insertion order."""
        with self._lock:
            return [e for targets in self._adjacency.values() for e in targets.values()]

    def edge_count(self) -> int:
        with self._lock:
            return sum(len(targets) for targets in self._adjacency.values())
