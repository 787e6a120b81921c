"""AgentDirectory — in-memory directory of registered agents.

Stores AgentRecord objects keyed by agent_id. Registration is an
idempotent overwrite: registering an existing agent_id replaces the prior
record. Records are never deleted.
"""
from __future__ import annotations

import datetime
import threading
from dataclasses import dataclass, field


@dataclass
class AgentRecord:
    """The identity record for a registered agent.

    Parameters
    ----------
    agent_id:
        Externally supplied unique identifier.
    name:
        Human-readable name for the agent.
    wallet:
        Opaque wallet address string.
    specialties:
        Ordered list of self-declared specialties (informational only).
    registered_at:
        UTC datetime of the most recent registration.
    jobs_completed:
        Completed job counter, initialized to zero.
    total_earnings:
        Earnings counter, initialized to zero.
    """

    agent_id: str
    name: str
    wallet: str
    specialties: list[str] = field(default_factory=list)
    registered_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    jobs_completed: int = 0
    total_earnings: int = 0

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "agent_id": self.agent_id,
            "name": self.name,
            "wallet": self.wallet,
            "specialties": list(self.specialties),
            "registered_at": self.registered_at.isoformat(),
            "jobs_completed": self.jobs_completed,
            "total_earnings": self.total_earnings,
        }


class AgentValidationError(ValueError):
    """Raised when required agent input is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AgentNotFoundError(KeyError):
    """Raised when an agent_id is not present in the directory."""

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(
            f"Agent {agent_id!r} is not registered. "
            "Use register() to add a new agent."
        )


class AgentDirectory:
    """Directory of registered agent records.

    Thread-safe. All mutations acquire a lock before modifying the
    internal store.

    Example
    -------
    ::

        directory = AgentDirectory()
        directory.register(agent_id="agent-001", name="Scout", wallet="0xA")
        print(directory.get("agent-001").wallet)
    """

    DEFAULT_NAME = "Unknown"

    def __init__(self) -> None:
        self._records: dict[str, AgentRecord] = {}
        self._lock = threading.Lock()

    def register(
        self,
        agent_id: str,
        wallet: str,
        name: str | None = None,
        specialties: list[str] | None = None,
        registered_at: datetime.datetime | None = None,
    ) -> AgentRecord:
        """Create or overwrite the record for *agent_id*.

        Parameters
        ----------
        agent_id:
            Unique identifier for the agent. Must be non-empty.
        wallet:
            Wallet address string. Must be non-empty.
        name:
            Human-readable name. Defaults to ``"Unknown"``.
        specialties:
            Optional list of specialty strings.
        registered_at:
            Registration time. Defaults to now (UTC).

        Returns
        -------
        AgentRecord
            The newly stored record.

        Raises
        ------
        AgentValidationError
            If ``agent_id`` or ``wallet`` is empty.
        """
        if not agent_id or not agent_id.strip():
            raise AgentValidationError("agent_id must not be empty.")
        if not wallet or not wallet.strip():
            raise AgentValidationError(
                f"wallet must not be empty for agent {agent_id!r}."
            )

        record = AgentRecord(
            agent_id=agent_id,
            name=name or self.DEFAULT_NAME,
            wallet=wallet,
            specialties=list(specialties or []),
        )
        if registered_at is not None:
            record.registered_at = registered_at
        with self._lock:
            self._records[agent_id] = record
        return record

    def get(self, agent_id: str) -> AgentRecord:
        """Return the record for *agent_id*.

        Raises
        ------
        AgentNotFoundError
            If no agent with this ID is registered.
        """
        with self._lock:
            if agent_id not in self._records:
                raise AgentNotFoundError(agent_id)
            return self._records[agent_id]

    def find(self, agent_id: str) -> AgentRecord | None:
        """Return the record for *agent_id*, or None if unregistered."""
        with self._lock:
            return self._records.get(agent_id)

    def exists(self, agent_id: str) -> bool:
        """Return True if *agent_id* is registered."""
        return agent_id in self

    def list_all(self) -> list[AgentRecord]:
        """Return all records in registration order."""
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, agent_id: object) -> bool:
        """Support ``"agent-001" in directory`` membership test."""
        with self._lock:
            return agent_id in self._records
