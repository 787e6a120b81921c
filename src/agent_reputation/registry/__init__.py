"""Agent directory.

Quick start
-----------
::

    from agent_reputation.registry import AgentDirectory

    directory = AgentDirectory()
    directory.register(agent_id="agent-001", wallet="0xA", name="Scout")
"""
from __future__ import annotations

from agent_reputation.registry.agent_directory import (
    AgentDirectory,
    AgentNotFoundError,
    AgentRecord,
    AgentValidationError,
)

__all__ = [
    "AgentDirectory",
    "AgentNotFoundError",
    "AgentRecord",
    "AgentValidationError",
]
