"""HTTP server mode for agent-reputation.

Provides a lightweight stdlib-based HTTP API over a process-local
ReputationEngine without requiring any additional web framework dependencies.
"""
from __future__ import annotations

from agent_reputation.server.app import ReputationRequestHandler, create_server, run_server

__all__ = ["ReputationRequestHandler", "create_server", "run_server"]
