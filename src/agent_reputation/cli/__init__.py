"""Command-line interface for agent-reputation."""
