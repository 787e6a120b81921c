"""CLI entry point for agent-reputation.

Invoked as::

    agent-reputation [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m agent_reputation.cli.main

Commands
--------
serve               Run the HTTP server
agent register      Register (or re-register) an agent
agent review        Submit a review for an agent
agent reputation    Show an agent's reputation and trust score
agent verify-skill  Add a skill verification
agent skills        List an agent's verified skills
trust-graph         Show the trust graph around an agent
search              Search agents by reputation and skills
leaderboard         Rank agents by a reputation category

State lives in memory; pass ``--state-file`` to carry it between
invocations as a JSON snapshot.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

_state_file_option = click.option(
    "--state-file",
    type=click.Path(),
    default=None,
    help="Path to a JSON snapshot used to load and save engine state.",
)


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="agent-reputation")
def cli() -> None:
    """Agent reputation tracking, trust graphs, and skill verification"""


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from agent_reputation import __version__

    console.print(f"[bold]agent-reputation[/bold] v{__version__}")


@cli.command(name="serve")
@click.option("--host", default="0.0.0.0", envvar="HOST", show_default=True, help="Bind address.")
@click.option("--port", type=int, default=3001, envvar="PORT", show_default=True, help="TCP port.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    show_default=True,
)
@_state_file_option
def serve_command(host: str, port: int, log_level: str, state_file: str | None) -> None:
    """Run the HTTP server (blocking)."""
    from agent_reputation.server import routes
    from agent_reputation.server.app import run_server

    logging.basicConfig(level=getattr(logging, log_level))
    routes.set_engine(_load_engine(state_file))
    run_server(host=host, port=port)


# ------------------------------------------------------------------
# agent command group
# ------------------------------------------------------------------


@cli.group(name="agent")
def agent_group() -> None:
    """Manage agents, reviews, and skills."""


@agent_group.command(name="register")
@click.argument("agent_id")
@click.option("--wallet", "-w", required=True, help="Wallet address of the agent.")
@click.option("--name", "-n", default=None, help="Human-readable name for the agent.")
@click.option(
    "--specialty",
    "-s",
    multiple=True,
    help="Specialty string (repeatable, e.g. -s solidity -s audit).",
)
@_state_file_option
def register_command(
    agent_id: str,
    wallet: str,
    name: str | None,
    specialty: tuple[str, ...],
    state_file: str | None,
) -> None:
    """Register AGENT_ID with a fresh neutral reputation."""
    from agent_reputation.registry import AgentValidationError

    engine = _load_engine(state_file)
    try:
        record, score = engine.register_agent(
            agent_id=agent_id, wallet=wallet, name=name, specialties=list(specialty)
        )
    except AgentValidationError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    _save_engine(engine, state_file)

    console.print(f"[green]Registered[/green] agent [bold]{agent_id}[/bold]")
    console.print(f"  Name:        {record.name}")
    console.print(f"  Wallet:      {record.wallet}")
    console.print(f"  Specialties: {', '.join(record.specialties) or '(none)'}")
    console.print(f"  Reputation:  {score.overall}")


@agent_group.command(name="review")
@click.argument("agent_id")
@click.option("--reviewer", "-r", default=None, help="Reviewing agent id (records a trust edge).")
@click.option("--reliability", type=click.IntRange(0, 100), required=True)
@click.option("--quality", type=click.IntRange(0, 100), required=True)
@click.option("--communication", type=click.IntRange(0, 100), required=True)
@click.option(
    "--overall",
    type=click.IntRange(0, 100),
    default=None,
    help="Explicit overall rating used for the trust edge.",
)
@_state_file_option
def review_command(
    agent_id: str,
    reviewer: str | None,
    reliability: int,
    quality: int,
    communication: int,
    overall: int | None,
    state_file: str | None,
) -> None:
    """Submit a review for AGENT_ID."""
    from agent_reputation.registry import AgentNotFoundError
    from agent_reputation.reputation import ReviewRatings

    engine = _load_engine(state_file)
    ratings = ReviewRatings(
        reliability=reliability,
        quality=quality,
        communication=communication,
        overall=overall,
    )
    try:
        score = engine.submit_review(agent_id, ratings, reviewer_id=reviewer)
    except AgentNotFoundError:
        console.print(f"[red]Error:[/red] Agent {agent_id!r} is not registered.")
        sys.exit(1)
    _save_engine(engine, state_file)

    console.print(f"[green]Review recorded[/green] for [bold]{agent_id}[/bold]")
    _print_reputation(agent_id, score.to_dict(), engine.trust_score(agent_id))


@agent_group.command(name="reputation")
@click.argument("agent_id")
@_state_file_option
def reputation_command(agent_id: str, state_file: str | None) -> None:
    """Show AGENT_ID's reputation and trust score."""
    from agent_reputation.registry import AgentNotFoundError

    engine = _load_engine(state_file)
    try:
        score = engine.get_reputation(agent_id)
    except AgentNotFoundError:
        console.print(f"[red]Error:[/red] Agent {agent_id!r} is not registered.")
        sys.exit(1)
    _print_reputation(agent_id, score.to_dict(), engine.trust_score(agent_id))


@agent_group.command(name="verify-skill")
@click.argument("agent_id")
@click.argument("skill")
@click.option("--verifier", "-v", required=True, help="Verifying agent id.")
@click.option("--proof", "-p", default="", help="Proof reference (URL, hash, ...).")
@_state_file_option
def verify_skill_command(
    agent_id: str,
    skill: str,
    verifier: str,
    proof: str,
    state_file: str | None,
) -> None:
    """Record that VERIFIER attests AGENT_ID holds SKILL."""
    engine = _load_engine(state_file)
    count = engine.verify_skill(agent_id, skill, verifier, proof)
    _save_engine(engine, state_file)
    console.print(
        f"[green]Verified[/green] {skill!r} for [bold]{agent_id}[/bold] "
        f"({count} verification(s))"
    )


@agent_group.command(name="skills")
@click.argument("agent_id")
@_state_file_option
def skills_command(agent_id: str, state_file: str | None) -> None:
    """List AGENT_ID's verified skills."""
    engine = _load_engine(state_file)
    skills = engine.get_skills(agent_id)
    if not skills:
        console.print(f"[yellow]No verified skills for {agent_id!r}.[/yellow]")
        return

    table = Table(title=f"Verified Skills — {agent_id}", show_header=True)
    table.add_column("Skill", style="cyan")
    table.add_column("Verifications", justify="right")
    table.add_column("Verified By")
    for skill, summary in skills.items():
        table.add_row(skill, str(summary.verification_count), ", ".join(summary.verified_by))
    console.print(table)


# ------------------------------------------------------------------
# Queries
# ------------------------------------------------------------------


@cli.command(name="trust-graph")
@click.argument("agent_id")
@click.option("--depth", "-d", type=click.IntRange(min=0), default=1, show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@_state_file_option
def trust_graph_command(
    agent_id: str, depth: int, as_json: bool, state_file: str | None
) -> None:
    """Show the trust graph reachable from AGENT_ID."""
    engine = _load_engine(state_file)
    graph = engine.trust_graph(agent_id, depth)
    network_score = engine.network_trust_score(graph.nodes)

    if as_json:
        payload = {"agent_id": agent_id, "depth": depth, "graph": graph.to_dict()}
        payload["network_trust_score"] = network_score
        console.print_json(json.dumps(payload))
        return

    nodes = Table(title=f"Trust Graph — {agent_id} (depth {depth})", show_header=True)
    nodes.add_column("Agent", style="cyan")
    nodes.add_column("Name")
    nodes.add_column("Reputation", justify="right")
    for node in graph.nodes:
        nodes.add_row(node.id, node.name, str(node.reputation))
    console.print(nodes)

    for edge in graph.edges:
        console.print(f"  {edge.source} [dim]->[/dim] {edge.target}  rating {edge.rating}")
    console.print(f"\n  Network trust: [bold]{network_score}[/bold]")


@cli.command(name="search")
@click.option("--min-reputation", type=int, default=0, show_default=True)
@click.option("--skill", "-s", multiple=True, help="Required verified skill (repeatable).")
@click.option("--limit", type=click.IntRange(min=0), default=20, show_default=True)
@_state_file_option
def search_command(
    min_reputation: int,
    skill: tuple[str, ...],
    limit: int,
    state_file: str | None,
) -> None:
    """Search agents by minimum reputation and verified skills."""
    engine = _load_engine(state_file)
    results = engine.search(
        min_reputation=min_reputation, required_skills=list(skill) or None, limit=limit
    )
    if not results.agents:
        console.print("[yellow]No agents found matching your criteria.[/yellow]")
        return

    table = Table(title="Agents", show_header=True)
    table.add_column("Agent ID", style="cyan")
    table.add_column("Name")
    table.add_column("Overall", justify="right")
    table.add_column("Trust", justify="right")
    table.add_column("Reviews", justify="right")
    for result in results.agents:
        table.add_row(
            result.agent.agent_id,
            result.agent.name,
            str(result.reputation.overall),
            str(result.trust_score),
            str(result.reputation.total_reviews),
        )
    console.print(table)
    console.print(f"\nTotal: {results.total} agent(s)")


@cli.command(name="leaderboard")
@click.option(
    "--category",
    "-c",
    default="overall",
    show_default=True,
    help="overall, reliability, quality, or communication.",
)
@click.option("--limit", type=click.IntRange(min=0), default=10, show_default=True)
@_state_file_option
def leaderboard_command(category: str, limit: int, state_file: str | None) -> None:
    """Rank agents by a reputation category."""
    from agent_reputation.reputation import ReputationCategory

    engine = _load_engine(state_file)
    resolved = ReputationCategory.parse(category)
    entries = engine.leaderboard(category=resolved, limit=limit)

    table = Table(title=f"Leaderboard — {resolved.value}", show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Agent ID", style="cyan")
    table.add_column("Name")
    table.add_column("Score", justify="right")
    table.add_column("Trust", justify="right")
    for position, entry in enumerate(entries, start=1):
        table.add_row(
            str(position), entry.agent_id, entry.name, str(entry.score), str(entry.trust_score)
        )
    console.print(table)


# ------------------------------------------------------------------
# Helpers: file-backed state for CLI use
# ------------------------------------------------------------------


def _print_reputation(agent_id: str, reputation: dict[str, int], trust: int) -> None:
    table = Table(title=f"Reputation — {agent_id}", show_header=True)
    table.add_column("Score", style="cyan")
    table.add_column("Value", justify="right")
    for key in ("overall", "reliability", "quality", "communication", "total_reviews"):
        table.add_row(key.replace("_", " ").capitalize(), str(reputation[key]))
    console.print(table)
    console.print(f"\n  Trust score: [bold]{trust}[/bold]")


def _load_engine(state_file: str | None):  # type: ignore[no-untyped-def]
    """Return a ReputationEngine, optionally pre-populated from a JSON snapshot.

    An unreadable or malformed snapshot aborts the command so it is never
    overwritten by a later save.
    """
    from agent_reputation.engine import ReputationEngine

    engine = ReputationEngine()
    if state_file and Path(state_file).exists():
        try:
            engine.load_state(json.loads(Path(state_file).read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            console.print(
                f"[red]Error:[/red] Could not load state file {escape(state_file)}: {escape(str(exc))}"
            )
            sys.exit(1)
    return engine


def _save_engine(engine, state_file: str | None) -> None:  # type: ignore[no-untyped-def]
    """Persist engine state to a JSON snapshot."""
    if not state_file:
        return
    Path(state_file).write_text(json.dumps(engine.export_state(), indent=2), encoding="utf-8")


if __name__ == "__main__":
    cli()
