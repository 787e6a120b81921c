#!/usr/bin/env python3
"""Example: Quickstart

Registers three agents, exchanges a few reviews, and prints the resulting
reputation, trust graph, and leaderboard.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install agent-reputation
"""
from __future__ import annotations

import agent_reputation
from agent_reputation import ReputationEngine, ReviewRatings


def main() -> None:
    print(f"agent-reputation version: {agent_reputation.__version__}")

    engine = ReputationEngine()

    # Step 1: Register agents
    for agent_id, wallet, name in [
        ("scout", "0x01", "Scout"),
        ("forge", "0x02", "Forge"),
        ("ledger", "0x03", "Ledger"),
    ]:
        engine.register_agent(agent_id, wallet=wallet, name=name)

    # Step 2: Exchange reviews (each one also records a trust edge)
    engine.submit_review(
        "forge", ReviewRatings(reliability=90, quality=85, communication=70), reviewer_id="scout"
    )
    engine.submit_review(
        "ledger", ReviewRatings(reliability=60, quality=75, communication=95), reviewer_id="forge"
    )
    engine.submit_review(
        "scout", ReviewRatings(reliability=80, quality=80, communication=80), reviewer_id="ledger"
    )

    # Step 3: Verify a skill
    engine.verify_skill("forge", "solidity", verifier_id="scout", proof="audit-report-17")

    # Step 4: Inspect results
    print(f"forge reputation: {engine.get_reputation('forge').to_dict()}")
    print(f"forge trust score: {engine.trust_score('forge')}")

    graph = engine.trust_graph("scout", depth=2)
    print(f"trust graph from scout: {graph.to_dict()}")
    print(f"network trust score: {engine.network_trust_score(graph.nodes)}")

    for entry in engine.leaderboard("quality", limit=3):
        print(f"  {entry.agent_id:<8} quality={entry.score}")

    solidity = engine.search(min_reputation=50, required_skills=["solidity"])
    print(f"solidity agents: {[r.agent.agent_id for r in solidity.agents]}")


if __name__ == "__main__":
    main()
