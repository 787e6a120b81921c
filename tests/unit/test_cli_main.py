"""Tests for agent_reputation.cli.main — CLI commands via Click test runner."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from agent_reputation.cli.main import cli


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


def _invoke(runner: CliRunner, state_file: Path, *args: str):  # type: ignore[no-untyped-def]
    return runner.invoke(cli, [*args, "--state-file", str(state_file)])


def _seed(runner: CliRunner, state_file: Path) -> None:
    for agent_id in ("alpha", "beta"):
        result = _invoke(runner, state_file, "agent", "register", agent_id, "--wallet", f"0x{agent_id}")
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Root CLI
# ---------------------------------------------------------------------------


class TestRootCLI:
    def test_help_exits_zero(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "leaderboard" in result.output

    def test_version_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "agent-reputation" in result.output.lower()


# ---------------------------------------------------------------------------
# agent register / review / reputation
# ---------------------------------------------------------------------------


class TestRegisterCommand:
    def test_register_minimal_args(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["agent", "register", "alpha", "--wallet", "0xA"])
        assert result.exit_code == 0
        assert "alpha" in result.output

    def test_register_requires_wallet(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["agent", "register", "alpha"])
        assert result.exit_code != 0

    def test_register_blank_wallet_exits_nonzero(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["agent", "register", "alpha", "--wallet", " "])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_register_persists_to_file(self, runner: CliRunner, state_file: Path) -> None:
        result = _invoke(
            runner, state_file, "agent", "register", "alpha", "--wallet", "0xA", "-s", "audit"
        )
        assert result.exit_code == 0
        data = json.loads(state_file.read_text())
        [agent] = data["agents"]
        assert agent["agent_id"] == "alpha"
        assert agent["specialties"] == ["audit"]
        assert agent["reputation"]["overall"] == 50


class TestReviewCommand:
    def test_review_updates_state(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        for value in ("80", "0"):
            result = _invoke(
                runner,
                state_file,
                "agent",
                "review",
                "alpha",
                "--reviewer",
                "beta",
                "--reliability",
                value,
                "--quality",
                value,
                "--communication",
                value,
            )
            assert result.exit_code == 0

        data = json.loads(state_file.read_text())
        alpha = next(a for a in data["agents"] if a["agent_id"] == "alpha")
        assert alpha["reputation"]["overall"] == 40
        assert alpha["reputation"]["total_reviews"] == 2
        assert data["edges"] == [
            {"from": "beta", "to": "alpha", "rating": 40, "timestamp": data["edges"][0]["timestamp"]}
        ]

    def test_review_unknown_agent_exits_nonzero(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["agent", "review", "ghost", "--reliability", "1", "--quality", "1", "--communication", "1"],
        )
        assert result.exit_code == 1
        assert "not registered" in result.output

    def test_review_rejects_out_of_range(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(
            runner,
            state_file,
            "agent",
            "review",
            "alpha",
            "--reliability",
            "150",
            "--quality",
            "1",
            "--communication",
            "1",
        )
        assert result.exit_code != 0


class TestReputationCommand:
    def test_shows_scores(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(runner, state_file, "agent", "reputation", "alpha")
        assert result.exit_code == 0
        assert "Trust score" in result.output

    def test_unknown_agent(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["agent", "reputation", "ghost"])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# skills
# ---------------------------------------------------------------------------


class TestSkillCommands:
    def test_verify_then_list(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(
            runner, state_file, "agent", "verify-skill", "alpha", "solidity", "--verifier", "beta"
        )
        assert result.exit_code == 0
        assert "1 verification" in result.output

        result = _invoke(runner, state_file, "agent", "skills", "alpha")
        assert result.exit_code == 0
        assert "solidity" in result.output

    def test_no_skills(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["agent", "skills", "alpha"])
        assert result.exit_code == 0
        assert "No verified skills" in result.output


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueryCommands:
    def test_trust_graph_json(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        _invoke(
            runner,
            state_file,
            "agent",
            "review",
            "alpha",
            "-r",
            "beta",
            "--reliability",
            "90",
            "--quality",
            "90",
            "--communication",
            "90",
        )
        result = _invoke(runner, state_file, "trust-graph", "beta", "--depth", "1", "--json")
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["graph"]["edges"] == [{"from": "beta", "to": "alpha", "rating": 90}]
        assert payload["network_trust_score"] == 70

    def test_trust_graph_table(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(runner, state_file, "trust-graph", "alpha", "--depth", "0")
        assert result.exit_code == 0
        assert "Network trust" in result.output

    def test_search(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(runner, state_file, "search", "--min-reputation", "50")
        assert result.exit_code == 0
        assert "Total: 2" in result.output

    def test_search_no_results(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(runner, state_file, "search", "--skill", "cobol")
        assert result.exit_code == 0
        assert "No agents found" in result.output

    def test_leaderboard_unknown_category(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        result = _invoke(runner, state_file, "leaderboard", "--category", "vibes")
        assert result.exit_code == 0
        assert "overall" in result.output



# ---------------------------------------------------------------------------
# State file handling
# ---------------------------------------------------------------------------


class TestStateFile:
    def test_unparseable_state_file_aborts(self, runner: CliRunner, state_file: Path) -> None:
        state_file.write_text("{broken", encoding="utf-8")
        result = _invoke(runner, state_file, "search")
        assert result.exit_code == 1
        assert "Error" in result.output
        assert state_file.read_text(encoding="utf-8") == "{broken"

    def test_malformed_agent_entry_is_not_overwritten(
        self, runner: CliRunner, state_file: Path
    ) -> None:
        _seed(runner, state_file)
        data = json.loads(state_file.read_text())
        del data["agents"][1]["wallet"]
        corrupted = json.dumps(data)
        state_file.write_text(corrupted, encoding="utf-8")

        result = _invoke(runner, state_file, "agent", "register", "gamma", "--wallet", "0xC")
        assert result.exit_code == 1
        assert "Could not load state file" in result.output
        assert state_file.read_text(encoding="utf-8") == corrupted

    def test_non_integer_score_is_rejected(self, runner: CliRunner, state_file: Path) -> None:
        _seed(runner, state_file)
        data = json.loads(state_file.read_text())
        data["agents"][0]["reputation"]["total_reviews"] = "x"
        state_file.write_text(json.dumps(data), encoding="utf-8")

        result = _invoke(runner, state_file, "agent", "reputation", "alpha")
        assert result.exit_code == 1
