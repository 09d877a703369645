import json
import sys
from pathlib import Path

from ruleweave.__main__ import cli, main


def test_generate_writes_files(project: Path, cli_runner, write_rule) -> None:
    write_rule("overview.md", "Root rule", root=True)
    write_rule("style.md", "Use tabs", description="Style")

    result = cli_runner.invoke(cli, ["generate", "-t", "agentsmd"])

    assert result.exit_code == 0, result.output
    assert "create" in result.output
    agents = (project / "AGENTS.md").read_text(encoding="utf-8")
    assert "@.agents/memories/style.md" in agents
    assert agents.endswith("Root rule\n")
    assert (project / ".agents" / "memories" / "style.md").read_text(encoding="utf-8") == "Use tabs\n"


def test_generate_dry_run_writes_nothing(project: Path, cli_runner, write_rule) -> None:
    write_rule("overview.md", "Root", root=True)
    result = cli_runner.invoke(cli, ["generate", "-t", "agentsmd", "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "dry-run" in result.output
    assert not (project / "AGENTS.md").exists()


def test_generate_check(project: Path, cli_runner, write_rule) -> None:
    write_rule("overview.md", "Root", root=True)

    stale = cli_runner.invoke(cli, ["generate", "-t", "agentsmd", "--check"])
    assert stale.exit_code == 1
    assert "1 file(s) out of date" in stale.output
    assert not (project / "AGENTS.md").exists()

    cli_runner.invoke(cli, ["generate", "-t", "agentsmd"])
    fresh = cli_runner.invoke(cli, ["generate", "-t", "agentsmd", "--check"])
    assert fresh.exit_code == 0, fresh.output
    assert "up to date" in fresh.output


def test_config_file_values_survive_unset_flags(
    project: Path, cli_runner, write_rule, write_file
) -> None:
    write_rule("overview.md", "Root", root=True)
    write_file(
        project / "ruleweave.json",
        json.dumps({"targets": ["agentsmd"], "features": ["rules"], "delete": True}),
    )
    stale = write_file(project / ".agents" / "memories" / "old.md", "Old\n")

    result = cli_runner.invoke(cli, ["generate"])

    assert result.exit_code == 0, result.output
    assert (project / "AGENTS.md").exists()
    assert not stale.exists()


def test_cli_flags_override_config_file(project: Path, cli_runner, write_rule, write_file) -> None:
    write_rule("overview.md", "Root", root=True)
    write_file(project / "ruleweave.yaml", "targets: [agentsmd]\nfeatures: [rules]\n")

    result = cli_runner.invoke(cli, ["generate", "-t", "geminicli"])

    assert result.exit_code == 0, result.output
    assert (project / "GEMINI.md").exists()
    assert not (project / "AGENTS.md").exists()


def test_invalid_config_file(project: Path, cli_runner, write_file) -> None:
    write_file(project / "ruleweave.json", json.dumps({"targets": ["agentsmd"], "bogus": 1}))
    result = cli_runner.invoke(cli, ["generate"])
    assert result.exit_code == 1
    assert "Invalid config file" in result.output


def test_unknown_target(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["generate", "-t", "notatool"])
    assert result.exit_code == 1
    assert "Unknown target: notatool" in result.output


def test_generate_aborts_on_errors(project: Path, cli_runner, write_rule) -> None:
    write_rule("a.md", "A", root=True)
    write_rule("b.md", "B", root=True)
    result = cli_runner.invoke(cli, ["generate", "-t", "agentsmd"])
    assert result.exit_code == 1
    assert "Generate aborted due to errors above." in result.output
    assert not (project / "AGENTS.md").exists()


def test_global_generate_writes_to_home(
    project: Path, home_dir: Path, cli_runner, write_rule
) -> None:
    write_rule("overview.md", "Root", root=True)
    result = cli_runner.invoke(cli, ["generate", "--global", "-t", "claudecode"])
    assert result.exit_code == 0, result.output
    assert (home_dir / ".claude" / "CLAUDE.md").read_text(encoding="utf-8") == "Root\n"
    assert not (project / ".claude").exists()


def test_init_then_generate(project: Path, cli_runner) -> None:
    assert cli_runner.invoke(cli, ["init"]).exit_code == 0

    result = cli_runner.invoke(cli, ["generate"])

    assert result.exit_code == 0, result.output
    assert (project / "AGENTS.md").exists()
    assert (project / ".cursor" / "mcp.json").exists()
    assert (project / ".claude" / "agents" / "planner.md").exists()
    assert (project / ".cursorignore").read_text(encoding="utf-8").startswith("# Files")


def test_main_returns_exit_code(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["ruleweave", "generate", "--dry-run", "--check"])
    assert main() == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_main_help(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["ruleweave", "--help"])
    assert main() == 0
    assert "generate" in capsys.readouterr().out


def test_main_propagates_check_failure(project: Path, write_rule, monkeypatch) -> None:
    write_rule("overview.md", "Root", root=True)
    monkeypatch.setattr(sys, "argv", ["ruleweave", "generate", "-t", "agentsmd", "--check"])
    assert main() == 1
