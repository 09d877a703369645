from pathlib import Path

from ruleweave.__main__ import cli
from ruleweave.gitignore import BLOCK_START


def test_gitignore_writes_block_for_selected_targets(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["gitignore", "-t", "claudecode,cursor"])
    assert result.exit_code == 0, result.output
    assert "updated .gitignore" in result.output

    content = (project / ".gitignore").read_text(encoding="utf-8")
    assert BLOCK_START in content
    assert "**/.claude/rules/" in content
    assert "**/.cursor/rules/" in content
    assert "**/.github/" not in content

    again = cli_runner.invoke(cli, ["gitignore", "-t", "claudecode,cursor"])
    assert again.exit_code == 0
    assert "already up to date" in again.output
    assert (project / ".gitignore").read_text(encoding="utf-8") == content


def test_gitignore_defaults_to_every_current_target(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["gitignore"])
    assert result.exit_code == 0, result.output
    content = (project / ".gitignore").read_text(encoding="utf-8")
    assert "**/AGENTS.md" in content
    assert "**/.windsurf/rules/" in content


def test_gitignore_rejects_unknown_target(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["gitignore", "-t", "notatool"])
    assert result.exit_code == 1
    assert "Unknown target: notatool" in result.output
    assert not (project / ".gitignore").exists()
