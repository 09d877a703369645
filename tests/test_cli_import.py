from pathlib import Path

import ruleweave.__main__ as cli_module
from ruleweave.__main__ import cli

COMMAND = "---\ndescription: Fix\n---\n\nFix it\n"


def test_import_writes_canonical_files(project: Path, cli_runner, write_file) -> None:
    write_file(project / ".claude" / "commands" / "fix.md", COMMAND)

    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "-f", "commands"])

    assert result.exit_code == 0, result.output
    canonical = project / ".ruleweave" / "commands" / "fix.md"
    assert canonical.read_text(encoding="utf-8").endswith("Fix it\n")
    assert "claudecode" in result.output


def test_import_dry_run(project: Path, cli_runner, write_file) -> None:
    write_file(project / ".claude" / "commands" / "fix.md", COMMAND)
    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "dry-run" in result.output
    assert not (project / ".ruleweave").exists()


def test_import_conflict_fail(project: Path, cli_runner, write_file) -> None:
    write_file(project / ".claude" / "commands" / "fix.md", COMMAND)
    write_file(project / ".ruleweave" / "commands" / "fix.md", "Mine\n")

    result = cli_runner.invoke(
        cli, ["import", "-t", "claudecode", "-f", "commands", "--conflict", "fail"]
    )

    assert result.exit_code == 1
    assert "Import aborted due to errors above." in result.output
    assert (project / ".ruleweave" / "commands" / "fix.md").read_text(encoding="utf-8") == "Mine\n"


def test_import_rejects_unknown_feature(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "-f", "rules,bogus"])
    assert result.exit_code == 2
    assert "unknown feature 'bogus'" in result.output


def test_import_rejects_unknown_target(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["import", "-t", "vim"])
    assert result.exit_code == 2


def test_import_verbose_and_silent(project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "-v", "-s"])
    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_interactive_import_applies_selection(
    project: Path, cli_runner, write_file, monkeypatch
) -> None:
    write_file(project / ".claude" / "commands" / "a.md", COMMAND)
    write_file(project / ".claude" / "commands" / "b.md", COMMAND)
    seen = []

    def fake_selector(plan):
        seen.append([action.path.name for action in plan.actions])
        return [1]

    monkeypatch.setattr(cli_module, "_run_selector", fake_selector)

    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "-f", "commands", "-i"])

    assert result.exit_code == 0, result.output
    assert seen == [["a.md", "b.md"]]
    assert not (project / ".ruleweave" / "commands" / "a.md").exists()
    assert (project / ".ruleweave" / "commands" / "b.md").exists()


def test_interactive_import_cancelled(project: Path, cli_runner, write_file, monkeypatch) -> None:
    write_file(project / ".claude" / "commands" / "a.md", COMMAND)
    monkeypatch.setattr(cli_module, "_run_selector", lambda plan: [])

    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "-f", "commands", "-i"])

    assert result.exit_code == 0, result.output
    assert not (project / ".ruleweave").exists()
