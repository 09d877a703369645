from pathlib import Path

import pytest

from ruleweave.errors import DocumentParseError
from ruleweave.gitignore import BLOCK_END, BLOCK_START, GitignoreService
from ruleweave.targets import ToolTarget


def test_entries_cover_owned_claudecode_paths(tmp_path: Path) -> None:
    entries = GitignoreService(tmp_path).compute_entries([ToolTarget.CLAUDECODE])
    assert entries == [
        "**/.claude/CLAUDE.md",
        "**/.claude/agents/",
        "**/.claude/commands/",
        "**/.claude/rules/",
        "**/.mcp.json",
    ]


def test_shared_and_global_only_paths_are_left_out(tmp_path: Path) -> None:
    entries = GitignoreService(tmp_path).compute_entries([ToolTarget.CODEXCLI])
    assert "**/AGENTS.md" in entries
    assert "**/.codex/memories/" in entries
    assert "**/.codex/subagents/" in entries
    assert "**/.codex/config.toml" not in entries
    assert "**/.codex/prompts/" not in entries


def test_update_appends_block_once(tmp_path: Path) -> None:
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("node_modules/\n", encoding="utf-8")
    service = GitignoreService(tmp_path)

    assert service.update(["**/AGENTS.md"])
    assert gitignore.read_text(encoding="utf-8") == (
        f"node_modules/\n\n{BLOCK_START}\n**/AGENTS.md\n{BLOCK_END}\n"
    )
    assert not service.update(["**/AGENTS.md"])


def test_update_replaces_existing_block_and_keeps_user_lines(tmp_path: Path) -> None:
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text(
        f"dist/\n{BLOCK_START}\n**/old.md\n{BLOCK_END}\n.env\n", encoding="utf-8"
    )

    assert GitignoreService(tmp_path).update(["**/.cursor/rules/"])
    assert gitignore.read_text(encoding="utf-8") == (
        f"dist/\n{BLOCK_START}\n**/.cursor/rules/\n{BLOCK_END}\n.env\n"
    )


def test_update_creates_missing_file(tmp_path: Path) -> None:
    assert GitignoreService(tmp_path).update(["**/AGENTS.md"])
    assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == (
        f"{BLOCK_START}\n**/AGENTS.md\n{BLOCK_END}\n"
    )


def test_unterminated_block_is_an_error(tmp_path: Path) -> None:
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text(f"{BLOCK_START}\n**/AGENTS.md\nmine/\n", encoding="utf-8")
    with pytest.raises(DocumentParseError):
        GitignoreService(tmp_path).update(["**/AGENTS.md"])
    assert "mine/" in gitignore.read_text(encoding="utf-8")
