from pathlib import Path

import pytest

from ruleweave.core.documents import (
    CanonicalDocument,
    DocumentLocation,
    SettablePaths,
    is_targeting,
    strip_tool_dir,
)
from ruleweave.errors import PathTraversalError
from ruleweave.targets import ToolTarget


def test_location_paths(tmp_path: Path) -> None:
    location = DocumentLocation(tmp_path, ".cursor/rules", "style.mdc")
    assert location.relative_path == ".cursor/rules/style.mdc"
    assert location.file_path == tmp_path / ".cursor" / "rules" / "style.mdc"


def test_root_level_location_has_no_dot_prefix(tmp_path: Path) -> None:
    assert DocumentLocation(tmp_path, ".", "AGENTS.md").relative_path == "AGENTS.md"


def test_path_traversal_is_rejected(tmp_path: Path) -> None:
    location = DocumentLocation(tmp_path, "../outside", "x.md")
    with pytest.raises(PathTraversalError):
        location.file_path


def test_strip_tool_dir() -> None:
    assert strip_tool_dir(".junie/memories", ".junie") == "memories"
    assert strip_tool_dir(".junie", ".junie") == "."
    assert strip_tool_dir(".github/instructions", ".junie") == ".github/instructions"
    assert strip_tool_dir(".cursor/rules", None) == ".cursor/rules"
    paths = SettablePaths(".claude/rules").without_tool_dir(".claude")
    assert paths.relative_dir_path == "rules"


@pytest.mark.parametrize(
    "targets,expected",
    [
        (None, True),
        (["*"], True),
        ("*", True),
        (["cursor"], True),
        (["copilot"], False),
        ([], False),
    ],
)
def test_is_targeting(targets, expected: bool) -> None:
    assert is_targeting(targets, ToolTarget.CURSOR) is expected


def test_canonical_passthrough_block(tmp_path: Path) -> None:
    document = CanonicalDocument(
        location=DocumentLocation(tmp_path, ".ruleweave/rules", "a.md"),
        frontmatter={"cursor": {"alwaysApply": True}, "copilot": "not-a-mapping"},
        body="body",
    )
    assert document.passthrough(ToolTarget.CURSOR) == {"alwaysApply": True}
    assert document.passthrough(ToolTarget.COPILOT) == {}
    assert document.passthrough(ToolTarget.ROO) == {}
