"""Per-tool rule conversion."""

from pathlib import Path

import pytest

from ruleweave.core.documents import DocumentLocation
from ruleweave.errors import MissingToolPathError
from ruleweave.rules.adapters import (
    AgentsmdRuleAdapter,
    AmazonqcliRuleAdapter,
    AugmentcodeRuleAdapter,
    ClaudecodeRuleAdapter,
    CopilotRuleAdapter,
    CursorRuleAdapter,
    KiroRuleAdapter,
    WindsurfRuleAdapter,
    split_globs,
)
from ruleweave.rules.models import CanonicalRule, with_rule_defaults
from ruleweave.rules.processor import RULE_ADAPTERS
from ruleweave.targets import ToolTarget


def _make_rule(
    base_dir: Path,
    name: str = "style.md",
    body: str = "Use tabs.",
    **frontmatter,
) -> CanonicalRule:
    return CanonicalRule(
        location=DocumentLocation(base_dir, ".ruleweave/rules", name),
        frontmatter=with_rule_defaults(frontmatter),
        body=body,
    )


def test_split_globs() -> None:
    assert split_globs("*.ts, src/**/*.py,") == ["*.ts", "src/**/*.py"]
    assert split_globs(["*.ts", " "]) == ["*.ts"]
    assert split_globs(None) == []


def test_untargeted_rule_is_skipped(tmp_path: Path) -> None:
    rule = _make_rule(tmp_path, targets=["copilot"])
    assert CursorRuleAdapter().from_canonical(rule, tmp_path) is None


def test_agentsmd_root_and_non_root_paths(tmp_path: Path) -> None:
    adapter = AgentsmdRuleAdapter()
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    other = adapter.from_canonical(_make_rule(tmp_path), tmp_path)
    assert root.file_path == tmp_path / "AGENTS.md"
    assert root.root
    assert other.file_path == tmp_path / ".agents" / "memories" / "style.md"
    assert other.file_content == "Use tabs."


def test_agentsmd_subproject_path(tmp_path: Path) -> None:
    rule = _make_rule(tmp_path, agentsmd={"subprojectPath": "packages/web"})
    document = AgentsmdRuleAdapter().from_canonical(rule, tmp_path)
    assert document.location.relative_path == "packages/web/AGENTS.md"
    assert not document.root


def test_rule_without_root_path_goes_to_rules_dir(tmp_path: Path) -> None:
    rule = _make_rule(tmp_path, "overview.md", root=True)
    document = AmazonqcliRuleAdapter().from_canonical(rule, tmp_path)
    assert document.location.relative_path == ".amazonq/rules/overview.md"
    assert not document.root


def test_global_mode_without_global_root_raises(tmp_path: Path) -> None:
    rule = _make_rule(tmp_path, "overview.md", root=True)
    with pytest.raises(MissingToolPathError):
        CursorRuleAdapter().from_canonical(rule, tmp_path, global_mode=True)


def test_cursor_frontmatter(tmp_path: Path) -> None:
    rule = _make_rule(tmp_path, description="Style", globs=["*.ts", "*.tsx"])
    document = CursorRuleAdapter().from_canonical(rule, tmp_path)
    assert document.location.relative_path == ".cursor/rules/style.mdc"
    assert document.frontmatter == {
        "description": "Style",
        "globs": "*.ts,*.tsx",
        "alwaysApply": False,
    }


def test_cursor_root_and_catch_all_rules_always_apply(tmp_path: Path) -> None:
    adapter = CursorRuleAdapter()
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    catch_all = adapter.from_canonical(_make_rule(tmp_path, globs=["**/*"]), tmp_path)
    assert root.frontmatter["alwaysApply"] is True
    assert catch_all.frontmatter["alwaysApply"] is True


def test_cursor_passthrough_overrides(tmp_path: Path) -> None:
    rule = _make_rule(
        tmp_path,
        description="Generic",
        globs=["*.py"],
        cursor={"description": "Cursor only", "alwaysApply": True},
    )
    document = CursorRuleAdapter().from_canonical(rule, tmp_path)
    assert document.frontmatter["description"] == "Cursor only"
    assert document.frontmatter["alwaysApply"] is True
    assert document.frontmatter["globs"] == "*.py"


def test_copilot_instructions(tmp_path: Path) -> None:
    adapter = CopilotRuleAdapter()
    document = adapter.from_canonical(_make_rule(tmp_path, description="d"), tmp_path)
    assert document.location.relative_path == ".github/instructions/style.instructions.md"
    assert document.frontmatter == {"description": "d", "applyTo": "**"}
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    assert root.location.relative_path == ".github/copilot-instructions.md"
    assert root.file_content == "Use tabs."


def test_claudecode_modular_rule_paths(tmp_path: Path) -> None:
    adapter = ClaudecodeRuleAdapter()
    rule = _make_rule(tmp_path, globs=["src/**/*.ts"])
    document = adapter.from_canonical(rule, tmp_path)
    assert document.location.relative_path == ".claude/rules/style.md"
    assert document.file_content.startswith("---\npaths: src/**/*.ts\n---\n")
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    assert root.location.relative_path == ".claude/CLAUDE.md"
    assert root.frontmatter == {}


def test_windsurf_triggers(tmp_path: Path) -> None:
    adapter = WindsurfRuleAdapter()
    always = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    globbed = adapter.from_canonical(_make_rule(tmp_path, globs=["*.go"]), tmp_path)
    model = adapter.from_canonical(_make_rule(tmp_path, description="When deploying"), tmp_path)
    assert always.frontmatter == {"trigger": "always_on"}
    assert globbed.frontmatter == {"trigger": "glob", "globs": "*.go"}
    assert model.frontmatter == {"trigger": "model_decision", "description": "When deploying"}


def test_augmentcode_type(tmp_path: Path) -> None:
    adapter = AugmentcodeRuleAdapter()
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    assert root.frontmatter["type"] == "always_apply"
    assert adapter.validate(root).success


def test_kiro_root_is_product_steering_file(tmp_path: Path) -> None:
    adapter = KiroRuleAdapter()
    root = adapter.from_canonical(_make_rule(tmp_path, "overview.md", root=True), tmp_path)
    assert root.location.relative_path == ".kiro/steering/product.md"
    assert adapter.is_root_location(root.location)


def test_cursor_from_file_and_back(tmp_path: Path) -> None:
    path = tmp_path / ".cursor" / "rules" / "api.mdc"
    path.parent.mkdir(parents=True)
    path.write_text(
        "---\ndescription: API rules\nglobs: src/api/**\nalwaysApply: false\n---\n\nValidate input.\n",
        encoding="utf-8",
    )
    adapter = CursorRuleAdapter()
    document = adapter.from_file(DocumentLocation(tmp_path, ".cursor/rules", "api.mdc"))
    assert document.description == "API rules"
    assert document.globs == ["src/api/**"]
    assert document.body == "Validate input."

    canonical = adapter.to_canonical(document)
    assert canonical.location.relative_path == ".ruleweave/rules/api.md"
    assert canonical.frontmatter["targets"] == ["cursor"]
    assert canonical.frontmatter["globs"] == ["src/api/**"]
    assert canonical.body == "Validate input."


def test_root_file_imports_as_overview(tmp_path: Path) -> None:
    (tmp_path / "AGENTS.md").write_text("# Project\n", encoding="utf-8")
    adapter = AgentsmdRuleAdapter()
    document = adapter.from_file(DocumentLocation(tmp_path, ".", "AGENTS.md"))
    canonical = adapter.to_canonical(document)
    assert canonical.location.relative_file_path == "overview.md"
    assert canonical.root


def test_for_deletion_placeholder(tmp_path: Path) -> None:
    placeholder = CopilotRuleAdapter().for_deletion(
        DocumentLocation(tmp_path, ".github/instructions", "old.instructions.md")
    )
    assert placeholder.placeholder
    assert placeholder.deletable
    assert placeholder.body == ""


@pytest.mark.parametrize(
    "target",
    [target for target, entry in RULE_ADAPTERS.items() if not entry.simulated],
)
def test_round_trip_keeps_body_description_and_globs(
    tmp_path: Path, target: ToolTarget
) -> None:
    adapter = RULE_ADAPTERS[target].adapter
    rule = _make_rule(
        tmp_path, body="Prefer pure functions.", description="Style", globs=["*.py"]
    )
    document = adapter.from_canonical(rule, tmp_path)
    document.file_path.parent.mkdir(parents=True, exist_ok=True)
    document.file_path.write_text(document.file_content, encoding="utf-8")

    loaded = adapter.from_file(document.location)
    back = adapter.to_canonical(loaded)
    assert back.body == "Prefer pure functions."
    if target in (ToolTarget.CURSOR, ToolTarget.COPILOT):
        assert back.description == "Style"
    if target in (
        ToolTarget.ANTIGRAVITY,
        ToolTarget.CLAUDECODE,
        ToolTarget.COPILOT,
        ToolTarget.CURSOR,
        ToolTarget.WINDSURF,
    ):
        assert back.globs == ["*.py"]
