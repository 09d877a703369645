"""Per-tool rule adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from ruleweave.constants import (
    AGENTS_FILENAME,
    CLAUDE_FILENAME,
    ROOT_RULE_FILENAME,
    RULES_RELATIVE_DIR,
)
from ruleweave.core.documents import CanonicalDocument, DocumentLocation, SettablePaths
from ruleweave.core.markdown import MarkdownToolAdapter
from ruleweave.errors import MissingToolPathError
from ruleweave.filesystem import read_file_content
from ruleweave.rules.models import CanonicalRule, RuleSettablePaths, ToolRule
from ruleweave.targets import ToolTarget


def split_globs(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return []


class ToolRuleAdapter(MarkdownToolAdapter):
    """Plain Markdown rule files; description and globs live on the document only."""

    ROOT: ClassVar[SettablePaths | None] = None
    NON_ROOT_DIR: ClassVar[str | None] = None
    GLOBAL_ROOT: ClassVar[SettablePaths | None] = None

    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> RuleSettablePaths:
        if global_mode:
            paths = RuleSettablePaths(root=self.GLOBAL_ROOT)
        else:
            paths = RuleSettablePaths(
                root=self.ROOT,
                non_root=SettablePaths(self.NON_ROOT_DIR) if self.NON_ROOT_DIR else None,
            )
        if exclude_tool_dir:
            return paths.without_tool_dir(self.tool_dir)
        return paths

    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolRule | None:
        if not self.is_targeted_by(canonical):
            return None
        canonical = self.expect_document(canonical, CanonicalRule)
        location, root = self.locate(canonical, Path(base_dir), global_mode)
        rule = ToolRule(
            target=self.TARGET,
            location=location,
            body=canonical.body,
            passthrough=canonical.passthrough(self.TARGET),
            root=root,
            description=canonical.description,
            globs=canonical.globs,
            always_apply=canonical.root,
        )
        self.render(rule)
        return rule

    def locate(
        self, canonical: CanonicalRule, base_dir: Path, global_mode: bool
    ) -> tuple[DocumentLocation, bool]:
        paths = self.get_settable_paths(global_mode=global_mode)
        if canonical.root and paths.root is not None:
            return (
                DocumentLocation(
                    base_dir,
                    paths.root.relative_dir_path,
                    paths.root.relative_file_path or "",
                ),
                True,
            )
        if paths.non_root is None:
            kind = "root rules" if canonical.root else "non-root rules"
            raise MissingToolPathError(self.TARGET.value, kind)
        return (
            DocumentLocation(
                base_dir,
                paths.non_root.relative_dir_path,
                self.tool_file_name(canonical.location.relative_file_path),
            ),
            False,
        )

    def canonical_file_name(self, document: ToolRule) -> str:  # type: ignore[override]
        if document.root:
            return ROOT_RULE_FILENAME
        return super().canonical_file_name(document)

    def to_canonical(self, document: ToolRule) -> CanonicalRule:  # type: ignore[override]
        frontmatter: dict[str, Any] = {
            "root": document.root,
            "targets": [self.TARGET.value],
            "description": document.description,
            "globs": list(document.globs),
        }
        if document.passthrough:
            frontmatter[self.TARGET.value] = dict(document.passthrough)
        return CanonicalRule(
            location=DocumentLocation(
                document.location.base_dir,
                RULES_RELATIVE_DIR,
                self.canonical_file_name(document),
            ),
            frontmatter=frontmatter,
            body=document.body,
        )

    def is_root_location(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> bool:
        root = self.get_settable_paths(global_mode=global_mode).root
        if root is None or root.relative_file_path is None:
            return False
        return location.same_place(root.relative_dir_path, root.relative_file_path)

    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolRule:
        return ToolRule(
            target=self.TARGET,
            location=location,
            root=self.is_root_location(location, global_mode),
            placeholder=True,
        )

    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolRule:
        path = location.file_path
        text = read_file_content(path)
        rule = ToolRule(
            target=self.TARGET,
            location=location,
            file_content=text,
            root=self.is_root_location(location, global_mode),
        )
        self.load_content(rule)
        return rule


class AgentsmdRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.AGENTSMD
    ROOT = SettablePaths(".", AGENTS_FILENAME)
    NON_ROOT_DIR = ".agents/memories"

    def locate(
        self, canonical: CanonicalRule, base_dir: Path, global_mode: bool
    ) -> tuple[DocumentLocation, bool]:
        subproject = canonical.passthrough(self.TARGET).get("subprojectPath")
        if subproject and not canonical.root and not global_mode:
            return DocumentLocation(base_dir, str(subproject), AGENTS_FILENAME), False
        return super().locate(canonical, base_dir, global_mode)


class AmazonqcliRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.AMAZONQCLI
    NON_ROOT_DIR = ".amazonq/rules"


class TriggerRuleAdapter(ToolRuleAdapter):
    """Rules activated by a ``trigger`` frontmatter key."""

    NATIVE_KEYS = ("trigger", "globs", "description")

    def uses_frontmatter(self, rule: ToolRule) -> bool:
        return True

    def build_frontmatter(self, rule: ToolRule) -> dict[str, Any]:
        if rule.always_apply:
            return {"trigger": "always_on"}
        if rule.globs:
            return {"trigger": "glob", "globs": ",".join(rule.globs)}
        return {"trigger": "model_decision", "description": rule.description}

    def read_frontmatter(self, rule: ToolRule) -> None:
        super().read_frontmatter(rule)
        rule.always_apply = rule.frontmatter.get("trigger") == "always_on"
        rule.globs = split_globs(rule.frontmatter.get("globs"))
        rule.description = str(rule.frontmatter.get("description") or "")


class AntigravityRuleAdapter(TriggerRuleAdapter):
    TARGET = ToolTarget.ANTIGRAVITY
    NON_ROOT_DIR = ".agent/rules"


class WindsurfRuleAdapter(TriggerRuleAdapter):
    TARGET = ToolTarget.WINDSURF
    NON_ROOT_DIR = ".windsurf/rules"


class AugmentcodeRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.AUGMENTCODE
    NON_ROOT_DIR = ".augment/rules"
    NATIVE_KEYS = ("type", "description")
    FRONTMATTER_SCHEMA = {
        "type": "object",
        "properties": {
            "type": {"enum": ["always_apply", "agent_requested", "manual"]},
            "description": {"type": "string"},
        },
    }

    def uses_frontmatter(self, rule: ToolRule) -> bool:
        return True

    def build_frontmatter(self, rule: ToolRule) -> dict[str, Any]:
        return {
            "type": "always_apply" if rule.always_apply else "agent_requested",
            "description": rule.description,
        }

    def read_frontmatter(self, rule: ToolRule) -> None:
        super().read_frontmatter(rule)
        rule.always_apply = rule.frontmatter.get("type") == "always_apply"
        rule.description = str(rule.frontmatter.get("description") or "")


class AugmentcodeLegacyRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.AUGMENTCODE_LEGACY
    ROOT = SettablePaths(".", ".augment-guidelines")
    NON_ROOT_DIR = ".augment/rules"


class ClaudecodeRuleAdapter(ToolRuleAdapter):
    """Root CLAUDE.md is plain; modular rules carry a comma-joined ``paths`` key."""

    TARGET = ToolTarget.CLAUDECODE
    ROOT = SettablePaths(".claude", CLAUDE_FILENAME)
    NON_ROOT_DIR = ".claude/rules"
    GLOBAL_ROOT = SettablePaths(".claude", CLAUDE_FILENAME)
    NATIVE_KEYS = ("paths",)

    def uses_frontmatter(self, rule: ToolRule) -> bool:
        return not rule.root

    def build_frontmatter(self, rule: ToolRule) -> dict[str, Any]:
        paths = split_globs(rule.passthrough.get("paths")) or rule.globs
        return {"paths": ",".join(paths)} if paths else {}

    def read_frontmatter(self, rule: ToolRule) -> None:
        super().read_frontmatter(rule)
        rule.globs = split_globs(rule.frontmatter.get("paths"))


class ClaudecodeLegacyRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.CLAUDECODE_LEGACY
    ROOT = SettablePaths(".", CLAUDE_FILENAME)
    NON_ROOT_DIR = ".claude/memories"
    GLOBAL_ROOT = SettablePaths(".claude", CLAUDE_FILENAME)


class ClineRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.CLINE
    NON_ROOT_DIR = ".clinerules"


class CodexcliRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.CODEXCLI
    ROOT = SettablePaths(".", AGENTS_FILENAME)
    NON_ROOT_DIR = ".codex/memories"
    GLOBAL_ROOT = SettablePaths(".codex", AGENTS_FILENAME)


class CopilotRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.COPILOT
    ROOT = SettablePaths(".github", "copilot-instructions.md")
    NON_ROOT_DIR = ".github/instructions"
    EXTENSION = ".instructions.md"
    NATIVE_KEYS = ("description", "applyTo")
    FRONTMATTER_SCHEMA = {
        "type": "object",
        "properties": {
            "description": {"type": "string"},
            "applyTo": {"type": "string"},
            "excludeAgent": {"type": "string"},
        },
        "required": ["applyTo"],
    }

    def uses_frontmatter(self, rule: ToolRule) -> bool:
        return not rule.root

    def build_frontmatter(self, rule: ToolRule) -> dict[str, Any]:
        fm: dict[str, Any] = {}
        if rule.description:
            fm["description"] = rule.description
        fm["applyTo"] = ",".join(rule.globs) if rule.globs else "**"
        return fm

    def read_frontmatter(self, rule: ToolRule) -> None:
        super().read_frontmatter(rule)
        rule.description = str(rule.frontmatter.get("description") or "")
        rule.globs = split_globs(rule.frontmatter.get("applyTo"))


class CursorRuleAdapter(ToolRuleAdapter):
    """Compile to Cursor .mdc files with camelCase frontmatter."""

    TARGET = ToolTarget.CURSOR
    NON_ROOT_DIR = ".cursor/rules"
    EXTENSION = ".mdc"
    NATIVE_KEYS = ("description", "globs", "alwaysApply")
    FRONTMATTER_SCHEMA = {
        "type": "object",
        "properties": {
            "description": {"type": "string"},
            "globs": {"type": "string"},
            "alwaysApply": {"type": "boolean"},
        },
    }

    def uses_frontmatter(self, rule: ToolRule) -> bool:
        return True

    def build_frontmatter(self, rule: ToolRule) -> dict[str, Any]:
        overrides = rule.passthrough
        globs = (
            split_globs(overrides["globs"]) if "globs" in overrides else rule.globs
        )
        always_apply = overrides.get(
            "alwaysApply", rule.always_apply or globs == ["**/*"]
        )
        return {
            "description": str(overrides.get("description", rule.description)),
            "globs": ",".join(globs),
            "alwaysApply": bool(always_apply),
        }

    def read_frontmatter(self, rule: ToolRule) -> None:
        super().read_frontmatter(rule)
        rule.description = str(rule.frontmatter.get("description") or "")
        rule.globs = split_globs(rule.frontmatter.get("globs"))
        rule.always_apply = bool(rule.frontmatter.get("alwaysApply", False))
        if rule.always_apply:
            rule.passthrough["alwaysApply"] = True


class GeminicliRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.GEMINICLI
    ROOT = SettablePaths(".", "GEMINI.md")
    NON_ROOT_DIR = ".gemini/memories"
    GLOBAL_ROOT = SettablePaths(".gemini", "GEMINI.md")


class JunieRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.JUNIE
    ROOT = SettablePaths(".junie", "guidelines.md")
    NON_ROOT_DIR = ".junie/memories"


class KiroRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.KIRO
    ROOT = SettablePaths(".kiro/steering", "product.md")
    NON_ROOT_DIR = ".kiro/steering"


class OpencodeRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.OPENCODE
    ROOT = SettablePaths(".", AGENTS_FILENAME)
    NON_ROOT_DIR = ".opencode/memories"
    GLOBAL_ROOT = SettablePaths(".config/opencode", AGENTS_FILENAME)


class QwencodeRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.QWENCODE
    ROOT = SettablePaths(".", "QWEN.md")
    NON_ROOT_DIR = ".qwen/memories"


class RooRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.ROO
    NON_ROOT_DIR = ".roo/rules"


class WarpRuleAdapter(ToolRuleAdapter):
    TARGET = ToolTarget.WARP
    ROOT = SettablePaths(".", "WARP.md")
    NON_ROOT_DIR = ".warp/memories"
