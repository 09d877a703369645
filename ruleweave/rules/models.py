"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ruleweave.core.documents import CanonicalDocument, SettablePaths, ToolDocument
from ruleweave.schema import ValidationResult, validate_schema
from ruleweave.targets import WILDCARD

_STRING_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

RULE_FRONTMATTER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "root": {"type": "boolean"},
        "targets": {"anyOf": [_STRING_LIST, {"const": WILDCARD}]},
        "description": {"type": "string"},
        "globs": _STRING_LIST,
        "agentsmd": {
            "type": "object",
            "properties": {"subprojectPath": {"type": "string"}},
        },
        "claudecode": {"type": "object", "properties": {"paths": _STRING_LIST}},
        "copilot": {
            "type": "object",
            "properties": {"excludeAgent": {"type": "string"}},
        },
        "cursor": {
            "type": "object",
            "properties": {
                "alwaysApply": {"type": "boolean"},
                "description": {"type": "string"},
                "globs": _STRING_LIST,
            },
        },
    },
}


def with_rule_defaults(frontmatter: dict[str, Any]) -> dict[str, Any]:
    return {
        "root": False,
        "targets": [WILDCARD],
        "description": "",
        "globs": [],
        **frontmatter,
    }


@dataclass
class CanonicalRule(CanonicalDocument):
    @property
    def root(self) -> bool:
        return bool(self.frontmatter.get("root", False))

    @property
    def globs(self) -> list[str]:
        globs = self.frontmatter.get("globs")
        if not isinstance(globs, list):
            return []
        return [str(item) for item in globs]

    def validate(self) -> ValidationResult:
        return validate_schema(RULE_FRONTMATTER_SCHEMA, self.frontmatter)


@dataclass
class ToolRule(ToolDocument):
    root: bool = False
    description: str = ""
    globs: list[str] = field(default_factory=list)
    always_apply: bool = False


@dataclass(frozen=True)
class RuleSettablePaths:
    root: SettablePaths | None = None
    non_root: SettablePaths | None = None

    def without_tool_dir(self, tool_dir: str | None) -> RuleSettablePaths:
        return RuleSettablePaths(
            root=self.root.without_tool_dir(tool_dir) if self.root else None,
            non_root=self.non_root.without_tool_dir(tool_dir)
            if self.non_root
            else None,
        )
