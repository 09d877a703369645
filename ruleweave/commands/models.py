"""Command data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ruleweave.core.documents import CanonicalDocument, ToolDocument
from ruleweave.schema import ValidationResult, validate_schema
from ruleweave.targets import WILDCARD

COMMAND_FRONTMATTER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "targets": {
            "anyOf": [
                {"type": "array", "items": {"type": "string"}},
                {"const": WILDCARD},
            ]
        },
        "description": {"type": "string"},
        "copilot": {"type": "object", "properties": {"mode": {"type": "string"}}},
    },
}


def with_command_defaults(frontmatter: dict[str, Any]) -> dict[str, Any]:
    return {"targets": [WILDCARD], "description": "", **frontmatter}


@dataclass
class CanonicalCommand(CanonicalDocument):
    def validate(self) -> ValidationResult:
        return validate_schema(COMMAND_FRONTMATTER_SCHEMA, self.frontmatter)


@dataclass
class ToolCommand(ToolDocument):
    description: str = ""
