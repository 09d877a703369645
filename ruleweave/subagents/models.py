"""Subagent data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from ruleweave.core.documents import CanonicalDocument, ToolDocument
from ruleweave.schema import ValidationResult, validate_schema
from ruleweave.targets import WILDCARD

SUBAGENT_FRONTMATTER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "targets": {
            "anyOf": [
                {"type": "array", "items": {"type": "string"}},
                {"const": WILDCARD},
            ]
        },
        "name": {"type": "string"},
        "description": {"type": "string"},
        "claudecode": {"type": "object", "properties": {"model": {"type": "string"}}},
    },
}


def with_subagent_defaults(frontmatter: dict[str, Any], file_name: str) -> dict[str, Any]:
    return {
        "targets": [WILDCARD],
        "name": PurePosixPath(file_name).stem,
        "description": "",
        **frontmatter,
    }


@dataclass
class CanonicalSubagent(CanonicalDocument):
    @property
    def name(self) -> str:
        value = self.frontmatter.get("name")
        if value:
            return str(value)
        return PurePosixPath(self.location.relative_file_path).stem

    def validate(self) -> ValidationResult:
        return validate_schema(SUBAGENT_FRONTMATTER_SCHEMA, self.frontmatter)


@dataclass
class ToolSubagent(ToolDocument):
    name: str = ""
    description: str = ""
