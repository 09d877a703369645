from __future__ import annotations

from dataclasses import dataclass, field

from ruleweave.core.documents import CanonicalDocument, ToolDocument


def parse_ignore_patterns(text: str) -> list[str]:
    patterns: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


@dataclass
class CanonicalIgnore(CanonicalDocument):
    """The shared ignore list; it has no frontmatter so every ignore-capable tool receives it."""

    @property
    def patterns(self) -> list[str]:
        return parse_ignore_patterns(self.body)


@dataclass
class ToolIgnore(ToolDocument):
    patterns: list[str] = field(default_factory=list)
