"""Parse and serialize documents with a YAML frontmatter block."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from ruleweave.errors import DocumentParseError

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def parse_frontmatter(
    text: str, path: Path | str = "<memory>"
) -> tuple[dict[str, Any], str]:
    """Split ``text`` into (frontmatter, body).

    Text without a frontmatter block yields an empty mapping and the whole
    text as body. A block that is not valid YAML, or is not a mapping, raises
    :class:`DocumentParseError`.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return {}, text

    try:
        raw = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise DocumentParseError(path, f"frontmatter is not valid YAML: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DocumentParseError(path, "frontmatter must be a mapping")
    return raw, text[match.end() :]


def stringify_frontmatter(body: str, frontmatter: dict[str, Any]) -> str:
    fm = {key: value for key, value in frontmatter.items() if value is not None}
    if not fm:
        return body

    parts: list[str] = []
    parts.append("---")
    parts.append(
        yaml.dump(
            fm, default_flow_style=False, sort_keys=False, allow_unicode=True
        ).rstrip()
    )
    parts.append("---")
    parts.append("")
    parts.append(body)
    return "\n".join(parts)
