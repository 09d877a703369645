"""Splice a references section into the root rule of a generated rule set."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from enum import Enum
from typing import Final, Sequence

from ruleweave.rules.models import ToolRule


class ReferenceMode(str, Enum):
    NONE = "none"
    TEXT = "text"
    XML = "xml"


TEXT_HEADER: Final[str] = "Please also reference the following documents as needed:"
XML_HEADER: Final[str] = (
    "Please also reference the following documents as needed. "
    "In this case, `@` stands for the project root directory."
)


def _escape_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def render_text_references(rules: Sequence[ToolRule]) -> str:
    if not rules:
        return ""
    lines = [
        f"@{rule.location.relative_path} "
        f'description: "{_escape_quotes(rule.description)}" '
        f'applyTo: "{",".join(rule.globs)}"'
        for rule in rules
    ]
    return f"{TEXT_HEADER}\n\n" + "\n".join(lines) + "\n\n"


def render_xml_references(rules: Sequence[ToolRule]) -> str:
    if not rules:
        return ""
    documents = ET.Element("Documents")
    for rule in rules:
        node = ET.SubElement(documents, "Document")
        ET.SubElement(node, "Path").text = f"@{rule.location.relative_path}"
        if rule.description:
            ET.SubElement(node, "Description").text = rule.description
        if rule.globs:
            ET.SubElement(node, "FilePatterns").text = ", ".join(rule.globs)
    ET.indent(documents, space="  ")
    return f"{XML_HEADER}\n\n{ET.tostring(documents, encoding='unicode')}\n\n"


def render_references(rules: Sequence[ToolRule], mode: ReferenceMode) -> str:
    if mode == ReferenceMode.TEXT:
        return render_text_references(rules)
    if mode == ReferenceMode.XML:
        return render_xml_references(rules)
    return ""


def render_conventions(
    commands_dir: str | None = None, subagents_dir: str | None = None
) -> str:
    """Describe simulated commands and subagents for tools without native support."""
    if commands_dir is None and subagents_dir is None:
        return ""

    parts = [
        "# Additional Conventions Beyond the Built-in Functions",
        "This project defines conventions your tool does not provide natively. "
        "Follow them in addition to your built-in behaviour.",
    ]
    if commands_dir is not None:
        parts.extend(
            [
                "## Simulated Custom Slash Commands",
                "A custom command is a Markdown prompt stored in the project. "
                "Users invoke one with:",
                "s/<command> [arguments]",
                f"When invoked, read `{commands_dir}/<command>.md` and carry out "
                "its instructions with the given arguments.",
            ]
        )
    if subagents_dir is not None:
        parts.extend(
            [
                "## Simulated Subagents",
                "A subagent is a Markdown prompt describing a specialised role. "
                "Users invoke one with:",
                "Call <subagent> to <task>",
                f"When invoked, read `{subagents_dir}/<subagent>.md` and perform "
                "the task as described there.",
            ]
        )
    return "\n\n".join(parts) + "\n\n"


def aggregate_root(
    rules: Sequence[ToolRule], mode: ReferenceMode, conventions: str = ""
) -> None:
    """Prefix the root rule's content with references to the non-root rules.

    Mutates the root document in place; the others are left untouched.
    """
    root = next((rule for rule in rules if rule.root), None)
    if root is None:
        return
    non_root = [rule for rule in rules if not rule.root]
    section = render_references(non_root, mode) + conventions
    if section:
        root.file_content = section + root.file_content
