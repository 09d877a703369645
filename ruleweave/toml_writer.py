"""Minimal TOML serializer for the files ruleweave writes.

Reading uses :mod:`tomllib`; it has no writer, so tables of scalars, arrays
and nested tables are dumped here. Values read back from tomllib, dates and
times included, keep their types; comments in the source file are not kept.
"""

from __future__ import annotations

import datetime
import re
from typing import Any

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")
# Control characters TOML forbids raw in strings; \n and \t are handled separately.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def _escape_control(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group(0)):04x}"


def _dump_key(key: str) -> str:
    if _BARE_KEY_RE.match(key):
        return key
    return _dump_toml_value(key)


def _dump_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, list):
        return "[" + ", ".join(_dump_toml_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(
            f"{_dump_key(str(k))} = {_dump_toml_value(v)}" for k, v in value.items()
        )
        return "{ " + items + " }" if items else "{}"
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{_CONTROL_RE.sub(_escape_control, escaped)}"'


def dump_multiline_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"""', '""\\"')
    escaped = _CONTROL_RE.sub(_escape_control, escaped)
    return f'"""\n{escaped}\n"""'


def _dump_table(
    lines: list[str],
    prefix: str,
    table: dict[str, Any],
    multiline: frozenset[str] = frozenset(),
) -> None:
    scalars = [(k, v) for k, v in table.items() if not isinstance(v, dict)]
    tables = [(k, v) for k, v in table.items() if isinstance(v, dict)]

    if prefix and (scalars or not tables):
        lines.append(f"[{prefix}]")
    for key, value in scalars:
        if key in multiline and isinstance(value, str):
            rendered = dump_multiline_string(value)
        else:
            rendered = _dump_toml_value(value)
        lines.append(f"{_dump_key(str(key))} = {rendered}")
    if prefix and (scalars or not tables):
        lines.append("")
    elif scalars:
        lines.append("")

    for key, value in tables:
        name = _dump_key(str(key))
        _dump_table(lines, f"{prefix}.{name}" if prefix else name, value)


def dumps_toml(payload: dict[str, Any], multiline: tuple[str, ...] = ()) -> str:
    """Serialize ``payload``; top-level string keys named in ``multiline`` use triple quotes."""
    lines: list[str] = []
    _dump_table(lines, "", payload, frozenset(multiline))
    text = "\n".join(lines).strip()
    return f"{text}\n" if text else ""
