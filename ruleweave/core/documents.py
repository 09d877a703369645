"""Document locations and the canonical/tool document base types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Any, Iterable

from ruleweave.errors import PathTraversalError
from ruleweave.filesystem import is_under
from ruleweave.frontmatter import stringify_frontmatter
from ruleweave.targets import WILDCARD, ToolTarget


def _normalize_relative(path: str) -> str:
    return PurePosixPath(path).as_posix()


def strip_tool_dir(relative_dir_path: str, tool_dir: str | None) -> str:
    """Drop the tool's own directory prefix: ``.junie/memories`` -> ``memories``."""
    if not tool_dir:
        return relative_dir_path
    normalized = _normalize_relative(relative_dir_path)
    if normalized == tool_dir:
        return "."
    prefix = f"{tool_dir}/"
    if normalized.startswith(prefix):
        return normalized[len(prefix) :]
    return relative_dir_path


def is_targeting(targets: Any, target: ToolTarget) -> bool:
    if targets is None:
        return True
    if isinstance(targets, str):
        targets = [targets]
    if not isinstance(targets, Iterable):
        return False
    values = list(targets)
    return WILDCARD in values or target in values


@dataclass(frozen=True)
class DocumentLocation:
    base_dir: Path
    relative_dir_path: str
    relative_file_path: str

    @property
    def relative_path(self) -> str:
        """Path relative to ``base_dir`` in POSIX form, as used in ``@path`` references."""
        return PurePosixPath(self.relative_dir_path, self.relative_file_path).as_posix()

    @property
    def file_path(self) -> Path:
        path = Path(self.base_dir) / self.relative_dir_path / self.relative_file_path
        if not is_under(path, Path(self.base_dir)):
            raise PathTraversalError(path)
        return path

    def rebase(self, base_dir: Path) -> DocumentLocation:
        return replace(self, base_dir=base_dir)

    def same_place(self, relative_dir_path: str, relative_file_path: str) -> bool:
        other = PurePosixPath(relative_dir_path, relative_file_path).as_posix()
        return self.relative_path == other


@dataclass(frozen=True)
class SettablePaths:
    relative_dir_path: str
    relative_file_path: str | None = None

    def without_tool_dir(self, tool_dir: str | None) -> SettablePaths:
        return replace(
            self, relative_dir_path=strip_tool_dir(self.relative_dir_path, tool_dir)
        )


@dataclass
class CanonicalDocument:
    location: DocumentLocation
    frontmatter: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def file_content(self) -> str:
        return stringify_frontmatter(self.body, self.frontmatter)

    @property
    def targets(self) -> Any:
        return self.frontmatter.get("targets")

    @property
    def description(self) -> str:
        value = self.frontmatter.get("description")
        return str(value) if value else ""

    def is_targeting(self, target: ToolTarget) -> bool:
        return is_targeting(self.targets, target)

    def passthrough(self, target: ToolTarget) -> dict[str, Any]:
        block = self.frontmatter.get(target.value)
        return dict(block) if isinstance(block, dict) else {}


@dataclass
class ToolDocument:
    target: ToolTarget
    location: DocumentLocation
    body: str = ""
    frontmatter: dict[str, Any] = field(default_factory=dict)
    file_content: str = ""
    passthrough: dict[str, Any] = field(default_factory=dict)
    deletable: bool = True
    placeholder: bool = False

    @property
    def file_path(self) -> Path:
        return self.location.file_path
