"""Shared behaviour for adapters whose native files are Markdown with optional frontmatter."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, ClassVar

from ruleweave.core.adapter import IToolAdapter
from ruleweave.core.documents import (
    CanonicalDocument,
    DocumentLocation,
    SettablePaths,
    ToolDocument,
)
from ruleweave.errors import MissingToolPathError
from ruleweave.frontmatter import parse_frontmatter, stringify_frontmatter
from ruleweave.schema import ValidationResult, validate_schema


class MarkdownToolAdapter(IToolAdapter):
    EXTENSION: ClassVar[str] = ".md"
    # Frontmatter keys the adapter derives itself; everything else is passthrough.
    NATIVE_KEYS: ClassVar[tuple[str, ...]] = ()
    FRONTMATTER_SCHEMA: ClassVar[dict[str, Any] | None] = None

    def tool_file_name(self, canonical_file_name: str) -> str:
        if canonical_file_name.endswith(".md"):
            stem = canonical_file_name[: -len(".md")]
        else:
            stem = PurePosixPath(canonical_file_name).stem
        return f"{stem}{self.EXTENSION}"

    def canonical_file_name(self, document: ToolDocument) -> str:
        name = document.location.relative_file_path
        if name.endswith(self.EXTENSION):
            name = name[: -len(self.EXTENSION)]
        return f"{name}.md"

    def uses_frontmatter(self, document: ToolDocument) -> bool:
        return False

    def build_frontmatter(self, document: ToolDocument) -> dict[str, Any]:
        return {}

    def read_frontmatter(self, document: ToolDocument) -> None:
        document.passthrough = {
            key: value
            for key, value in document.frontmatter.items()
            if key not in self.NATIVE_KEYS
        }

    def render(self, document: ToolDocument) -> None:
        frontmatter: dict[str, Any] = {}
        if self.uses_frontmatter(document):
            frontmatter = self.build_frontmatter(document)
            for key, value in document.passthrough.items():
                if key not in self.NATIVE_KEYS:
                    frontmatter.setdefault(key, value)
        document.frontmatter = frontmatter
        document.file_content = stringify_frontmatter(document.body, frontmatter)

    def load_content(self, document: ToolDocument) -> None:
        """Split ``document.file_content`` into frontmatter and body."""
        body = document.file_content
        if self.uses_frontmatter(document):
            document.frontmatter, body = parse_frontmatter(
                document.file_content, document.location.file_path
            )
        document.body = body.strip()
        self.read_frontmatter(document)

    def validate_content(self, document: ToolDocument) -> ValidationResult:
        if self.FRONTMATTER_SCHEMA is None or not document.frontmatter:
            return ValidationResult.ok()
        return validate_schema(self.FRONTMATTER_SCHEMA, document.frontmatter)


class DirectoryMarkdownAdapter(MarkdownToolAdapter):
    """One native file per canonical file, all in a single tool directory."""

    DIR: ClassVar[str | None] = None
    GLOBAL_DIR: ClassVar[str | None] = None
    KIND: ClassVar[str] = "documents"

    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> SettablePaths:
        directory = self.GLOBAL_DIR if global_mode else self.DIR
        if directory is None:
            scope = "global" if global_mode else "project"
            raise MissingToolPathError(self.TARGET.value, f"{scope} {self.KIND}")
        paths = SettablePaths(directory)
        if exclude_tool_dir:
            return paths.without_tool_dir(self.tool_dir)
        return paths

    def tool_location(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool
    ) -> DocumentLocation:
        paths = self.get_settable_paths(global_mode=global_mode)
        return DocumentLocation(
            Path(base_dir),
            paths.relative_dir_path,
            self.tool_file_name(canonical.location.relative_file_path),
        )
