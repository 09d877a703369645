"""Per-tool ignore file adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from ruleweave.constants import IGNORE_FILENAME, IGNORE_RELATIVE_DIR
from ruleweave.core.adapter import IToolAdapter
from ruleweave.core.documents import CanonicalDocument, DocumentLocation, SettablePaths
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import dump_json, parse_json, read_file_content
from ruleweave.ignore.models import CanonicalIgnore, ToolIgnore, parse_ignore_patterns
from ruleweave.schema import ValidationResult
from ruleweave.targets import ToolTarget


class ToolIgnoreAdapter(IToolAdapter):
    """Ignore files that are a plain list of gitignore-style patterns."""

    PATH: ClassVar[SettablePaths]
    DELETABLE: ClassVar[bool] = True

    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> SettablePaths:
        if exclude_tool_dir:
            return self.PATH.without_tool_dir(self.tool_dir)
        return self.PATH

    def location(self, base_dir: Path) -> DocumentLocation:
        return DocumentLocation(
            Path(base_dir), self.PATH.relative_dir_path, self.PATH.relative_file_path or ""
        )

    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolIgnore | None:
        if not self.is_targeted_by(canonical):
            return None
        document = ToolIgnore(
            target=self.TARGET,
            location=self.location(base_dir),
            body=canonical.body,
            patterns=parse_ignore_patterns(canonical.body),
            deletable=self.DELETABLE,
        )
        self.render(document)
        return document

    def render(self, document: ToolIgnore) -> None:
        document.file_content = document.body

    def read(self, document: ToolIgnore) -> None:
        document.body = document.file_content.strip()
        document.patterns = parse_ignore_patterns(document.body)

    def to_canonical(self, document: ToolIgnore) -> CanonicalIgnore:  # type: ignore[override]
        return CanonicalIgnore(
            location=DocumentLocation(
                document.location.base_dir, IGNORE_RELATIVE_DIR, IGNORE_FILENAME
            ),
            body=document.body,
        )

    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolIgnore:
        return ToolIgnore(
            target=self.TARGET,
            location=location,
            placeholder=True,
            deletable=self.DELETABLE,
        )

    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolIgnore:
        document = ToolIgnore(
            target=self.TARGET,
            location=location,
            file_content=read_file_content(location.file_path),
            deletable=self.DELETABLE,
        )
        self.read(document)
        return document


class JsonSettingsIgnoreAdapter(ToolIgnoreAdapter):
    """Patterns stored inside a JSON settings file the user also edits."""

    DELETABLE = False

    def settings(self, text: str, path: Path | str) -> dict[str, Any]:
        if not text.strip():
            return {}
        payload = parse_json(text, path)
        if not isinstance(payload, dict):
            raise DocumentParseError(path, "settings must be a JSON object")
        return payload

    def apply_patterns(self, settings: dict[str, Any], patterns: list[str]) -> None:
        raise NotImplementedError

    def extract_patterns(self, settings: dict[str, Any]) -> list[str]:
        raise NotImplementedError

    def render(self, document: ToolIgnore) -> None:
        settings: dict[str, Any] = {}
        self.apply_patterns(settings, document.patterns)
        document.file_content = dump_json(settings)

    def merge_with_existing(self, document: ToolIgnore, existing: str) -> str:  # type: ignore[override]
        settings = self.settings(existing, document.location.file_path)
        self.apply_patterns(settings, document.patterns)
        return dump_json(settings)

    def read(self, document: ToolIgnore) -> None:
        settings = self.settings(document.file_content, document.location.file_path)
        document.patterns = self.extract_patterns(settings)
        document.body = "\n".join(document.patterns)

    def validate_content(self, document: ToolIgnore) -> ValidationResult:  # type: ignore[override]
        try:
            self.settings(document.file_content, document.location.file_path)
        except DocumentParseError as exc:
            return ValidationResult.failed(exc.detail)
        return ValidationResult.ok()


class AmazonqcliIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.AMAZONQCLI
    PATH = SettablePaths(".", ".amazonqignore")


class AugmentcodeIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.AUGMENTCODE
    PATH = SettablePaths(".", ".augmentignore")


class ClaudecodeIgnoreAdapter(JsonSettingsIgnoreAdapter):
    """``permissions.deny`` entries of the form ``Read(<pattern>)``."""

    TARGET = ToolTarget.CLAUDECODE
    PATH = SettablePaths(".claude", "settings.local.json")

    def apply_patterns(self, settings: dict[str, Any], patterns: list[str]) -> None:
        permissions = settings.setdefault("permissions", {})
        kept = [
            entry
            for entry in permissions.get("deny", [])
            if not (isinstance(entry, str) and entry.startswith("Read("))
        ]
        reads = [f"Read({pattern})" for pattern in patterns]
        permissions["deny"] = kept + [entry for entry in reads if entry not in kept]

    def extract_patterns(self, settings: dict[str, Any]) -> list[str]:
        permissions = settings.get("permissions")
        if not isinstance(permissions, dict):
            return []
        return [
            entry[len("Read(") : -1]
            for entry in permissions.get("deny", [])
            if isinstance(entry, str) and entry.startswith("Read(") and entry.endswith(")")
        ]


class ClineIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.CLINE
    PATH = SettablePaths(".", ".clineignore")


class CursorIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.CURSOR
    PATH = SettablePaths(".", ".cursorignore")


class GeminicliIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.GEMINICLI
    PATH = SettablePaths(".", ".geminiignore")


class JunieIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.JUNIE
    PATH = SettablePaths(".junie", ".aiignore")


class RooIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.ROO
    PATH = SettablePaths(".", ".rooignore")


class WindsurfIgnoreAdapter(ToolIgnoreAdapter):
    TARGET = ToolTarget.WINDSURF
    PATH = SettablePaths(".", ".codeiumignore")


class ZedIgnoreAdapter(JsonSettingsIgnoreAdapter):
    TARGET = ToolTarget.ZED
    PATH = SettablePaths(".zed", "settings.json")

    def apply_patterns(self, settings: dict[str, Any], patterns: list[str]) -> None:
        settings["private_files"] = list(patterns)

    def extract_patterns(self, settings: dict[str, Any]) -> list[str]:
        values = settings.get("private_files")
        if not isinstance(values, list):
            return []
        return [str(value) for value in values]
