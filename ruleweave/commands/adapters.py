"""Per-tool custom command adapters."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from ruleweave.commands.models import CanonicalCommand, ToolCommand
from ruleweave.constants import COMMANDS_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument, DocumentLocation
from ruleweave.core.markdown import DirectoryMarkdownAdapter
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import read_file_content
from ruleweave.schema import ValidationResult
from ruleweave.targets import ToolTarget
from ruleweave.toml_writer import dumps_toml


class ToolCommandAdapter(DirectoryMarkdownAdapter):
    """Markdown prompt files with a ``description`` frontmatter key."""

    KIND = "commands"
    NATIVE_KEYS = ("description",)

    def uses_frontmatter(self, document: ToolCommand) -> bool:
        return True

    def build_frontmatter(self, document: ToolCommand) -> dict[str, Any]:
        return {"description": document.description} if document.description else {}

    def read_frontmatter(self, document: ToolCommand) -> None:
        super().read_frontmatter(document)
        document.description = str(document.frontmatter.get("description") or "")

    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolCommand | None:
        if not self.is_targeted_by(canonical):
            return None
        command = ToolCommand(
            target=self.TARGET,
            location=self.tool_location(canonical, base_dir, global_mode),
            body=canonical.body,
            passthrough=canonical.passthrough(self.TARGET),
            description=canonical.description,
        )
        self.render(command)
        return command

    def to_canonical(self, document: ToolCommand) -> CanonicalCommand:  # type: ignore[override]
        if self.SIMULATED:
            self.reject_reverse_conversion()
        frontmatter: dict[str, Any] = {
            "targets": [self.TARGET.value],
            "description": document.description,
        }
        if document.passthrough:
            frontmatter[self.TARGET.value] = dict(document.passthrough)
        return CanonicalCommand(
            location=DocumentLocation(
                document.location.base_dir,
                COMMANDS_RELATIVE_DIR,
                self.canonical_file_name(document),
            ),
            frontmatter=frontmatter,
            body=document.body,
        )

    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolCommand:
        return ToolCommand(target=self.TARGET, location=location, placeholder=True)

    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolCommand:
        command = ToolCommand(
            target=self.TARGET,
            location=location,
            file_content=read_file_content(location.file_path),
        )
        self.load_content(command)
        return command


class PlainCommandAdapter(ToolCommandAdapter):
    """The whole file is the prompt."""

    def uses_frontmatter(self, document: ToolCommand) -> bool:
        return False


class AgentsmdCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.AGENTSMD
    SIMULATED = True
    DIR = ".agents/commands"


class AntigravityCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.ANTIGRAVITY
    DIR = ".agent/workflows"


class ClaudecodeCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.CLAUDECODE
    DIR = ".claude/commands"
    GLOBAL_DIR = ".claude/commands"


class ClineCommandAdapter(PlainCommandAdapter):
    TARGET = ToolTarget.CLINE
    DIR = ".clinerules/workflows"


class CodexcliCommandAdapter(PlainCommandAdapter):
    TARGET = ToolTarget.CODEXCLI
    GLOBAL_DIR = ".codex/prompts"


class CopilotCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.COPILOT
    DIR = ".github/prompts"
    EXTENSION = ".prompt.md"

    def build_frontmatter(self, document: ToolCommand) -> dict[str, Any]:
        fm: dict[str, Any] = {"mode": document.passthrough.get("mode", "agent")}
        fm.update(super().build_frontmatter(document))
        return fm


class CursorCommandAdapter(PlainCommandAdapter):
    TARGET = ToolTarget.CURSOR
    DIR = ".cursor/commands"
    GLOBAL_DIR = ".cursor/commands"


class GeminicliCommandAdapter(ToolCommandAdapter):
    """Gemini CLI commands are TOML files with ``description`` and ``prompt``."""

    TARGET = ToolTarget.GEMINICLI
    DIR = ".gemini/commands"
    GLOBAL_DIR = ".gemini/commands"
    EXTENSION = ".toml"
    NATIVE_KEYS = ("description", "prompt")

    def render(self, document: ToolCommand) -> None:
        payload: dict[str, Any] = {}
        if document.description:
            payload["description"] = document.description
        for key, value in document.passthrough.items():
            if key not in self.NATIVE_KEYS:
                payload[key] = value
        payload["prompt"] = document.body
        document.frontmatter = {}
        document.file_content = dumps_toml(payload, multiline=("prompt",))

    def _parse(self, document: ToolCommand) -> dict[str, Any]:
        try:
            return tomllib.loads(document.file_content)
        except tomllib.TOMLDecodeError as exc:
            raise DocumentParseError(
                document.location.file_path, f"invalid TOML: {exc}"
            ) from exc

    def load_content(self, document: ToolCommand) -> None:
        payload = self._parse(document)
        document.body = str(payload.get("prompt", "")).strip()
        document.description = str(payload.get("description") or "")
        document.passthrough = {
            key: value for key, value in payload.items() if key not in self.NATIVE_KEYS
        }

    def validate_content(self, document: ToolCommand) -> ValidationResult:
        try:
            payload = tomllib.loads(document.file_content)
        except tomllib.TOMLDecodeError as exc:
            return ValidationResult.failed(f"invalid TOML: {exc}")
        if not isinstance(payload.get("prompt"), str):
            return ValidationResult.failed("'prompt' is a required string")
        return ValidationResult.ok()


class OpencodeCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.OPENCODE
    DIR = ".opencode/command"
    GLOBAL_DIR = ".config/opencode/command"


class RooCommandAdapter(ToolCommandAdapter):
    TARGET = ToolTarget.ROO
    DIR = ".roo/commands"
