"""Per-tool MCP configuration adapters."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, ClassVar

from ruleweave.constants import MCP_FILENAME, MCP_RELATIVE_DIR
from ruleweave.core.adapter import IToolAdapter
from ruleweave.core.documents import CanonicalDocument, DocumentLocation, SettablePaths
from ruleweave.errors import DocumentParseError, MissingToolPathError
from ruleweave.filesystem import dump_json, parse_json, read_file_content
from ruleweave.mcp.mappers import (
    CodexMCPMapper,
    CopilotMCPMapper,
    CursorMCPMapper,
    IMCPMapper,
    OpenCodeMCPMapper,
    StandardMCPMapper,
)
from ruleweave.mcp.models import (
    SERVERS_KEY,
    CanonicalMcp,
    ToolMcp,
    common_mcp_to_dto,
    dto_to_common_mcp,
)
from ruleweave.schema import ValidationResult
from ruleweave.targets import ToolTarget
from ruleweave.toml_writer import dumps_toml


class ToolMcpAdapter(IToolAdapter):
    """A JSON file holding the tool's servers under ``SERVERS_KEY``.

    Shared files also hold settings ruleweave does not own; only the servers
    key is replaced when such a file already exists, and it is never deleted.
    """

    PATH: ClassVar[SettablePaths]
    GLOBAL_PATH: ClassVar[SettablePaths | None] = None
    SERVERS_KEY: ClassVar[str] = SERVERS_KEY
    MAPPER: ClassVar[IMCPMapper] = StandardMCPMapper()
    SHARED: ClassVar[bool] = False

    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> SettablePaths:
        paths = self.GLOBAL_PATH if global_mode else self.PATH
        if paths is None:
            raise MissingToolPathError(self.TARGET.value, "global MCP servers")
        if exclude_tool_dir:
            return paths.without_tool_dir(self.tool_dir)
        return paths

    def serialize(self, payload: dict[str, Any]) -> str:
        return dump_json(payload)

    def deserialize(self, text: str, path: Path | str) -> dict[str, Any]:
        if not text.strip():
            return {}
        payload = parse_json(text, path)
        if not isinstance(payload, dict):
            raise DocumentParseError(path, "expected a JSON object")
        return payload

    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolMcp | None:
        if not self.is_targeted_by(canonical):
            return None
        canonical = self.expect_document(canonical, CanonicalMcp)
        paths = self.get_settable_paths(global_mode=global_mode)
        servers = common_mcp_to_dto(canonical.servers_for(self.TARGET))
        payload = {self.SERVERS_KEY: self.MAPPER.from_common(servers)}
        return ToolMcp(
            target=self.TARGET,
            location=DocumentLocation(
                Path(base_dir), paths.relative_dir_path, paths.relative_file_path or ""
            ),
            payload=payload,
            file_content=self.serialize(payload),
            deletable=not self.SHARED,
        )

    def merge_with_existing(self, document: ToolMcp, existing: str) -> str:  # type: ignore[override]
        if not self.SHARED:
            return document.file_content
        merged = self.deserialize(existing, document.location.file_path)
        merged[self.SERVERS_KEY] = document.payload.get(self.SERVERS_KEY, {})
        return self.serialize(merged)

    def to_canonical(self, document: ToolMcp) -> CanonicalMcp:  # type: ignore[override]
        native = document.payload.get(self.SERVERS_KEY)
        servers = dto_to_common_mcp(
            self.MAPPER.to_common(native if isinstance(native, dict) else {})
        )
        for server in servers.values():
            server["targets"] = [self.TARGET.value]
        return CanonicalMcp(
            location=DocumentLocation(
                document.location.base_dir, MCP_RELATIVE_DIR, MCP_FILENAME
            ),
            body=dump_json({SERVERS_KEY: servers}).rstrip("\n"),
        )

    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolMcp:
        return ToolMcp(
            target=self.TARGET,
            location=location,
            placeholder=True,
            deletable=not self.SHARED,
        )

    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolMcp:
        path = location.file_path
        text = read_file_content(path)
        return ToolMcp(
            target=self.TARGET,
            location=location,
            file_content=text,
            payload=self.deserialize(text, path),
            deletable=not self.SHARED,
        )

    def validate_content(self, document: ToolMcp) -> ValidationResult:  # type: ignore[override]
        try:
            payload = self.deserialize(document.file_content, document.location.relative_path)
        except DocumentParseError as exc:
            return ValidationResult.failed(exc.detail)
        if not isinstance(payload.get(self.SERVERS_KEY, {}), dict):
            return ValidationResult.failed(f"'{self.SERVERS_KEY}' must be an object")
        return ValidationResult.ok()


class AmazonqcliMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.AMAZONQCLI
    PATH = SettablePaths(".amazonq", "mcp.json")


class ClaudecodeMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.CLAUDECODE
    PATH = SettablePaths(".", ".mcp.json")


class CodexcliMcpAdapter(ToolMcpAdapter):
    """``[mcp_servers]`` tables inside the user's ``config.toml``.

    Other tables are written back with their values intact, but comments in
    the file are lost on rewrite.
    """

    TARGET = ToolTarget.CODEXCLI
    PATH = SettablePaths(".codex", "config.toml")
    GLOBAL_PATH = SettablePaths(".codex", "config.toml")
    SERVERS_KEY = "mcp_servers"
    MAPPER = CodexMCPMapper()
    SHARED = True

    def serialize(self, payload: dict[str, Any]) -> str:
        return dumps_toml(payload)

    def deserialize(self, text: str, path: Path | str) -> dict[str, Any]:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DocumentParseError(path, f"invalid TOML: {exc}") from exc


class CopilotMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.COPILOT
    PATH = SettablePaths(".vscode", "mcp.json")
    SERVERS_KEY = "servers"
    MAPPER = CopilotMCPMapper()


class CursorMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.CURSOR
    PATH = SettablePaths(".cursor", "mcp.json")
    GLOBAL_PATH = SettablePaths(".cursor", "mcp.json")
    MAPPER = CursorMCPMapper()


class GeminicliMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.GEMINICLI
    PATH = SettablePaths(".gemini", "settings.json")
    GLOBAL_PATH = SettablePaths(".gemini", "settings.json")
    SHARED = True


class JunieMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.JUNIE
    PATH = SettablePaths(".junie/mcp", "mcp.json")


class KiroMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.KIRO
    PATH = SettablePaths(".kiro/settings", "mcp.json")


class OpencodeMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.OPENCODE
    PATH = SettablePaths(".", "opencode.json")
    GLOBAL_PATH = SettablePaths(".config/opencode", "opencode.json")
    SERVERS_KEY = "mcp"
    MAPPER = OpenCodeMCPMapper()
    SHARED = True


class RooMcpAdapter(ToolMcpAdapter):
    TARGET = ToolTarget.ROO
    PATH = SettablePaths(".roo", "mcp.json")
