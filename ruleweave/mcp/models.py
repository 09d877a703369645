"""MCP server models and the canonical ``mcp.json`` document."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ruleweave.core.documents import CanonicalDocument, ToolDocument, is_targeting
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import parse_json
from ruleweave.schema import ValidationResult, validate_schema
from ruleweave.targets import ToolTarget

SERVERS_KEY = "mcpServers"
# Canonical-only keys; tools never see them.
SELECTION_KEYS = ("targets", "description", "exposed")

MCP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        SERVERS_KEY: {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "command": {"type": "string"},
                    "args": {"type": "array"},
                    "url": {"type": "string"},
                    "env": {"type": "object"},
                    "headers": {"type": "object"},
                    "targets": {
                        "anyOf": [
                            {"type": "array", "items": {"type": "string"}},
                            {"const": "*"},
                        ]
                    },
                    "description": {"type": "string"},
                },
            },
        }
    },
}


class MCPServerType(str, Enum):
    STDIO = "stdio"
    HTTP = "http"
    OAUTH = "oauth"


@dataclass(frozen=True)
class MCPAuthDTO:
    client_id: str
    client_secret: str
    scopes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MCPServerDTO:
    name: str
    type: MCPServerType
    command: str | None = None
    args: list[str] = field(default_factory=list)
    url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    auth: MCPAuthDTO | None = None


def string_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(key): str(item) for key, item in value.items()}


def string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float, bool))]


def _auth_from(raw: Any) -> MCPAuthDTO | None:
    if not isinstance(raw, dict):
        return None
    client_id = raw.get("client_id") or raw.get("CLIENT_ID")
    client_secret = raw.get("client_secret") or raw.get("CLIENT_SECRET")
    if not (isinstance(client_id, str) and isinstance(client_secret, str)):
        return None
    return MCPAuthDTO(client_id, client_secret, string_list(raw.get("scopes")))


def common_mcp_to_dto(mcp_servers: dict[str, Any]) -> dict[str, MCPServerDTO]:
    """Read ``mcpServers`` entries in the common JSON shape; malformed ones are dropped."""
    servers: dict[str, MCPServerDTO] = {}
    for name, raw in mcp_servers.items():
        if not isinstance(raw, dict):
            continue
        env = raw.get("env") if isinstance(raw.get("env"), dict) else raw.get("environment")
        command = raw.get("command")
        url = raw.get("url")
        if isinstance(command, str):
            servers[name] = MCPServerDTO(
                name=name,
                type=MCPServerType.STDIO,
                command=command,
                args=string_list(raw.get("args")),
                headers=string_map(raw.get("headers")),
                env=string_map(env),
            )
        elif isinstance(url, str):
            auth = _auth_from(raw.get("auth"))
            servers[name] = MCPServerDTO(
                name=name,
                type=MCPServerType.HTTP if auth is None else MCPServerType.OAUTH,
                url=url,
                headers=string_map(raw.get("headers")),
                env=string_map(env),
                auth=auth,
            )
    return servers


def dto_to_common_mcp(servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
    common: dict[str, Any] = {}
    for name in sorted(servers):
        server = servers[name]
        if server.command:
            entry: dict[str, Any] = {"command": server.command, "args": list(server.args)}
        elif server.url:
            entry = {"url": server.url}
        else:
            continue
        if server.headers:
            entry["headers"] = dict(server.headers)
        if server.env:
            entry["env"] = dict(server.env)
        if server.auth is not None:
            entry["auth"] = {
                "client_id": server.auth.client_id,
                "client_secret": server.auth.client_secret,
                "scopes": list(server.auth.scopes),
            }
        common[name] = entry
    return common


@dataclass
class CanonicalMcp(CanonicalDocument):
    """Whole-file JSON document; ``body`` holds the JSON text."""

    @property
    def payload(self) -> dict[str, Any]:
        if not self.body.strip():
            return {}
        payload = parse_json(self.body, self.location.relative_path)
        if not isinstance(payload, dict):
            raise DocumentParseError(self.location.relative_path, "expected a JSON object")
        return payload

    @property
    def servers(self) -> dict[str, Any]:
        servers = self.payload.get(SERVERS_KEY)
        return servers if isinstance(servers, dict) else {}

    def servers_for(self, target: ToolTarget) -> dict[str, Any]:
        selected: dict[str, Any] = {}
        for name, server in self.servers.items():
            if not isinstance(server, dict):
                continue
            if not is_targeting(server.get("targets"), target):
                continue
            selected[name] = {
                key: value for key, value in server.items() if key not in SELECTION_KEYS
            }
        return selected

    def is_targeting(self, target: ToolTarget) -> bool:
        return bool(self.servers_for(target))

    def validate(self) -> ValidationResult:
        try:
            payload = self.payload
        except DocumentParseError as exc:
            return ValidationResult.failed(exc.detail)
        return validate_schema(MCP_SCHEMA, payload)


@dataclass
class ToolMcp(ToolDocument):
    payload: dict[str, Any] = field(default_factory=dict)
