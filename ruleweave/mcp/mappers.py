"""Translate between MCP server DTOs and each tool's native server entries."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

from ruleweave.mcp.models import (
    MCPAuthDTO,
    MCPServerDTO,
    MCPServerType,
    common_mcp_to_dto,
    dto_to_common_mcp,
    string_list,
    string_map,
)

_ENV_REF_RE = re.compile(r"^\$\{(?:env:)?([A-Z_][A-Z0-9_]*)\}$")
_BEARER_REF_RE = re.compile(r"^Bearer\s+\$\{(?:env:)?([A-Z_][A-Z0-9_]*)\}$")


def _env_reference(value: str, pattern: re.Pattern[str] = _ENV_REF_RE) -> str | None:
    match = pattern.match(value.strip())
    return match.group(1) if match else None


class IMCPMapper(ABC):
    @abstractmethod
    def to_common(self, payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
        raise NotImplementedError

    @abstractmethod
    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        raise NotImplementedError


class StandardMCPMapper(IMCPMapper):
    """Tools that read the ``mcpServers`` shape unchanged."""

    def to_common(self, payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
        return common_mcp_to_dto(payload)

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        return dto_to_common_mcp(servers)


class CursorMCPMapper(StandardMCPMapper):
    """Cursor spells OAuth credentials in upper case and omits empty ``args``."""

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        mapped = super().from_common(servers)
        for name, entry in mapped.items():
            if not entry.get("args"):
                entry.pop("args", None)
            auth = servers[name].auth
            if "auth" in entry and auth is not None:
                entry["auth"] = {
                    "CLIENT_ID": auth.client_id,
                    "CLIENT_SECRET": auth.client_secret,
                }
                if auth.scopes:
                    entry["auth"]["scopes"] = list(auth.scopes)
        return mapped


class CopilotMCPMapper(StandardMCPMapper):
    """VS Code wants an explicit transport ``type`` per server."""

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        mapped: dict[str, Any] = {}
        for name, entry in super().from_common(servers).items():
            transport = "stdio" if "command" in entry else "http"
            mapped[name] = {"type": transport, **entry}
        return mapped


class CodexMCPMapper(IMCPMapper):
    """Codex CLI ``[mcp_servers.<name>]`` tables with env-var indirection."""

    def to_common(self, payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
        servers: dict[str, MCPServerDTO] = {}
        for name, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            env = {key: f"${{{key}}}" for key in string_list(raw.get("env_vars"))}
            env.update(string_map(raw.get("env")))

            headers = string_map(raw.get("http_headers"))
            for key, env_name in string_map(raw.get("env_http_headers")).items():
                headers[key] = f"${{{env_name}}}"
            bearer = raw.get("bearer_token_env_var")
            if isinstance(bearer, str):
                headers["Authorization"] = f"Bearer ${{{bearer}}}"

            command = raw.get("command")
            url = raw.get("url")
            servers[name] = MCPServerDTO(
                name=name,
                type=MCPServerType.HTTP if isinstance(url, str) else MCPServerType.STDIO,
                command=command if isinstance(command, str) else None,
                args=string_list(raw.get("args")),
                url=url if isinstance(url, str) else None,
                headers=headers,
                env=env,
            )
        return servers

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        mapped: dict[str, Any] = {}
        for name, server in servers.items():
            if server.type == MCPServerType.STDIO:
                if not server.command:
                    continue
                entry: dict[str, Any] = {"command": server.command}
                if server.args:
                    entry["args"] = list(server.args)
            else:
                if not server.url:
                    continue
                entry = {"url": server.url}

            env_vars = sorted(
                {ref for ref in map(_env_reference, server.env.values()) if ref}
            )
            literal_env = {
                key: value
                for key, value in server.env.items()
                if _env_reference(value) is None
            }
            if env_vars:
                entry["env_vars"] = env_vars
            if literal_env:
                entry["env"] = literal_env

            literal_headers: dict[str, str] = {}
            env_headers: dict[str, str] = {}
            for key, value in server.headers.items():
                if key.lower() == "authorization":
                    bearer = _env_reference(value, _BEARER_REF_RE)
                    if bearer is not None:
                        entry["bearer_token_env_var"] = bearer
                        continue
                ref = _env_reference(value)
                if ref is None:
                    literal_headers[key] = value
                else:
                    env_headers[key] = ref
            if literal_headers:
                entry["http_headers"] = literal_headers
            if env_headers:
                entry["env_http_headers"] = env_headers

            if server.auth is not None and server.auth.scopes:
                entry["scopes"] = list(server.auth.scopes)
            mapped[name] = entry
        return mapped


class OpenCodeMCPMapper(IMCPMapper):
    """OpenCode ``mcp`` entries: ``local`` command arrays or ``remote`` URLs."""

    def to_common(self, payload: dict[str, Any]) -> dict[str, MCPServerDTO]:
        servers: dict[str, MCPServerDTO] = {}
        for name, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            env = string_map(raw.get("environment"))
            headers = string_map(raw.get("headers"))

            if raw.get("type") == "local" or "command" in raw:
                command = raw.get("command")
                parts = [command] if isinstance(command, str) else string_list(command)
                if not parts:
                    continue
                servers[name] = MCPServerDTO(
                    name=name,
                    type=MCPServerType.STDIO,
                    command=parts[0],
                    args=parts[1:],
                    env=env,
                    headers=headers,
                )
                continue

            url = raw.get("url")
            if not isinstance(url, str):
                continue
            auth: MCPAuthDTO | None = None
            oauth = raw.get("oauth")
            if isinstance(oauth, dict):
                client_id = oauth.get("clientId")
                client_secret = oauth.get("clientSecret")
                if isinstance(client_id, str) and isinstance(client_secret, str):
                    scope = oauth.get("scope")
                    auth = MCPAuthDTO(
                        client_id,
                        client_secret,
                        [scope] if isinstance(scope, str) else [],
                    )
            servers[name] = MCPServerDTO(
                name=name,
                type=MCPServerType.OAUTH if auth else MCPServerType.HTTP,
                url=url,
                env=env,
                headers=headers,
                auth=auth,
            )
        return servers

    def from_common(self, servers: dict[str, MCPServerDTO]) -> dict[str, Any]:
        mapped: dict[str, Any] = {}
        for name, server in servers.items():
            if server.type == MCPServerType.STDIO:
                if not server.command:
                    continue
                entry: dict[str, Any] = {
                    "type": "local",
                    "command": [server.command, *server.args],
                }
            else:
                if not server.url:
                    continue
                entry = {"type": "remote", "url": server.url}
                if server.auth is not None:
                    entry["oauth"] = {
                        "clientId": server.auth.client_id,
                        "clientSecret": server.auth.client_secret,
                    }
                    if server.auth.scopes:
                        entry["oauth"]["scope"] = server.auth.scopes[0]
            entry["enabled"] = True
            if server.headers:
                entry["headers"] = dict(server.headers)
            if server.env:
                entry["environment"] = dict(server.env)
            mapped[name] = entry
        return mapped
