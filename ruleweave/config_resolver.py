"""Load ``ruleweave.json`` / ``ruleweave.yaml`` and merge CLI overrides into a Config."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ruleweave.config import Config
from ruleweave.constants import CONFIG_FILENAMES
from ruleweave.errors import InvalidConfigError
from ruleweave.filesystem import file_exists, read_file_content
from ruleweave.schema import validate_schema

logger = logging.getLogger(__name__)

DEFAULT_TARGETS = ["agentsmd"]
DEFAULT_FEATURES = ["rules"]

_STRING_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}
_TARGETS: dict[str, Any] = {"anyOf": [_STRING_LIST, {"type": "string"}]}

CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "$schema": {"type": "string"},
        "targets": _TARGETS,
        "features": {
            "anyOf": [
                _TARGETS,
                {"type": "object", "additionalProperties": _TARGETS},
            ]
        },
        "baseDirs": _STRING_LIST,
        "delete": {"type": "boolean"},
        "verbose": {"type": "boolean"},
        "silent": {"type": "boolean"},
        "global": {"type": "boolean"},
        "dryRun": {"type": "boolean"},
        "check": {"type": "boolean"},
        "simulateCommands": {"type": "boolean"},
        "simulateSubagents": {"type": "boolean"},
    },
    "additionalProperties": False,
}

FILE_KEYS: dict[str, str] = {
    "targets": "targets",
    "features": "features",
    "baseDirs": "base_dirs",
    "delete": "delete",
    "verbose": "verbose",
    "silent": "silent",
    "global": "global_mode",
    "dryRun": "dry_run",
    "check": "check",
    "simulateCommands": "simulate_commands",
    "simulateSubagents": "simulate_subagents",
}


def find_config_file(directory: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if file_exists(candidate):
            return candidate
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    text = read_file_content(path)
    try:
        if path.suffix in (".yaml", ".yml"):
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise InvalidConfigError(f"Invalid config file {path}: {exc}") from exc
    if payload is None:
        payload = {}

    result = validate_schema(CONFIG_SCHEMA, payload)
    if not result.success:
        raise InvalidConfigError(f"Invalid config file {path}: {result.error}")
    return {FILE_KEYS[key]: value for key, value in payload.items() if key in FILE_KEYS}


class ConfigResolver:
    def __init__(self, cwd: Path | None = None, home_dir: Path | None = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.home_dir = Path(home_dir) if home_dir is not None else Path.home()

    def resolve(self, config_path: Path | str | None = None, **overrides: Any) -> Config:
        """Build a Config from defaults, the config file, then non-None overrides."""
        values: dict[str, Any] = {
            "targets": list(DEFAULT_TARGETS),
            "features": list(DEFAULT_FEATURES),
        }

        if config_path is not None:
            path: Path | None = Path(config_path)
            if not path.is_absolute():
                path = self.cwd / path
            if not file_exists(path):
                raise InvalidConfigError(f"Config file not found: {path}")
        else:
            path = find_config_file(self.cwd)

        if path is not None:
            logger.debug("Loading config from %s", path)
            values.update(load_config_file(path))

        values.update({key: value for key, value in overrides.items() if value is not None})
        if values.get("global_mode"):
            values["base_dirs"] = [self.home_dir]
        return Config(**values)
