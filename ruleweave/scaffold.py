"""Sample ``.ruleweave`` tree and config file written by ``ruleweave init``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ruleweave.constants import (
    COMMANDS_RELATIVE_DIR,
    CONFIG_FILENAMES,
    IGNORE_FILENAME,
    IGNORE_RELATIVE_DIR,
    MCP_FILENAME,
    MCP_RELATIVE_DIR,
    ROOT_RULE_FILENAME,
    RULES_RELATIVE_DIR,
    SUBAGENTS_RELATIVE_DIR,
)
from ruleweave.filesystem import dump_json, file_exists, write_file_content

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "targets": ["agentsmd", "claudecode", "copilot", "cursor", "codexcli"],
    "features": ["rules", "ignore", "mcp", "commands", "subagents"],
    "baseDirs": ["."],
    "delete": True,
    "verbose": False,
    "silent": False,
    "global": False,
    "simulateCommands": False,
    "simulateSubagents": False,
}

SAMPLE_OVERVIEW = """---
root: true
targets: ["*"]
description: "Project overview and general development guidelines"
globs: ["**/*"]
---

# Project Overview

## General Guidelines

- Follow the existing naming conventions
- Keep functions small and name them after what they return
- Add tests next to every behaviour change
"""

SAMPLE_COMMAND = """---
description: "Review a pull request"
targets: ["*"]
---

target_pr = $ARGUMENTS

If target_pr is not provided, use the PR of the current branch.

Check code quality, test coverage and documentation, then summarise the findings.
"""

SAMPLE_SUBAGENT = """---
name: planner
targets: ["*"]
description: >-
  General-purpose planner. Reads the code and proposes a plan without
  writing any code.
claudecode:
  model: inherit
---

You are the planner for any task.

Analyse the related files and report a detailed plan. Do not write code.
"""

SAMPLE_MCP = {
    "mcpServers": {
        "context7": {
            "command": "npx",
            "args": ["-y", "@upstash/context7-mcp"],
            "env": {},
        }
    }
}

SAMPLE_IGNORE = """# Files AI tools must not read
.env
.env.*
*.pem
"""


@dataclass(frozen=True)
class ScaffoldResult:
    path: Path
    created: bool


def sample_files() -> dict[str, str]:
    """Relative path -> content of every file ``init`` writes."""
    return {
        f"{RULES_RELATIVE_DIR}/{ROOT_RULE_FILENAME}": SAMPLE_OVERVIEW,
        f"{COMMANDS_RELATIVE_DIR}/review-pr.md": SAMPLE_COMMAND,
        f"{SUBAGENTS_RELATIVE_DIR}/planner.md": SAMPLE_SUBAGENT,
        f"{MCP_RELATIVE_DIR}/{MCP_FILENAME}": dump_json(SAMPLE_MCP),
        f"{IGNORE_RELATIVE_DIR}/{IGNORE_FILENAME}": SAMPLE_IGNORE,
        CONFIG_FILENAMES[0]: dump_json(DEFAULT_CONFIG),
    }


def scaffold_project(base_dir: Path) -> list[ScaffoldResult]:
    """Write the sample files that do not exist yet; existing files are left alone."""
    results: list[ScaffoldResult] = []
    for relative, content in sample_files().items():
        path = base_dir / relative
        if file_exists(path):
            logger.info("Skipping %s (already exists)", relative)
            results.append(ScaffoldResult(path=path, created=False))
            continue
        write_file_content(path, content)
        logger.debug("Created %s", relative)
        results.append(ScaffoldResult(path=path, created=True))
    return results
