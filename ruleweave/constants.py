from typing import Final


RULES_RELATIVE_DIR: Final[str] = ".ruleweave/rules"
COMMANDS_RELATIVE_DIR: Final[str] = ".ruleweave/commands"
SUBAGENTS_RELATIVE_DIR: Final[str] = ".ruleweave/subagents"

ROOT_RULE_FILENAME: Final[str] = "overview.md"

IGNORE_RELATIVE_DIR: Final[str] = ".ruleweave"
IGNORE_FILENAME: Final[str] = ".aiignore"
LEGACY_IGNORE_RELATIVE_DIR: Final[str] = "."
LEGACY_IGNORE_FILENAME: Final[str] = ".ruleweaveignore"

MCP_RELATIVE_DIR: Final[str] = ".ruleweave"
MCP_FILENAME: Final[str] = "mcp.json"
LEGACY_MCP_FILENAME: Final[str] = ".mcp.json"

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    "ruleweave.json",
    "ruleweave.yaml",
    "ruleweave.yml",
)

AGENTS_FILENAME: Final[str] = "AGENTS.md"
CLAUDE_FILENAME: Final[str] = "CLAUDE.md"
