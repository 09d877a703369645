from __future__ import annotations

from ruleweave.commands.adapters import (
    AgentsmdCommandAdapter,
    AntigravityCommandAdapter,
    ClaudecodeCommandAdapter,
    ClineCommandAdapter,
    CodexcliCommandAdapter,
    CopilotCommandAdapter,
    CursorCommandAdapter,
    GeminicliCommandAdapter,
    OpencodeCommandAdapter,
    RooCommandAdapter,
)
from ruleweave.commands.parser import parse_canonical_command
from ruleweave.constants import COMMANDS_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument
from ruleweave.core.processor import AdapterEntry, AdapterMeta, FeatureProcessor
from ruleweave.targets import Feature, ToolTarget

_PROJECT_AND_GLOBAL = AdapterMeta(supports_global=True)

COMMAND_ADAPTERS: dict[ToolTarget, AdapterEntry] = {
    ToolTarget.AGENTSMD: AdapterEntry(AgentsmdCommandAdapter()),
    ToolTarget.ANTIGRAVITY: AdapterEntry(AntigravityCommandAdapter()),
    ToolTarget.CLAUDECODE: AdapterEntry(ClaudecodeCommandAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.CLINE: AdapterEntry(ClineCommandAdapter()),
    ToolTarget.CODEXCLI: AdapterEntry(
        CodexcliCommandAdapter(),
        AdapterMeta(supports_project=False, supports_global=True),
    ),
    ToolTarget.COPILOT: AdapterEntry(
        CopilotCommandAdapter(), AdapterMeta(file_pattern="*.prompt.md")
    ),
    ToolTarget.CURSOR: AdapterEntry(CursorCommandAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.GEMINICLI: AdapterEntry(
        GeminicliCommandAdapter(),
        AdapterMeta(file_pattern="*.toml", supports_global=True),
    ),
    ToolTarget.OPENCODE: AdapterEntry(OpencodeCommandAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.ROO: AdapterEntry(RooCommandAdapter()),
}


class CommandsProcessor(FeatureProcessor):
    FEATURE = Feature.COMMANDS
    REGISTRY = COMMAND_ADAPTERS

    def load_canonical_documents(self) -> list[CanonicalDocument]:
        return self.load_canonical_directory(
            COMMANDS_RELATIVE_DIR, parse_canonical_command
        )
