from __future__ import annotations

from ruleweave.constants import SUBAGENTS_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument
from ruleweave.core.processor import AdapterEntry, AdapterMeta, FeatureProcessor
from ruleweave.subagents.adapters import (
    AgentsmdSubagentAdapter,
    ClaudecodeSubagentAdapter,
    CodexcliSubagentAdapter,
    CopilotSubagentAdapter,
    CursorSubagentAdapter,
    GeminicliSubagentAdapter,
    OpencodeSubagentAdapter,
    RooSubagentAdapter,
)
from ruleweave.subagents.parser import parse_canonical_subagent
from ruleweave.targets import Feature, ToolTarget

SUBAGENT_ADAPTERS: dict[ToolTarget, AdapterEntry] = {
    ToolTarget.AGENTSMD: AdapterEntry(AgentsmdSubagentAdapter()),
    ToolTarget.CLAUDECODE: AdapterEntry(
        ClaudecodeSubagentAdapter(), AdapterMeta(supports_global=True)
    ),
    ToolTarget.CODEXCLI: AdapterEntry(CodexcliSubagentAdapter()),
    ToolTarget.COPILOT: AdapterEntry(CopilotSubagentAdapter()),
    ToolTarget.CURSOR: AdapterEntry(CursorSubagentAdapter()),
    ToolTarget.GEMINICLI: AdapterEntry(GeminicliSubagentAdapter()),
    ToolTarget.OPENCODE: AdapterEntry(
        OpencodeSubagentAdapter(), AdapterMeta(supports_global=True)
    ),
    ToolTarget.ROO: AdapterEntry(RooSubagentAdapter()),
}


class SubagentsProcessor(FeatureProcessor):
    FEATURE = Feature.SUBAGENTS
    REGISTRY = SUBAGENT_ADAPTERS

    def load_canonical_documents(self) -> list[CanonicalDocument]:
        return self.load_canonical_directory(
            SUBAGENTS_RELATIVE_DIR, parse_canonical_subagent
        )
