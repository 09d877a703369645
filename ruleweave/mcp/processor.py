from __future__ import annotations

import logging

from ruleweave.constants import LEGACY_MCP_FILENAME, MCP_FILENAME, MCP_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument, DocumentLocation
from ruleweave.core.processor import AdapterEntry, AdapterMeta, FeatureProcessor
from ruleweave.errors import DocumentParseError, RuleweaveError
from ruleweave.filesystem import file_exists, read_file_content
from ruleweave.mcp.adapters import (
    AmazonqcliMcpAdapter,
    ClaudecodeMcpAdapter,
    CodexcliMcpAdapter,
    CopilotMcpAdapter,
    CursorMcpAdapter,
    GeminicliMcpAdapter,
    JunieMcpAdapter,
    KiroMcpAdapter,
    OpencodeMcpAdapter,
    RooMcpAdapter,
)
from ruleweave.mcp.models import CanonicalMcp
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)

_PROJECT_AND_GLOBAL = AdapterMeta(file_pattern="*.json", supports_global=True)
_PROJECT_ONLY = AdapterMeta(file_pattern="*.json")

MCP_ADAPTERS: dict[ToolTarget, AdapterEntry] = {
    ToolTarget.AMAZONQCLI: AdapterEntry(AmazonqcliMcpAdapter(), _PROJECT_ONLY),
    ToolTarget.CLAUDECODE: AdapterEntry(ClaudecodeMcpAdapter(), _PROJECT_ONLY),
    ToolTarget.CODEXCLI: AdapterEntry(
        CodexcliMcpAdapter(), AdapterMeta(file_pattern="*.toml", supports_global=True)
    ),
    ToolTarget.COPILOT: AdapterEntry(CopilotMcpAdapter(), _PROJECT_ONLY),
    ToolTarget.CURSOR: AdapterEntry(CursorMcpAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.GEMINICLI: AdapterEntry(GeminicliMcpAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.JUNIE: AdapterEntry(JunieMcpAdapter(), _PROJECT_ONLY),
    ToolTarget.KIRO: AdapterEntry(KiroMcpAdapter(), _PROJECT_ONLY),
    ToolTarget.OPENCODE: AdapterEntry(OpencodeMcpAdapter(), _PROJECT_AND_GLOBAL),
    ToolTarget.ROO: AdapterEntry(RooMcpAdapter(), _PROJECT_ONLY),
}


def load_canonical_mcp(location: DocumentLocation) -> CanonicalMcp:
    document = CanonicalMcp(
        location=location, body=read_file_content(location.file_path).strip()
    )
    result = document.validate()
    if not result.success:
        raise DocumentParseError(location.file_path, result.error or "invalid MCP file")
    return document


class McpProcessor(FeatureProcessor):
    FEATURE = Feature.MCP
    REGISTRY = MCP_ADAPTERS

    def canonical_location(self) -> DocumentLocation | None:
        current = DocumentLocation(self.source_dir, MCP_RELATIVE_DIR, MCP_FILENAME)
        if file_exists(current.file_path):
            return current
        legacy = DocumentLocation(self.source_dir, MCP_RELATIVE_DIR, LEGACY_MCP_FILENAME)
        if file_exists(legacy.file_path):
            logger.warning(
                "%s is deprecated; rename it to %s",
                legacy.relative_path,
                current.relative_path,
            )
            return legacy
        return None

    def load_canonical_documents(self) -> list[CanonicalDocument]:
        location = self.canonical_location()
        if location is None:
            logger.debug("No MCP file under %s", self.source_dir)
            return []
        try:
            return [load_canonical_mcp(location)]
        except RuleweaveError as exc:
            logger.warning("Skipping %s: %s", location.relative_path, exc)
            return []
