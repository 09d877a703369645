"""Per-tool subagent adapters, native and simulated."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruleweave.constants import SUBAGENTS_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument, DocumentLocation
from ruleweave.core.markdown import DirectoryMarkdownAdapter
from ruleweave.filesystem import read_file_content
from ruleweave.subagents.models import CanonicalSubagent, ToolSubagent
from ruleweave.targets import ToolTarget


class ToolSubagentAdapter(DirectoryMarkdownAdapter):
    KIND = "subagents"
    NATIVE_KEYS = ("name", "description")

    def uses_frontmatter(self, document: ToolSubagent) -> bool:
        return True

    def build_frontmatter(self, document: ToolSubagent) -> dict[str, Any]:
        return {"name": document.name, "description": document.description}

    def read_frontmatter(self, document: ToolSubagent) -> None:
        super().read_frontmatter(document)
        fm = document.frontmatter
        document.name = str(
            fm.get("name") or Path(document.location.relative_file_path).stem
        )
        document.description = str(fm.get("description") or "")

    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolSubagent | None:
        if not self.is_targeted_by(canonical):
            return None
        canonical = self.expect_document(canonical, CanonicalSubagent)
        subagent = ToolSubagent(
            target=self.TARGET,
            location=self.tool_location(canonical, base_dir, global_mode),
            body=canonical.body,
            passthrough=canonical.passthrough(self.TARGET),
            name=canonical.name,
            description=canonical.description,
        )
        self.render(subagent)
        return subagent

    def to_canonical(self, document: ToolSubagent) -> CanonicalSubagent:  # type: ignore[override]
        if self.SIMULATED:
            self.reject_reverse_conversion()
        frontmatter: dict[str, Any] = {
            "targets": [self.TARGET.value],
            "name": document.name,
            "description": document.description,
        }
        if document.passthrough:
            frontmatter[self.TARGET.value] = dict(document.passthrough)
        return CanonicalSubagent(
            location=DocumentLocation(
                document.location.base_dir,
                SUBAGENTS_RELATIVE_DIR,
                self.canonical_file_name(document),
            ),
            frontmatter=frontmatter,
            body=document.body,
        )

    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolSubagent:
        return ToolSubagent(target=self.TARGET, location=location, placeholder=True)

    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolSubagent:
        subagent = ToolSubagent(
            target=self.TARGET,
            location=location,
            file_content=read_file_content(location.file_path),
        )
        self.load_content(subagent)
        return subagent


class SimulatedSubagentAdapter(ToolSubagentAdapter):
    """Markdown copies the root rule points the tool at."""

    SIMULATED = True


class ClaudecodeSubagentAdapter(ToolSubagentAdapter):
    TARGET = ToolTarget.CLAUDECODE
    DIR = ".claude/agents"
    GLOBAL_DIR = ".claude/agents"
    NATIVE_KEYS = ("name", "description", "model")

    def build_frontmatter(self, document: ToolSubagent) -> dict[str, Any]:
        fm = super().build_frontmatter(document)
        if document.passthrough.get("model"):
            fm["model"] = document.passthrough["model"]
        return fm

    def read_frontmatter(self, document: ToolSubagent) -> None:
        super().read_frontmatter(document)
        if document.frontmatter.get("model"):
            document.passthrough["model"] = document.frontmatter["model"]


class OpencodeSubagentAdapter(ToolSubagentAdapter):
    TARGET = ToolTarget.OPENCODE
    DIR = ".opencode/agent"
    GLOBAL_DIR = ".config/opencode/agent"
    NATIVE_KEYS = ("description", "mode")

    def build_frontmatter(self, document: ToolSubagent) -> dict[str, Any]:
        return {"description": document.description, "mode": "subagent"}


class AgentsmdSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.AGENTSMD
    DIR = ".agents/subagents"


class CodexcliSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.CODEXCLI
    DIR = ".codex/subagents"


class CopilotSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.COPILOT
    DIR = ".github/subagents"


class CursorSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.CURSOR
    DIR = ".cursor/subagents"


class GeminicliSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.GEMINICLI
    DIR = ".gemini/subagents"


class RooSubagentAdapter(SimulatedSubagentAdapter):
    TARGET = ToolTarget.ROO
    DIR = ".roo/subagents"
