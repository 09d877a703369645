"""Rules feature processor and its adapter registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruleweave.commands.processor import COMMAND_ADAPTERS
from ruleweave.constants import RULES_RELATIVE_DIR
from ruleweave.core.documents import CanonicalDocument, DocumentLocation, ToolDocument
from ruleweave.core.processor import (
    AdapterEntry,
    AdapterMeta,
    AdapterRegistry,
    FeatureProcessor,
)
from ruleweave.errors import MultipleRootRulesError
from ruleweave.rules.adapters import (
    AgentsmdRuleAdapter,
    AmazonqcliRuleAdapter,
    AntigravityRuleAdapter,
    AugmentcodeLegacyRuleAdapter,
    AugmentcodeRuleAdapter,
    ClaudecodeLegacyRuleAdapter,
    ClaudecodeRuleAdapter,
    ClineRuleAdapter,
    CodexcliRuleAdapter,
    CopilotRuleAdapter,
    CursorRuleAdapter,
    GeminicliRuleAdapter,
    JunieRuleAdapter,
    KiroRuleAdapter,
    OpencodeRuleAdapter,
    QwencodeRuleAdapter,
    RooRuleAdapter,
    ToolRuleAdapter,
    WarpRuleAdapter,
    WindsurfRuleAdapter,
)
from ruleweave.rules.models import CanonicalRule, ToolRule
from ruleweave.rules.parser import parse_canonical_rule
from ruleweave.rules.references import ReferenceMode, aggregate_root, render_conventions
from ruleweave.subagents.processor import SUBAGENT_ADAPTERS
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleAdapterMeta(AdapterMeta):
    reference_mode: ReferenceMode = ReferenceMode.NONE


def _entry(adapter: ToolRuleAdapter, **meta: Any) -> AdapterEntry:
    return AdapterEntry(adapter, RuleAdapterMeta(**meta))


RULE_ADAPTERS: dict[ToolTarget, AdapterEntry] = {
    ToolTarget.AGENTSMD: _entry(AgentsmdRuleAdapter(), reference_mode=ReferenceMode.XML),
    ToolTarget.AMAZONQCLI: _entry(AmazonqcliRuleAdapter()),
    ToolTarget.ANTIGRAVITY: _entry(AntigravityRuleAdapter()),
    ToolTarget.AUGMENTCODE: _entry(AugmentcodeRuleAdapter()),
    ToolTarget.AUGMENTCODE_LEGACY: _entry(
        AugmentcodeLegacyRuleAdapter(), reference_mode=ReferenceMode.XML
    ),
    ToolTarget.CLAUDECODE: _entry(ClaudecodeRuleAdapter(), supports_global=True),
    ToolTarget.CLAUDECODE_LEGACY: _entry(
        ClaudecodeLegacyRuleAdapter(),
        supports_global=True,
        reference_mode=ReferenceMode.TEXT,
    ),
    ToolTarget.CLINE: _entry(ClineRuleAdapter()),
    ToolTarget.CODEXCLI: _entry(
        CodexcliRuleAdapter(), supports_global=True, reference_mode=ReferenceMode.XML
    ),
    ToolTarget.COPILOT: _entry(CopilotRuleAdapter(), file_pattern="*.instructions.md"),
    ToolTarget.CURSOR: _entry(CursorRuleAdapter(), file_pattern="*.mdc"),
    ToolTarget.GEMINICLI: _entry(
        GeminicliRuleAdapter(), supports_global=True, reference_mode=ReferenceMode.XML
    ),
    ToolTarget.JUNIE: _entry(JunieRuleAdapter(), reference_mode=ReferenceMode.XML),
    ToolTarget.KIRO: _entry(KiroRuleAdapter(), reference_mode=ReferenceMode.XML),
    ToolTarget.OPENCODE: _entry(
        OpencodeRuleAdapter(), supports_global=True, reference_mode=ReferenceMode.XML
    ),
    ToolTarget.QWENCODE: _entry(QwencodeRuleAdapter(), reference_mode=ReferenceMode.XML),
    ToolTarget.ROO: _entry(RooRuleAdapter()),
    ToolTarget.WARP: _entry(WarpRuleAdapter(), reference_mode=ReferenceMode.XML),
    ToolTarget.WINDSURF: _entry(WindsurfRuleAdapter()),
}


def _simulated_dir(
    registry: AdapterRegistry, target: ToolTarget, global_mode: bool
) -> str | None:
    entry = registry.get(target)
    if entry is None or not entry.simulated:
        return None
    return entry.adapter.get_settable_paths(global_mode=global_mode).relative_dir_path


class RulesProcessor(FeatureProcessor):
    FEATURE = Feature.RULES
    REGISTRY = RULE_ADAPTERS

    def __init__(
        self,
        base_dir: Path,
        tool_target: ToolTarget | str,
        global_mode: bool = False,
        source_dir: Path | None = None,
        registry: AdapterRegistry | None = None,
        simulate_commands: bool = False,
        simulate_subagents: bool = False,
    ) -> None:
        super().__init__(
            base_dir,
            tool_target,
            global_mode=global_mode,
            source_dir=source_dir,
            registry=registry,
        )
        self.simulate_commands = simulate_commands
        self.simulate_subagents = simulate_subagents

    @property
    def reference_mode(self) -> ReferenceMode:
        meta = self.entry.meta
        if isinstance(meta, RuleAdapterMeta):
            return meta.reference_mode
        return ReferenceMode.NONE

    def load_canonical_documents(self) -> list[CanonicalDocument]:
        rules: list[CanonicalRule] = self.load_canonical_directory(
            RULES_RELATIVE_DIR, parse_canonical_rule
        )
        roots = [rule for rule in rules if rule.root]
        if len(roots) > 1:
            raise MultipleRootRulesError(rule.location.relative_path for rule in roots)

        if not self.global_mode:
            return list(rules)

        dropped = len(rules) - len(roots)
        if dropped:
            logger.warning(
                "Global mode only uses the root rule; ignoring %d non-root rule(s)",
                dropped,
            )
        return list(roots)

    def conventions(self) -> str:
        commands_dir = (
            _simulated_dir(COMMAND_ADAPTERS, self.tool_target, self.global_mode)
            if self.simulate_commands
            else None
        )
        subagents_dir = (
            _simulated_dir(SUBAGENT_ADAPTERS, self.tool_target, self.global_mode)
            if self.simulate_subagents
            else None
        )
        return render_conventions(commands_dir, subagents_dir)

    def convert_canonical_to_tool(
        self, documents: list[CanonicalDocument]
    ) -> list[ToolDocument]:
        converted = super().convert_canonical_to_tool(documents)
        rules = [document for document in converted if isinstance(document, ToolRule)]
        aggregate_root(rules, self.reference_mode, self.conventions())
        return converted

    def discover_tool_locations(self) -> list[DocumentLocation]:
        paths = self.adapter.get_settable_paths(global_mode=self.global_mode)
        locations: list[DocumentLocation] = []
        if paths.root is not None:
            locations.extend(self.locations_for(paths.root))
        if paths.non_root is not None:
            for location in self.locations_for(paths.non_root):
                if self.adapter.is_root_location(location, self.global_mode):
                    continue
                locations.append(location)
        return locations
