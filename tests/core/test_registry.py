from pathlib import Path

import pytest

from ruleweave.commands.processor import COMMAND_ADAPTERS, CommandsProcessor
from ruleweave.core.processor import AdapterEntry, lookup_adapter_entry
from ruleweave.errors import UnsupportedTargetError
from ruleweave.ignore.processor import IgnoreProcessor
from ruleweave.mcp.processor import McpProcessor
from ruleweave.rules.adapters import CursorRuleAdapter
from ruleweave.rules.processor import RulesProcessor
from ruleweave.subagents.processor import SubagentsProcessor
from ruleweave.targets import Feature, ToolTarget


def test_unsupported_target_raises(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedTargetError) as exc_info:
        IgnoreProcessor(tmp_path, ToolTarget.AGENTSMD)
    assert "agentsmd" in str(exc_info.value)
    assert "ignore" in str(exc_info.value)


def test_unknown_target_string_raises() -> None:
    with pytest.raises(UnsupportedTargetError):
        lookup_adapter_entry(COMMAND_ADAPTERS, "vim", Feature.COMMANDS)


def test_rules_targets_exclude_zed() -> None:
    targets = RulesProcessor.get_tool_targets()
    assert ToolTarget.ZED not in targets
    assert ToolTarget.CURSOR in targets


def test_global_mode_targets() -> None:
    assert set(RulesProcessor.get_tool_targets(global_mode=True)) == {
        ToolTarget.CLAUDECODE,
        ToolTarget.CLAUDECODE_LEGACY,
        ToolTarget.CODEXCLI,
        ToolTarget.GEMINICLI,
        ToolTarget.OPENCODE,
    }
    assert ToolTarget.CODEXCLI in CommandsProcessor.get_tool_targets(global_mode=True)
    assert ToolTarget.CODEXCLI not in CommandsProcessor.get_tool_targets()


def test_simulated_targets_listed_only_on_request() -> None:
    assert ToolTarget.AGENTSMD not in SubagentsProcessor.get_tool_targets()
    assert ToolTarget.AGENTSMD in SubagentsProcessor.get_tool_targets(
        include_simulated=True
    )


def test_mcp_targets() -> None:
    targets = McpProcessor.get_tool_targets()
    assert ToolTarget.CLAUDECODE in targets
    assert ToolTarget.WINDSURF not in targets


def test_alternate_registry_is_used(tmp_path: Path) -> None:
    registry = {ToolTarget.ROO: AdapterEntry(CursorRuleAdapter())}
    processor = RulesProcessor(tmp_path, ToolTarget.ROO, registry=registry)
    assert isinstance(processor.adapter, CursorRuleAdapter)
    with pytest.raises(UnsupportedTargetError):
        RulesProcessor(tmp_path, ToolTarget.CURSOR, registry=registry)
