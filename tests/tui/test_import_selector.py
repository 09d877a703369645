"""Tests for the interactive import selector."""

from __future__ import annotations

from pathlib import Path

import pytest

from ruleweave.models import ImportAction, ImportActionStatus, ImportPlan
from ruleweave.tui.import_selector import (
    ImportSelectorApp,
    filter_plan_by_selection,
)


def _make_plan(actions: list[ImportAction] | None = None) -> ImportPlan:
    if actions is None:
        actions = [
            ImportAction(
                feature="mcp",
                status=ImportActionStatus.UPDATE,
                detail="Update .ruleweave/mcp.json",
                path=Path(".ruleweave/mcp.json"),
                payload="{}\n",
            ),
            ImportAction(
                feature="commands",
                status=ImportActionStatus.CREATE,
                detail="Create .ruleweave/commands/fix.md",
                path=Path(".ruleweave/commands/fix.md"),
                payload="Fix\n",
            ),
            ImportAction(
                feature="rules",
                status=ImportActionStatus.NOOP,
                detail=".ruleweave/rules/overview.md already matches",
                path=Path(".ruleweave/rules/overview.md"),
            ),
            ImportAction(
                feature="rules",
                status=ImportActionStatus.SKIP,
                detail=".ruleweave/rules/style.md exists; kept",
                path=Path(".ruleweave/rules/style.md"),
            ),
        ]
    return ImportPlan(
        source_tool="cursor",
        features=["mcp", "commands", "rules"],
        actions=actions,
        errors=[],
        skipped=["ignore: not supported for cursor"],
    )


@pytest.mark.asyncio(loop_scope="function")
async def test_only_writable_actions_shown() -> None:
    app = ImportSelectorApp(_make_plan())
    async with app.run_test():
        sel = app.query_one("SelectionList")
        assert len(sel._options) == 2


@pytest.mark.asyncio(loop_scope="function")
async def test_select_none_then_all() -> None:
    app = ImportSelectorApp(_make_plan())
    async with app.run_test() as pilot:
        await pilot.press("n")
        sel = app.query_one("SelectionList")
        assert len(sel.selected) == 0
        await pilot.press("a")
        assert len(sel.selected) == 2


@pytest.mark.asyncio(loop_scope="function")
async def test_confirm_returns_selected_indices() -> None:
    app = ImportSelectorApp(_make_plan())
    async with app.run_test():
        # enter may be consumed by the focused SelectionList
        app.action_confirm()
    assert app.return_value is not None
    assert set(app.return_value) == {0, 1}


@pytest.mark.asyncio(loop_scope="function")
async def test_quit_returns_empty() -> None:
    app = ImportSelectorApp(_make_plan())
    async with app.run_test() as pilot:
        await pilot.press("q")
    assert app.return_value == []


def test_filter_plan_by_selection() -> None:
    plan = _make_plan()
    filtered = filter_plan_by_selection(plan, [1])
    assert [action.feature for action in filtered.actions] == ["commands"]
    assert filtered.source_tool == "cursor"
    assert filtered.features == plan.features
    assert filtered.skipped == plan.skipped
    assert filtered.writable() == filtered.actions


def test_filter_plan_empty_selection() -> None:
    assert filter_plan_by_selection(_make_plan(), []).actions == []


def test_get_selected_actions() -> None:
    selected = ImportSelectorApp(_make_plan()).get_selected_actions([1, 0])
    assert [action.feature for action in selected] == ["commands", "mcp"]
