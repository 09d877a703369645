"""Textual selection list for choosing which planned imports to write."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, SelectionList, Static
from textual.widgets.selection_list import Selection

from ruleweave.models import ImportAction, ImportActionStatus, ImportPlan


class ImportSelectorApp(App[list[int]]):
    """Lists the writable actions of an import plan, all preselected."""

    TITLE = "ruleweave import"
    CSS = """
    Screen {
        layout: vertical;
    }
    #info {
        height: 3;
        content-align: center middle;
        background: $primary-darken-2;
        color: $text;
        padding: 0 1;
    }
    SelectionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("a", "select_all", "Select All"),
        Binding("n", "select_none", "Select None"),
        Binding("enter", "confirm", "Confirm"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self, plan: ImportPlan) -> None:
        super().__init__()
        self._plan = plan
        self._actionable_indices: list[int] = [
            i
            for i, action in enumerate(plan.actions)
            if action.status in (ImportActionStatus.CREATE, ImportActionStatus.UPDATE)
        ]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"Source: {self._plan.source_tool} | "
            f"Writable: {len(self._actionable_indices)} | "
            f"Use [a] select all, [n] select none, [enter] confirm",
            id="info",
        )

        selections: list[Selection[int]] = []
        for i in self._actionable_indices:
            action = self._plan.actions[i]
            label = f"[{action.feature}] {action.status.value}: {action.detail}"
            selections.append(Selection(label, i, True))

        yield SelectionList[int](*selections)
        yield Footer()

    def action_select_all(self) -> None:
        self.query_one(SelectionList).select_all()

    def action_select_none(self) -> None:
        self.query_one(SelectionList).deselect_all()

    def action_confirm(self) -> None:
        self.exit(list(self.query_one(SelectionList).selected))

    def action_quit_app(self) -> None:
        self.exit([])

    def get_selected_actions(self, selected_indices: list[int]) -> list[ImportAction]:
        return [self._plan.actions[i] for i in selected_indices]


def filter_plan_by_selection(
    plan: ImportPlan, selected_indices: list[int]
) -> ImportPlan:
    """Create a new plan containing only the selected actions."""
    selected_set = set(selected_indices)
    filtered = [action for i, action in enumerate(plan.actions) if i in selected_set]
    return ImportPlan(
        source_tool=plan.source_tool,
        features=list(plan.features),
        actions=filtered,
        errors=list(plan.errors),
        skipped=list(plan.skipped),
    )
