from collections import Counter
from pathlib import Path
from typing import Optional

from rich.panel import Panel
from rich.table import Column, Table

from ruleweave.catalog import SupportLevel, TargetSupportRow
from ruleweave.filesystem import compact_home_path
from ruleweave.models import Action, ActionStatus, ImportAction, ImportPlan, SyncPlan
from ruleweave.targets import Feature
from ruleweave.tui.enums import (
    ACTION_STATUS_STYLE,
    IMPORT_STATUS_STYLE,
    SUPPORT_STYLE,
    UIStyle,
)


def display_path(path: Path, base_dir: Optional[Path]) -> str:
    if base_dir is not None:
        try:
            return str(path.relative_to(base_dir))
        except ValueError:
            pass
    return compact_home_path(path)


def _status_chips(values: list[str]) -> str:
    counts = Counter(values)
    chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
    return "  ".join(chips or ["none"])


class PlanTable:
    @staticmethod
    def summary_block(plan: SyncPlan, mode: str) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Actions", str(len(plan.actions)))
        table.add_row(
            "Statuses", _status_chips([action.status.value for action in plan.actions])
        )
        return table

    @staticmethod
    def split_actions(plan: SyncPlan) -> dict[str, list[Action]]:
        grouped: dict[str, list[Action]] = {}
        for action in plan.actions:
            grouped.setdefault(action.feature or "other", []).append(action)
        return grouped

    @staticmethod
    def actions_table(
        actions: list[Action], base_dir: Optional[Path] = None, verbose: bool = False
    ) -> Table:
        table = Table(
            Column(header="Status", width=8),
            Column(header="Target", width=18),
            Column(header="Path", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        if verbose:
            table.add_column("Detail", overflow="ellipsis")

        for action in actions:
            if action.status == ActionStatus.NOOP and not verbose:
                continue
            style = ACTION_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            row = [
                f"[{style}]{action.status.value}[/{style}]",
                action.target or "",
                display_path(action.path, base_dir),
            ]
            if verbose:
                row.append(action.detail)
            table.add_row(*row)
        return table


class ApplyTable:
    @staticmethod
    def stats_panel(applied: int, failed: int, title: str = "apply") -> Panel:
        stats: dict[str, str] = {
            "applied": str(applied),
            "failed": str(failed),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title=title,
            border_style=UIStyle.GREEN.value if failed == 0 else UIStyle.RED.value,
        )


class ImportTable:
    @staticmethod
    def summary_block(plan: ImportPlan, mode: str) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Source", plan.source_tool)
        table.add_row("Features", ", ".join(plan.features) or "none")
        table.add_row("Actions", str(len(plan.actions)))
        table.add_row(
            "Statuses", _status_chips([action.status.value for action in plan.actions])
        )
        return table

    @staticmethod
    def actions_table(
        actions: list[ImportAction], base_dir: Optional[Path] = None
    ) -> Table:
        table = Table(
            Column(header="Feature", width=10),
            Column(header="Status", width=10),
            Column(header="Path", overflow="ellipsis"),
            Column(header="Detail", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for action in actions:
            style = IMPORT_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            table.add_row(
                action.feature,
                f"[{style}]{action.status.value}[/{style}]",
                display_path(action.path, base_dir),
                action.detail,
            )
        return table


class TargetsTable:
    @staticmethod
    def catalog_table(rows: list[TargetSupportRow], features: list[Feature]) -> Table:
        table = Table(
            Column(header="Target", width=20),
            Column(header="Tool", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for feature in features:
            table.add_column(feature.value, justify="center")

        for row in rows:
            name = f"{row.target.value} [dim](legacy)[/dim]" if row.legacy else row.target.value
            cells = [name, row.label]
            for feature in features:
                level = row.support.get(feature, SupportLevel.NONE)
                style = SUPPORT_STYLE[level]
                mark = "-" if level == SupportLevel.NONE else level.value
                if feature in row.global_features and level == SupportLevel.NATIVE:
                    mark = f"{mark}+global"
                cells.append(f"[{style}]{mark}[/{style}]")
            table.add_row(*cells)
        return table
