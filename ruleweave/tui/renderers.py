from pathlib import Path
from typing import Optional

from rich.console import Console

from ruleweave.catalog import TargetSupportRow
from ruleweave.filesystem import compact_home_paths_in_text
from ruleweave.models import ActionStatus, ImportApplyResult, ImportPlan, SyncPlan
from ruleweave.scaffold import ScaffoldResult
from ruleweave.targets import Feature
from ruleweave.tui.enums import UIStyle
from ruleweave.tui.sections import UISection
from ruleweave.tui.tables import (
    ApplyTable,
    ImportTable,
    PlanTable,
    TargetsTable,
    display_path,
)

FEATURE_STYLE = {
    Feature.RULES.value: UIStyle.CYAN.value,
    Feature.IGNORE.value: UIStyle.MAGENTA.value,
    Feature.MCP.value: UIStyle.BLUE.value,
    Feature.COMMANDS.value: UIStyle.GREEN.value,
    Feature.SUBAGENTS.value: UIStyle.YELLOW.value,
}


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _print_list(self, title: str, items: list, style: str) -> None:
        if not items:
            return
        text = UISection.bullets([compact_home_paths_in_text(str(item)) for item in items])
        self.console.print(UISection.note(title, text, style=style))

    def render_plan(
        self,
        plan: SyncPlan,
        mode: str,
        base_dir: Optional[Path] = None,
        verbose: bool = False,
    ) -> None:
        self.console.print(
            UISection.wrap(
                "plan overview",
                PlanTable.summary_block(plan, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )

        grouped = PlanTable.split_actions(plan)
        visible = {
            feature: actions
            for feature, actions in grouped.items()
            if verbose or any(action.status != ActionStatus.NOOP for action in actions)
        }
        for feature, actions in visible.items():
            self.console.print(
                UISection.wrap(
                    feature,
                    PlanTable.actions_table(actions, base_dir=base_dir, verbose=verbose),
                    style=FEATURE_STYLE.get(feature, UIStyle.WHITE.value),
                )
            )
        if not visible:
            self.console.print(
                UISection.note("actions", "No changes required.", style=UIStyle.DIM.value)
            )

        self._print_list("errors", plan.errors, UIStyle.RED.value)
        if verbose:
            self._print_list("skipped", plan.skipped, UIStyle.YELLOW.value)

    def render_apply_result(
        self, applied: int, failed: int, failures: list[str]
    ) -> None:
        self.console.print(ApplyTable.stats_panel(applied=applied, failed=failed))
        self._print_list("failures", failures, UIStyle.RED.value)

    def render_check_result(self, plan: SyncPlan) -> None:
        changes = plan.changes()
        if not changes:
            self.console.print(
                UISection.note("check", "Generated files are up to date.", style=UIStyle.GREEN.value)
            )
            return
        self.console.print(
            UISection.note(
                "check",
                f"{len(changes)} file(s) out of date. Run: ruleweave generate",
                style=UIStyle.RED.value,
            )
        )

    def render_import_plan(
        self, plan: ImportPlan, mode: str, base_dir: Optional[Path] = None
    ) -> None:
        self.console.print(
            UISection.wrap(
                "import overview",
                ImportTable.summary_block(plan, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )
        if plan.actions:
            self.console.print(
                UISection.wrap(
                    f"{plan.source_tool} import",
                    ImportTable.actions_table(plan.actions, base_dir=base_dir),
                    style=UIStyle.CYAN.value,
                )
            )
        self._print_list("errors", plan.errors, UIStyle.RED.value)
        self._print_list("skipped", plan.skipped, UIStyle.YELLOW.value)

    def render_import_apply_result(self, result: ImportApplyResult) -> None:
        self.render_apply_result(
            applied=result.applied,
            failed=result.failed,
            failures=result.failures,
        )

    def render_targets(self, rows: list[TargetSupportRow], features: list[Feature]) -> None:
        self.console.print(
            UISection.wrap(
                "targets",
                TargetsTable.catalog_table(rows, features),
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.note(
                "legend",
                "native: generated by default\n"
                "global-only: written under the home directory with --global\n"
                "simulated: needs --simulate-commands / --simulate-subagents",
                style=UIStyle.DIM.value,
            )
        )

    def render_scaffold(
        self, results: list[ScaffoldResult], base_dir: Optional[Path] = None
    ) -> None:
        lines = []
        for result in results:
            path = display_path(result.path, base_dir)
            if result.created:
                lines.append(f"[{UIStyle.GREEN.value}]created[/{UIStyle.GREEN.value}] {path}")
            else:
                lines.append(f"[{UIStyle.DIM.value}]exists[/{UIStyle.DIM.value}]  {path}")
        self.console.print(UISection.note("init", "\n".join(lines), style=UIStyle.BLUE.value))
        self.console.print(
            UISection.note(
                "next",
                "Edit the files under .ruleweave, then run:\n- ruleweave generate",
                style=UIStyle.DIM.value,
            )
        )

    def render_gitignore(
        self, path: Path, entries: list[str], changed: bool, base_dir: Optional[Path] = None
    ) -> None:
        shown = display_path(path, base_dir)
        if changed:
            self._print_list(f"updated {shown}", entries, UIStyle.GREEN.value)
        else:
            self.console.print(
                UISection.note(
                    "gitignore", f"{shown} is already up to date", style=UIStyle.DIM.value
                )
            )
