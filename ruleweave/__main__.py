from pathlib import Path
from typing import Any, Dict, Optional

import click
from click.core import ParameterSource
from rich.console import Console

from ruleweave.catalog import build_target_catalog
from ruleweave.config import Config
from ruleweave.config_resolver import ConfigResolver
from ruleweave.errors import RuleweaveError
from ruleweave.gitignore import GitignoreService
from ruleweave.logging_setup import configure_logging
from ruleweave.models import ConflictPolicy, ImportPlan
from ruleweave.scaffold import scaffold_project
from ruleweave.sync.executor import SyncExecutor
from ruleweave.sync.generate import PROCESSORS, GeneratePlanner
from ruleweave.sync.importer import ImportPlanner
from ruleweave.targets import WILDCARD, Feature, ToolTarget, all_features
from ruleweave.tui import SyncConsoleUI
from ruleweave.tui.import_selector import ImportSelectorApp, filter_plan_by_selection


TARGET_VALUES = [target.value for target in ToolTarget]
CONFLICT_VALUES = [policy.value for policy in ConflictPolicy]

# CLI parameter name -> Config keyword
GENERATE_OVERRIDES: Dict[str, str] = {
    "targets": "targets",
    "features": "features",
    "base_dirs": "base_dirs",
    "delete": "delete",
    "dry_run": "dry_run",
    "check": "check",
    "global_mode": "global_mode",
    "simulate_commands": "simulate_commands",
    "simulate_subagents": "simulate_subagents",
    "verbose": "verbose",
    "silent": "silent",
}


def _split_csv(value: Optional[str]) -> Optional[list[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_import_features(value: str) -> list[Feature]:
    items = _split_csv(value) or []
    if WILDCARD in items:
        return all_features()
    features: list[Feature] = []
    for item in items:
        try:
            feature = Feature(item)
        except ValueError:
            raise click.BadParameter(f"unknown feature '{item}'", param_hint="--features")
        if feature not in features:
            features.append(feature)
    return features


def _explicit_overrides(ctx: click.Context, values: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only options given on the command line so config-file values survive."""
    overrides: Dict[str, Any] = {}
    for param, key in GENERATE_OVERRIDES.items():
        source = ctx.get_parameter_source(param)
        if source in (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT):
            overrides[key] = values[param]
    return overrides


def _console(silent: bool) -> Console:
    return Console(quiet=silent)


def _run_selector(plan: ImportPlan) -> list[int]:
    selected = ImportSelectorApp(plan).run()
    return selected or []


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Generate AI coding tool configuration from one .ruleweave source tree."""
    ctx.obj = {}


@cli.command(help="Generate tool files from the .ruleweave sources.")
@click.option("-t", "--targets", help="Comma-separated tool targets, or '*'.")
@click.option("-f", "--features", help="Comma-separated features, or '*'.")
@click.option("--delete", is_flag=True, help="Remove generated files that no longer have a source.")
@click.option("--dry-run", is_flag=True, help="Show the plan without writing.")
@click.option("--check", is_flag=True, help="Exit 1 when generated files are out of date.")
@click.option("--global", "global_mode", is_flag=True, help="Write user-level files under the home directory.")
@click.option("--simulate-commands", is_flag=True, help="Emit command files for tools without native commands.")
@click.option("--simulate-subagents", is_flag=True, help="Emit subagent files for tools without native subagents.")
@click.option(
    "-b",
    "--base-dir",
    "base_dirs",
    multiple=True,
    type=click.Path(path_type=Path, file_okay=False),
    help="Output directory; repeat for several.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path to ruleweave.json or ruleweave.yaml.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs and unchanged files.")
@click.option("-s", "--silent", is_flag=True, help="Only print errors.")
@click.pass_context
def generate(ctx: click.Context, config_path: Optional[Path], **options: Any) -> None:
    options["targets"] = _split_csv(options["targets"])
    options["features"] = _split_csv(options["features"])
    options["base_dirs"] = list(options["base_dirs"]) or None

    cwd = Path.cwd()
    try:
        config = ConfigResolver(cwd=cwd).resolve(
            config_path, **_explicit_overrides(ctx, options)
        )
    except RuleweaveError as exc:
        raise click.ClickException(str(exc))

    configure_logging(verbose=config.verbose, silent=config.silent)
    ui = SyncConsoleUI(_console(config.silent))

    plan = GeneratePlanner(config, source_dir=cwd).build()
    mode = "check" if config.check else "dry-run" if config.dry_run else "generate"
    ui.render_plan(plan, mode=mode, base_dir=cwd, verbose=config.verbose)

    if plan.errors:
        raise click.ClickException("Generate aborted due to errors above.")

    if config.check:
        ui.render_check_result(plan)
        if plan.has_changes():
            raise click.exceptions.Exit(1)
        return

    applied, failed, failures = SyncExecutor(preview=config.dry_run).execute(plan)
    if not config.dry_run:
        ui.render_apply_result(applied, failed, failures)
    if failed:
        raise click.exceptions.Exit(1)


@cli.command(name="import", help="Import one tool's files into .ruleweave.")
@click.option(
    "-t",
    "--target",
    required=True,
    type=click.Choice(TARGET_VALUES),
    help="Tool to import from.",
)
@click.option(
    "-f",
    "--features",
    default=WILDCARD,
    show_default=True,
    help="Comma-separated features to import, or '*'.",
)
@click.option("--global", "global_mode", is_flag=True, help="Import user-level files from the home directory.")
@click.option(
    "--conflict",
    type=click.Choice(CONFLICT_VALUES),
    default=ConflictPolicy.SKIP.value,
    show_default=True,
    help="What to do when a canonical file already exists.",
)
@click.option("--dry-run", is_flag=True, help="Show the import plan without writing.")
@click.option("-i", "--interactive", is_flag=True, help="Pick which files to import.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs.")
@click.option("-s", "--silent", is_flag=True, help="Only print errors.")
def import_(
    target: str,
    features: str,
    global_mode: bool,
    conflict: str,
    dry_run: bool,
    interactive: bool,
    verbose: bool,
    silent: bool,
) -> None:
    if verbose and silent:
        raise click.ClickException(
            "Options 'verbose' and 'silent' cannot be combined."
        )
    configure_logging(verbose=verbose, silent=silent)
    ui = SyncConsoleUI(_console(silent))

    cwd = Path.cwd()
    planner = ImportPlanner(source_dir=cwd)
    try:
        plan = planner.plan(
            target,
            _parse_import_features(features),
            global_mode=global_mode,
            conflict_policy=ConflictPolicy(conflict),
        )
    except RuleweaveError as exc:
        raise click.ClickException(str(exc))

    ui.render_import_plan(plan, mode="dry-run" if dry_run else "import", base_dir=cwd)
    if plan.errors:
        raise click.ClickException("Import aborted due to errors above.")
    if dry_run:
        return

    if interactive and plan.writable():
        plan = filter_plan_by_selection(plan, _run_selector(plan))

    result = planner.apply(plan)
    ui.render_import_apply_result(result)
    if result.failed:
        raise click.exceptions.Exit(1)


@cli.command(help="List tool targets and the features each supports.")
def targets() -> None:
    ui = SyncConsoleUI(Console())
    ui.render_targets(build_target_catalog(), list(PROCESSORS))


@cli.command(help="Add generated tool files to .gitignore.")
@click.option(
    "-t",
    "--targets",
    default=WILDCARD,
    show_default=True,
    help="Comma-separated tool targets, or '*'.",
)
def gitignore(targets: str) -> None:
    configure_logging()
    ui = SyncConsoleUI(Console())
    cwd = Path.cwd()
    service = GitignoreService(cwd)
    try:
        selected = Config(targets=_split_csv(targets) or [WILDCARD], features=[WILDCARD])
        entries = service.compute_entries(selected.get_targets())
        changed = service.update(entries)
    except RuleweaveError as exc:
        raise click.ClickException(str(exc))
    ui.render_gitignore(service.path, entries, changed, base_dir=cwd)


@cli.command(help="Create a sample .ruleweave tree and ruleweave.json.")
def init() -> None:
    configure_logging()
    ui = SyncConsoleUI(Console())
    cwd = Path.cwd()
    ui.render_scaffold(scaffold_project(cwd), base_dir=cwd)


def main() -> int:
    try:
        # Non-standalone click returns the code of an Exit raised inside a command.
        result = cli(standalone_mode=False)
        if isinstance(result, int):
            return result
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
