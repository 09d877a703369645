"""Plan the writes and removals of a generate run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ruleweave.commands.processor import CommandsProcessor
from ruleweave.config import Config
from ruleweave.core.documents import ToolDocument
from ruleweave.core.processor import FeatureProcessor
from ruleweave.errors import DocumentParseError, RuleweaveError
from ruleweave.filesystem import ensure_trailing_newline, read_file_content_safe
from ruleweave.ignore.processor import IgnoreProcessor
from ruleweave.mcp.processor import McpProcessor
from ruleweave.models import Action, ActionKind, ActionStatus, SyncPlan
from ruleweave.rules.processor import RulesProcessor
from ruleweave.subagents.processor import SubagentsProcessor
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)

PROCESSORS: dict[Feature, type[FeatureProcessor]] = {
    Feature.RULES: RulesProcessor,
    Feature.IGNORE: IgnoreProcessor,
    Feature.MCP: McpProcessor,
    Feature.COMMANDS: CommandsProcessor,
    Feature.SUBAGENTS: SubagentsProcessor,
}


class GeneratePlanner:
    def __init__(
        self,
        config: Config,
        source_dir: Path | None = None,
        processors: Mapping[Feature, type[FeatureProcessor]] | None = None,
    ) -> None:
        self.config = config
        self.source_dir = Path(source_dir) if source_dir is not None else Path.cwd()
        self.processors = PROCESSORS if processors is None else processors

        self.actions: list[Action] = []
        self.errors: list[Exception] = []
        self.skipped: list[str] = []

        self._planned: set[Path] = set()
        self._orphans: list[tuple[Path, ToolTarget, Feature]] = []

    def build(self) -> SyncPlan:
        for base_dir in self.base_dirs():
            for target in self.config.get_targets():
                for feature in self.config.get_features(target):
                    self._plan_feature(base_dir, target, feature)
        self._plan_removals()
        return SyncPlan(actions=self.actions, errors=self.errors, skipped=self.skipped)

    def base_dirs(self) -> list[Path]:
        return [
            path if path.is_absolute() else self.source_dir / path
            for path in self.config.base_dirs
        ]

    def _skip(self, message: str) -> None:
        logger.debug("Skipping %s", message)
        if message not in self.skipped:
            self.skipped.append(message)

    def _simulation_enabled(self, feature: Feature) -> bool:
        if feature == Feature.COMMANDS:
            return self.config.simulate_commands
        if feature == Feature.SUBAGENTS:
            return self.config.simulate_subagents
        return False

    def create_processor(
        self, base_dir: Path, target: ToolTarget, feature: Feature
    ) -> FeatureProcessor | None:
        processor_cls = self.processors.get(feature)
        if processor_cls is None:
            self._skip(f"{feature.value}: not implemented")
            return None

        entry = processor_cls.REGISTRY.get(target)
        if entry is None:
            self._skip(f"{target.value}: {feature.value} not supported")
            return None
        if entry.simulated and not self._simulation_enabled(feature):
            self._skip(
                f"{target.value}: {feature.value} are simulated; "
                f"pass --simulate-{feature.value} to generate them"
            )
            return None
        if self.config.global_mode and not entry.meta.supports_global:
            self._skip(f"{target.value}: {feature.value} not supported in global mode")
            return None
        if not self.config.global_mode and not entry.meta.supports_project:
            self._skip(f"{target.value}: {feature.value} only supported in global mode")
            return None

        kwargs: dict[str, Any] = {}
        if feature == Feature.RULES:
            kwargs = {
                "simulate_commands": self.config.simulate_commands,
                "simulate_subagents": self.config.simulate_subagents,
            }
        return processor_cls(
            base_dir,
            target,
            global_mode=self.config.global_mode,
            source_dir=self.source_dir,
            **kwargs,
        )

    def _plan_feature(self, base_dir: Path, target: ToolTarget, feature: Feature) -> None:
        try:
            processor = self.create_processor(base_dir, target, feature)
            if processor is None:
                return
            documents = processor.convert_canonical_to_tool(
                processor.load_canonical_documents()
            )
            written = self._plan_writes(processor, documents, target, feature)
            if self.config.delete:
                for placeholder in processor.load_tool_documents(for_deletion=True):
                    path = placeholder.file_path
                    if path not in written:
                        self._orphans.append((path, target, feature))
        except RuleweaveError as exc:
            logger.debug("Planning %s for %s failed: %s", feature.value, target.value, exc)
            self.errors.append(exc)

    def _plan_writes(
        self,
        processor: FeatureProcessor,
        documents: list[ToolDocument],
        target: ToolTarget,
        feature: Feature,
    ) -> set[Path]:
        written: set[Path] = set()
        for document in documents:
            result = processor.adapter.validate(document)
            if not result.success:
                self.errors.append(
                    DocumentParseError(
                        document.location.relative_path, result.error or "invalid"
                    )
                )
                continue

            path = document.file_path
            written.add(path)
            if path in self._planned:
                self._skip(f"{path}: already generated for another target")
                continue
            self._planned.add(path)

            existing = read_file_content_safe(path)
            if existing is None:
                content = document.file_content
                status = ActionStatus.CREATE
            else:
                content = processor.adapter.merge_with_existing(document, existing)
                status = (
                    ActionStatus.NOOP
                    if ensure_trailing_newline(content) == existing
                    else ActionStatus.UPDATE
                )
            self.actions.append(
                Action(
                    kind=ActionKind.WRITE_TEXT,
                    path=path,
                    status=status,
                    detail=f"{feature.value} for {target.value}",
                    payload=ensure_trailing_newline(content),
                    target=target.value,
                    feature=feature.value,
                )
            )
        return written

    def _plan_removals(self) -> None:
        removed: set[Path] = set()
        for path, target, feature in self._orphans:
            if path in self._planned or path in removed:
                continue
            removed.add(path)
            self.actions.append(
                Action(
                    kind=ActionKind.REMOVE_FILE,
                    path=path,
                    status=ActionStatus.REMOVE,
                    detail=f"stale {feature.value} for {target.value}",
                    target=target.value,
                    feature=feature.value,
                )
            )


def build_generate_plan(config: Config, source_dir: Path | None = None) -> SyncPlan:
    return GeneratePlanner(config, source_dir=source_dir).build()
