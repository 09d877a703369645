"""Import one tool's native files into the canonical ``.ruleweave`` layout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from ruleweave.core.documents import CanonicalDocument
from ruleweave.core.processor import FeatureProcessor
from ruleweave.errors import RuleweaveError
from ruleweave.filesystem import (
    dump_json,
    ensure_trailing_newline,
    parse_json,
    read_file_content_safe,
    write_file_content,
)
from ruleweave.mcp.models import SERVERS_KEY, CanonicalMcp
from ruleweave.models import (
    ConflictPolicy,
    ImportAction,
    ImportActionStatus,
    ImportApplyResult,
    ImportPlan,
)
from ruleweave.sync.generate import PROCESSORS
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)


class ImportPlanner:
    def __init__(
        self,
        source_dir: Path | None = None,
        home_dir: Path | None = None,
        processors: Mapping[Feature, type[FeatureProcessor]] | None = None,
    ) -> None:
        self.source_dir = Path(source_dir) if source_dir is not None else Path.cwd()
        self.home_dir = Path(home_dir) if home_dir is not None else Path.home()
        self.processors = PROCESSORS if processors is None else processors

    def plan(
        self,
        target: ToolTarget | str,
        features: list[Feature],
        global_mode: bool = False,
        conflict_policy: ConflictPolicy = ConflictPolicy.SKIP,
    ) -> ImportPlan:
        tool = ToolTarget(target)
        plan = ImportPlan(
            source_tool=tool.value, features=[feature.value for feature in features]
        )
        base_dir = self.home_dir if global_mode else self.source_dir
        seen: set[Path] = set()

        for feature in features:
            processor = self._processor(plan, base_dir, tool, feature, global_mode)
            if processor is None:
                continue
            try:
                documents = processor.convert_tool_to_canonical(
                    processor.load_tool_documents()
                )
            except RuleweaveError as exc:
                plan.errors.append(str(exc))
                continue
            if not documents:
                plan.skipped.append(f"{feature.value}: no {tool.value} files found")
            for document in documents:
                path = document.location.file_path
                if path in seen:
                    plan.skipped.append(f"{path}: produced twice; keeping the first")
                    continue
                seen.add(path)
                try:
                    plan.actions.append(
                        self._plan_document(plan, feature, document, conflict_policy)
                    )
                except RuleweaveError as exc:
                    plan.errors.append(str(exc))
        return plan

    def _processor(
        self,
        plan: ImportPlan,
        base_dir: Path,
        tool: ToolTarget,
        feature: Feature,
        global_mode: bool,
    ) -> FeatureProcessor | None:
        processor_cls = self.processors.get(feature)
        entry = processor_cls.REGISTRY.get(tool) if processor_cls else None
        if processor_cls is None or entry is None:
            plan.skipped.append(f"{feature.value}: not supported for {tool.value}")
            return None
        if entry.simulated:
            plan.skipped.append(
                f"{feature.value}: {tool.value} files are simulated and cannot be imported"
            )
            return None
        supported = entry.meta.supports_global if global_mode else entry.meta.supports_project
        if not supported:
            scope = "global" if global_mode else "project"
            plan.skipped.append(f"{feature.value}: no {scope} files for {tool.value}")
            return None
        return processor_cls(
            base_dir, tool, global_mode=global_mode, source_dir=self.source_dir
        )

    def _plan_document(
        self,
        plan: ImportPlan,
        feature: Feature,
        document: CanonicalDocument,
        policy: ConflictPolicy,
    ) -> ImportAction:
        path = document.location.file_path
        content = ensure_trailing_newline(document.file_content)
        existing = read_file_content_safe(path)
        relative = document.location.relative_path

        if existing is None:
            return ImportAction(
                feature.value, ImportActionStatus.CREATE, f"Create {relative}", path, content
            )
        if isinstance(document, CanonicalMcp):
            content = self._merge_mcp(existing, document, policy, path)
        if existing == content:
            return ImportAction(
                feature.value, ImportActionStatus.NOOP, f"{relative} already matches", path
            )
        if policy == ConflictPolicy.OVERWRITE or isinstance(document, CanonicalMcp):
            return ImportAction(
                feature.value, ImportActionStatus.UPDATE, f"Update {relative}", path, content
            )
        if policy == ConflictPolicy.FAIL:
            plan.errors.append(f"Conflict: {relative} already exists")
            return ImportAction(
                feature.value, ImportActionStatus.CONFLICT, f"Conflict on {relative}", path
            )
        return ImportAction(
            feature.value, ImportActionStatus.SKIP, f"{relative} exists; kept", path
        )

    @staticmethod
    def _merge_mcp(
        existing: str, document: CanonicalMcp, policy: ConflictPolicy, path: Path
    ) -> str:
        """Merge incoming servers into an existing canonical file, server by server."""
        current = parse_json(existing, path) if existing.strip() else {}
        if not isinstance(current, dict):
            current = {}
        servers = current.get(SERVERS_KEY)
        merged = dict(servers) if isinstance(servers, dict) else {}
        for name, server in document.servers.items():
            if name in merged and merged[name] != server:
                if policy != ConflictPolicy.OVERWRITE:
                    logger.info("Keeping existing MCP server '%s'", name)
                    continue
            merged[name] = server
        current[SERVERS_KEY] = merged
        return dump_json(current)

    def apply(self, plan: ImportPlan) -> ImportApplyResult:
        if plan.errors:
            return ImportApplyResult(
                applied=0, failed=len(plan.errors), failures=list(plan.errors)
            )

        applied = 0
        failed = 0
        failures: list[str] = []
        for action in plan.writable():
            if action.payload is None:
                failed += 1
                failures.append(f"Missing payload for {action.path}")
                continue
            try:
                write_file_content(action.path, action.payload)
            except OSError as exc:
                failed += 1
                failures.append(f"Failed to write {action.path}: {exc}")
                continue
            applied += 1
        return ImportApplyResult(applied=applied, failed=failed, failures=failures)
