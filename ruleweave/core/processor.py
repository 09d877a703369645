"""Registry-driven load/convert pipeline shared by every feature domain."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ClassVar, Mapping

from ruleweave.core.adapter import IToolAdapter
from ruleweave.core.documents import (
    CanonicalDocument,
    DocumentLocation,
    SettablePaths,
    ToolDocument,
)
from ruleweave.errors import RuleweaveError, UnsupportedTargetError
from ruleweave.filesystem import directory_exists, file_exists, find_files_by_globs
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterMeta:
    file_pattern: str = "*.md"
    supports_project: bool = True
    supports_global: bool = False


@dataclass(frozen=True)
class AdapterEntry:
    adapter: IToolAdapter
    meta: AdapterMeta = field(default_factory=AdapterMeta)

    @property
    def simulated(self) -> bool:
        return self.adapter.SIMULATED


AdapterRegistry = Mapping[ToolTarget, AdapterEntry]


def lookup_adapter_entry(
    registry: AdapterRegistry, target: ToolTarget | str, feature: Feature
) -> AdapterEntry:
    try:
        tool = ToolTarget(target)
    except ValueError:
        raise UnsupportedTargetError(str(target), feature.value) from None
    entry = registry.get(tool)
    if entry is None:
        raise UnsupportedTargetError(tool.value, feature.value)
    return entry


def registry_targets(
    registry: AdapterRegistry,
    global_mode: bool = False,
    include_simulated: bool = False,
) -> list[ToolTarget]:
    targets: list[ToolTarget] = []
    for target, entry in registry.items():
        if entry.simulated and not include_simulated:
            continue
        if global_mode and not entry.meta.supports_global:
            continue
        if not global_mode and not entry.meta.supports_project:
            continue
        targets.append(target)
    return targets


class FeatureProcessor(ABC):
    FEATURE: ClassVar[Feature]
    REGISTRY: ClassVar[AdapterRegistry]

    def __init__(
        self,
        base_dir: Path,
        tool_target: ToolTarget | str,
        global_mode: bool = False,
        source_dir: Path | None = None,
        registry: AdapterRegistry | None = None,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.source_dir = Path(source_dir) if source_dir is not None else self.base_dir
        self.global_mode = global_mode
        self.registry = self.REGISTRY if registry is None else registry
        self.entry = lookup_adapter_entry(self.registry, tool_target, self.FEATURE)
        self.tool_target = ToolTarget(tool_target)

    @property
    def adapter(self) -> IToolAdapter:
        return self.entry.adapter

    @classmethod
    def get_tool_targets(
        cls,
        global_mode: bool = False,
        include_simulated: bool = False,
        registry: AdapterRegistry | None = None,
    ) -> list[ToolTarget]:
        return registry_targets(
            cls.REGISTRY if registry is None else registry,
            global_mode=global_mode,
            include_simulated=include_simulated,
        )

    @abstractmethod
    def load_canonical_documents(self) -> list[CanonicalDocument]:
        raise NotImplementedError

    def convert_canonical_to_tool(
        self, documents: list[CanonicalDocument]
    ) -> list[ToolDocument]:
        converted: list[ToolDocument] = []
        for document in documents:
            if not self.adapter.is_targeted_by(document):
                continue
            tool_document = self.adapter.from_canonical(
                document, self.base_dir, global_mode=self.global_mode
            )
            if tool_document is not None:
                converted.append(tool_document)
        return converted

    def load_tool_documents(self, for_deletion: bool = False) -> list[ToolDocument]:
        documents: list[ToolDocument] = []
        for location in self.discover_tool_locations():
            if for_deletion:
                placeholder = self.adapter.for_deletion(
                    location, global_mode=self.global_mode
                )
                if placeholder.deletable:
                    documents.append(placeholder)
                continue
            try:
                documents.append(
                    self.adapter.from_file(location, global_mode=self.global_mode)
                )
            except RuleweaveError as exc:
                logger.warning("Skipping %s: %s", location.relative_path, exc)
        return documents

    def convert_tool_to_canonical(
        self, documents: list[ToolDocument]
    ) -> list[CanonicalDocument]:
        converted: list[CanonicalDocument] = []
        for document in documents:
            if self.entry.simulated:
                logger.debug(
                    "Skipping simulated %s file %s: not convertible",
                    self.tool_target.value,
                    document.location.relative_path,
                )
                continue
            canonical = self.adapter.to_canonical(document)
            canonical.location = canonical.location.rebase(self.source_dir)
            converted.append(canonical)
        return converted

    def discover_tool_locations(self) -> list[DocumentLocation]:
        paths = self.adapter.get_settable_paths(global_mode=self.global_mode)
        return self.locations_for(paths)

    def locations_for(
        self, paths: SettablePaths, pattern: str | None = None
    ) -> list[DocumentLocation]:
        directory = self.base_dir / paths.relative_dir_path
        if paths.relative_file_path is not None:
            if not file_exists(directory / paths.relative_file_path):
                return []
            return [
                DocumentLocation(
                    self.base_dir, paths.relative_dir_path, paths.relative_file_path
                )
            ]
        return [
            DocumentLocation(self.base_dir, paths.relative_dir_path, path.name)
            for path in find_files_by_globs(
                directory, [pattern or self.entry.meta.file_pattern]
            )
        ]

    def load_canonical_directory(
        self,
        relative_dir_path: str,
        loader: Callable[[DocumentLocation], Any],
        pattern: str = "*.md",
    ) -> list[Any]:
        directory = self.source_dir / relative_dir_path
        if not directory_exists(directory):
            logger.debug("No %s directory at %s", self.FEATURE.value, directory)
            return []

        documents: list[Any] = []
        for path in find_files_by_globs(directory, [pattern]):
            location = DocumentLocation(self.source_dir, relative_dir_path, path.name)
            try:
                documents.append(loader(location))
            except RuleweaveError as exc:
                logger.warning("Skipping %s: %s", location.relative_path, exc)
        return documents
