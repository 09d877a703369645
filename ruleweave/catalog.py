"""Support matrix of tool targets against features, for the ``targets`` command."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from ruleweave.core.processor import FeatureProcessor
from ruleweave.sync.generate import PROCESSORS
from ruleweave.targets import TOOL_CATALOG, Feature, ToolTarget


class SupportLevel(str, Enum):
    NATIVE = "native"
    GLOBAL_ONLY = "global-only"
    SIMULATED = "simulated"
    NONE = "none"


@dataclass(frozen=True)
class TargetSupportRow:
    target: ToolTarget
    label: str
    legacy: bool
    support: dict[Feature, SupportLevel]
    global_features: tuple[Feature, ...] = ()

    def supported(self) -> list[Feature]:
        return [
            feature
            for feature, level in self.support.items()
            if level != SupportLevel.NONE
        ]


def support_level(
    processor_cls: type[FeatureProcessor] | None, target: ToolTarget
) -> SupportLevel:
    entry = processor_cls.REGISTRY.get(target) if processor_cls else None
    if entry is None:
        return SupportLevel.NONE
    if entry.simulated:
        return SupportLevel.SIMULATED
    if not entry.meta.supports_project:
        return SupportLevel.GLOBAL_ONLY
    return SupportLevel.NATIVE


def build_target_catalog(
    processors: Mapping[Feature, type[FeatureProcessor]] | None = None,
) -> list[TargetSupportRow]:
    processors = PROCESSORS if processors is None else processors
    rows: list[TargetSupportRow] = []
    for target, metadata in TOOL_CATALOG.items():
        support: dict[Feature, SupportLevel] = {}
        global_features: list[Feature] = []
        for feature, processor_cls in processors.items():
            support[feature] = support_level(processor_cls, target)
            entry = processor_cls.REGISTRY.get(target)
            if entry is not None and entry.meta.supports_global:
                global_features.append(feature)
        rows.append(
            TargetSupportRow(
                target=target,
                label=metadata.label,
                legacy=metadata.legacy,
                support=support,
                global_features=tuple(global_features),
            )
        )
    return rows
