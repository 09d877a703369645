"""Target and feature resolution for a generate or import run."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence, Union

from ruleweave.errors import (
    ConflictingTargetsError,
    IncompatibleOptionsError,
    InvalidConfigError,
)
from ruleweave.targets import (
    CONFLICTING_TARGET_PAIRS,
    WILDCARD,
    Feature,
    ToolTarget,
    all_features,
    non_legacy_targets,
)

FeatureSpec = Union[Sequence[str], Mapping[str, Sequence[str]]]


def _parse_target(value: str) -> ToolTarget:
    try:
        return ToolTarget(value)
    except ValueError:
        raise InvalidConfigError(f"Unknown target: {value}") from None


def _parse_feature_list(values: Sequence[str]) -> list[Feature | str]:
    if isinstance(values, str):
        values = [values]
    parsed: list[Feature | str] = []
    for value in values:
        if value == WILDCARD:
            parsed.append(WILDCARD)
            continue
        try:
            feature = Feature(value)
        except ValueError:
            raise InvalidConfigError(f"Unknown feature: {value}") from None
        if feature not in parsed:
            parsed.append(feature)
    return parsed


def _expand_features(values: Sequence[Feature | str]) -> list[Feature]:
    if WILDCARD in values:
        return all_features()
    return [Feature(value) for value in values]


class Config:
    def __init__(
        self,
        *,
        targets: Sequence[str],
        features: FeatureSpec,
        base_dirs: Sequence[str | Path] | None = None,
        verbose: bool = False,
        silent: bool = False,
        delete: bool = False,
        global_mode: bool = False,
        dry_run: bool = False,
        check: bool = False,
        simulate_commands: bool = False,
        simulate_subagents: bool = False,
    ) -> None:
        if isinstance(targets, str):
            targets = [targets]
        self._targets: list[ToolTarget | str] = []
        for value in targets:
            item: ToolTarget | str = (
                WILDCARD if value == WILDCARD else _parse_target(value)
            )
            if item not in self._targets:
                self._targets.append(item)
        self._validate_conflicts()

        self._per_target: dict[ToolTarget, list[Feature | str]] | None = None
        self._flat: list[Feature | str] = []
        if isinstance(features, Mapping):
            self._per_target = {
                _parse_target(target): _parse_feature_list(values)
                for target, values in features.items()
            }
        else:
            self._flat = _parse_feature_list(features)

        if dry_run and check:
            raise IncompatibleOptionsError("dry-run", "check")
        if verbose and silent:
            raise IncompatibleOptionsError("verbose", "silent")

        self.base_dirs = [Path(item) for item in (base_dirs or ["."])]
        self.verbose = verbose
        self.silent = silent
        self.delete = delete
        self.global_mode = global_mode
        self.dry_run = dry_run
        self.check = check
        self.simulate_commands = simulate_commands
        self.simulate_subagents = simulate_subagents

    def _validate_conflicts(self) -> None:
        explicit = set(self._targets)
        for first, second in CONFLICTING_TARGET_PAIRS:
            if first in explicit and second in explicit:
                raise ConflictingTargetsError(first.value, second.value)

    @property
    def is_preview(self) -> bool:
        return self.dry_run or self.check

    def get_targets(self) -> list[ToolTarget]:
        if WILDCARD in self._targets:
            return non_legacy_targets()
        return [ToolTarget(item) for item in self._targets]

    def has_per_target_features(self) -> bool:
        return self._per_target is not None

    def get_features(self, target: ToolTarget | str | None = None) -> list[Feature]:
        if self._per_target is None:
            return _expand_features(self._flat)

        if target is not None:
            return _expand_features(self._per_target.get(_parse_target(target), []))

        union: list[Feature] = []
        for values in self._per_target.values():
            if WILDCARD in values:
                return all_features()
            for feature in _expand_features(values):
                if feature not in union:
                    union.append(feature)
        return union
