from pathlib import Path

import pytest

from ruleweave.config import Config
from ruleweave.errors import (
    ConflictingTargetsError,
    IncompatibleOptionsError,
    InvalidConfigError,
)
from ruleweave.targets import Feature, ToolTarget, all_features, non_legacy_targets


def test_wildcard_target_excludes_legacy_targets() -> None:
    config = Config(targets=["*"], features=["rules"])
    targets = config.get_targets()
    assert targets == non_legacy_targets()
    assert ToolTarget.CLAUDECODE_LEGACY not in targets
    assert ToolTarget.AUGMENTCODE_LEGACY not in targets


def test_legacy_target_selected_explicitly() -> None:
    config = Config(targets=["claudecode-legacy"], features=["rules"])
    assert config.get_targets() == [ToolTarget.CLAUDECODE_LEGACY]


@pytest.mark.parametrize(
    "pair",
    [["augmentcode", "augmentcode-legacy"], ["claudecode", "claudecode-legacy"]],
)
def test_conflicting_targets_names_both(pair: list[str]) -> None:
    with pytest.raises(ConflictingTargetsError) as exc_info:
        Config(targets=pair, features=["rules"])
    assert (exc_info.value.first, exc_info.value.second) == tuple(pair)
    message = str(exc_info.value)
    assert f"'{pair[0]}'" in message
    assert f"'{pair[1]}'" in message


def test_wildcard_with_legacy_target_does_not_conflict_unless_explicit() -> None:
    config = Config(targets=["*", "augmentcode-legacy"], features=["rules"])
    assert ToolTarget.AUGMENTCODE in config.get_targets()


def test_unknown_target_is_rejected() -> None:
    with pytest.raises(InvalidConfigError):
        Config(targets=["notatool"], features=["rules"])


def test_unknown_feature_is_rejected() -> None:
    with pytest.raises(InvalidConfigError):
        Config(targets=["cursor"], features=["snippets"])


def test_flat_features_apply_to_every_target() -> None:
    config = Config(targets=["cursor", "copilot"], features=["rules", "mcp"])
    assert config.get_features() == [Feature.RULES, Feature.MCP]
    assert config.get_features("copilot") == [Feature.RULES, Feature.MCP]
    assert not config.has_per_target_features()


def test_feature_wildcard_expands_to_all() -> None:
    config = Config(targets=["cursor"], features=["*"])
    assert config.get_features() == all_features()


def test_per_target_features_override_flat() -> None:
    config = Config(
        targets=["cursor", "claudecode"],
        features={"cursor": ["rules"], "claudecode": ["mcp", "commands"]},
    )
    assert config.has_per_target_features()
    assert config.get_features("cursor") == [Feature.RULES]
    assert config.get_features(ToolTarget.CLAUDECODE) == [Feature.MCP, Feature.COMMANDS]
    assert config.get_features("copilot") == []
    assert config.get_features() == [Feature.RULES, Feature.MCP, Feature.COMMANDS]


def test_per_target_union_with_wildcard_is_all_features() -> None:
    config = Config(
        targets=["cursor", "claudecode"],
        features={"cursor": ["rules"], "claudecode": ["*"]},
    )
    assert config.get_features() == all_features()


def test_dry_run_and_check_are_incompatible() -> None:
    with pytest.raises(IncompatibleOptionsError):
        Config(targets=["cursor"], features=["rules"], dry_run=True, check=True)


def test_verbose_and_silent_are_incompatible() -> None:
    with pytest.raises(IncompatibleOptionsError):
        Config(targets=["cursor"], features=["rules"], verbose=True, silent=True)


def test_defaults() -> None:
    config = Config(targets="cursor", features="rules")
    assert config.get_targets() == [ToolTarget.CURSOR]
    assert config.base_dirs == [Path(".")]
    assert not config.delete
    assert not config.is_preview


def test_preview_when_dry_run() -> None:
    config = Config(targets=["cursor"], features=["rules"], dry_run=True)
    assert config.is_preview
