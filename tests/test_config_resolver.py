import json
from pathlib import Path

import pytest

from ruleweave.config_resolver import ConfigResolver, find_config_file, load_config_file
from ruleweave.errors import InvalidConfigError
from ruleweave.targets import Feature, ToolTarget


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = ConfigResolver(cwd=tmp_path).resolve()
    assert config.get_targets() == [ToolTarget.AGENTSMD]
    assert config.get_features() == [Feature.RULES]


def test_json_config_file_is_loaded(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.json").write_text(
        json.dumps(
            {
                "targets": ["cursor", "copilot"],
                "features": ["rules", "ignore"],
                "delete": True,
                "simulateCommands": True,
            }
        ),
        encoding="utf-8",
    )
    config = ConfigResolver(cwd=tmp_path).resolve()
    assert config.get_targets() == [ToolTarget.CURSOR, ToolTarget.COPILOT]
    assert config.get_features() == [Feature.RULES, Feature.IGNORE]
    assert config.delete
    assert config.simulate_commands


def test_yaml_config_file_is_loaded(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.yaml").write_text(
        "targets:\n  - claudecode\nfeatures:\n  claudecode: [rules, mcp]\n",
        encoding="utf-8",
    )
    config = ConfigResolver(cwd=tmp_path).resolve()
    assert config.get_targets() == [ToolTarget.CLAUDECODE]
    assert config.get_features("claudecode") == [Feature.RULES, Feature.MCP]


def test_json_preferred_over_yaml(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.json").write_text("{}", encoding="utf-8")
    (tmp_path / "ruleweave.yaml").write_text("{}", encoding="utf-8")
    assert find_config_file(tmp_path) == tmp_path / "ruleweave.json"


def test_overrides_win_over_file_values(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.json").write_text(
        json.dumps({"targets": ["cursor"], "delete": True}), encoding="utf-8"
    )
    config = ConfigResolver(cwd=tmp_path).resolve(targets=["copilot"], delete=False)
    assert config.get_targets() == [ToolTarget.COPILOT]
    assert not config.delete


def test_none_overrides_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.json").write_text(
        json.dumps({"targets": ["cursor"]}), encoding="utf-8"
    )
    config = ConfigResolver(cwd=tmp_path).resolve(targets=None)
    assert config.get_targets() == [ToolTarget.CURSOR]


def test_global_mode_uses_home_as_only_base_dir(tmp_path: Path) -> None:
    home = tmp_path / "home"
    config = ConfigResolver(cwd=tmp_path, home_dir=home).resolve(
        global_mode=True, base_dirs=["a", "b"]
    )
    assert config.base_dirs == [home]


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "ruleweave.json"
    path.write_text(json.dumps({"targetz": ["cursor"]}), encoding="utf-8")
    with pytest.raises(InvalidConfigError):
        load_config_file(path)


def test_malformed_json_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "ruleweave.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidConfigError) as exc_info:
        ConfigResolver(cwd=tmp_path).resolve()
    assert "ruleweave.json" in str(exc_info.value)


def test_explicit_missing_config_path_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        ConfigResolver(cwd=tmp_path).resolve("missing.json")


def test_explicit_config_path_relative_to_cwd(tmp_path: Path) -> None:
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "custom.yml").write_text("targets: [roo]\n", encoding="utf-8")
    config = ConfigResolver(cwd=tmp_path).resolve("conf/custom.yml")
    assert config.get_targets() == [ToolTarget.ROO]


def test_empty_yaml_file_means_defaults(tmp_path: Path) -> None:
    (tmp_path / "ruleweave.yaml").write_text("", encoding="utf-8")
    config = ConfigResolver(cwd=tmp_path).resolve()
    assert config.get_targets() == [ToolTarget.AGENTSMD]
