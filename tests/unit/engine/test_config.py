import pytest

from armshift.config import (
    DEFAULT_PASSES,
    ArmshiftConfig,
    config_from_dict,
    load_config_from_path,
    merge_cli_overrides,
)
from armshift.errors import ConfigError


def test_defaults_without_pyproject(tmp_path):
    config = load_config_from_path(tmp_path)

    assert config == ArmshiftConfig()
    assert config.include == ["**/*.ts"]
    assert config.passes == DEFAULT_PASSES


def test_defaults_without_tool_table(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')

    assert load_config_from_path(tmp_path) == ArmshiftConfig()


def test_reads_tool_table(workspace_factory):
    root = workspace_factory.with_config(
        {
            "include": ["src/**/*.ts", "src/**/*.tsx"],
            "exclude": "src/generated/*",
            "passes": ["lro-calls"],
            "extra_top_level_keys": ["plan"],
        }
    ).build()

    config = load_config_from_path(root)

    assert config.include == ["src/**/*.ts", "src/**/*.tsx"]
    assert config.exclude == ["src/generated/*"]
    assert config.passes == ["lro-calls"]
    assert config.extra_top_level_keys == ["plan"]


def test_invalid_toml_raises_config_error(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.armshift\ninclude = ")

    with pytest.raises(ConfigError):
        load_config_from_path(tmp_path)


def test_unknown_key_is_rejected():
    with pytest.raises(ConfigError, match="scan_paths"):
        config_from_dict({"scan_paths": ["src"]})


def test_non_string_values_are_rejected():
    with pytest.raises(ConfigError, match="include"):
        config_from_dict({"include": [1, 2]})


def test_cli_overrides_replace_patterns_and_passes():
    base = ArmshiftConfig(include=["src/**/*.ts"], exclude=["x/*"])

    merged = merge_cli_overrides(base, patterns=["lib/*.ts"], passes=["lro-calls"])

    assert merged.include == ["lib/*.ts"]
    assert merged.passes == ["lro-calls"]
    assert merged.exclude == ["x/*"]
    assert base.include == ["src/**/*.ts"]


def test_empty_cli_overrides_keep_config():
    base = ArmshiftConfig(include=["src/**/*.ts"])

    assert merge_cli_overrides(base) == base
