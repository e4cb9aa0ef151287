import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from armshift.errors import ConfigError

DEFAULT_INCLUDE = ["**/*.ts"]
DEFAULT_PASSES = ["nest-properties", "lro-calls"]


@dataclass
class ArmshiftConfig:
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: List[str] = field(default_factory=list)
    passes: List[str] = field(default_factory=lambda: list(DEFAULT_PASSES))
    extra_top_level_keys: List[str] = field(default_factory=list)


def load_config_from_path(root_path: Path) -> ArmshiftConfig:
    """
    Reads the [tool.armshift] table from `root_path/pyproject.toml`.

    A missing file or table yields the defaults.
    """
    config_path = root_path / "pyproject.toml"
    if not config_path.exists():
        return ArmshiftConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    table = data.get("tool", {}).get("armshift")
    if table is None:
        return ArmshiftConfig()
    return config_from_dict(table)


def config_from_dict(table: Dict[str, Any]) -> ArmshiftConfig:
    config = ArmshiftConfig()
    for key, value in table.items():
        if not hasattr(config, key):
            raise ConfigError(f"unknown key '{key}' in [tool.armshift]")
        setattr(config, key, _string_list(key, value))
    return config


def _string_list(key: str, value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a string or a list of strings")
    return list(value)


def merge_cli_overrides(
    config: ArmshiftConfig,
    patterns: Optional[List[str]] = None,
    passes: Optional[List[str]] = None,
) -> ArmshiftConfig:
    return ArmshiftConfig(
        include=list(patterns) if patterns else list(config.include),
        exclude=list(config.exclude),
        passes=list(passes) if passes else list(config.passes),
        extra_top_level_keys=list(config.extra_top_level_keys),
    )
