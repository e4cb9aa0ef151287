from pathlib import Path
from typing import Any, Dict, List, Tuple


class WorkspaceFactory:
    """
    Builds a throwaway project tree for tests:

        WorkspaceFactory(tmp_path).with_config({...}).with_source("src/a.ts", "...").build()
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: List[Tuple[str, str]] = []
        self._config: Dict[str, Any] = {}

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config.update(config)
        return self

    def with_source(self, rel_path: str, content: str) -> "WorkspaceFactory":
        self._files.append((rel_path, content))
        return self

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        if self._config:
            (self.root_path / "pyproject.toml").write_text(
                _render_tool_table(self._config), encoding="utf-8"
            )
        for rel_path, content in self._files:
            path = self.root_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return self.root_path


def _render_tool_table(config: Dict[str, Any]) -> str:
    lines = ["[tool.armshift]"]
    for key, value in config.items():
        lines.append(f"{key} = {_toml_value(value)}")
    return "\n".join(lines) + "\n"


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    return str(value)
