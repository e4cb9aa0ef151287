from pathlib import Path

from armshift.config import ArmshiftConfig
from armshift.refactor.workspace import Workspace


def discovered(root: Path, config: ArmshiftConfig = None):
    return [p.relative_to(root.resolve()).as_posix() for p in Workspace(root, config).discover_files()]


def test_discovers_typescript_files_recursively(workspace_factory):
    root = (
        workspace_factory.with_source("index.ts", "")
        .with_source("src/client.ts", "")
        .with_source("src/view.tsx", "")
        .with_source("src/notes.md", "")
        .build()
    )

    assert discovered(root) == ["index.ts", "src/client.ts"]


def test_skips_declaration_files_and_vendor_dirs(workspace_factory):
    root = (
        workspace_factory.with_source("src/client.ts", "")
        .with_source("src/types.d.ts", "")
        .with_source("node_modules/@azure/arm/index.ts", "")
        .with_source("dist/client.ts", "")
        .build()
    )

    assert discovered(root) == ["src/client.ts"]


def test_honours_include_and_exclude(workspace_factory):
    root = (
        workspace_factory.with_source("src/a.ts", "")
        .with_source("src/b.js", "")
        .with_source("src/generated/models.ts", "")
        .with_source("test/a.test.ts", "")
        .build()
    )
    config = ArmshiftConfig(
        include=["src/**/*.ts", "src/**/*.js"], exclude=["src/generated/*"]
    )

    assert discovered(root, config) == ["src/a.ts", "src/b.js"]


def test_relative_falls_back_for_outside_paths(tmp_path):
    workspace = Workspace(tmp_path / "project")
    outside = tmp_path / "elsewhere.ts"

    assert workspace.relative(outside) == outside


def test_invalid_pattern_is_reported_and_skipped(workspace_factory, spy_bus, monkeypatch):
    root = workspace_factory.with_source("src/a.ts", "").build()
    config = ArmshiftConfig(include=["", "src/*.ts"])

    with spy_bus.patch(monkeypatch):
        files = discovered(root, config)

    assert files == ["src/a.ts"]
    spy_bus.assert_id_called("migrate.run.invalid_pattern", level="warning")
