from pathlib import Path
from textwrap import dedent

from armshift.config import ArmshiftConfig
from armshift.refactor.engine import Planner, migrate_source
from armshift.refactor.migration import LroCalls, MigrationSpec, Nest, build_spec
from armshift.refactor.workspace import Workspace

BOUND_LRO = "const poller = await client.beginStart();\n"
FLAT_RESOURCE = 'const params = { location: "eastus", size: 3 };\n'


def full_spec() -> MigrationSpec:
    return MigrationSpec().add(Nest()).add(LroCalls())


def test_migrate_source_runs_every_pass():
    source = dedent("""
        const poller = await client.vms.beginCreate(rg, {
          location: loc,
          hardwareProfile: hw,
        });
    """).lstrip()

    text, records = migrate_source(full_spec(), source)

    assert text == dedent("""
        const poller = client.vms.create(rg, {
          location: loc,
          properties: {
            hardwareProfile: hw,
          },
        });
        await poller.submitted();
    """).lstrip()
    assert [r.transform for r in records] == ["nest-properties", "lro-calls"]


def test_migrate_source_reaches_a_fixed_point():
    source = dedent("""
        async function main() {
          const poller = await client.beginCreate({ location: l, size: s });
          await client.beginDelete(name);
          const r = await client.beginStopAndWait();
        }
    """).lstrip()

    once, _ = migrate_source(full_spec(), source)
    twice, records = migrate_source(full_spec(), once)

    assert twice == once
    assert records == []


def test_plan_emits_ops_only_for_changed_files(workspace_factory, spy_bus, monkeypatch):
    # Arrange
    root = (
        workspace_factory.with_source("src/lro.ts", BOUND_LRO)
        .with_source("src/resource.ts", FLAT_RESOURCE)
        .with_source("src/clean.ts", "export const x = 1;\n")
        .build()
    )
    workspace = Workspace(root, ArmshiftConfig(include=["src/**/*.ts"]))

    # Act
    with spy_bus.patch(monkeypatch):
        plan = Planner().plan(build_spec(["nest-properties", "lro-calls"]), workspace)

    # Assert
    paths = sorted(op.path.as_posix() for op in plan.file_ops)
    assert paths == ["src/lro.ts", "src/resource.ts"]
    assert not plan.failures
    assert set(p.as_posix() for p in plan.records) == {
        "src/clean.ts",
        "src/lro.ts",
        "src/resource.ts",
    }
    spy_bus.assert_id_called("migrate.file.processing", level="debug")
    spy_bus.assert_id_called("migrate.file.rewrite", level="debug")


def test_plan_keeps_original_text_for_diffs(workspace_factory):
    root = workspace_factory.with_source("a.ts", FLAT_RESOURCE).build()
    workspace = Workspace(root)

    plan = Planner().plan(build_spec(["nest-properties"]), workspace)

    op = plan.file_ops[0]
    assert op.original == FLAT_RESOURCE
    assert "properties: { size: 3 }" in op.content


def test_plan_records_parse_failures_and_continues(
    workspace_factory, spy_bus, monkeypatch
):
    root = (
        workspace_factory.with_source("broken.ts", "const = ;\n")
        .with_source("ok.ts", BOUND_LRO)
        .build()
    )
    workspace = Workspace(root)

    with spy_bus.patch(monkeypatch):
        plan = Planner().plan(build_spec(["lro-calls"]), workspace)

    assert [f.path for f in plan.failures] == [Path("broken.ts")]
    assert [op.path for op in plan.file_ops] == [Path("ok.ts")]
    spy_bus.assert_id_called("migrate.file.parse_error", level="error")


def test_plan_reports_skipped_rewrites_as_warnings(
    workspace_factory, spy_bus, monkeypatch
):
    root = workspace_factory.with_source(
        "a.ts", "const { id } = await client.beginStart();\n"
    ).build()

    with spy_bus.patch(monkeypatch):
        plan = Planner().plan(build_spec(["lro-calls"]), Workspace(root))

    assert plan.is_empty
    spy_bus.assert_id_called("migrate.file.skipped", level="warning")
    skipped = [m for m in spy_bus.get_messages() if m["id"] == "migrate.file.skipped"]
    assert skipped[0]["params"]["line"] == 1
    assert skipped[0]["params"]["transform"] == "lro-calls"


def test_plan_warns_about_unsupported_files(workspace_factory, spy_bus, monkeypatch):
    root = workspace_factory.with_source("notes.txt", "hello").build()

    with spy_bus.patch(monkeypatch):
        plan = Planner().plan(build_spec(["lro-calls"]), Workspace(root), [root / "notes.txt"])

    assert plan.is_empty
    spy_bus.assert_id_called("migrate.file.unsupported", level="warning")
