from pathlib import Path
from typing import List, Optional

from armshift.common import bus
from armshift.common.transaction import TransactionManager
from armshift.config import ArmshiftConfig
from armshift.refactor.engine import MigrationPlan, Planner
from armshift.refactor.migration import build_spec
from armshift.refactor.transforms import DEFAULT_POLICY
from armshift.refactor.workspace import Workspace


class MigrationRunner:
    def __init__(
        self,
        workspace: Workspace,
        planner: Planner,
        tm: TransactionManager,
    ):
        self.workspace = workspace
        self.planner = planner
        self.tm = tm
        self.plan: Optional[MigrationPlan] = None

    @classmethod
    def for_root(cls, root_path: Path, config: ArmshiftConfig) -> "MigrationRunner":
        return cls(
            workspace=Workspace(root_path, config),
            planner=Planner(),
            tm=TransactionManager(root_path),
        )

    def run(self) -> TransactionManager:
        config = self.workspace.config
        patterns = ", ".join(config.include)

        bus.info("migrate.run.discovering", patterns=patterns)
        files = self.workspace.discover_files()
        if not files:
            bus.warning("migrate.run.no_files", patterns=patterns)
            self.plan = MigrationPlan()
            return self.tm
        bus.info("migrate.run.found", count=len(files))

        policy = DEFAULT_POLICY.with_extra_keys(config.extra_top_level_keys)
        spec = build_spec(config.passes, policy)

        bus.info("migrate.run.planning")
        self.plan = self.planner.plan(spec, self.workspace, files)

        if self.plan.failures:
            bus.error("migrate.run.failures", count=len(self.plan.failures))

        if self.plan.is_empty:
            bus.success("migrate.run.no_ops")
            return self.tm

        for op in self.plan.file_ops:
            self.tm.add(op)
        return self.tm

    @property
    def failed_paths(self) -> List[Path]:
        if self.plan is None:
            return []
        return [failure.path for failure in self.plan.failures]
