from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from armshift.common import bus
from armshift.common.transaction import WriteFileOp
from armshift.errors import SourceParseError
from armshift.lang.typescript import Dialect, dialect_for_path, parse
from armshift.refactor.migration import MigrationSpec
from armshift.refactor.transforms import RewriteRecord, RewriteStatus
from armshift.refactor.workspace import Workspace


@dataclass
class FileFailure:
    path: Path
    error: str


@dataclass
class MigrationPlan:
    file_ops: List[WriteFileOp] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    records: Dict[Path, List[RewriteRecord]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.file_ops


def migrate_source(
    spec: MigrationSpec,
    text: str,
    dialect: Dialect = Dialect.TYPESCRIPT,
    path: Optional[Path] = None,
) -> Tuple[str, List[RewriteRecord]]:
    """
    Runs every pass of `spec` over one source text.

    Raises SourceParseError if the text does not parse cleanly.
    """
    tree = parse(text, dialect=dialect, path=path)
    records: List[RewriteRecord] = []
    for operation in spec.operations:
        records.extend(operation.apply(tree))
    return tree.serialize(), records


class Planner:
    def plan(
        self,
        spec: MigrationSpec,
        workspace: Workspace,
        files: Optional[Sequence[Path]] = None,
    ) -> MigrationPlan:
        plan = MigrationPlan()
        if files is None:
            files = workspace.discover_files()

        for path in files:
            rel_path = workspace.relative(path)
            bus.debug("migrate.file.processing", path=rel_path)

            dialect = dialect_for_path(path)
            if dialect is None:
                bus.warning("migrate.file.unsupported", path=rel_path)
                continue

            try:
                original = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                bus.error("migrate.file.read_error", path=rel_path, error=str(e))
                plan.failures.append(FileFailure(rel_path, str(e)))
                continue

            try:
                migrated, records = migrate_source(spec, original, dialect, rel_path)
            except SourceParseError as e:
                bus.error("migrate.file.parse_error", path=rel_path, error=str(e))
                plan.failures.append(FileFailure(rel_path, str(e)))
                continue

            plan.records[rel_path] = records
            self._report(rel_path, records)

            if migrated != original:
                plan.file_ops.append(WriteFileOp(rel_path, migrated, original))

        return plan

    def _report(self, rel_path: Path, records: List[RewriteRecord]) -> None:
        for record in records:
            if record.status is RewriteStatus.SKIPPED:
                bus.warning(
                    "migrate.file.skipped",
                    path=rel_path,
                    line=record.line,
                    transform=record.transform,
                    detail=record.detail,
                )
            else:
                bus.debug(
                    "migrate.file.rewrite",
                    path=rel_path,
                    line=record.line,
                    transform=record.transform,
                    detail=record.detail,
                )
