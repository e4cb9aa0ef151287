from dataclasses import dataclass
from enum import Enum
from typing import List

from armshift.lang.typescript import SourceTree


class RewriteStatus(Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RewriteRecord:
    """One decision taken by a transformer, for reporting."""

    transform: str
    status: RewriteStatus
    line: int
    detail: str


class Transformer:
    """
    Base class for tree rewrites.

    `transform` mutates the tree in place and returns nothing; the records
    of the last run are kept on `records` for the driver to report.
    """

    name: str = "transform"

    def __init__(self) -> None:
        self.records: List[RewriteRecord] = []

    def transform(self, tree: SourceTree) -> None:
        self.records = []
        self._run(tree)

    def _run(self, tree: SourceTree) -> None:
        raise NotImplementedError

    def _applied(self, line: int, detail: str) -> None:
        self.records.append(
            RewriteRecord(self.name, RewriteStatus.APPLIED, line, detail)
        )

    def _skipped(self, line: int, detail: str) -> None:
        self.records.append(
            RewriteRecord(self.name, RewriteStatus.SKIPPED, line, detail)
        )

    @property
    def applied_count(self) -> int:
        return sum(1 for r in self.records if r.status is RewriteStatus.APPLIED)
