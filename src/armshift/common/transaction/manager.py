import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol


@dataclass
class FileOp:
    path: Path


@dataclass
class WriteFileOp(FileOp):
    content: str
    # Text before the write, when known; used for diffs.
    original: Optional[str] = None

    def describe(self) -> str:
        return f"[WRITE] {self.path}"


class FileSystemAdapter(Protocol):
    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...


class RealFileSystem:
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the line endings carried in `content`.
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)

    def exists(self, path: Path) -> bool:
        return path.exists()


class TransactionManager:
    """
    Collects pending file operations so they can be previewed before being
    applied in one go. Paths are relative to `root_path`.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs or RealFileSystem()
        self._ops: List[FileOp] = []

    @property
    def pending_count(self) -> int:
        return len(self._ops)

    @property
    def operations(self) -> List[FileOp]:
        return list(self._ops)

    def add_write(self, path: Path, content: str, original: Optional[str] = None) -> None:
        self._ops.append(WriteFileOp(Path(path), content, original))

    def add(self, op: FileOp) -> None:
        self._ops.append(op)

    def preview(self) -> List[str]:
        return [op.describe() for op in self._ops if isinstance(op, WriteFileOp)]

    def diff(self) -> List[str]:
        diffs = []
        for op in self._ops:
            if not isinstance(op, WriteFileOp):
                continue
            original = op.original
            if original is None:
                abs_path = self.root_path / op.path
                original = self.fs.read_text(abs_path) if self.fs.exists(abs_path) else ""
            diffs.append(
                generate_text_diff(
                    original, op.content, f"a/{op.path.as_posix()}", f"b/{op.path.as_posix()}"
                )
            )
        return diffs

    def commit(self) -> None:
        for op in self._ops:
            if isinstance(op, WriteFileOp):
                self.fs.write_text(self.root_path / op.path, op.content)
        self._ops.clear()


def generate_text_diff(a: str, b: str, label_a: str = "old", label_b: str = "new") -> str:
    return "\n".join(
        difflib.unified_diff(
            a.splitlines(),
            b.splitlines(),
            fromfile=label_a,
            tofile=label_b,
            lineterm="",
        )
    )
