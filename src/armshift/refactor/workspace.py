from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional, Set

from armshift.common import bus
from armshift.config import ArmshiftConfig
from armshift.lang.typescript import SUPPORTED_SUFFIXES

# Directories that never hold code we should rewrite.
EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "out",
    "coverage",
    ".next",
    ".turbo",
}


class Workspace:
    def __init__(self, root_path: Path, config: Optional[ArmshiftConfig] = None):
        self.root_path = root_path
        self.config = config or ArmshiftConfig()

    def discover_files(self) -> List[Path]:
        """
        Expands the include patterns below the root. Results are absolute,
        de-duplicated and sorted.
        """
        found: Set[Path] = set()
        for pattern in self.config.include:
            try:
                matches = list(self.root_path.glob(pattern))
            except (ValueError, NotImplementedError) as e:
                bus.warning("migrate.run.invalid_pattern", pattern=pattern, error=str(e))
                continue
            for path in matches:
                if path.is_file() and self._is_candidate(path):
                    found.add(path.resolve())
        return sorted(found)

    def relative(self, path: Path) -> Path:
        try:
            return path.resolve().relative_to(self.root_path.resolve())
        except ValueError:
            return path

    def _is_candidate(self, path: Path) -> bool:
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            return False
        # Declaration files carry no call sites or literals worth rewriting.
        if path.name.endswith((".d.ts", ".d.mts", ".d.cts")):
            return False

        rel = self.relative(path)
        if any(part in EXCLUDED_DIRS for part in rel.parts[:-1]):
            return False
        rel_posix = rel.as_posix()
        return not any(fnmatch(rel_posix, pattern) for pattern in self.config.exclude)
