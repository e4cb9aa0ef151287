from pathlib import Path
from typing import Optional


class ArmshiftError(Exception):
    """Base exception for all armshift errors."""

    pass


class SourceParseError(ArmshiftError):
    """Raised when a source file cannot be parsed cleanly."""

    def __init__(
        self,
        path: Optional[Path],
        line: int,
        column: int,
    ):
        self.path = path
        self.line = line
        self.column = column
        where = str(path) if path else "<source>"
        super().__init__(f"{where}:{line}:{column}: syntax error")


class ConfigError(ArmshiftError):
    """Raised when the [tool.armshift] table is malformed."""

    pass


class MigrationError(ArmshiftError):
    """Base exception for migration-related errors."""

    pass


class UnknownPassError(MigrationError):
    """Raised when a pass name does not map to a known operation."""

    pass
