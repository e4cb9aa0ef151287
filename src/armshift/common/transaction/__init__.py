from .manager import (
    TransactionManager,
    FileOp,
    WriteFileOp,
    FileSystemAdapter,
    RealFileSystem,
    generate_text_diff,
)

__all__ = [
    "TransactionManager",
    "FileOp",
    "WriteFileOp",
    "FileSystemAdapter",
    "RealFileSystem",
    "generate_text_diff",
]
