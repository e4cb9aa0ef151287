"""tree-sitter grammars for the TypeScript and JavaScript dialects."""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

import tree_sitter_javascript as ts_javascript
import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser, Tree


class Dialect(Enum):
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JAVASCRIPT = "javascript"


LANGUAGES: Dict[Dialect, Language] = {
    Dialect.TYPESCRIPT: Language(ts_typescript.language_typescript()),
    Dialect.TSX: Language(ts_typescript.language_tsx()),
    Dialect.JAVASCRIPT: Language(ts_javascript.language()),
}

_SUFFIX_DIALECTS = {
    ".ts": Dialect.TYPESCRIPT,
    ".mts": Dialect.TYPESCRIPT,
    ".cts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
    ".js": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".cjs": Dialect.JAVASCRIPT,
    ".jsx": Dialect.JAVASCRIPT,
}

SUPPORTED_SUFFIXES = frozenset(_SUFFIX_DIALECTS)


def dialect_for_path(path: Union[str, Path]) -> Optional[Dialect]:
    """Returns the dialect for a file suffix, or None if unsupported."""
    return _SUFFIX_DIALECTS.get(Path(path).suffix.lower())


def parse_bytes(source: bytes, dialect: Dialect) -> Tree:
    parser = Parser(LANGUAGES[dialect])
    return parser.parse(source)
