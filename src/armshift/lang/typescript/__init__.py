from .kinds import NodeKind, STATEMENT_CONTAINERS, DECLARATION_KINDS
from .parser import Dialect, LANGUAGES, SUPPORTED_SUFFIXES, dialect_for_path
from .tree import (
    NodeRef,
    SourceTree,
    TextEdit,
    can_insert_after,
    enclosing_declaration,
    statement_anchor,
    parse,
)

__all__ = [
    "NodeKind",
    "STATEMENT_CONTAINERS",
    "DECLARATION_KINDS",
    "Dialect",
    "LANGUAGES",
    "SUPPORTED_SUFFIXES",
    "dialect_for_path",
    "NodeRef",
    "SourceTree",
    "TextEdit",
    "can_insert_after",
    "enclosing_declaration",
    "statement_anchor",
    "parse",
]
