import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from tree_sitter import Node

from armshift.errors import SourceParseError
from .kinds import DECLARATION_KINDS, STATEMENT_CONTAINERS, NodeKind
from .parser import Dialect, parse_bytes

log = logging.getLogger(__name__)

Kind = Union[NodeKind, str]


@dataclass(frozen=True)
class NodeRef:
    """
    A generational handle into a SourceTree's node arena.

    The handle stays valid across edits that do not touch the node's own
    bytes. Once an edit overwrites the node, the arena slot's generation
    moves on and `SourceTree.is_attached` reports the handle as stale.
    """

    index: int
    generation: int
    kind: str


@dataclass
class _Slot:
    start: int
    end: int
    kind: str
    generation: int = 0
    alive: bool = True


@dataclass(frozen=True)
class TextEdit:
    start: int
    end: int
    replacement: bytes


class SourceTree:
    """
    A mutable view over a tree-sitter parse.

    tree-sitter trees are immutable, so each mutation splices the source
    bytes and re-parses. Node handles (`NodeRef`) are tracked by byte span
    and shifted through every edit; raw `tree_sitter.Node` objects are only
    valid until the next mutation.
    """

    def __init__(
        self,
        source: str,
        dialect: Dialect = Dialect.TYPESCRIPT,
        path: Optional[Path] = None,
    ):
        self.dialect = dialect
        self.path = path
        self._source = source.encode("utf-8")
        self._tree = parse_bytes(self._source, dialect)
        self._slots: List[_Slot] = []
        self._slot_index: Dict[Tuple[int, int, str], int] = {}

    # --- Inspection ---

    @property
    def root(self) -> Node:
        return self._tree.root_node

    @property
    def has_errors(self) -> bool:
        return self._tree.root_node.has_error

    def serialize(self) -> str:
        return self._source.decode("utf-8")

    def slice(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8")

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def byte_at(self, offset: int) -> bytes:
        return self._source[offset : offset + 1]

    def newline_offsets(self, start: int, end: int) -> List[int]:
        offsets = []
        pos = self._source.find(b"\n", start, end)
        while pos != -1:
            offsets.append(pos)
            pos = self._source.find(b"\n", pos + 1, end)
        return offsets

    def line_indent(self, offset: int) -> str:
        """Leading whitespace of the line containing `offset`."""
        line_start = self._source.rfind(b"\n", 0, offset) + 1
        i = line_start
        while i < len(self._source) and self._source[i : i + 1] in (b" ", b"\t"):
            i += 1
        return self._source[line_start:i].decode("utf-8")

    def line_ending(self, offset: int) -> str:
        """
        The line terminator used around `offset`: the end of its own line,
        else the end of the line before it. Defaults to "\\n".
        """
        pos = self._source.find(b"\n", offset)
        if pos == -1:
            pos = self._source.rfind(b"\n", 0, offset)
        if pos > 0 and self._source[pos - 1 : pos] == b"\r":
            return "\r\n"
        return "\n"

    def first_error(self) -> Optional[Node]:
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            if node.has_error:
                stack.extend(reversed(node.children))
        return None

    def find_descendants(self, kind: Kind) -> List[NodeRef]:
        """All nodes of `kind`, as handles, in document (pre-)order."""
        kind_name = _kind_name(kind)
        refs: List[NodeRef] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.type == kind_name:
                refs.append(self.ref_for(node))
            stack.extend(reversed(node.children))
        return refs

    def ref_for(self, node: Node) -> NodeRef:
        key = (node.start_byte, node.end_byte, node.type)
        index = self._slot_index.get(key)
        if index is not None and self._slots[index].alive:
            slot = self._slots[index]
            return NodeRef(index, slot.generation, slot.kind)

        slot = _Slot(node.start_byte, node.end_byte, node.type)
        self._slots.append(slot)
        index = len(self._slots) - 1
        self._slot_index[key] = index
        return NodeRef(index, slot.generation, slot.kind)

    def is_attached(self, ref: NodeRef) -> bool:
        return self.node(ref) is not None

    def node(self, ref: NodeRef) -> Optional[Node]:
        """Resolves a handle against the current parse, or None if stale."""
        slot = self._slots[ref.index]
        if not slot.alive or slot.generation != ref.generation:
            return None
        node = self._locate(slot.start, slot.end, slot.kind)
        if node is None:
            self._retire(ref.index)
        return node

    def text_of(self, ref: NodeRef) -> Optional[str]:
        node = self.node(ref)
        return self.text(node) if node is not None else None

    def _locate(self, start: int, end: int, kind: str) -> Optional[Node]:
        node = self.root
        while True:
            if node.start_byte == start and node.end_byte == end and node.type == kind:
                return node
            for child in node.children:
                if child.start_byte <= start and end <= child.end_byte:
                    if child.start_byte == child.end_byte:
                        continue
                    node = child
                    break
            else:
                return None

    # --- Mutation ---

    def replace_node_text(self, ref: NodeRef, text: str) -> bool:
        node = self.node(ref)
        if node is None:
            return False
        self.apply_edits([TextEdit(node.start_byte, node.end_byte, text.encode("utf-8"))])
        return True

    def set_initializer(self, declarator: NodeRef, text: str) -> bool:
        node = self.node(declarator)
        if node is None or node.type != NodeKind.VARIABLE_DECLARATOR.value:
            return False
        value = node.child_by_field_name("value")
        if value is None:
            return False
        self.apply_edits(
            [TextEdit(value.start_byte, value.end_byte, text.encode("utf-8"))]
        )
        return True

    def insert_statement_after(self, statement: NodeRef, text: str) -> bool:
        """
        Inserts `text` as a new statement directly after `statement`.

        Only statements that live in a block or at the top level of the
        program can take a sibling; anything else returns False untouched.
        """
        node = self.node(statement)
        if node is None or not can_insert_after(node):
            return False
        indent = self.line_indent(node.start_byte)
        newline = self.line_ending(node.end_byte)
        insertion = f"{newline}{indent}{text}".encode("utf-8")
        self.apply_edits([TextEdit(node.end_byte, node.end_byte, insertion)])
        return True

    def apply_edits(self, edits: Iterable[TextEdit]) -> None:
        """
        Applies non-overlapping byte edits and re-parses once.

        Each edit is narrowed to the bytes that actually change, so handles
        to nodes around (or inside) an unchanged prefix or suffix survive.
        """
        had_errors = self.has_errors
        ordered = sorted(edits, key=lambda e: e.start, reverse=True)
        source = self._source
        for edit in ordered:
            narrowed = _narrow(source, edit)
            if narrowed is None:
                continue
            source = (
                source[: narrowed.start] + narrowed.replacement + source[narrowed.end :]
            )
            self._shift_slots(narrowed)

        if source == self._source:
            return
        self._source = source
        self._tree = parse_bytes(self._source, self.dialect)
        self._rebuild_slot_index()

        if self.has_errors and not had_errors:
            log.warning(
                "Edit introduced a syntax error in %s", self.path or "<source>"
            )

    def _shift_slots(self, edit: TextEdit) -> None:
        start, end = edit.start, edit.end
        delta = len(edit.replacement) - (end - start)
        for index, slot in enumerate(self._slots):
            if not slot.alive:
                continue
            if start == end:
                if slot.end <= start:
                    continue
                if slot.start >= start:
                    slot.start += delta
                    slot.end += delta
                else:
                    slot.end += delta
                continue

            if slot.end <= start:
                continue
            if slot.start >= end:
                slot.start += delta
                slot.end += delta
            elif (
                slot.start <= start
                and end <= slot.end
                and (slot.start, slot.end) != (start, end)
            ):
                slot.end += delta
            else:
                self._retire(index)

    def _retire(self, index: int) -> None:
        slot = self._slots[index]
        slot.alive = False
        slot.generation += 1

    def _rebuild_slot_index(self) -> None:
        self._slot_index = {
            (slot.start, slot.end, slot.kind): index
            for index, slot in enumerate(self._slots)
            if slot.alive
        }


def can_insert_after(statement: Node) -> bool:
    parent = statement.parent
    return parent is not None and NodeKind.of(parent) in STATEMENT_CONTAINERS


def enclosing_declaration(declarator: Node) -> Optional[Node]:
    parent = declarator.parent
    if parent is not None and NodeKind.of(parent) in DECLARATION_KINDS:
        return parent
    return None


def statement_anchor(declaration: Node) -> Node:
    """
    The statement that owns `declaration` in its statement list.

    `export const x = ...` wraps the declaration in an `export_statement`;
    a sibling statement has to go after the export, not inside it.
    """
    parent = declaration.parent
    if parent is not None and NodeKind.of(parent) is NodeKind.EXPORT_STATEMENT:
        return parent
    return declaration


def parse(
    text: str,
    dialect: Dialect = Dialect.TYPESCRIPT,
    path: Optional[Path] = None,
    strict: bool = True,
) -> SourceTree:
    """
    Parses `text` into a SourceTree.

    With `strict` (the default) any syntax error raises SourceParseError,
    so the transforms only ever see well-formed trees.
    """
    tree = SourceTree(text, dialect=dialect, path=path)
    if strict and tree.has_errors:
        error = tree.first_error()
        row, column = error.start_point if error is not None else (0, 0)
        raise SourceParseError(path, row + 1, column + 1)
    return tree


def _kind_name(kind: Kind) -> str:
    return kind.value if isinstance(kind, NodeKind) else kind


def _narrow(source: bytes, edit: TextEdit) -> Optional[TextEdit]:
    old = source[edit.start : edit.end]
    new = edit.replacement
    if old == new:
        return None

    prefix = 0
    limit = min(len(old), len(new))
    while prefix < limit and old[prefix] == new[prefix]:
        prefix += 1

    suffix = 0
    limit -= prefix
    while suffix < limit and old[-1 - suffix] == new[-1 - suffix]:
        suffix += 1

    return TextEdit(
        edit.start + prefix,
        edit.end - suffix,
        new[prefix : len(new) - suffix],
    )
