"""
Property nesting for ARM resource literals, v6 -> v7.

ARM resources moved from flattened properties to a nested `properties` bag:

    Before: { location: "eastus", managementCluster: {...}, networkBlock: "..." }
    After:  { location: "eastus", properties: { managementCluster: {...}, networkBlock: "..." } }

Which keys stay on the envelope is decided by a fixed allow-list; every other
key is assumed to belong to the resource-specific payload.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple

from tree_sitter import Node

from armshift.lang.typescript import NodeKind, NodeRef, SourceTree
from armshift.refactor.traversal import TraversalOrder, iter_candidates
from .base import Transformer

log = logging.getLogger(__name__)

# Properties common to every ARM resource; these stay at the top level.
ARM_TOP_LEVEL_KEYS: FrozenSet[str] = frozenset(
    {
        "location",
        "sku",
        "tags",
        "identity",
        "id",
        "name",
        "type",
        "kind",
        "etag",
        "systemData",
        "zones",
        "extendedLocation",
    }
)

WRAPPER_KEY = "properties"
DEFAULT_INDENT_UNIT = "  "


@dataclass(frozen=True)
class NestingPolicy:
    top_level_keys: FrozenSet[str] = ARM_TOP_LEVEL_KEYS
    wrapper_key: str = WRAPPER_KEY

    def with_extra_keys(self, keys: Iterable[str]) -> "NestingPolicy":
        extra = frozenset(keys) - {self.wrapper_key}
        return replace(self, top_level_keys=self.top_level_keys | extra)


DEFAULT_POLICY = NestingPolicy()


class PropertyKind(Enum):
    ASSIGNMENT = "assignment"  # key: value
    SHORTHAND = "shorthand"  # key
    SPREAD = "spread"  # ...expr
    METHOD = "method"  # key() {}


@dataclass(frozen=True)
class LiteralProperty:
    kind: PropertyKind
    # None for spreads and computed keys.
    name: Optional[str]
    start: int
    end: int
    row: int
    end_row: int
    text: str
    leading: Tuple[str, ...] = ()
    trailing: Tuple[str, ...] = ()
    template_spans: Tuple[Tuple[int, int], ...] = ()


@dataclass(frozen=True)
class ObjectLiteral:
    start: int
    row: int
    multiline: bool
    trailing_comma: bool
    properties: Tuple[LiteralProperty, ...]
    dangling: Tuple[str, ...] = ()


@dataclass
class Partition:
    top_level: List[LiteralProperty] = field(default_factory=list)
    nested: List[LiteralProperty] = field(default_factory=list)
    spreads: List[LiteralProperty] = field(default_factory=list)


def read_object_literal(tree: SourceTree, node: Node) -> ObjectLiteral:
    """Builds the property view of an `object` node."""
    properties: List[LiteralProperty] = []
    pending: List[str] = []
    trailing_comma = False

    for child in node.children:
        if not child.is_named:
            if child.type == ",":
                trailing_comma = True
            continue

        if child.type == NodeKind.COMMENT.value:
            comment = tree.text(child)
            last = properties[-1] if properties else None
            if last is not None and not pending and child.start_point[0] == last.end_row:
                properties[-1] = replace(last, trailing=last.trailing + (comment,))
            else:
                pending.append(comment)
            continue

        kind, name = _classify_member(tree, child)
        properties.append(
            LiteralProperty(
                kind=kind,
                name=name,
                start=child.start_byte,
                end=child.end_byte,
                row=child.start_point[0],
                end_row=child.end_point[0],
                text=tree.text(child),
                leading=tuple(pending),
                template_spans=_template_spans(child),
            )
        )
        pending = []
        trailing_comma = False

    return ObjectLiteral(
        start=node.start_byte,
        row=node.start_point[0],
        multiline="\n" in tree.text(node),
        trailing_comma=trailing_comma and bool(properties),
        properties=tuple(properties),
        dangling=tuple(pending),
    )


def _classify_member(tree: SourceTree, node: Node) -> Tuple[PropertyKind, Optional[str]]:
    kind = NodeKind.of(node)
    if kind is NodeKind.PAIR:
        return PropertyKind.ASSIGNMENT, _key_name(tree, node.child_by_field_name("key"))
    if kind is NodeKind.SHORTHAND_PROPERTY:
        return PropertyKind.SHORTHAND, tree.text(node)
    if kind is NodeKind.SPREAD_ELEMENT:
        return PropertyKind.SPREAD, None
    if kind is NodeKind.METHOD_DEFINITION:
        return PropertyKind.METHOD, _key_name(tree, node.child_by_field_name("name"))
    return PropertyKind.ASSIGNMENT, None


def _key_name(tree: SourceTree, key: Optional[Node]) -> Optional[str]:
    if key is None:
        return None
    kind = NodeKind.of(key)
    if kind is NodeKind.STRING:
        return tree.text(key)[1:-1]
    if kind is NodeKind.COMPUTED_PROPERTY_NAME:
        return None
    return tree.text(key)


def _template_spans(node: Node) -> Tuple[Tuple[int, int], ...]:
    spans = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == NodeKind.TEMPLATE_STRING.value:
            spans.append((current.start_byte, current.end_byte))
            continue
        stack.extend(current.children)
    return tuple(sorted(spans))


class NestingClassifier:
    def __init__(self, policy: NestingPolicy = DEFAULT_POLICY):
        self.policy = policy

    def should_transform(self, literal: ObjectLiteral) -> bool:
        """
        A literal looks like a flat ARM resource when it has at least one
        envelope key and at least one key that would move. Literals that
        already carry the wrapper key are considered migrated.
        """
        if not literal.properties:
            return False

        has_top_level = False
        has_nestable = False
        for prop in literal.properties:
            if prop.kind is PropertyKind.SPREAD or prop.name is None:
                continue
            if prop.name == self.policy.wrapper_key:
                return False
            if prop.name in self.policy.top_level_keys:
                has_top_level = True
            else:
                has_nestable = True

        return has_top_level and has_nestable

    def partition(self, literal: ObjectLiteral) -> Partition:
        buckets = Partition()
        for prop in literal.properties:
            if prop.kind is PropertyKind.SPREAD:
                buckets.spreads.append(prop)
            elif prop.name is not None and prop.name in self.policy.top_level_keys:
                buckets.top_level.append(prop)
            else:
                buckets.nested.append(prop)
        return buckets


class LiteralRestructurer:
    def __init__(self, policy: NestingPolicy = DEFAULT_POLICY):
        self.policy = policy
        self._classifier = NestingClassifier(policy)

    def restructure(self, tree: SourceTree, ref: NodeRef, literal: ObjectLiteral) -> bool:
        buckets = self._classifier.partition(literal)
        if not buckets.nested:
            return False

        if literal.multiline or _has_line_comment(literal):
            text = self._render_multiline(tree, literal, buckets)
        else:
            text = self._render_inline(buckets)
        return tree.replace_node_text(ref, text)

    def _render_inline(self, buckets: Partition) -> str:
        def inline(prop: LiteralProperty) -> str:
            return " ".join(prop.leading + (prop.text,) + prop.trailing)

        nested = ", ".join(inline(p) for p in buckets.nested)
        parts = [inline(p) for p in buckets.top_level]
        parts.append(f"{self.policy.wrapper_key}: {{ {nested} }}")
        parts.extend(inline(p) for p in buckets.spreads)
        return "{ " + ", ".join(parts) + " }"

    def _render_multiline(
        self, tree: SourceTree, literal: ObjectLiteral, buckets: Partition
    ) -> str:
        base = tree.line_indent(literal.start)
        first = literal.properties[0]
        if first.row != literal.row:
            inner = tree.line_indent(first.start)
        else:
            inner = base + DEFAULT_INDENT_UNIT
        if inner.startswith(base) and len(inner) > len(base):
            unit = inner[len(base) :]
        else:
            unit = DEFAULT_INDENT_UNIT
        nested_indent = inner + unit
        comma_last = literal.trailing_comma

        nested_lines = _block(
            [
                (p.leading, _reindent(tree, p, unit), p.trailing)
                for p in buckets.nested
            ],
            nested_indent,
            comma_last,
        )
        wrapper = (
            f"{self.policy.wrapper_key}: {{\n"
            + "\n".join(nested_lines)
            + f"\n{inner}}}"
        )

        entries = [(p.leading, p.text, p.trailing) for p in buckets.top_level]
        entries.append(((), wrapper, ()))
        entries.extend((p.leading, p.text, p.trailing) for p in buckets.spreads)

        lines = _block(entries, inner, comma_last)
        lines.extend(inner + comment for comment in literal.dangling)
        return "{\n" + "\n".join(lines) + f"\n{base}}}"


def _block(
    entries: List[Tuple[Tuple[str, ...], str, Tuple[str, ...]]],
    indent: str,
    comma_last: bool,
) -> List[str]:
    lines = []
    for i, (leading, text, trailing) in enumerate(entries):
        lines.extend(indent + comment for comment in leading)
        line = indent + text
        if i < len(entries) - 1 or comma_last:
            line += ","
        if trailing:
            line += " " + " ".join(trailing)
        lines.append(line)
    return lines


def _reindent(tree: SourceTree, prop: LiteralProperty, extra: str) -> str:
    """
    Indents the continuation lines of a moved property by `extra`.

    Lines that begin inside a template string are part of the string's
    value and are left alone.
    """
    pieces = []
    cursor = prop.start
    for newline in tree.newline_offsets(prop.start, prop.end):
        pieces.append(tree.slice(cursor, newline + 1))
        cursor = newline + 1
        in_template = any(start < newline < end for start, end in prop.template_spans)
        blank = tree.byte_at(cursor) in (b"\n", b"\r")
        if not in_template and not blank:
            pieces.append(extra)
    pieces.append(tree.slice(cursor, prop.end))
    return "".join(pieces)


def _has_line_comment(literal: ObjectLiteral) -> bool:
    comments = list(literal.dangling)
    for prop in literal.properties:
        comments.extend(prop.leading)
        comments.extend(prop.trailing)
    return any(comment.startswith("//") for comment in comments)


class PropertyNestingTransformer(Transformer):
    name = "nest-properties"

    def __init__(self, policy: NestingPolicy = DEFAULT_POLICY):
        super().__init__()
        self.policy = policy
        self.classifier = NestingClassifier(policy)
        self.restructurer = LiteralRestructurer(policy)

    def _run(self, tree: SourceTree) -> None:
        # Innermost first: an outer literal must see the final text of any
        # literal nested inside its values.
        for ref in iter_candidates(tree, NodeKind.OBJECT, TraversalOrder.INNERMOST_FIRST):
            node = tree.node(ref)
            if node is None:
                continue
            literal = read_object_literal(tree, node)
            if not self.classifier.should_transform(literal):
                continue

            line = literal.row + 1
            moved = len(self.classifier.partition(literal).nested)
            if self.restructurer.restructure(tree, ref, literal):
                self._applied(
                    line, f"moved {moved} key(s) under '{self.policy.wrapper_key}'"
                )
            else:
                log.debug("Line %d: literal could not be rewritten", line)


def transform_object_literals(
    tree: SourceTree, policy: NestingPolicy = DEFAULT_POLICY
) -> None:
    PropertyNestingTransformer(policy).transform(tree)
