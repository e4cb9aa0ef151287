"""
Long-running-operation (LRO) call rewriting, v6 -> v7.

1. const poller = await client.beginMethod(...)
   -> const poller = client.method(...); await poller.submitted();
2. await client.beginMethodAndWait(...) -> await client.method(...)
3. await client.beginMethod(...) (not bound) -> await client.method(...).submitted()
"""

import logging
from typing import Optional

from tree_sitter import Node

from armshift.lang.typescript import (
    NodeKind,
    NodeRef,
    SourceTree,
    TextEdit,
    can_insert_after,
    enclosing_declaration,
    statement_anchor,
)
from armshift.refactor.traversal import TraversalOrder, iter_candidates
from .base import Transformer

log = logging.getLogger(__name__)

BEGIN_PREFIX = "begin"
AND_WAIT_SUFFIX = "AndWait"
SUBMITTED_METHOD = "submitted"


def is_begin_method(method_name: str) -> bool:
    """True for `beginX...`, where X is an ASCII capital (a camel-case boundary)."""
    return (
        method_name.startswith(BEGIN_PREFIX)
        and len(method_name) > len(BEGIN_PREFIX)
        and "A" <= method_name[len(BEGIN_PREFIX)] <= "Z"
    )


def is_and_wait_method(method_name: str) -> bool:
    return method_name.endswith(AND_WAIT_SUFFIX)


def rewrite_method_name(method_name: str) -> str:
    """beginCreateOrUpdate / beginCreateOrUpdateAndWait -> createOrUpdate"""
    name = method_name[len(BEGIN_PREFIX) :]
    if name.endswith(AND_WAIT_SUFFIX):
        name = name[: -len(AND_WAIT_SUFFIX)]
    return name[:1].lower() + name[1:]


def lro_method_name(method_name: str) -> Optional[str]:
    """The v7 name for an LRO method, or None when the name is not one."""
    if not is_begin_method(method_name):
        return None
    new_name = rewrite_method_name(method_name)
    return new_name or None


def awaited_operand(await_node: Node) -> Optional[Node]:
    for child in reversed(await_node.named_children):
        if child.type != NodeKind.COMMENT.value:
            return child
    return None


class CallPatternTransformer(Transformer):
    name = "lro-calls"

    def _run(self, tree: SourceTree) -> None:
        for ref in iter_candidates(
            tree, NodeKind.AWAIT_EXPRESSION, TraversalOrder.DOCUMENT
        ):
            self._transform_await(tree, ref)

    def _transform_await(self, tree: SourceTree, ref: NodeRef) -> None:
        await_node = tree.node(ref)
        if await_node is None:
            return

        call = awaited_operand(await_node)
        if call is None or call.type != NodeKind.CALL_EXPRESSION.value:
            return

        callee = call.child_by_field_name("function")
        if callee is None or callee.type != NodeKind.MEMBER_EXPRESSION.value:
            return

        name_node = callee.child_by_field_name("property")
        if name_node is None or name_node.type != NodeKind.PROPERTY_IDENTIFIER.value:
            return

        method_name = tree.text(name_node)
        new_name = lro_method_name(method_name)
        if new_name is None:
            return

        line = await_node.start_point[0] + 1
        rename = TextEdit(
            name_node.start_byte, name_node.end_byte, new_name.encode("utf-8")
        )

        if is_and_wait_method(method_name):
            tree.apply_edits([rename])
            self._applied(line, f"{method_name} -> {new_name}")
            return

        declarator = _binding_declarator(await_node)
        if declarator is not None:
            self._transform_bound(tree, declarator, rename, method_name, new_name, line)
        else:
            submitted = TextEdit(
                call.end_byte, call.end_byte, f".{SUBMITTED_METHOD}()".encode("utf-8")
            )
            tree.apply_edits([rename, submitted])
            self._applied(line, f"{method_name} -> {new_name}().{SUBMITTED_METHOD}()")

    def _transform_bound(
        self,
        tree: SourceTree,
        declarator: Node,
        rename: TextEdit,
        method_name: str,
        new_name: str,
        line: int,
    ) -> None:
        binding = declarator.child_by_field_name("name")
        if binding is None or binding.type != NodeKind.IDENTIFIER.value:
            log.debug("Line %d: %s is bound to a pattern, leaving it", line, method_name)
            self._skipped(line, f"{method_name}: binding is not a plain identifier")
            return

        declaration = enclosing_declaration(declarator)
        anchor = statement_anchor(declaration) if declaration is not None else None
        if anchor is None or not can_insert_after(anchor):
            log.debug("Line %d: no statement list to insert into for %s", line, method_name)
            self._skipped(line, f"{method_name}: declaration is not in a block")
            return

        binding_name = tree.text(binding)
        declarator_ref = tree.ref_for(declarator)
        anchor_ref = tree.ref_for(anchor)

        tree.apply_edits([rename])

        current = tree.node(declarator_ref)
        value = current.child_by_field_name("value") if current is not None else None
        call = awaited_operand(value) if value is not None else None
        if call is None:
            return

        tree.set_initializer(declarator_ref, tree.text(call))
        tree.insert_statement_after(
            anchor_ref, f"await {binding_name}.{SUBMITTED_METHOD}();"
        )
        self._applied(line, f"{method_name} -> {new_name}, await {binding_name}.{SUBMITTED_METHOD}()")


def _binding_declarator(await_node: Node) -> Optional[Node]:
    parent = await_node.parent
    if parent is None or parent.type != NodeKind.VARIABLE_DECLARATOR.value:
        return None
    value = parent.child_by_field_name("value")
    if value is None or (value.start_byte, value.end_byte) != (
        await_node.start_byte,
        await_node.end_byte,
    ):
        return None
    return parent


def transform_call_patterns(tree: SourceTree) -> None:
    CallPatternTransformer().transform(tree)
