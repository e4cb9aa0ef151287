import logging
from enum import Enum
from typing import Iterator

from armshift.lang.typescript import NodeKind, NodeRef, SourceTree

log = logging.getLogger(__name__)


class TraversalOrder(Enum):
    # Pre-order, as the nodes appear in the file.
    DOCUMENT = "document"
    # Reverse pre-order: every descendant is visited before its ancestors.
    INNERMOST_FIRST = "innermost_first"


def iter_candidates(
    tree: SourceTree, kind: NodeKind, order: TraversalOrder
) -> Iterator[NodeRef]:
    """
    Enumerates every `kind` node once, then yields the handles that are
    still attached when their turn comes.

    The candidate set is fixed up front: nodes created by edits during the
    pass are never visited, and nodes consumed by an earlier edit are
    skipped.
    """
    refs = tree.find_descendants(kind)
    if order is TraversalOrder.INNERMOST_FIRST:
        refs.reverse()

    for ref in refs:
        if not tree.is_attached(ref):
            log.debug("Skipping detached %s handle #%d", ref.kind, ref.index)
            continue
        yield ref
