"""Expansion state and the toggle operation."""

import logging
from collections.abc import Iterable, Sequence

from ..models.hierarchy import TreeNode, iter_nodes

logger = logging.getLogger(__name__)


def toggle(state: Iterable[str], node_id: str) -> frozenset[str]:
    """Return ``state`` with ``node_id`` removed if present, added otherwise.

    The input is never modified. Ids that are unknown or belong to leaves are
    accepted; they simply never affect a render.
    """
    current = frozenset(state)
    if node_id in current:
        return current - {node_id}
    return current | {node_id}


def initial_expansion(roots: Sequence[TreeNode], depth: int = 1) -> frozenset[str]:
    """Ids of every node whose level is at most ``depth``.

    The default opens the roots and their direct children so the first paint
    is not a single collapsed node.
    """
    expanded: set[str] = set()
    stack = [(root, 0) for root in roots]
    while stack:
        node, level = stack.pop()
        if level > depth:
            continue
        expanded.add(node.id)
        stack.extend((child, level + 1) for child in node.children)
    return frozenset(expanded)


def branch_ids(roots: Sequence[TreeNode]) -> frozenset[str]:
    """Ids of every node that has children."""
    return frozenset(node.id for node in iter_nodes(roots) if node.has_children)


class ExpansionController:
    """Owns the expanded id set for one hierarchy.

    Every transition replaces the held frozenset, so consumers can detect
    changes by comparing values.
    """

    def __init__(self, roots: Sequence[TreeNode], initial_depth: int = 1):
        self.roots = list(roots)
        self.initial_depth = initial_depth
        self._expanded = initial_expansion(self.roots, initial_depth)

    @property
    def expanded(self) -> frozenset[str]:
        return self._expanded

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def toggle(self, node_id: str) -> frozenset[str]:
        """Toggle one id and return the new state."""
        self._expanded = toggle(self._expanded, node_id)
        logger.debug(f"Toggled {node_id}: {'open' if node_id in self._expanded else 'closed'}")
        return self._expanded

    def expand_all(self) -> frozenset[str]:
        self._expanded = branch_ids(self.roots)
        return self._expanded

    def collapse_all(self) -> frozenset[str]:
        self._expanded = frozenset()
        return self._expanded

    def reset(self) -> frozenset[str]:
        """Restore the initial expansion policy."""
        self._expanded = initial_expansion(self.roots, self.initial_depth)
        return self._expanded

    def replace(self, expanded: Iterable[str]) -> frozenset[str]:
        self._expanded = frozenset(expanded)
        return self._expanded
