"""Hierarchy to flow graph transformation."""

import logging
from collections import deque
from collections.abc import Sequence

from ..models.graph import FlowGraph, GraphEdge, GraphNode
from ..models.hierarchy import TreeNode
from .search import SearchResult, hidden_ids

logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


def transform(
    roots: Sequence[TreeNode],
    expanded: frozenset[str] | set[str],
    hidden: frozenset[str] | set[str] = _EMPTY,
    matches: frozenset[str] | set[str] = _EMPTY,
) -> FlowGraph:
    """Walk the hierarchy breadth-first and emit the visible graph.

    Args:
        roots: Root nodes of the hierarchy
        expanded: Effective expanded ids; children of a node are emitted only
                  when its id is in this set
        hidden: Ids skipped together with their whole subtree
        matches: Search matches, flagged on the emitted nodes

    Returns:
        FlowGraph whose edges are emitted parent first, in queue order
    """
    graph = FlowGraph()
    queue: deque[tuple[TreeNode, str | None, int]] = deque(
        (root, None, 0) for root in roots
    )

    while queue:
        node, parent_id, level = queue.popleft()

        if node.id in hidden:
            continue

        is_expanded = node.id in expanded

        graph.nodes.append(GraphNode(
            id=node.id,
            label=node.label,
            type=node.type,
            level=level,
            has_children=node.has_children,
            is_expanded=is_expanded,
            is_match=node.id in matches,
        ))

        if parent_id is not None:
            graph.edges.append(GraphEdge(source=parent_id, target=node.id))

        if node.has_children and is_expanded:
            for child in node.children:
                queue.append((child, node.id, level + 1))

    logger.debug(f"Transformed hierarchy into {len(graph.nodes)} nodes and {len(graph.edges)} edges")
    return graph


def effective_expanded(
    expanded: frozenset[str] | set[str], search: SearchResult | None
) -> frozenset[str]:
    """Manual expansion with the search overlay applied."""
    if search is None:
        return frozenset(expanded)
    return frozenset(expanded) | search.forced_expanded


def build_flow(
    roots: Sequence[TreeNode],
    expanded: frozenset[str] | set[str],
    search: SearchResult | None = None,
) -> FlowGraph:
    """Transform with the search result applied.

    While searching, non-visible branches are hidden and ancestors of matches
    are opened on top of the manual expansion state, which itself is left
    untouched.
    """
    if search is None:
        return transform(roots, frozenset(expanded))

    return transform(
        roots,
        effective_expanded(expanded, search),
        hidden=hidden_ids(roots, search.visible),
        matches=search.matches,
    )
