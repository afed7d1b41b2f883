"""Search-driven visibility resolution."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.hierarchy import TreeNode, iter_nodes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Immutable snapshot of one search.

    visible: matches plus every ancestor of a match
    forced_expanded: visible nodes with at least one visible child
    matches: nodes whose label contains the term
    """
    term: str
    visible: frozenset[str] = field(default_factory=frozenset)
    forced_expanded: frozenset[str] = field(default_factory=frozenset)
    matches: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.matches


def normalize_term(search_term: str | None) -> str:
    """Trimmed, lowercased search term."""
    return (search_term or "").strip().lower()


def resolve_search(
    roots: Sequence[TreeNode],
    search_term: str | None,
    min_length: int = 1,
) -> SearchResult | None:
    """Resolve which nodes a search reveals.

    The whole hierarchy is traversed regardless of expansion state, so matches
    inside collapsed subtrees are found too.

    Args:
        roots: Root nodes of the hierarchy
        search_term: Free text; plain case-insensitive substring match
        min_length: Shortest trimmed term that activates search

    Returns:
        SearchResult, or None when the trimmed term is empty or too short
        (search inactive)
    """
    term = normalize_term(search_term)
    if not term or len(term) < min_length:
        return None

    visible: set[str] = set()
    forced_expanded: set[str] = set()
    matches: set[str] = set()

    def traverse(node: TreeNode) -> bool:
        is_match = term in node.label.lower()
        child_visible = False

        for child in node.children:
            if traverse(child):
                child_visible = True

        if is_match:
            matches.add(node.id)
            visible.add(node.id)

        if child_visible:
            visible.add(node.id)
            forced_expanded.add(node.id)

        return is_match or child_visible

    for root in roots:
        traverse(root)

    logger.debug(
        f"Search '{term}': {len(matches)} matches, {len(visible)} visible, "
        f"{len(forced_expanded)} forced open"
    )

    return SearchResult(
        term=term,
        visible=frozenset(visible),
        forced_expanded=frozenset(forced_expanded),
        matches=frozenset(matches),
    )


def hidden_ids(roots: Sequence[TreeNode], visible: frozenset[str] | set[str]) -> frozenset[str]:
    """Every hierarchy id not in ``visible``."""
    return frozenset(node.id for node in iter_nodes(roots) if node.id not in visible)
