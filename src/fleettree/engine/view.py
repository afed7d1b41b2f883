"""Hosting view tying expansion, search and layout together."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..config import FleetTreeConfig, create_default_config
from ..layout import LayeredLayout, LayoutAdapter, LayoutConstraints, LayoutError
from ..models.graph import PositionedGraph
from ..models.hierarchy import TreeNode, all_ids, ancestry
from .expansion import ExpansionController
from .search import SearchResult, resolve_search
from .transform import build_flow, effective_expanded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeViewState:
    """Result of one render pass."""
    graph: PositionedGraph
    search: SearchResult | None
    expanded: frozenset[str]  # Effective set, search overlay included

    @property
    def is_searching(self) -> bool:
        return self.search is not None

    @property
    def is_empty(self) -> bool:
        """No nodes at all; the hierarchy is empty or search found nothing."""
        return not self.graph.nodes

    @property
    def no_results(self) -> bool:
        return self.search is not None and not self.search.visible


class TreeView:
    """Interactive view over one hierarchy.

    Holds the single expansion controller and the current search term. Each
    ``render`` recomputes visibility, transformation and layout from scratch.
    """

    def __init__(
        self,
        roots: Sequence[TreeNode],
        config: FleetTreeConfig | None = None,
        layout: LayoutAdapter | None = None,
    ):
        self.roots = list(roots)
        self.config = config or create_default_config()
        self.layout = layout or LayeredLayout()
        self.constraints = LayoutConstraints.from_config(self.config.layout)
        self.controller = ExpansionController(self.roots, self.config.expansion.initial_depth)
        self._known_ids = all_ids(self.roots)
        self._search_term = ""
        self._search: SearchResult | None = None

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def search(self) -> SearchResult | None:
        return self._search

    def set_search(self, term: str | None) -> SearchResult | None:
        """Replace the search term and recompute the search snapshot."""
        self._search_term = term or ""
        self._search = resolve_search(
            self.roots, self._search_term, min_length=self.config.search.min_length
        )
        return self._search

    def toggle(self, node_id: str) -> frozenset[str]:
        """Single mutation entry point for the presentation layer."""
        if node_id not in self._known_ids:
            logger.warning(f"Toggle of unknown node id {node_id}")
        return self.controller.toggle(node_id)

    def breadcrumbs(self, node_id: str) -> list[str]:
        """Labels from a root down to ``node_id``; empty when unknown."""
        chain = ancestry(self.roots, node_id)
        return [node.label for node in chain] if chain else []

    def render(self) -> TreeViewState:
        """Run one full pass and return the positioned graph."""
        expanded = self.controller.expanded
        flow = build_flow(self.roots, expanded, self._search)
        positions = self.layout.layout(flow, self.constraints)

        missing = [node_id for node_id in flow.node_ids if node_id not in positions]
        if missing:
            raise LayoutError(
                f"Layout '{self.layout.name}' returned no position for {len(missing)} node(s): "
                f"{', '.join(missing[:5])}"
            )

        logger.info(f"Rendered {len(flow.nodes)} nodes and {len(flow.edges)} edges")
        return TreeViewState(
            graph=PositionedGraph(
                graph=flow,
                positions=positions,
                node_width=self.constraints.node_width,
                node_height=self.constraints.node_height,
            ),
            search=self._search,
            expanded=effective_expanded(expanded, self._search),
        )
