"""Layered tree layout.

Ranks follow depth from the graph roots. Leaves take consecutive slots across
the flow direction and every parent is centred on the span of its children, so
sibling subtrees never share a slot range and nodes of one rank cannot
overlap.
"""

import logging

from ..config import LayoutDirection
from ..models.graph import FlowGraph, Position
from .framework import LayoutAdapter, LayoutConstraints

logger = logging.getLogger(__name__)


class LayeredLayout(LayoutAdapter):
    """Deterministic layered placement for tree-shaped graphs."""

    @property
    def name(self) -> str:
        return "layered"

    def layout(self, graph: FlowGraph, constraints: LayoutConstraints) -> dict[str, Position]:
        if not graph.nodes:
            return {}

        children = {node_id: [] for node_id in graph.node_ids}
        for edge in graph.edges:
            if edge.source in children and edge.target in children:
                children[edge.source].append(edge.target)

        ranks: dict[str, int] = {}
        cross: dict[str, float] = {}
        pitch = constraints.cross_extent + constraints.node_sep
        next_slot = 0

        def place(node_id: str, rank: int) -> float:
            nonlocal next_slot
            ranks[node_id] = rank
            child_ids = [c for c in children[node_id] if c not in ranks]

            if not child_ids:
                cross[node_id] = next_slot * pitch
                next_slot += 1
                return cross[node_id]

            placed = [place(child, rank + 1) for child in child_ids]
            cross[node_id] = (placed[0] + placed[-1]) / 2
            return cross[node_id]

        for root_id in graph.roots():
            if root_id not in ranks:
                place(root_id, 0)

        # Nodes on a cycle have no root; they start their own rank-0 subtree
        for node_id in graph.node_ids:
            if node_id not in ranks:
                place(node_id, 0)

        rank_pitch = constraints.rank_extent + constraints.rank_sep
        positions = {}
        for node_id in graph.node_ids:
            primary = ranks[node_id] * rank_pitch
            secondary = cross[node_id]
            if constraints.direction == LayoutDirection.LEFT_RIGHT:
                positions[node_id] = Position(x=primary, y=secondary)
            else:
                positions[node_id] = Position(x=secondary, y=primary)

        logger.debug(
            f"Layered layout placed {len(positions)} nodes in "
            f"{max(ranks.values()) + 1} ranks and {next_slot} slots"
        )
        return positions
