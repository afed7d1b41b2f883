"""Layout adapter contract.

Any placement algorithm can sit behind ``LayoutAdapter`` as long as it returns
one position per node, places ancestors strictly before descendants along the
flow direction, keeps nodes of a shared rank from overlapping and is
deterministic for identical input.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..config import LayoutConfig, LayoutDirection
from ..models.graph import FlowGraph, Position

logger = logging.getLogger(__name__)


class LayoutError(RuntimeError):
    """Raised when a layout adapter breaks its contract."""


@dataclass(frozen=True)
class LayoutConstraints:
    """Node size and spacing handed to a layout adapter."""
    node_width: float = 220
    node_height: float = 60
    node_sep: float = 40  # Between nodes sharing a rank
    rank_sep: float = 100  # Between ranks
    direction: LayoutDirection = LayoutDirection.LEFT_RIGHT

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "LayoutConstraints":
        return cls(
            node_width=config.node_width,
            node_height=config.node_height,
            node_sep=config.node_sep,
            rank_sep=config.rank_sep,
            direction=LayoutDirection(config.direction),
        )

    @property
    def rank_extent(self) -> float:
        """Node size along the flow direction."""
        if self.direction == LayoutDirection.LEFT_RIGHT:
            return self.node_width
        return self.node_height

    @property
    def cross_extent(self) -> float:
        """Node size across the flow direction."""
        if self.direction == LayoutDirection.LEFT_RIGHT:
            return self.node_height
        return self.node_width


class LayoutAdapter(ABC):
    """Abstract base class for layout adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the layout algorithm."""
        pass

    @abstractmethod
    def layout(self, graph: FlowGraph, constraints: LayoutConstraints) -> dict[str, Position]:
        """Compute the top-left position of every node in ``graph``."""
        pass


def verify_layout(
    graph: FlowGraph,
    positions: dict[str, Position],
    constraints: LayoutConstraints,
) -> list[str]:
    """Check a layout against the adapter contract.

    Returns:
        Human readable violations, empty when the layout conforms
    """
    issues = []

    missing = [node_id for node_id in graph.node_ids if node_id not in positions]
    for node_id in missing:
        issues.append(f"Missing position for node {node_id}")

    def primary(pos: Position) -> float:
        return pos.x if constraints.direction == LayoutDirection.LEFT_RIGHT else pos.y

    def secondary(pos: Position) -> float:
        return pos.y if constraints.direction == LayoutDirection.LEFT_RIGHT else pos.x

    for edge in graph.edges:
        if edge.source not in positions or edge.target not in positions:
            continue
        if primary(positions[edge.source]) >= primary(positions[edge.target]):
            issues.append(f"Edge {edge.id} does not follow the flow direction")

    ranks: dict[float, list[tuple[float, str]]] = {}
    for node_id in graph.node_ids:
        if node_id in positions:
            pos = positions[node_id]
            ranks.setdefault(primary(pos), []).append((secondary(pos), node_id))

    for members in ranks.values():
        members.sort()
        for (a_pos, a_id), (b_pos, b_id) in zip(members, members[1:]):
            if b_pos - a_pos < constraints.cross_extent:
                issues.append(f"Nodes {a_id} and {b_id} overlap")

    if issues:
        logger.warning(f"Layout has {len(issues)} contract violation(s)")
    return issues
