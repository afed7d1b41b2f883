"""Graph data models produced by one render pass."""

from dataclasses import dataclass, field

from .hierarchy import NodeType


@dataclass(frozen=True)
class GraphNode:
    """Visible tree node for one render pass.

    Carries only its id for toggle routing; the presentation layer dispatches
    toggles against the expansion controller.
    """
    id: str
    label: str
    type: NodeType
    level: int  # Depth from a root, 0-based
    has_children: bool
    is_expanded: bool
    is_match: bool = False


@dataclass(frozen=True)
class GraphEdge:
    """Visible parent to child relation."""
    source: str
    target: str

    @property
    def key(self) -> tuple[str, str]:
        """Stable identity across re-renders."""
        return (self.source, self.target)

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"


@dataclass(frozen=True)
class Position:
    """Top-left corner of a laid out node."""
    x: float
    y: float


@dataclass
class FlowGraph:
    """Nodes and edges emitted by the graph transformer."""
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def children_of(self, node_id: str) -> list[str]:
        """Child ids of a node, in edge creation order."""
        return [edge.target for edge in self.edges if edge.source == node_id]

    def roots(self) -> list[str]:
        """Node ids without an incoming edge, in node order."""
        targets = {edge.target for edge in self.edges}
        return [node.id for node in self.nodes if node.id not in targets]

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class PositionedGraph:
    """Flow graph plus one position per node."""
    graph: FlowGraph
    positions: dict[str, Position] = field(default_factory=dict)
    node_width: float = 0.0
    node_height: float = 0.0

    @property
    def nodes(self) -> list[GraphNode]:
        return self.graph.nodes

    @property
    def edges(self) -> list[GraphEdge]:
        return self.graph.edges

    def bounds(self) -> tuple[float, float]:
        """Width and height of the drawing."""
        if not self.positions:
            return (0.0, 0.0)
        width = max(p.x for p in self.positions.values()) + self.node_width
        height = max(p.y for p in self.positions.values()) + self.node_height
        return (width, height)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        width, height = self.bounds()
        return {
            "width": width,
            "height": height,
            "nodeWidth": self.node_width,
            "nodeHeight": self.node_height,
            "nodes": [
                {
                    "id": node.id,
                    "label": node.label,
                    "type": node.type.value,
                    "level": node.level,
                    "hasChildren": node.has_children,
                    "isExpanded": node.is_expanded,
                    "isMatch": node.is_match,
                    "position": {
                        "x": self.positions[node.id].x,
                        "y": self.positions[node.id].y,
                    },
                }
                for node in self.graph.nodes
            ],
            "edges": [
                {"id": edge.id, "source": edge.source, "target": edge.target}
                for edge in self.graph.edges
            ],
        }
