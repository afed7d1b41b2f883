"""Mermaid flowchart renderer for positioned graphs."""

import logging
import re

from ..config import LayoutDirection
from ..models.graph import GraphEdge, GraphNode, PositionedGraph
from ..models.hierarchy import NodeType
from .framework import NODE_COLORS, GraphRenderer

logger = logging.getLogger(__name__)


class MermaidRenderer(GraphRenderer):
    """Mermaid flowchart renderer for the visible hierarchy."""

    def __init__(
        self,
        direction: LayoutDirection = LayoutDirection.LEFT_RIGHT,
        max_label_length: int = 30,
        title: str = "Equipment Hierarchy",
    ):
        self.direction = direction
        self.max_label_length = max_label_length
        self.title = title

    @property
    def format_name(self) -> str:
        return "mermaid"

    def get_file_extension(self) -> str:
        return ".mmd"

    def render(self, graph: PositionedGraph) -> str:
        """Render positioned graph as Mermaid flowchart."""
        lines = []

        lines.append(f"flowchart {LayoutDirection(self.direction).value}")
        lines.append(f"    %% {self.title}")
        lines.append("")

        lines.append("    %% Nodes")
        for node in graph.nodes:
            lines.append(f"    {self._render_node(node)}")
        lines.append("")

        if graph.edges:
            lines.append("    %% Edges")
            for edge in graph.edges:
                lines.append(f"    {self._render_edge(edge)}")
            lines.append("")

        lines.extend(self._render_styling(graph))
        lines.extend(self._render_legend(graph))

        return "\n".join(lines)

    def _render_node(self, node: GraphNode) -> str:
        """Render a single node; branches show their toggle state."""
        safe_id = self._get_safe_id(node.id)
        label = self._escape_label(node.label)

        if node.has_children:
            marker = "-" if node.is_expanded else "+"
            # Branches: rounded rectangle with toggle marker
            return f'{safe_id}("{label} {marker}")'
        # Leaves: plain rectangle
        return f'{safe_id}["{label}"]'

    def _render_edge(self, edge: GraphEdge) -> str:
        return f"{self._get_safe_id(edge.source)} --> {self._get_safe_id(edge.target)}"

    def _render_styling(self, graph: PositionedGraph) -> list:
        """Render node styling based on node types and search matches."""
        lines = []
        present = sorted({node.type for node in graph.nodes}, key=lambda t: list(NodeType).index(t))

        if present:
            lines.append("    %% Node type styling")
        for node_type in present:
            class_name = self._class_name(node_type)
            color = NODE_COLORS[node_type]
            lines.append(f"    classDef {class_name} fill:{color},stroke:{color},color:#ffffff")
            members = [self._get_safe_id(n.id) for n in graph.nodes if n.type == node_type]
            lines.append(f"    class {','.join(members)} {class_name}")

        matches = [self._get_safe_id(n.id) for n in graph.nodes if n.is_match]
        if matches:
            lines.append("    %% Search match styling")
            lines.append("    classDef match stroke:#facc15,stroke-width:3px")
            lines.append(f"    class {','.join(matches)} match")

        if lines:
            lines.append("")
        return lines

    def _render_legend(self, graph: PositionedGraph) -> list:
        """Render legend as comments (Mermaid doesn't have native legend support)."""
        lines = ["    %% Legend:"]
        lines.append("    %% (label -) expanded branch, (label +) collapsed branch, [label] leaf")
        if any(node.is_match for node in graph.nodes):
            lines.append("    %% Highlighted border - search match")
        return lines

    def _class_name(self, node_type: NodeType) -> str:
        return node_type.value[0].lower() + node_type.value[1:]

    def _escape_label(self, label: str) -> str:
        """Escape label for Mermaid rendering."""
        if not label:
            return ""

        label = label.replace('"', "'")
        label = label.replace("[", "(")
        label = label.replace("]", ")")
        label = label.replace("{", "(")
        label = label.replace("}", ")")
        label = label.replace("|", ":")

        if len(label) > self.max_label_length:
            label = label[:self.max_label_length - 3] + "..."

        return label

    def _get_safe_id(self, node_id: str) -> str:
        """Get ID safe for diagram rendering (alphanumeric + underscore)."""
        return re.sub(r"[^a-zA-Z0-9_]", "_", node_id)
