"""Renderer framework for positioned graphs."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..config import LayoutDirection, OutputConfig
from ..models.graph import PositionedGraph
from ..models.hierarchy import NodeType

logger = logging.getLogger(__name__)


# Node palette; categories and roots use the brand colour
NODE_COLORS: dict[NodeType, str] = {
    NodeType.ROOT: "#4f46e5",
    NodeType.CATEGORY: "#4f46e5",
    NodeType.SYSTEM: "#dc2626",
    NodeType.SUB_SYSTEM: "#1e3a8a",
    NodeType.SUB_SYSTEM_CODE: "#60a5fa",
    NodeType.COMPONENT_GROUP: "#9ca3af",
    NodeType.PART_GROUP: "#4b5563",
    NodeType.PART: "#166534",
    NodeType.EQUIPMENT_TYPE: "#1d4ed8",
    NodeType.EQUIPMENT: "#4338ca",
    NodeType.ASSEMBLY: "#ea580c",
    NodeType.COMPONENT: "#10b981",
}


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, graph: PositionedGraph) -> str:
        """Render a positioned graph to string format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class GraphExporter:
    """Registry of renderers keyed by format name."""

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    @property
    def formats(self) -> list[str]:
        return sorted(self.renderers)

    def render(self, graph: PositionedGraph, format_name: str) -> str:
        """Render a positioned graph with the named renderer.

        Raises:
            ValueError: If no renderer is registered for ``format_name``
        """
        if format_name not in self.renderers:
            available = self.formats
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")

        renderer = self.renderers[format_name]
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(graph)

    def output_path(self, out: Path, format_name: str, stem: str = "hierarchy") -> Path:
        """Resolve the file a rendered graph is written to.

        A directory gets ``<stem><extension>`` inside it, a path without a
        suffix gets the renderer's extension, any other path is kept as is.
        """
        extension = self.renderers[format_name].get_file_extension()
        if out.is_dir():
            return out / f"{stem}{extension}"
        if not out.suffix:
            return out.with_suffix(extension)
        return out


def create_exporter(
    config: OutputConfig | None = None,
    direction: LayoutDirection = LayoutDirection.LEFT_RIGHT,
) -> GraphExporter:
    """Exporter with every bundled file renderer registered."""
    from .json_renderer import JsonRenderer
    from .mermaid import MermaidRenderer

    config = config or OutputConfig()
    exporter = GraphExporter(config)
    exporter.add_renderer(MermaidRenderer(direction=direction, max_label_length=config.max_label_length))
    exporter.add_renderer(JsonRenderer())
    return exporter
