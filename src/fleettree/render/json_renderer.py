"""JSON renderer for positioned graphs."""

import json

from ..models.graph import PositionedGraph
from .framework import GraphRenderer


class JsonRenderer(GraphRenderer):
    """Positioned graph as a JSON document."""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    @property
    def format_name(self) -> str:
        return "json"

    def get_file_extension(self) -> str:
        return ".json"

    def render(self, graph: PositionedGraph) -> str:
        return json.dumps(graph.to_dict(), indent=self.indent, ensure_ascii=False)
