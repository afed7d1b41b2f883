"""Renderers for positioned tree-view graphs."""

from .console import TreeConsoleFormatter
from .framework import NODE_COLORS, GraphExporter, GraphRenderer, create_exporter
from .json_renderer import JsonRenderer
from .mermaid import MermaidRenderer

__all__ = [
    "GraphRenderer",
    "GraphExporter",
    "JsonRenderer",
    "MermaidRenderer",
    "NODE_COLORS",
    "TreeConsoleFormatter",
    "create_exporter",
]
