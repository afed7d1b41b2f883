"""Hierarchy and graph data models for fleettree."""

from fleettree.models.graph import FlowGraph, GraphEdge, GraphNode, Position, PositionedGraph
from fleettree.models.hierarchy import NodeStatus, NodeType, TreeNode, load_hierarchy

__all__ = [
    "TreeNode",
    "NodeType",
    "NodeStatus",
    "load_hierarchy",
    "GraphNode",
    "GraphEdge",
    "FlowGraph",
    "Position",
    "PositionedGraph",
]
