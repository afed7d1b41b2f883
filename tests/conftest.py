"""Shared fixtures for fleettree tests."""

import pytest

from fleettree.data import load_vessel_hierarchy
from fleettree.models.hierarchy import NodeType, TreeNode


def make_node(node_id: str, label: str, node_type: NodeType = NodeType.PART, children=()) -> TreeNode:
    return TreeNode(id=node_id, label=label, type=node_type, children=tuple(children))


@pytest.fixture
def small_tree():
    """root -> A -> {B, C}; only B's label contains 'seal'."""
    return [
        make_node("root", "Equipments", NodeType.ROOT, [
            make_node("A", "Main Engine", NodeType.SYSTEM, [
                make_node("B", "Shaft Seal"),
                make_node("C", "Bearing"),
            ]),
        ])
    ]


@pytest.fixture
def forest():
    """Two roots with branches of uneven depth."""
    return [
        make_node("r1", "Engine Room", NodeType.CATEGORY, [
            make_node("r1-a", "Fuel Pump", NodeType.COMPONENT_GROUP, [
                make_node("r1-a-1", "Pump Seal"),
                make_node("r1-a-2", "Impeller"),
            ]),
            make_node("r1-b", "Cooler"),
        ]),
        make_node("r2", "Deck", NodeType.CATEGORY, [
            make_node("r2-a", "Winch", NodeType.SYSTEM, [
                make_node("r2-a-1", "Brake Pad"),
            ]),
        ]),
    ]


@pytest.fixture(scope="session")
def vessel_roots():
    """Bundled vessel hierarchy."""
    return load_vessel_hierarchy()
