"""Bundled vessel equipment hierarchy."""

from pathlib import Path

from ..models.hierarchy import TreeNode, load_hierarchy

VESSEL_HIERARCHY_PATH = Path(__file__).parent / "vessel_hierarchy.json"


def load_vessel_hierarchy() -> list[TreeNode]:
    """Load the sample vessel equipment taxonomy shipped with the package."""
    return load_hierarchy(VESSEL_HIERARCHY_PATH)


__all__ = ["VESSEL_HIERARCHY_PATH", "load_vessel_hierarchy"]
