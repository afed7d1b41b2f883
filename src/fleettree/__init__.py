"""fleettree - Tree-view engine for vessel equipment hierarchies.

fleettree turns a hierarchical equipment taxonomy into a positioned node-link
graph, tracking which subtrees are expanded and revealing search matches
anywhere in the hierarchy.
"""

__version__ = "0.1.0"
__author__ = "fleettree contributors"
__description__ = "Tree-view engine for vessel equipment hierarchies"

from fleettree.config import FleetTreeConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "FleetTreeConfig",
]
