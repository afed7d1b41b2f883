"""Layout adapters turning flow graphs into positioned drawings."""

from .framework import LayoutAdapter, LayoutConstraints, LayoutError, verify_layout
from .layered import LayeredLayout

__all__ = [
    "LayoutAdapter",
    "LayoutConstraints",
    "LayoutError",
    "LayeredLayout",
    "verify_layout",
]
