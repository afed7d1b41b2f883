"""Tree-view engine: visibility, expansion and graph transformation."""

from .expansion import ExpansionController, branch_ids, initial_expansion, toggle
from .search import SearchResult, hidden_ids, resolve_search
from .transform import build_flow, effective_expanded, transform
from .view import TreeView, TreeViewState

__all__ = [
    "ExpansionController",
    "SearchResult",
    "TreeView",
    "TreeViewState",
    "branch_ids",
    "build_flow",
    "effective_expanded",
    "hidden_ids",
    "initial_expansion",
    "resolve_search",
    "toggle",
    "transform",
]
