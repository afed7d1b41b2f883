"""Rich console formatting for tree views."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ..engine.view import TreeViewState
from ..models.graph import FlowGraph, GraphNode
from ..models.hierarchy import NodeType
from .framework import NODE_COLORS


class TreeConsoleFormatter:
    """Formats the visible hierarchy for rich console display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def format_view(self, state: TreeViewState, title: str = "Equipment Hierarchy") -> None:
        """Print the visible tree followed by a summary line."""
        graph = state.graph.graph

        if state.no_results:
            self.console.print(f"[dim]No matching results found for '{escape(state.search.term)}'[/dim]")
            return
        if state.is_empty:
            self.console.print("[dim]No data available[/dim]")
            return

        self.console.print(self.build_tree(graph, title))
        self._format_summary(state)

    def build_tree(self, graph: FlowGraph, title: str) -> Tree:
        """Build a rich Tree following the emitted edges."""
        tree = Tree(f"[bold]{escape(title)}[/bold]")
        nodes = {node.id: node for node in graph.nodes}

        def add(branch: Tree, node_id: str) -> None:
            sub = branch.add(self._node_label(nodes[node_id]))
            for child_id in graph.children_of(node_id):
                add(sub, child_id)

        for root_id in graph.roots():
            add(tree, root_id)
        return tree

    def _node_label(self, node: GraphNode) -> str:
        if node.has_children:
            marker = "[-]" if node.is_expanded else "[+]"
        else:
            marker = " • "
        label = escape(node.label)
        if node.is_match:
            label = f"[bold yellow]{label}[/bold yellow]"
        color = NODE_COLORS.get(node.type, "#9ca3af")
        return f"{escape(marker)} {label} [{color}]{node.type.value}[/] [dim]{escape(node.id)}[/dim]"

    def _format_summary(self, state: TreeViewState) -> None:
        graph = state.graph.graph
        summary = f"[dim]{len(graph.nodes)} nodes, {len(graph.edges)} edges"
        if state.search is not None:
            summary += f", {len(state.search.matches)} match(es) for '{escape(state.search.term)}'"
        summary += "[/dim]"
        self.console.print(summary)

    def format_matches(self, rows: list[tuple[str, str, NodeType, list[str]]]) -> None:
        """Print search matches as a table of id, label, type and breadcrumb path."""
        if not rows:
            self.console.print("[dim]No matching results found[/dim]")
            return

        table = Table(title=f"Matches ({len(rows)})")
        table.add_column("ID", style="dim")
        table.add_column("Label", style="bold")
        table.add_column("Type")
        table.add_column("Path")

        for node_id, label, node_type, path in rows:
            table.add_row(escape(node_id), escape(label), node_type.value, escape(" / ".join(path)))

        self.console.print(table)
