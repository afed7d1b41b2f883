"""CLI interface for fleettree using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fleettree import __description__, __version__
from fleettree.config import FleetTreeConfig, OutputFormat, load_config
from fleettree.data import load_vessel_hierarchy
from fleettree.engine import TreeView
from fleettree.layout import LayoutError, verify_layout
from fleettree.models.hierarchy import (
    TreeNode,
    ancestry,
    count_nodes,
    find_duplicate_ids,
    find_node,
    iter_nodes,
    load_hierarchy,
    max_depth,
)
from fleettree.render import TreeConsoleFormatter, create_exporter

app = typer.Typer(
    name="fleettree",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"fleettree version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """fleettree - Tree-view engine for vessel equipment hierarchies."""


def _configure_logging(config: FleetTreeConfig) -> None:
    logging.basicConfig(
        level=config.logging.level.to_logging_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_context(config_path: Path | None, data_path: Path | None) -> tuple[FleetTreeConfig, list[TreeNode]]:
    """Load configuration and hierarchy, exiting with a message on failure."""
    try:
        config = load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _configure_logging(config)

    source = data_path or (Path(config.data) if config.data else None)
    try:
        roots = load_hierarchy(source) if source else load_vessel_hierarchy()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    return config, roots


def _build_view(
    roots: list[TreeNode],
    config: FleetTreeConfig,
    search: str | None,
    expand: list[str] | None,
    depth: int | None,
    expand_all: bool,
) -> TreeView:
    if depth is not None:
        config = config.model_copy(
            update={"expansion": config.expansion.model_copy(update={"initial_depth": depth})}
        )

    view = TreeView(roots, config=config)
    if expand_all:
        view.controller.expand_all()
    for node_id in expand or []:
        view.toggle(node_id)
    if search:
        view.set_search(search)
    return view


DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", "-d", help="Hierarchy JSON file (default: bundled vessel hierarchy)")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file path (default: search for .fleettree.json)")
]
SearchOption = Annotated[
    Optional[str],
    typer.Option("--search", "-s", help="Case-insensitive substring to search for")
]
ExpandOption = Annotated[
    Optional[List[str]],
    typer.Option("--expand", "-e", help="Node id to toggle after the initial expansion (can be used multiple times)")
]
DepthOption = Annotated[
    Optional[int],
    typer.Option("--depth", help="Initial expansion depth (default: from config, 1)")
]
AllOption = Annotated[
    bool,
    typer.Option("--all", "-a", help="Expand every branch")
]


@app.command()
def show(
    data: DataOption = None,
    config: ConfigOption = None,
    search: SearchOption = None,
    expand: ExpandOption = None,
    depth: DepthOption = None,
    expand_all: AllOption = False,
) -> None:
    """Show the visible hierarchy as a console tree."""
    cfg, roots = _load_context(config, data)
    view = _build_view(roots, cfg, search, expand, depth, expand_all)

    try:
        state = view.render()
    except LayoutError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    TreeConsoleFormatter(console).format_view(state)


@app.command()
def graph(
    data: DataOption = None,
    config: ConfigOption = None,
    search: SearchOption = None,
    expand: ExpandOption = None,
    depth: DepthOption = None,
    expand_all: AllOption = False,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: mermaid, json (default: from config, mermaid)")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write the diagram to this file or directory instead of stdout (extension added when missing)")
    ] = None,
) -> None:
    """Lay out the visible hierarchy and emit it as a diagram."""
    cfg, roots = _load_context(config, data)

    format_name = format or OutputFormat(cfg.output.format).value
    if format_name == OutputFormat.TEXT.value:
        format_name = OutputFormat.MERMAID.value

    exporter = create_exporter(cfg.output, direction=cfg.layout.direction)
    if format_name not in exporter.formats:
        console.print(f"[red]Error:[/red] Invalid format '{escape(format_name)}'. Must be one of: {', '.join(exporter.formats)}")
        raise typer.Exit(1)

    view = _build_view(roots, cfg, search, expand, depth, expand_all)
    try:
        state = view.render()
    except LayoutError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    for issue in verify_layout(state.graph.graph, state.graph.positions, view.constraints):
        logger.warning(issue)

    rendered = exporter.render(state.graph, format_name)

    if out:
        target = exporter.output_path(out, format_name)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered + "\n", encoding="utf-8")
        console.print(f"[green]OK[/green] Wrote {len(state.graph.nodes)} nodes to {escape(str(target))}")
    else:
        typer.echo(rendered)


@app.command()
def search(
    term: Annotated[str, typer.Argument(help="Case-insensitive substring to search for")],
    data: DataOption = None,
    config: ConfigOption = None,
) -> None:
    """List nodes whose label contains TERM, with their paths."""
    cfg, roots = _load_context(config, data)
    view = TreeView(roots, config=cfg)
    result = view.set_search(term)

    if result is None:
        console.print("[yellow]Search term is empty - nothing to search for[/yellow]")
        raise typer.Exit(1)

    rows = [
        (node.id, node.label, node.type, view.breadcrumbs(node.id))
        for node in iter_nodes(roots)
        if node.id in result.matches
    ]
    TreeConsoleFormatter(console).format_matches(rows)


@app.command()
def path(
    node_id: Annotated[str, typer.Argument(help="Id of the node to locate")],
    data: DataOption = None,
    config: ConfigOption = None,
) -> None:
    """Show the breadcrumb path from a root down to NODE_ID."""
    _, roots = _load_context(config, data)
    chain = ancestry(roots, node_id)

    if chain is None:
        console.print(f"[red]Error:[/red] Node '{escape(node_id)}' not found")
        raise typer.Exit(1)

    console.print(escape(" / ".join(node.label for node in chain)))


@app.command()
def validate(
    data: DataOption = None,
    config: ConfigOption = None,
) -> None:
    """Check the hierarchy for duplicate ids and print its statistics."""
    _, roots = _load_context(config, data)

    table = Table(title="Hierarchy")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Roots", str(len(roots)))
    table.add_row("Nodes", str(count_nodes(roots)))
    table.add_row("Max depth", str(max_depth(roots)))
    table.add_row("Branches", str(sum(1 for node in iter_nodes(roots) if node.has_children)))
    console.print(table)

    duplicates = find_duplicate_ids(roots)
    if duplicates:
        for node_id, count in sorted(duplicates.items()):
            label = find_node(roots, node_id).label
            console.print(f"[red]FAIL[/red] Duplicate id '{escape(node_id)}' ({escape(label)}) occurs {count} times")
        raise typer.Exit(1)

    console.print("[green]OK[/green] All node ids are unique")


if __name__ == "__main__":
    app()
