"""Unit tests for graph renderers."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from rich.console import Console

from fleettree.config import LayoutDirection, OutputConfig
from fleettree.engine.view import TreeView
from fleettree.models.hierarchy import NodeType
from fleettree.render import (
    GraphExporter,
    JsonRenderer,
    MermaidRenderer,
    TreeConsoleFormatter,
    create_exporter,
)


@pytest.fixture
def state(small_tree):
    view = TreeView(small_tree)
    view.controller.replace({"root"})
    view.set_search("seal")
    return view.render()


class TestMermaidRenderer:
    """Test Mermaid flowchart output."""

    def test_header_and_direction(self, state):
        """Test flowchart header follows the layout direction."""
        assert MermaidRenderer().render(state.graph).startswith("flowchart LR")
        assert MermaidRenderer(direction=LayoutDirection.TOP_BOTTOM).render(state.graph).startswith("flowchart TB")

    def test_nodes_and_edges(self, state):
        """Test branch markers, leaves and edges."""
        output = MermaidRenderer().render(state.graph)

        assert 'root("Equipments -")' in output
        assert 'A("Main Engine -")' in output
        assert 'B["Shaft Seal"]' in output
        assert "root --> A" in output
        assert "A --> B" in output
        assert "C" not in output.split("%% Edges")[1].split("%% Node type styling")[0]

    def test_collapsed_branch_marker(self, small_tree):
        """Test collapsed branches show a plus marker."""
        view = TreeView(small_tree)
        view.controller.replace({"root"})
        output = MermaidRenderer().render(view.render().graph)

        assert 'A("Main Engine +")' in output

    def test_type_and_match_styling(self, state):
        """Test class definitions per node type and for matches."""
        output = MermaidRenderer().render(state.graph)

        assert "classDef root fill:#4f46e5" in output
        assert "classDef system" in output
        assert "class B part" in output
        assert "classDef match" in output
        assert "class B match" in output

    def test_label_escaping_and_truncation(self):
        """Test unsafe characters are replaced and long labels truncated."""
        renderer = MermaidRenderer(max_label_length=10)

        assert renderer._escape_label('A "quoted" [x]') == "A 'quot..."
        assert MermaidRenderer()._escape_label("Cargo | Deck {x}") == "Cargo : Deck (x)"
        assert renderer._get_safe_id("sys-main.prop") == "sys_main_prop"


class TestJsonRenderer:
    """Test JSON output."""

    def test_json_document(self, state):
        """Test nodes carry flags and positions."""
        data = json.loads(JsonRenderer().render(state.graph))

        assert [node["id"] for node in data["nodes"]] == ["root", "A", "B"]
        assert [edge["id"] for edge in data["edges"]] == ["root-A", "A-B"]
        b = data["nodes"][2]
        assert b["isMatch"] is True
        assert b["type"] == NodeType.PART.value
        assert b["position"] == {"x": 640, "y": 0}
        assert data["nodeWidth"] == 220
        assert data["width"] == 860


class TestGraphExporter:
    """Test renderer registry."""

    def test_create_exporter_formats(self):
        """Test bundled renderers are registered."""
        assert create_exporter().formats == ["json", "mermaid"]

    def test_unknown_format(self, state):
        """Test unknown formats raise ValueError."""
        exporter = GraphExporter(OutputConfig())
        exporter.add_renderer(JsonRenderer())

        with pytest.raises(ValueError, match="Unknown format 'svg'"):
            exporter.render(state.graph, "svg")

    def test_render_by_name(self, state):
        """Test rendering through the registry."""
        output = create_exporter().render(state.graph, "mermaid")
        assert output.startswith("flowchart LR")

    def test_output_path_uses_renderer_extension(self):
        """Test directories and suffix-less paths get the format's extension."""
        exporter = create_exporter()

        with TemporaryDirectory() as temp_dir:
            directory = Path(temp_dir)

            assert exporter.output_path(directory, "mermaid") == directory / "hierarchy.mmd"
            assert exporter.output_path(directory, "json", stem="fleet") == directory / "fleet.json"
            assert exporter.output_path(directory / "graph", "json") == directory / "graph.json"
            assert exporter.output_path(directory / "graph.txt", "mermaid") == directory / "graph.txt"


class TestTreeConsoleFormatter:
    """Test rich console output."""

    def _capture(self, state) -> str:
        console = Console(record=True, width=120)
        TreeConsoleFormatter(console).format_view(state)
        return console.export_text()

    def test_tree_output(self, state):
        """Test the visible tree and summary."""
        text = self._capture(state)

        assert "Equipments" in text
        assert "Shaft Seal" in text
        assert "Bearing" not in text
        assert "[-]" in text
        assert "3 nodes, 2 edges, 1 match(es) for 'seal'" in text

    def test_no_results(self, small_tree):
        """Test the no results message."""
        view = TreeView(small_tree)
        view.set_search("zzz")

        assert "No matching results found" in self._capture(view.render())

    def test_no_data(self):
        """Test the empty hierarchy message."""
        assert "No data available" in self._capture(TreeView([]).render())

    def test_matches_table(self):
        """Test the matches table lists paths."""
        console = Console(record=True, width=160)
        TreeConsoleFormatter(console).format_matches([
            ("B", "Shaft Seal", NodeType.PART, ["Equipments", "Main Engine", "Shaft Seal"]),
        ])
        text = console.export_text()

        assert "Matches (1)" in text
        assert "Equipments / Main Engine / Shaft Seal" in text
