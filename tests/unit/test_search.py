"""Unit tests for search-driven visibility resolution."""

from fleettree.engine.search import SearchResult, hidden_ids, normalize_term, resolve_search
from fleettree.models.hierarchy import NodeType, TreeNode, ancestry, iter_nodes


def node(node_id, label, children=()):
    return TreeNode(id=node_id, label=label, type=NodeType.PART, children=tuple(children))


class TestInactiveSearch:
    """Test terms that leave search inactive."""

    def test_empty_term_returns_none(self, small_tree):
        """Test empty term disables search."""
        assert resolve_search(small_tree, "") is None

    def test_whitespace_term_returns_none(self, small_tree):
        """Test whitespace-only term disables search."""
        assert resolve_search(small_tree, "   \t ") is None

    def test_none_term_returns_none(self, small_tree):
        """Test missing term disables search."""
        assert resolve_search(small_tree, None) is None

    def test_term_shorter_than_min_length(self, small_tree):
        """Test terms below the configured minimum length are ignored."""
        assert resolve_search(small_tree, "se", min_length=3) is None
        assert resolve_search(small_tree, "sea", min_length=3) is not None

    def test_normalize_term(self):
        """Test term normalization trims and lowercases."""
        assert normalize_term("  Seal ") == "seal"
        assert normalize_term(None) == ""


class TestResolveSearch:
    """Test match, visible and forced-expanded sets."""

    def test_scenario_single_match(self, small_tree):
        """Test leaf match reveals its ancestors."""
        result = resolve_search(small_tree, "seal")

        assert result.matches == {"B"}
        assert result.visible == {"root", "A", "B"}
        assert result.forced_expanded == {"root", "A"}

    def test_term_is_trimmed(self, small_tree):
        """Test surrounding whitespace is ignored."""
        assert resolve_search(small_tree, "  seal  ").matches == {"B"}

    def test_case_insensitive(self, vessel_roots):
        """Test upper and lower case terms give identical matches."""
        lower = resolve_search(vessel_roots, "engine")
        upper = resolve_search(vessel_roots, "ENGINE")

        assert lower.matches == upper.matches
        assert lower.visible == upper.visible
        assert "cat-engine" in lower.matches

    def test_no_matches(self, small_tree):
        """Test a term matching nothing yields empty sets."""
        result = resolve_search(small_tree, "propeller")

        assert result is not None
        assert result.is_empty
        assert result.visible == frozenset()
        assert result.forced_expanded == frozenset()

    def test_empty_hierarchy(self):
        """Test searching an empty hierarchy."""
        result = resolve_search([], "seal")

        assert result.matches == frozenset()
        assert result.visible == frozenset()

    def test_match_with_matching_descendant_is_forced_open(self):
        """Test a match that also has matching descendants is in both sets."""
        roots = [node("pump", "LO Pump", [node("pump-seal", "LO Pump Seal")])]
        result = resolve_search(roots, "pump")

        assert result.matches == {"pump", "pump-seal"}
        assert "pump" in result.forced_expanded
        assert "pump-seal" not in result.forced_expanded

    def test_matching_branch_without_visible_children_not_forced(self):
        """Test a matching branch whose children do not match stays closed."""
        roots = [node("pump", "LO Pump", [node("imp", "Impeller")])]
        result = resolve_search(roots, "pump")

        assert result.matches == {"pump"}
        assert result.visible == {"pump"}
        assert result.forced_expanded == frozenset()

    def test_search_ignores_expansion(self, vessel_roots):
        """Test matches deep inside the hierarchy are found."""
        result = resolve_search(vessel_roots, "gasket")

        assert result.matches == {"lo-filter-gasket"}
        assert "sub-main-engine" in result.forced_expanded

    def test_result_is_immutable(self, small_tree):
        """Test result sets are frozen."""
        result = resolve_search(small_tree, "seal")

        assert isinstance(result, SearchResult)
        assert isinstance(result.visible, frozenset)
        assert isinstance(result.matches, frozenset)
        assert isinstance(result.forced_expanded, frozenset)

    def test_multiple_roots(self, forest):
        """Test every root is searched."""
        result = resolve_search(forest, "p")

        assert {"r1-a", "r1-a-1", "r2-a-1"} <= result.matches
        assert {"r1", "r2"} <= result.visible


class TestSearchProperties:
    """Test invariants over the bundled hierarchy."""

    TERMS = ["seal", "pump", "o", "bearing", "system", "aux", "others", "xyz"]

    def test_matches_are_visible(self, vessel_roots):
        """Test every match is visible."""
        for term in self.TERMS:
            result = resolve_search(vessel_roots, term)
            assert result.matches <= result.visible

    def test_ancestor_closure(self, vessel_roots):
        """Test ancestors of visible nodes are visible and forced open."""
        for term in self.TERMS:
            result = resolve_search(vessel_roots, term)
            for node_id in result.visible:
                chain = ancestry(vessel_roots, node_id)
                for ancestor in chain[:-1]:
                    assert ancestor.id in result.visible
                    assert ancestor.id in result.forced_expanded

    def test_visible_nodes_have_a_reason(self, vessel_roots):
        """Test visible nodes are matches or have a visible child."""
        result = resolve_search(vessel_roots, "seal")
        for tree_node in iter_nodes(vessel_roots):
            if tree_node.id in result.visible and tree_node.id not in result.matches:
                assert any(child.id in result.visible for child in tree_node.children)

    def test_resolve_is_deterministic(self, vessel_roots):
        """Test repeated resolution gives equal results."""
        assert resolve_search(vessel_roots, "seal") == resolve_search(vessel_roots, "seal")


class TestHiddenIds:
    """Test hidden set computation."""

    def test_hidden_is_complement_of_visible(self, small_tree):
        """Test hidden ids are every id not visible."""
        result = resolve_search(small_tree, "seal")

        assert hidden_ids(small_tree, result.visible) == {"C"}

    def test_everything_hidden_without_matches(self, small_tree):
        """Test no matches hides the whole hierarchy."""
        result = resolve_search(small_tree, "zzz")

        assert hidden_ids(small_tree, result.visible) == {"root", "A", "B", "C"}
