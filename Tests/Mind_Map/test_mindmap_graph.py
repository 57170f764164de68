"""
Tests for the mindmap graph types and edge helpers
"""

from mindmap_editor.Tools.Mind_Map.mindmap_graph import (
    ROOT_ID,
    DEFAULT_LABEL,
    LayoutOrientation,
    MalformedImportError,
    MindmapEdge,
    MindmapError,
    MindmapNode,
    NodeIdFactory,
    build_tree_graph,
    child_edges,
    descendant_closure,
    parent_of,
    tree_height,
)


class TestGraphTypes:
    """Test the node, edge and orientation types"""

    def test_edge_id_is_derived_from_endpoints(self):
        edge = MindmapEdge.link("1", "42")
        assert edge.id == "e1-42"
        assert (edge.source, edge.target) == ("1", "42")

    def test_root_flag(self):
        assert MindmapNode(ROOT_ID).is_root
        assert not MindmapNode("7").is_root
        assert MindmapNode("7").label == DEFAULT_LABEL

    def test_orientation_toggle_and_rankdir(self):
        assert LayoutOrientation.HORIZONTAL.toggled() is LayoutOrientation.VERTICAL
        assert LayoutOrientation.VERTICAL.toggled() is LayoutOrientation.HORIZONTAL
        assert LayoutOrientation.HORIZONTAL.rankdir == "LR"
        assert LayoutOrientation.VERTICAL.rankdir == "TB"
        assert LayoutOrientation("vertical") is LayoutOrientation.VERTICAL

    def test_malformed_import_is_a_value_error(self):
        assert issubclass(MalformedImportError, ValueError)
        assert issubclass(MalformedImportError, MindmapError)


class TestNodeIdFactory:
    """Test id generation"""

    def test_ids_increase_within_the_same_millisecond(self):
        factory = NodeIdFactory(clock=lambda: 1000)
        assert [factory.new_id() for _ in range(3)] == ["1000", "1001", "1002"]

    def test_ids_follow_the_clock(self):
        ticks = iter([5000, 9000])
        factory = NodeIdFactory(clock=lambda: next(ticks))
        assert factory.new_id() == "5000"
        assert factory.new_id() == "9000"

    def test_existing_ids_are_skipped(self):
        factory = NodeIdFactory(clock=lambda: 1000)
        assert factory.new_id(["1000", "1001"]) == "1002"

    def test_default_clock_never_returns_root_id(self):
        assert NodeIdFactory().new_id([ROOT_ID]) != ROOT_ID


class TestEdgeHelpers:
    """Test parent/child lookups"""

    def test_parent_and_children(self, sample_graph):
        _, edges = sample_graph
        assert parent_of(edges, "a1") == "a"
        assert parent_of(edges, "1") is None
        assert [e.target for e in child_edges(edges, "a")] == ["a1", "a2"]
        assert child_edges(edges, "b") == []

    def test_descendant_closure_is_breadth_first(self, sample_graph):
        _, edges = sample_graph
        assert descendant_closure(edges, "1") == ["1", "a", "b", "a1", "a2"]
        assert descendant_closure(edges, "b") == ["b"]

    def test_descendant_closure_survives_cycles(self):
        edges = [MindmapEdge.link("x", "y"), MindmapEdge.link("y", "x")]
        assert descendant_closure(edges, "x") == ["x", "y"]

    def test_descendant_closure_of_a_long_chain(self):
        edges = [MindmapEdge.link(str(i), str(i + 1)) for i in range(20000)]
        closure = descendant_closure(edges, "0")
        assert len(closure) == 20001
        assert closure[:3] == ["0", "1", "2"]
        assert closure[-1] == "20000"

    def test_tree_graph_keeps_edge_order(self, sample_graph):
        nodes, edges = sample_graph
        tree = build_tree_graph(nodes, edges)
        assert tree.graph["root"] == "1"
        assert list(tree.successors("1")) == ["a", "b"]
        assert tree_height(tree) == 2
        assert tree.nodes["a2"]["mindmap_node"].label == "A2"

    def test_tree_graph_skips_unreachable_nodes(self, sample_graph):
        nodes, edges = sample_graph
        tree = build_tree_graph(nodes + [MindmapNode("orphan")], edges)
        assert "orphan" not in tree
        assert tree_height(build_tree_graph([MindmapNode("1")], [])) == 0

    def test_tree_graph_without_root(self):
        assert build_tree_graph([MindmapNode("x")], []) is None
