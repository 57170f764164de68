"""
Tests for the layout adapter and the default layered engine
"""

import pytest

from mindmap_editor.Tools.Mind_Map.layout_adapter import (
    LayeredTreeLayoutEngine,
    LayoutAdapter,
    LayoutSettings,
)
from mindmap_editor.Tools.Mind_Map.mindmap_graph import (
    LayoutOrientation,
    MindmapEdge,
    MindmapNode,
)
from Tests.conftest import StubLayoutEngine


@pytest.fixture
def two_children():
    nodes = [MindmapNode("1", "R"), MindmapNode("c1"), MindmapNode("c2")]
    edges = [MindmapEdge.link("1", "c1"), MindmapEdge.link("1", "c2")]
    return nodes, edges


class TestLayoutAdapter:
    """Test engine delegation and coordinate conversion"""

    def test_centers_become_top_left_corners(self, sample_graph):
        nodes, edges = sample_graph
        adapter = LayoutAdapter(engine=StubLayoutEngine())
        positioned = adapter.layout(nodes, edges, LayoutOrientation.HORIZONTAL)

        assert [p.id for p in positioned] == [n.id for n in nodes]
        # default box is 180 x 50
        assert (positioned[0].x, positioned[0].y) == (-90.0, -25.0)
        assert (positioned[2].x, positioned[2].y) == (110.0, -5.0)

    def test_uses_configured_box_size(self):
        adapter = LayoutAdapter(engine=StubLayoutEngine(),
                                settings=LayoutSettings(node_width=20, node_height=10))
        positioned = adapter.layout([MindmapNode("1")], [], LayoutOrientation.VERTICAL)
        assert (positioned[0].x, positioned[0].y) == (-10.0, -5.0)

    def test_engine_receives_orientation(self, sample_graph):
        engine = StubLayoutEngine()
        LayoutAdapter(engine=engine).layout(*sample_graph, LayoutOrientation.VERTICAL)
        assert engine.calls[-1][2] is LayoutOrientation.VERTICAL

    def test_missing_position_falls_back_to_origin(self, sample_graph):
        nodes, edges = sample_graph
        adapter = LayoutAdapter(engine=StubLayoutEngine(skip={"a1"}))
        positioned = {p.id: p for p in adapter.layout(nodes, edges, LayoutOrientation.HORIZONTAL)}
        assert (positioned["a1"].x, positioned["a1"].y) == (0.0, 0.0)
        assert len(positioned) == len(nodes)

    def test_fit_view_is_requested_with_all_nodes(self, sample_graph):
        requests = []
        adapter = LayoutAdapter(engine=StubLayoutEngine(), fit_view=requests.append)
        positioned = adapter.layout(*sample_graph, LayoutOrientation.HORIZONTAL)
        assert requests == [positioned]

    def test_fit_view_failure_is_ignored(self, sample_graph):
        def broken_fit_view(positioned):
            raise RuntimeError("view not ready")

        adapter = LayoutAdapter(engine=StubLayoutEngine(), fit_view=broken_fit_view)
        positioned = adapter.layout(*sample_graph, LayoutOrientation.HORIZONTAL)
        assert len(positioned) == 5


class TestLayeredTreeLayoutEngine:
    """Test the default layered layout"""

    def test_single_root(self):
        centers = LayeredTreeLayoutEngine().layout([MindmapNode("1")], [], LayoutOrientation.HORIZONTAL)
        assert centers == {"1": (90.0, 25.0)}

    def test_horizontal_ranks_are_columns(self, two_children):
        centers = LayeredTreeLayoutEngine().layout(*two_children, LayoutOrientation.HORIZONTAL)
        # rank step 180 + 120, sibling step 50 + 30
        assert centers["c1"] == (390.0, 25.0)
        assert centers["c2"] == (390.0, 105.0)
        assert centers["1"] == (90.0, 65.0)

    def test_vertical_ranks_are_rows(self, two_children):
        centers = LayeredTreeLayoutEngine().layout(*two_children, LayoutOrientation.VERTICAL)
        # rank step 50 + 120, sibling step 180 + 30
        assert centers["c1"] == (90.0, 195.0)
        assert centers["c2"] == (300.0, 195.0)
        assert centers["1"] == (195.0, 25.0)

    def test_custom_separations(self, two_children):
        engine = LayeredTreeLayoutEngine(LayoutSettings(node_separation=10, rank_separation=40))

        centers = engine.layout(*two_children, LayoutOrientation.HORIZONTAL)
        # rank step 180 + 40, sibling step 50 + 10
        assert centers == {"1": (90.0, 55.0), "c1": (310.0, 25.0), "c2": (310.0, 85.0)}

        centers = engine.layout(*two_children, LayoutOrientation.VERTICAL)
        # rank step 50 + 40, sibling step 180 + 10
        assert centers == {"1": (185.0, 25.0), "c1": (90.0, 115.0), "c2": (280.0, 115.0)}

    def test_no_overlap_between_leaves(self, sample_graph):
        centers = LayeredTreeLayoutEngine().layout(*sample_graph, LayoutOrientation.HORIZONTAL)
        leaf_rows = sorted(centers[leaf][1] for leaf in ("a1", "a2", "b"))
        assert all(b - a >= 50 for a, b in zip(leaf_rows, leaf_rows[1:]))

    def test_without_root_returns_nothing(self):
        assert LayeredTreeLayoutEngine().layout([MindmapNode("x")], [], LayoutOrientation.HORIZONTAL) == {}
