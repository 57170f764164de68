"""
Root conftest.py for shared test fixtures and configuration.
This file provides common fixtures used across the test suite.
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add project root to Python path for consistent imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mindmap_editor import config
from mindmap_editor.Tools.Mind_Map.layout_adapter import LayoutAdapter, LayoutEngine
from mindmap_editor.Tools.Mind_Map.mindmap_graph import (
    MindmapEdge,
    MindmapNode,
    NodeIdFactory,
)
from mindmap_editor.Tools.Mind_Map.mindmap_model import MindmapModel


class StubLayoutEngine(LayoutEngine):
    """Deterministic engine: node i in input order is centered at (100*i, 10*i)"""

    def __init__(self, skip=()):
        self.skip = set(skip)
        self.calls = []

    def layout(self, nodes, edges, orientation):
        self.calls.append((list(nodes), list(edges), orientation))
        return {
            node.id: (100.0 * i, 10.0 * i)
            for i, node in enumerate(nodes)
            if node.id not in self.skip
        }


# ========== Graph Fixtures ==========

@pytest.fixture
def stub_engine():
    return StubLayoutEngine()


@pytest.fixture
def id_factory():
    """Ids 100, 101, 102, ... regardless of wall-clock time"""
    return NodeIdFactory(clock=itertools.count(100).__next__)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def model(stub_engine, id_factory, notices):
    """Fresh editing session on a stub layout engine"""
    return MindmapModel(
        layout_adapter=LayoutAdapter(engine=stub_engine),
        id_factory=id_factory,
        notify=notices.append,
    )


@pytest.fixture
def sample_graph():
    """
    R
    ├── A
    │   ├── A1
    │   └── A2
    └── B
    """
    nodes = [
        MindmapNode("1", "R"),
        MindmapNode("a", "A"),
        MindmapNode("a1", "A1"),
        MindmapNode("a2", "A2"),
        MindmapNode("b", "B"),
    ]
    edges = [
        MindmapEdge.link("1", "a"),
        MindmapEdge.link("a", "a1"),
        MindmapEdge.link("a", "a2"),
        MindmapEdge.link("1", "b"),
    ]
    return nodes, edges


# ========== Configuration Fixtures ==========

@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the config layer at a throwaway TOML file"""
    path = tmp_path / "config.toml"
    monkeypatch.setenv(config.CONFIG_PATH_ENV, str(path))
    monkeypatch.setattr(config, "_CONFIG_CACHE", None)
    yield path
    config._CONFIG_CACHE = None
