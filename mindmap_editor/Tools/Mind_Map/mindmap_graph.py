# mindmap_graph.py
# Description: Core data types for the editable mindmap graph
#
"""
Mindmap Graph Types
-------------------

Plain data carried through every part of the editor:
- MindmapNode / MindmapEdge: the structural graph (single source of truth)
- PositionedNode: a node plus derived screen coordinates
- LayoutOrientation / Direction: layout mode and arrow-key direction
- NodeIdFactory: monotonic, collision-resistant node ids
- Edge lookup helpers and the networkx tree view used by layout and rendering
- The error taxonomy surfaced to the user
"""

import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set

import networkx as nx
from loguru import logger


ROOT_ID = "1"
NODE_TYPE = "mindmapNode"
DEFAULT_LABEL = "New idea"


class MindmapError(Exception):
    """Base class for errors reported to the user"""


class UserGuidanceError(MindmapError):
    """The requested edit makes no sense for the current selection"""


class MalformedImportError(MindmapError, ValueError):
    """Pasted structural text could not be applied"""


class EmptyExportError(MindmapError):
    """There is nothing worth exporting yet"""


class LayoutOrientation(str, Enum):
    """Flow direction of the tree, also decides the arrow-key mapping"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def rankdir(self) -> str:
        return "LR" if self is LayoutOrientation.HORIZONTAL else "TB"

    def toggled(self) -> "LayoutOrientation":
        if self is LayoutOrientation.HORIZONTAL:
            return LayoutOrientation.VERTICAL
        return LayoutOrientation.HORIZONTAL


class Direction(str, Enum):
    """Arrow keys, named as Textual names them"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MindmapNode:
    """A node of the mindmap"""
    id: str
    label: str = DEFAULT_LABEL
    node_type: str = NODE_TYPE

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID


@dataclass(frozen=True)
class MindmapEdge:
    """A parent -> child link"""
    id: str
    source: str
    target: str

    @classmethod
    def link(cls, source: str, target: str) -> "MindmapEdge":
        return cls(id=edge_id_for(source, target), source=source, target=target)


@dataclass(frozen=True)
class PositionedNode:
    """A node with layout coordinates (top-left corner of its box)"""
    node: MindmapNode
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def label(self) -> str:
        return self.node.label


def edge_id_for(source: str, target: str) -> str:
    return f"e{source}-{target}"


def make_root(label: str = DEFAULT_LABEL) -> MindmapNode:
    return MindmapNode(id=ROOT_ID, label=label)


class NodeIdFactory:
    """Generate node ids from the millisecond clock.

    Ids are strictly increasing within a session and never collide with
    ids already present in the graph, even when two nodes are created in
    the same millisecond or an imported graph carries ids from the future.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def new_id(self, existing: Iterable[str] = ()) -> str:
        taken: Set[str] = set(existing)
        candidate = max(int(self._clock()), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)


# --- Edge lookups -----------------------------------------------------------

def parent_edge(edges: Sequence[MindmapEdge], node_id: str) -> Optional[MindmapEdge]:
    """Return the edge whose target is node_id, if any"""
    for edge in edges:
        if edge.target == node_id:
            return edge
    return None


def parent_of(edges: Sequence[MindmapEdge], node_id: str) -> Optional[str]:
    edge = parent_edge(edges, node_id)
    return edge.source if edge else None


def child_edges(edges: Sequence[MindmapEdge], node_id: str) -> List[MindmapEdge]:
    """Outgoing edges of node_id, in edge-array order"""
    return [edge for edge in edges if edge.source == node_id]


def children_map(edges: Sequence[MindmapEdge]) -> Dict[str, List[str]]:
    """source id -> ordered list of target ids"""
    mapping: Dict[str, List[str]] = {}
    for edge in edges:
        mapping.setdefault(edge.source, []).append(edge.target)
    return mapping


def descendant_closure(edges: Sequence[MindmapEdge], start_id: str) -> List[str]:
    """Breadth-first closure of start_id over outgoing edges.

    The start node is included. Already visited ids are skipped, so a
    corrupted graph with a cycle still terminates.
    """
    mapping = children_map(edges)
    visited: List[str] = []
    seen: Set[str] = set()
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        visited.append(current)
        queue.extend(mapping.get(current, []))
    return visited


def build_tree_graph(nodes: Sequence[MindmapNode],
                     edges: Sequence[MindmapEdge],
                     root_id: str = ROOT_ID) -> Optional[nx.DiGraph]:
    """Build a networkx view of the tree rooted at root_id.

    Successors keep edge-array order. Every graph node carries its
    MindmapNode as the ``mindmap_node`` attribute and the root id is kept in
    ``graph.graph['root']``. Nodes not reachable from the root are left out.
    """
    by_id = {node.id: node for node in nodes}
    if root_id not in by_id:
        return None

    mapping = children_map(edges)
    tree = nx.DiGraph(root=root_id)
    tree.add_node(root_id, mindmap_node=by_id[root_id])
    stack = [root_id]
    while stack:
        current = stack.pop()
        for child_id in mapping.get(current, []):
            if child_id in tree or child_id not in by_id:
                logger.warning(f"Skipping edge {current} -> {child_id} while building tree")
                continue
            tree.add_node(child_id, mindmap_node=by_id[child_id])
            tree.add_edge(current, child_id)
            stack.append(child_id)
    return tree


def tree_height(tree: Optional[nx.DiGraph]) -> int:
    """Edges on the longest root-to-leaf path, 0 for a lone root"""
    if tree is None:
        return 0
    return nx.dag_longest_path_length(tree)
