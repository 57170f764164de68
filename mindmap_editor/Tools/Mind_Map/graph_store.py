# graph_store.py
# Description: Single source of truth for the mindmap nodes and edges
#
"""
Graph Store
-----------

Holds the current node and edge sets. The only mutation primitive is
``replace``, an atomic swap of both sets. The store does not validate what
it is given; ``validate_tree`` states the tree invariants so that callers
and tests can check them.
"""

from typing import Iterable, List, Optional, Tuple

from loguru import logger

from .mindmap_graph import (
    DEFAULT_LABEL,
    ROOT_ID,
    MindmapEdge,
    MindmapNode,
    make_root,
)


class GraphStore:
    """Current mindmap graph"""

    def __init__(self, nodes: Optional[Iterable[MindmapNode]] = None,
                 edges: Optional[Iterable[MindmapEdge]] = None,
                 root_label: str = DEFAULT_LABEL):
        if nodes is None:
            nodes = [make_root(root_label)]
        self._nodes: Tuple[MindmapNode, ...] = tuple(nodes)
        self._edges: Tuple[MindmapEdge, ...] = tuple(edges or ())

    def get_nodes(self) -> List[MindmapNode]:
        return list(self._nodes)

    def get_edges(self) -> List[MindmapEdge]:
        return list(self._edges)

    def get_node(self, node_id: str) -> Optional[MindmapNode]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def replace(self, nodes: Iterable[MindmapNode], edges: Iterable[MindmapEdge]) -> None:
        """Swap in a whole new graph"""
        new_nodes = tuple(nodes)
        new_edges = tuple(edges)
        self._nodes, self._edges = new_nodes, new_edges
        logger.debug(f"Graph replaced: {len(new_nodes)} nodes, {len(new_edges)} edges")

    def __len__(self) -> int:
        return len(self._nodes)


def validate_tree(nodes: Iterable[MindmapNode],
                  edges: Iterable[MindmapEdge],
                  root_id: str = ROOT_ID) -> Tuple[bool, List[str]]:
    """Check the single-rooted tree invariants

    Args:
        nodes: Node set
        edges: Edge set
        root_id: Id of the distinguished root

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    nodes = list(nodes)
    edges = list(edges)
    errors: List[str] = []

    node_ids = [node.id for node in nodes]
    known = set(node_ids)
    if len(known) != len(node_ids):
        errors.append("Duplicate node ids")
    if root_id not in known:
        errors.append(f"Root node '{root_id}' is missing")

    parents = {}
    seen_pairs = set()
    for edge in edges:
        if edge.source not in known:
            errors.append(f"Edge {edge.id}: unknown source '{edge.source}'")
        if edge.target not in known:
            errors.append(f"Edge {edge.id}: unknown target '{edge.target}'")
        if (edge.source, edge.target) in seen_pairs:
            errors.append(f"Edge {edge.id}: duplicate link {edge.source} -> {edge.target}")
        seen_pairs.add((edge.source, edge.target))
        if edge.target == root_id:
            errors.append(f"Edge {edge.id}: root cannot have a parent")
        elif edge.target in parents:
            errors.append(f"Node '{edge.target}' has more than one parent")
        parents.setdefault(edge.target, edge.source)

    if root_id in known:
        # Walk down from the root; anything not reached is orphaned or on a cycle
        reached = {root_id}
        frontier = [root_id]
        while frontier:
            current = frontier.pop()
            for edge in edges:
                if edge.source == current and edge.target not in reached:
                    reached.add(edge.target)
                    frontier.append(edge.target)
        for node_id in node_ids:
            if node_id not in reached:
                errors.append(f"Node '{node_id}' is not reachable from the root")

    return len(errors) == 0, errors
