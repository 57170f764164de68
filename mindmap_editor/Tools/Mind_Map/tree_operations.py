# tree_operations.py
# Description: Structural edits of the mindmap tree
#
"""
Tree Operations
---------------

The only code that mutates the Graph Store. Every successful edit builds a
complete new node/edge set, swaps it in with ``GraphStore.replace`` and then
fires the change callback (the session uses it to recompute the layout).
Refused edits raise ``UserGuidanceError`` and leave the store untouched.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from loguru import logger

from .graph_store import GraphStore
from .mindmap_graph import (
    DEFAULT_LABEL,
    ROOT_ID,
    MindmapEdge,
    MindmapNode,
    NodeIdFactory,
    UserGuidanceError,
    descendant_closure,
    make_root,
    parent_of,
)


NO_SELECTION_MESSAGE = "Select a node first."
ROOT_SIBLING_MESSAGE = "The central node cannot have siblings."
ROOT_DELETE_MESSAGE = "The central node cannot be deleted."
RESET_PROMPT = "Delete everything and start over?"


@dataclass(frozen=True)
class DeletionResult:
    removed_ids: List[str]
    parent_id: Optional[str]


class TreeOperations:
    """Structural edits on a GraphStore"""

    def __init__(self,
                 store: GraphStore,
                 id_factory: Optional[NodeIdFactory] = None,
                 default_label: str = DEFAULT_LABEL,
                 on_change: Optional[Callable[[], None]] = None):
        self.store = store
        self.id_factory = id_factory or NodeIdFactory()
        self.default_label = default_label
        self.on_change = on_change

    def _commit(self, nodes: List[MindmapNode], edges: List[MindmapEdge]) -> None:
        self.store.replace(nodes, edges)
        if self.on_change is not None:
            self.on_change()

    def _require_node(self, node_id: Optional[str]) -> MindmapNode:
        if node_id is None:
            raise UserGuidanceError(NO_SELECTION_MESSAGE)
        node = self.store.get_node(node_id)
        if node is None:
            raise UserGuidanceError(f"Node {node_id} no longer exists.")
        return node

    def _attach_new_node(self, parent_id: str) -> str:
        nodes = self.store.get_nodes()
        edges = self.store.get_edges()
        new_id = self.id_factory.new_id(node.id for node in nodes)
        nodes.append(MindmapNode(id=new_id, label=self.default_label))
        edges.append(MindmapEdge.link(parent_id, new_id))
        self._commit(nodes, edges)
        return new_id

    def insert_child(self, parent_id: Optional[str]) -> str:
        """Add a new node under parent_id

        Args:
            parent_id: Currently selected node, None when nothing is selected

        Returns:
            Id of the new node

        Raises:
            UserGuidanceError: If nothing is selected
        """
        parent = self._require_node(parent_id)
        new_id = self._attach_new_node(parent.id)
        logger.info(f"Inserted child {new_id} under {parent.id}")
        return new_id

    def insert_sibling(self, selected_id: Optional[str]) -> str:
        """Add a new node next to selected_id, under the same parent

        Raises:
            UserGuidanceError: If nothing is selected or the selection is the root
        """
        selected = self._require_node(selected_id)
        parent_id = parent_of(self.store.get_edges(), selected.id)
        if parent_id is None:
            raise UserGuidanceError(ROOT_SIBLING_MESSAGE)
        new_id = self._attach_new_node(parent_id)
        logger.info(f"Inserted sibling {new_id} of {selected.id}")
        return new_id

    def delete_subtree(self, node_id: Optional[str]) -> DeletionResult:
        """Remove node_id together with all of its descendants

        Returns:
            The removed ids (breadth-first order) and the parent of node_id

        Raises:
            UserGuidanceError: If nothing is selected or node_id is the root
        """
        if node_id == ROOT_ID:
            raise UserGuidanceError(ROOT_DELETE_MESSAGE)
        target = self._require_node(node_id)

        edges = self.store.get_edges()
        parent_id = parent_of(edges, target.id)
        doomed = descendant_closure(edges, target.id)
        doomed_set = set(doomed)

        remaining_nodes = [n for n in self.store.get_nodes() if n.id not in doomed_set]
        remaining_edges = [e for e in edges
                           if e.source not in doomed_set and e.target not in doomed_set]
        self._commit(remaining_nodes, remaining_edges)
        logger.info(f"Deleted subtree of {target.id} ({len(doomed)} nodes)")
        return DeletionResult(removed_ids=doomed, parent_id=parent_id)

    def reset_all(self, confirm: Callable[[str], bool]) -> bool:
        """Replace the graph with a fresh root after the user agrees

        Args:
            confirm: Asks the user; receives the prompt text

        Returns:
            True if the graph was reset
        """
        if not confirm(RESET_PROMPT):
            logger.info("Reset declined")
            return False
        self._commit([make_root(self.default_label)], [])
        logger.info("Graph reset to a single root")
        return True

    def update_label(self, node_id: Optional[str], label: str) -> MindmapNode:
        """Store an edited label

        Returns:
            The updated node
        """
        target = self._require_node(node_id)
        updated = replace(target, label=label)
        nodes = [updated if n.id == target.id else n for n in self.store.get_nodes()]
        self._commit(nodes, self.store.get_edges())
        logger.debug(f"Label of {target.id} updated")
        return updated

    def load_graph(self, nodes: List[MindmapNode], edges: List[MindmapEdge]) -> None:
        """Swap in an imported graph that has already been validated"""
        self._commit(list(nodes), list(edges))
        logger.info(f"Loaded graph with {len(nodes)} nodes")
