# mindmap_model.py
# Description: Editing session for a single mindmap
#
"""
Mindmap Model
------------

Ties the editing core together for one session:
- Graph Store and Tree Operations (structural edits)
- Layout recompute after every edit or orientation change
- Single-value selection cursor and one-shot edit requests
- Arrow-key navigation, structural text import/export, CSV export
- Routing of refused operations to a user-visible notifier
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from .graph_store import GraphStore
from .layout_adapter import LayoutAdapter, LayoutSettings
from .mindmap_exporter import CSV_FILENAME, CsvOutlineExporter, StructuralCodec
from .mindmap_graph import (
    DEFAULT_LABEL,
    ROOT_ID,
    Direction,
    LayoutOrientation,
    MindmapError,
    NodeIdFactory,
    PositionedNode,
    build_tree_graph,
    tree_height,
)
from .navigator import next_selection
from .tree_operations import DeletionResult, TreeOperations


ORIENTATION_PROMPT = "Changing the layout direction clears the current mindmap. Continue?"


class SelectionCursor:
    """At most one selected node id"""

    def __init__(self):
        self.selected_id: Optional[str] = None

    def select(self, node_id: str) -> None:
        self.selected_id = node_id

    def clear(self) -> None:
        self.selected_id = None

    def is_selected(self, node_id: str) -> bool:
        return self.selected_id is not None and self.selected_id == node_id


class MindmapModel:
    """One mindmap editing session"""

    def __init__(self,
                 layout_adapter: Optional[LayoutAdapter] = None,
                 settings: Optional[LayoutSettings] = None,
                 orientation: LayoutOrientation = LayoutOrientation.HORIZONTAL,
                 default_label: str = DEFAULT_LABEL,
                 reset_on_orientation_change: bool = True,
                 notify: Optional[Callable[[str], None]] = None,
                 id_factory: Optional[NodeIdFactory] = None):
        self.default_label = default_label
        self.orientation = LayoutOrientation(orientation)
        self.reset_on_orientation_change = reset_on_orientation_change
        self.notify = notify or (lambda message: logger.warning(f"User notice: {message}"))
        self.layout_adapter = layout_adapter or LayoutAdapter(settings=settings)

        self.store = GraphStore(root_label=default_label)
        self.selection = SelectionCursor()
        self.positioned: List[PositionedNode] = []
        self._pending_edit: Optional[str] = None
        self.operations = TreeOperations(self.store,
                                         id_factory=id_factory,
                                         default_label=default_label,
                                         on_change=self.relayout)
        self.relayout()

    # --- Derived state -------------------------------------------------------

    @property
    def selected_id(self) -> Optional[str]:
        return self.selection.selected_id

    def relayout(self) -> None:
        """Recompute every position from the current graph"""
        nodes = self.store.get_nodes()
        self.positioned = self.layout_adapter.layout(nodes, self.store.get_edges(), self.orientation)
        if self.selected_id is not None and self.store.get_node(self.selected_id) is None:
            self.selection.clear()

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {p.id: (p.x, p.y) for p in self.positioned}

    def _attempt(self, operation: Callable, *args):
        """Run an operation, turning refusals into a user notice"""
        try:
            return operation(*args)
        except MindmapError as e:
            logger.warning(f"{operation.__name__} refused: {e}")
            self.notify(str(e))
            return None

    # --- Selection and editing -----------------------------------------------

    def select(self, node_id: Optional[str]) -> bool:
        """Make node_id the only selected node"""
        if node_id is None or self.store.get_node(node_id) is None:
            return False
        self.selection.select(node_id)
        return True

    def navigate(self, direction: Direction) -> bool:
        """Move the selection with an arrow key

        Returns:
            True if the selection moved
        """
        target = next_selection(self.store.get_nodes(), self.store.get_edges(),
                                self.selected_id, direction, self.orientation)
        if target is None:
            return False
        self.selection.select(target)
        return True

    def request_edit(self) -> bool:
        """Ask the view to open the label editor on the selected node"""
        if self.selected_id is None:
            return False
        self._pending_edit = self.selected_id
        return True

    def consume_edit_request(self) -> Optional[str]:
        """Take the pending edit request, if any; it is handed out once"""
        node_id, self._pending_edit = self._pending_edit, None
        return node_id

    def rename(self, node_id: str, label: str) -> bool:
        return self._attempt(self.operations.update_label, node_id, label) is not None

    # --- Structural edits ----------------------------------------------------

    def add_child(self) -> Optional[str]:
        return self._attempt(self.operations.insert_child, self.selected_id)

    def add_sibling(self) -> Optional[str]:
        return self._attempt(self.operations.insert_sibling, self.selected_id)

    def delete_subtree(self, node_id: Optional[str] = None) -> Optional[DeletionResult]:
        """Delete node_id (the selection by default) and its descendants

        The parent of the deleted node becomes the selection.
        """
        if node_id is None:
            node_id = self.selected_id
        result = self._attempt(self.operations.delete_subtree, node_id)
        if result is None:
            return None
        if result.parent_id is not None:
            self.selection.select(result.parent_id)
        return result

    def reset(self, confirm: Callable[[str], bool]) -> bool:
        if not self.operations.reset_all(confirm):
            return False
        self.selection.clear()
        self._pending_edit = None
        return True

    def toggle_orientation(self, confirm: Callable[[str], bool]) -> bool:
        """Switch between horizontal and vertical layout

        When reset_on_orientation_change is set the switch needs the user's
        agreement and starts a fresh mindmap; otherwise the current graph is
        simply laid out again.
        """
        new_orientation = self.orientation.toggled()
        if self.reset_on_orientation_change:
            if not confirm(ORIENTATION_PROMPT):
                logger.info("Orientation change declined")
                return False
            self.orientation = new_orientation
            self.operations.reset_all(lambda _prompt: True)
            self.selection.clear()
            self._pending_edit = None
        else:
            self.orientation = new_orientation
            self.relayout()
        logger.info(f"Orientation is now {self.orientation.value}")
        return True

    # --- Import / export -----------------------------------------------------

    def export_text(self) -> str:
        return StructuralCodec.to_text(self.store.get_nodes(), self.store.get_edges(),
                                       self.orientation, self.positions())

    def import_text(self, text: str) -> bool:
        """Replace the session graph with pasted structural text

        Nothing changes when the text is rejected.
        """
        imported = self._attempt(StructuralCodec.from_text, text)
        if imported is None:
            return False
        self.orientation = imported.orientation
        self.selection.clear()
        self._pending_edit = None
        self.operations.load_graph(imported.nodes, imported.edges)
        return True

    def export_csv(self) -> Optional[str]:
        return self._attempt(CsvOutlineExporter.to_csv, self.store.get_nodes(),
                             self.store.get_edges(), ROOT_ID, self.default_label)

    def save_csv(self, directory: Path, filename: str = CSV_FILENAME) -> Optional[Path]:
        """Export the CSV outline into directory/filename"""
        content = self.export_csv()
        if content is None:
            return None
        return CsvOutlineExporter.save_to_file(content, Path(directory) / filename)

    # --- Statistics ----------------------------------------------------------

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics about the mindmap

        Returns:
            Dictionary with statistics
        """
        tree = build_tree_graph(self.store.get_nodes(), self.store.get_edges())
        return {
            'total_nodes': len(self.store),
            'max_depth': tree_height(tree),
            'orientation': self.orientation.value,
            'selected': self.selected_id,
        }
