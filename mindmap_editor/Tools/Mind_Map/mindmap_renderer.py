# mindmap_renderer.py
# Description: Terminal renderers for the positioned mindmap
#
"""
Mindmap Renderer
---------------

Renders a MindmapModel for the terminal:
- Canvas view: labels placed on a character grid from the layout positions
- Tree view: indented tree with Unicode box drawing
"""

from typing import Dict, List, Tuple

from rich.text import Text

from .mindmap_graph import build_tree_graph
from .mindmap_model import MindmapModel


class MindmapRenderer:
    """Renderer for the mindmap editor"""

    # Layout pixels per terminal cell
    CELL_WIDTH = 10
    CELL_HEIGHT = 25

    def __init__(self, model: MindmapModel):
        self.model = model
        self.symbols = {
            'tree_vertical': '│',
            'tree_horizontal': '─',
            'tree_corner': '└',
            'tree_branch': '├',
            'space': ' ',
        }
        self.selected_style = "bold cyan reverse"

    def _box_columns(self) -> int:
        return max(4, int(self.model.layout_adapter.settings.node_width // self.CELL_WIDTH) - 2)

    def render_canvas(self) -> Text:
        """Place every label at its layout position

        Returns:
            Rich Text object, one line per grid row
        """
        if not self.model.positioned:
            return Text("Empty mindmap", style="dim italic")

        width = self._box_columns()
        rows: Dict[int, List[Tuple[int, str, bool]]] = {}
        min_x = min(p.x for p in self.model.positioned)
        min_y = min(p.y for p in self.model.positioned)
        for positioned in self.model.positioned:
            col = int(round((positioned.x - min_x) / self.CELL_WIDTH))
            row = int(round((positioned.y - min_y) / self.CELL_HEIGHT))
            label = positioned.label or "…"
            if len(label) > width:
                label = label[:width - 1] + "…"
            rows.setdefault(row, []).append(
                (col, f"[{label}]", self.model.selection.is_selected(positioned.id)))

        text = Text()
        for row in range(max(rows) + 1):
            cursor = 0
            for col, label, selected in sorted(rows.get(row, [])):
                if col < cursor:
                    col = cursor + 1
                text.append(" " * (col - cursor))
                text.append(label, style=self.selected_style if selected else None)
                cursor = col + len(label)
            text.append("\n")
        return text

    def render_tree_view(self) -> Text:
        """Render as indented tree with Unicode box drawing

        The walk keeps its own stack so arbitrarily deep chains render.

        Returns:
            Rich Text object with formatted tree
        """
        tree = build_tree_graph(self.model.store.get_nodes(), self.model.store.get_edges())
        if tree is None:
            return Text("No mindmap loaded", style="dim italic")

        symbols = self.symbols
        text = Text()
        # (node id, prefix, is last sibling, is root)
        stack: List[Tuple[str, str, bool, bool]] = [(tree.graph["root"], "", True, True)]
        while stack:
            node_id, prefix, is_last, is_root = stack.pop()
            if is_root:
                connector = ""
                child_prefix = ""
            else:
                connector = symbols['tree_corner'] if is_last else symbols['tree_branch']
                connector += symbols['tree_horizontal'] * 2 + symbols['space']
                if is_last:
                    child_prefix = prefix + symbols['space'] * 4
                else:
                    child_prefix = prefix + symbols['tree_vertical'] + symbols['space'] * 3

            text.append(f"{prefix}{connector}")
            label = tree.nodes[node_id]["mindmap_node"].label or "…"
            if self.model.selection.is_selected(node_id):
                text.append(label, style=self.selected_style)
            else:
                text.append(label)
            text.append("\n")

            children = list(tree.successors(node_id))
            for i in reversed(range(len(children))):
                stack.append((children[i], child_prefix, i == len(children) - 1, False))
        return text
