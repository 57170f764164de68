# Mindmap_Editor_Window.py
# Description: Textual application hosting the mindmap editor
#
"""
Mindmap Editor Window
--------------------

Interactive editor with:
- Canvas view of the laid-out mindmap and a tree outline
- Keyboard editing (Tab, Enter, Delete, F2, arrows)
- Copy as text (Ctrl+S), paste-import (Ctrl+O), CSV export
- Reset and layout direction switch behind a confirmation dialog
"""

from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.widgets import Button, Footer, Input, Static

from ..Tools.Mind_Map.layout_adapter import LayoutAdapter, LayoutSettings
from ..Tools.Mind_Map.mindmap_exporter import CSV_FILENAME
from ..Tools.Mind_Map.mindmap_graph import DEFAULT_LABEL, ROOT_ID, Direction, LayoutOrientation, PositionedNode
from ..Tools.Mind_Map.mindmap_model import ORIENTATION_PROMPT, MindmapModel
from ..Tools.Mind_Map.mindmap_renderer import MindmapRenderer
from ..Tools.Mind_Map.tree_operations import RESET_PROMPT
from ..Widgets.ad_slot import AdBanner, AdSlot
from ..Widgets.discard_dialog import DiscardMindmapDialog
from ..Widgets.import_dialog import ImportDialog


HELP_TEXT = """\
Edit label      F2
Add child       Tab
Add sibling     Enter
Delete node     Delete
Move selection  ← ↑ → ↓
Copy as text    Ctrl+S
Paste import    Ctrl+O"""


class MindmapCanvas(Static, can_focus=True):
    """Focusable canvas; its bindings are live only while it has focus"""

    BINDINGS = [
        Binding("tab", "app.insert_child", "Add child"),
        Binding("enter", "app.insert_sibling", "Add sibling"),
        Binding("delete", "app.delete_subtree", "Delete"),
        Binding("backspace", "app.delete_subtree", "Delete", show=False),
        Binding("f2", "app.edit_label", "Edit"),
        Binding("up", "app.navigate('up')", "Up", show=False),
        Binding("down", "app.navigate('down')", "Down", show=False),
        Binding("left", "app.navigate('left')", "Left", show=False),
        Binding("right", "app.navigate('right')", "Right", show=False),
        Binding("ctrl+s", "app.export_text", "Copy text"),
        Binding("ctrl+o", "app.open_import", "Import"),
    ]


class MindmapEditorApp(App):
    """Mindmap editor application"""

    CSS = """
    #main {
        height: 1fr;
    }

    #mindmap-display {
        width: 3fr;
        border: round $background-darken-1;
        background: $boost;
        padding: 1;
    }

    #side-panel {
        width: 1fr;
        min-width: 28;
    }

    #tree-view, #help-panel {
        border: round $background-darken-1;
        padding: 0 1;
        height: auto;
    }

    #label-editor {
        display: none;
    }

    #label-editor.visible {
        display: block;
    }

    .control-panel {
        height: 3;
    }

    .control-panel Button {
        min-width: 8;
        margin-right: 1;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
        background: $panel;
        color: $text-muted;
    }
    """

    TITLE = "Mindmap Editor"

    BINDINGS = [
        Binding("escape", "cancel_edit", "Cancel edit", show=False),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self,
                 settings: Optional[LayoutSettings] = None,
                 orientation: LayoutOrientation = LayoutOrientation.HORIZONTAL,
                 default_label: str = DEFAULT_LABEL,
                 reset_on_orientation_change: bool = True,
                 export_dir: Path = Path("."),
                 csv_filename: str = CSV_FILENAME,
                 ad_slot: Optional[AdSlot] = None,
                 on_orientation_change: Optional[Callable[[LayoutOrientation], None]] = None,
                 **kwargs):
        super().__init__(**kwargs)
        self.export_dir = Path(export_dir)
        self.csv_filename = csv_filename
        self.ad_slot = ad_slot
        self.on_orientation_change = on_orientation_change
        self.editing_node_id: Optional[str] = None
        self.model = MindmapModel(
            layout_adapter=LayoutAdapter(settings=settings, fit_view=self._request_fit_view),
            orientation=orientation,
            default_label=default_label,
            reset_on_orientation_change=reset_on_orientation_change,
            notify=self._warn,
        )
        self.renderer = MindmapRenderer(self.model)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="control-panel"):
            yield Button("+", id="add-child")
            yield Button("Copy", id="copy-text")
            yield Button("Paste", id="import-text")
            yield Button("Reset", id="reset-all", variant="error")
            yield Button("CSV", id="export-csv")
            yield Button(self._orientation_symbol(), id="toggle-orientation")
        with Horizontal(id="main"):
            with Vertical(id="mindmap-area"):
                yield ScrollableContainer(MindmapCanvas(id="mindmap-canvas"), id="mindmap-display")
                yield Input(placeholder="Label", id="label-editor")
            with Vertical(id="side-panel"):
                yield Static(id="tree-view")
                yield Static(HELP_TEXT, id="help-panel")
                if self.ad_slot is not None:
                    yield AdBanner(self.ad_slot, id="ad-banner")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.canvas = self.query_one(MindmapCanvas)
        self.display_area = self.query_one("#mindmap-display", ScrollableContainer)
        self.tree_view = self.query_one("#tree-view", Static)
        self.status_bar = self.query_one("#status-bar", Static)
        self.orientation_button = self.query_one("#toggle-orientation", Button)
        self.label_editor = self.query_one("#label-editor", Input)

        self.model.select(ROOT_ID)
        self.refresh_view()
        self.canvas.focus()

    # --- Collaborator hooks ----------------------------------------------------

    def _warn(self, message: str) -> None:
        self.notify(message, severity="warning")

    def _request_fit_view(self, positioned: List[PositionedNode]) -> None:
        if not self.is_running:
            return
        self.call_after_refresh(self._fit_view)

    def _fit_view(self) -> None:
        self.display_area.scroll_home(animate=False)

    def _orientation_symbol(self) -> str:
        return "→" if self.model.orientation is LayoutOrientation.HORIZONTAL else "↓"

    # --- Rendering ---------------------------------------------------------------

    def refresh_view(self) -> None:
        """Redraw canvas, tree outline and status bar from the model"""
        self.canvas.update(self.renderer.render_canvas())
        self.tree_view.update(self.renderer.render_tree_view())
        self.orientation_button.label = self._orientation_symbol()

        stats = self.model.get_statistics()
        status = f"Nodes: {stats['total_nodes']} | Depth: {stats['max_depth']} | Layout: {stats['orientation']}"
        selected = self.model.store.get_node(self.model.selected_id) if self.model.selected_id else None
        if selected is not None:
            status += f" | Selected: {selected.label[:30]}"
        self.status_bar.update(status)

        node_id = self.model.consume_edit_request()
        if node_id is not None:
            self._open_label_editor(node_id)

    def _open_label_editor(self, node_id: str) -> None:
        node = self.model.store.get_node(node_id)
        if node is None:
            return
        self.editing_node_id = node_id
        editor = self.label_editor
        editor.value = node.label
        editor.add_class("visible")
        editor.focus()

    def _close_label_editor(self) -> None:
        self.editing_node_id = None
        editor = self.label_editor
        editor.remove_class("visible")
        self.canvas.focus()

    # --- Actions -----------------------------------------------------------------

    def action_insert_child(self) -> None:
        if self.model.add_child() is not None:
            self.refresh_view()

    def action_insert_sibling(self) -> None:
        if self.model.add_sibling() is not None:
            self.refresh_view()

    def action_delete_subtree(self) -> None:
        if self.model.selected_id is None:
            return
        if self.model.delete_subtree() is not None:
            self.refresh_view()

    def action_edit_label(self) -> None:
        if self.model.request_edit():
            self.refresh_view()

    def action_navigate(self, direction: str) -> None:
        if self.model.navigate(Direction(direction)):
            self.refresh_view()

    def action_cancel_edit(self) -> None:
        if self.editing_node_id is not None:
            self._close_label_editor()

    def action_export_text(self) -> None:
        text = self.model.export_text()
        self.copy_to_clipboard(text)
        self.notify("Mindmap data copied to the clipboard.")

    def action_open_import(self) -> None:
        self.push_screen(ImportDialog(), callback=self._finish_import)

    def _finish_import(self, text: Optional[str]) -> None:
        if text is None:
            return
        if self.model.import_text(text):
            self.model.select(ROOT_ID)
            self.refresh_view()
            self.notify("Mindmap loaded.")

    def action_reset_all(self) -> None:
        self.push_screen(DiscardMindmapDialog(RESET_PROMPT, len(self.model.store), title="Reset"),
                         callback=self._finish_reset)

    def _finish_reset(self, confirmed: Optional[bool]) -> None:
        if self.model.reset(lambda _prompt: bool(confirmed)):
            self.model.select(ROOT_ID)
            self.refresh_view()

    def action_toggle_orientation(self) -> None:
        if not self.model.reset_on_orientation_change:
            self._finish_toggle(True)
            return
        self.push_screen(DiscardMindmapDialog(ORIENTATION_PROMPT, len(self.model.store), title="Layout direction"),
                         callback=self._finish_toggle)

    def _finish_toggle(self, confirmed: Optional[bool]) -> None:
        if self.model.toggle_orientation(lambda _prompt: bool(confirmed)):
            if self.on_orientation_change is not None:
                self.on_orientation_change(self.model.orientation)
            if self.model.selected_id is None:
                self.model.select(ROOT_ID)
            self.refresh_view()

    def action_export_csv(self) -> None:
        path = self.model.save_csv(self.export_dir, self.csv_filename)
        if path is not None:
            self.notify(f"Saved {path}")

    # --- Event handlers ------------------------------------------------------------

    @on(Input.Submitted, "#label-editor")
    def handle_label_submitted(self, event: Input.Submitted) -> None:
        if self.editing_node_id is not None:
            self.model.rename(self.editing_node_id, event.value)
            logger.debug(f"Label committed for {self.editing_node_id}")
        self._close_label_editor()
        self.refresh_view()

    @on(Button.Pressed)
    def handle_button_press(self, event: Button.Pressed) -> None:
        """Handle control panel buttons"""
        button_id = event.button.id

        if button_id == "add-child":
            self.action_insert_child()
        elif button_id == "copy-text":
            self.action_export_text()
        elif button_id == "import-text":
            self.action_open_import()
        elif button_id == "reset-all":
            self.action_reset_all()
        elif button_id == "export-csv":
            self.action_export_csv()
        elif button_id == "toggle-orientation":
            self.action_toggle_orientation()

        if button_id in ("add-child", "copy-text", "export-csv"):
            self.canvas.focus()
