# discard_dialog.py
# Description: Modal asking before an action throws the current mindmap away
#
# Imports
#
# 3rd-Party Imports
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static
#
#######################################################################################################################
#
# Classes:

class DiscardMindmapDialog(ModalScreen[bool]):
    """
    Asks before reset or a resetting layout switch.

    Dismisses with True to go ahead and False to keep the mindmap. Y and N
    answer from the keyboard, Escape keeps the mindmap.
    """

    DEFAULT_CSS = """
    DiscardMindmapDialog {
        align: center middle;
    }

    DiscardMindmapDialog > Vertical {
        width: 56;
        height: auto;
        border: heavy $error;
        background: $surface;
        padding: 1 2;
    }

    DiscardMindmapDialog #discard-title {
        text-style: bold;
        width: 100%;
        content-align: center middle;
    }

    DiscardMindmapDialog #discard-summary {
        color: $text-muted;
        margin: 1 0;
    }

    DiscardMindmapDialog Horizontal {
        align: right middle;
        height: 3;
    }

    DiscardMindmapDialog Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes", show=False),
        Binding("n", "answer(False)", "No", show=False),
        Binding("escape", "answer(False)", "Keep", show=False),
    ]

    def __init__(self, prompt: str, node_count: int, title: str = "Discard mindmap?", **kwargs):
        super().__init__(**kwargs)
        self.prompt = prompt
        self.node_count = node_count
        self.dialog_title = title

    def summary(self) -> str:
        if self.node_count <= 1:
            return "Only the central node exists."
        return f"{self.node_count} nodes will be removed."

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.dialog_title, id="discard-title")
            yield Label(self.prompt, id="discard-prompt")
            yield Label(self.summary(), id="discard-summary")
            with Horizontal():
                yield Button("Keep (n)", id="cancel-button", variant="primary")
                yield Button("Discard (y)", id="confirm-button", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-button")

    def action_answer(self, discard: bool) -> None:
        self.dismiss(discard)

#
# End of discard_dialog.py
#######################################################################################################################
