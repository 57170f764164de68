# import_dialog.py
# Description: Modal dialog for pasting mindmap text back in
#
# Imports
from typing import Optional
#
# 3rd-Party Imports
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static, TextArea
#
#######################################################################################################################
#
# Classes:

class ImportDialog(ModalScreen[Optional[str]]):
    """
    Paste box for structural mindmap text.

    Dismisses with the pasted text, or None when cancelled.
    """

    DEFAULT_CSS = """
    ImportDialog {
        align: center middle;
    }

    ImportDialog > Container {
        width: 80%;
        height: 70%;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }

    ImportDialog .dialog-title {
        text-style: bold;
        margin-bottom: 1;
        width: 100%;
        text-align: center;
    }

    ImportDialog #import-text {
        height: 1fr;
    }

    ImportDialog .button-container {
        align: center middle;
        height: 3;
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Container():
            yield Static("Paste mindmap data", classes="dialog-title")
            yield TextArea(id="import-text")
            with Horizontal(classes="button-container"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Load", id="load-button", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#import-text", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "load-button":
            self.dismiss(self.query_one("#import-text", TextArea).text)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)

#
# End of import_dialog.py
#######################################################################################################################
