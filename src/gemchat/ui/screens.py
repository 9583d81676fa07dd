"""Modal screens for the TUI.

This module hides the design decisions about:
- How the voice dialog looks and which keys drive it
- How the chosen audio clip is handed back to the app
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class VoiceClipScreen(ModalScreen[str | None]):
    """Asks for the audio clip to transcribe.

    Dismisses with the entered path, or None when cancelled.
    """

    CSS = """
    VoiceClipScreen {
        align: center middle;
        background: $background 70%;
    }

    #voice-dialog {
        width: 64;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #voice-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }

    #voice-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #voice-buttons Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, default_path: str = "") -> None:
        super().__init__()
        self._default_path = default_path

    def compose(self) -> ComposeResult:
        with Vertical(id="voice-dialog"):
            yield Static("Speak your query", id="voice-title")
            yield Input(
                value=self._default_path,
                placeholder="Path to a recorded clip (.wav, .mp3, ...)",
                id="voice-path",
            )
            with Horizontal(id="voice-buttons"):
                yield Button("Transcribe", id="btn-transcribe", variant="primary")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#voice-path", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._finish(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-transcribe":
            self._finish(self.query_one("#voice-path", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _finish(self, value: str) -> None:
        path = value.strip()
        self.dismiss(path or None)
