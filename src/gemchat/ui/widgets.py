"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat entry rendering (one style per role)
- Prompt input with inline validation error
- Log rendering and level filtering
"""

from datetime import datetime

from rich.markup import escape
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..history import ChatEntry, Role
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel

_ROLE_STYLES = {
    Role.USER: ("You", "user-message", ">"),
    Role.ASSISTANT: ("Gemini", "assistant-message", "<"),
    Role.ERROR: ("Error", "error-message", "!"),
}


class ChatHistoryWidget(VerticalScroll):
    """Scrollable list of chat entries.

    Holds only a snapshot of the history for display; the store owns
    the canonical list and pushes changes here.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._entries: tuple[ChatEntry, ...] = ()

    @property
    def entries(self) -> tuple[ChatEntry, ...]:
        return self._entries

    def set_entries(self, entries: tuple[ChatEntry, ...]) -> None:
        """Replace everything shown with a new snapshot."""
        self._entries = tuple(entries)
        self.remove_children()
        for entry in self._entries:
            self._render_entry(entry)
        self._update_subtitle()
        self.scroll_end(animate=False)

    def add_entry(self, entry: ChatEntry) -> None:
        """Show one appended entry and scroll to it."""
        self._entries = self._entries + (entry,)
        self._render_entry(entry)
        self._update_subtitle()
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant reply."""
        for entry in reversed(self._entries):
            if entry.role == Role.ASSISTANT:
                return entry.text
        return None

    def _update_subtitle(self) -> None:
        count = len(self._entries)
        self.border_subtitle = f"{count} messages" if count else "Conversation history"

    def _render_entry(self, entry: ChatEntry) -> None:
        prefix, border_class, icon = _ROLE_STYLES[entry.role]
        container = Vertical(classes=f"chat-message {border_class}")
        container.compose_add_child(Static(f"{icon} {prefix}", classes="message-header"))

        if entry.role == Role.ASSISTANT:
            container.compose_add_child(Markdown(entry.text, classes="message-content"))
        else:
            # markup=False: prompts and error messages are shown verbatim
            container.compose_add_child(
                Static(entry.text, markup=False, classes="message-content")
            )

        self.mount(container)


class ChatInputBar(Vertical):
    """Prompt input with mic and send buttons and an inline error line."""

    class Submitted(Message):
        """Message sent when the user submits the prompt."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class VoiceRequested(Message):
        """Message sent when the user presses the mic button."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._error: str | None = None

    def compose(self):
        with Horizontal(id="input-row"):
            yield Input(placeholder="Ask Gemini...", id="chat-input")
            yield Button("Mic", id="mic-btn").with_tooltip("Transcribe an audio clip (Ctrl+T)")
            yield Button("Send", id="send-btn", variant="success").with_tooltip("Send (Enter)")
        yield Static("", id="input-error")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.value.strip():
            self.clear_error()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self.post_message(self.Submitted(self.value))
        elif event.button.id == "mic-btn":
            self.post_message(self.VoiceRequested())

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", Input).value

    @value.setter
    def value(self, text: str) -> None:
        text_input = self.query_one("#chat-input", Input)
        text_input.value = text
        text_input.cursor_position = len(text)

    def clear(self) -> None:
        """Empty the input and hide any error."""
        self.value = ""
        self.clear_error()

    def show_error(self, message: str) -> None:
        """Show an inline validation error under the input."""
        self.query_one("#chat-input", Input).add_class("-invalid")
        self._error = message
        error = self.query_one("#input-error", Static)
        error.update(message)
        error.add_class("-visible")

    def clear_error(self) -> None:
        self._error = None
        self.query_one("#chat-input", Input).remove_class("-invalid")
        self.query_one("#input-error", Static).remove_class("-visible")

    @property
    def error_text(self) -> str | None:
        """Currently shown validation error, if any."""
        return self._error

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()


class DebugPanel(RichLog):
    """Log panel with level filtering.

    Shows timestamped log records from all components.
    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_line(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log line if it meets the current level threshold.

        Args:
            component: Component name (store, session, gemini, app, ...)
            message: Log message
            level: Standard logging level
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        level_color = level_colors.get(min(level, LogLevel.ERROR), "white")
        level_name = LogLevel.name(level)

        component_colors = {
            "app": "cyan",
            "store": "bright_green",
            "codec": "green",
            "session": "magenta",
            "gemini": "bright_blue",
        }
        comp_color = component_colors.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level_name:<7}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
