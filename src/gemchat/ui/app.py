"""Main Textual TUI application.

Wires the chat screen to a ChatSession: the input bar submits prompts,
the history store pushes every change to the chat list, failures show
up as toasts and voice input fills the prompt from a transcribed clip.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import DEFAULT_QUEUE_SIZE, SPEECH_UNAVAILABLE_MESSAGE
from ..errors import PromptValidationError, SessionBusyError, TranscriptionError
from ..history import ChatHistoryStore, HistoryChange
from ..llm import LLMProvider
from ..session import ChatSession, SessionState
from ..speech import SpeechToText, first_transcript
from .config import DEFAULT_VOICE_CLIP, ERROR_TOAST_TIMEOUT, INFO_TOAST_TIMEOUT, LogLevel
from .log_handler import PanelLogHandler
from .screens import VoiceClipScreen
from .styles import APP_CSS
from .themes import GEMCHAT_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

logger = logging.getLogger(__name__)

_STATE_LABELS = {
    SessionState.IDLE: "ready",
    SessionState.AWAITING_REPLY: "waiting for reply...",
    SessionState.RESOLVED: "reply received",
    SessionState.FAILED: "request failed",
}


class ChatApp(App):
    """Textual TUI for chatting with Gemini."""

    CSS = APP_CSS
    TITLE = "gemchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "voice_input", "Voice", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Reply", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        store: ChatHistoryStore,
        llm: LLMProvider,
        speech: SpeechToText | None = None,
        log_level: str | None = None,
        voice_clip: str = DEFAULT_VOICE_CLIP,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ) -> None:
        super().__init__()
        self._store = store
        self._llm = llm
        self._speech = speech
        self._log_level = log_level
        self._voice_clip = voice_clip
        self._session = ChatSession(
            store,
            llm,
            on_error=self._notify_error,
            on_state_change=self._on_state_change,
            queue_size=queue_size,
        )
        self._unsubscribe = None
        self._log_handler: PanelLogHandler | None = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Load history and start the session once widgets exist."""
        self.register_theme(GEMCHAT_DARK)
        self.theme = "gemchat-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
        self._log_handler = PanelLogHandler(log_panel)
        package_logger = logging.getLogger("gemchat")
        package_logger.addHandler(self._log_handler)
        package_logger.setLevel(log_panel.log_level)

        self._unsubscribe = self._store.subscribe(self._on_history_change)
        await self._session.start()

        self._on_state_change(self._session.state)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()
        logger.info("TUI ready")

    async def on_unmount(self) -> None:
        """Stop the session and release providers."""
        if self._log_handler is not None:
            logging.getLogger("gemchat").removeHandler(self._log_handler)
            self._log_handler = None

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        await self._session.close()
        if self._speech is not None:
            await self._speech.close()

    def _on_history_change(self, change: HistoryChange) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        if change.entry is None:
            chat.set_entries(change.entries)
        else:
            chat.add_entry(change.entry)

    def _on_state_change(self, state: SessionState) -> None:
        self.sub_title = f"{self._llm.model} | {_STATE_LABELS[state]}"

    def _notify_error(self, message: str) -> None:
        self.notify(message, severity="error", timeout=ERROR_TOAST_TIMEOUT)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle prompt submission."""
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        try:
            self._session.submit(event.value)
        except PromptValidationError as e:
            input_bar.show_error(str(e))
            return
        except SessionBusyError as e:
            self.notify(str(e), severity="warning", timeout=ERROR_TOAST_TIMEOUT)
            return
        input_bar.clear()

    def on_chat_input_bar_voice_requested(self, event: ChatInputBar.VoiceRequested) -> None:
        self.action_voice_input()

    def action_voice_input(self) -> None:
        """Ask for an audio clip and put its transcript in the input."""
        if self._speech is None:
            self.notify(SPEECH_UNAVAILABLE_MESSAGE, severity="error", timeout=INFO_TOAST_TIMEOUT)
            return

        def on_dismiss(path: str | None) -> None:
            if path:
                self._voice_clip = path
                self._transcribe(path)

        self.push_screen(VoiceClipScreen(self._voice_clip), on_dismiss)

    @work(exclusive=True, group="speech")
    async def _transcribe(self, path: str) -> None:
        """Transcribe a clip as a background async worker."""
        assert self._speech is not None
        try:
            results = await self._speech.transcribe(path)
        except TranscriptionError as e:
            logger.warning("Transcription failed: %s", e)
            self.notify(SPEECH_UNAVAILABLE_MESSAGE, severity="error", timeout=ERROR_TOAST_TIMEOUT)
            return

        text = first_transcript(results)
        if text is None:
            self.notify("No speech recognized", severity="warning", timeout=INFO_TOAST_TIMEOUT)
            return

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.value = text
        input_bar.focus_input()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=INFO_TOAST_TIMEOUT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant reply to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Reply copied", timeout=INFO_TOAST_TIMEOUT)
        else:
            self.notify("No reply to copy", severity="warning", timeout=INFO_TOAST_TIMEOUT)


async def run_textual_tui(
    store: ChatHistoryStore,
    llm: LLMProvider,
    speech: SpeechToText | None = None,
    log_level: str | None = None,
    voice_clip: str = DEFAULT_VOICE_CLIP,
    queue_size: int = DEFAULT_QUEUE_SIZE,
) -> None:
    """Run the Textual TUI.

    Args:
        store: History store backing the chat list
        llm: LLM provider answering prompts
        speech: Speech-to-text backend for voice input, None to disable
        log_level: Log level for panel (debug/info/warning/error), None to hide
        voice_clip: Clip path offered by the voice dialog
        queue_size: Maximum number of prompts waiting for a reply
    """
    app = ChatApp(
        store=store,
        llm=llm,
        speech=speech,
        log_level=log_level,
        voice_clip=voice_clip,
        queue_size=queue_size,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
