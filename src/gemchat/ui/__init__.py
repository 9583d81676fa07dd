"""Terminal UI module for gemchat.

Provides a Textual-based chat screen.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (chat list, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- screens.py: Modal dialogs (voice clip selection)
- log_handler.py: How logging records reach the log panel
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "run_textual_tui",
]
