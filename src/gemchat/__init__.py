"""
gemchat: a small Gemini chat client with persistent, flat-file history.

Each module hides one design decision:
- history: entry representation, the delimiter encoding, where history is kept
- llm: which generative API answers prompts
- session: how a prompt becomes a turn (ordering, pending and error states)
- speech: how audio becomes prompt text
"""

__version__ = "0.1.0"

from .errors import (
    GemchatError,
    PromptValidationError,
    RemoteCallError,
    SessionBusyError,
    StorageUnavailableError,
    TranscriptionError,
)
from .history import ChatEntry, ChatHistoryStore, Role
from .session import ChatSession, SessionState

__all__ = [
    "ChatEntry",
    "ChatHistoryStore",
    "ChatSession",
    "GemchatError",
    "PromptValidationError",
    "RemoteCallError",
    "Role",
    "SessionBusyError",
    "SessionState",
    "StorageUnavailableError",
    "TranscriptionError",
]
