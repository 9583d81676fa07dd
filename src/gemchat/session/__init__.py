"""Chat session module for gemchat."""

from .session import ChatSession
from .state import SessionState

__all__ = ["ChatSession", "SessionState"]
