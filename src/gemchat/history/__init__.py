"""Chat history module for gemchat.

Provides the ordered entry log, its flat persisted encoding and the
preference storage it is written to.
"""

from .codec import decode_history, encode_history, sanitize
from .models import ChatEntry, Role
from .storage import (
    InMemoryPreferences,
    JsonFilePreferences,
    KeyValueStorage,
    create_key_value_storage,
)
from .store import ChatHistoryStore, HistoryChange

__all__ = [
    "ChatEntry",
    "ChatHistoryStore",
    "HistoryChange",
    "InMemoryPreferences",
    "JsonFilePreferences",
    "KeyValueStorage",
    "Role",
    "create_key_value_storage",
    "decode_history",
    "encode_history",
    "sanitize",
]
