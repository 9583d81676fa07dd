"""Data models for chat history.

These models define one recorded turn of the conversation, independent of
how the history is encoded or where it is stored.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Labels written to persisted history; must match existing preference files
_LABELS = {
    "user": "User:",
    "assistant": "Bot:",
    "error": "Error",
}

# Lenient lookup for labels read back from storage
_LABEL_ALIASES = {
    "user": "user",
    "bot": "assistant",
    "assistant": "assistant",
    "model": "assistant",
    "error": "error",
}


class Role(str, Enum):
    """Who produced a chat entry."""

    USER = "user"
    ASSISTANT = "assistant"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Label used in the persisted encoding."""
        return _LABELS[self.value]

    @classmethod
    def from_label(cls, label: str) -> "Role | None":
        """Resolve a persisted label to a role.

        Matching ignores case, surrounding whitespace and a trailing colon,
        so "User:", "User" and "user" all resolve to USER.

        Returns:
            The matching role, or None if the label is unknown
        """
        key = label.strip().rstrip(":").strip().lower()
        value = _LABEL_ALIASES.get(key)
        return cls(value) if value is not None else None


class ChatEntry(BaseModel):
    """One turn in the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who produced the entry")
    text: str = Field(default="", description="Entry text; empty only for legacy records")

    @classmethod
    def user(cls, text: str) -> "ChatEntry":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "ChatEntry":
        return cls(role=Role.ASSISTANT, text=text)

    @classmethod
    def error(cls, text: str) -> "ChatEntry":
        return cls(role=Role.ERROR, text=text)
