from enum import Enum


class SessionState(str, Enum):
    """Where the session is in the current turn."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    RESOLVED = "resolved"
    FAILED = "failed"
