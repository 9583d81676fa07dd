"""Exception hierarchy for gemchat.

Every error a caller may need to tell apart derives from GemchatError.
Malformed persisted records are not represented here: they are dropped
while decoding and never raised.
"""


class GemchatError(Exception):
    """Base exception for gemchat errors."""


class PromptValidationError(GemchatError, ValueError):
    """Raised when a submitted prompt is empty or whitespace only."""


class SessionBusyError(GemchatError):
    """Raised when the session request queue is full."""


class RemoteCallError(GemchatError):
    """Raised when the remote generation call fails."""


class StorageUnavailableError(GemchatError):
    """Raised by storage backends when the preferences slot cannot be read or written."""


class TranscriptionError(GemchatError):
    """Raised when speech-to-text fails."""
