"""Application-wide constants.

Centralizes the values that must match previously persisted data and the
user-visible strings of the chat screen.
"""

# Persisted encoding - must stay bit-exact with existing preference files
FIELD_DELIMITER = "||"
RECORD_DELIMITER = "##"

# Preferences slot holding the whole serialized history
PREFS_NAME = "chat_prefs"
HISTORY_KEY = "chat_data"
DEFAULT_PREFS_DIR = "~/.gemchat"

# Gemini defaults
DEFAULT_MODEL = "gemini-2.5-flash"

# Session configuration
DEFAULT_QUEUE_SIZE = 8  # Pending prompts before submit() refuses new ones

# User-visible text
NO_TEXT_RESPONSE = "No text response received."
EMPTY_PROMPT_MESSAGE = "Field cannot be empty"
SPEECH_UNAVAILABLE_MESSAGE = "Speech recognition not available."
TRANSCRIPTION_PROMPT = (
    "Transcribe the speech in this audio clip verbatim. "
    "Reply with the transcript only, without quotes or commentary. "
    "If there is no intelligible speech, reply with nothing."
)
