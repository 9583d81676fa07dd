"""Speech-to-text module for gemchat."""

from .base import SpeechToText, first_transcript
from .gemini import GeminiSpeechToText

__all__ = ["GeminiSpeechToText", "SpeechToText", "first_transcript"]
