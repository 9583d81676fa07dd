"""Abstract base class for speech-to-text backends.

The abstraction hides which recognizer turns an audio clip into text.
A recognizer returns zero or one transcripts; the chat screen copies the
first one into the prompt input unchanged.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path


class SpeechToText(ABC):
    """Turns recorded speech into prompt text."""

    @abstractmethod
    async def transcribe(self, audio_path: str | Path) -> list[str]:
        """Transcribe an audio clip.

        Args:
            audio_path: Path to the recorded clip

        Returns:
            Zero or one transcripts

        Raises:
            TranscriptionError: If the clip cannot be read or recognized
        """

    async def close(self) -> None:
        """Release recognizer resources."""


def first_transcript(results: Sequence[str] | None) -> str | None:
    """Return the first non-empty transcript, if any."""
    if not results:
        return None
    for result in results:
        if result:
            return result
    return None
