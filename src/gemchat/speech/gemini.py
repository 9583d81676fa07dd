"""Gemini-backed speech-to-text.

Sends the audio clip inline with a transcription instruction and treats
the model's text reply as the transcript.
"""

import mimetypes
from pathlib import Path
from typing import Any

from google import genai
from google.genai import errors, types

from ..config import DEFAULT_MODEL, TRANSCRIPTION_PROMPT
from ..errors import TranscriptionError
from ..llm.providers.gemini import describe_api_error, extract_text
from .base import SpeechToText

# Formats Gemini accepts for inline audio
AUDIO_MIME_TYPES = {
    ".wav": "audio/wav",
    ".mp3": "audio/mp3",
    ".aiff": "audio/aiff",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}


def guess_audio_mime_type(path: Path) -> str:
    """Pick the MIME type for an audio file from its extension."""
    mime_type = AUDIO_MIME_TYPES.get(path.suffix.lower())
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("audio/"):
        raise TranscriptionError(f"Unsupported audio format: {path.suffix or path.name}")
    return mime_type


class GeminiSpeechToText(SpeechToText):
    """Transcribes audio clips with a Gemini model."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    async def transcribe(self, audio_path: str | Path) -> list[str]:
        path = Path(audio_path).expanduser()
        mime_type = guess_audio_mime_type(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise TranscriptionError(f"Cannot read {path}: {e}") from e

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=[
                    types.Part.from_bytes(data=data, mime_type=mime_type),
                    TRANSCRIPTION_PROMPT,
                ],
            )
        except errors.APIError as e:
            raise TranscriptionError(describe_api_error(e)) from e

        text = (extract_text(response) or "").strip()
        return [text] if text else []

    async def close(self) -> None:
        aclose = getattr(self._client.aio, "aclose", None)
        if aclose is not None:
            await aclose()
