"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from gemchat.history import ChatHistoryStore, InMemoryPreferences
from gemchat.llm import GenerationResult, LLMProvider
from gemchat.speech import SpeechToText


class FakeLLM(LLMProvider):
    """Scripted LLM provider.

    Each call pops the next item of `replies`: a string (or None) becomes
    the result text, an exception is raised. When `replies` runs out the
    prompt is echoed back. If `gate` is set, calls wait for it first.
    """

    def __init__(self, model: str = "fake-model") -> None:
        self._model = model
        self.replies: list[Any] = []
        self.prompts: list[str] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return self._model

    async def generate_content(self, prompt: str, model: str | None = None, **kwargs: Any) -> GenerationResult:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else f"echo: {prompt}"
        if isinstance(reply, BaseException):
            raise reply
        return GenerationResult(text=reply, model=model or self._model)

    async def close(self) -> None:
        self.closed = True


class FakeSpeech(SpeechToText):
    """Recognizer that returns scripted results, or raises `error` if set."""

    def __init__(self) -> None:
        self.results: list[str] = []
        self.error: Exception | None = None
        self.paths: list[str] = []
        self.closed = False

    async def transcribe(self, audio_path) -> list[str]:
        self.paths.append(str(audio_path))
        if self.error is not None:
            raise self.error
        return self.results

    async def close(self) -> None:
        self.closed = True


class RecordingPreferences(InMemoryPreferences):
    """In-memory preferences that remember every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def write(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().write(key, value)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def fake_llm():
    """Return a scripted LLM provider."""
    return FakeLLM()


@pytest.fixture
def prefs():
    """Return empty in-memory preferences that record writes."""
    return RecordingPreferences()


@pytest.fixture
def store(prefs):
    """Return a history store over the recording preferences."""
    return ChatHistoryStore(prefs)


@pytest.fixture
def fake_speech():
    """Return a scripted speech recognizer."""
    return FakeSpeech()
