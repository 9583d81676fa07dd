"""Tests for the command-line interface."""
import json

import pytest
from typer.testing import CliRunner

from gemchat.cli import app as cli_module
from gemchat.cli.app import app
from gemchat.cli.providers import get_queue_size, get_store
from gemchat.errors import RemoteCallError, TranscriptionError
from gemchat.history import InMemoryPreferences, JsonFilePreferences

runner = CliRunner()


@pytest.fixture
def prefs_file(tmp_path, monkeypatch):
    """Point the file backend at a temporary preferences file."""
    monkeypatch.delenv("GEMCHAT_STORAGE", raising=False)
    monkeypatch.delenv("GEMCHAT_PREFS_PATH", raising=False)
    return tmp_path / "chat_prefs.json"


@pytest.fixture
def use_fake_llm(monkeypatch, fake_llm):
    monkeypatch.setattr(cli_module, "require_llm", lambda console=None: fake_llm)
    return fake_llm


class TestProviders:
    """Tests for environment-driven construction."""

    def test_store_uses_prefs_path(self, prefs_file):
        store = get_store(str(prefs_file))

        assert isinstance(store.storage, JsonFilePreferences)
        assert store.storage.path == prefs_file

    def test_store_prefs_path_from_env(self, prefs_file, monkeypatch):
        monkeypatch.setenv("GEMCHAT_PREFS_PATH", str(prefs_file))

        assert get_store().storage.path == prefs_file

    def test_memory_backend(self, monkeypatch):
        monkeypatch.setenv("GEMCHAT_STORAGE", "memory")

        assert isinstance(get_store().storage, InMemoryPreferences)

    @pytest.mark.parametrize("raw,expected", [("3", 3), ("", 8), ("zero", 8), ("0", 8)])
    def test_queue_size(self, monkeypatch, raw, expected):
        monkeypatch.setenv("GEMCHAT_QUEUE_SIZE", raw)

        assert get_queue_size() == expected


class TestHistoryCommand:
    """Tests for `gemchat history`."""

    def test_empty_history(self, prefs_file):
        result = runner.invoke(app, ["history", "--prefs", str(prefs_file)])

        assert result.exit_code == 0
        assert "No chat history" in result.output

    def test_lists_entries(self, prefs_file):
        prefs_file.write_text(json.dumps({"chat_data": "User:||Hello##Bot:||Hi there##"}))

        result = runner.invoke(app, ["history", "--prefs", str(prefs_file)])

        assert result.exit_code == 0
        assert "Hello" in result.output
        assert "Hi there" in result.output
        assert "2 entries" in result.output

    def test_limit(self, prefs_file):
        prefs_file.write_text(json.dumps({"chat_data": "User:||first##Bot:||second##"}))

        result = runner.invoke(app, ["history", "--prefs", str(prefs_file), "-n", "1"])

        assert result.exit_code == 0
        assert "first" not in result.output
        assert "second" in result.output


class TestAskCommand:
    """Tests for `gemchat ask`."""

    def test_prints_reply_and_persists(self, prefs_file, use_fake_llm):
        use_fake_llm.replies = ["Hi there"]

        result = runner.invoke(app, ["ask", "Hello", "--prefs", str(prefs_file)])

        assert result.exit_code == 0
        assert "Gemini: Hi there" in result.output
        stored = json.loads(prefs_file.read_text())
        assert stored["chat_data"] == "User:||Hello##Bot:||Hi there##"
        assert use_fake_llm.closed

    def test_remote_failure(self, prefs_file, use_fake_llm):
        use_fake_llm.replies = [RemoteCallError("timeout")]

        result = runner.invoke(app, ["ask", "Hello", "--prefs", str(prefs_file)])

        assert result.exit_code == 1
        assert "Error: timeout" in result.output
        assert not prefs_file.exists()

    def test_blank_prompt(self, prefs_file, use_fake_llm):
        result = runner.invoke(app, ["ask", "   ", "--prefs", str(prefs_file)])

        assert result.exit_code == 2
        assert "Field cannot be empty" in result.output
        assert use_fake_llm.prompts == []

    def test_missing_api_key(self, prefs_file, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        result = runner.invoke(app, ["ask", "Hello", "--prefs", str(prefs_file)])

        assert result.exit_code == 1
        assert "LLM provider not configured" in result.output


class TestTranscribeCommand:
    """Tests for `gemchat transcribe`."""

    @pytest.fixture
    def clip(self, tmp_path):
        path = tmp_path / "voice.wav"
        path.write_bytes(b"RIFF\x00\x00\x00\x00WAVE")
        return path

    @pytest.fixture
    def use_fake_speech(self, monkeypatch, fake_speech):
        monkeypatch.setattr(cli_module, "get_speech", lambda: fake_speech)
        return fake_speech

    def test_prints_first_transcript(self, clip, use_fake_speech):
        use_fake_speech.results = ["what time is it", "what time is hit"]

        result = runner.invoke(app, ["transcribe", str(clip)])

        assert result.exit_code == 0
        assert "what time is it" in result.output
        assert "hit" not in result.output
        assert use_fake_speech.paths == [str(clip)]
        assert use_fake_speech.closed

    def test_nothing_recognized(self, clip, use_fake_speech):
        result = runner.invoke(app, ["transcribe", str(clip)])

        assert result.exit_code == 1
        assert "No speech recognized" in result.output
        assert use_fake_speech.closed

    def test_transcription_error(self, clip, use_fake_speech):
        use_fake_speech.error = TranscriptionError("bad audio")

        result = runner.invoke(app, ["transcribe", str(clip)])

        assert result.exit_code == 1
        assert "Error: bad audio" in result.output
        assert use_fake_speech.closed

    def test_missing_api_key(self, clip, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        result = runner.invoke(app, ["transcribe", str(clip)])

        assert result.exit_code == 1
        assert "GEMINI_API_KEY not set" in result.output
