"""Provider factory functions for CLI.

Centralizes creation of the history store, LLM and speech-to-text
instances from environment variables. Hides configuration details from
command implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..config import DEFAULT_MODEL, DEFAULT_QUEUE_SIZE
from ..history import ChatHistoryStore, create_key_value_storage
from ..llm import create_llm_provider

# Default console for output
_console = Console()


def get_store(prefs_path: str | None = None) -> ChatHistoryStore:
    """Create the history store from environment variables.

    Args:
        prefs_path: Preferences file, overrides GEMCHAT_PREFS_PATH

    Returns:
        History store over the configured preferences backend

    Environment variables:
        GEMCHAT_STORAGE: Backend type (file or memory; default: file)
        GEMCHAT_PREFS_PATH: Preferences file (default: ~/.gemchat/chat_prefs.json)
    """
    backend = os.getenv("GEMCHAT_STORAGE", "file").lower()
    config: dict[str, Any] = {}
    if backend == "file":
        path = prefs_path or os.getenv("GEMCHAT_PREFS_PATH")
        if path:
            config["path"] = path
    return ChatHistoryStore(create_key_value_storage(backend, **config))


def get_queue_size() -> int:
    """Read GEMCHAT_QUEUE_SIZE, falling back to the default on bad input."""
    raw = os.getenv("GEMCHAT_QUEUE_SIZE", "")
    return int(raw) if raw.isdigit() and int(raw) > 0 else DEFAULT_QUEUE_SIZE


def get_llm(console: Console | None = None) -> Any | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        GEMINI_API_KEY: Gemini API key (required)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, LLM features disabled[/yellow]")
        return None
    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    return create_llm_provider("gemini", api_key=api_key, model=model)


def require_llm(console: Console | None = None) -> Any:
    """Get LLM provider, raising error if not configured.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance

    Raises:
        SystemExit: If LLM provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def get_speech() -> Any | None:
    """Create the speech-to-text backend, or None if not configured.

    Uses the same GEMINI_API_KEY and GEMINI_MODEL as the chat provider.
    """
    from ..speech import GeminiSpeechToText

    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        return None
    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    return GeminiSpeechToText(api_key=api_key, model=model)
