"""Main CLI application using Typer."""
import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..errors import GemchatError, PromptValidationError
from ..history import Role
from ..session import ChatSession
from ..speech import first_transcript
from .providers import get_queue_size, get_speech, get_store, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="gemchat",
    help="Chat with Gemini from the terminal, with persistent history",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_ROLE_COLORS = {
    Role.USER: "yellow",
    Role.ASSISTANT: "green",
    Role.ERROR: "red",
}


def _configure_logging(log_level: str | None) -> None:
    """Send gemchat log records to stderr through Rich."""
    if log_level is None:
        return
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _log_level_option() -> str | None:
    return typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning or error (default: off)"
    )


def _prefs_option() -> str | None:
    return typer.Option(
        None,
        "--prefs",
        "-p",
        help="Preferences file holding the history (default: ~/.gemchat/chat_prefs.json)"
    )


@app.command(name="tui")
def tui_command(
    log_level: str | None = _log_level_option(),
    prefs: str | None = _prefs_option(),
    voice_clip: str = typer.Option(
        "voice.wav",
        "--voice-clip",
        help="Audio clip offered by the voice dialog"
    ),
):
    """Launch the interactive chat screen."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = require_llm(console)
        await run_textual_tui(
            store=get_store(prefs),
            llm=llm,
            speech=get_speech(),
            log_level=log_level,
            voice_clip=voice_clip,
            queue_size=get_queue_size(),
        )
        console.print("[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    log_level: str | None = _log_level_option(),
    prefs: str | None = _prefs_option(),
):
    """Send one prompt, print the reply and record the turn in history."""
    _configure_logging(log_level)

    async def _ask() -> bool:
        llm = require_llm(console)
        session = ChatSession(
            get_store(prefs),
            llm,
            on_error=lambda message: console.print(f"[red]{message}[/red]"),
            queue_size=get_queue_size(),
        )
        async with session:
            entry = await session.ask(prompt)

        if entry.role == Role.ERROR:
            return False
        console.print(f"[bold green]Gemini:[/bold green] {entry.text}")
        return True

    try:
        ok = asyncio.run(_ask())
    except PromptValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def history(
    prefs: str | None = _prefs_option(),
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        help="Show only the most recent N entries (0 shows all)"
    ),
):
    """Show the persisted chat history."""
    entries = get_store(prefs).load()
    if not entries:
        console.print("[yellow]No chat history[/yellow]")
        return

    shown = entries[-limit:] if limit > 0 else entries
    offset = len(entries) - len(shown)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Role")
    table.add_column("Text", overflow="fold")

    for i, entry in enumerate(shown, offset + 1):
        color = _ROLE_COLORS[entry.role]
        table.add_row(str(i), f"[{color}]{entry.role.label}[/{color}]", entry.text)

    console.print(table)
    console.print(f"[dim]{len(entries)} entries[/dim]")


@app.command()
def transcribe(
    audio: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Recorded audio clip"
    ),
    log_level: str | None = _log_level_option(),
):
    """Transcribe an audio clip and print the text."""
    _configure_logging(log_level)

    async def _transcribe() -> str | None:
        speech = get_speech()
        if speech is None:
            console.print("[red]Error: GEMINI_API_KEY not set[/red]")
            raise typer.Exit(code=1)
        try:
            return first_transcript(await speech.transcribe(audio))
        finally:
            await speech.close()

    try:
        text = asyncio.run(_transcribe())
    except GemchatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if text is None:
        console.print("[yellow]No speech recognized[/yellow]")
        raise typer.Exit(code=1)
    console.print(text, markup=False)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
