"""Chat session orchestration.

Hides how a prompt becomes a conversation turn:
- Validation and the immediate user entry
- The single background worker that makes remote calls, one at a time
- How replies, empty replies and failures are recorded
- When history is persisted

Design:
- The event loop the session is started on is the foreground: it runs
  submit(), and the worker task applies each outcome on that same loop,
  so the history store has exactly one writer and needs no lock
- Prompts submitted while a reply is pending are queued (bounded, FIFO)
  and answered in submission order
- There is no cancel and no timeout: a queued turn runs until the remote
  call returns or fails
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config import DEFAULT_QUEUE_SIZE, EMPTY_PROMPT_MESSAGE, NO_TEXT_RESPONSE
from ..errors import PromptValidationError, SessionBusyError
from ..history import ChatEntry, ChatHistoryStore
from ..llm import GenerationResult, LLMProvider
from .state import SessionState

logger = logging.getLogger(__name__)


@dataclass
class _Turn:
    """A prompt waiting for the worker."""

    prompt: str
    future: "asyncio.Future[ChatEntry]"


class ChatSession:
    """Turn-taking between the user and the remote model.

    Example:
        async with ChatSession(store, provider, on_error=print) as session:
            entry = await session.ask("Hello")
            print(entry.text)
    """

    def __init__(
        self,
        store: ChatHistoryStore,
        llm: LLMProvider,
        on_error: Callable[[str], None] | None = None,
        on_state_change: Callable[[SessionState], None] | None = None,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ) -> None:
        """Initialize the session.

        Args:
            store: History store the session appends to
            llm: Provider that answers prompts
            on_error: Called with "Error: <message>" when a remote call fails
            on_state_change: Called on every state transition
            queue_size: Maximum number of prompts waiting for the worker
        """
        self._store = store
        self._llm = llm
        self._on_error = on_error
        self._on_state_change = on_state_change
        self._queue_size = queue_size
        self._queue: asyncio.Queue[_Turn] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._current: _Turn | None = None
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def store(self) -> ChatHistoryStore:
        return self._store

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        """Load persisted history and start the background worker."""
        if self.is_running:
            return
        self._store.load()
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._worker = asyncio.get_running_loop().create_task(
            self._run_worker(), name="gemchat-session-worker"
        )
        logger.info("Session started with %d history entries", len(self._store))

    async def close(self) -> None:
        """Stop the worker and release the provider.

        Turns still queued are abandoned; their futures are cancelled.
        """
        current = self._current
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None

        if current is not None:
            current.future.cancel()

        if self._queue is not None:
            while not self._queue.empty():
                turn = self._queue.get_nowait()
                turn.future.cancel()
                self._queue.task_done()
            self._queue = None

        await self._llm.close()
        self._set_state(SessionState.IDLE)
        logger.info("Session closed")

    async def __aenter__(self) -> "ChatSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def submit(self, prompt: str) -> "asyncio.Future[ChatEntry]":
        """Start a turn for a prompt.

        The user entry is appended before this method returns; the reply
        (or error) entry follows once the worker gets to it.

        Args:
            prompt: Prompt text; surrounding whitespace is trimmed

        Returns:
            Future resolving to the assistant or error entry of this turn

        Raises:
            PromptValidationError: If the prompt is empty or whitespace only
            SessionBusyError: If too many prompts are already waiting
            RuntimeError: If the session has not been started
        """
        if not self.is_running or self._queue is None:
            raise RuntimeError("ChatSession is not started")

        text = (prompt or "").strip()
        if not text:
            raise PromptValidationError(EMPTY_PROMPT_MESSAGE)

        if self._queue.full():
            raise SessionBusyError(
                f"{self._queue.qsize()} prompts are already waiting for a reply"
            )

        self._store.append(ChatEntry.user(text))
        future: asyncio.Future[ChatEntry] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait(_Turn(prompt=text, future=future))
        self._set_state(SessionState.AWAITING_REPLY)
        logger.debug("Queued prompt (%d chars), %d waiting", len(text), self._queue.qsize())
        return future

    async def ask(self, prompt: str) -> ChatEntry:
        """Submit a prompt and wait for its reply or error entry."""
        return await self.submit(prompt)

    async def join(self) -> None:
        """Wait until every queued turn has been answered."""
        if self._queue is not None:
            await self._queue.join()

    async def _run_worker(self) -> None:
        assert self._queue is not None
        while True:
            turn = await self._queue.get()
            self._current = turn
            try:
                await self._process(turn)
            except Exception as e:
                logger.exception("Turn failed while applying its outcome")
                if not turn.future.done():
                    turn.future.set_exception(e)
                self._set_state(SessionState.IDLE)
            finally:
                self._current = None
                self._queue.task_done()

    async def _process(self, turn: _Turn) -> None:
        try:
            result = await self._llm.generate_content(turn.prompt)
        except Exception as e:
            entry = self._fail(e)
        else:
            entry = self._resolve(result)

        if not turn.future.done():
            turn.future.set_result(entry)

        if self._queue is not None and not self._queue.empty():
            self._set_state(SessionState.AWAITING_REPLY)
        else:
            self._set_state(SessionState.IDLE)

    def _resolve(self, result: GenerationResult) -> ChatEntry:
        self._set_state(SessionState.RESOLVED)
        entry = self._store.append(ChatEntry.assistant(result.text or NO_TEXT_RESPONSE))
        self._store.persist()
        logger.info("Reply received from %s (%d chars)", result.model, len(entry.text))
        return entry

    def _fail(self, error: Exception) -> ChatEntry:
        # Not persisted here; the next successful turn writes the error entry too
        self._set_state(SessionState.FAILED)
        message = str(error) or type(error).__name__
        entry = self._store.append(ChatEntry.error(message))
        logger.warning("Remote call failed: %s", message)
        if self._on_error is not None:
            try:
                self._on_error(f"Error: {message}")
            except Exception:
                logger.exception("Error notifier failed")
        return entry

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)
