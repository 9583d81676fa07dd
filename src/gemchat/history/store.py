"""Chat history store.

Owns the canonical, ordered list of chat entries for one session and
translates it to and from the single preferences slot that persists it.
Renderers never touch the list: they subscribe and receive immutable
snapshots.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..config import HISTORY_KEY
from ..errors import StorageUnavailableError
from .codec import decode_history, encode_history
from .models import ChatEntry
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryChange:
    """Notification sent to subscribers after the history changes.

    `entry` is the appended entry, or None when the whole history was
    replaced by load().
    """

    entry: ChatEntry | None
    entries: tuple[ChatEntry, ...]


HistoryListener = Callable[[HistoryChange], None]


class ChatHistoryStore:
    """Ordered chat history with whole-snapshot persistence.

    Storage failures are deliberately not errors: an unreadable slot loads
    as an empty history and a failed write is dropped. Both are logged and
    neither is retried.

    Example:
        store = ChatHistoryStore(create_key_value_storage("file"))
        store.load()
        store.append(ChatEntry.user("Hello"))
        store.persist()
    """

    def __init__(self, storage: KeyValueStorage, key: str = HISTORY_KEY):
        self._storage = storage
        self._key = key
        self._entries: list[ChatEntry] = []
        self._listeners: list[HistoryListener] = []

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    @property
    def entries(self) -> tuple[ChatEntry, ...]:
        """Immutable snapshot of the history, oldest first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> tuple[ChatEntry, ...]:
        """Replace the in-memory history with the persisted one.

        Returns:
            Snapshot of the loaded history (empty if nothing is stored)
        """
        try:
            raw = self._storage.read(self._key) or ""
        except StorageUnavailableError as e:
            logger.warning("History storage unavailable, starting empty: %s", e)
            raw = ""

        self._entries = decode_history(raw)
        logger.info("Loaded %d history entries", len(self._entries))
        self._notify(None)
        return self.entries

    def append(self, entry: ChatEntry) -> ChatEntry:
        """Append an entry and notify subscribers."""
        self._entries.append(entry)
        self._notify(entry)
        return entry

    def persist(self, history: Iterable[ChatEntry] | None = None) -> None:
        """Overwrite the preferences slot with a full snapshot.

        Args:
            history: Entries to write (default: the store's own history)
        """
        entries = self._entries if history is None else list(history)
        data = encode_history(entries)
        try:
            self._storage.write(self._key, data)
        except StorageUnavailableError as e:
            logger.warning("History not persisted: %s", e)
            return
        logger.debug("Persisted %d history entries (%d chars)", len(entries), len(data))

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a listener for history changes.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, entry: ChatEntry | None) -> None:
        change = HistoryChange(entry=entry, entries=self.entries)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("History listener failed")
