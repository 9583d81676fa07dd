"""In-memory preference storage.

Simple dict-based storage for session-only history.
Data is lost when the application exits.
"""

from .base import KeyValueStorage


class InMemoryPreferences(KeyValueStorage):
    """Session-only preferences, suitable for testing and one-off runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    @property
    def backend_type(self) -> str:
        return "memory"
