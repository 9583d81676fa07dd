"""Abstract base class for key-value preference storage.

The abstraction hides:
- Where the preferences live (file, memory)
- How writes are made durable
"""

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """A named set of string slots, read and overwritten whole.

    Implementations raise StorageUnavailableError when the underlying
    medium cannot be read or written.
    """

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the value stored under key, or None if the slot is empty."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the value stored under key."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
