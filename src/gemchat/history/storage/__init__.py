"""Key-value preference storage backends."""

from .base import KeyValueStorage
from .factory import create_key_value_storage
from .in_memory import InMemoryPreferences
from .json_file import JsonFilePreferences

__all__ = [
    "InMemoryPreferences",
    "JsonFilePreferences",
    "KeyValueStorage",
    "create_key_value_storage",
]
