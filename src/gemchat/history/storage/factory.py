"""Factory for creating preference storage backends."""

from typing import Any

from .base import KeyValueStorage


def create_key_value_storage(
    backend: str = "file",
    **kwargs: Any
) -> KeyValueStorage:
    """Create a key-value storage backend.

    Args:
        backend: Backend type ("file" or "memory")
        **kwargs: Backend-specific configuration
            For file:
                - path: str | Path (default: ~/.gemchat/chat_prefs.json)
            For memory:
                - initial: dict[str, str] | None

    Returns:
        KeyValueStorage instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "file":
        from .json_file import JsonFilePreferences
        return JsonFilePreferences(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemoryPreferences
        return InMemoryPreferences(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: file, memory"
    )
