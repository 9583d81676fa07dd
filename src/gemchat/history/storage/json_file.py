"""JSON file preference storage.

Keeps every slot of one named preference set in a single JSON object on
disk. Writes go to a temporary file in the same directory which then
replaces the original, so readers only ever see a complete snapshot.
"""

import json
import os
import tempfile
from pathlib import Path

from ...config import DEFAULT_PREFS_DIR, PREFS_NAME
from ...errors import StorageUnavailableError
from .base import KeyValueStorage


class JsonFilePreferences(KeyValueStorage):
    """File-backed preferences, persistent across sessions."""

    def __init__(self, path: str | Path | None = None):
        if path is None:
            path = Path(DEFAULT_PREFS_DIR) / f"{PREFS_NAME}.json"
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageUnavailableError(f"Cannot read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageUnavailableError(f"Unexpected preferences format in {self._path}")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def read(self, key: str) -> str | None:
        return self._read_all().get(key)

    def write(self, key: str, value: str) -> None:
        try:
            values = self._read_all()
        except StorageUnavailableError:
            # An unreadable file is replaced rather than left to block every write
            values = {}
        values[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(values, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write {self._path}: {e}") from e

    @property
    def backend_type(self) -> str:
        return "file"
