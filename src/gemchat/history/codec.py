"""Flat delimiter encoding for chat history.

Hides the persisted string format:

    <label>||<text>##<label>||<text>##...

There is no escaping and no length prefix. Instead every field is sanitized
by deleting the delimiter characters before it is written, so a stored
field can never contain a delimiter. This is lossy on purpose: "a|b" is
stored as "ab". Records that do not decode cleanly are dropped on read.
"""

import logging
from collections.abc import Iterable

from ..config import FIELD_DELIMITER, RECORD_DELIMITER
from .models import ChatEntry, Role

logger = logging.getLogger(__name__)

_DELIMITER_CHARS = set(FIELD_DELIMITER + RECORD_DELIMITER)


def sanitize(value: str | None) -> str:
    """Remove every delimiter character from a field value.

    Args:
        value: Raw field value (None is treated as empty)

    Returns:
        The value with all '|' and '#' characters deleted
    """
    if not value:
        return ""
    return "".join(ch for ch in value if ch not in _DELIMITER_CHARS)


def encode_entry(entry: ChatEntry) -> str:
    """Encode one entry as a complete record, record delimiter included."""
    return (
        sanitize(entry.role.label)
        + FIELD_DELIMITER
        + sanitize(entry.text)
        + RECORD_DELIMITER
    )


def encode_history(entries: Iterable[ChatEntry]) -> str:
    """Encode a whole history in order."""
    return "".join(encode_entry(entry) for entry in entries)


def decode_history(raw: str | None) -> list[ChatEntry]:
    """Decode a persisted string into entries, in on-disk order.

    Blank records are skipped. Records that do not split into exactly two
    fields, or whose label is not a known role, are dropped.

    Args:
        raw: Persisted history string (None or empty means no history)

    Returns:
        List of well-formed entries
    """
    if not raw:
        return []

    entries: list[ChatEntry] = []
    dropped = 0
    for record in raw.split(RECORD_DELIMITER):
        if not record.strip():
            continue

        fields = record.split(FIELD_DELIMITER)
        if len(fields) != 2:
            dropped += 1
            continue

        label, text = fields
        role = Role.from_label(label)
        if role is None:
            dropped += 1
            continue

        entries.append(ChatEntry(role=role, text=text))

    if dropped:
        logger.debug("Dropped %d malformed history record(s)", dropped)
    return entries
