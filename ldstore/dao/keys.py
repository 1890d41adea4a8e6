"""Key-name adapter between JSON documents and MongoDB field names.

MongoDB rejects field names that start with ``$``, contain ``.`` or contain a
NUL character. JSON-LD documents use such keys routinely (``$schema``,
``http://schema.org/name``), so every object key is percent-escaped on the way
in and restored on the way out:

- ``%`` -> ``%25`` (the escape character itself, keeps the mapping bijective)
- ``$`` -> ``%24``
- ``.`` -> ``%2E``
- NUL -> ``%00``

Values are never touched, only keys of objects (at any depth, including
objects nested inside arrays).
"""

import logging
from enum import Enum
from typing import Any

from .exceptions import KeyEncodingError

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "%"

_ESCAPES: dict[str, str] = {
    "%": "%25",
    "$": "%24",
    ".": "%2E",
    "\x00": "%00",
}
_UNESCAPES: dict[str, str] = {code[1:]: char for char, code in _ESCAPES.items()}


class FixDirection(str, Enum):
    """Direction of a key rewrite."""

    WRITE_TO_STORAGE = "write_to_storage"
    READ_FROM_STORAGE = "read_from_storage"


def escape_key(key: str) -> str:
    """Escape a single key so MongoDB accepts it as a field name."""
    if not isinstance(key, str):
        raise TypeError(f"Document keys must be strings, got {type(key).__name__}")
    if not any(char in key for char in _ESCAPES):
        return key
    return "".join(_ESCAPES.get(char, char) for char in key)


def unescape_key(key: str) -> str:
    """Restore a key written by :func:`escape_key`.

    Raises:
        KeyEncodingError: If the key holds an escape sequence the encoder
            never produces.
    """
    if ESCAPE_CHAR not in key:
        return key

    parts: list[str] = []
    i = 0
    while i < len(key):
        char = key[i]
        if char != ESCAPE_CHAR:
            parts.append(char)
            i += 1
            continue

        code = key[i + 1 : i + 3]
        if code not in _UNESCAPES:
            logger.error(f"Malformed escape sequence at offset {i} in stored key {key!r}")
            raise KeyEncodingError(f"Malformed escape sequence in stored key: {key!r}")
        parts.append(_UNESCAPES[code])
        i += 3

    return "".join(parts)


def _rewrite(value: Any, rewrite_key) -> Any:
    if isinstance(value, dict):
        return {rewrite_key(k): _rewrite(v, rewrite_key) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_rewrite(item, rewrite_key) for item in value]
    return value


def to_storage(value: Any) -> Any:
    """Return a copy of ``value`` with every object key escaped."""
    return _rewrite(value, escape_key)


def from_storage(value: Any) -> Any:
    """Return a copy of ``value`` with every object key restored."""
    return _rewrite(value, unescape_key)


def fix_keys(value: Any, direction: FixDirection) -> Any:
    """Rewrite keys of ``value`` in the given direction."""
    if direction is FixDirection.WRITE_TO_STORAGE:
        return to_storage(value)
    if direction is FixDirection.READ_FROM_STORAGE:
        return from_storage(value)
    raise ValueError(f"Unknown direction: {direction}")
