"""Simple readers: one over an in-memory string and one that limits another."""

from __future__ import annotations

from typing import Any


class StringReader:
    """Reads the UTF-8 bytes of a string."""

    def __init__(self, text: str | bytes) -> None:
        self._data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self._pos = 0

    def read(self, size: int = -1) -> bytes:
        """Return up to size bytes, all remaining if size < 0; b'' at the end."""
        if size == 0:
            return b""
        end = len(self._data) if size < 0 else min(len(self._data), self._pos + size)
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk


class LimitReader:
    """Reads from another reader but stops after a fixed number of bytes."""

    def __init__(self, reader: Any, limit: int) -> None:
        self._reader = reader
        self._remaining = limit

    def read(self, size: int = -1) -> bytes:
        """Return up to size bytes without passing the limit; b'' once reached."""
        if self._remaining <= 0 or size == 0:
            return b""
        if size < 0 or size > self._remaining:
            size = self._remaining
        chunk = self._reader.read(size)
        self._remaining -= len(chunk)
        return chunk