"""Writers that count the bytes, words or lines written to them."""

from __future__ import annotations

import re
from typing import Any

_WORD = re.compile(
    "[^\t\n\v\f\r \u0085\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def count_words(data: bytes | str) -> int:
    """Return the number of space-separated words in data."""
    return len(_WORD.findall(_as_bytes(data).decode("utf-8", "replace")))


def count_lines(data: bytes | str) -> int:
    """Return the number of lines in data, stopping at the first empty line."""
    rest = _as_bytes(data)
    count = 0
    while rest:
        line, _, rest = rest.partition(b"\n")
        if line.endswith(b"\r"):
            line = line[:-1]
        if not line:
            break
        count += 1
    return count


class ByteCounter:
    """Counts the bytes written to it."""

    def __init__(self) -> None:
        self.count = 0

    def write(self, data: bytes | str) -> int:
        n = len(_as_bytes(data))
        self.count += n
        return n

    def __int__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)


class WordCounter:
    """Counts the words written to it."""

    def __init__(self) -> None:
        self.count = 0

    def write(self, data: bytes | str) -> int:
        """Add the words in data and return how many there were."""
        n = count_words(data)
        self.count += n
        return n

    def string_count(self, text: str) -> int:
        """Set the count to the number of space-separated words in text."""
        if text == "":
            raise ValueError("input cant be empty")
        self.count = sum(1 for word in text.split(" ") if word)
        return self.count

    def __int__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return f"contains {self.count} words"


class LineCounter:
    """Counts the lines written to it."""

    def __init__(self) -> None:
        self.count = 0

    def write(self, data: bytes | str) -> int:
        """Add the lines in data and return how many there were."""
        n = count_lines(data)
        self.count += n
        return n

    def __int__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)


class CountingWriter:
    """Wraps a writer and counts the bytes passed through it."""

    def __init__(self, writer: Any) -> None:
        self.writer = writer
        self.count = 0

    def write(self, data: bytes | str) -> Any:
        self.count += len(_as_bytes(data))
        return self.writer.write(data)


def counting_writer(writer: Any) -> CountingWriter:
    """Return a writer wrapping writer whose count attribute tracks bytes written."""
    return CountingWriter(writer)