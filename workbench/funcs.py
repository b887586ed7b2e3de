"""Small function examples: variadic sum, a stateful generator, URL values."""

from __future__ import annotations

from collections.abc import Iterator


def sum_ints(*args: int) -> int:
    """Return the sum of the arguments."""
    return sum(args, 0)


def squares() -> Iterator[int]:
    """Yield the square numbers 1, 4, 9, ... without end."""
    x = 0
    while True:
        x += 1
        yield x * x


class Values(dict):
    """Maps a string key to a list of values."""

    def get(self, key: str) -> str:  # type: ignore[override]
        """Return the first value for key, or '' if there is none."""
        values = self[key] if key in self else []
        return values[0] if values else ""

    def add(self, key: str, value: str) -> None:
        """Append value to the values for key."""
        self.setdefault(key, []).append(value)