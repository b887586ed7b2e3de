"""A set of small non-negative integers backed by a bit vector."""

from __future__ import annotations

from collections.abc import Iterator

_WORD_BITS = 64


class IntSet:
    """A set of small non-negative integers. A new set is empty."""

    def __init__(self) -> None:
        self._words: list[int] = []

    def has(self, x: int) -> bool:
        """Report whether the set contains the non-negative value x."""
        if x < 0:
            return False
        word, bit = divmod(x, _WORD_BITS)
        return word < len(self._words) and bool(self._words[word] & (1 << bit))

    def add(self, x: int) -> None:
        """Add the non-negative value x to the set."""
        if x < 0:
            raise ValueError(f"IntSet holds only non-negative values, got {x}")
        word, bit = divmod(x, _WORD_BITS)
        if word >= len(self._words):
            self._words.extend([0] * (word + 1 - len(self._words)))
        self._words[word] |= 1 << bit

    def add_all(self, *args: int) -> None:
        """Add every given value to the set."""
        for value in args:
            self.add(value)

    def union_with(self, other: IntSet) -> None:
        """Make this set the union of itself and other."""
        for index, word in enumerate(other._words):
            if index < len(self._words):
                self._words[index] |= word
            else:
                self._words.append(word)

    def remove(self, x: int) -> None:
        """Remove x from the set if it is present."""
        if self.has(x):
            word, bit = divmod(x, _WORD_BITS)
            self._words[word] &= ~(1 << bit)

    def clear(self) -> None:
        """Remove every element."""
        self._words = []

    def word_count(self) -> int:
        """Return the number of 64-bit words backing the set."""
        return len(self._words)

    def words(self) -> list[int]:
        """Return a copy of the backing 64-bit words."""
        return list(self._words)

    def __contains__(self, x: object) -> bool:
        return isinstance(x, int) and self.has(x)

    def __iter__(self) -> Iterator[int]:
        for index, word in enumerate(self._words):
            if word == 0:
                continue
            for bit in range(_WORD_BITS):
                if word & (1 << bit):
                    yield _WORD_BITS * index + bit

    def __str__(self) -> str:
        return "{" + " ".join(str(value) for value in self) + "}"

    def __repr__(self) -> str:
        return f"IntSet({self})"