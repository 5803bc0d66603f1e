"""
Alphabet — ordered, duplicate-free symbol sequences
====================================================
Every cipher in the package works on positions inside an Alphabet rather
than on raw characters. An Alphabet is a small mutable sequence that knows
where each symbol lives, wraps offsets in both directions, and can be
rotated or have a symbol moved around in place (Chaocipher, M209 wheels).

Symbols are usually single characters, but any hashable string unit works,
so an Alphabet can also be built from a list such as ["CH", "A", "B"].

Invariant: no symbol appears twice. The mutating methods only reorder
symbols that are already present, and ``insert`` refuses a duplicate.
"""

import random
from typing import Iterable, Iterator, List, Optional

from .errors import InvalidConfiguration, InvalidInputChar


BASIC_LATIN       = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASIC_LATIN_NO_J  = "ABCDEFGHIKLMNOPQRSTUVWXYZ"
BASIC_LATIN_NO_Q  = "ABCDEFGHIJKLMNOPRSTUVWXYZ"
ALPHANUMERIC      = BASIC_LATIN + "0123456789"


def keyed_alphabet(keyword: str, alphabet: str) -> str:
    """
    Keyword symbols first (first occurrence only, unknown symbols dropped),
    then the rest of the alphabet in its original order.
    """
    out = []
    for c in keyword:
        if c in alphabet and c not in out:
            out.append(c)
    for c in alphabet:
        if c not in out:
            out.append(c)
    return "".join(out)


def check_input(text: Iterable[str], alphabet) -> None:
    """
    Raise InvalidInputChar for the first symbol of `text` that is not in
    `alphabet` (an Alphabet, a string, or any container of symbols).
    """
    for c in text:
        if c not in alphabet:
            raise InvalidInputChar(c)


class Alphabet:
    """Ordered sequence of distinct symbols."""

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Iterable[str] = ""):
        self._symbols: List[str] = list(symbols)
        if len(set(self._symbols)) != len(self._symbols):
            raise InvalidConfiguration("Alphabet symbols must be distinct; use Alphabet.unique_from().")

    # ── constructors ─────────────────────────────────────────────────────────

    @classmethod
    def unique_from(cls, text: Iterable[str]) -> "Alphabet":
        """Keep the first occurrence of every symbol, silently drop repeats."""
        seen = []
        for c in text:
            if c not in seen:
                seen.append(c)
        return cls(seen)

    @classmethod
    def keyed(cls, keyword: str, alphabet: str) -> "Alphabet":
        return cls(keyed_alphabet(keyword, alphabet))

    def copy(self) -> "Alphabet":
        return Alphabet(self._symbols)

    # ── lookups ──────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._symbols

    def __getitem__(self, index: int) -> str:
        return self._symbols[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, Alphabet):
            return self._symbols == other._symbols
        return NotImplemented

    def __str__(self) -> str:
        return "".join(self._symbols)

    def __repr__(self) -> str:
        return f"Alphabet({str(self)!r})"

    def contains(self, symbol: str) -> bool:
        return symbol in self._symbols

    def position_of(self, symbol: str) -> Optional[int]:
        try:
            return self._symbols.index(symbol)
        except ValueError:
            return None

    def symbol_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._symbols):
            return self._symbols[index]
        return None

    def front(self) -> Optional[str]:
        return self.symbol_at(0)

    # ── offsets ──────────────────────────────────────────────────────────────

    def offset_index(self, index: int, delta: int) -> int:
        # floor-mod, so negative deltas wrap
        return (index + delta) % len(self._symbols)

    def get_char_offset(self, index: int, delta: int) -> Optional[str]:
        if not self._symbols:
            return None
        return self._symbols[self.offset_index(index, delta)]

    def position_offset(self, symbol: str, delta: int) -> Optional[int]:
        """Position of `symbol` as seen from an alphabet rotated by `delta`."""
        pos = self.position_of(symbol)
        if pos is None:
            return None
        return (pos - delta) % len(self._symbols)

    def to_string_offset(self, delta: int) -> str:
        shift = delta % len(self._symbols)
        return "".join(self._symbols[shift:] + self._symbols[:shift])

    # ── reordering ───────────────────────────────────────────────────────────

    def rotate_left(self, n: int) -> None:
        if self._symbols:
            n %= len(self._symbols)
            self._symbols = self._symbols[n:] + self._symbols[:n]

    def rotate_right(self, n: int) -> None:
        if self._symbols:
            self.rotate_left(-n)

    def rotate_to(self, symbol: str) -> None:
        """Bring `symbol` to the front; does nothing if it is absent."""
        pos = self.position_of(symbol)
        if pos is not None:
            self.rotate_left(pos)

    def insert(self, index: int, symbol: str) -> None:
        if symbol in self._symbols:
            raise InvalidConfiguration(f"{symbol!r} is already in the alphabet")
        self._symbols.insert(index, symbol)

    def remove(self, index: int) -> str:
        return self._symbols.pop(index)

    def swap_indices(self, i: int, j: int) -> None:
        """Swap two positions; out-of-range indices are ignored."""
        n = len(self._symbols)
        if 0 <= i < n and 0 <= j < n:
            self._symbols[i], self._symbols[j] = self._symbols[j], self._symbols[i]

    def swap_symbols(self, a: str, b: str) -> None:
        i, j = self.position_of(a), self.position_of(b)
        if i is not None and j is not None:
            self.swap_indices(i, j)

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self._symbols)

    def shuffled(self, rng: random.Random) -> "Alphabet":
        out = self.copy()
        out.shuffle(rng)
        return out
