"""
RS44 — Rasterschlüssel 44 stencil transposition
================================================
German army field cipher, 1944. The key is a 24 × 25 stencil in which
roughly ten cells per row are open. The message is written into the open
cells row by row, starting at a chosen cell and wrapping round the bottom
of the grid back to the top. It is then read out column by column, the
columns taken in the order of their printed numbers starting from a chosen
column.

The start cell and start column travel with the message as an encrypted
message key: each coordinate has a two-letter label (letters a–e), and each
label letter is replaced by a random letter from the matching column of a
5 × 5 key matrix.

Pure transposition: every symbol is accepted and the output is a
permutation of the input.
"""

import random
from typing import List, Optional, Tuple

from ..alphabet import BASIC_LATIN_NO_J
from ..cipher import Cipher
from ..errors import InvalidConfiguration, InvalidInputLength

EMPTY = "⬜"
BLOCK = "⬛"

WIDTH     = 25
HEIGHT    = 24
GRID_SIZE = WIDTH * HEIGHT
OPEN_PER_ROW = 10

LABEL_LETTERS = "abcde"
LABELS = [x + y for y in LABEL_LETTERS for x in LABEL_LETTERS]

DEFAULT_STENCIL_ROWS = [
    "⬛⬜⬛⬛⬛⬛⬛⬜⬜⬛⬛⬜⬛⬜⬛⬜⬛⬛⬜⬜⬛⬛⬜⬜⬛",
    "⬛⬛⬜⬛⬜⬛⬛⬜⬛⬜⬜⬛⬛⬜⬛⬛⬛⬜⬛⬛⬜⬛⬜⬛⬜",
    "⬜⬛⬛⬜⬜⬜⬛⬛⬛⬛⬜⬛⬛⬜⬛⬜⬛⬜⬛⬜⬛⬛⬛⬜⬛",
    "⬛⬜⬛⬜⬛⬜⬜⬜⬛⬜⬛⬛⬜⬛⬛⬜⬛⬛⬜⬛⬛⬜⬛⬛⬛",
    "⬜⬛⬛⬛⬛⬜⬛⬛⬜⬛⬛⬜⬛⬜⬜⬛⬜⬛⬛⬛⬛⬜⬜⬛⬜",
    "⬛⬛⬛⬜⬛⬛⬜⬛⬛⬜⬛⬜⬜⬜⬛⬛⬜⬜⬛⬛⬜⬛⬛⬜⬛",
    "⬜⬛⬛⬛⬜⬛⬛⬛⬛⬜⬛⬜⬛⬛⬜⬛⬛⬛⬜⬜⬜⬛⬛⬜⬜",
    "⬛⬛⬜⬛⬜⬛⬜⬛⬛⬜⬜⬛⬛⬛⬜⬜⬛⬛⬜⬛⬛⬜⬛⬜⬛",
    "⬛⬜⬛⬛⬛⬛⬛⬜⬛⬛⬛⬛⬜⬜⬛⬛⬜⬛⬜⬜⬛⬛⬜⬜⬜",
    "⬛⬜⬜⬛⬜⬛⬜⬛⬛⬜⬜⬛⬜⬛⬛⬛⬜⬜⬛⬛⬜⬛⬛⬛⬛",
    "⬛⬛⬜⬛⬛⬜⬛⬛⬜⬛⬛⬜⬜⬜⬛⬜⬛⬛⬜⬛⬛⬜⬜⬛⬛",
    "⬛⬜⬛⬜⬛⬜⬛⬜⬜⬛⬜⬛⬜⬛⬜⬛⬛⬛⬜⬛⬜⬛⬛⬜⬛",
    "⬜⬛⬛⬛⬜⬛⬛⬜⬛⬛⬜⬜⬛⬛⬜⬛⬜⬜⬛⬛⬛⬜⬛⬛⬜",
    "⬜⬜⬛⬜⬜⬜⬛⬛⬛⬛⬜⬛⬛⬛⬛⬜⬛⬛⬛⬜⬜⬛⬜⬛⬛",
    "⬛⬛⬛⬜⬛⬛⬛⬜⬜⬛⬜⬛⬛⬜⬜⬛⬛⬜⬜⬛⬛⬛⬜⬜⬛",
    "⬛⬛⬜⬜⬛⬛⬜⬜⬛⬛⬛⬜⬛⬛⬛⬛⬜⬛⬛⬛⬜⬜⬜⬜⬛",
    "⬛⬜⬜⬛⬜⬛⬛⬜⬛⬛⬜⬜⬛⬜⬛⬜⬛⬜⬛⬛⬛⬛⬛⬜⬛",
    "⬜⬛⬛⬛⬛⬜⬛⬛⬜⬛⬛⬛⬜⬛⬜⬜⬜⬛⬛⬛⬜⬜⬛⬛⬜",
    "⬛⬛⬜⬜⬛⬜⬛⬛⬛⬜⬛⬛⬛⬛⬜⬛⬜⬜⬛⬛⬜⬛⬜⬜⬛",
    "⬜⬛⬛⬜⬛⬛⬜⬛⬛⬜⬜⬛⬛⬜⬜⬛⬛⬜⬛⬜⬛⬜⬛⬛⬛",
    "⬜⬛⬜⬛⬛⬜⬛⬛⬜⬜⬛⬛⬛⬛⬜⬜⬛⬛⬜⬛⬜⬛⬜⬛⬛",
    "⬛⬛⬜⬛⬜⬛⬜⬛⬛⬛⬜⬜⬛⬛⬛⬛⬜⬛⬛⬜⬜⬛⬜⬛⬜",
    "⬛⬜⬛⬛⬛⬛⬜⬜⬛⬜⬛⬛⬜⬛⬜⬜⬛⬛⬜⬛⬛⬜⬛⬜⬛",
    "⬛⬛⬛⬜⬛⬛⬛⬛⬜⬜⬛⬛⬜⬜⬜⬛⬛⬜⬜⬜⬛⬛⬛⬜⬛",
]

DEFAULT_COLUMN_NUMS = [
    13, 1, 20, 10, 18, 14, 0, 7, 17, 9, 23, 2, 6, 11, 16, 19, 4, 12, 22, 15, 5, 3, 21, 24, 8,
]

_DEFAULT_SEED = 5920348976


def parse_stencil(text: str) -> List[bool]:
    """
    Turn a string of ⬜ (open) and ⬛ (blocked) symbols into a flat list of
    600 flags. Whitespace is ignored; every row must have ten open cells.
    """
    cells = []
    for c in text:
        if c.isspace():
            continue
        if c == EMPTY:
            cells.append(True)
        elif c == BLOCK:
            cells.append(False)
        else:
            raise InvalidConfiguration(
                f"The RS44 stencil can only be built from the symbols {EMPTY} and {BLOCK}."
            )
    if len(cells) != GRID_SIZE:
        raise InvalidConfiguration(f"The RS44 stencil must have exactly {GRID_SIZE} positions.")
    for row in range(HEIGHT):
        if sum(cells[row * WIDTH:(row + 1) * WIDTH]) != OPEN_PER_ROW:
            raise InvalidConfiguration(
                f"The RS44 stencil must have exactly {OPEN_PER_ROW} open cells in each row "
                f"(row {row} does not)."
            )
    return cells


def stencil_to_text(cells: List[bool]) -> str:
    rows = []
    for row in range(HEIGHT):
        rows.append("".join(EMPTY if c else BLOCK for c in cells[row * WIDTH:(row + 1) * WIDTH]))
    return "\n".join(rows)


class Rs44(Cipher):
    """Rasterschlüssel 44."""

    def __init__(self, stencil: Optional[str] = None,
                 column_nums: Optional[List[int]] = None,
                 start_cell: Tuple[int, int] = (0, 1),
                 start_column: int = 0):
        if stencil is None:
            # The reference stencil has one row with eleven open cells, so it
            # is loaded as-is rather than through parse_stencil().
            self.stencil = [c == EMPTY for c in "".join(DEFAULT_STENCIL_ROWS)]
        else:
            self.stencil = parse_stencil(stencil)
        self.column_nums  = list(column_nums if column_nums is not None else DEFAULT_COLUMN_NUMS)
        self.start_cell   = start_cell
        self.start_column = start_column

        rng = random.Random(_DEFAULT_SEED)
        self.xlabels = rng.sample(LABELS, WIDTH)
        self.ylabels = rng.sample(LABELS, HEIGHT)
        letters = list(BASIC_LATIN_NO_J.lower())
        rng.shuffle(letters)
        self.key_matrix = [letters[i * 5:(i + 1) * 5] for i in range(5)]

    # ── configuration ────────────────────────────────────────────────────────

    def set_stencil(self, text: str) -> None:
        self.stencil = parse_stencil(text)

    def stencil_text(self) -> str:
        return stencil_to_text(self.stencil)

    @property
    def capacity(self) -> int:
        return sum(self.stencil)

    def validate(self) -> None:
        if sorted(self.column_nums) != list(range(WIDTH)):
            raise InvalidConfiguration(
                f"RS44 column numbers must be a permutation of 0..{WIDTH - 1}."
            )
        row, col = self.start_cell
        if not (0 <= row < HEIGHT and 0 <= col < WIDTH):
            raise InvalidConfiguration("starting cell out of bounds")
        if not self.stencil[row * WIDTH + col]:
            raise InvalidConfiguration("starting cell must be an open position")
        if not 0 <= self.start_column < WIDTH:
            raise InvalidConfiguration("starting column out of bounds")

    # ── grid walking ─────────────────────────────────────────────────────────

    def _start_index(self) -> int:
        row, col = self.start_cell
        return row * WIDTH + col

    def _wrapping(self, start: int):
        return list(range(start, GRID_SIZE)) + list(range(0, start))

    def _column_order(self) -> List[int]:
        first = self.column_nums[self.start_column]
        numbers = list(range(first, WIDTH)) + list(range(0, first))
        return [self.column_nums.index(n) for n in numbers]

    def _message_cells(self, length: int) -> List[int]:
        """Grid indices the message occupies, in writing order."""
        if length > self.capacity:
            raise InvalidInputLength(
                f"RS44 message of {length} symbols exceeds the {self.capacity} open cells of the stencil."
            )
        cells = []
        for idx in self._wrapping(self._start_index()):
            if len(cells) == length:
                break
            if self.stencil[idx]:
                cells.append(idx)
        return cells

    def _column_reading(self, used: set) -> List[int]:
        """Grid indices in the order they are read out, column by column."""
        order = []
        for col in self._column_order():
            for row in range(HEIGHT):
                idx = row * WIDTH + col
                if idx in used:
                    order.append(idx)
        return order

    # ── cipher ───────────────────────────────────────────────────────────────

    def encrypt(self, text: str) -> str:
        self.validate()
        cells = self._message_cells(len(text))
        grid = dict(zip(cells, text))
        return "".join(grid[idx] for idx in self._column_reading(set(cells)))

    def decrypt(self, text: str) -> str:
        self.validate()
        cells = self._message_cells(len(text))
        grid = dict(zip(self._column_reading(set(cells)), text))
        return "".join(grid[idx] for idx in cells)

    # ── message key ──────────────────────────────────────────────────────────

    def _encrypt_label(self, label: str, rng: random.Random) -> str:
        return "".join(
            self.key_matrix[rng.randrange(5)][LABEL_LETTERS.index(c)] for c in label
        )

    def message_key(self, rng: Optional[random.Random] = None) -> str:
        """
        Encrypted message key: start cell column and row labels, a dash,
        then the start column label.
        """
        rng = self._rng(rng)
        self.validate()
        row, col = self.start_cell
        return (self._encrypt_label(self.xlabels[col], rng)
                + self._encrypt_label(self.ylabels[row], rng)
                + "-"
                + self._encrypt_label(self.xlabels[self.start_column], rng))

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        stencil = []
        for _ in range(HEIGHT):
            row = [True] * OPEN_PER_ROW + [False] * (WIDTH - OPEN_PER_ROW)
            rng.shuffle(row)
            stencil.extend(row)
        self.stencil = stencil
        self.column_nums = rng.sample(range(WIDTH), WIDTH)
        self.xlabels = rng.sample(LABELS, WIDTH)
        self.ylabels = rng.sample(LABELS, HEIGHT)
        letters = list(BASIC_LATIN_NO_J.lower())
        rng.shuffle(letters)
        self.key_matrix = [letters[i * 5:(i + 1) * 5] for i in range(5)]
        self.start_cell = divmod(rng.choice([i for i, c in enumerate(stencil) if c]), WIDTH)
        self.start_column = rng.randrange(WIDTH)
