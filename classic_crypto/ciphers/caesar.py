"""
Caesar — Monoalphabetic shift
=============================
Every symbol is replaced by the one `shift` places further along the
alphabet, wrapping at the end. Decryption shifts back.

Historical note: Suetonius reports Julius Caesar using a shift of three.
With 26 letters there are only 25 useful keys, so it falls to a glance.

Works over any Alphabet, not just A–Z.
"""

import random
from typing import Optional

from ..alphabet import BASIC_LATIN, Alphabet, check_input
from ..cipher import Cipher
from ..errors import InvalidConfiguration


class Caesar(Cipher):
    """Shift cipher over an arbitrary alphabet."""

    def __init__(self, shift: int = 0, alphabet: str = BASIC_LATIN):
        self.shift = shift
        self.alphabet_string = alphabet

    @property
    def alphabet_string(self) -> str:
        return self._alphabet_string

    @alphabet_string.setter
    def alphabet_string(self, value: str) -> None:
        self._alphabet_string = value
        self.alphabet = Alphabet.unique_from(value)

    def _shift_text(self, text: str, shift: int) -> str:
        check_input(text, self.alphabet)
        return "".join(
            self.alphabet.get_char_offset(self.alphabet.position_of(c), shift)
            for c in text
        )

    def encrypt(self, text: str) -> str:
        return self._shift_text(text, self.shift)

    def decrypt(self, text: str) -> str:
        return self._shift_text(text, -self.shift)

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        if len(self.alphabet) < 2:
            raise InvalidConfiguration("A Caesar key needs an alphabet of at least two symbols.")
        self.shift = rng.randrange(1, len(self.alphabet))
