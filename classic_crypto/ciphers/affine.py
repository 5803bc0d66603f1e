"""
Affine — Multiply then add
==========================
Each symbol at position p becomes the symbol at (m·p + a) mod n, where n is
the alphabet length. Decryption needs the inverse of m modulo n, so m must
share no factor with n; any other m is refused with CipherKeyError rather
than producing text that cannot be decrypted.

Caesar is the special case m = 1.
"""

import random
from typing import Optional

from ..alphabet import BASIC_LATIN, Alphabet, check_input
from ..cipher import Cipher
from ..errors import CipherKeyError, InvalidConfiguration
from ..math_functions import mul_inv


class Affine(Cipher):
    """Affine substitution over an arbitrary alphabet."""

    def __init__(self, add_key: int = 0, mul_key: int = 1,
                 alphabet: str = BASIC_LATIN):
        self.add_key = add_key
        self.mul_key = mul_key
        self.alphabet_string = alphabet

    @property
    def alphabet_string(self) -> str:
        return self._alphabet_string

    @alphabet_string.setter
    def alphabet_string(self, value: str) -> None:
        self._alphabet_string = value
        self.alphabet = Alphabet.unique_from(value)

    def find_mul_inverse(self) -> int:
        inv = mul_inv(self.mul_key, len(self.alphabet))
        if inv is None:
            raise CipherKeyError(
                "The multiplicative key of an Affine cipher cannot share "
                "any factors with the length of the alphabet."
            )
        return inv

    def encrypt(self, text: str) -> str:
        check_input(text, self.alphabet)
        # unused here, but it has to exist or decryption is impossible
        self.find_mul_inverse()
        n = len(self.alphabet)
        return "".join(
            self.alphabet[(self.alphabet.position_of(c) * self.mul_key + self.add_key) % n]
            for c in text
        )

    def decrypt(self, text: str) -> str:
        check_input(text, self.alphabet)
        inv = self.find_mul_inverse()
        n = len(self.alphabet)
        return "".join(
            self.alphabet[((self.alphabet.position_of(c) - self.add_key) * inv) % n]
            for c in text
        )

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        n = len(self.alphabet)
        if n < 2:
            raise InvalidConfiguration("An Affine key needs an alphabet of at least two symbols.")
        self.add_key = rng.randrange(n)
        while True:
            mul = rng.randrange(1, n)
            if mul_inv(mul, n) is not None:
                self.mul_key = mul
                break
