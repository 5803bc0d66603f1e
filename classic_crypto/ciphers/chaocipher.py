"""
Chaocipher — Self-permuting dual alphabet
=========================================
Two alphabet disks sit side by side. The right disk holds the plaintext
view, the left disk the ciphertext view. To encrypt a letter, find it on
the right, read the letter at the same position on the left, then permute
both disks before the next letter:

    left:   rotate so the output letter is at the zenith (index 0),
            pull out the letter at index 1 and reinsert it at index 13
    right:  rotate so the input letter is at the zenith, one step further,
            pull out the letter at index 2 and reinsert it at index 13

Decryption looks up on the left and reads from the right, but permutes the
disks with exactly the same rules, so the two sides stay in lockstep.

Historical note: invented by John F. Byrne in 1918, the mechanism stayed
secret until his family published it in 2010.

Every call works on copies of the stored disks; the configuration is never
advanced by a run.
"""

import random
from typing import Optional, Tuple

from ..alphabet import Alphabet, check_input
from ..cipher import Cipher
from ..errors import InvalidConfiguration


class Chaocipher(Cipher):
    """Chaocipher with configurable left (cipher) and right (plain) disks."""

    DEFAULT_LEFT  = "HXUCZVAMDSLKPEFJRIGTWOBNYQ"
    DEFAULT_RIGHT = "PTLNBQDEOYSFAVZKGJRIHWXUMC"

    ZENITH_PLUS_ONE = 1
    ZENITH_PLUS_TWO = 2
    NADIR           = 13

    def __init__(self, left: str = DEFAULT_LEFT, right: str = DEFAULT_RIGHT):
        self.left_string  = left
        self.right_string = right

    @property
    def left_string(self) -> str:
        return self._left_string

    @left_string.setter
    def left_string(self, value: str) -> None:
        self._left_string = value
        self.left = Alphabet.unique_from(value)

    @property
    def right_string(self) -> str:
        return self._right_string

    @right_string.setter
    def right_string(self, value: str) -> None:
        self._right_string = value
        self.right = Alphabet.unique_from(value)

    def validate(self) -> None:
        if len(self.left) != len(self.right):
            raise InvalidConfiguration("Chaocipher alphabets must have the same length.")
        if set(self.left) != set(self.right):
            raise InvalidConfiguration("Chaocipher alphabets must contain the same symbols.")
        if len(self.left) <= self.NADIR:
            raise InvalidConfiguration(
                f"Chaocipher alphabets need more than {self.NADIR} symbols."
            )

    # ── permutation rules ────────────────────────────────────────────────────

    def _permute(self, left: Alphabet, right: Alphabet, n: int) -> None:
        left.rotate_left(n)
        left.insert(self.NADIR, left.remove(self.ZENITH_PLUS_ONE))

        right.rotate_left(n + 1)
        right.insert(self.NADIR, right.remove(self.ZENITH_PLUS_TWO))

    def _working_disks(self) -> Tuple[Alphabet, Alphabet]:
        self.validate()
        return self.left.copy(), self.right.copy()

    # ── cipher ───────────────────────────────────────────────────────────────

    def encrypt(self, text: str) -> str:
        check_input(text, self.right)
        left, right = self._working_disks()
        out = []
        for c in text:
            n = right.position_of(c)
            out.append(left[n])
            self._permute(left, right, n)
        return "".join(out)

    def decrypt(self, text: str) -> str:
        check_input(text, self.left)
        left, right = self._working_disks()
        out = []
        for c in text:
            n = left.position_of(c)
            out.append(right[n])
            self._permute(left, right, n)
        return "".join(out)

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        self.left_string  = str(self.left.shuffled(rng))
        self.right_string = str(self.right.shuffled(rng))
