"""Small number-theory helpers shared by the substitution ciphers."""

from math import gcd
from typing import Optional


def mul_inv(num: int, modulus: int) -> Optional[int]:
    """Multiplicative inverse of `num` mod `modulus`, or None if it does not exist."""
    if num == 0 or modulus < 1 or gcd(num, modulus) != 1:
        return None
    return pow(num, -1, modulus)
