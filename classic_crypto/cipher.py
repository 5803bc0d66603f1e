"""
Cipher contract
===============
The one call surface every cipher and machine in the package offers:

    encrypt(text)      -> str   (raises a CipherError, never returns partial output)
    decrypt(text)      -> str
    randomize(rng)     -> None  (new random key from an explicit random.Random)
    reset()            -> None  (back to the documented default configuration)

Round-trip guarantee: for any valid configuration and any text over the
cipher's accepted alphabet, ``decrypt(encrypt(x)) == x``.

Concrete classes take their whole configuration as constructor keyword
arguments with defaults, so ``reset`` is simply the constructor run again.
An instance is not thread-safe; give each caller its own.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional


class Cipher(ABC):
    """Abstract base for every classical cipher and cipher machine."""

    @abstractmethod
    def encrypt(self, text: str) -> str:
        ...

    @abstractmethod
    def decrypt(self, text: str) -> str:
        ...

    @abstractmethod
    def randomize(self, rng: Optional[random.Random] = None) -> None:
        ...

    def reset(self) -> None:
        """Restore the default configuration."""
        self.__init__()

    @staticmethod
    def _rng(rng: Optional[random.Random]) -> random.Random:
        return rng if rng is not None else random.SystemRandom()
