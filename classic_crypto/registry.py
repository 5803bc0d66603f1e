"""
Cipher catalog
==============
One name per cipher family, so a host can build and drive any of them
through the same four calls without knowing the concrete class.

    cipher = build_cipher("enigma", rotors=("II", "IV", "V"), positions="BLA")
    cipher.encrypt("HELLO")
"""

import logging

from .cipher import Cipher
from .ciphers.affine import Affine
from .ciphers.caesar import Caesar
from .ciphers.chaocipher import Chaocipher
from .ciphers.rs44 import Rs44
from .errors import InvalidConfiguration
from .machines.enigma import EnigmaM3
from .machines.m209 import M209
from .machines.purple import Purple

logger = logging.getLogger(__name__)

CIPHERS = {
    "caesar":     Caesar,
    "affine":     Affine,
    "chaocipher": Chaocipher,
    "rs44":       Rs44,
    "enigma":     EnigmaM3,
    "m209":       M209,
    "purple":     Purple,
}


def build_cipher(name: str, **config) -> Cipher:
    """Instantiate the cipher registered as `name` with keyword configuration."""
    try:
        cls = CIPHERS[name.lower()]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown cipher {name!r}. Expected one of {list(CIPHERS)}."
        ) from None
    logger.info(f"building {cls.__name__} with {sorted(config)}")
    return cls(**config)
