"""
classic_crypto — Classical ciphers, cipher machines and hashers
================================================================
From Caesar's shift to the Purple switch bank, behind one call surface:
encrypt, decrypt, randomize, reset.

Families:
    SUBSTITUTION   — Caesar, Affine
    PERMUTATION    — Chaocipher (self-permuting dual alphabet)
    TRANSPOSITION  — RS44 (Rasterschlüssel 44 stencil)
    ROTOR MACHINES — Enigma M3, generic RotorMachine
    PIN AND LUG    — Hagelin M-209
    SWITCH BANKS   — Purple (Type B)
    HASHERS        — SHA-2/SHA-3/BLAKE2/…, HMAC, PBKDF2, FNV

License: Apache 2.0
"""

__version__ = "1.0.0"

from .alphabet                import Alphabet, check_input, keyed_alphabet
from .cipher                  import Cipher
from .errors                  import (CipherError, CipherKeyError, InvalidConfiguration,
                                      InvalidInputChar, InvalidInputFormat, InvalidInputLength)
from .ciphers.caesar          import Caesar
from .ciphers.affine          import Affine
from .ciphers.chaocipher      import Chaocipher
from .ciphers.rs44            import Rs44
from .machines.rotor_engine   import RotorMachine, Rotor, Reflector, Plugboard
from .machines.enigma         import EnigmaM3
from .machines.m209           import M209
from .machines.purple         import Purple
from .hashers                 import Hasher, HmacHasher, Pbkdf2Hasher, FnvHasher, ByteFormat
from .registry                import CIPHERS, build_cipher

__all__ = [
    "Alphabet",
    "check_input",
    "keyed_alphabet",
    "Cipher",
    "CipherError",
    "CipherKeyError",
    "InvalidConfiguration",
    "InvalidInputChar",
    "InvalidInputFormat",
    "InvalidInputLength",
    "Caesar",
    "Affine",
    "Chaocipher",
    "Rs44",
    "RotorMachine",
    "Rotor",
    "Reflector",
    "Plugboard",
    "EnigmaM3",
    "M209",
    "Purple",
    "Hasher",
    "HmacHasher",
    "Pbkdf2Hasher",
    "FnvHasher",
    "ByteFormat",
    "CIPHERS",
    "build_cipher",
]
