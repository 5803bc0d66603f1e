"""
Enigma M3 — Three-rotor Wehrmacht / Kriegsmarine machine
=========================================================
Plugboard, three rotors chosen from I–VIII, and a reflector. Every key
press first advances the rotors (with the historical middle-rotor double
step), then the current passes

    plugboard → rotors right to left → reflector → rotors left to right → plugboard

The reflector makes the whole path an involution: the same setting both
encrypts and decrypts, and no letter ever encrypts to itself.

Settings:
    rotors     three names from ROTORS, left to right, no repeats
    reflector  a name from REFLECTORS
    positions  message key, "AAA" or (0, 0, 0)
    rings      Ringstellung, same forms
    plugboard  up to 13 space-separated pairs, "AB CD EF"

Input must be A–Z; prep_enigma_text() turns German prose into that form.
"""

import logging
import random
import string
from typing import Optional, Sequence, Union

from ..alphabet import BASIC_LATIN
from ..errors import InvalidConfiguration, InvalidInputChar
from .rotor_engine import DoubleStepping, Plugboard, Reflector, Rotor, RotorMachine

logger = logging.getLogger(__name__)


ROTORS = {
    "I":    Rotor("I",    "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":   Rotor("II",   "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":  Rotor("III",  "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":   Rotor("IV",   "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":    Rotor("V",    "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":   Rotor("VI",   "JPGVOUMFYQBENHZRDKASXLICTW", "MZ"),
    "VII":  Rotor("VII",  "NZJHGRCXMYSWBOUFAIVLPEKQDT", "MZ"),
    "VIII": Rotor("VIII", "FKQHTLXOCBJSPDZRAMEWNIUYGV", "MZ"),
}

REFLECTORS = {
    "A":      Reflector("A",      "EJMZALYXVBWFCRQUONTSPIKHGD"),
    "B":      Reflector("B",      "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
    "C":      Reflector("C",      "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    "B-thin": Reflector("B-thin", "ENKQAUYWJICOPBLMDXZVFTHRGS"),
    "C-thin": Reflector("C-thin", "RDOBJNTKVEHMLFCWZAXGYIPSUQ"),
}

MAX_PLUGBOARD_PAIRS = 13

_UMLAUTS = {
    "Ä": "AE", "ä": "AE",
    "Ö": "OE", "ö": "OE",
    "Ü": "UE", "ü": "UE",
    "ẞ": "SS", "ß": "SS",
}


def prep_enigma_text(text: str) -> str:
    """
    Uppercase, drop whitespace and ASCII punctuation, spell out umlauts and
    eszett. Anything else raises InvalidInputChar.
    """
    out = []
    for t in text:
        if t in BASIC_LATIN:
            out.append(t)
        elif t.isspace() or t in string.punctuation:
            continue
        elif t.isascii() and t.upper() in BASIC_LATIN:
            out.append(t.upper())
        elif t in _UMLAUTS:
            out.append(_UMLAUTS[t])
        else:
            raise InvalidInputChar(t)
    return "".join(out)


def _to_indices(setting: Union[str, Sequence[int]]) -> list:
    if isinstance(setting, str):
        for c in setting:
            if c not in BASIC_LATIN:
                raise InvalidConfiguration(f"Rotor setting {c!r} must be a letter A-Z.")
        return [BASIC_LATIN.index(c) for c in setting]
    return [int(n) % 26 for n in setting]


class EnigmaM3(RotorMachine):
    """Enigma M3 with the historical rotor and reflector catalog."""

    def __init__(self, rotors: Sequence[str] = ("I", "II", "III"),
                 reflector: str = "B",
                 positions: Union[str, Sequence[int]] = (0, 0, 0),
                 rings: Union[str, Sequence[int]] = (0, 0, 0),
                 plugboard: str = ""):
        super().__init__(
            rotors=[self._catalog_rotor(name) for name in rotors],
            reflector=self._catalog_reflector(reflector),
            plugboard=Plugboard(plugboard, max_pairs=MAX_PLUGBOARD_PAIRS),
            stepping=DoubleStepping(),
        )
        self.set_positions(_to_indices(positions))
        self.set_rings(_to_indices(rings))

    @staticmethod
    def _catalog_rotor(name: str) -> Rotor:
        try:
            return ROTORS[name]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown Enigma rotor {name!r}. Expected one of {list(ROTORS)}."
            ) from None

    @staticmethod
    def _catalog_reflector(name: str) -> Reflector:
        try:
            return REFLECTORS[name]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown Enigma reflector {name!r}. Expected one of {list(REFLECTORS)}."
            ) from None

    # ── settings ─────────────────────────────────────────────────────────────

    def set_rotors(self, names: Sequence[str]) -> None:
        """Swap in catalog rotors, keeping the current positions and rings."""
        if len(names) != 3:
            raise InvalidConfiguration("Enigma M3 takes exactly three rotors.")
        fresh = [self._catalog_rotor(n).copy() for n in names]
        for new, old in zip(fresh, self.rotors):
            new.position, new.ring = old.position, old.ring
        self.rotors = fresh
        logger.info(f"Enigma rotors set to {'-'.join(names)}")

    def set_reflector(self, name: str) -> None:
        self.reflector = self._catalog_reflector(name)

    def set_plugboard(self, pairs: str) -> None:
        self.plugboard = Plugboard(pairs, max_pairs=MAX_PLUGBOARD_PAIRS)

    def set_positions(self, positions: Union[str, Sequence[int]]) -> None:
        super().set_positions(_to_indices(positions))

    def set_rings(self, rings: Union[str, Sequence[int]]) -> None:
        super().set_rings(_to_indices(rings))

    @property
    def indicator(self) -> str:
        """Rotor positions as shown in the machine's windows."""
        return "".join(BASIC_LATIN[r.position] for r in self.rotors)

    def validate(self) -> None:
        super().validate()
        if len(self.rotors) != 3:
            raise InvalidConfiguration("Enigma M3 takes exactly three rotors.")
        names = [r.name for r in self.rotors]
        if len(set(names)) != 3:
            raise InvalidConfiguration(f"Enigma rotors must all be different, got {names}.")
        if self.reflector is None:
            raise InvalidConfiguration("Enigma needs a reflector.")

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        self.set_rotors(rng.sample(list(ROTORS), 3))
        self.set_reflector(rng.choice(["B", "C"]))
        super().randomize(rng)
        letters = rng.sample(BASIC_LATIN, 20)
        self.set_plugboard(" ".join(letters[i] + letters[i + 1] for i in range(0, 20, 2)))
