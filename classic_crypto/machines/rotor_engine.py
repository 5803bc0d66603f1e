"""
Rotor engine — the shared machinery of the cipher machines
===========================================================
A cipher machine is a bank of stepping components plus a signal path.
For every symbol the machine

    1. steps the components that are due (the stepping policy),
    2. sends the symbol's index through the signal path,
    3. emits the symbol at the resulting index,

or, for machines that advance after printing (M209, Purple), 2–3 then 1.

`Machine` captures that loop once. Each run clones the stepping state, so
the stored configuration is the message setting and is never advanced by
encrypting or decrypting.

`RotorMachine` is the wired-rotor family built on it:

    plugboard → rotors right-to-left → reflector → rotors left-to-right → plugboard

With a reflector the path is an involution and the machine is
self-reciprocal (Enigma). Without one, the signal leaves after the first
pass and decryption runs the inverse wiring (Hebern-style machines).

Stepping policies are pluggable:
    OdometerStepping  — right rotor always steps, carry on notch
    DoubleStepping    — Enigma's ratchet, including the middle-rotor double step

Lookups are on integer indices; symbols only exist at the edges.
"""

import copy
import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Sequence, Union

from ..alphabet import BASIC_LATIN, Alphabet, check_input
from ..cipher import Cipher
from ..errors import InvalidConfiguration

logger = logging.getLogger(__name__)


# ── components ───────────────────────────────────────────────────────────────

class Rotor:
    """A wired rotor with position, ring setting and turnover notches."""

    def __init__(self, name: str, wiring: str, notches: str = "",
                 alphabet: str = BASIC_LATIN):
        if sorted(wiring) != sorted(alphabet):
            raise InvalidConfiguration(f"Rotor {name} wiring must be a permutation of the alphabet.")
        if not set(notches) <= set(alphabet):
            raise InvalidConfiguration(f"Rotor {name} notches must be in the alphabet.")
        self.name     = name
        self.wiring   = wiring
        self.alphabet = alphabet
        self.size     = len(alphabet)
        self.notches  = tuple(alphabet.index(c) for c in notches)
        self._rtl = [alphabet.index(c) for c in wiring]
        self._ltr = [wiring.index(c) for c in alphabet]
        self.position = 0
        self.ring     = 0

    def step(self) -> None:
        """Advance one position."""
        self.position = (self.position + 1) % self.size

    def at_notch(self) -> bool:
        """True when the rotor sits on a turnover notch."""
        return self.position in self.notches

    def encrypt_rtl(self, entry: int) -> int:
        """Signal index entering from the right, before the reflector."""
        inner = (entry + self.position - self.ring) % self.size
        return (self._rtl[inner] - self.position + self.ring) % self.size

    def encrypt_ltr(self, entry: int) -> int:
        """Signal index entering from the left, the inverse wiring."""
        inner = (entry + self.position - self.ring) % self.size
        return (self._ltr[inner] - self.position + self.ring) % self.size

    def copy(self) -> "Rotor":
        """Independent rotor with the same wiring and setting."""
        return copy.copy(self)

    # equality is the wiring only, not the current setting
    def __eq__(self, other) -> bool:
        if isinstance(other, Rotor):
            return self.wiring == other.wiring
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.wiring)

    def __str__(self) -> str:
        return self.wiring[self.position:] + self.wiring[:self.position]

    def __repr__(self) -> str:
        return f"<Rotor {self.name} pos={self.position} ring={self.ring}>"


class Reflector:
    """A fixed involution with no fixed points."""

    def __init__(self, name: str, wiring: str, alphabet: str = BASIC_LATIN):
        if sorted(wiring) != sorted(alphabet):
            raise InvalidConfiguration(f"Reflector {name} wiring must be a permutation of the alphabet.")
        mapping = [alphabet.index(c) for c in wiring]
        for i, j in enumerate(mapping):
            if i == j or mapping[j] != i:
                raise InvalidConfiguration(
                    f"Reflector {name} wiring must be an involution with no fixed points."
                )
        self.name     = name
        self.wiring   = wiring
        self.alphabet = alphabet
        self._map     = mapping

    def reflect(self, entry: int) -> int:
        return self._map[entry]

    def __eq__(self, other) -> bool:
        if isinstance(other, Reflector):
            return self.wiring == other.wiring
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.wiring)

    def __repr__(self) -> str:
        return f"<Reflector {self.name}>"


class Plugboard:
    """
    Partial involution over the alphabet: listed pairs swap, every other
    symbol passes straight through.

    Pairs are given as "AB CD EF" or as an iterable of two-symbol strings.
    """

    def __init__(self, pairs: Union[str, Iterable[str]] = "",
                 alphabet: str = BASIC_LATIN, max_pairs: Optional[int] = None):
        if isinstance(pairs, str):
            pairs = pairs.split()
        pairs = list(pairs)
        if max_pairs is not None and len(pairs) > max_pairs:
            raise InvalidConfiguration(f"Plugboard cannot include more than {max_pairs} pairs.")

        self.alphabet = alphabet
        self.mapping  = {c: c for c in alphabet}
        used = set()
        for pair in pairs:
            if len(pair) != 2:
                raise InvalidConfiguration(f"Plugboard pair {pair!r} must be exactly 2 symbols.")
            a, b = pair
            if a == b:
                raise InvalidConfiguration(f"Plugboard cannot connect {a!r} to itself.")
            if a not in alphabet or b not in alphabet:
                bad = a if a not in alphabet else b
                raise InvalidConfiguration(f"Plugboard symbol {bad!r} is not in the alphabet.")
            if a in used or b in used:
                dup = a if a in used else b
                raise InvalidConfiguration(
                    f"Plugboard symbol {dup!r} is used twice; pairs must be disjoint."
                )
            self.mapping[a], self.mapping[b] = b, a
            used.update((a, b))
        self.pairs = pairs
        self._index = [alphabet.index(self.mapping[c]) for c in alphabet]

    def swap(self, symbol: str) -> str:
        """Plugged partner of `symbol`, or `symbol` itself."""
        return self.mapping.get(symbol, symbol)

    def swap_index(self, n: int) -> int:
        return self._index[n]

    def __str__(self) -> str:
        return " ".join(self.pairs)

    def __repr__(self) -> str:
        return f"<Plugboard {self}>"


# ── stepping policies ────────────────────────────────────────────────────────

class SteppingPolicy(ABC):
    """Decides which rotors advance before a symbol. Rotors are ordered left to right."""

    @abstractmethod
    def advance(self, rotors: List[Rotor]) -> None:
        ...


class OdometerStepping(SteppingPolicy):
    """Rightmost rotor always steps; a rotor leaving its notch carries to the next."""

    def advance(self, rotors: List[Rotor]) -> None:
        for rotor in reversed(rotors):
            carry = rotor.at_notch()
            rotor.step()
            if not carry:
                break


class DoubleStepping(SteppingPolicy):
    """
    Enigma ratchet for the three stepping rotors (the rightmost three).
    A middle rotor sitting on its notch steps itself and the left rotor,
    which makes it move on two consecutive keypresses.
    """

    def advance(self, rotors: List[Rotor]) -> None:
        left, middle, right = rotors[-3:]
        if middle.at_notch():
            middle.step()
            left.step()
        elif right.at_notch():
            middle.step()
        right.step()


# ── machines ─────────────────────────────────────────────────────────────────

class Machine(Cipher):
    """
    Template for stateful cipher machines. Subclasses supply the state
    clone, the stepping rule and the per-index substitution.
    """

    STEP_BEFORE = True

    alphabet: Alphabet

    def validate(self) -> None:
        """Raise InvalidConfiguration if the settings are inconsistent."""

    def _prepare(self, text: str) -> str:
        return text

    @abstractmethod
    def _fresh_state(self):
        ...

    @abstractmethod
    def _step(self, state) -> None:
        ...

    @abstractmethod
    def _encipher(self, state, n: int) -> int:
        ...

    def _decipher(self, state, n: int) -> int:
        return self._encipher(state, n)

    def _run(self, text: str, transform: Callable[[object, int], int]) -> str:
        self.validate()
        text = self._prepare(text)
        check_input(text, self.alphabet)
        state = self._fresh_state()
        out = []
        for c in text:
            if self.STEP_BEFORE:
                self._step(state)
            out.append(self.alphabet[transform(state, self.alphabet.position_of(c))])
            if not self.STEP_BEFORE:
                self._step(state)
        logger.debug(f"{type(self).__name__}: processed {len(text)} symbols")
        return "".join(out)

    def encrypt(self, text: str) -> str:
        return self._run(text, self._encipher)

    def decrypt(self, text: str) -> str:
        return self._run(text, self._decipher)


class RotorMachine(Machine):
    """
    Generic wired-rotor machine. Rotors are listed left to right; the signal
    enters on the right.
    """

    def __init__(self, rotors: Sequence[Rotor] = (),
                 reflector: Optional[Reflector] = None,
                 plugboard: Optional[Plugboard] = None,
                 stepping: Optional[SteppingPolicy] = None,
                 alphabet: str = BASIC_LATIN):
        self.alphabet  = Alphabet.unique_from(alphabet)
        self.rotors    = [r.copy() for r in rotors]
        self.reflector = reflector
        self.plugboard = plugboard if plugboard is not None else Plugboard(alphabet=alphabet)
        self.stepping  = stepping if stepping is not None else OdometerStepping()

    @property
    def reciprocal(self) -> bool:
        return self.reflector is not None

    def validate(self) -> None:
        if not self.rotors:
            raise InvalidConfiguration("A rotor machine needs at least one rotor.")
        alphabet = str(self.alphabet)
        for rotor in self.rotors:
            if rotor.alphabet != alphabet:
                raise InvalidConfiguration(f"Rotor {rotor.name} is wired for a different alphabet.")
        if self.reflector is not None and self.reflector.alphabet != alphabet:
            raise InvalidConfiguration(f"Reflector {self.reflector.name} is wired for a different alphabet.")
        if self.plugboard.alphabet != alphabet:
            raise InvalidConfiguration("Plugboard is wired for a different alphabet.")

    def _fresh_state(self) -> List[Rotor]:
        return [r.copy() for r in self.rotors]

    def _step(self, rotors: List[Rotor]) -> None:
        self.stepping.advance(rotors)
        logger.debug(f"rotor positions {[r.position for r in rotors]}")

    def _encipher(self, rotors: List[Rotor], n: int) -> int:
        x = self.plugboard.swap_index(n)
        for rotor in reversed(rotors):
            x = rotor.encrypt_rtl(x)
        if self.reflector is not None:
            x = self.reflector.reflect(x)
            for rotor in rotors:
                x = rotor.encrypt_ltr(x)
        return self.plugboard.swap_index(x)

    def _decipher(self, rotors: List[Rotor], n: int) -> int:
        if self.reflector is not None:
            return self._encipher(rotors, n)
        x = self.plugboard.swap_index(n)
        for rotor in rotors:
            x = rotor.encrypt_ltr(x)
        return self.plugboard.swap_index(x)

    def set_positions(self, positions: Sequence[int]) -> None:
        """Message key, one position per rotor, left to right."""
        if len(positions) != len(self.rotors):
            raise InvalidConfiguration(f"Expected {len(self.rotors)} rotor positions.")
        for rotor, p in zip(self.rotors, positions):
            rotor.position = p % rotor.size

    def set_rings(self, rings: Sequence[int]) -> None:
        """Ring settings, one per rotor, left to right."""
        if len(rings) != len(self.rotors):
            raise InvalidConfiguration(f"Expected {len(self.rotors)} ring settings.")
        for rotor, r in zip(self.rotors, rings):
            rotor.ring = r % rotor.size

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        for rotor in self.rotors:
            rotor.position = rng.randrange(rotor.size)
            rotor.ring     = rng.randrange(rotor.size)
