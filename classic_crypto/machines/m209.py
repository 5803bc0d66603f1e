"""
M-209 — Hagelin pin-and-lug converter
======================================
US Army field cipher, WWII and Korea. Six pin wheels of coprime lengths
(26, 25, 23, 21, 19, 17) and a cage of 27 bars, each carrying two lugs.

For every letter:
    1. each bar whose lug sits against a wheel showing an effective pin at
       its active (sensing) position contributes one to the shift
       (a bar counts at most once even if both lugs engage),
    2. the letter p becomes (shift − p − 1) mod 26, a reversed-alphabet
       Caesar, which makes the machine self-reciprocal,
    3. every wheel advances one position.

Because the wheel lengths are coprime the wheels only return to the same
combination after 26·25·23·21·19·17 letters.

Settings:
    pins          six strings, the effective pin letters of each wheel
    lugs          27 (lug_a, lug_b) pairs, 0 = unused, 1–6 = wheel number
    wheels        six letters shown in the windows, e.g. "AAAAAA"
"""

import copy
import logging
import random
from typing import List, Optional, Sequence, Tuple

from ..alphabet import BASIC_LATIN, Alphabet
from ..errors import InvalidConfiguration
from .rotor_engine import Machine

logger = logging.getLogger(__name__)


M209_ALPHABETS = [
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "ABCDEFGHIJKLMNOPQRSTUVXYZ",
    "ABCDEFGHIJKLMNOPQRSTUVX",
    "ABCDEFGHIJKLMNOPQRSTU",
    "ABCDEFGHIJKLMNOPQRS",
    "ABCDEFGHIJKLMNOPQ",
]

# distance from the window letter to the sensing position of each wheel
M209_ACTIVE = [15, 14, 13, 12, 11, 10]

BARS = 27
WHEELS = 6


class PinWheel:
    """One pin wheel; the front of its alphabet is the letter in the window."""

    def __init__(self, alphabet: str, active: int):
        self.alphabet = Alphabet.unique_from(alphabet)
        self.active   = active
        self.pins     = set()

    def step(self) -> None:
        """Advance the wheel one letter."""
        self.alphabet.rotate_left(1)

    def set_pins(self, pins: str) -> None:
        """Make exactly the listed letters effective pins."""
        for p in pins:
            if p not in self.alphabet:
                raise InvalidConfiguration(
                    f"Effective pin {p!r} is not on the wheel {self.alphabet}."
                )
        self.pins = set(pins)

    def set_display(self, c: str) -> None:
        """Turn the wheel until `c` shows in the window."""
        if c not in self.alphabet:
            raise InvalidConfiguration(f"Wheel {self.alphabet} has no letter {c!r}.")
        self.alphabet.rotate_to(c)

    @property
    def display(self) -> str:
        return self.alphabet.front()

    def active_letter(self) -> str:
        return self.alphabet[self.active]

    def active_is_effective(self) -> bool:
        """True when the pin at the sensing position pushes its lugs."""
        return self.active_letter() in self.pins

    def __len__(self) -> int:
        return len(self.alphabet)

    def __str__(self) -> str:
        return "".join(
            f"[{c}]" if i == self.active else c for i, c in enumerate(self.alphabet)
        )


def default_wheels() -> List[PinWheel]:
    return [PinWheel(a, n) for a, n in zip(M209_ALPHABETS, M209_ACTIVE)]


class M209(Machine):
    """Hagelin M-209-B."""

    STEP_BEFORE = False

    def __init__(self, pins: Optional[Sequence[str]] = None,
                 lugs: Optional[Sequence[Tuple[int, int]]] = None,
                 wheels: str = "AAAAAA"):
        self.alphabet = Alphabet(BASIC_LATIN)
        self.wheels   = default_wheels()
        self.lugs: List[Tuple[int, int]] = [(0, 0)] * BARS
        if pins is not None:
            self.set_pins(pins)
        if lugs is not None:
            self.set_lugs(lugs)
        self.set_wheels(wheels)

    # ── settings ─────────────────────────────────────────────────────────────

    def set_pins(self, pins: Sequence[str]) -> None:
        """Effective pins for all six wheels, left to right."""
        if len(pins) != WHEELS:
            raise InvalidConfiguration(f"M209 needs pin settings for exactly {WHEELS} wheels.")
        for wheel, p in zip(self.wheels, pins):
            wheel.set_pins(p)

    def set_lugs(self, lugs: Sequence[Tuple[int, int]]) -> None:
        """Replace the cage: 27 (lug_a, lug_b) pairs, 0 for an unused lug."""
        self.lugs = [tuple(bar) for bar in lugs]
        self._check_lugs()
        logger.info(f"M209 lug cage set, {sum(1 for a, b in self.lugs if a or b)} active bars")

    def set_wheels(self, settings: str) -> None:
        """Set the six window letters, e.g. "AAAAAA"."""
        if len(settings) != WHEELS:
            raise InvalidConfiguration(f"M209 wheel setting must be {WHEELS} letters.")
        for wheel, c in zip(self.wheels, settings):
            wheel.set_display(c)

    @property
    def wheel_setting(self) -> str:
        return "".join(w.display for w in self.wheels)

    def _check_lugs(self) -> None:
        if len(self.lugs) != BARS:
            raise InvalidConfiguration(f"M209 cage must have exactly {BARS} bars.")
        for bar in self.lugs:
            if len(bar) != 2:
                raise InvalidConfiguration(f"Each M209 bar carries exactly two lugs, got {bar}.")
            a, b = bar
            if not (0 <= a <= WHEELS and 0 <= b <= WHEELS):
                raise InvalidConfiguration(f"Lug positions must be 0 to {WHEELS}, got ({a}, {b}).")
            if a and a == b:
                raise InvalidConfiguration(f"Both lugs of a bar cannot sit on wheel {a}.")

    def validate(self) -> None:
        self._check_lugs()
        for wheel in self.wheels:
            if not wheel.pins <= set(wheel.alphabet):
                raise InvalidConfiguration(f"Effective pins must be on the wheel {wheel.alphabet}.")

    def cage_text(self) -> str:
        rows = []
        for i in range(0, BARS, 9):
            rows.append("  ".join(f"{a}-{b}" for a, b in self.lugs[i:i + 9]))
        return "\n".join(rows)

    def wheels_text(self) -> str:
        return "\n".join(str(w) for w in self.wheels)

    # ── machine ──────────────────────────────────────────────────────────────

    def _fresh_state(self) -> List[PinWheel]:
        return copy.deepcopy(self.wheels)

    def _step(self, wheels: List[PinWheel]) -> None:
        for wheel in wheels:
            wheel.step()

    def shift(self, wheels: List[PinWheel]) -> int:
        """Number of bars kicked out by the current pin positions."""
        sh = 0
        for lug_a, lug_b in self.lugs:
            if lug_a and wheels[lug_a - 1].active_is_effective():
                sh += 1
            elif lug_b and wheels[lug_b - 1].active_is_effective():
                sh += 1
        return sh

    def _encipher(self, wheels: List[PinWheel], n: int) -> int:
        return (self.shift(wheels) - n - 1) % 26

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        self.wheels = default_wheels()
        for wheel in self.wheels:
            wheel.set_pins("".join(c for c in wheel.alphabet if rng.random() < 0.5))
        lugs = []
        for _ in range(BARS):
            a = rng.randrange(WHEELS + 1)
            b = rng.choice([w for w in range(WHEELS + 1) if w == 0 or w != a])
            lugs.append((a, b))
        self.set_lugs(lugs)
        self.set_wheels("".join(rng.choice(str(w.alphabet)) for w in self.wheels))
