"""
Purple — Japanese Type B cipher machine (97-shiki ōbun injiki)
==============================================================
Diplomatic cipher machine, 1939–1945. Instead of rotors it used telephone
stepping switches. The 26 letters are split by a plugboard into two
groups:

    sixes      6 letters, one 25-position switch
    twenties  20 letters, a cascade of three 25-position switches

Each switch position is a fixed wiring (a permutation of 6 or 20 wires).
A letter goes plugboard → sixes or twenties cascade → plugboard.

Stepping, after every letter:
    the sixes switch always steps, and exactly one twenties switch steps:
    slow    if the sixes is at position 23 and the middle switch at 24
    fast    else if the sixes is at position 24
    middle  otherwise

Which twenties switch plays fast, middle and slow is part of the key. The
switches live in a fixed arena (indices 0, 1, 2) and a separate role map
says which index is which speed; a key must name each role exactly once.

Keys are usually written in the historical form "9-1,24,6-23": sixes
position, the three twenties positions (all 1-based), then the fast and
middle switch numbers.

Wiring: the surviving reconstructions of the switch wiring are not bundled.
SIXES_WIRING and TWENTIES_WIRING are reproducible stand-in tables built
from fixed seeds; pass the historical tables to the constructor to
reproduce real traffic.
"""

import copy
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..alphabet import BASIC_LATIN, Alphabet
from ..errors import InvalidConfiguration
from .rotor_engine import Machine

logger = logging.getLogger(__name__)

POSITIONS = 25
SIXES = 6
TWENTIES = 20

DEFAULT_PLUGBOARD = "NOKTYUXEQLHBRMPDICJASVWGZF"
DEFAULT_KEY = "9-1,24,6-23"


def _generate_wiring(size: int, seed: int) -> List[List[int]]:
    rng = random.Random(seed)
    return [rng.sample(range(size), size) for _ in range(POSITIONS)]


def invert_wiring(table: Sequence[Sequence[int]]) -> List[List[int]]:
    out = []
    for row in table:
        inv = [0] * len(row)
        for i, j in enumerate(row):
            inv[j] = i
        out.append(inv)
    return out


SIXES_WIRING = _generate_wiring(SIXES, 97)
TWENTIES_WIRING = [_generate_wiring(TWENTIES, 97 + n) for n in (1, 2, 3)]


class SwitchSpeed(enum.Enum):
    SLOW = "slow"
    MIDDLE = "middle"
    FAST = "fast"


@dataclass
class Switch:
    """A stepping switch: a position and one wiring per position."""

    wiring: List[List[int]]
    position: int = 0
    _inverse: List[List[int]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if len(self.wiring) != POSITIONS:
            raise InvalidConfiguration(f"A switch needs wiring for all {POSITIONS} positions.")
        size = len(self.wiring[0])
        for row in self.wiring:
            if sorted(row) != list(range(size)):
                raise InvalidConfiguration("Every switch position must be a permutation of its wires.")
        self._inverse = invert_wiring(self.wiring)
        self.position %= POSITIONS

    def step(self) -> None:
        """Advance to the next contact, wrapping after 25."""
        self.position = (self.position + 1) % POSITIONS

    def encrypt(self, n: int) -> int:
        """Wire `n` through the wiring at the current position."""
        return self.wiring[self.position][n]

    def decrypt(self, n: int) -> int:
        """Inverse of encrypt at the current position."""
        return self._inverse[self.position][n]


@dataclass
class SwitchBank:
    """The sixes switch, the arena of three twenties and the speed-role map."""

    sixes: Switch
    twenties: List[Switch]
    speeds: Dict[SwitchSpeed, int]

    def validate(self) -> None:
        """Raise InvalidConfiguration unless each speed role names a distinct switch."""
        if len(self.twenties) != 3:
            raise InvalidConfiguration("Purple has exactly three twenties switches.")
        if len(self.sixes.wiring[0]) != SIXES or any(len(t.wiring[0]) != TWENTIES for t in self.twenties):
            raise InvalidConfiguration(f"Purple switches carry {SIXES} and {TWENTIES} wires.")
        if set(self.speeds) != set(SwitchSpeed):
            raise InvalidConfiguration("Each of the fast, middle and slow roles must be assigned.")
        if sorted(self.speeds.values()) != [0, 1, 2]:
            raise InvalidConfiguration(
                "Exactly one twenties switch must be fast, one middle and one slow."
            )

    def switch(self, speed: SwitchSpeed) -> Switch:
        """The twenties switch currently playing `speed`."""
        return self.twenties[self.speeds[speed]]

    def step(self) -> None:
        """Step the sixes and exactly one twenties switch."""
        spos = self.sixes.position
        mpos = self.switch(SwitchSpeed.MIDDLE).position

        self.sixes.step()
        if spos == 23 and mpos == 24:
            self.switch(SwitchSpeed.SLOW).step()
        elif spos == 24:
            self.switch(SwitchSpeed.FAST).step()
        else:
            self.switch(SwitchSpeed.MIDDLE).step()

    def encrypt_num(self, n: int) -> int:
        """Wire index 0-5 through the sixes, 6-25 through the twenties cascade."""
        if n < SIXES:
            return self.sixes.encrypt(n)
        n = self.twenties[2].encrypt(n - SIXES)
        n = self.twenties[1].encrypt(n)
        return self.twenties[0].encrypt(n) + SIXES

    def decrypt_num(self, n: int) -> int:
        """Inverse of encrypt_num."""
        if n < SIXES:
            return self.sixes.decrypt(n)
        n = self.twenties[0].decrypt(n - SIXES)
        n = self.twenties[1].decrypt(n)
        return self.twenties[2].decrypt(n) + SIXES


def parse_key(key: str):
    """
    "9-1,24,6-23" -> (8, [0, 23, 5], fast index 1, middle index 2).
    Positions are 1-based in the key, 0-based in the result.
    """
    try:
        sixes, twenties, motion = key.replace(" ", "").split("-")
        positions = [int(p) - 1 for p in twenties.split(",")]
        sixes_pos = int(sixes) - 1
        fast, middle = int(motion[0]) - 1, int(motion[1]) - 1
    except (ValueError, IndexError):
        raise InvalidConfiguration(f"Purple key {key!r} is not of the form '9-1,24,6-23'.") from None
    if len(motion) != 2 or len(positions) != 3:
        raise InvalidConfiguration(f"Purple key {key!r} is not of the form '9-1,24,6-23'.")
    for p in [sixes_pos] + positions:
        if not 0 <= p < POSITIONS:
            raise InvalidConfiguration(f"Purple switch positions run from 1 to {POSITIONS}.")
    if fast == middle or not {fast, middle} <= {0, 1, 2}:
        raise InvalidConfiguration("Purple fast and middle switches must be two different switches 1-3.")
    return sixes_pos, positions, fast, middle


class Purple(Machine):
    """Type B cipher machine."""

    STEP_BEFORE = False

    def __init__(self, key: str = DEFAULT_KEY, plugboard: str = DEFAULT_PLUGBOARD,
                 sixes_wiring: Optional[List[List[int]]] = None,
                 twenties_wiring: Optional[List[List[List[int]]]] = None):
        self.set_plugboard(plugboard)
        sixes_pos, positions, fast, middle = parse_key(key)
        twenties_wiring = twenties_wiring if twenties_wiring is not None else TWENTIES_WIRING
        if len(twenties_wiring) != 3:
            raise InvalidConfiguration("Purple needs wiring for three twenties switches.")
        self.switches = SwitchBank(
            sixes=Switch(sixes_wiring if sixes_wiring is not None else SIXES_WIRING, sixes_pos),
            twenties=[Switch(w, p) for w, p in zip(twenties_wiring, positions)],
            speeds={},
        )
        self.set_speeds(fast, middle)

    # ── settings ─────────────────────────────────────────────────────────────

    def set_plugboard(self, plugboard: str) -> None:
        """Letter at index n is wired to input n (0–5 sixes, 6–25 twenties)."""
        if len(plugboard) != 26 or set(plugboard) != set(BASIC_LATIN):
            raise InvalidConfiguration("Purple plugboard must list each letter A-Z exactly once.")
        self.alphabet = Alphabet(plugboard)

    @property
    def plugboard(self) -> str:
        return str(self.alphabet)

    def set_speeds(self, fast: int, middle: int) -> None:
        """Assign roles by twenties index; the remaining switch is slow."""
        slow = ({0, 1, 2} - {fast, middle})
        self.switches.speeds = {SwitchSpeed.FAST: fast, SwitchSpeed.MIDDLE: middle}
        if len(slow) == 1:
            self.switches.speeds[SwitchSpeed.SLOW] = slow.pop()
        logger.info(f"Purple switch speeds {self.switches.speeds}")

    def set_key(self, key: str) -> None:
        """Apply a key such as "9-1,24,6-23"."""
        sixes_pos, positions, fast, middle = parse_key(key)
        self.switches.sixes.position = sixes_pos
        for switch, p in zip(self.switches.twenties, positions):
            switch.position = p
        self.set_speeds(fast, middle)

    @property
    def key(self) -> str:
        speeds = self.switches.speeds
        return "{}-{}-{}{}".format(
            self.switches.sixes.position + 1,
            ",".join(str(s.position + 1) for s in self.switches.twenties),
            speeds[SwitchSpeed.FAST] + 1,
            speeds[SwitchSpeed.MIDDLE] + 1,
        )

    def validate(self) -> None:
        self.switches.validate()

    # ── machine ──────────────────────────────────────────────────────────────

    def _fresh_state(self) -> SwitchBank:
        return copy.deepcopy(self.switches)

    def _step(self, switches: SwitchBank) -> None:
        switches.step()

    def _encipher(self, switches: SwitchBank, n: int) -> int:
        return switches.encrypt_num(n)

    def _decipher(self, switches: SwitchBank, n: int) -> int:
        return switches.decrypt_num(n)

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = self._rng(rng)
        self.set_plugboard("".join(rng.sample(BASIC_LATIN, 26)))
        self.switches.sixes.position = rng.randrange(POSITIONS)
        for switch in self.switches.twenties:
            switch.position = rng.randrange(POSITIONS)
        fast, middle = rng.sample(range(3), 2)
        self.set_speeds(fast, middle)
