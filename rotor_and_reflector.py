# rotor_and_reflector.py
from __future__ import annotations

import string
from typing import Dict, List, Tuple

from debug import Debug

debug = Debug()

ALPHABET = string.ascii_lowercase
SIZE = len(ALPHABET)

# ── permutation tables ───────────────────────────────────────────
# name → (wiring, notch); stack order is fastest rotor first
ROTOR_WIRINGS: Dict[str, Tuple[str, str]] = {
    "I":   ("jgdqoxuscamifrvtpnewkblzyh", "q"),
    "II":  ("ajdksiruxblhwtmcqgznpyfvoe", "e"),
    "III": ("bdfhjlcprtxvznyeiwgakmusqo", "v"),
}
STACK_ORDER: Tuple[str, ...] = ("I", "II", "III")
REFLECTOR_WIRING = "yruhqsldpxngokmiebfzcwvjat"


class Rotor:
    def __init__(self, wiring: str, notch: str, *, name: str = "") -> None:
        if sorted(wiring) != sorted(ALPHABET):
            raise ValueError("wiring must be a permutation of alphabet")
        if len(notch) != 1 or notch not in ALPHABET:
            raise ValueError(f"Notch {notch!r} must be a single alphabet letter")

        self.name = name

        # integer lookup tables
        self.wiring: Tuple[int, ...] = tuple(ALPHABET.index(c) for c in wiring)
        self._rev: Tuple[int, ...] = tuple(wiring.index(c) for c in ALPHABET)

        self.notch = ALPHABET.index(notch)
        self.offset = 0

    # ── stepping --------------------------------------------------
    def at_notch(self) -> bool:
        return self.offset == self.notch

    def advance(self) -> None:
        self.offset = (self.offset + 1) % SIZE
        debug.log("rotor", f"{self.name or '?'} -> {self.window}")

    @property
    def window(self) -> str:
        """Letter currently showing in the rotor window."""
        return ALPHABET[self.offset]

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        return self.wiring[(sig - self.offset) % SIZE]

    def backward(self, sig: int) -> int:
        return (self._rev[sig] + self.offset) % SIZE

    def __repr__(self) -> str:
        return f"<Rotor {self.name} pos={self.window} notch={ALPHABET[self.notch]}>"


class Reflector:
    def __init__(self, wiring: str) -> None:
        if len(wiring) != SIZE:
            raise ValueError("Reflector wiring length must match alphabet length")

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        for i, c in enumerate(wiring):
            j = ALPHABET.index(c)
            if wiring[j] != ALPHABET[i] or i == j:
                raise ValueError("Reflector wiring must be an involution with no fixed points")

        self._map: Tuple[int, ...] = tuple(ALPHABET.index(c) for c in wiring)

    def reflect(self, sig: int) -> int:
        return self._map[sig]

    def __getitem__(self, sig: int) -> int:
        return self._map[sig]

    def __repr__(self) -> str:
        return "<Reflector>"


REFLECTOR = Reflector(REFLECTOR_WIRING)


def make_rotor_stack() -> List[Rotor]:
    """Fresh rotors I, II, III at offset 0, fastest first."""
    return [Rotor(*ROTOR_WIRINGS[name], name=name) for name in STACK_ORDER]
