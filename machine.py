# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Sequence

from debug import Debug
from keyboard_and_plugboard import Keyboard, Plugboard
from rotor_and_reflector import ALPHABET, REFLECTOR, SIZE, Rotor, make_rotor_stack
from utilities import preprocess_message

debug = Debug()

STACK_SIZE = 3


# ── stepping logic  ─────────────────────────────────────────────

def step(rotors: Sequence[Rotor]) -> None:
    """Advance the stack one key-press, double-step anomaly included.

    Both notch checks are taken before any rotor moves.
    """
    fast, middle, slow = rotors

    step_M = fast.at_notch() or middle.at_notch()
    step_S = middle.at_notch()

    fast.advance()
    if step_M:
        middle.advance()
    if step_S:
        slow.advance()

    debug.log("stepping", f"offsets {[r.offset for r in rotors]}")


def reset_offsets(rotors: Sequence[Rotor], baseline: Sequence[int]) -> None:
    """Put every rotor back on its remembered offset; plugboard untouched."""
    if len(baseline) != len(rotors):
        raise ValueError("baseline length mismatch")
    for rotor, offset in zip(rotors, baseline):
        rotor.offset = offset % SIZE


def make_plugboard() -> Plugboard:
    return Plugboard.identity()


# ── encipher one signal  ────────────────────────────────────────

def encode(signal: int, plugboard: Plugboard, rotors: Sequence[Rotor]) -> int:
    step(rotors)

    signal = plugboard.forward(signal)

    for rotor in rotors:
        signal = rotor.forward(signal)

    signal = REFLECTOR.reflect(signal)

    for rotor in reversed(rotors):
        signal = rotor.backward(signal)

    return plugboard.backward(signal)


# ── session ─────────────────────────────────────────────────────

class Enigma:
    """Everything one operator session needs: rotors, plugs, rewind point."""

    def __init__(
        self,
        start_positions: str = "aaa",
        plugs: Sequence[str | tuple[str, str]] = (),
    ) -> None:
        self.kb = Keyboard()
        self.pb = Plugboard(plugs)
        self.rotors = make_rotor_stack()
        self.baseline: list[int] = [0] * STACK_SIZE
        self.selected_plug: int | None = None

        self.set_key(start_positions)

    # ── key & rewind helpers ────────────────────────────────────

    def set_key(self, key: str) -> None:
        """Rotate each rotor to its window letter and remember it."""
        if len(key) != STACK_SIZE:
            raise ValueError(f"Need exactly {STACK_SIZE} window letters, got {key!r}")
        self.baseline = [self.kb.forward(letter) for letter in key]
        reset_offsets(self.rotors, self.baseline)

    def rewind(self) -> None:
        reset_offsets(self.rotors, self.baseline)

    def turn_rotor(self, index: int) -> None:
        """Hand-turn one rotor a notch; the new spot becomes its rewind point."""
        rotor = self.rotors[index]
        rotor.advance()
        self.baseline[index] = rotor.offset

    def click_plug(self, letter: str) -> None:
        self.selected_plug = self.pb.toggle_connection(
            self.kb.forward(letter), self.selected_plug
        )

    # ── state for display ───────────────────────────────────────

    def positions(self) -> list[int]:
        return [r.offset for r in self.rotors]

    def window(self) -> str:
        return "".join(r.window for r in self.rotors)

    @property
    def selected_letter(self) -> str | None:
        if self.selected_plug is None:
            return None
        return ALPHABET[self.selected_plug]

    # ── encipher ────────────────────────────────────────────────

    def encipher(self, letter: str) -> str:
        out_ch = self.kb.backward(encode(self.kb.forward(letter), self.pb, self.rotors))
        debug.log("encipher", f"{letter}->{out_ch} window={self.window()}")
        return out_ch

    def encipher_text(self, text: str) -> str:
        """Encipher every letter in *text*; anything else is not a key."""
        return "".join(self.encipher(ch) for ch in preprocess_message(text))

    def __repr__(self) -> str:
        return f"<Enigma window={self.window()} {self.pb!r}>"
