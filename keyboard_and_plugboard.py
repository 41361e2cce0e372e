# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable
from debug import Debug
from rotor_and_reflector import ALPHABET, SIZE

debug = Debug()


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            signal = self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r} for current alphabet."
            )
        debug.log("keyboard", f"{letter}->{signal}")
        return signal

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Involutive letter swap over signals 0..25.

    Every mutation writes or clears a matched pair, so
    ``mapping[mapping[k]] == k`` holds after any call.
    """

    def __init__(self, pairs: Iterable[str | tuple[str, str]] = ()) -> None:
        self.mapping: list[int] = list(range(SIZE))

        for raw in pairs:
            # normalise to (a, b)
            if isinstance(raw, str):
                if len(raw) != 2:
                    raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
                a, b = raw
            else:
                a, b = raw

            if a not in ALPHABET or b not in ALPHABET:
                bad = a if a not in ALPHABET else b
                raise ValueError(f"Symbol {bad!r} not in alphabet")
            self.connect(ALPHABET.index(a), ALPHABET.index(b))

    @classmethod
    def identity(cls) -> "Plugboard":
        return cls()

    # ── queries ──────────────────────────────────────────────────
    def __getitem__(self, signal: int) -> int:
        return self.mapping[signal]

    def is_unplugged(self, signal: int) -> bool:
        return self.mapping[signal] == signal

    def pairs(self) -> list[tuple[str, str]]:
        """Connected pairs, each listed once, lowest letter first."""
        return [
            (ALPHABET[a], ALPHABET[b])
            for a, b in enumerate(self.mapping)
            if a < b
        ]

    # ── mutation ─────────────────────────────────────────────────
    def connect(self, a: int, b: int) -> None:
        if a == b:
            raise ValueError(
                f"Plugboard cannot map a symbol to itself: {ALPHABET[a]}"
            )
        if not (self.is_unplugged(a) and self.is_unplugged(b)):
            dup = a if not self.is_unplugged(a) else b
            raise ValueError(f"Character {ALPHABET[dup]!r} already used in plugboard")
        self.mapping[a], self.mapping[b] = b, a
        debug.log("plugboard", f"connect {ALPHABET[a]}<->{ALPHABET[b]}")

    def disconnect(self, a: int) -> None:
        b = self.mapping[a]
        self.mapping[a], self.mapping[b] = a, b
        debug.log("plugboard", f"disconnect {ALPHABET[a]}<->{ALPHABET[b]}")

    def toggle_connection(self, signal: int, selected: int | None) -> int | None:
        """Apply one socket pick and return the new pending selection.

        With nothing selected, an unplugged letter becomes the selection and
        a plugged one has its pair torn down. With a selection pending, a
        second distinct unplugged letter completes the pair; any other pick
        changes nothing and keeps the selection.
        """
        if selected is None:
            if self.is_unplugged(signal):
                return signal
            self.disconnect(signal)
            return None

        if signal != selected and self.is_unplugged(signal) and self.is_unplugged(selected):
            self.connect(selected, signal)
            return None
        return selected

    # one private helper does the job for both directions
    def _map(self, signal: int) -> int:
        mapped = self.mapping[signal]
        debug.log("plugboard", f"{signal}->{mapped}")
        return mapped

    forward = _map        # alias: signal in
    backward = _map       # alias: signal out

    def __repr__(self) -> str:
        swaps = [a + b for a, b in self.pairs()]
        return f"<Plugboard {' '.join(swaps)}>"
