# utilities.py
from __future__ import annotations

from typing import Iterable, List, Set

from rotor_and_reflector import ALPHABET

MAX_PAIRS = 10


def ask(prompt: str) -> str:
    """Read & normalise an operator’s response (lowercase, trimmed)."""
    return input(prompt).strip().lower()


# ────────────────────────────────────────────────────────────────────────
#  1. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Lower‑case and drop everything that has no key on the keyboard."""
    return "".join(ch for ch in msg.lower() if ch in ALPHABET)


def blocks(text: str, size: int) -> str:
    """Split *text* into space separated groups of *size* letters."""
    if size <= 0:
        return text
    return " ".join(text[i : i + size] for i in range(0, len(text), size))


# ────────────────────────────────────────────────────────────────────────
#  2. Setting parsers
# ────────────────────────────────────────────────────────────────────────


def parse_positions(raw: str) -> str:
    """Normalise three window letters, e.g. ``"ADU"`` → ``"adu"``."""
    if not isinstance(raw, str):
        raise ValueError(f"Start positions {raw!r} must be a string of 3 letters")
    key = raw.strip().lower()
    if len(key) != 3 or set(key) - set(ALPHABET):
        raise ValueError(f"Start positions {raw!r} must be exactly 3 letters a–z")
    return key


def _validate_pair(pair: str, used: Set[str]) -> None:
    if len(pair) != 2:
        raise ValueError(f"Pair {pair!r} must be exactly 2 characters.")
    a, b = pair
    if a == b:
        raise ValueError(f"Pair {pair!r} cannot map to itself.")
    if {a, b} - set(ALPHABET):
        invalid = ({a, b} - set(ALPHABET)).pop()
        raise ValueError(f"Invalid char {invalid!r} in pair {pair!r}.")
    if {a, b} & used:
        dup = ({a, b} & used).pop()
        raise ValueError(f"Char {dup!r} already used.")


def parse_pairs(raw: str | Iterable[str]) -> List[str]:
    """Return a list of *validated* plugboard pairs (e.g. ["ab", "cd"]).

    Accepts either a whitespace separated string or a list of pairs.
    """
    if isinstance(raw, str):
        pairs = raw.split()
    elif isinstance(raw, (list, tuple)):
        pairs = list(raw)
    else:
        raise ValueError(f"Plugs {raw!r} must be a string or a list of pairs.")
    if len(pairs) > MAX_PAIRS:
        raise ValueError(f"Too many pairs (max {MAX_PAIRS}).")

    used: Set[str] = set()
    result: List[str] = []
    for p in pairs:
        if not isinstance(p, str):
            raise ValueError(f"Pair {p!r} must be a string.")
        p = p.lower()
        _validate_pair(p, used)
        used.update(p)
        result.append(p)
    return result


__all__ = [
    "ask",
    "blocks",
    "parse_pairs",
    "parse_positions",
    "preprocess_message",
]
