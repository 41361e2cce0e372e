# settings_generator.py
from __future__ import annotations

import argparse
import json
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List

from rotor_and_reflector import ALPHABET
from utilities import MAX_PAIRS

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    max_possible = len(alpha) // 2
    k = min(k, max_possible)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(rng: Random | SystemRandom, max_pairs: int = MAX_PAIRS) -> Dict:
    return {
        "start_positions": "".join(rng.choices(ALPHABET, k=3)),
        "plugs": choose_pairs(ALPHABET, rng.randint(0, max_pairs), rng),
    }


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a session config")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate_settings(build_rng(args.seed))

    args.outfile.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
        f"   start positions : {cfg['start_positions']}\n"
        f"   plug pairs      : {' '.join(cfg['plugs']) or '-'}")


if __name__ == "__main__":
    main()
