# main.py
from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from debug import COMPONENTS, Debug
from machine import Enigma
from utilities import ask, blocks, parse_pairs, parse_positions

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

DEFAULT_CONFIG = Path("enigma_config.json")


@dataclass(slots=True)
class Config:
    """Runtime switches for the front end."""

    block: int = 5                  # display block size
    group_output: bool = True       # print cipher text in blocks
    debug_components: List[str] = field(default_factory=list)


# ────────────────────────────────────────────────────────────────────────
#  1. Session file loading
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")
    required = {"start_positions", "plugs"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    return data


def build_machine(
    cfg: dict | None = None,
    *,
    positions: str | None = None,
    plugs: str | None = None,
) -> Enigma:
    """Build a session from a saved dict; explicit settings win over it."""
    cfg = cfg or {}
    key = positions if positions is not None else cfg.get("start_positions", "aaa")
    pairs = plugs if plugs is not None else cfg.get("plugs", [])
    return Enigma(parse_positions(key), parse_pairs(pairs))


# ────────────────────────────────────────────────────────────────────────
#  2. Operator commands
# ────────────────────────────────────────────────────────────────────────


def describe(machine: Enigma) -> str:
    pairs = " ".join(a + b for a, b in machine.pb.pairs()) or "-"
    pending = machine.selected_letter or "-"
    return f"window {machine.window()}  plugs {pairs}  selected {pending}"


def handle_command(machine: Enigma, line: str) -> str:
    """Run one ``:command`` against *machine* and return the reply text."""
    name, _, arg = line[1:].strip().partition(" ")
    arg = arg.strip().lower()

    if name == "reset":
        machine.rewind()
        return f"rewound to {machine.window()}"

    if name == "turn":
        if arg not in {"1", "2", "3"}:
            raise ValueError("usage: :turn 1|2|3")
        machine.turn_rotor(int(arg) - 1)
        return describe(machine)

    if name == "plug":
        if len(arg) != 1:
            raise ValueError("usage: :plug LETTER")
        machine.click_plug(arg)
        return describe(machine)

    if name == "state":
        return describe(machine)

    raise ValueError(f"Unknown command {line!r}")


def format_output(text: str, cfg: Config) -> str:
    return blocks(text, cfg.block) if cfg.group_output else text


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Three-rotor cipher machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help=f"Load start positions and plugs from JSON (default: {DEFAULT_CONFIG} when present).")
    p.add_argument("--positions", metavar="XYZ", help="Window letters for rotors I, II, III.")
    p.add_argument("--plugs", metavar="PAIRS", help='Plug pairs, e.g. "AB CD".')
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument("--no-blocks", dest="group_output", action="store_false", help="Print output without grouping.")
    p.add_argument("--debug", nargs="+", metavar="COMPONENT", choices=COMPONENTS, default=[], help="Enable debug logging for components.")
    p.add_argument("--log-file", metavar="FILE", help="Also write debug logging to FILE.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(
        block=args.block,
        group_output=args.group_output,
        debug_components=args.debug,
    )
    debug.enable(*cfg.debug_components)
    if args.log_file:
        debug.log_to_file(args.log_file)

    cfg_path = Path(args.config) if args.config else DEFAULT_CONFIG
    try:
        cfg_dict = load_config(cfg_path) if args.config or cfg_path.exists() else None
        machine = build_machine(cfg_dict, positions=args.positions, plugs=args.plugs)
    except (OSError, ValueError) as e:
        raise SystemExit(f"❌  Failed to load configuration: {e}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        print(format_output(machine.encipher_text(args.message), cfg))
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nMachine ready: {describe(machine)}")
    print("Commands: :reset  :turn N  :plug L  :state   (blank line quits)\n")
    while True:
        line = ask("> ")
        if not line:
            break
        if line.startswith(":"):
            try:
                print(handle_command(machine, line))
            except ValueError as e:
                print(f"❌  {e}")
            continue
        print(format_output(machine.encipher_text(line), cfg))


if __name__ == "__main__":
    main()
