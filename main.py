# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import cipher_engine
import keyboard_and_plugboard
import machine_config
import report
import rotor_and_reflector
from cipher_engine import (
    DEFAULT_POSITIONS,
    DEFAULT_REFLECTOR,
    DEFAULT_ROTORS,
    CipherEngine,
)
from errors import EnigmaError
from machine_config import MachineConfiguration, load_config
from wheels import ALPHABET, REFLECTORS, ROTORS

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Runtime switches for the front end (the key lives elsewhere)."""

    blocks: bool = False            # group output in fixed-size blocks
    block: int = 5                  # display block size
    strict_plugboard: bool = False  # reject the key on a bad plug pair
    verbose: bool = False


def set_verbose(state: bool) -> None:
    for mod in (cipher_engine, keyboard_and_plugboard, rotor_and_reflector,
                machine_config, report):
        if state:
            mod.debug.enable_all()
        else:
            for component in mod.debug.components:
                mod.debug.disable(component)


# ────────────────────────────────────────────────────────────────────────
#  1. Key loading helpers
# ────────────────────────────────────────────────────────────────────────


def parse_position(raw: str) -> int:
    """Accept a number 0-25 or the window letter A-Z."""
    raw = raw.strip()
    if len(raw) == 1 and raw.upper() in ALPHABET:
        return ALPHABET.index(raw.upper())
    try:
        return int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"{raw!r} is neither a number nor a letter"
        ) from None


def key_from_args(args: argparse.Namespace, cfg: Config) -> tuple[MachineConfiguration, str | None]:
    """Return `(key, ciphertext)`; ciphertext only comes from a report."""
    if args.load_report:
        rep = report.read_report_file(args.load_report,
                                      strict_plugboard=cfg.strict_plugboard)
        return rep.configuration, rep.ciphertext

    if args.config:
        return load_config(args.config, strict_plugboard=cfg.strict_plugboard), None

    return MachineConfiguration(
        rotors=tuple(args.rotors),
        positions=tuple(args.positions),
        reflector=args.reflector,
        plugs=tuple(args.plugs),
        strict_plugboard=cfg.strict_plugboard,
    ), None


def format_blocks(text: str, size: int) -> str:
    letters = text.replace(" ", "")
    return "  ".join(letters[i : i + size] for i in range(0, len(letters), size))


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a three-rotor Enigma")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to process. If omitted, an interactive REPL starts.")
    p.add_argument("--rotors", nargs=3, metavar=("LEFT", "MIDDLE", "RIGHT"), default=list(DEFAULT_ROTORS), help=f"Rotor order, from {' '.join(ROTORS)}. Default: {' '.join(DEFAULT_ROTORS)}")
    p.add_argument("--positions", nargs=3, type=parse_position, metavar="POS", default=list(DEFAULT_POSITIONS), help="Start positions, 0-25 or A-Z. Default: 0 0 0")
    p.add_argument("--reflector", default=DEFAULT_REFLECTOR, help=f"Reflector, one of {' '.join(REFLECTORS)}. Default: {DEFAULT_REFLECTOR}")
    p.add_argument("--plugs", nargs="*", default=[], metavar="PAIR", help="Plugboard pairs, e.g. AB CD EF (max 13)")
    p.add_argument("--strict-plugboard", action="store_true", help="Reject the key on a bad plug pair instead of skipping it.")

    p.add_argument("--config", metavar="FILE", help="Load the key from JSON instead of the flags above.")
    p.add_argument("--load-report", metavar="FILE", help="Load key and ciphertext from a report and decrypt it.")
    p.add_argument("--report", metavar="FILE", type=Path, help="Write a report of the key and the output to FILE.")

    p.add_argument("--blocks", action="store_true", help="Print output in five-letter groups.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every plugboard, rotor and stepping event.")
    p.add_argument("--log-file", metavar="FILE", type=Path, help="Also write log records to FILE.")

    args = p.parse_args(argv)
    if args.report and args.message is None and not args.load_report:
        p.error("--report needs a message: pass -m/--message or --load-report")
    return args


def emit(text: str, cfg: Config) -> str:
    return format_blocks(text, cfg.block) if cfg.blocks else text


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = Config(
        blocks=args.blocks,
        strict_plugboard=args.strict_plugboard,
        verbose=args.verbose,
    )
    set_verbose(cfg.verbose)

    handler = cipher_engine.debug.log_to_file(args.log_file) if args.log_file else None
    try:
        return run(args, cfg)
    finally:
        if handler is not None:
            cipher_engine.debug.close_file(handler)


def run(args: argparse.Namespace, cfg: Config) -> int:
    # skipped plug pairs are reported once, by the engine's WARNING log line
    try:
        key, ciphertext = key_from_args(args, cfg)
        engine = CipherEngine()
        engine.configure_from(key)
    except (EnigmaError, OSError) as exc:
        print(f"❌  {exc}", file=sys.stderr)
        return 2

    message = args.message if args.message is not None else ciphertext

    # one‑shot mode ------------------------------------------------------
    if message is not None:
        output = engine.transform_text(message)
        print(emit(output, cfg))
        if args.report:
            report.write_report_file(args.report, key, output)
            print(f"✅  Wrote {args.report}", file=sys.stderr)
        return 0

    # interactive REPL ---------------------------------------------------
    print(f"\nKey: {key.describe()}")
    print("Type blank line to quit.\n")
    while True:
        try:
            txt = input("Message: ")
        except EOFError:
            break
        if not txt.strip():
            break
        print("Output: ", emit(engine.transform_text(txt), cfg))
    return 0


if __name__ == "__main__":
    sys.exit(main())
