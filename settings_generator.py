# settings_generator.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List, Sequence

from keyboard_and_plugboard import MAX_PAIRS
from machine_config import MachineConfiguration, save_config
from wheels import ALPHABET, REFLECTORS, ROTORS

# classic daily sheets used ten cables
DEFAULT_PAIRS = 10

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = max(0, min(k, len(alpha) // 2))
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(
    rng: Random | SystemRandom,
    max_pairs: int = DEFAULT_PAIRS,
    *,
    rotors: Sequence[str] | None = None,
    reflectors: Sequence[str] | None = None,
) -> MachineConfiguration:
    rotor_pool = list(rotors or ROTORS)
    refl_pool = list(reflectors or REFLECTORS)
    return MachineConfiguration(
        rotors=tuple(rng.sample(rotor_pool, 3)),
        positions=tuple(rng.randrange(len(ALPHABET)) for _ in range(3)),
        reflector=rng.choice(refl_pool),
        plugs=tuple(choose_pairs(ALPHABET, min(max_pairs, MAX_PAIRS), rng)),
    )


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an Enigma daily key")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--pairs",
        type=int,
        default=DEFAULT_PAIRS,
        help=f"Number of plugboard cables, 0-{MAX_PAIRS} (default: {DEFAULT_PAIRS})",
    )
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_cli(argv)
    if not 0 <= args.pairs <= MAX_PAIRS:
        print(f"--pairs must be between 0 and {MAX_PAIRS}", file=sys.stderr)
        return 2

    cfg = generate_settings(build_rng(args.seed), args.pairs)
    save_config(cfg, args.outfile)
    print(f"✅  Wrote {args.outfile}\n"
          f"   rotors      : {' '.join(cfg.rotors)}\n"
          f"   positions   : {' '.join(f'{p:02d}' for p in cfg.positions)}\n"
          f"   reflector   : {cfg.reflector}\n"
          f"   plug pairs  : {' '.join(cfg.plugs) or 'none'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
