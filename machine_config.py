# machine_config.py
from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from debug import Debug
from errors import ConfigError, InvalidPosition
from keyboard_and_plugboard import Plugboard
from wheels import ALPHABET, get_reflector, get_rotor, normalise_name

debug = Debug()

ROTOR_COUNT = 3


def _normalise_pair(raw: Any) -> Any:
    if isinstance(raw, str):
        return raw.strip().upper()
    if isinstance(raw, (list, tuple)) and all(isinstance(ch, str) for ch in raw):
        return "".join(raw).upper()
    return raw      # left for the plugboard to reject


def _check_position(pos: Any) -> int:
    # bool is an int subclass but never a rotor position
    if isinstance(pos, bool) or not isinstance(pos, int):
        raise InvalidPosition(f"Rotor position {pos!r} must be an integer")
    if not 0 <= pos < len(ALPHABET):
        raise InvalidPosition(f"Rotor position {pos} out of range 0–{len(ALPHABET) - 1}")
    return pos


@dataclass(frozen=True, slots=True)
class MachineConfiguration:
    """The daily key: rotor order, start positions, reflector and plugs.

    Everything is validated on construction, so an instance that exists is
    one the engine can always run.
    """

    rotors: tuple[str, str, str]
    positions: tuple[int, int, int]
    reflector: str
    plugs: tuple[Any, ...] = field(default_factory=tuple)
    strict_plugboard: bool = False

    def __post_init__(self) -> None:
        rotors = tuple(normalise_name(r) if isinstance(r, str) else r for r in self.rotors)
        positions = tuple(self.positions)
        if len(rotors) != ROTOR_COUNT:
            raise ConfigError(f"Need exactly {ROTOR_COUNT} rotors, got {len(rotors)}")
        if len(positions) != ROTOR_COUNT:
            raise ConfigError(f"Need exactly {ROTOR_COUNT} positions, got {len(positions)}")

        for name in rotors:
            get_rotor(name)
        for pos in positions:
            _check_position(pos)
        reflector = get_reflector(self.reflector).name

        plugs = tuple(_normalise_pair(p) for p in self.plugs)
        if self.strict_plugboard:
            Plugboard(plugs, ALPHABET, strict=True)

        object.__setattr__(self, "rotors", rotors)
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "reflector", reflector)
        object.__setattr__(self, "plugs", plugs)

    # ── derived objects ─────────────────────────────────────────
    def plugboard(self) -> Plugboard:
        return Plugboard(self.plugs, ALPHABET, strict=self.strict_plugboard)

    # ── (de)serialisation ───────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "rotors": list(self.rotors),
            "positions": list(self.positions),
            "reflector": self.reflector,
            "plugs": self.plugboard().pairs,
        }

    @classmethod
    def from_dict(cls, data: dict, *, strict_plugboard: bool = False) -> "MachineConfiguration":
        required = {"rotors", "positions", "reflector"}
        missing = required - data.keys()
        if missing:
            raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")
        plugs = data.get("plugs", data.get("plugboard", []))
        if isinstance(plugs, str):
            plugs = plugs.split()
        return cls(
            rotors=_as_tuple(data["rotors"], "rotors"),
            positions=_as_tuple(data["positions"], "positions"),
            reflector=data["reflector"],
            plugs=tuple(plugs),
            strict_plugboard=strict_plugboard,
        )

    def describe(self) -> str:
        pos = " ".join(f"{p:02d}" for p in self.positions)
        pairs = " ".join(self.plugboard().pairs) or "none"
        return (f"rotors {' '.join(self.rotors)} | positions {pos} | "
                f"reflector {self.reflector} | plugs {pairs}")


def _as_tuple(value: Any, key: str) -> tuple:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigError(f"'{key}' must be a list")
    return tuple(value)


def load_config(path: str | Path, *, strict_plugboard: bool = False) -> MachineConfiguration:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    config = MachineConfiguration.from_dict(data, strict_plugboard=strict_plugboard)
    debug.log("config", f"loaded {path}: {config.describe()}")
    return config


def save_config(config: MachineConfiguration, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    debug.log("config", f"wrote {path}")
    return path
