# cipher_engine.py  ─────────────────────────────────────────────────
from __future__ import annotations

from typing import Any, Sequence

from debug import Debug
from errors import InvalidCharacter
from keyboard_and_plugboard import Keyboard, Plugboard
from machine_config import MachineConfiguration
from rotor_and_reflector import Reflector, Rotor
from wheels import ALPHABET, get_reflector, get_rotor

debug = Debug()

DEFAULT_ROTORS = ("III", "II", "I")
DEFAULT_POSITIONS = (0, 0, 0)
DEFAULT_REFLECTOR = "B"


def _is_letter(ch: str) -> bool:
    return len(ch) == 1 and ch.isascii() and ch.isalpha()


class CipherEngine:
    """Three-rotor Enigma: plugboard, rotor bank, reflector.

    The engine is reciprocal: ``transform_text`` on the output of
    ``transform_text`` under the same configuration gives the input back.
    One engine holds one message's rotor state at a time.
    """

    def __init__(
        self,
        rotors: Sequence[str] = DEFAULT_ROTORS,
        positions: Sequence[int] = DEFAULT_POSITIONS,
        reflector: str = DEFAULT_REFLECTOR,
        plugboard: Sequence[Any] = (),
        *,
        strict_plugboard: bool = False,
    ) -> None:
        self.kb = Keyboard(ALPHABET)
        self.configure(rotors, positions, reflector, plugboard,
                       strict_plugboard=strict_plugboard)

    # ── configuration ───────────────────────────────────────────

    def configure(
        self,
        rotors: Sequence[str],
        positions: Sequence[int],
        reflector: str,
        plugboard: Sequence[Any] = (),
        *,
        strict_plugboard: bool = False,
    ) -> None:
        """Replace the whole configuration; nothing carries over."""
        config = MachineConfiguration(
            rotors=tuple(rotors),
            positions=tuple(positions),
            reflector=reflector,
            plugs=tuple(plugboard),
            strict_plugboard=strict_plugboard,
        )
        self.configure_from(config)

    def configure_from(self, config: MachineConfiguration) -> None:
        # build everything before touching self, so a failure changes nothing
        rotor_objs: list[Rotor] = [get_rotor(name) for name in config.rotors]
        refl_obj: Reflector = get_reflector(config.reflector)
        pb = config.plugboard()

        self.config = config
        self.rotors = rotor_objs
        self.reflector = refl_obj
        self.pb = pb
        self.initial_positions: tuple[int, int, int] = config.positions
        self._positions: list[int] = list(config.positions)
        for raw, reason in pb.rejected:
            debug.warn("plugboard", f"skipping pair {raw!r}: {reason}")
        debug.log("encipher", f"configured {config.describe()}")

    @property
    def configuration(self) -> MachineConfiguration:
        return self.config

    @property
    def plugboard(self) -> Plugboard:
        return self.pb

    @property
    def positions(self) -> tuple[int, int, int]:
        """Current rotor positions, left to right."""
        return tuple(self._positions)

    def reset_to_initial_positions(self) -> None:
        self._positions = list(self.initial_positions)

    # ── stepping logic  ─────────────────────────────────────────

    def step(self) -> None:
        """Advance the rotor bank by one keystroke (with double-step)."""
        left, middle, right = self.rotors
        size = len(ALPHABET)
        pos = self._positions

        middle_at_notch = middle.at_notch(pos[1])
        right_at_notch = right.at_notch(pos[2])

        if middle_at_notch:
            # middle steps again on its own notch, carrying the left rotor
            pos[0] = (pos[0] + 1) % size
            pos[1] = (pos[1] + 1) % size
        elif right_at_notch:
            pos[1] = (pos[1] + 1) % size

        pos[2] = (pos[2] + 1) % size
        debug.log("stepping", f"Rotor pos {pos}")

    # ── encipher one symbol  ────────────────────────────────────

    def transform_letter(self, letter: str) -> str:
        if not isinstance(letter, str) or not _is_letter(letter):
            raise InvalidCharacter(f"Expected a single letter, got {letter!r}")

        signal = self.kb.forward(letter)
        signal = self.pb.forward(signal)

        self.step()

        for rotor, pos in zip(reversed(self.rotors), reversed(self._positions)):
            signal = rotor.forward(signal, pos)

        signal = self.reflector.reflect(signal)

        for rotor, pos in zip(self.rotors, self._positions):
            signal = rotor.backward(signal, pos)

        signal = self.pb.backward(signal)
        out_ch = self.kb.backward(signal)
        debug.log("encipher", f"{letter}->{out_ch}")
        return out_ch

    def transform_text(self, text: str) -> str:
        """Reset to the key, then encipher letters and pass the rest through."""
        if not isinstance(text, str):
            raise InvalidCharacter(f"Expected text, got {type(text).__name__}")

        self.reset_to_initial_positions()
        return "".join(
            self.transform_letter(ch) if _is_letter(ch) else ch
            for ch in text
        )

    # encryption and decryption are the same operation
    encrypt = transform_text
    decrypt = transform_text

    def __repr__(self) -> str:
        names = "-".join(r.name for r in self.rotors)
        return f"<CipherEngine {names} {self.reflector.name} pos={self.positions}>"
