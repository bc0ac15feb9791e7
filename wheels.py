# wheels.py
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from errors import InvalidReflectorIdentifier, InvalidRotorIdentifier
from rotor_and_reflector import Reflector, Rotor

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ────────────────────────────────────────────────────────────────────────
#  Wheel database (Enigma I, Wehrmacht/Luftwaffe)
# ────────────────────────────────────────────────────────────────────────

I   = Rotor("I",   "EKMFLGDQVZNTOWYHXUSPAIBRCJ", notch="Q", alphabet=ALPHABET)
II  = Rotor("II",  "AJDKSIRUXBLHWTMCQGZNPYFVOE", notch="E", alphabet=ALPHABET)
III = Rotor("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", notch="V", alphabet=ALPHABET)
IV  = Rotor("IV",  "ESOVPZJAYQUIRHXLNFTGKDCMWB", notch="J", alphabet=ALPHABET)
V   = Rotor("V",   "VZBRGITYUPSDNHLXAWMJQOFECK", notch="Z", alphabet=ALPHABET)

A = Reflector("A", "EJMZALYXVBWFCRQUONTSPIKHGD", alphabet=ALPHABET)
B = Reflector("B", "YRUHQSLDPXNGOKMIEBFZCWVJAT", alphabet=ALPHABET)
C = Reflector("C", "FVPJIAOYEDRZXWGCTKUQSBNMHL", alphabet=ALPHABET)

# Build the read-only lookup maps ---------------------------------------

ROTORS: Mapping[str, Rotor] = MappingProxyType(
    {r.name: r for r in (I, II, III, IV, V)}
)
REFLECTORS: Mapping[str, Reflector] = MappingProxyType(
    {r.name: r for r in (A, B, C)}
)


def normalise_name(name: object) -> str:
    return name.strip().upper() if isinstance(name, str) else ""


def get_rotor(name: str) -> Rotor:
    try:
        return ROTORS[normalise_name(name)]
    except KeyError:
        raise InvalidRotorIdentifier(
            f"Unknown rotor {name!r}. Expected one of {list(ROTORS)}"
        ) from None


def get_reflector(name: str) -> Reflector:
    try:
        return REFLECTORS[normalise_name(name)]
    except KeyError:
        raise InvalidReflectorIdentifier(
            f"Unknown reflector {name!r}. Expected one of {list(REFLECTORS)}"
        ) from None


__all__ = [
    "ALPHABET",
    "ROTORS",
    "REFLECTORS",
    "get_rotor",
    "get_reflector",
    "normalise_name",
]
