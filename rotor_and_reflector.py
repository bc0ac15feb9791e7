# rotor_and_reflector.py
from __future__ import annotations

from debug import Debug

debug = Debug()


class Rotor:
    """Fixed wiring of one rotor type.

    A rotor carries no position of its own: the engine owns the rotor bank
    state and passes the current offset into every signal-path call, so one
    Rotor object can be shared by any number of engines.
    """

    __slots__ = ("name", "alphabet", "size", "wiring", "notch", "_fwd", "_rev")

    def __init__(self, name: str, wiring: str, notch: str, alphabet: str) -> None:
        if sorted(wiring) != sorted(alphabet):
            raise ValueError("wiring must be a permutation of alphabet")
        if len(notch) != 1 or notch not in alphabet:
            raise ValueError("Notch must be a single letter of the alphabet")

        self.name = name
        self.alphabet = alphabet
        self.size = len(alphabet)
        self.wiring = wiring
        self.notch = alphabet.index(notch)

        # integer lookup tables, forward and inverse
        self._fwd = tuple(alphabet.index(c) for c in wiring)
        self._rev = tuple(wiring.index(c) for c in alphabet)

    def at_notch(self, position: int) -> bool:
        return position == self.notch

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int, position: int) -> int:
        shift = (sig + position) % self.size
        mapped = self._fwd[shift]
        return (mapped - position) % self.size

    def backward(self, sig: int, position: int) -> int:
        shift = (sig + position) % self.size
        mapped = self._rev[shift]
        return (mapped - position) % self.size

    def __repr__(self) -> str:
        return f"<Rotor {self.name} notch={self.alphabet[self.notch]}>"


class Reflector:
    __slots__ = ("name", "alphabet", "size", "wiring", "_map")

    def __init__(self, name: str, wiring: str, alphabet: str) -> None:
        if len(wiring) != len(alphabet):
            raise ValueError("Reflector wiring length must match alphabet length")

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        for i, c in enumerate(wiring):
            if c not in alphabet:
                raise ValueError(f"Reflector symbol {c!r} not in alphabet")
            j = alphabet.index(c)
            if wiring[j] != alphabet[i] or i == j:
                raise ValueError("Reflector wiring must be an involution with no fixed points")

        self.name = name
        self.alphabet = alphabet
        self.size = len(alphabet)
        self.wiring = wiring
        self._map = tuple(alphabet.index(c) for c in wiring)

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        debug.log("reflector", f"{self.name}: {sig}->{mapped}")
        return mapped

    def __repr__(self) -> str:
        return f"<Reflector {self.name}>"
