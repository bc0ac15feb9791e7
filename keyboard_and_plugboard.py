# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Sequence

from debug import Debug
from errors import InvalidCharacter, InvalidPlugboardPair

debug = Debug()

# 26 letters, disjoint pairs
MAX_PAIRS = 13


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal (case-insensitive)
    def forward(self, letter: str) -> int:
        try:
            signal = self.alpha_to_index[letter.upper()]
        except (KeyError, AttributeError):
            raise InvalidCharacter(
                f"Invalid character {letter!r} for current alphabet."
            ) from None
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
    """Symmetric letter swaps applied before and after the rotors.

    Invalid pairs are skipped by default and the remaining pairs are still
    wired, the way an operator's board simply ignores a bad cable.  Skipped
    pairs land in ``rejected`` with the reason.  ``strict=True`` raises
    InvalidPlugboardPair on the first bad pair instead.
    """

    def __init__(
        self,
        pairs: Sequence[str | tuple[str, str]],
        alphabet: str,
        *,
        strict: bool = False,
    ) -> None:
        self.alphabet: str = alphabet
        self.strict = strict
        self._table: list[int] = list(range(len(alphabet)))
        self.pairs: list[str] = []
        self.rejected: list[tuple[object, str]] = []
        used: set[str] = set()

        for raw in pairs:
            problem = self._check(raw, used)
            if problem is not None:
                if strict:
                    raise InvalidPlugboardPair(problem)
                self.rejected.append((raw, problem))
                continue

            a, b = (ch.upper() for ch in raw)
            ia, ib = alphabet.index(a), alphabet.index(b)
            self._table[ia], self._table[ib] = ib, ia
            used.update((a, b))
            self.pairs.append(a + b)

    def _check(self, raw: object, used: set[str]) -> str | None:
        if not isinstance(raw, (str, tuple, list)) or len(raw) != 2:
            return f"Pair {raw!r} must be exactly 2 symbols"
        if not all(isinstance(ch, str) and len(ch) == 1 for ch in raw):
            return f"Pair {raw!r} must be exactly 2 symbols"
        a, b = (ch.upper() for ch in raw)
        if a not in self.alphabet or b not in self.alphabet:
            bad = a if a not in self.alphabet else b
            return f"Symbol {bad!r} not in alphabet"
        if a == b:
            return f"Plugboard cannot map a symbol to itself: {a}"
        if a in used or b in used:
            dup = a if a in used else b
            return f"Character {dup!r} already used in plugboard"
        return None

    # one private helper does the job for both directions
    def _map(self, signal: int) -> int:
        mapped = self._table[signal]
        debug.log("plugboard", f"{signal}->{mapped}")
        return mapped

    forward = _map        # alias: signal in
    backward = _map       # alias: signal out

    def swap(self, letter: str) -> str:
        """Letter-level view of the board: partner if plugged, else itself."""
        return self.alphabet[self._table[self.alphabet.index(letter.upper())]]

    def __len__(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs)}>"
