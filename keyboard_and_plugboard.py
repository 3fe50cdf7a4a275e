# keyboard_and_plugboard.py
from __future__ import annotations

import string
from collections.abc import Iterable, Sequence

from debug import DEBUG
from errors import ConfigurationError

ALPHA26: str = string.ascii_uppercase
PlugPair = str | Sequence[str]


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    """Letter <-> integer signal translation for a fixed alphabet."""

    def __init__(self, alphabet: str = ALPHA26) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            return self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r} for current alphabet."
            ) from None

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0-{hi}")
        return self.alphabet[signal]

    def __contains__(self, letter: object) -> bool:
        return letter in self.alpha_to_index


KEYBOARD = Keyboard()


# ── Plugboard ─────────────────────────────────────────────────────
def normalise_pair(raw: PlugPair) -> tuple[str, str]:
    """Turn ``"qw"`` or ``("Q", "W")`` into ``("Q", "W")``."""
    if isinstance(raw, str):
        if len(raw) != 2:
            raise ConfigurationError(f"Pair {raw!r} must be exactly 2 letters")
        a, b = raw
    else:
        try:
            a, b = raw
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Pair {raw!r} must be exactly 2 letters"
            ) from None
        if not (isinstance(a, str) and isinstance(b, str)):
            raise ConfigurationError(f"Pair {raw!r} must hold letters")
        if len(a) != 1 or len(b) != 1:
            raise ConfigurationError(f"Pair {raw!r} must hold single letters")
    return a.upper(), b.upper()


def plugboard_swap(letter: str, pairs: Iterable[PlugPair]) -> str:
    """Return the partner of `letter` in `pairs`, or `letter` itself.

    No validation: `pairs` is assumed to have passed through `Plugboard`.
    """
    for a, b in pairs:
        if letter == a:
            return b
        if letter == b:
            return a
    return letter


class Plugboard:
    def __init__(
        self,
        pairs: Iterable[PlugPair] = (),
        alphabet: str = ALPHA26,
    ) -> None:
        self.alphabet: str = alphabet
        self._map: list[int] = list(range(len(alphabet)))
        self._pairs: list[tuple[str, str]] = []
        symbols = set(alphabet)
        used: set[str] = set()

        for raw in pairs:
            a, b = normalise_pair(raw)

            if a not in symbols or b not in symbols:
                bad = a if a not in symbols else b
                raise ConfigurationError(f"Symbol {bad!r} not in alphabet")
            if a == b:
                raise ConfigurationError(
                    f"Plugboard cannot map a symbol to itself: {a}"
                )
            if a in used or b in used:
                dup = a if a in used else b
                raise ConfigurationError(
                    f"Character {dup!r} already used in plugboard"
                )

            # passed validation → commit swap
            ia, ib = alphabet.index(a), alphabet.index(b)
            self._map[ia], self._map[ib] = ib, ia
            self._pairs.append((a, b))
            used.update((a, b))

    @property
    def pairs(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    # the swap is its own inverse, so one helper serves both directions
    def _swap(self, signal: int) -> int:
        mapped = self._map[signal]
        DEBUG.log("plugboard", "%s->%s", self.alphabet[signal], self.alphabet[mapped])
        return mapped

    forward = _swap        # signal in
    backward = _swap       # signal out

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        swaps = [a + b for a, b in self._pairs]
        return f"<Plugboard {' '.join(swaps)}>"
