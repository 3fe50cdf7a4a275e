# rotor_and_reflector.py
from __future__ import annotations

from dataclasses import dataclass, field

from debug import DEBUG
from errors import ConfigurationError
from keyboard_and_plugboard import ALPHA26

SIZE = len(ALPHA26)


def is_bijection(wiring: str, alphabet: str = ALPHA26) -> bool:
    """True when `wiring` uses every alphabet symbol exactly once."""
    return sorted(wiring) == sorted(alphabet)


def check_setting(kind: str, value: object) -> int:
    # bool is an int subclass; True/False are not rotor settings
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{kind} must be an integer, got {value!r}")
    if not 0 <= value < SIZE:
        raise ConfigurationError(f"{kind} {value} out of range 0-{SIZE - 1}")
    return value


# ── rotor catalog entry ───────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class RotorSpec:
    """Immutable wiring + notch of one physical rotor type."""

    name: str
    wiring: str
    notch: str
    fwd: tuple[int, ...] = field(init=False, repr=False, compare=False)
    rev: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.wiring) != SIZE or not is_bijection(self.wiring):
            raise ConfigurationError(
                f"Rotor {self.name}: wiring must be a permutation of {ALPHA26}"
            )
        if len(self.notch) != 1 or self.notch not in ALPHA26:
            raise ConfigurationError(
                f"Rotor {self.name}: notch must be one letter, got {self.notch!r}"
            )
        # integer lookup tables
        object.__setattr__(self, "fwd", tuple(ALPHA26.index(c) for c in self.wiring))
        object.__setattr__(self, "rev", tuple(self.wiring.index(c) for c in ALPHA26))

    @property
    def notch_index(self) -> int:
        return ALPHA26.index(self.notch)


# ── rotor as mounted in a machine ─────────────────────────────────
class Rotor:
    def __init__(self, spec: RotorSpec, ring_setting: int = 0, position: int = 0) -> None:
        self.spec = spec
        self.ring_setting = check_setting("Ring setting", ring_setting)
        self.position = check_setting("Position", position)
        self._notch = spec.notch_index

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def window(self) -> str:
        """Letter showing through the machine's window."""
        return ALPHA26[self.position]

    # ── stepping --------------------------------------------------
    def step(self) -> None:
        self.position = (self.position + 1) % SIZE
        DEBUG.log("rotor", "%s -> %s", self.spec.name, self.window)

    def at_notch(self) -> bool:
        return self.position == self._notch

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        """Signal in, signal out (0-25), right-to-left through the wiring."""
        shift = (sig + self.position - self.ring_setting) % SIZE
        mapped = self.spec.fwd[shift]
        return (mapped - self.position + self.ring_setting) % SIZE

    def backward(self, sig: int) -> int:
        """Signal in, signal out (0-25), back through the inverse wiring."""
        shift = (sig + self.position - self.ring_setting) % SIZE
        mapped = self.spec.rev[shift]
        return (mapped - self.position + self.ring_setting) % SIZE

    def __repr__(self) -> str:
        return f"<Rotor {self.spec.name} pos={self.position} ring={self.ring_setting}>"


# ── reflector ─────────────────────────────────────────────────────
class Reflector:
    def __init__(self, name: str, wiring: str) -> None:
        if len(wiring) != SIZE or not is_bijection(wiring):
            raise ConfigurationError(
                f"Reflector {name}: wiring must be a permutation of {ALPHA26}"
            )

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        for i, c in enumerate(wiring):
            j = ALPHA26.index(c)
            if i == j:
                raise ConfigurationError(
                    f"Reflector {name}: {c} maps to itself"
                )
            if wiring[j] != ALPHA26[i]:
                raise ConfigurationError(
                    f"Reflector {name}: wiring is not an involution at {ALPHA26[i]}"
                )

        self.name = name
        self.wiring = wiring
        self._map = [ALPHA26.index(c) for c in wiring]

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        DEBUG.log("reflector", "%s -> %s", ALPHA26[sig], ALPHA26[mapped])
        return mapped

    def __repr__(self) -> str:
        return f"<Reflector {self.name}>"
