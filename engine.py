# engine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from debug import DEBUG
from errors import ConfigurationError
from keyboard_and_plugboard import KEYBOARD, Plugboard, PlugPair
from rotor_and_reflector import Reflector, Rotor, check_setting
from utilities import reflector, rotor_spec

if TYPE_CHECKING:
    from config import MachineConfig

ROTOR_COUNT = 3


# ── stepping logic  ─────────────────────────────────────────────

def step_decisions(left: Rotor, middle: Rotor, right: Rotor) -> tuple[bool, bool, bool]:
    """Which of (left, middle, right) advance on the next key-press.

    Decided from the notch states *before* anything moves. A middle rotor
    resting on its own notch carries the left rotor and steps itself again
    on the same key-press (the double step).
    """
    middle_at_notch = middle.at_notch()
    step_l = middle_at_notch
    step_m = middle_at_notch or right.at_notch()
    return step_l, step_m, True


class CipherEngine:
    """Three-rotor machine: plugboard, rotors, reflector and back again.

    Rotor positions are the only state that changes while enciphering; one
    engine must see the characters of a message in order.
    """

    def __init__(
        self,
        rotors: Sequence[Rotor],
        reflector: Reflector,
        plugboard: Plugboard | Iterable[PlugPair] | None = None,
    ) -> None:
        if len(rotors) != ROTOR_COUNT:
            raise ConfigurationError(
                f"Expected {ROTOR_COUNT} rotors (left, middle, right), got {len(rotors)}"
            )
        if len({id(r) for r in rotors}) != len(rotors):
            raise ConfigurationError("The same Rotor object is mounted twice")
        if not isinstance(plugboard, Plugboard):
            plugboard = Plugboard(plugboard or ())

        self.kb = KEYBOARD
        self.pb = plugboard
        self.rotors: tuple[Rotor, ...] = tuple(rotors)
        self.reflector = reflector
        self._start = self.positions

    @classmethod
    def from_config(cls, cfg: "MachineConfig") -> "CipherEngine":
        """Build a fresh machine; every call gets its own rotor instances."""
        if len(cfg.rotor_order) != ROTOR_COUNT:
            raise ConfigurationError(
                f"rotor_order needs {ROTOR_COUNT} entries, got {len(cfg.rotor_order)}"
            )
        for label, values in (
            ("ring_settings", cfg.ring_settings),
            ("initial_positions", cfg.initial_positions),
        ):
            if len(values) != ROTOR_COUNT:
                raise ConfigurationError(
                    f"{label} needs {ROTOR_COUNT} entries, got {len(values)}"
                )

        rotors = [
            Rotor(rotor_spec(ident), ring, pos)
            for ident, ring, pos in zip(
                cfg.rotor_order, cfg.ring_settings, cfg.initial_positions
            )
        ]
        return cls(rotors, reflector(cfg.reflector), Plugboard(cfg.plugboard_pairs))

    # ── state helpers ───────────────────────────────────────────

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(r.position for r in self.rotors)

    @property
    def window(self) -> str:
        """Letters showing in the windows, left to right."""
        return "".join(r.window for r in self.rotors)

    def set_positions(self, positions: Sequence[int]) -> None:
        """Move the rotors and make that the new starting point for `reset`."""
        if len(positions) != ROTOR_COUNT:
            raise ConfigurationError(
                f"Expected {ROTOR_COUNT} positions, got {len(positions)}"
            )
        # validate all before touching any rotor
        checked = [check_setting("Position", p) for p in positions]
        for rotor, pos in zip(self.rotors, checked):
            rotor.position = pos
        self._start = self.positions

    def reset(self) -> None:
        """Rewind to the positions the engine started from."""
        for rotor, pos in zip(self.rotors, self._start):
            rotor.position = pos

    # ── stepping  ───────────────────────────────────────────────

    def step_rotors(self) -> None:
        """Advance rotors for one key-press, all decisions made up front."""
        left, middle, right = self.rotors
        step_l, step_m, step_r = step_decisions(left, middle, right)

        if step_l:
            left.step()
        if step_m:
            middle.step()
        if step_r:
            right.step()
        DEBUG.log("stepping", "window %s", self.window)

    # ── encipher  ───────────────────────────────────────────────

    def encrypt_char(self, ch: str) -> str:
        letter = ch.upper() if ch.isascii() else ch
        if letter not in self.kb:
            return ch

        self.step_rotors()

        signal = self.kb.forward(letter)
        signal = self.pb.forward(signal)

        for rotor in reversed(self.rotors):
            signal = rotor.forward(signal)

        signal = self.reflector.reflect(signal)

        for rotor in self.rotors:
            signal = rotor.backward(signal)

        signal = self.pb.backward(signal)
        out_ch = self.kb.backward(signal)
        DEBUG.log("encipher", "%s -> %s", letter, out_ch)
        return out_ch

    def process(self, text: str) -> str:
        return "".join(self.encrypt_char(ch) for ch in text)

    def __repr__(self) -> str:
        names = "-".join(r.name for r in self.rotors)
        return f"<CipherEngine {names} {self.reflector.name} window={self.window}>"
