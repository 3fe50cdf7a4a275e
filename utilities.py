# utilities.py
from __future__ import annotations

import re
from typing import Dict, List

from errors import ConfigurationError
from keyboard_and_plugboard import ALPHA26
from rotor_and_reflector import Reflector, RotorSpec

_num_re = re.compile(r"^\d+$")

# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────

# Enigma I / M3 rotors ---------------------------------------------------
I   = RotorSpec("I",   "EKMFLGDQVZNTOWYHXUSPAIBRCJ", notch="Q")
II  = RotorSpec("II",  "AJDKSIRUXBLHWTMCQGZNPYFVOE", notch="E")
III = RotorSpec("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", notch="V")
IV  = RotorSpec("IV",  "ESOVPZJAYQUIRHXLNFTGKDCMWB", notch="J")
V   = RotorSpec("V",   "VZBRGITYUPSDNHLXAWMJQOFECK", notch="Z")

# Reflectors (UKW) -------------------------------------------------------
A = Reflector("A", "EJMZALYXVBWFCRQUONTSPIKHGD")
B = Reflector("B", "YRUHQSLDPXNGOKMIEBFZCWVJAT")
C = Reflector("C", "FVPJIAOYEDRZXWGCTKUQSBNMHL")

# catalog order doubles as the numeric rotor identifier (0 → I)
ROTORS: List[RotorSpec] = [I, II, III, IV, V]
rotor_dict: Dict[str, RotorSpec] = {spec.name: spec for spec in ROTORS}
reflector_dict: Dict[str, Reflector] = {r.name: r for r in (A, B, C)}

DEFAULT_REFLECTOR = "B"


# ────────────────────────────────────────────────────────────────────────
#  2. Lookup helpers
# ────────────────────────────────────────────────────────────────────────


def rotor_spec(ident: int | str) -> RotorSpec:
    """Resolve a rotor by catalog index (0-4) or roman name ("III", "iii")."""
    if isinstance(ident, bool):
        raise ConfigurationError(f"Unknown rotor {ident!r}")
    if isinstance(ident, str) and _num_re.match(ident.strip()):
        ident = int(ident)
    if isinstance(ident, int):
        if 0 <= ident < len(ROTORS):
            return ROTORS[ident]
        raise ConfigurationError(
            f"Rotor index {ident} out of range 0-{len(ROTORS) - 1}"
        )
    if isinstance(ident, str):
        try:
            return rotor_dict[ident.strip().upper()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown rotor {ident!r}. Expected one of {list(rotor_dict)}"
            ) from None
    raise ConfigurationError(f"Unknown rotor {ident!r}")


def reflector(name: str) -> Reflector:
    if not isinstance(name, str) or name.strip().upper() not in reflector_dict:
        raise ConfigurationError(
            f"Unknown reflector {name!r}. Expected one of {list(reflector_dict)}"
        )
    return reflector_dict[name.strip().upper()]


# ────────────────────────────────────────────────────────────────────────
#  3. Text helpers
# ────────────────────────────────────────────────────────────────────────


def format_blocks(text: str, block: int = 5) -> str:
    """Upper-case, drop non-letters and split into `block`-sized groups."""
    if block < 1:
        raise ValueError(f"block must be positive, got {block}")
    letters = "".join(ch for ch in text.upper() if ch in ALPHA26)
    return " ".join(letters[i : i + block] for i in range(0, len(letters), block))


__all__ = [
    "ROTORS",
    "DEFAULT_REFLECTOR",
    "rotor_dict",
    "reflector_dict",
    "rotor_spec",
    "reflector",
    "format_blocks",
]
