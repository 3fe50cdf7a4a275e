# config.py
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from engine import CipherEngine
from errors import ConfigurationError
from keyboard_and_plugboard import ALPHA26, normalise_pair
from utilities import DEFAULT_REFLECTOR

# canonical key → accepted aliases (the short names saved configs tend to use)
_ALIASES: dict[str, tuple[str, ...]] = {
    "rotor_order": ("rotor_order", "rotors"),
    "ring_settings": ("ring_settings", "rings", "ring_set"),
    "initial_positions": ("initial_positions", "positions"),
    "plugboard_pairs": ("plugboard_pairs", "plugs", "plugboard"),
    "reflector": ("reflector",),
}
_REQUIRED = ("rotor_order", "ring_settings", "initial_positions")


@dataclass(slots=True)
class MachineConfig:
    """Everything needed to set up a machine for one message."""

    rotor_order: tuple[int | str, ...] = (0, 1, 2)   # left → right
    ring_settings: tuple[int, ...] = (0, 0, 0)
    initial_positions: tuple[int, ...] = (0, 0, 0)
    plugboard_pairs: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    reflector: str = DEFAULT_REFLECTOR

    # ── construction helpers ────────────────────────────────────
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MachineConfig":
        values: dict[str, Any] = {}
        for key, aliases in _ALIASES.items():
            for alias in aliases:
                if alias in data:
                    values[key] = data[alias]
                    break

        missing = [k for k in _REQUIRED if k not in values]
        if missing:
            raise ConfigurationError(f"Missing keys in config: {', '.join(missing)}")

        positions = values["initial_positions"]
        if isinstance(positions, str):
            positions = _positions_from_letters(positions)

        return cls(
            rotor_order=_as_tuple("rotor_order", values["rotor_order"]),
            ring_settings=_as_tuple("ring_settings", values["ring_settings"]),
            initial_positions=_as_tuple("initial_positions", positions),
            plugboard_pairs=tuple(
                normalise_pair(p)
                for p in _as_tuple("plugboard_pairs", values.get("plugboard_pairs", ()))
            ),
            reflector=values.get("reflector", DEFAULT_REFLECTOR),
        )

    @classmethod
    def from_json(cls, text: str) -> "MachineConfig":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError("Config JSON must be an object")
        return cls.from_dict(data)

    # ── export ──────────────────────────────────────────────────
    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = [list(v) if isinstance(v, tuple) else v for v in value]
        return data

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def build_engine(self) -> CipherEngine:
        return CipherEngine.from_config(self)


def _positions_from_letters(key: str) -> list[int]:
    """Window letters to positions: "ADU" → [0, 3, 20]."""
    key = key.strip().upper()
    bad = [ch for ch in key if ch not in ALPHA26]
    if bad:
        raise ConfigurationError(f"Invalid position letter(s) {''.join(bad)!r}")
    return [ALPHA26.index(ch) for ch in key]


def _as_tuple(key: str, value: Any) -> tuple:
    # "I II III" and "QW ER" are accepted as whitespace-separated lists
    if isinstance(value, str):
        return tuple(value.split())
    try:
        return tuple(value)
    except TypeError:
        raise ConfigurationError(f"{key} must be a list, got {value!r}") from None
