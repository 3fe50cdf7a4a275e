# settings_generator.py
from __future__ import annotations

from random import Random, SystemRandom
from typing import List, Tuple

from config import MachineConfig
from engine import ROTOR_COUNT
from keyboard_and_plugboard import ALPHA26
from utilities import ROTORS, reflector_dict

MAX_PAIRS = len(ALPHA26) // 2
DEFAULT_PAIRS = 10          # the usual wartime plug count


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(k: int, rng: Random | SystemRandom) -> List[Tuple[str, str]]:
    """Return *k* disjoint plug pairs."""
    k = max(0, min(k, MAX_PAIRS))
    pool = list(ALPHA26)
    rng.shuffle(pool)
    return list(zip(pool[::2], pool[1::2]))[:k]


def generate_config(
    seed: int | None = None,
    *,
    pairs: int = DEFAULT_PAIRS,
    reflectors: List[str] | None = None,
) -> MachineConfig:
    """Random but always valid settings; the same *seed* gives the same config.

    Rotors are drawn without repetition, as on the historical key sheets.
    """
    rng = build_rng(seed)
    names = [spec.name for spec in ROTORS]
    refl_pool = reflectors or list(reflector_dict)

    return MachineConfig(
        rotor_order=tuple(rng.sample(names, ROTOR_COUNT)),
        ring_settings=tuple(rng.randrange(len(ALPHA26)) for _ in range(ROTOR_COUNT)),
        initial_positions=tuple(rng.randrange(len(ALPHA26)) for _ in range(ROTOR_COUNT)),
        plugboard_pairs=tuple(choose_pairs(pairs, rng)),
        reflector=rng.choice(refl_pool),
    )
