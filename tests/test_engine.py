"""
CipherEngine tests
==================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from config              import MachineConfig
from engine              import CipherEngine, step_decisions
from errors              import ConfigurationError
from rotor_and_reflector import Rotor
from utilities           import I, II, III, reflector_dict


def machine(order=(0, 1, 2), positions=(0, 0, 0), rings=(0, 0, 0), plugs=(), reflector="B"):
    return CipherEngine.from_config(MachineConfig(
        rotor_order=order,
        ring_settings=rings,
        initial_positions=positions,
        plugboard_pairs=plugs,
        reflector=reflector,
    ))

# ── construction ──────────────────────────────────────────────────────────────
def test_engine_from_config():
    e = machine(plugs=[("Q", "W")])
    assert [r.name for r in e.rotors] == ["I", "II", "III"]
    assert e.pb.pairs == [("Q", "W")]
    assert e.positions == (0, 0, 0)
    assert e.window == "AAA"

def test_engine_instances_do_not_share_rotors():
    a, b = machine(), machine()
    a.process("HELLO")
    assert a.positions == (0, 0, 5)
    assert b.positions == (0, 0, 0)

def test_engine_needs_three_rotors():
    with pytest.raises(ConfigurationError):
        CipherEngine([Rotor(I), Rotor(II)], reflector_dict["B"])

def test_engine_rejects_same_rotor_object_twice():
    r = Rotor(I)
    with pytest.raises(ConfigurationError):
        CipherEngine([r, Rotor(II), r], reflector_dict["B"])

def test_engine_accepts_plain_pairs():
    e = CipherEngine([Rotor(I), Rotor(II), Rotor(III)], reflector_dict["B"], ["QW", "ER"])
    assert e.process("HELLOWORLD") == "ICBDAFMYAZ"

@pytest.mark.parametrize("kwargs", [
    {"order": (0, 1)},
    {"order": (0, 1, 9)},
    {"order": ("I", "II", "IX")},
    {"positions": (0, 0, 26)},
    {"positions": (0, 0)},
    {"rings": (-1, 0, 0)},
    {"rings": (0, 0, 0, 0)},
    {"plugs": [("Q", "W"), ("W", "E")]},
    {"reflector": "Z"},
])
def test_engine_rejects_bad_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        machine(**kwargs)

# ── stepping ──────────────────────────────────────────────────────────────────
def test_step_decisions_plain():
    l, m, r = Rotor(I), Rotor(II), Rotor(III)
    assert step_decisions(l, m, r) == (False, False, True)

def test_step_decisions_right_at_notch():
    l, m, r = Rotor(I), Rotor(II), Rotor(III, position=21)   # V
    assert step_decisions(l, m, r) == (False, True, True)

def test_step_decisions_middle_at_notch():
    l, m, r = Rotor(I), Rotor(II, position=4), Rotor(III)    # E
    assert step_decisions(l, m, r) == (True, True, True)

def test_step_decisions_leave_rotors_untouched():
    l, m, r = Rotor(I), Rotor(II, position=4), Rotor(III, position=21)
    step_decisions(l, m, r)
    assert (l.position, m.position, r.position) == (0, 4, 21)

def test_basic_stepping():
    e = machine()
    e.encrypt_char("A")
    assert e.positions == (0, 0, 1)

def test_notch_carry():
    e = machine(positions=(0, 0, 21))
    e.encrypt_char("A")
    assert e.positions == (0, 1, 22)

def test_double_step_without_right_notch():
    e = machine(positions=(0, 4, 0))
    e.encrypt_char("A")
    assert e.positions == (1, 5, 1)

def test_double_step_sequence():
    e = machine(positions=(0, 3, 20))     # A D U
    seen = []
    for _ in range(3):
        e.step_rotors()
        seen.append(e.window)
    assert seen == ["ADV", "AEW", "BFX"]

def test_step_rotors_wraps_all_the_way_round():
    e = machine(positions=(25, 25, 25))
    e.encrypt_char("A")
    assert e.positions == (25, 25, 0)

# ── known vectors ─────────────────────────────────────────────────────────────
def test_vector_hello_world():
    assert machine().process("HELLOWORLD") == "ILBDAAMTAZ"

def test_vector_aaaaa():
    assert machine().process("AAAAA") == "BDZGO"

def test_vector_ring_settings():
    assert machine(rings=(1, 1, 1)).process("AAAAA") == "EWTYX"

def test_vector_with_plugboard():
    e = machine(plugs=[("Q", "W"), ("E", "R")])
    assert e.process("HELLOWORLD") == "ICBDAFMYAZ"
    assert e.positions == (0, 0, 10)

# ── reciprocity ───────────────────────────────────────────────────────────────
@pytest.mark.parametrize("kwargs", [
    {},
    {"plugs": [("Q", "W")]},
    {"plugs": [("Q", "W"), ("E", "R")]},
    {"order": ("V", "iv", 0), "positions": (3, 4, 20), "rings": (5, 10, 15), "plugs": ["AB", "CD", "EF", "GH"]},
    {"order": (2, 1, 0), "positions": (25, 25, 25), "rings": (25, 0, 13), "reflector": "C"},
    {"reflector": "A", "positions": (0, 4, 21)},
])
def test_reciprocity(kwargs):
    text = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 30
    cipher = machine(**kwargs).process(text)
    assert cipher != text
    assert machine(**kwargs).process(cipher) == text

def test_no_letter_enciphers_to_itself():
    text = "A" * 500
    assert "A" not in machine(plugs=["AZ"]).process(text)

def test_same_settings_same_output():
    a = machine(rings=(5, 10, 15), plugs=["AB"]).process("CONSISTENCY")
    b = machine(rings=(5, 10, 15), plugs=["AB"]).process("CONSISTENCY")
    assert a == b

def test_rotor_order_changes_output():
    assert machine(order=(2, 1, 0)).process("TEST") != machine().process("TEST")

def test_initial_position_changes_output():
    assert machine(positions=(1, 0, 0)).process("TEST") != machine().process("TEST")

# ── text handling ─────────────────────────────────────────────────────────────
def test_empty_input():
    assert machine().process("") == ""

def test_case_normalisation():
    assert machine().process("hello") == machine().process("HELLO")

def test_non_letters_pass_through():
    e = machine()
    out = e.process("A1B2C3")
    assert out == "B1J2E3"
    assert e.positions == (0, 0, 3)

def test_non_letters_do_not_disturb_surrounding_letters():
    mixed = "Hello, World! 42 times... ÄÖ ß"
    out = machine().process(mixed)
    assert len(out) == len(mixed)
    letters = [ch for ch in mixed if ch.isascii() and ch.isalpha()]
    assert "".join(ch for ch in out if ch.isascii() and ch.isalpha()) == machine().process("".join(letters))
    for a, b in zip(mixed, out):
        if not (a.isascii() and a.isalpha()):
            assert a == b

def test_encrypt_char_passthrough_keeps_state():
    e = machine()
    for ch in " 7.-\n\té":
        assert e.encrypt_char(ch) == ch
    assert e.positions == (0, 0, 0)

def test_encrypt_char_ignores_multi_character_strings():
    e = machine()
    assert e.encrypt_char("AB") == "AB"
    assert e.encrypt_char("") == ""
    assert e.positions == (0, 0, 0)

# ── state helpers ─────────────────────────────────────────────────────────────
def test_reset_rewinds_to_start():
    e = machine(positions=(0, 3, 20), plugs=["QW"])
    first = e.process("ATTACKATDAWN")
    e.reset()
    assert e.window == "ADU"
    assert e.process("ATTACKATDAWN") == first

def test_reset_allows_decrypting_with_one_engine():
    e = machine(rings=(3, 2, 1))
    cipher = e.process("RETREAT")
    e.reset()
    assert e.process(cipher) == "RETREAT"

def test_set_positions():
    e = machine()
    e.set_positions([0, 3, 20])
    assert e.window == "ADU"
    e.process("XYZ")
    e.reset()
    assert e.positions == (0, 3, 20)

def test_set_positions_is_all_or_nothing():
    e = machine()
    with pytest.raises(ConfigurationError):
        e.set_positions([1, 2, 30])
    assert e.positions == (0, 0, 0)

def test_repr():
    assert repr(machine()) == "<CipherEngine I-II-III B window=AAA>"
