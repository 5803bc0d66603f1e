"""
classic_crypto — Alphabet, validation and number helpers
=========================================================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random

import pytest
from classic_crypto.alphabet       import (Alphabet, BASIC_LATIN, check_input,
                                           keyed_alphabet)
from classic_crypto.errors         import CipherError, InvalidConfiguration, InvalidInputChar
from classic_crypto.math_functions import mul_inv


# ── construction ─────────────────────────────────────────────────────────────
def test_unique_from_keeps_first_occurrence():
    a = Alphabet.unique_from("HELLOWORLD")
    assert str(a) == "HELOWRD"
    assert len(a) == 7

@pytest.mark.parametrize("text", ["", "A", "ABCABC", "ZZZZ", "THEQUICKBROWNFOX", "ñöñö€€"])
def test_unique_from_never_has_duplicates(text):
    a = Alphabet.unique_from(text)
    assert len(set(a)) == len(a)
    assert set(a) == set(text)

def test_plain_constructor_refuses_duplicates():
    with pytest.raises(InvalidConfiguration):
        Alphabet("AAB")

def test_multi_character_symbols():
    a = Alphabet(["CH", "A", "B"])
    assert a.position_of("CH") == 0
    assert a.symbol_at(2) == "B"
    assert "C" not in a

def test_keyed_alphabet():
    assert keyed_alphabet("KEYWORD", BASIC_LATIN) == "KEYWORDABCFGHIJLMNPQSTUVXZ"
    assert str(Alphabet.keyed("ZEBRAS", "ABCDEZ")) == "ZEBACD"


# ── lookups and offsets ──────────────────────────────────────────────────────
def test_position_and_symbol_lookup():
    a = Alphabet("ABCD")
    assert a.position_of("C") == 2
    assert a.position_of("X") is None
    assert a.symbol_at(3) == "D"
    assert a.symbol_at(4) is None
    assert a.contains("A") and not a.contains("Z")

def test_char_offset():
    a = Alphabet("ABCD")
    assert a.get_char_offset(1, 1) == "C"
    assert a.get_char_offset(3, 1) == "A"

def test_char_offset_negative():
    a = Alphabet("ABCD")
    assert a.get_char_offset(3, -1) == "C"
    assert a.get_char_offset(0, -1) == "D"
    assert a.get_char_offset(0, -9) == "D"

def test_position_offset():
    a = Alphabet("ABCD")
    assert a.position_offset("C", 1) == 1
    assert a.position_offset("C", -1) == 3

def test_string_offset():
    a = Alphabet("ABCD")
    assert a.to_string_offset(1) == "BCDA"
    assert a.to_string_offset(-1) == "DABC"


# ── mutation ─────────────────────────────────────────────────────────────────
def test_rotations():
    a = Alphabet("ABCD")
    a.rotate_left(5)
    assert str(a) == "BCDA"
    a.rotate_right(1)
    assert str(a) == "ABCD"
    a.rotate_to("C")
    assert str(a) == "CDAB"
    a.rotate_to("X")
    assert str(a) == "CDAB"

def test_remove_and_insert_moves_a_symbol():
    a = Alphabet("ABCDE")
    a.insert(3, a.remove(1))
    assert str(a) == "ACDBE"

def test_insert_refuses_duplicate():
    a = Alphabet("ABC")
    with pytest.raises(InvalidConfiguration):
        a.insert(0, "B")

def test_swaps():
    a = Alphabet("ABCD")
    a.swap_indices(0, 3)
    assert str(a) == "DBCA"
    a.swap_indices(0, 10)
    assert str(a) == "DBCA"
    a.swap_symbols("B", "C")
    assert str(a) == "DCBA"

def test_shuffled_is_a_permutation_and_leaves_original():
    a = Alphabet(BASIC_LATIN)
    b = a.shuffled(random.Random(7))
    assert str(a) == BASIC_LATIN
    assert sorted(b) == sorted(a)

def test_copy_is_independent():
    a = Alphabet("ABCD")
    b = a.copy()
    b.rotate_left(1)
    assert a == Alphabet("ABCD")
    assert b != a


# ── validation ───────────────────────────────────────────────────────────────
def test_check_input_accepts_members():
    check_input("CAB", Alphabet("ABC"))
    check_input("", Alphabet("ABC"))

def test_check_input_reports_first_bad_char():
    with pytest.raises(InvalidInputChar) as info:
        check_input("AB?C!", Alphabet("ABC"))
    assert info.value.char == "?"

def test_errors_are_value_errors():
    assert issubclass(InvalidInputChar, CipherError)
    assert issubclass(CipherError, ValueError)


# ── modular inverse ──────────────────────────────────────────────────────────
@pytest.mark.parametrize("num, modulus, expected", [
    (5, 26, 21),
    (3, 26, 9),
    (1, 26, 1),
    (13, 26, None),
    (0, 26, None),
    (4, 10, None),
    (7, 10, 3),
])
def test_mul_inv(num, modulus, expected):
    assert mul_inv(num, modulus) == expected
