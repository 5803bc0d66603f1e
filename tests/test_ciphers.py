"""
classic_crypto — Substitution, permutation and transposition ciphers
=====================================================================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random
import re

import pytest
from classic_crypto.ciphers.caesar     import Caesar
from classic_crypto.ciphers.affine     import Affine
from classic_crypto.ciphers.chaocipher import Chaocipher
from classic_crypto.ciphers.rs44       import (Rs44, LABEL_LETTERS, parse_stencil,
                                               DEFAULT_STENCIL_ROWS)
from classic_crypto.errors             import (CipherKeyError, InvalidConfiguration,
                                               InvalidInputChar, InvalidInputLength)

PLAINTEXT = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"


# ── Caesar ───────────────────────────────────────────────────────────────────
def test_caesar_roundtrip():
    c = Caesar(shift=3)
    ct = c.encrypt("HELLO")
    assert ct == "KHOOR"
    assert c.decrypt(ct) == "HELLO"

def test_caesar_pangram():
    assert Caesar(shift=3).encrypt(PLAINTEXT) == "WKHTXLFNEURZQIRAMXPSVRYHUWKHODCBGRJ"

def test_caesar_wraps():
    assert Caesar(shift=1).encrypt("XYZ") == "YZA"
    assert Caesar(shift=-1).encrypt("ABC") == "ZAB"

def test_caesar_custom_alphabet():
    c = Caesar(shift=2, alphabet="0123456789")
    assert c.encrypt("0389") == "2501"
    assert c.decrypt("2501") == "0389"

def test_caesar_alphabet_string_rebuilds_alphabet():
    c = Caesar(shift=1)
    c.alphabet_string = "ABCA"
    assert str(c.alphabet) == "ABC"
    assert c.encrypt("C") == "A"

def test_caesar_randomize_needs_two_symbols():
    with pytest.raises(InvalidConfiguration):
        Caesar(alphabet="A").randomize(random.Random(1))

def test_caesar_rejects_foreign_symbol():
    with pytest.raises(InvalidInputChar) as info:
        Caesar(shift=3).encrypt("HELLO!")
    assert info.value.char == "!"


# ── Affine ───────────────────────────────────────────────────────────────────
def test_affine_roundtrip():
    c = Affine(add_key=3, mul_key=5)
    ct = c.encrypt("HELLO")
    assert ct == "MXGGV"
    assert c.decrypt(ct) == "HELLO"

def test_affine_pangram():
    c = Affine(add_key=3, mul_key=5)
    ct = c.encrypt(PLAINTEXT)
    assert ct == "UMXFZRNBIKVJQCVOWZLAPVEXKUMXGDYTSVH"
    assert c.decrypt(ct) == PLAINTEXT

def test_affine_mul_key_one_is_caesar():
    assert Affine(add_key=3, mul_key=1).encrypt(PLAINTEXT) == Caesar(shift=3).encrypt(PLAINTEXT)

@pytest.mark.parametrize("mul", [0, 2, 13, 26])
def test_affine_rejects_non_invertible_key(mul):
    c = Affine(add_key=1, mul_key=mul)
    with pytest.raises(CipherKeyError):
        c.encrypt("HELLO")
    with pytest.raises(CipherKeyError):
        c.decrypt("HELLO")

def test_affine_checks_input_before_key():
    with pytest.raises(InvalidInputChar):
        Affine(mul_key=2).encrypt("hello")

def test_affine_randomize_needs_two_symbols():
    with pytest.raises(InvalidConfiguration):
        Affine(alphabet="A").randomize(random.Random(1))

def test_affine_randomize_picks_invertible_key():
    c = Affine()
    rng = random.Random(3)
    for _ in range(20):
        c.randomize(rng)
        assert c.decrypt(c.encrypt(PLAINTEXT)) == PLAINTEXT


# ── Chaocipher ───────────────────────────────────────────────────────────────
def test_chaocipher_known_vector():
    c = Chaocipher()
    ct = c.encrypt("WELLDONEISBETTERTHANWELLSAID")
    assert ct == "OAHQHCNYNXTSZJRRHJBYHQKSOUJY"
    assert c.decrypt(ct) == "WELLDONEISBETTERTHANWELLSAID"

def test_chaocipher_does_not_advance_stored_disks():
    c = Chaocipher()
    c.encrypt(PLAINTEXT)
    assert str(c.left) == Chaocipher.DEFAULT_LEFT
    assert str(c.right) == Chaocipher.DEFAULT_RIGHT
    assert c.encrypt(PLAINTEXT) == c.encrypt(PLAINTEXT)

def test_chaocipher_mismatched_disks():
    with pytest.raises(InvalidConfiguration):
        Chaocipher(left="ABCDEFGHIJKLMNOP", right="ABCDEFGHIJKLMNOQ").encrypt("A")
    with pytest.raises(InvalidConfiguration):
        Chaocipher(left="ABCDEFGHIJKLMNOP", right="ABCDEFGHIJKLMNO").encrypt("A")

def test_chaocipher_short_disks():
    with pytest.raises(InvalidConfiguration):
        Chaocipher(left="ABC", right="CAB").encrypt("A")

def test_chaocipher_rejects_foreign_symbol():
    with pytest.raises(InvalidInputChar):
        Chaocipher().encrypt("HELLO WORLD")

def test_chaocipher_decrypt_rejects_foreign_symbol():
    with pytest.raises(InvalidInputChar) as info:
        Chaocipher().decrypt("abc")
    assert info.value.char == "a"

def test_chaocipher_randomize():
    c = Chaocipher()
    c.randomize(random.Random(11))
    assert sorted(c.left_string) == sorted(Chaocipher.DEFAULT_LEFT)
    assert sorted(c.right_string) == sorted(Chaocipher.DEFAULT_RIGHT)
    assert c.decrypt(c.encrypt(PLAINTEXT)) == PLAINTEXT


# ── RS44 ─────────────────────────────────────────────────────────────────────
RS44_PLAIN  = "RAINNBOWUNICORNHORNSAREIMMENSELYMOREVALUABLETHANTHOSEOFEVENTHELARGESTNARWHALS"
RS44_CIPHER = "HNANOESONMEGNANAALHRNTRAUHVSCWSTNAOAWVIBHMEFLREMLRNRLTIOEAEEBRSUIYEHREOTOLSEN"

def test_rs44_known_vector():
    c = Rs44(start_cell=(12, 16), start_column=7)
    assert c.encrypt(RS44_PLAIN) == RS44_CIPHER
    assert c.decrypt(RS44_CIPHER) == RS44_PLAIN

def test_rs44_wraps_to_top_of_grid():
    c = Rs44(start_cell=(20, 20), start_column=3)
    ct = c.encrypt(RS44_PLAIN)
    assert sorted(ct) == sorted(RS44_PLAIN)
    assert c.decrypt(ct) == RS44_PLAIN

def test_rs44_accepts_any_symbol():
    c = Rs44()
    text = "attack at dawn, 05:30!"
    assert c.decrypt(c.encrypt(text)) == text

def test_rs44_blocked_start_cell():
    with pytest.raises(InvalidConfiguration):
        Rs44(start_cell=(0, 0)).encrypt("HELLO")

def test_rs44_start_out_of_bounds():
    with pytest.raises(InvalidConfiguration):
        Rs44(start_cell=(24, 0)).encrypt("HELLO")
    with pytest.raises(InvalidConfiguration):
        Rs44(start_column=25).encrypt("HELLO")

def test_rs44_message_too_long():
    c = Rs44()
    with pytest.raises(InvalidInputLength):
        c.encrypt("A" * (c.capacity + 1))

def test_rs44_bad_column_numbers():
    nums = list(range(25))
    nums[0] = 1
    with pytest.raises(InvalidConfiguration):
        Rs44(column_nums=nums).encrypt("HELLO")

def test_rs44_stencil_parsing():
    with pytest.raises(InvalidConfiguration):
        parse_stencil("⬜⬛")
    with pytest.raises(InvalidConfiguration):
        parse_stencil("X" * 600)
    # the reference stencil has one row with eleven open cells
    with pytest.raises(InvalidConfiguration):
        parse_stencil("\n".join(DEFAULT_STENCIL_ROWS))

def test_rs44_stencil_text_roundtrip():
    c = Rs44()
    c.randomize(random.Random(5))
    d = Rs44(stencil=c.stencil_text())
    assert d.stencil == c.stencil
    assert d.capacity == 240

def test_rs44_message_key():
    c = Rs44(start_cell=(12, 16), start_column=7)
    key = c.message_key(random.Random(1))
    assert re.fullmatch(r"[a-z]{4}-[a-z]{2}", key)
    assert "j" not in key

    row, col = c.start_cell
    labels = c.xlabels[col] + c.ylabels[row] + c.xlabels[c.start_column]
    for letter, label in zip(key.replace("-", ""), labels):
        column = LABEL_LETTERS.index(label)
        assert letter in [c.key_matrix[r][column] for r in range(5)]

def test_rs44_randomize():
    c = Rs44()
    c.randomize(random.Random(9))
    c.validate()
    assert sorted(c.column_nums) == list(range(25))
    assert c.decrypt(c.encrypt(RS44_PLAIN)) == RS44_PLAIN

