"""
classic_crypto — Hashers
=========================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from classic_crypto.errors  import InvalidConfiguration, InvalidInputFormat
from classic_crypto.hashers import (ALGORITHMS, ByteFormat, FnvHasher, Hasher, HmacHasher,
                                    Pbkdf2Hasher, bytes_to_text, text_to_bytes)

SHA256_ABC = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


# ── digests ──────────────────────────────────────────────────────────────────
def test_sha256_abc():
    assert Hasher("sha256").hash_string("abc") == SHA256_ABC

def test_md5_empty():
    assert Hasher("md5").hash_string("") == "d41d8cd98f00b204e9800998ecf8427e"

def test_md5_empty_base64():
    h = Hasher("md5", output_format=ByteFormat.BASE64)
    assert h.hash_string("") == "1B2M2Y8AsgTpgAmY7PhCfg=="

def test_hex_input():
    h = Hasher("sha256", input_format=ByteFormat.HEX)
    assert h.hash_string("61 62 63") == SHA256_ABC

@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_every_algorithm_has_its_digest_size(name):
    h = Hasher(name)
    assert len(h.hash(b"classic")) == h.digest_size

def test_unknown_algorithm():
    with pytest.raises(InvalidConfiguration):
        Hasher("whirlpool")


# ── byte formats ─────────────────────────────────────────────────────────────
def test_bad_hex_input():
    with pytest.raises(InvalidInputFormat):
        Hasher(input_format=ByteFormat.HEX).hash_string("zz")

def test_bad_base64_input():
    with pytest.raises(InvalidInputFormat):
        text_to_bytes("not base64!", ByteFormat.BASE64)

def test_digest_is_not_utf8():
    with pytest.raises(InvalidInputFormat):
        bytes_to_text(b"\xff\xfe", ByteFormat.UTF8)


# ── HMAC ─────────────────────────────────────────────────────────────────────
def test_hmac_rfc4231_case2():
    h = HmacHasher(key=b"Jefe")
    assert h.hash_string("what do ya want for nothing?") == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )

def test_hmac_verify():
    h = HmacHasher(key=b"secret")
    tag = h.hash(b"message")
    assert h.verify(b"message", tag)
    assert not h.verify(b"massage", tag)
    assert not HmacHasher(key=b"other").verify(b"message", tag)


# ── PBKDF2 ───────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("iterations, expected", [
    (1, "0c60c80f961f0e71f3a9b524af6012062fe037a6"),
    (2, "ea6c014dc72d6f8ccd1ed92ace1d41f0d8de8957"),
])
def test_pbkdf2_rfc6070(iterations, expected):
    h = Pbkdf2Hasher(salt=b"salt", iterations=iterations, length=20, algorithm="sha1")
    assert h.hash_string("password") == expected

def test_pbkdf2_bad_parameters():
    with pytest.raises(InvalidConfiguration):
        Pbkdf2Hasher(iterations=0)
    with pytest.raises(InvalidConfiguration):
        Pbkdf2Hasher(length=0)


# ── FNV ──────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("bits, alternate, expected", [
    (32, True,  "e40c292c"),
    (64, True,  "af63dc4c8601ec8c"),
    (32, False, "050c5d7e"),
])
def test_fnv_single_byte(bits, alternate, expected):
    assert FnvHasher(bits=bits, alternate=alternate).hash_string("a") == expected

def test_fnv_empty_is_offset_basis():
    assert FnvHasher(bits=32).hash_string("") == "811c9dc5"

def test_fnv_bad_width():
    with pytest.raises(InvalidConfiguration):
        FnvHasher(bits=128)
