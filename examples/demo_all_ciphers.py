"""
classic_crypto — Live Demo: Every Cipher and Machine
=====================================================
Run:  python examples/demo_all_ciphers.py

Shows each cipher encrypting and decrypting a real message with its
default key and with a freshly randomized one, with timing.
"""

import sys, os, time, logging, random
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classic_crypto                  import (Affine, Caesar, Chaocipher, EnigmaM3, M209, Purple,
                                             Rs44, Hasher, HmacHasher, FnvHasher, ByteFormat)
from classic_crypto.machines.enigma  import prep_enigma_text

logging.basicConfig(level=logging.INFO, format=' %(message)s')

LINE = "═" * 70
MSG  = "Angriff im Morgengrauen, Brücke über die Maas halten."

def header(family, name):
    print(f"\n{LINE}")
    print(f"  {family} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

def run(cipher, text):
    t0 = time.perf_counter()
    ct = cipher.encrypt(text)
    pt = cipher.decrypt(ct)
    elapsed = time.perf_counter() - t0
    ok("Encrypted",  ct[:50] + ("..." if len(ct) > 50 else ""))
    ok("Decrypted",  pt[:50] + ("..." if len(pt) > 50 else ""))
    ok("Round-trip", f"{elapsed*1000:.2f} ms")
    assert pt == text

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  classic_crypto — Classical Cipher Demo")
print(LINE)
print(f"  Message: {MSG}")
TEXT = prep_enigma_text(MSG)
print(f"  Prepared: {TEXT}\n")
rng = random.Random(1944)

# ── SUBSTITUTION ─────────────────────────────────────────────────────────────
header("SUBSTITUTION", "Caesar, shift 3")
run(Caesar(shift=3), TEXT)

header("SUBSTITUTION", "Affine, 5p + 8")
run(Affine(add_key=8, mul_key=5), TEXT)

# ── PERMUTATION ──────────────────────────────────────────────────────────────
header("PERMUTATION", "Chaocipher (Byrne 1918)")
c = Chaocipher()
run(c, TEXT)
c.randomize(rng)
ok("Random left disk",  c.left_string)
ok("Random right disk", c.right_string)
run(c, TEXT)

# ── TRANSPOSITION ────────────────────────────────────────────────────────────
header("TRANSPOSITION", "Rasterschlüssel 44")
r = Rs44(start_cell=(12, 16), start_column=7)
run(r, TEXT)
ok("Message key", r.message_key(rng))
ok("Stencil capacity", f"{r.capacity} cells")

# ── ROTOR MACHINES ───────────────────────────────────────────────────────────
header("ROTOR MACHINE", "Enigma M3")
e = EnigmaM3(rotors=("II", "IV", "V"), reflector="B", positions="BLA",
             rings="AAA", plugboard="AV BS CG DL FU HZ IN KM OW RX")
run(e, TEXT)
ok("Indicator after run", e.indicator)

# ── PIN AND LUG ──────────────────────────────────────────────────────────────
header("PIN AND LUG", "Hagelin M-209")
m = M209()
m.randomize(rng)
print(m.wheels_text())
run(m, TEXT)

# ── SWITCH BANKS ─────────────────────────────────────────────────────────────
header("SWITCH BANK", "Purple (Type B)")
p = Purple()
run(p, TEXT)
ok("Key", p.key)

# ── HASHERS ──────────────────────────────────────────────────────────────────
header("HASHERS", "Digests, HMAC and FNV")
ok("SHA-256",  Hasher("sha256").hash_string(MSG))
ok("SHA3-256", Hasher("sha3_256", output_format=ByteFormat.BASE64).hash_string(MSG))
ok("HMAC",     HmacHasher(key=b"Maas").hash_string(MSG))
ok("FNV-1a",   FnvHasher().hash_string(MSG))

print(f"\n{LINE}\n  All ciphers round-tripped.\n{LINE}\n")
