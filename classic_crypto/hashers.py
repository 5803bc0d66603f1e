"""
Hashers — Digests, MACs and key derivation
==========================================
The hash side of the toolkit. Every hasher turns bytes into a digest and
offers `hash_string`, which reads its input and writes its output in a
chosen byte format (utf8, hex or base64), the way a text-box host uses it.

    Hasher        MD5, SHA-1, SHA-2, SHA-3, BLAKE2, SM3
    HmacHasher    keyed HMAC over any of the above
    Pbkdf2Hasher  PBKDF2-HMAC password-based key derivation
    FnvHasher     FNV-1 / FNV-1a, 32 or 64 bit (non-cryptographic)

MD5 and SHA-1 are here for compatibility with historical data only.

Dependencies: cryptography >= 41.0
"""

import base64
import binascii
import enum
import logging
from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import InvalidConfiguration, InvalidInputFormat

logger = logging.getLogger(__name__)


class ByteFormat(enum.Enum):
    UTF8   = "utf8"
    HEX    = "hex"
    BASE64 = "base64"


def text_to_bytes(text: str, fmt: ByteFormat) -> bytes:
    try:
        if fmt is ByteFormat.UTF8:
            return text.encode("utf-8")
        if fmt is ByteFormat.HEX:
            return bytes.fromhex("".join(text.split()))
        return base64.b64decode(text, validate=True)
    except (ValueError, binascii.Error) as e:
        raise InvalidInputFormat(f"input is not valid {fmt.value}: {e}") from None


def bytes_to_text(data: bytes, fmt: ByteFormat) -> str:
    if fmt is ByteFormat.UTF8:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidInputFormat("digest is not valid utf8, choose hex or base64 output") from None
    if fmt is ByteFormat.HEX:
        return data.hex()
    return base64.b64encode(data).decode("ascii")


ALGORITHMS = {
    "md5":        hashes.MD5,
    "sha1":       hashes.SHA1,
    "sha224":     hashes.SHA224,
    "sha256":     hashes.SHA256,
    "sha384":     hashes.SHA384,
    "sha512":     hashes.SHA512,
    "sha512_224": hashes.SHA512_224,
    "sha512_256": hashes.SHA512_256,
    "sha3_224":   hashes.SHA3_224,
    "sha3_256":   hashes.SHA3_256,
    "sha3_384":   hashes.SHA3_384,
    "sha3_512":   hashes.SHA3_512,
    "blake2b":    lambda: hashes.BLAKE2b(64),
    "blake2s":    lambda: hashes.BLAKE2s(32),
    "sm3":        hashes.SM3,
}


def _algorithm(name: str) -> hashes.HashAlgorithm:
    try:
        return ALGORITHMS[name.lower()]()
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown hash algorithm {name!r}. Expected one of {list(ALGORITHMS)}."
        ) from None


class ByteHasher(ABC):
    """Common text-format handling for all hashers."""

    def __init__(self, input_format: ByteFormat = ByteFormat.UTF8,
                 output_format: ByteFormat = ByteFormat.HEX):
        self.input_format  = input_format
        self.output_format = output_format

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        ...

    def hash_string(self, text: str) -> str:
        data = text_to_bytes(text, self.input_format)
        return bytes_to_text(self.hash(data), self.output_format)


class Hasher(ByteHasher):
    """Plain message digest."""

    def __init__(self, algorithm: str = "sha256", **formats):
        super().__init__(**formats)
        _algorithm(algorithm)
        self.algorithm = algorithm

    @property
    def digest_size(self) -> int:
        return _algorithm(self.algorithm).digest_size

    def hash(self, data: bytes) -> bytes:
        h = hashes.Hash(_algorithm(self.algorithm))
        h.update(data)
        return h.finalize()


class HmacHasher(Hasher):
    """HMAC (RFC 2104) keyed with `key`."""

    def __init__(self, key: bytes = b"", algorithm: str = "sha256", **formats):
        super().__init__(algorithm, **formats)
        self.key = key

    def hash(self, data: bytes) -> bytes:
        h = hmac.HMAC(self.key, _algorithm(self.algorithm))
        h.update(data)
        return h.finalize()

    def verify(self, data: bytes, tag: bytes) -> bool:
        """Constant-time comparison of `tag` against the HMAC of `data`."""
        h = hmac.HMAC(self.key, _algorithm(self.algorithm))
        h.update(data)
        try:
            h.verify(tag)
            return True
        except InvalidSignature:
            return False


class Pbkdf2Hasher(Hasher):
    """PBKDF2-HMAC (RFC 8018) key derivation."""

    def __init__(self, salt: bytes = b"", iterations: int = 600_000,
                 length: int = 32, algorithm: str = "sha256", **formats):
        super().__init__(algorithm, **formats)
        if iterations < 1:
            raise InvalidConfiguration("PBKDF2 needs at least one iteration.")
        if length < 1:
            raise InvalidConfiguration("PBKDF2 output length must be positive.")
        self.salt       = salt
        self.iterations = iterations
        self.length     = length

    def hash(self, data: bytes) -> bytes:
        logger.debug(f"PBKDF2-{self.algorithm} iterations={self.iterations} length={self.length}")
        kdf = PBKDF2HMAC(
            algorithm=_algorithm(self.algorithm),
            length=self.length,
            salt=self.salt,
            iterations=self.iterations,
        )
        return kdf.derive(data)


class FnvHasher(ByteHasher):
    """Fowler–Noll–Vo hash. Fast, not cryptographic."""

    PARAMS = {
        32: (0x811C9DC5, 0x01000193),
        64: (0xCBF29CE484222325, 0x00000100000001B3),
    }

    def __init__(self, bits: int = 64, alternate: bool = True, **formats):
        super().__init__(**formats)
        if bits not in self.PARAMS:
            raise InvalidConfiguration(f"FNV width must be one of {list(self.PARAMS)} bits.")
        self.bits      = bits
        self.alternate = alternate   # FNV-1a when True

    def hash(self, data: bytes) -> bytes:
        h, prime = self.PARAMS[self.bits]
        mask = (1 << self.bits) - 1
        for byte in data:
            if self.alternate:
                h = ((h ^ byte) * prime) & mask
            else:
                h = ((h * prime) & mask) ^ byte
        return h.to_bytes(self.bits // 8, "big")
