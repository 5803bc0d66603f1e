"""
Errors
======
Every failure the library reports is one of these types.

They all derive from ``CipherError``, itself a ``ValueError``, so a host can
catch the whole family in one place or single out a kind. Each error keeps
the context a caller needs to render it (the offending character, or the
reason a configuration was refused).

Errors are always raised before any output is produced — an operation
either returns its whole result or nothing.
"""


class CipherError(ValueError):
    """Base class for every error raised by classic_crypto."""


class InvalidInputChar(CipherError):
    """Input text contains a symbol outside the configured alphabet."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"invalid input character {char!r}")


class InvalidConfiguration(CipherError):
    """A key, rotor, switch or plugboard setting breaks a structural rule."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CipherKeyError(CipherError):
    """A value derived from the key (e.g. a modular inverse) does not exist."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidInputLength(CipherError):
    """Input is longer than a fixed-capacity cipher can hold."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidInputFormat(CipherError):
    """Input text cannot be decoded in the selected byte format."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
