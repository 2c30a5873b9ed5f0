"""
Exception types raised by the password generator.
"""

from __future__ import annotations


class UpgenError(Exception):
    """Generic generator error."""


class ConfigError(UpgenError, ValueError):
    """Invalid configuration or environment value."""


class ParameterError(UpgenError, ValueError):
    """Zero (or negative) password length or count."""


class EntropyError(UpgenError):
    """The entropy source could not supply the requested bytes."""


# ---------- charset specification errors ----------


class CharsetSpecError(UpgenError, ValueError):
    """A charset specification could not be compiled."""


class EmptySpecError(CharsetSpecError):
    def __init__(self) -> None:
        super().__init__("empty charset specification")


class UntypeableCharacterError(CharsetSpecError):
    def __init__(self, byte: int) -> None:
        super().__init__("found untypeable or non-ASCII character")
        self.byte = byte


class UnescapedHyphenError(CharsetSpecError):
    def __init__(self) -> None:
        super().__init__("hyphens must be escaped")


class InvalidEscapeError(CharsetSpecError):
    def __init__(self, byte: int) -> None:
        super().__init__(f'invalid escape sequence: "\\{chr(byte)}"')
        self.byte = byte


class UnterminatedEscapeError(CharsetSpecError):
    def __init__(self) -> None:
        super().__init__("unterminated escape sequence")


class UnterminatedRangeError(CharsetSpecError):
    def __init__(self) -> None:
        super().__init__("unterminated character range")


class EmptyCharsetError(CharsetSpecError):
    def __init__(self) -> None:
        super().__init__("character set is empty")
