"""
Charset compiler: turn a compact specification like "a-zA-Z0-9\\-"
into the sorted, deduplicated list of byte values passwords are drawn from.

Grammar (ASCII only):
- an optional leading "^" inverts the set with respect to typeable ASCII
- then any number of items: a literal character, an escaped "\\-" or
  "\\\\", or a range "a-b" whose endpoints are literal-or-escaped
- hyphens and backslashes must be escaped; nothing else may be
"""

from __future__ import annotations

from enum import Enum
from typing import List

from .errors import (
    EmptyCharsetError,
    EmptySpecError,
    InvalidEscapeError,
    UnescapedHyphenError,
    UntypeableCharacterError,
    UnterminatedEscapeError,
    UnterminatedRangeError,
)

HYPHEN = 0x2D
BACKSLASH = 0x5C
CARET = 0x5E

# One bit per byte value; bits 0x20..0x7E (space through tilde) are set.
TYPEABLE = ((1 << 0x7F) - 1) & ~((1 << 0x20) - 1)


class ParserState(Enum):
    START = "start"
    CHAR = "char"
    ESCAPE = "escape"
    RANGE = "range"
    RANGE_ESCAPE = "range_escape"


def bits_to_charset(mask: int) -> List[int]:
    """
    Flatten a bit-set into its member byte values, ascending.
    """
    return [i for i in range(mask.bit_length()) if (mask >> i) & 1]


def typeable_charset() -> List[int]:
    return bits_to_charset(TYPEABLE)


def _span(start: int, end: int) -> int:
    # Bits for (start, end]; empty when end <= start.
    if end <= start:
        return 0
    return ((1 << (end + 1)) - 1) & ~((1 << (start + 1)) - 1)


def parse_charset_spec(charset_spec: str | bytes) -> List[int]:
    """
    Compile a charset specification into an ascending list of unique bytes.

    Raises a CharsetSpecError subclass on the first problem found; there
    is no partial result.
    """
    if isinstance(charset_spec, str):
        data = charset_spec.encode("utf-8")
    else:
        data = bytes(charset_spec)

    if not data:
        raise EmptySpecError()

    invert = data[0] == CARET
    if invert:
        data = data[1:]

    state = ParserState.START
    # Byte carried by CHAR (previous literal) and RANGE/RANGE_ESCAPE (start).
    anchor = 0
    result = 0

    for byte in data:
        if not (TYPEABLE >> byte) & 1:
            raise UntypeableCharacterError(byte)

        if state is ParserState.START or state is ParserState.CHAR:
            if byte == HYPHEN:
                if state is ParserState.START:
                    raise UnescapedHyphenError()
                state = ParserState.RANGE
            elif byte == BACKSLASH:
                state = ParserState.ESCAPE
            else:
                result |= 1 << byte
                anchor = byte
                state = ParserState.CHAR

        elif state is ParserState.ESCAPE:
            if byte != HYPHEN and byte != BACKSLASH:
                raise InvalidEscapeError(byte)
            result |= 1 << byte
            anchor = byte
            state = ParserState.CHAR

        elif state is ParserState.RANGE:
            if byte == HYPHEN:
                raise UnescapedHyphenError()
            if byte == BACKSLASH:
                state = ParserState.RANGE_ESCAPE
            else:
                result |= _span(anchor, byte)
                state = ParserState.START

        else:  # RANGE_ESCAPE
            if byte != HYPHEN and byte != BACKSLASH:
                raise InvalidEscapeError(byte)
            result |= _span(anchor, byte)
            state = ParserState.START

    if state is ParserState.ESCAPE or state is ParserState.RANGE_ESCAPE:
        raise UnterminatedEscapeError()
    if state is ParserState.RANGE:
        raise UnterminatedRangeError()

    if invert:
        result = TYPEABLE & ~result

    if not result:
        raise EmptyCharsetError()

    return bits_to_charset(result)


def compile_charset(charset_spec: str | bytes | None = None) -> List[int]:
    """
    Like parse_charset_spec, but None selects the full typeable set.
    """
    if charset_spec is None:
        return typeable_charset()
    return parse_charset_spec(charset_spec)
