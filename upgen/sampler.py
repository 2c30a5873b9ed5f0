"""
Mapping logic: turn one large random integer into passwords over a charset.
"""

from __future__ import annotations

from typing import List, Sequence

from .entropy import EntropySource, OsEntropySource
from .errors import EntropyError


def entropy_bytes_needed(base: int, total_chars: int) -> int:
    """
    Number of random bytes to draw so that base**total_chars outcomes are
    covered with one spare byte of headroom.
    """
    bits = (base**total_chars - 1).bit_length()
    return bits // 8 + 1


def sample_passwords(
    charset: Sequence[int],
    password_len: int,
    num_passwords: int,
    source: EntropySource | None = None,
) -> List[str]:
    """
    Generate `num_passwords` passwords of `password_len` characters each.

    All characters come from a single entropy draw:
    - Read enough bytes to cover base**total_chars with a spare byte.
    - Interpret them as one little-endian integer.
    - Peel off base-`len(charset)` digits, least significant first; each
      digit indexes into the charset.
    """
    if password_len < 1 or num_passwords < 1:
        raise ValueError("password_len and num_passwords must be positive")
    if not charset:
        raise ValueError("charset must not be empty")

    src = source or OsEntropySource()
    base = len(charset)
    total_chars = password_len * num_passwords

    num_bytes = entropy_bytes_needed(base, total_chars)
    buffer = src.read(num_bytes)
    if len(buffer) != num_bytes:
        raise EntropyError(
            f"Entropy source {src.name!r} returned {len(buffer)} bytes, "
            f"expected {num_bytes}."
        )
    value = int.from_bytes(buffer, "little")

    passwords: list[str] = []
    for _ in range(num_passwords):
        password_bytes = bytearray()
        for _ in range(password_len):
            value, idx = divmod(value, base)
            password_bytes.append(charset[idx])
        passwords.append(password_bytes.decode("ascii"))

    return passwords
