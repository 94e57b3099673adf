"""
Numeric parameter codec.

ESC/POS carries 16-bit parameters as two bytes, low byte first (nL nH).
Relative-position commands carry a signed displacement shifted by 32768 so
that it fits the same unsigned field.
"""

import struct
from typing import Tuple

from .validation import require_range

WORD_MAX = 0xFFFF
OFFSET_MIN = -32768
OFFSET_MAX = 32767
OFFSET_BIAS = 32768


def split_word(n: int) -> Tuple[int, int]:
    """Split a 16-bit magnitude into (low, high) bytes."""
    n = require_range("value", n, 0, WORD_MAX)
    return n % 256, n // 256


def compose_word(low: int, high: int) -> int:
    low = require_range("low byte", low, 0, 0xFF)
    high = require_range("high byte", high, 0, 0xFF)
    return high * 256 + low


def word_bytes(n: int) -> bytes:
    """Encode a 16-bit magnitude as its little-endian two-byte field."""
    n = require_range("value", n, 0, WORD_MAX)
    return struct.pack("<H", n)


def encode_signed_offset(d: int) -> Tuple[int, int]:
    """
    Encode a signed displacement for relative-position commands.

    Args:
        d: Displacement in motion units, -32768..32767

    Returns:
        (low, high) bytes of d + 32768

    Raises:
        ValidationError: If d is outside the signed 16-bit range
    """
    d = require_range("displacement", d, OFFSET_MIN, OFFSET_MAX)
    return split_word(d + OFFSET_BIAS)


def decode_signed_offset(low: int, high: int) -> int:
    return compose_word(low, high) - OFFSET_BIAS


def offset_bytes(d: int) -> bytes:
    return bytes(encode_signed_offset(d))
