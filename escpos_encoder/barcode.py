"""
Barcode encoding (GS k and the barcode settings commands).

UPC-A is encoded with GS k function B:

    [GS, 'k', 65, n, d1...dn]

The payload is the 11 data digits as ASCII character codes. The check
digit and the guard bars are added by the printer firmware, so the encoded
command never contains a check digit.
"""

from .mode import ANY_MODE, applies_in
from .protocol_config import GS, Font, HriPosition, Symbology, wire_value
from .validation import ValidationError, require_range

UPC_A_DATA_DIGITS = 11


def _require_digits(payload: str, length: int) -> bytes:
    if not isinstance(payload, str):
        raise ValidationError(
            f"barcode payload must be a str, got {type(payload).__name__}"
        )
    if len(payload) != length:
        raise ValidationError(
            f"barcode payload length must be {length} digits, got {len(payload)}"
        )
    codes = [ord(c) for c in payload]
    if not all(0x30 <= c <= 0x39 for c in codes):
        raise ValidationError(
            f"barcode payload must contain only ASCII digits 0-9, got {payload!r}"
        )
    return bytes(codes)


@applies_in(ANY_MODE)
def print_barcode_upc_a(payload: str) -> bytes:
    """
    Encode a UPC-A barcode.

    Args:
        payload: Exactly 11 ASCII digits (no check digit)

    Returns:
        bytes: GS k 65 11 followed by the digit character codes

    Raises:
        ValidationError: If the length is not 11 or a character is not a digit
    """
    digits = _require_digits(payload, UPC_A_DATA_DIGITS)
    return bytes([GS, 0x6B, wire_value("symbology", Symbology.UPC_A, Symbology),
                  len(digits)]) + digits


def upc_a_check_digit(payload: str) -> int:
    """
    Compute the UPC-A modulo-10 check digit for 11 data digits.

    Not used by the encoder; lets callers compare against printed output.
    """
    digits = [c - 0x30 for c in _require_digits(payload, UPC_A_DATA_DIGITS)]
    odd = sum(digits[0::2])
    even = sum(digits[1::2])
    return (10 - (odd * 3 + even) % 10) % 10


@applies_in(ANY_MODE)
def set_barcode_height(n: int) -> bytes:
    """GS h n -- barcode height in dots."""
    n = require_range("barcode height", n, 1, 255)
    return bytes([GS, 0x68, n])


@applies_in(ANY_MODE)
def select_hri_print_position(position) -> bytes:
    """GS H n -- where human-readable characters go relative to the bars."""
    return bytes([GS, 0x48, wire_value("HRI print position", position, HriPosition)])


@applies_in(ANY_MODE)
def select_hri_font(font) -> bytes:
    """GS f n -- font for human-readable characters."""
    return bytes([GS, 0x66, wire_value("HRI font", font, Font)])
