"""
ESC/POS Command Encoding

One pure function per printer command. Each function validates its
arguments, then returns the command's complete byte sequence:

    <opcode bytes> <encoded parameters>

Functions have no I/O and no shared state; identical arguments always give
identical bytes. Invalid arguments raise ValidationError before any bytes
are built. Every function is tagged with the printer modes it is legal in
(see mode.py).
"""

import numbers
from typing import Optional, Sequence

from .mode import ANY_MODE, PAGE_ONLY, STANDARD_ONLY, PrinterMode, applies_in
from .numeric import offset_bytes, word_bytes
from .protocol_config import (
    CAN,
    DEFAULT_TAB_STOPS,
    ESC,
    FF,
    FS,
    GS,
    HT,
    LF,
    MAX_TAB_STOPS,
    NUL,
    CharacterCodeTable,
    Font,
    InternationalCharacterSet,
    Justification,
    PrintDirection,
    wire_value,
)
from .validation import (
    ValidationError,
    require_bytes,
    require_choice,
    require_flag,
    require_range,
)


# Print and paper feed


@applies_in(ANY_MODE)
def horizontal_tab() -> bytes:
    """HT -- move the print position to the next horizontal tab position."""
    return bytes([HT])


@applies_in(ANY_MODE)
def print_and_line_feed() -> bytes:
    """LF -- print the buffer and feed one line at the current line spacing."""
    return bytes([LF])


@applies_in(PAGE_ONLY, enters=PrinterMode.STANDARD)
def print_and_return_to_standard_mode() -> bytes:
    """FF (Page mode) -- print the page buffer and return to Standard mode."""
    return bytes([FF])


@applies_in(PAGE_ONLY)
def cancel_print_data_in_page_mode() -> bytes:
    """CAN -- delete all print data in the current Page mode print area."""
    return bytes([CAN])


@applies_in(PAGE_ONLY)
def print_data_in_page_mode() -> bytes:
    """ESC FF -- print the page buffer, staying in Page mode."""
    return bytes([ESC, FF])


@applies_in(ANY_MODE)
def print_and_feed_paper(n: int = 0) -> bytes:
    """ESC J n -- print the buffer and feed n vertical motion units."""
    n = require_range("feed amount", n, 0, 255)
    return bytes([ESC, 0x4A, n])


@applies_in(ANY_MODE)
def print_and_feed_lines(n: int) -> bytes:
    """ESC d n -- print the buffer and feed n lines."""
    n = require_range("line count", n, 1, 255)
    return bytes([ESC, 0x64, n])


@applies_in(ANY_MODE)
def cut(feed: int = 0) -> bytes:
    """
    GS V -- cut the paper.

    Args:
        feed: Vertical motion units to feed before cutting, 0-255. Zero
            selects the plain cut (GS V 1); a positive value selects the
            feed-and-cut variant (GS V 65 n).

    Returns:
        bytes: 3-byte plain cut or 4-byte feed-and-cut sequence
    """
    feed = require_range("feed before cut", feed, 0, 255)
    if feed > 0:
        return bytes([GS, 0x56, 65, feed])
    return bytes([GS, 0x56, 1])


# Character formatting


@applies_in(ANY_MODE)
def set_right_side_character_spacing(n: int = 0) -> bytes:
    """ESC SP n -- set right-side character spacing to n motion units."""
    n = require_range("character spacing", n, 0, 255)
    return bytes([ESC, 0x20, n])


@applies_in(ANY_MODE)
def select_print_modes(
    font=Font.A,
    emphasized: bool = False,
    double_height: bool = False,
    double_width: bool = False,
    underline: bool = False,
) -> bytes:
    """
    ESC ! n -- select font, emphasis, double size and underline at once.

    Bit layout of n:
        bit 0: font (0 = A, 1 = B)
        bit 3: emphasized
        bit 4: double height
        bit 5: double width
        bit 7: underline
    """
    n = wire_value("font", font, Font)
    n |= require_flag("emphasized", emphasized) << 3
    n |= require_flag("double_height", double_height) << 4
    n |= require_flag("double_width", double_width) << 5
    n |= require_flag("underline", underline) << 7
    return bytes([ESC, 0x21, n])


@applies_in(ANY_MODE)
def underline(enable: bool = False, thickness: int = 1) -> bytes:
    """ESC - n -- underline off, or on with a 1- or 2-dot line."""
    enable = require_flag("enable", enable)
    thickness = require_choice("underline thickness", thickness, (1, 2))
    return bytes([ESC, 0x2D, thickness if enable else 0])


@applies_in(ANY_MODE)
def bold(enable: bool = False) -> bytes:
    """ESC E n -- emphasized mode on/off."""
    return bytes([ESC, 0x45, int(require_flag("enable", enable))])


@applies_in(ANY_MODE)
def double_strike(enable: bool = False) -> bytes:
    """ESC G n -- double-strike mode on/off."""
    return bytes([ESC, 0x47, int(require_flag("enable", enable))])


@applies_in(ANY_MODE)
def select_font(font) -> bytes:
    """ESC M n -- select character font A or B."""
    return bytes([ESC, 0x4D, wire_value("font", font, Font)])


@applies_in(ANY_MODE)
def select_character_size(width: int = 1, height: int = 1) -> bytes:
    """
    GS ! n -- select character width and height multipliers.

    Width goes in the high nibble and height in the low nibble, each stored
    as multiplier - 1. Double width and height is therefore 0x11.

    Args:
        width: Horizontal multiplier, 1-8
        height: Vertical multiplier, 1-8
    """
    width = require_range("character width", width, 1, 8)
    height = require_range("character height", height, 1, 8)
    n = ((width - 1) << 4) | (height - 1)
    return bytes([GS, 0x21, n])


@applies_in(ANY_MODE)
def inverse(enable: bool = False) -> bytes:
    """GS B n -- white/black reverse printing on/off."""
    return bytes([GS, 0x42, int(require_flag("enable", enable))])


@applies_in(ANY_MODE)
def set_smoothing(enable: bool = False) -> bytes:
    """GS b n -- smoothing of enlarged characters on/off."""
    return bytes([GS, 0x62, int(require_flag("enable", enable))])


@applies_in(STANDARD_ONLY)
def set_upside_down(enable: bool = False) -> bytes:
    """ESC { n -- upside-down print mode on/off (no effect in Page mode)."""
    return bytes([ESC, 0x7B, int(require_flag("enable", enable))])


# Character sets


@applies_in(ANY_MODE)
def select_international_character_set(character_set) -> bytes:
    n = wire_value("international character set", character_set,
                   InternationalCharacterSet)
    return bytes([ESC, 0x52, n])


@applies_in(ANY_MODE)
def select_character_code_table(table) -> bytes:
    n = wire_value("character code table", table, CharacterCodeTable)
    return bytes([ESC, 0x74, n])


@applies_in(ANY_MODE)
def select_single_byte_character_mode() -> bytes:
    """FS . -- cancel Kanji (multi-byte) character mode."""
    return bytes([FS, 0x2E])


@applies_in(ANY_MODE)
def select_user_defined_character_set(enable: bool = False) -> bytes:
    """ESC % n -- switch between user-defined and resident character sets."""
    return bytes([ESC, 0x25, int(require_flag("enable", enable))])


@applies_in(ANY_MODE)
def define_user_defined_characters(
    vertical_bytes: int,
    first: int,
    last: int,
    glyphs: Sequence[Sequence[Sequence[int]]],
) -> bytes:
    """
    ESC & y c1 c2 [x d1...d(y*x)]... -- define user-defined characters.

    Args:
        vertical_bytes: Bytes per glyph column (y), 1-3
        first, last: Character code range c1..c2, 32 <= c1 <= c2 <= 126
        glyphs: One glyph per code in the range. A glyph is a list of at
            most 12 columns; each column holds exactly `vertical_bytes`
            byte values, top to bottom.

    Raises:
        ValidationError: On any range, count or shape mismatch
    """
    vertical_bytes = require_range("vertical bytes", vertical_bytes, 1, 3)
    first = require_range("first character code", first, 32, 126)
    last = require_range("last character code", last, 32, 126)
    if last < first:
        raise ValidationError(
            f"last character code ({last}) must not precede first ({first})"
        )

    expected = last - first + 1
    if len(glyphs) != expected:
        raise ValidationError(
            f"expected {expected} glyphs for codes {first}..{last}, got {len(glyphs)}"
        )

    body = bytearray()
    for code, glyph in zip(range(first, last + 1), glyphs):
        if len(glyph) > 12:
            raise ValidationError(
                f"glyph for code {code} is {len(glyph)} columns wide, maximum is 12"
            )
        body.append(len(glyph))
        for column in glyph:
            column_bytes = require_bytes(f"glyph {code} column", column)
            if len(column_bytes) != vertical_bytes:
                raise ValidationError(
                    f"glyph for code {code} has a column of {len(column_bytes)} "
                    f"bytes, expected {vertical_bytes}"
                )
            body += column_bytes

    return bytes([ESC, 0x26, vertical_bytes, first, last]) + bytes(body)


@applies_in(ANY_MODE)
def cancel_user_defined_character(code: int) -> bytes:
    """ESC ? n -- delete the user-defined character for code n."""
    code = require_range("character code", code, 32, 126)
    return bytes([ESC, 0x3F, code])


# Line spacing and tabs


@applies_in(ANY_MODE)
def select_default_line_spacing() -> bytes:
    """ESC 2 -- line spacing back to the default (about 1/6 inch)."""
    return bytes([ESC, 0x32])


@applies_in(ANY_MODE)
def set_line_spacing(units: Optional[int] = None) -> bytes:
    """ESC 3 n -- set line spacing; None selects the default spacing."""
    if units is None:
        return select_default_line_spacing()
    units = require_range("line spacing", units, 0, 255)
    return bytes([ESC, 0x33, units])


@applies_in(ANY_MODE)
def set_horizontal_tab_positions(stops: Sequence[int] = DEFAULT_TAB_STOPS) -> bytes:
    """
    ESC D n1...nk NUL -- set horizontal tab positions.

    Args:
        stops: Up to 32 column positions, each 1-255, in ascending order.
            An empty list clears all tab positions.
    """
    stops = list(stops)
    if len(stops) > MAX_TAB_STOPS:
        raise ValidationError(
            f"at most {MAX_TAB_STOPS} tab stops allowed, got {len(stops)}"
        )
    for i, stop in enumerate(stops):
        stops[i] = stop = require_range(f"tab stop {i}", stop, 1, 255)
        if i and stop <= stops[i - 1]:
            raise ValidationError(
                f"tab stops must be ascending, {stop} follows {stops[i - 1]}"
            )
    return bytes([ESC, 0x44, *stops, NUL])


# Print position and area


@applies_in(ANY_MODE)
def set_absolute_print_position(n: int) -> bytes:
    """ESC $ nL nH -- move to n motion units from the start of the line."""
    return bytes([ESC, 0x24]) + word_bytes(n)


@applies_in(ANY_MODE)
def set_relative_print_position(d: int) -> bytes:
    """ESC \\ nL nH -- move the print position d motion units from here."""
    return bytes([ESC, 0x5C]) + offset_bytes(d)


@applies_in(STANDARD_ONLY)
def select_justification(justification=Justification.LEFT) -> bytes:
    """ESC a n -- align line contents left, centered or right."""
    n = wire_value("justification", justification, Justification)
    return bytes([ESC, 0x61, n])


@applies_in(ANY_MODE)
def set_left_margin(n: int) -> bytes:
    """
    GS L nL nH -- left margin in horizontal motion units.

    In page mode the printer stores the value and applies it on return to
    standard mode.
    """
    return bytes([GS, 0x4C]) + word_bytes(n)


@applies_in(ANY_MODE)
def set_print_area_width(width: int = 0) -> bytes:
    """GS W nL nH -- print area width in horizontal motion units."""
    return bytes([GS, 0x57]) + word_bytes(width)


@applies_in(ANY_MODE)
def set_motion_units(x: int, y: int) -> bytes:
    """GS P x y -- horizontal and vertical motion units (1/x and 1/y inch)."""
    x = require_range("horizontal motion unit", x, 1, 255)
    y = require_range("vertical motion unit", y, 1, 255)
    return bytes([GS, 0x50, x, y])


# Page mode


@applies_in(STANDARD_ONLY, enters=PrinterMode.PAGE)
def select_page_mode() -> bytes:
    """ESC L -- switch from Standard mode to Page mode."""
    return bytes([ESC, 0x4C])


@applies_in(PAGE_ONLY, enters=PrinterMode.STANDARD)
def select_standard_mode() -> bytes:
    """ESC S -- switch from Page mode to Standard mode, clearing the page."""
    return bytes([ESC, 0x53])


@applies_in(PAGE_ONLY)
def select_print_direction_in_page_mode(direction=PrintDirection.LEFT_TO_RIGHT) -> bytes:
    """
    ESC T n -- Page mode print direction and starting position.

    Accepts a PrintDirection (or its name) or the raw value 0-3.
    """
    if isinstance(direction, numbers.Integral) and not isinstance(direction, bool):
        n = require_range("print direction", direction, 0, 3)
    else:
        n = wire_value("print direction", direction, PrintDirection)
    return bytes([ESC, 0x54, n])


@applies_in(PAGE_ONLY)
def set_print_area_in_page_mode(x: int, y: int, width: int, height: int) -> bytes:
    """ESC W -- Page mode print area: origin (x, y) and size, in motion units."""
    require_range("print area width", width, 1, 0xFFFF)
    require_range("print area height", height, 1, 0xFFFF)
    return (
        bytes([ESC, 0x57])
        + word_bytes(x)
        + word_bytes(y)
        + word_bytes(width)
        + word_bytes(height)
    )


@applies_in(PAGE_ONLY)
def set_absolute_vertical_print_position_in_page_mode(n: int) -> bytes:
    """GS $ nL nH -- vertical position from the ESC T starting point."""
    return bytes([GS, 0x24]) + word_bytes(n)


@applies_in(PAGE_ONLY)
def set_relative_vertical_print_position_in_page_mode(d: int) -> bytes:
    """GS \\ nL nH -- move the vertical print position d motion units."""
    return bytes([GS, 0x5C]) + offset_bytes(d)


# Initialization and text


@applies_in(ANY_MODE, enters=PrinterMode.STANDARD)
def initialize() -> bytes:
    """ESC @ -- clear the print buffer and reset all settings."""
    return bytes([ESC, 0x40])


@applies_in(ANY_MODE, enters=PrinterMode.STANDARD)
def init_sequence() -> bytes:
    """Reset, single-byte character mode, Font A."""
    return initialize() + select_single_byte_character_mode() + select_font(Font.A)


@applies_in(ANY_MODE)
def text(value: str, encoding: str = "cp437") -> bytes:
    """
    Encode printable text in the printer's active code page.

    The encoding must match the table chosen with
    select_character_code_table (cp437 is the power-on default).

    Raises:
        ValidationError: If value is not a str or cannot be encoded
    """
    if not isinstance(value, str):
        raise ValidationError(f"text must be a str, got {type(value).__name__}")
    try:
        return value.encode(encoding)
    except LookupError:
        raise ValidationError(f"Unknown text encoding {encoding!r}") from None
    except UnicodeEncodeError as e:
        raise ValidationError(
            f"character {e.object[e.start:e.end]!r} cannot be encoded in {encoding}"
        ) from e
