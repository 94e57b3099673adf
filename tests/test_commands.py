"""Tests for the per-command ESC/POS encoders."""

import numpy as np
import pytest

from escpos_encoder import commands
from escpos_encoder.protocol_config import (
    DEFAULT_TAB_STOPS,
    WIRE_TABLES,
    CharacterCodeTable,
    Font,
    InternationalCharacterSet,
    Justification,
    PrintDirection,
)
from escpos_encoder.validation import ValidationError


def test_single_byte_commands():
    assert commands.horizontal_tab() == b"\x09"
    assert commands.print_and_line_feed() == b"\x0a"
    assert commands.print_and_return_to_standard_mode() == b"\x0c"
    assert commands.cancel_print_data_in_page_mode() == b"\x18"
    assert commands.print_data_in_page_mode() == b"\x1b\x0c"


def test_cut_default_and_with_feed():
    assert commands.cut() == bytes([0x1D, 0x56, 0x01])
    assert commands.cut(0) == bytes([0x1D, 0x56, 0x01])
    assert commands.cut(10) == bytes([0x1D, 0x56, 65, 10])
    assert len(commands.cut(255)) == 4


@pytest.mark.parametrize("feed", [-1, 256])
def test_cut_feed_out_of_range(feed):
    with pytest.raises(ValidationError):
        commands.cut(feed)


def test_print_and_feed_lines():
    assert commands.print_and_feed_lines(10) == bytes([0x1B, 0x64, 10])
    with pytest.raises(ValidationError):
        commands.print_and_feed_lines(0)
    with pytest.raises(ValidationError):
        commands.print_and_feed_lines(256)


def test_print_and_feed_paper_allows_zero():
    assert commands.print_and_feed_paper() == bytes([0x1B, 0x4A, 0])
    assert commands.print_and_feed_paper(255) == bytes([0x1B, 0x4A, 255])
    with pytest.raises(ValidationError, match="feed amount"):
        commands.print_and_feed_paper(256)


def test_character_size_packing():
    assert commands.select_character_size() == bytes([0x1D, 0x21, 0x00])
    assert commands.select_character_size(2, 2) == bytes([0x1D, 0x21, 0x11])
    assert commands.select_character_size(8, 1) == bytes([0x1D, 0x21, 0x70])
    assert commands.select_character_size(1, 8) == bytes([0x1D, 0x21, 0x07])
    assert commands.select_character_size(8, 8) == bytes([0x1D, 0x21, 0x77])


@pytest.mark.parametrize("width,height", [(0, 1), (9, 1), (1, 0), (1, 9)])
def test_character_size_out_of_range(width, height):
    with pytest.raises(ValidationError, match="character"):
        commands.select_character_size(width, height)


def test_justification_accepts_enum_and_name():
    assert commands.select_justification() == bytes([0x1B, 0x61, 0])
    assert commands.select_justification("centered") == bytes([0x1B, 0x61, 1])
    assert commands.select_justification(Justification.RIGHT) == bytes([0x1B, 0x61, 2])


def test_unknown_symbolic_names_fail():
    with pytest.raises(ValidationError, match="justification"):
        commands.select_justification("middle")
    with pytest.raises(ValidationError):
        commands.select_font("C")
    with pytest.raises(ValidationError):
        commands.select_international_character_set("atlantis")
    with pytest.raises(ValidationError):
        commands.select_character_code_table("pc999")


def test_enumerated_tables():
    assert commands.select_font(Font.B) == bytes([0x1B, 0x4D, 1])
    assert commands.select_international_character_set("denmark-2") == bytes([0x1B, 0x52, 10])
    assert commands.select_international_character_set(
        InternationalCharacterSet.CHINA
    ) == bytes([0x1B, 0x52, 15])
    assert commands.select_character_code_table("wpc1252") == bytes([0x1B, 0x74, 16])
    assert commands.select_character_code_table(
        CharacterCodeTable.PAGE_255
    ) == bytes([0x1B, 0x74, 255])


def test_every_enum_member_has_a_wire_value():
    for enum_cls, table in WIRE_TABLES.items():
        assert set(table) == set(enum_cls), enum_cls.__name__


def test_toggles():
    assert commands.bold(True) == bytes([0x1B, 0x45, 1])
    assert commands.bold() == bytes([0x1B, 0x45, 0])
    assert commands.double_strike(True) == bytes([0x1B, 0x47, 1])
    assert commands.inverse(True) == bytes([0x1D, 0x42, 1])
    assert commands.set_smoothing(True) == bytes([0x1D, 0x62, 1])
    assert commands.set_upside_down(True) == bytes([0x1B, 0x7B, 1])
    assert commands.select_user_defined_character_set(True) == bytes([0x1B, 0x25, 1])
    with pytest.raises(ValidationError):
        commands.bold(2)


def test_underline():
    assert commands.underline() == bytes([0x1B, 0x2D, 0])
    assert commands.underline(True) == bytes([0x1B, 0x2D, 1])
    assert commands.underline(True, 2) == bytes([0x1B, 0x2D, 2])
    assert commands.underline(False, 2) == bytes([0x1B, 0x2D, 0])
    with pytest.raises(ValidationError):
        commands.underline(True, 3)


def test_select_print_modes_sets_bits():
    assert commands.select_print_modes() == bytes([0x1B, 0x21, 0])
    n = commands.select_print_modes(
        Font.B, emphasized=True, double_height=True, double_width=True, underline=True
    )[2]
    assert n == 0b1011_1001
    assert commands.select_print_modes("A", double_width=True)[2] == 0b0010_0000


def test_line_spacing():
    assert commands.set_line_spacing() == bytes([0x1B, 0x32])
    assert commands.set_line_spacing(0) == bytes([0x1B, 0x33, 0])
    assert commands.set_line_spacing(48) == bytes([0x1B, 0x33, 48])
    with pytest.raises(ValidationError):
        commands.set_line_spacing(256)


def test_right_side_character_spacing():
    assert commands.set_right_side_character_spacing() == bytes([0x1B, 0x20, 0])
    assert commands.set_right_side_character_spacing(4) == bytes([0x1B, 0x20, 4])
    with pytest.raises(ValidationError):
        commands.set_right_side_character_spacing(-1)


def test_tab_positions_terminated_by_nul():
    assert commands.set_horizontal_tab_positions([8, 16]) == bytes([0x1B, 0x44, 8, 16, 0])
    assert commands.set_horizontal_tab_positions([]) == bytes([0x1B, 0x44, 0])

    default = commands.set_horizontal_tab_positions()
    assert default[2:-1] == bytes(DEFAULT_TAB_STOPS)
    assert default[-1] == 0


def test_tab_positions_limits():
    assert len(commands.set_horizontal_tab_positions(range(1, 33))) == 2 + 32 + 1
    with pytest.raises(ValidationError, match="at most 32"):
        commands.set_horizontal_tab_positions(range(1, 34))
    with pytest.raises(ValidationError):
        commands.set_horizontal_tab_positions([0])
    with pytest.raises(ValidationError):
        commands.set_horizontal_tab_positions([256])
    with pytest.raises(ValidationError, match="ascending"):
        commands.set_horizontal_tab_positions([16, 8])


def test_positions_use_little_endian_words():
    assert commands.set_absolute_print_position(300) == bytes([0x1B, 0x24, 0x2C, 0x01])
    assert commands.set_left_margin(0) == bytes([0x1D, 0x4C, 0, 0])
    assert commands.set_print_area_width(512) == bytes([0x1D, 0x57, 0, 2])
    assert commands.set_absolute_vertical_print_position_in_page_mode(257) == bytes(
        [0x1D, 0x24, 1, 1]
    )
    with pytest.raises(ValidationError):
        commands.set_left_margin(65536)


def test_relative_positions_use_signed_offset():
    assert commands.set_relative_print_position(0) == bytes([0x1B, 0x5C, 0x00, 0x80])
    assert commands.set_relative_print_position(-1) == bytes([0x1B, 0x5C, 0xFF, 0x7F])
    assert commands.set_relative_vertical_print_position_in_page_mode(10) == bytes(
        [0x1D, 0x5C, 0x0A, 0x80]
    )
    with pytest.raises(ValidationError):
        commands.set_relative_print_position(32768)


def test_page_mode_geometry():
    assert commands.select_page_mode() == bytes([0x1B, 0x4C])
    assert commands.select_standard_mode() == bytes([0x1B, 0x53])
    assert commands.set_print_area_in_page_mode(0, 0, 512, 1000) == bytes(
        [0x1B, 0x57, 0, 0, 0, 0, 0, 2, 0xE8, 0x03]
    )
    with pytest.raises(ValidationError):
        commands.set_print_area_in_page_mode(0, 0, 0, 100)


def test_print_direction():
    assert commands.select_print_direction_in_page_mode() == bytes([0x1B, 0x54, 0])
    assert commands.select_print_direction_in_page_mode(
        PrintDirection.TOP_TO_BOTTOM
    ) == bytes([0x1B, 0x54, 3])
    assert commands.select_print_direction_in_page_mode(2) == bytes([0x1B, 0x54, 2])
    with pytest.raises(ValidationError):
        commands.select_print_direction_in_page_mode(4)


def test_motion_units():
    assert commands.set_motion_units(180, 360 // 2) == bytes([0x1D, 0x50, 180, 180])
    with pytest.raises(ValidationError):
        commands.set_motion_units(0, 1)


def test_initialization():
    assert commands.initialize() == bytes([0x1B, 0x40])
    assert commands.init_sequence() == bytes([0x1B, 0x40, 0x1C, 0x2E, 0x1B, 0x4D, 0x00])


def test_text_encoding():
    assert commands.text("Hello") == b"Hello"
    assert commands.text("é") == bytes([0x82])  # cp437
    assert commands.text("é", encoding="cp1252") == bytes([0xE9])
    with pytest.raises(ValidationError, match="cannot be encoded"):
        commands.text("€")  # no euro sign in cp437
    with pytest.raises(ValidationError):
        commands.text(b"bytes")


def test_user_defined_characters():
    glyph = [[0xFF, 0x00, 0xFF], [0x00, 0xFF, 0x00]]
    assert commands.define_user_defined_characters(3, 65, 65, [glyph]) == bytes(
        [0x1B, 0x26, 3, 65, 65, 2, 0xFF, 0x00, 0xFF, 0x00, 0xFF, 0x00]
    )
    assert commands.cancel_user_defined_character(65) == bytes([0x1B, 0x3F, 65])


def test_user_defined_characters_validation():
    with pytest.raises(ValidationError, match="expected 2 glyphs"):
        commands.define_user_defined_characters(1, 65, 66, [[[1]]])
    with pytest.raises(ValidationError, match="expected 1"):
        commands.define_user_defined_characters(1, 65, 65, [[[1, 2]]])
    with pytest.raises(ValidationError):
        commands.define_user_defined_characters(1, 66, 65, [])
    with pytest.raises(ValidationError):
        commands.define_user_defined_characters(4, 65, 65, [[]])
    with pytest.raises(ValidationError):
        commands.cancel_user_defined_character(127)


def test_encoding_is_deterministic():
    assert commands.select_character_size(3, 4) == commands.select_character_size(3, 4)
    assert commands.cut(7) == commands.cut(7)


def test_numpy_parameters():
    assert commands.cut(np.int64(5)) == bytes([0x1D, 0x56, 65, 5])
    assert commands.set_horizontal_tab_positions(np.array([8, 16])) == bytes(
        [0x1B, 0x44, 8, 16, 0x00]
    )
    assert commands.select_print_direction_in_page_mode(np.uint8(2)) == bytes(
        [0x1B, 0x54, 2]
    )
    assert commands.bold(np.int8(1)) == bytes([0x1B, 0x45, 1])
