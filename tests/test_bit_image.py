"""Tests for ESC * bit-image strips and band slicing."""

import numpy as np
import pytest

from escpos_encoder.bit_image import (
    bit_image_bands,
    column_count,
    print_bit_image,
    select_bit_image_mode,
)
from escpos_encoder.validation import ValidationError


def test_eight_dot_single_density():
    out = select_bit_image_mode([0xFF, 0x01, 0x80])
    assert out == bytes([0x1B, 0x2A, 0, 3, 0, 0xFF, 0x01, 0x80])


def test_twenty_four_dot_double_density():
    data = bytes(range(6))
    out = select_bit_image_mode(data, vertical_density=24, horizontal_density="double")
    assert out[:5] == bytes([0x1B, 0x2A, 33, 2, 0])
    assert out[5:] == data


def test_twenty_four_dot_requires_multiple_of_three():
    with pytest.raises(ValidationError, match="multiple of 3"):
        select_bit_image_mode([1, 2, 3, 4], vertical_density=24)


def test_density_validation():
    with pytest.raises(ValidationError):
        select_bit_image_mode([1], vertical_density=16)
    with pytest.raises(ValidationError):
        select_bit_image_mode([1], horizontal_density="triple")
    with pytest.raises(ValidationError):
        select_bit_image_mode([256])


def test_column_count():
    assert column_count(9, 8) == 9
    assert column_count(9, 24) == 3


def test_bands_are_column_major_top_msb():
    pixels = np.zeros((8, 2), dtype=bool)
    pixels[0, 0] = True  # top of column 0
    pixels[7, 1] = True  # bottom of column 1
    bands = list(bit_image_bands(pixels, vertical_density=8))
    assert bands == [bytes([0x80, 0x01])]


def test_last_band_is_padded():
    pixels = np.ones((30, 1), dtype=bool)
    bands = list(bit_image_bands(pixels, vertical_density=24))
    assert len(bands) == 2
    assert bands[0] == bytes([0xFF, 0xFF, 0xFF])
    # 6 printed rows, then 18 padding rows
    assert bands[1] == bytes([0b1111_1100, 0x00, 0x00])


def test_print_bit_image_wraps_bands_with_line_spacing():
    pixels = np.ones((16, 4), dtype=bool)
    out = print_bit_image(pixels, vertical_density=8)
    band = bytes([0x1B, 0x2A, 0, 4, 0]) + bytes([0xFF] * 4) + b"\n"
    assert out == bytes([0x1B, 0x33, 48]) + band + band + bytes([0x1B, 0x32])


def test_numpy_strip_is_accepted():
    strip = np.array([0xFF, 0x01], dtype=np.uint8)
    assert select_bit_image_mode(strip) == bytes([0x1B, 0x2A, 0, 2, 0, 0xFF, 0x01])


def test_numpy_2d_strip_is_rejected():
    with pytest.raises(ValidationError):
        select_bit_image_mode(np.zeros((2, 3), dtype=np.uint8))
