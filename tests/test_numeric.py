"""Tests for the little-endian word and signed offset codec."""

import numpy as np
import pytest

from escpos_encoder.numeric import (
    compose_word,
    decode_signed_offset,
    encode_signed_offset,
    split_word,
    word_bytes,
)
from escpos_encoder.validation import ValidationError


@pytest.mark.parametrize("n", [0, 1, 255, 256, 257, 4660, 32768, 65534, 65535])
def test_split_compose_roundtrip(n):
    assert compose_word(*split_word(n)) == n


def test_split_word_is_low_byte_first():
    assert split_word(0x1234) == (0x34, 0x12)
    assert word_bytes(0x1234) == b"\x34\x12"
    assert split_word(512) == (0, 2)


@pytest.mark.parametrize("n", [-1, 65536, 1 << 20])
def test_split_word_out_of_range(n):
    with pytest.raises(ValidationError):
        split_word(n)


def test_split_word_rejects_non_integers():
    with pytest.raises(ValidationError):
        split_word(1.5)
    with pytest.raises(ValidationError):
        split_word(True)


@pytest.mark.parametrize("d", [-32768, -1, 0, 1, 100, 32767])
def test_signed_offset_roundtrip(d):
    assert decode_signed_offset(*encode_signed_offset(d)) == d


def test_signed_offset_bias():
    assert encode_signed_offset(0) == (0x00, 0x80)
    assert encode_signed_offset(-32768) == (0, 0)
    assert encode_signed_offset(32767) == (0xFF, 0xFF)


@pytest.mark.parametrize("d", [-32769, 32768])
def test_signed_offset_out_of_range(d):
    with pytest.raises(ValidationError):
        encode_signed_offset(d)


def test_numpy_integers_are_accepted():
    assert word_bytes(np.int64(300)) == bytes([0x2C, 0x01])
    assert split_word(np.uint16(65535)) == (0xFF, 0xFF)
    assert encode_signed_offset(np.int32(-1)) == (0xFF, 0x7F)

    with pytest.raises(ValidationError):
        split_word(np.bool_(True))
    with pytest.raises(ValidationError):
        split_word(np.float64(3.0))
