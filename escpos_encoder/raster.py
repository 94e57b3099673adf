"""
Raster bit image encoding (GS v 0).

A raster image is sent as one block: row-major, one bit per dot, 8 dots per
byte with the leftmost dot in the most significant bit. Rows whose width is
not a multiple of 8 are padded with zero (blank) bits.

Frame format:
    [GS, 'v', '0', m, xL, xH, yL, yH, <packed rows...>]

where x is the row width in bytes and y the height in dots.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .mode import ANY_MODE, applies_in
from .numeric import WORD_MAX, word_bytes
from .protocol_config import GS
from .validation import ValidationError, require_choice


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Monochrome pixel grid: True prints a dot, False leaves it blank.

    The grid is held as a read-only 2-D boolean numpy array of shape
    (height, width).
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if isinstance(self.pixels, np.ndarray):
            pixels = np.array(self.pixels, dtype=bool)
        else:
            pixels = _rows_to_array(self.pixels)
        object.__setattr__(self, "pixels", pixels)
        if self.pixels.ndim != 2:
            raise ValidationError(
                f"Raster image must be 2-D, got {self.pixels.ndim} dimensions"
            )
        h, w = self.pixels.shape
        if not (1 <= w <= WORD_MAX and 1 <= h <= WORD_MAX):
            raise ValidationError(
                f"Raster image size must be within 1..{WORD_MAX} dots, got {w}x{h}"
            )
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width_in_bytes(self) -> int:
        return (self.width + 7) // 8

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> RasterImage:
        """
        Build an image from nested rows of cells.

        Each cell is a bool or an integer; nonzero prints.

        Raises:
            ValidationError: If there are no rows, a row is empty, rows
                differ in length, or a cell is not a bool or integer
        """
        return cls(_rows_to_array(rows))

    @classmethod
    def from_array(cls, array: np.ndarray) -> RasterImage:
        """Build an image from a 2-D array; nonzero cells print."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValidationError(
                f"Raster image must be 2-D, got {array.ndim} dimensions"
            )
        return cls(array.astype(bool))

    def packed_rows(self) -> bytes:
        """Pack rows MSB-first, 8 dots per byte, zero-padding the last byte."""
        return np.packbits(self.pixels, axis=1, bitorder="big").tobytes()


def _rows_to_array(rows) -> np.ndarray:
    try:
        rows = [list(row) for row in rows]
    except TypeError:
        raise ValidationError("Raster image must be a sequence of rows") from None
    if not rows or not rows[0]:
        raise ValidationError("Raster image must have at least one row and column")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValidationError(
                f"Raster row {y} has {len(row)} dots, expected {width}"
            )
        for x, v in enumerate(row):
            if not isinstance(v, (numbers.Integral, np.bool_)):
                raise ValidationError(
                    f"Raster cell ({x}, {y}) must be a bool or integer, got {v!r}"
                )
    return np.array([[bool(v) for v in row] for row in rows], dtype=bool)


ImageLike = Union[RasterImage, np.ndarray, Sequence[Sequence]]


def as_raster_image(image: ImageLike) -> RasterImage:
    if isinstance(image, RasterImage):
        return image
    if isinstance(image, np.ndarray):
        return RasterImage.from_array(image)
    return RasterImage.from_rows(image)


@applies_in(ANY_MODE)
def print_raster_bit_image(
    image: ImageLike, vertical_scale: int = 1, horizontal_scale: int = 1
) -> bytes:
    """
    Encode a full raster bit image command.

    Args:
        image: RasterImage, 2-D array, or nested rows of print/blank cells
        vertical_scale: 1 (normal) or 2 (double height)
        horizontal_scale: 1 (normal) or 2 (double width)

    Returns:
        bytes: GS v 0 header followed by the packed bitmap

    Raises:
        ValidationError: On empty, oversized or ragged images, or bad scales
    """
    vertical_scale = require_choice("vertical scale", vertical_scale, (1, 2))
    horizontal_scale = require_choice("horizontal scale", horizontal_scale, (1, 2))
    raster = as_raster_image(image)

    m = (vertical_scale - 1) * 2 + (horizontal_scale - 1)
    return (
        bytes([GS, 0x76, 0x30, m])
        + word_bytes(raster.width_in_bytes)
        + word_bytes(raster.height)
        + raster.packed_rows()
    )
