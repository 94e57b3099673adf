"""
Bit-image mode encoding (ESC *).

Unlike raster images, bit images are streamed as vertical strips. Each
column of a strip is 8 dots (one byte) or 24 dots (three bytes) tall, with
the top dot in the most significant bit. Taller images are printed as a
series of bands, each followed by a line feed.
"""

from typing import Iterator, Sequence, Union

import numpy as np

from .commands import print_and_line_feed, select_default_line_spacing, set_line_spacing
from .mode import ANY_MODE, applies_in
from .numeric import word_bytes
from .protocol_config import ESC, HorizontalDensity, wire_value
from .raster import ImageLike, as_raster_image
from .validation import ValidationError, require_bytes, require_choice

# Line spacing (in the default 1/360 inch vertical motion unit) that makes
# consecutive bands touch: 8 dots at 60 dpi and 24 dots at 180 dpi are both
# 2/15 inch tall.
BAND_LINE_SPACING = 48


def column_count(data_length: int, vertical_density: int) -> int:
    """Number of columns in a strip of data_length bytes."""
    vertical_density = require_choice("vertical density", vertical_density, (8, 24))
    if vertical_density == 24:
        if data_length % 3:
            raise ValidationError(
                f"24-dot bit image data must be a multiple of 3 bytes, got {data_length}"
            )
        return data_length // 3
    return data_length


@applies_in(ANY_MODE)
def select_bit_image_mode(
    data: Union[bytes, Sequence[int]],
    vertical_density: int = 8,
    horizontal_density: Union[HorizontalDensity, str] = HorizontalDensity.SINGLE,
) -> bytes:
    """
    Encode one bit-image strip.

    Args:
        data: Column bytes; one per column at 8 dots, three per column at 24
        vertical_density: 8 or 24 dots
        horizontal_density: "single" or "double"

    Returns:
        bytes: [ESC, '*', m, nL, nH, <data...>]

    Raises:
        ValidationError: On bad density, data not byte-valued, or 24-dot
            data whose length is not a multiple of 3
    """
    data = require_bytes("bit image data", data)
    columns = column_count(len(data), vertical_density)
    if columns > 0xFFFF:
        raise ValidationError(f"bit image is {columns} columns wide, maximum is 65535")

    m = (32 if vertical_density == 24 else 0)
    m += wire_value("horizontal density", horizontal_density, HorizontalDensity)
    return bytes([ESC, 0x2A, m]) + word_bytes(columns) + data


def bit_image_bands(image: ImageLike, vertical_density: int = 24) -> Iterator[bytes]:
    """
    Slice an image into bands of column data for select_bit_image_mode.

    The last band is padded with blank rows to the full band height.

    Yields:
        bytes: Column-major strip data for one band, top to bottom
    """
    vertical_density = require_choice("vertical density", vertical_density, (8, 24))
    raster = as_raster_image(image)
    pixels = raster.pixels

    pad = -raster.height % vertical_density
    if pad:
        pixels = np.vstack([pixels, np.zeros((pad, raster.width), dtype=bool)])

    for top in range(0, pixels.shape[0], vertical_density):
        band = pixels[top:top + vertical_density, :]
        # (width, density) -> (width, density // 8): one row per column
        yield np.packbits(band.T, axis=1, bitorder="big").tobytes()


@applies_in(ANY_MODE)
def print_bit_image(
    image: ImageLike,
    vertical_density: int = 24,
    horizontal_density: Union[HorizontalDensity, str] = HorizontalDensity.SINGLE,
    line_spacing: int = BAND_LINE_SPACING,
) -> bytes:
    """
    Encode a whole image as consecutive bit-image bands.

    Line spacing is set so bands touch, then restored to the default.
    """
    out = bytearray(set_line_spacing(line_spacing))
    for band in bit_image_bands(image, vertical_density):
        out += select_bit_image_mode(band, vertical_density, horizontal_density)
        out += print_and_line_feed()
    out += select_default_line_spacing()
    return bytes(out)
