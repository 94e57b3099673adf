"""
Image source: decoded images to RasterImage pixel grids.

Pillow handles file formats; the encoder only ever sees the resulting
print/blank grid. Dark pixels print, light pixels stay blank.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from .raster import RasterImage

logger = logging.getLogger(__name__)

BW_THRESHOLD = 128


def raster_from_array(
    array: np.ndarray, threshold: int = BW_THRESHOLD, invert: bool = False
) -> RasterImage:
    """
    Binarize a greyscale (H, W) array: values below threshold print.

    Boolean arrays are taken as-is (True prints).
    """
    array = np.asarray(array)
    if array.dtype == bool:
        bits = array
    else:
        bits = array < threshold
    if invert:
        bits = ~bits
    return RasterImage.from_array(bits)


def raster_from_image(
    img: Image.Image,
    threshold: int = BW_THRESHOLD,
    invert: bool = False,
    max_width: Optional[int] = None,
) -> RasterImage:
    """
    Convert a Pillow image to a RasterImage.

    Args:
        img: Any Pillow image; transparency is flattened onto white
        threshold: Grey level (0-255) below which a pixel prints
        invert: Print light pixels instead of dark ones
        max_width: If set, downscale wider images to this many dots,
            keeping the aspect ratio

    Returns:
        RasterImage ready for print_raster_bit_image or print_bit_image
    """
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        img = Image.alpha_composite(background, rgba)

    grey = img.convert("L")
    if max_width is not None and grey.width > max_width:
        height = max(1, round(grey.height * max_width / grey.width))
        logger.debug(
            "Resizing image %dx%d -> %dx%d", grey.width, grey.height, max_width, height
        )
        grey = grey.resize((max_width, height), Image.Resampling.LANCZOS)

    arr = np.array(grey, dtype=np.uint8)
    return raster_from_array(arr, threshold=threshold, invert=invert)


def load_raster_image(
    path: str | Path,
    threshold: int = BW_THRESHOLD,
    invert: bool = False,
    max_width: Optional[int] = None,
) -> RasterImage:
    """Load an image file and convert it to a RasterImage."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Image file not found: {p}")

    with Image.open(p) as img:
        img.load()
        raster = raster_from_image(
            img, threshold=threshold, invert=invert, max_width=max_width
        )
    logger.info("Loaded image %s as %dx%d raster", p, raster.width, raster.height)
    return raster
