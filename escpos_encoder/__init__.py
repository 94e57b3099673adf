"""
ESC/POS receipt printer command encoder package.

This package provides:
- Pure encoders for ESC/POS commands, raster and bit images, and barcodes
- Standard/Page printer mode tracking with per-command applicability
- Command buffer assembly and batch validation
- Serial (aioserial) and mock transports for sending finished buffers
- Image loading (Pillow) into printable pixel grids
"""

__version__ = "0.1.0"
