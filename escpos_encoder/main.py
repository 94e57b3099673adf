#!/usr/bin/env python3
"""
Receipt Printer Demo - Main Application Entry Point

Builds a short demo receipt (title, body text, optional logo and barcode),
then sends it to the configured printer or dumps it as hex with --dry-run.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import barcode, commands
from .config import AppConfig, default_config, load_from_toml
from .image_source import load_raster_image
from .printer_controller import PrinterController
from .raster import print_raster_bit_image
from .session import PrinterSession
from .validation import EncoderError

logger = logging.getLogger(__name__)


def build_demo_receipt(
    session: PrinterSession,
    config: AppConfig,
    title: str = "Shopping list",
    lines: Optional[List[str]] = None,
    image_path: Optional[Path] = None,
    upc: Optional[str] = None,
) -> bytes:
    """Emit the demo receipt into a session and return the assembled buffer."""
    session.emit(commands.init_sequence)
    session.emit(commands.select_justification, "centered")

    if image_path is not None:
        raster = load_raster_image(image_path, max_width=config.printer.dots_per_line)
        session.emit(print_raster_bit_image, raster)

    session.emit(commands.select_character_size, 2, 2)
    session.emit(commands.bold, True)
    session.write_text(title)
    session.emit(commands.bold, False)
    session.emit(commands.print_and_line_feed)
    session.emit(commands.select_character_size, 1, 1)
    session.emit(commands.print_and_line_feed)

    session.emit(commands.select_justification, "left")
    for line in lines or ["This is a test file"]:
        session.write_text(line)
        session.emit(commands.print_and_line_feed)

    if upc is not None:
        session.emit(commands.select_justification, "centered")
        session.emit(barcode.select_hri_print_position, "below")
        session.emit(barcode.set_barcode_height, 80)
        session.emit(barcode.print_barcode_upc_a, upc)

    session.emit(commands.print_and_feed_lines, 10)
    session.emit(commands.cut, config.printer.cut_feed)
    return session.getvalue()


async def run(args: argparse.Namespace) -> int:
    config = load_from_toml(args.config) if args.config else default_config()
    controller = PrinterController(config, use_hardware=False if args.dry_run else None)
    session = controller.new_session()

    try:
        buffer = build_demo_receipt(
            session,
            config,
            title=args.title,
            lines=args.line,
            image_path=Path(args.image) if args.image else None,
            upc=args.upc,
        )
    except EncoderError as e:
        logger.error(f"Could not encode receipt: {e}")
        return 2

    if args.dry_run:
        print(session.buffer.hexdump())
        logger.info(f"Dry run: {len(buffer)} bytes encoded")
        return 0

    await controller.connect()
    try:
        success = await controller.print_session(session)
    finally:
        await controller.disconnect()
    return 0 if success else 1


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ESC/POS receipt printer demo")
    parser.add_argument("--config", help="Path to TOML configuration file")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the encoded buffer as hex instead of sending it"
    )
    parser.add_argument("--title", default="Shopping list", help="Receipt title")
    parser.add_argument(
        "--line", action="append", help="Body line (repeat for several lines)"
    )
    parser.add_argument("--image", help="Image file to print above the title")
    parser.add_argument("--upc", help="11-digit UPC-A payload to print at the bottom")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"Printer error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
