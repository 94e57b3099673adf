# escpos_encoder/config.py
from __future__ import annotations

import codecs
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerialConfig:
    port: str = "/dev/ttyUSB0"
    baudrate: int = 9600
    timeout: float = 1.0
    mock: bool = True

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ValueError("Serial baudrate must be > 0")
        if self.timeout <= 0:
            raise ValueError("Serial timeout must be > 0")


@dataclass(frozen=True)
class PrinterConfig:
    dots_per_line: int = 512
    encoding: str = "cp437"
    strict_mode: bool = True
    cut_feed: int = 0

    def __post_init__(self) -> None:
        if not (8 <= self.dots_per_line <= 0xFFFF):
            raise ValueError(
                f"dots_per_line must be within 8..65535, got {self.dots_per_line}"
            )
        if not (0 <= self.cut_feed <= 255):
            raise ValueError(f"cut_feed must be within 0..255, got {self.cut_feed}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown printer encoding '{self.encoding}'") from None


@dataclass(frozen=True)
class AppConfig:
    serial: SerialConfig = field(default_factory=SerialConfig)
    printer: PrinterConfig = field(default_factory=PrinterConfig)


def load_from_toml(config_path: str | Path) -> AppConfig:
    """
    Load an AppConfig from a TOML file.

    Expected TOML structure:

    [serial]
    port = "/dev/ttyUSB0"
    baudrate = 9600
    timeout = 1.0
    mock = true

    [printer]
    dots_per_line = 512
    encoding = "cp437"
    strict_mode = true   # false: log mode violations instead of raising
    cut_feed = 0
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    serial = data.get("serial") or {}
    printer = data.get("printer") or {}

    cfg = AppConfig(
        serial=SerialConfig(
            port=str(serial.get("port", "/dev/ttyUSB0")),
            baudrate=int(serial.get("baudrate", 9600)),
            timeout=float(serial.get("timeout", 1.0)),
            mock=bool(serial.get("mock", True)),
        ),
        printer=PrinterConfig(
            dots_per_line=int(printer.get("dots_per_line", 512)),
            encoding=str(printer.get("encoding", "cp437")),
            strict_mode=bool(printer.get("strict_mode", True)),
            cut_feed=int(printer.get("cut_feed", 0)),
        ),
    )

    logger.info(
        "Loaded AppConfig: serial=%s@%d (mock=%s), %d dots/line, encoding=%s, strict=%s",
        cfg.serial.port,
        cfg.serial.baudrate,
        cfg.serial.mock,
        cfg.printer.dots_per_line,
        cfg.printer.encoding,
        cfg.printer.strict_mode,
    )
    return cfg


def default_config() -> AppConfig:
    """A local default: mock serial port, TM-T88 class 80mm printer."""
    return AppConfig(
        serial=SerialConfig(port="/dev/ttyUSB0", baudrate=9600, timeout=1.0, mock=True),
        printer=PrinterConfig(dots_per_line=512, encoding="cp437", strict_mode=True),
    )
