"""
Printer Transport I/O Boundary

This module provides the Transport classes, which handle all I/O for sending
finished command buffers to a receipt printer. The encoder never opens,
writes or closes anything; it only produces bytes that are handed here.

I/O boundary classes - handle all hardware interaction and connection management.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from serial import SerialException
from aioserial import AioSerial

from .config import SerialConfig


logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when printer connection or write operations fail."""

    pass


class Transport(ABC):
    """
    Abstract base class for printer communication.

    Implementations handle hardware vs mock communication.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the output channel.

        Raises:
            TransportError: If connection fails
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close the output channel.

        Raises:
            TransportError: If disconnection fails
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the output channel is open."""
        pass

    @abstractmethod
    async def write(self, buffer: bytes) -> None:
        """
        Write one assembled command buffer to the printer.

        Args:
            buffer: Encoded ESC/POS commands

        Raises:
            TransportError: If the write fails or is short
        """
        pass


class SerialTransport(Transport):
    """
    Serial transport using aioserial.

    Covers RS-232 printers and USB printers exposing a virtual COM port.
    """

    def __init__(self, config: SerialConfig):
        self.config = config
        self._serial: Optional[AioSerial] = None
        self._io_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Connect to the printer's serial port."""
        async with self._io_lock:
            try:
                self._serial = AioSerial(
                    port=self.config.port,
                    baudrate=self.config.baudrate,
                    timeout=self.config.timeout,
                    write_timeout=self.config.timeout,
                )
                logger.info(f"Connected to printer on {self.config.port}")

            except (SerialException, OSError, ValueError) as e:
                self._serial = None
                raise TransportError(
                    f"Printer serial connect failed: {e}"
                ) from e

    async def disconnect(self) -> None:
        """Disconnect from the printer's serial port."""
        async with self._io_lock:
            if self._serial:
                try:
                    self._serial.close()
                    logger.info("Disconnected from printer")
                except (SerialException, OSError) as e:
                    raise TransportError(
                        f"Printer serial disconnect failed: {e}"
                    ) from e
                finally:
                    self._serial = None

    def is_connected(self) -> bool:
        return self._serial is not None

    async def write(self, buffer: bytes) -> None:
        """Write a buffer to the serial port, failing on short writes."""
        async with self._io_lock:
            if not self._serial:
                raise TransportError("Not connected to printer")

            try:
                bytes_written = await self._serial.write_async(buffer)
            except (SerialException, OSError) as e:
                raise TransportError(f"Printer write failed: {e}") from e

            if bytes_written != len(buffer):
                raise TransportError(
                    f"Short write: {bytes_written}/{len(buffer)} bytes"
                )


class MockTransport(Transport):
    """
    Mock transport for testing and development.

    Records every written buffer in ``written`` instead of sending it.
    """

    def __init__(self, config: Optional[SerialConfig] = None):
        self.config = config or SerialConfig()
        self._connected = False
        self.written: List[bytes] = []

    async def connect(self) -> None:
        await asyncio.sleep(0)
        self._connected = True
        logger.info(f"[MOCK] Connected to printer on {self.config.port}")

    async def disconnect(self) -> None:
        await asyncio.sleep(0)
        self._connected = False
        logger.info("[MOCK] Disconnected from printer")

    def is_connected(self) -> bool:
        return self._connected

    async def write(self, buffer: bytes) -> None:
        if not self._connected:
            raise TransportError("Not connected to mock printer")

        self.written.append(bytes(buffer))
        logger.info(f"[MOCK] Wrote {len(buffer)} bytes")
        await asyncio.sleep(0)


def create_transport(
    config: SerialConfig, use_hardware: Optional[bool] = None
) -> Transport:
    """
    Factory function to create appropriate transport implementation.

    Args:
        config: Serial configuration
        use_hardware: Force hardware (True) or mock (False). If None, uses config.mock

    Returns:
        Transport: Serial or mock implementation
    """
    if use_hardware is None:
        use_hardware = not config.mock

    if use_hardware:
        logger.info("Creating serial printer transport")
        return SerialTransport(config)
    else:
        logger.info("Creating mock printer transport")
        return MockTransport(config)
