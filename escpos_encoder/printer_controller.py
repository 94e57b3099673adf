import logging

from typing import Optional

from .config import AppConfig
from .session import PrinterSession
from .transport import Transport, TransportError, create_transport

logger = logging.getLogger(__name__)


class PrinterController:
    """
    High-level controller for receipt printer output.

    This controller handles:
    - Creating mode-checked sessions configured for this printer
    - Sending assembled buffers via pluggable Transport implementations
    - Reporting transmission success or failure
    """

    def __init__(
        self,
        config: AppConfig,
        use_hardware: Optional[bool] = None,
        transport: Optional[Transport] = None,
    ):
        self.config = config
        self.transport: Transport = transport or create_transport(
            config.serial, use_hardware
        )

        self.logger = logging.getLogger(f"{__name__}")

        self.logger.info(
            f"Printer controller initialized ({config.printer.dots_per_line} dots/line)"
        )

    async def connect(self) -> None:
        """
        Connect to the printer.

        Raises:
            TransportError: If connection fails
        """
        await self.transport.connect()
        self.logger.info("Printer controller connected successfully")

    async def disconnect(self) -> None:
        await self.transport.disconnect()
        self.logger.info("Printer controller disconnected")

    def is_connected(self) -> bool:
        return self.transport.is_connected()

    def new_session(self) -> PrinterSession:
        """Create a session using this printer's encoding and mode policy."""
        return PrinterSession(
            strict=self.config.printer.strict_mode,
            encoding=self.config.printer.encoding,
        )

    async def print_buffer(self, buffer: bytes) -> bool:
        """
        Send one assembled buffer to the printer.

        Args:
            buffer: Finished command buffer

        Returns:
            bool: True if the whole buffer was written, False otherwise
                (the reason is logged)
        """
        if not self.is_connected():
            self.logger.error("Cannot print - not connected")
            return False

        try:
            await self.transport.write(bytes(buffer))
            self.logger.debug(f"Sent {len(buffer)} bytes to printer")
            return True

        except TransportError as e:
            self.logger.error(f"Error sending buffer to printer: {e}")
            return False

    async def print_session(self, session: PrinterSession) -> bool:
        """Send a session's buffer and clear it once it has been written."""
        success = await self.print_buffer(session.getvalue())
        if success:
            session.buffer.clear()
        return success
