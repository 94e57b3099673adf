"""
Mode-checked printer session.

A PrinterSession is the stateful counterpart of the pure encoders: it follows
the printer's Standard/Page mode, rejects (or warns about) commands that the
current mode does not accept, and assembles the encoded commands into one
buffer in call order.

    session = PrinterSession()
    session.emit(commands.init_sequence)
    session.emit(commands.select_justification, "centered")
    session.emit(commands.text, "Shopping list")
    session.emit(commands.cut)
    payload = session.getvalue()
"""

import logging
from typing import Callable

from .buffer import CommandBuffer
from .commands import text
from .mode import ModeTracker, PrinterMode

logger = logging.getLogger(__name__)


class PrinterSession:
    """Encodes commands against a tracked printer mode into a CommandBuffer."""

    def __init__(self, strict: bool = True, encoding: str = "cp437"):
        self.tracker = ModeTracker(strict=strict)
        self.buffer = CommandBuffer()
        self.encoding = encoding

    @property
    def mode(self) -> PrinterMode:
        return self.tracker.mode

    def emit(self, command: Callable[..., bytes], *args, **kwargs) -> bytes:
        """
        Check, encode and append one command.

        The mode check and the encoder's own validation both run before
        anything is appended, and the mode only changes once the command
        is in the buffer.

        Raises:
            ModeError: If strict and the command is illegal in the current mode
            ValidationError: If the encoder rejects the arguments
        """
        self.tracker.check(command)
        data = command(*args, **kwargs)
        self.buffer.append(data)
        self.tracker.apply(command)
        return data

    def write_text(self, value: str) -> bytes:
        """Emit text in the session's encoding."""
        return self.emit(text, value, encoding=self.encoding)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def reset(self) -> None:
        """Drop the buffered commands and assume the printer is in Standard mode."""
        self.buffer.clear()
        self.tracker.reset()
        logger.debug("Session reset")
