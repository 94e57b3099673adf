"""
Printer mode tracking.

ESC/POS printers run in one of two mutually exclusive states. Standard mode
prints line by line; Page mode composes a page in memory and prints it on
FF or ESC FF. Some commands are only meaningful in one of the two states.

Each encoder function is tagged with ``@applies_in(...)``. The tag records
which modes accept the command and, for the mode-switch commands, which mode
the printer is in afterwards. ``ModeTracker`` consumes those tags.
"""

import logging
from enum import Enum
from typing import Callable, FrozenSet, NamedTuple, Optional

from .validation import ModeError

logger = logging.getLogger(__name__)


class PrinterMode(Enum):
    STANDARD = "standard"
    PAGE = "page"

    def __str__(self) -> str:
        return self.value


STANDARD_ONLY = frozenset({PrinterMode.STANDARD})
PAGE_ONLY = frozenset({PrinterMode.PAGE})
ANY_MODE = frozenset(PrinterMode)


class ModeRule(NamedTuple):
    """Mode applicability of one command."""

    allowed: FrozenSet[PrinterMode]
    enters: Optional[PrinterMode]


def applies_in(allowed: FrozenSet[PrinterMode] = ANY_MODE,
               enters: Optional[PrinterMode] = None) -> Callable:
    """Tag an encoder function with the modes it is legal in."""

    def decorate(func: Callable) -> Callable:
        func.mode_rule = ModeRule(frozenset(allowed), enters)
        return func

    return decorate


def mode_rule(command: Callable) -> ModeRule:
    """Get the mode rule of an encoder function (untagged means any mode)."""
    return getattr(command, "mode_rule", ModeRule(ANY_MODE, None))


class ModeTracker:
    """
    Two-state machine following Standard <-> Page transitions.

    In strict mode a command that is not legal in the current mode raises
    ModeError. In lenient mode the violation is logged and the command is
    allowed through, matching what the printer itself does (it ignores the
    command).
    """

    def __init__(self, strict: bool = True,
                 initial: PrinterMode = PrinterMode.STANDARD):
        self.strict = strict
        self.mode = initial

    def check(self, command: Callable) -> None:
        """
        Verify a command is legal in the current mode.

        Raises:
            ModeError: If strict and the command is not legal in this mode
        """
        rule = mode_rule(command)
        if self.mode in rule.allowed:
            return

        name = getattr(command, "__name__", repr(command))
        allowed = "/".join(sorted(str(m) for m in rule.allowed))
        message = f"{name} is only valid in {allowed} mode (printer is in {self.mode} mode)"
        if self.strict:
            raise ModeError(message)
        logger.warning("%s; the printer will ignore it", message)

    def apply(self, command: Callable) -> PrinterMode:
        """Advance the state after a command has been encoded."""
        rule = mode_rule(command)
        if rule.enters is not None and rule.enters != self.mode:
            logger.debug("Printer mode %s -> %s", self.mode, rule.enters)
            self.mode = rule.enters
        return self.mode

    def reset(self) -> None:
        self.mode = PrinterMode.STANDARD
