"""
Parameter validation for ESC/POS command encoding.

This module provides the error taxonomy and the small set of domain checks
shared by every encoder. Checks raise before any command bytes are built, so
a failed encode never yields a partial sequence.

Rules validated here:
- Integer parameters within an inclusive range
- Boolean-ish flags
- Closed enumerations resolved from a member or its symbolic name
- Byte sequences (every value 0-255)
"""

import numbers
from enum import Enum
from typing import Iterable, Type, TypeVar, Union

E = TypeVar("E", bound=Enum)


class EncoderError(Exception):
    """Base exception for command encoding errors."""
    pass


class ValidationError(EncoderError, ValueError):
    """Raised when a parameter is outside its protocol-legal domain."""
    pass


class ModeError(EncoderError):
    """Raised when a command is not legal in the current printer mode."""
    pass


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def require_int(name: str, value) -> int:
    """
    Ensure a parameter is an integer and return it as a plain int.

    Any integral type is accepted, numpy scalars included.

    Booleans are rejected: passing ``True`` where a dot count is expected is
    almost always a caller bug.

    Raises:
        ValidationError: If value is not an int
    """
    if not _is_integer(value):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return int(value)


def require_range(name: str, value, low: int, high: int) -> int:
    """
    Validate that an integer parameter lies within [low, high].

    Args:
        name: Parameter name for error messages
        value: Value to check
        low, high: Inclusive bounds

    Returns:
        The validated integer

    Raises:
        ValidationError: If value is not an int or is out of range
    """
    value = require_int(name, value)
    if not (low <= value <= high):
        raise ValidationError(f"{name} must be in [{low}, {high}], got {value}")
    return value


def require_choice(name: str, value, choices: Iterable[int]) -> int:
    """Validate that an integer parameter is one of a fixed set of values."""
    allowed = tuple(choices)
    value = require_int(name, value)
    if value not in allowed:
        raise ValidationError(f"{name} must be one of {list(allowed)}, got {value}")
    return value


def require_flag(name: str, value) -> bool:
    if not isinstance(value, numbers.Integral) or value not in (0, 1):
        raise ValidationError(f"{name} must be a boolean, got {value!r}")
    return bool(value)


def resolve_enum(name: str, value: Union[E, str], enum_cls: Type[E]) -> E:
    """
    Resolve an enumerated parameter from a member or its symbolic value.

    Unknown names fail instead of falling back to a default.

    Raises:
        ValidationError: If value does not name a member of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value or member.name == value.upper().replace("-", "_"):
                return member
    names = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationError(f"Unknown {name} {value!r}; expected one of: {names}")


def require_bytes(name: str, data) -> bytes:
    """
    Validate a sequence of byte values and return it as bytes.

    Raises:
        ValidationError: If any element is not an integer in [0, 255]
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        raise ValidationError(f"{name} must be a sequence of byte values, not str")
    try:
        values = list(data)
    except TypeError:
        raise ValidationError(
            f"{name} must be a sequence of byte values, got {type(data).__name__}"
        ) from None
    for i, v in enumerate(values):
        if not _is_integer(v) or not (0 <= v <= 0xFF):
            raise ValidationError(f"{name}[{i}] must be a byte value 0-255, got {v!r}")
    return bytes(int(v) for v in values)
