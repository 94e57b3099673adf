"""
Command buffer assembly.

Concatenates encoded commands, in the order given, into one transmission
buffer. The wire protocol is order-sensitive (later settings override
earlier ones), so the assembler never reorders, merges or drops commands.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .validation import EncoderError, ValidationError

Chunk = Union[bytes, bytearray, memoryview]


def assemble(*chunks: Chunk) -> bytes:
    """Concatenate command byte sequences in call order."""
    return b"".join(bytes(c) for c in chunks)


class CommandBuffer:
    """Append-only buffer of encoded commands."""

    def __init__(self, chunks: Iterable[Chunk] = ()):
        self._data = bytearray()
        self._count = 0
        self.extend(chunks)

    def append(self, chunk: Chunk) -> CommandBuffer:
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise ValidationError(
                f"command must be bytes, got {type(chunk).__name__}"
            )
        self._data += chunk
        self._count += 1
        return self

    def extend(self, chunks: Iterable[Chunk]) -> CommandBuffer:
        for chunk in chunks:
            self.append(chunk)
        return self

    def __iadd__(self, chunk: Chunk) -> CommandBuffer:
        return self.append(chunk)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def command_count(self) -> int:
        return self._count

    def clear(self) -> None:
        self._data.clear()
        self._count = 0

    def hexdump(self, width: int = 16) -> str:
        """Render the buffer as hex lines, for dry runs and logs."""
        data = bytes(self._data)
        return "\n".join(
            f"{offset:08x}  {data[offset:offset + width].hex(' ')}"
            for offset in range(0, len(data), width)
        )


class EncodeResult(NamedTuple):
    """Outcome of one encode call: bytes on success, the error otherwise."""

    data: Optional[bytes]
    error: Optional[EncoderError]

    @property
    def ok(self) -> bool:
        return self.error is None


def try_encode(command: Callable[..., bytes], *args, **kwargs) -> EncodeResult:
    """Run an encoder, returning the error as a value instead of raising."""
    try:
        return EncodeResult(command(*args, **kwargs), None)
    except EncoderError as e:
        return EncodeResult(None, e)


class Call(NamedTuple):
    """One encoder invocation in a batch, with explicit args and kwargs."""

    command: Callable[..., bytes]
    args: tuple = ()
    kwargs: Optional[dict] = None


def _unpack_call(call: Sequence) -> Tuple[Callable[..., bytes], tuple, dict]:
    if isinstance(call, Call):
        return call.command, tuple(call.args), dict(call.kwargs or {})
    command, *args = call
    return command, tuple(args), {}


def _encode_all(calls: Iterable[Sequence]) -> List[EncodeResult]:
    results = []
    for call in calls:
        command, args, kwargs = _unpack_call(call)
        results.append(try_encode(command, *args, **kwargs))
    return results


def validate_batch(calls: Iterable[Sequence]) -> List[Tuple[int, EncoderError]]:
    """
    Encode every call and collect the failures instead of stopping at the
    first one.

    Args:
        calls: ``Call`` tuples, or plain (command, *args) sequences

    Returns:
        (index, error) for each call that failed; empty when all are valid
    """
    return [
        (index, result.error)
        for index, result in enumerate(_encode_all(calls))
        if not result.ok
    ]


def assemble_calls(calls: Iterable[Sequence]) -> bytes:
    """
    Encode a batch of calls and assemble them into one buffer.

    Each call is encoded exactly once; nothing is assembled if any call fails.

    Raises:
        ValidationError: Listing every failing call
    """
    results = _encode_all(calls)
    failures = [(i, r.error) for i, r in enumerate(results) if not r.ok]
    if failures:
        details = "; ".join(f"#{i}: {e}" for i, e in failures)
        raise ValidationError(f"{len(failures)} invalid command(s): {details}")
    return bytes(CommandBuffer(r.data for r in results))
