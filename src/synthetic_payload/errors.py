"""Exceptions raised by payload readers."""

from __future__ import annotations

import io

_WHENCE_NAMES = {
    io.SEEK_SET: "SEEK_SET",
    io.SEEK_CUR: "SEEK_CUR",
    io.SEEK_END: "SEEK_END",
}


def whence_name(whence: int) -> str:
    return _WHENCE_NAMES.get(whence, f"whence={whence!r}")


class PayloadError(RuntimeError):
    """Base class for synthetic payload errors."""


class UnconfiguredReaderError(PayloadError):
    """The reader has no generated data to serve."""

    def __init__(self, message: str = "Data needs to be generated before reading") -> None:
        super().__init__(message)


class SeekOutOfRangeError(PayloadError, ValueError):
    """Seek target falls outside ``[0, size]``.

    The reader position is left untouched, so the caller may retry with a
    corrected offset.
    """

    def __init__(self, *, whence: int, offset: int, position: int, size: int) -> None:
        self.whence = whence
        self.offset = offset
        self.position = position
        self.size = size
        super().__init__(
            f"{whence_name(whence)}: cannot seek past start or end of stream. "
            f"offset: {offset}, position: {position}, size: {size}"
        )


class InvalidWhenceError(PayloadError, ValueError):
    """Unrecognised seek anchor."""

    def __init__(self, whence: object) -> None:
        self.whence = whence
        super().__init__(f"Invalid value of whence: {whence!r}")
