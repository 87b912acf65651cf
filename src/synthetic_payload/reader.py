"""Seekable reader over a generated payload block."""

from __future__ import annotations

import io
import random

from .errors import InvalidWhenceError, SeekOutOfRangeError, UnconfiguredReaderError
from .generator import generate_data_from_key

# Short blocks are pre-expanded to at least this many bytes so large reads
# need only a handful of bulk copies.
MIN_TILE_SIZE = 64 * 1024


class DummyReader(io.RawIOBase):
    """Read-only, seekable stream of ``size`` synthetic bytes.

    The stream is backed by a block produced once by
    :func:`~synthetic_payload.generator.generate_data_from_key`. When the block
    is shorter than ``size`` it is repeated: the byte at logical position
    ``k`` is ``block[k % len(block)]``.

    By default the block is the seed itself (tiled when the seed is shorter
    than ``size``); an empty seed yields ``size`` bytes of random letters.
    ``block_size`` overrides the block length, so a block longer than the seed
    gets random filler after it.

    Instances are not thread-safe; give every concurrent upload its own reader.
    """

    def __init__(
        self,
        size: int,
        seed: str | bytes = "",
        *,
        block_size: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        size = int(size)
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")

        raw = seed.encode("utf-8") if isinstance(seed, str) else bytes(seed)
        if block_size is None:
            block_size = min(len(raw), size) if raw else size

        block = generate_data_from_key(raw, int(block_size), rng=rng)

        self._size = size
        self._offset = 0
        self._block_length = len(block)
        if 0 < len(block) < MIN_TILE_SIZE:
            # A whole number of blocks, so tile positions agree with block positions.
            block = block * -(-MIN_TILE_SIZE // len(block))
        self._tile = memoryview(block)
        self._tile_pos = 0

    @property
    def size(self) -> int:
        """Logical stream length."""

        return self._size

    @property
    def block_length(self) -> int:
        return self._block_length

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._size}, offset={self._offset}, "
            f"block_length={self._block_length})"
        )

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        self._check_open()
        return self._offset

    def readinto(self, buffer) -> int:  # type: ignore[override]
        """Fills ``buffer`` with up to ``len(buffer)`` payload bytes.

        Returns the number of bytes copied, which is always
        ``min(len(buffer), size - tell())``; ``0`` means end of stream.
        """

        self._check_open()
        if not self._block_length:
            raise UnconfiguredReaderError()
        if self._offset >= self._size:
            return 0

        out = memoryview(buffer).cast("B")
        want = min(len(out), self._size - self._offset)

        tile = self._tile
        tile_length = len(tile)
        pos = self._tile_pos
        copied = 0
        while copied < want:
            n = min(want - copied, tile_length - pos)
            out[copied : copied + n] = tile[pos : pos + n]
            copied += n
            pos += n
            if pos == tile_length:
                pos = 0

        self._tile_pos = pos
        self._offset += want
        return want

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Moves the stream position and returns it.

        ``SEEK_END`` counts ``offset`` bytes back from the end of the stream.
        Targets outside ``[0, size]`` raise :class:`SeekOutOfRangeError` and
        leave the position unchanged.
        """

        self._check_open()
        offset = int(offset)
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._offset + offset
        elif whence == io.SEEK_END:
            position = self._size - offset
        else:
            raise InvalidWhenceError(whence)

        if not 0 <= position <= self._size:
            raise SeekOutOfRangeError(whence=whence, offset=offset, position=position, size=self._size)

        self._offset = position
        if self._block_length:
            self._tile_pos = position % len(self._tile)
        return position

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed reader")
