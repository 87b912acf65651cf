"""Block generation for synthetic object payloads.

Payload data has to be produced quickly for multi-megabyte objects, so filler
is generated in blocks rather than one character at a time: each block is a
single ``randbytes`` call mapped onto the letter alphabet with
``bytes.translate``.
"""

from __future__ import annotations

import random

LETTERS = b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

SMALL_BLOCK_SIZE = 4 * 1024
MEDIUM_BLOCK_SIZE = 32 * 1024
LARGE_BLOCK_SIZE = 64 * 1024

_MEDIUM_THRESHOLD = 4096
_LARGE_THRESHOLD = 1024 * 1024

# Maps every byte value onto the alphabet. 256 is not a multiple of 62, so the
# first few letters are marginally more frequent.
_LETTER_TABLE = bytes(LETTERS[i % len(LETTERS)] for i in range(256))


def data_block_size(size: int) -> int:
    """Returns the filler chunk size used for a payload of ``size`` bytes."""

    if size > _LARGE_THRESHOLD:
        return LARGE_BLOCK_SIZE
    if size > _MEDIUM_THRESHOLD:
        return MEDIUM_BLOCK_SIZE
    return SMALL_BLOCK_SIZE


def random_letters(n: int, rng: random.Random) -> bytes:
    return rng.randbytes(int(n)).translate(_LETTER_TABLE)


def _key_bytes(key: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def generate_data_from_key(
    key: str | bytes | bytearray | memoryview,
    num_bytes: int,
    *,
    rng: random.Random | None = None,
) -> bytes:
    """Returns exactly ``num_bytes`` bytes of payload derived from ``key``.

    Keys at least ``num_bytes`` long are returned truncated, verbatim. Anything
    longer than the key is filled with random letters; pass a seeded ``rng``
    when the filler has to be reproducible across calls.
    """

    num_bytes = int(num_bytes)
    if num_bytes < 0:
        raise ValueError(f"num_bytes must be non-negative, got {num_bytes}")

    raw = _key_bytes(key)
    if len(raw) >= num_bytes:
        return raw[:num_bytes]

    if rng is None:
        rng = random.Random()

    block_size = data_block_size(num_bytes)
    data = bytearray()
    while len(data) < num_bytes:
        data += random_letters(block_size, rng)

    del data[num_bytes:]
    return bytes(data)
