"""Tests for DummyReader read/seek behaviour."""

from __future__ import annotations

import io
import random
import shutil

import pytest

from synthetic_payload.errors import InvalidWhenceError, SeekOutOfRangeError, UnconfiguredReaderError
from synthetic_payload.generator import LETTERS
from synthetic_payload.reader import MIN_TILE_SIZE, DummyReader


def test_read_returns_seed_then_end_of_stream() -> None:
    reader = DummyReader(5, "hello")
    buf = bytearray(5)

    assert reader.readinto(buf) == 5
    assert bytes(buf) == b"hello"
    assert reader.readinto(buf) == 0
    assert reader.read(5) == b""


def test_read_with_oversized_buffer_returns_remaining_bytes() -> None:
    reader = DummyReader(5, "hello")
    reader.read(5)

    reader.seek(0, io.SEEK_SET)
    buf = bytearray(6)

    assert reader.readinto(buf) == 5
    assert bytes(buf[:5]) == b"hello"


def test_read_eof_after_exact_read() -> None:
    reader = DummyReader(3, "end")
    buf = bytearray(3)

    assert reader.readinto(buf) == 3
    assert bytes(buf) == b"end"
    assert reader.readinto(buf) == 0


def test_read_multiple_blocks() -> None:
    reader = DummyReader(10, "block")

    assert reader.read(10) == b"blockblock"


def test_read_tiles_short_seed() -> None:
    assert DummyReader(10, "cran").read(10) == b"crancrancr"


def test_read_multiple_unaligned_blocks() -> None:
    reader = DummyReader(9, "abc")
    buf = bytearray(2)
    counts = []
    res = bytearray()

    for _ in range(5):
        n = reader.readinto(buf)
        counts.append(n)
        res += buf[:n]

    assert counts == [2, 2, 2, 2, 1]
    assert bytes(res) == b"abcabcabc"


def test_read_large_stream_from_seed_crosses_tile_boundaries(seed_payload) -> None:
    size = 3 * MIN_TILE_SIZE + 17
    reader = DummyReader(size, "xyz")

    assert reader.read(size) == seed_payload("xyz", size)


def test_chunked_reads_match_single_read() -> None:
    size = 200_000
    reader = DummyReader(size, "")
    whole = reader.read(size)
    reader.seek(0)

    chunks = []
    buf = bytearray(4097)
    while True:
        n = reader.readinto(buf)
        if not n:
            break
        chunks.append(bytes(buf[:n]))

    assert sum(len(c) for c in chunks) == size
    assert b"".join(chunks) == whole


def test_read_never_exceeds_remaining_bytes() -> None:
    reader = DummyReader(100, "seed")
    reader.seek(95)
    buf = bytearray(64)

    assert reader.readinto(buf) == 5
    assert reader.tell() == 100
    assert reader.readinto(buf) == 0


def test_read_into_memoryview_slice() -> None:
    reader = DummyReader(8, "abcd")
    buf = bytearray(b"........")

    assert reader.readinto(memoryview(buf)[2:6]) == 4
    assert bytes(buf) == b"..abcd.."


def test_empty_seed_generates_filler_for_full_size() -> None:
    reader = DummyReader(10_000, "")

    assert reader.block_length == 10_000
    data = reader.read(10_000)
    assert len(data) == 10_000
    assert set(data) <= set(LETTERS)


def test_block_size_override_tiles_filler_block() -> None:
    reader = DummyReader(100, "ab", block_size=10, rng=random.Random(3))
    data = reader.read(100)

    assert reader.block_length == 10
    assert data == data[:10] * 10
    assert set(data) <= set(LETTERS)


def test_seeded_filler_is_reproducible_across_readers() -> None:
    a = DummyReader(50_000, "", rng=random.Random(42)).read(50_000)
    b = DummyReader(50_000, "", rng=random.Random(42)).read(50_000)

    assert a == b


def test_seed_longer_than_size_is_truncated() -> None:
    reader = DummyReader(3, "hello")

    assert reader.block_length == 3
    assert reader.read() == b"hel"


def test_zero_size_reader_is_unconfigured() -> None:
    reader = DummyReader(0, "anything")

    with pytest.raises(UnconfiguredReaderError):
        reader.readinto(bytearray(1))
    assert reader.seek(0) == 0


def test_negative_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        DummyReader(-1, "seed")


def test_size_accessors() -> None:
    reader = DummyReader(1234, "seed")

    assert reader.size == 1234
    assert len(reader) == 1234
    assert reader.block_length == 4
    assert reader.readable() and reader.seekable()
    assert not reader.writable()


def test_seek_to_end_is_inclusive() -> None:
    reader = DummyReader(10, "0123456789")

    assert reader.seek(10, io.SEEK_SET) == 10
    assert reader.readinto(bytearray(4)) == 0


@pytest.mark.parametrize("offset", [-1, 11])
def test_seek_out_of_range_keeps_position(offset: int) -> None:
    reader = DummyReader(10, "0123456789")
    reader.seek(4)

    with pytest.raises(SeekOutOfRangeError) as excinfo:
        reader.seek(offset, io.SEEK_SET)

    assert reader.tell() == 4
    assert reader.read(2) == b"45"
    err = excinfo.value
    assert err.whence == io.SEEK_SET
    assert err.position == offset
    assert err.size == 10
    assert "SEEK_SET" in str(err)
    assert isinstance(err, ValueError)


def test_seek_current_moves_relative_to_position() -> None:
    reader = DummyReader(10, "0123456789")
    reader.read(3)

    assert reader.seek(4, io.SEEK_CUR) == 7
    assert reader.read(2) == b"78"
    assert reader.seek(-9, io.SEEK_CUR) == 0

    with pytest.raises(SeekOutOfRangeError) as excinfo:
        reader.seek(-1, io.SEEK_CUR)
    assert excinfo.value.whence == io.SEEK_CUR
    assert reader.tell() == 0


def test_seek_end_counts_back_from_end() -> None:
    reader = DummyReader(10, "0123456789")

    assert reader.seek(3, io.SEEK_END) == 7
    assert reader.read() == b"789"
    assert reader.seek(0, io.SEEK_END) == 10

    with pytest.raises(SeekOutOfRangeError) as excinfo:
        reader.seek(11, io.SEEK_END)
    assert excinfo.value.position == -1
    assert reader.tell() == 10


def test_seek_invalid_whence() -> None:
    reader = DummyReader(10, "seed")
    reader.seek(2)

    with pytest.raises(InvalidWhenceError):
        reader.seek(0, 7)
    assert reader.tell() == 2


def test_seek_then_read_matches_sequential_read(seed_payload) -> None:
    size = 2 * MIN_TILE_SIZE + 1001
    reader = DummyReader(size, "object-1-key")
    expected = seed_payload("object-1-key", size)

    for offset in (0, 1, 11, 12, 13, MIN_TILE_SIZE - 1, MIN_TILE_SIZE, MIN_TILE_SIZE + 5, size - 20, size):
        reader.seek(offset)
        assert reader.read(50) == expected[offset : offset + 50]


def test_rereading_after_seek_is_deterministic_for_filler() -> None:
    size = 300_000
    reader = DummyReader(size, "")
    first = reader.read(size)

    for offset in (0, 4095, 32 * 1024, 123_457, size - 1):
        reader.seek(offset)
        assert reader.read(1000) == first[offset : offset + 1000]


def test_reader_works_with_buffered_io_and_copyfileobj(seed_payload) -> None:
    size = 100_000
    expected = seed_payload("stream", size)

    assert io.BufferedReader(DummyReader(size, "stream")).read() == expected

    out = io.BytesIO()
    shutil.copyfileobj(DummyReader(size, "stream"), out, 8192)
    assert out.getvalue() == expected


def test_closed_reader_rejects_operations() -> None:
    reader = DummyReader(10, "seed")
    reader.close()

    with pytest.raises(ValueError):
        reader.readinto(bytearray(2))
    with pytest.raises(ValueError):
        reader.seek(0)
