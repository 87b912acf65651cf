"""Throughput workloads for payload generation and reading.

Each workload runs against freshly built readers and checks the byte counts
it sees, so a report never contains throughput numbers for a broken stream.
"""

from __future__ import annotations

import io
import random
import time
from dataclasses import asdict, dataclass

from synthetic_payload.generator import generate_data_from_key
from synthetic_payload.reader import DummyReader

_MIB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class WorkloadResult:
    name: str
    size: int
    iterations: int
    bytes_processed: int
    metrics: dict[str, float]

    def to_dict(self) -> dict:
        return asdict(self)


def _metrics(bytes_processed: int, seconds: float, iterations: int) -> dict[str, float]:
    seconds = max(seconds, 1e-9)
    return {
        "seconds": float(seconds),
        "mib_per_second": float(bytes_processed / _MIB / seconds),
        "ops_per_second": float(iterations / seconds),
    }


def run_generate_benchmark(
    *,
    size: int,
    seed: str = "object-1-key",
    iterations: int = 10,
    rng: random.Random | None = None,
) -> WorkloadResult:
    started = time.perf_counter()
    produced = 0
    for _ in range(int(iterations)):
        data = generate_data_from_key(seed, size, rng=rng)
        if len(data) != size:
            raise RuntimeError(f"generated {len(data)} bytes, expected {size}")
        produced += len(data)
    elapsed = time.perf_counter() - started

    return WorkloadResult(
        name="generate_data",
        size=int(size),
        iterations=int(iterations),
        bytes_processed=produced,
        metrics=_metrics(produced, elapsed, int(iterations)),
    )


def drain(reader: io.RawIOBase, read_size: int) -> int:
    """Reads ``reader`` to end of stream, ``read_size`` bytes at a time."""

    buf = bytearray(read_size)
    total = 0
    while True:
        n = reader.readinto(buf)
        if not n:
            return total
        total += n


def run_read_benchmark(
    *,
    size: int,
    seed: str = "test-object-1meg",
    iterations: int = 10,
    read_size: int = 64 * 1024,
    block_size: int | None = None,
) -> WorkloadResult:
    reader = DummyReader(size, seed, block_size=block_size)

    started = time.perf_counter()
    total = 0
    for _ in range(int(iterations)):
        n = drain(reader, read_size)
        if n != size:
            raise RuntimeError(f"read {n} bytes, expected {size}")
        total += n
        reader.seek(0, io.SEEK_SET)
    elapsed = time.perf_counter() - started

    metrics = _metrics(total, elapsed, int(iterations))
    metrics["read_size"] = float(read_size)
    return WorkloadResult(
        name="sequential_read",
        size=int(size),
        iterations=int(iterations),
        bytes_processed=total,
        metrics=metrics,
    )


def run_ranged_read_benchmark(
    *,
    size: int,
    seed: str = "multipart-object",
    part_size: int = 5 * _MIB,
    block_size: int | None = None,
) -> WorkloadResult:
    """Reads the stream part by part in reverse order, as a multipart upload retrying parts would.

    Every part is compared with the same range of a single sequential pass.
    """

    reader = DummyReader(size, seed, block_size=block_size)
    expected = reader.read(size) if size else b""

    offsets = list(range(0, size, part_size))
    started = time.perf_counter()
    total = 0
    for offset in reversed(offsets):
        reader.seek(offset, io.SEEK_SET)
        length = min(part_size, size - offset)
        part = reader.read(length)
        if part != expected[offset : offset + length]:
            raise RuntimeError(f"part at offset {offset} differs from the sequential read")
        total += len(part)
    elapsed = time.perf_counter() - started

    metrics = _metrics(total, elapsed, len(offsets))
    metrics["parts"] = float(len(offsets))
    return WorkloadResult(
        name="ranged_read",
        size=int(size),
        iterations=len(offsets),
        bytes_processed=total,
        metrics=metrics,
    )
