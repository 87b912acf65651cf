"""Deterministic, seekable synthetic payloads for object-storage load tests."""

from .errors import InvalidWhenceError, PayloadError, SeekOutOfRangeError, UnconfiguredReaderError
from .generator import data_block_size, generate_data_from_key
from .reader import DummyReader

__all__ = [
    "DummyReader",
    "generate_data_from_key",
    "data_block_size",
    "PayloadError",
    "UnconfiguredReaderError",
    "SeekOutOfRangeError",
    "InvalidWhenceError",
    "benchmarks",
    "shared",
]
