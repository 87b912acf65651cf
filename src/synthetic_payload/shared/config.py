"""Payload configuration, with an environment-based loader."""

from __future__ import annotations

import os
import random
import re
from dataclasses import dataclass
from typing import Mapping

from synthetic_payload.reader import DummyReader

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmgt]?)(i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "k": 1024, "m": 1024**2, "g": 1024**3, "t": 1024**4}


def parse_size(text: str | int) -> int:
    """Parses ``"4096"``, ``"32k"``, ``"1MiB"`` or ``"2GB"`` into a byte count.

    Suffixes are binary (``1k == 1024``).
    """

    if isinstance(text, int):
        if text < 0:
            raise ValueError(f"size must be non-negative, got {text}")
        return text

    match = _SIZE_RE.match(text)
    if match is None:
        raise ValueError(f"invalid size: {text!r}")
    number, unit, _suffix = match.groups()
    return int(number) * _SIZE_UNITS[unit.lower()]


@dataclass(frozen=True, slots=True)
class PayloadConfig:
    """Settings for the payload streams handed to upload workers."""

    object_size: int = 1024 * 1024
    seed: str = "synthetic-payload"
    block_size: int | None = None
    filler_seed: int | None = None
    read_size: int = 64 * 1024

    @classmethod
    def default(cls) -> "PayloadConfig":
        return cls()

    def make_reader(self, seed: str | None = None) -> DummyReader:
        """Builds a fresh reader; ``seed`` overrides the configured one (e.g. an object key)."""

        rng = random.Random(self.filler_seed) if self.filler_seed is not None else None
        return DummyReader(
            self.object_size,
            self.seed if seed is None else seed,
            block_size=self.block_size,
            rng=rng,
        )


_ENV_PREFIX = "SYNTHPAYLOAD_"


def _env_value(environ: Mapping[str, str], name: str) -> str | None:
    value = (environ.get(_ENV_PREFIX + name) or "").strip()
    return value or None


def _env_size(environ: Mapping[str, str], name: str) -> int | None:
    value = _env_value(environ, name)
    if value is None:
        return None
    try:
        return parse_size(value)
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name}: {exc}") from exc


def load_payload_config(environ: Mapping[str, str] | None = None) -> PayloadConfig:
    """Loads the payload config from environment variables.

    Recognised variables (all optional):
    - `SYNTHPAYLOAD_OBJECT_SIZE`, `SYNTHPAYLOAD_BLOCK_SIZE`, `SYNTHPAYLOAD_READ_SIZE`: sizes, suffixes allowed
    - `SYNTHPAYLOAD_SEED`: seed used when no object key is given
    - `SYNTHPAYLOAD_FILLER_SEED`: integer; makes random filler reproducible
    """

    env = os.environ if environ is None else environ
    defaults = PayloadConfig.default()

    filler_seed: int | None = None
    raw_filler_seed = _env_value(env, "FILLER_SEED")
    if raw_filler_seed is not None:
        try:
            filler_seed = int(raw_filler_seed)
        except ValueError as exc:
            raise ValueError(f"{_ENV_PREFIX}FILLER_SEED: expected an integer, got {raw_filler_seed!r}") from exc

    object_size = _env_size(env, "OBJECT_SIZE")
    read_size = _env_size(env, "READ_SIZE")
    if read_size == 0:
        raise ValueError(f"{_ENV_PREFIX}READ_SIZE: must be positive")

    return PayloadConfig(
        object_size=defaults.object_size if object_size is None else object_size,
        seed=_env_value(env, "SEED") or defaults.seed,
        block_size=_env_size(env, "BLOCK_SIZE"),
        filler_seed=filler_seed,
        read_size=defaults.read_size if read_size is None else read_size,
    )
