"""Pytest configuration shared by the test suite."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keeps developer SYNTHPAYLOAD_* settings and error reports out of test runs."""

    for key in list(os.environ):
        if key.startswith("SYNTHPAYLOAD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SYNTHPAYLOAD_ERROR_DIR", str(tmp_path / "error_reports"))


@pytest.fixture
def seed_payload():
    """Expected bytes of a seed tiled to ``size``."""

    def _expected(seed: str, size: int) -> bytes:
        raw = seed.encode("utf-8")
        return (raw * (size // len(raw) + 1))[:size]

    return _expected
