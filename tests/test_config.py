from __future__ import annotations

import pytest

from synthetic_payload.shared.config import PayloadConfig, load_payload_config, parse_size


def test_parse_size_accepts_binary_suffixes() -> None:
    assert parse_size("4096") == 4096
    assert parse_size("32k") == 32 * 1024
    assert parse_size("32KiB") == 32 * 1024
    assert parse_size("1MiB") == 1024 * 1024
    assert parse_size("2GB") == 2 * 1024**3
    assert parse_size(" 5 m ") == 5 * 1024 * 1024
    assert parse_size(7) == 7


@pytest.mark.parametrize("text", ["", "abc", "-1", "1.5M", "10x"])
def test_parse_size_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        parse_size(text)


def test_load_payload_config_defaults_without_env() -> None:
    cfg = load_payload_config({})

    assert cfg == PayloadConfig.default()
    assert cfg.block_size is None
    assert cfg.filler_seed is None


def test_load_payload_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("SYNTHPAYLOAD_OBJECT_SIZE", "8KiB")
    monkeypatch.setenv("SYNTHPAYLOAD_SEED", "bucket/key-1")
    monkeypatch.setenv("SYNTHPAYLOAD_BLOCK_SIZE", "4k")
    monkeypatch.setenv("SYNTHPAYLOAD_FILLER_SEED", "99")
    monkeypatch.setenv("SYNTHPAYLOAD_READ_SIZE", "512")

    cfg = load_payload_config()

    assert cfg.object_size == 8 * 1024
    assert cfg.seed == "bucket/key-1"
    assert cfg.block_size == 4 * 1024
    assert cfg.filler_seed == 99
    assert cfg.read_size == 512


def test_load_payload_config_names_bad_variable() -> None:
    with pytest.raises(ValueError, match="SYNTHPAYLOAD_OBJECT_SIZE"):
        load_payload_config({"SYNTHPAYLOAD_OBJECT_SIZE": "lots"})

    with pytest.raises(ValueError, match="SYNTHPAYLOAD_FILLER_SEED"):
        load_payload_config({"SYNTHPAYLOAD_FILLER_SEED": "seven"})

    with pytest.raises(ValueError, match="SYNTHPAYLOAD_READ_SIZE"):
        load_payload_config({"SYNTHPAYLOAD_READ_SIZE": "0"})


def test_make_reader_uses_key_override() -> None:
    cfg = PayloadConfig(object_size=6, seed="default")

    assert cfg.make_reader().read() == b"defaul"
    assert cfg.make_reader("ab").read() == b"ababab"


def test_make_reader_filler_seed_is_reproducible() -> None:
    cfg = PayloadConfig(object_size=4096, seed="k", block_size=1024, filler_seed=5)

    assert cfg.make_reader().read() == cfg.make_reader().read()
