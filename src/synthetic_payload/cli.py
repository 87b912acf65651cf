"""Command-line interface for writing a synthetic payload to a file or stdout."""

from __future__ import annotations

import io
import logging
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO

import structlog

from synthetic_payload.errors import PayloadError
from synthetic_payload.reader import DummyReader
from synthetic_payload.shared import configure_logging, load_payload_config, parse_size, write_error_report


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="synthetic-payload",
        description="Write the deterministic payload for a seed (object key) to a file or stdout.",
    )
    parser.add_argument(
        "seed",
        nargs="?",
        help="Seed or object key (default: SYNTHPAYLOAD_SEED)",
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        help="Payload size, e.g. 4096, 32k, 1MiB (default: SYNTHPAYLOAD_OBJECT_SIZE or 1MiB)",
    )
    parser.add_argument(
        "--block-size",
        type=parse_size,
        help="Generated block length; longer than the seed means random filler",
    )
    parser.add_argument(
        "--filler-seed",
        type=int,
        help="Seed for the filler generator, for reproducible filler",
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Start writing at this stream offset (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Destination file (default: stdout)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logs",
    )
    return parser


def _copy(reader: DummyReader, out: BinaryIO, read_size: int) -> int:
    # Bounded by the logical size so an empty payload writes nothing instead of failing.
    buf = bytearray(read_size)
    view = memoryview(buf)
    written = 0
    while reader.tell() < reader.size:
        n = reader.readinto(buf)
        out.write(view[:n])
        written += n
    return written


def _run(args: Namespace) -> int:
    logger = structlog.get_logger(__name__)

    try:
        config = load_payload_config()
    except ValueError as exc:
        logger.error("invalid-configuration", error=str(exc))
        return 1

    overrides = {
        "object_size": args.size,
        "block_size": args.block_size,
        "filler_seed": args.filler_seed,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    try:
        reader = config.make_reader(args.seed)
        reader.seek(args.offset, io.SEEK_SET)
        logger.debug(
            "payload-start",
            size=reader.size,
            block_length=reader.block_length,
            offset=args.offset,
        )
        if args.output is None:
            written = _copy(reader, sys.stdout.buffer, config.read_size)
            sys.stdout.buffer.flush()
        else:
            with args.output.open("wb") as out:
                written = _copy(reader, out, config.read_size)
    except (PayloadError, ValueError) as exc:
        logger.error("payload-failed", error=str(exc))
        return 1
    except Exception as exc:
        logger.exception("payload-crashed", error=str(exc))
        report = write_error_report(exc, where="cli", context={"seed": args.seed, "size": config.object_size})
        logger.error("error-report-written", path=str(report.path))
        return 1

    logger.info(
        "payload-written",
        bytes=written,
        output=str(args.output) if args.output else "-",
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    # Logs go to stderr so stdout carries only payload bytes.
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
