"""CLI entrypoint for running benchmarks and writing a report."""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from dataclasses import replace
from pathlib import Path

import structlog

from synthetic_payload.shared import configure_logging, load_payload_config, parse_size, write_error_report

from .runner import run_all_benchmarks, write_report


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="synthetic-payload-benchmark",
        description="Measure payload generation and read throughput and write a report.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("benchmark_reports"),
        help="Directory for generated reports (default: benchmark_reports)",
    )
    parser.add_argument(
        "--stem",
        type=str,
        default="benchmark_report",
        help="Output filename stem (default: benchmark_report)",
    )
    parser.add_argument(
        "--format",
        action="append",
        dest="formats",
        choices=["json", "md"],
        help="Report format (can be provided multiple times). Default: json+md",
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        help="Object size, e.g. 1MiB (default: SYNTHPAYLOAD_OBJECT_SIZE or 1MiB)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        help="Seed / object key (default: SYNTHPAYLOAD_SEED)",
    )
    parser.add_argument(
        "--read-size",
        type=parse_size,
        help="Consumer read size (default: SYNTHPAYLOAD_READ_SIZE or 64KiB)",
    )
    parser.add_argument(
        "--block-size",
        type=parse_size,
        help="Generated block length; defaults to the seed length",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10,
        help="Passes per benchmark (default: 10)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logs",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    logger = structlog.get_logger(__name__)

    try:
        config = load_payload_config()
    except ValueError as exc:
        logger.error("invalid-configuration", error=str(exc))
        return 1

    overrides = {
        "object_size": args.size,
        "seed": args.seed,
        "read_size": args.read_size,
        "block_size": args.block_size,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    if config.read_size <= 0:
        logger.error("invalid-read-size", read_size=config.read_size)
        return 1

    formats = tuple(args.formats) if args.formats else ("json", "md")

    try:
        report = run_all_benchmarks(config, iterations=args.iterations)
        written = write_report(report, output_dir=args.output_dir, stem=args.stem, formats=formats)
    except Exception as exc:
        logger.exception("benchmark-run-failed", error=str(exc))
        error_report = write_error_report(exc, where="benchmarks.cli", context={"config": repr(config)})
        logger.error("error-report-written", path=str(error_report.path))
        return 1

    for path in written:
        logger.info("report-written", path=str(path))
        print(path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
