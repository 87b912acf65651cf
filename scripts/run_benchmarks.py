"""Runs the payload benchmarks with environment configuration.

Prefer running:
- `synthetic-payload-benchmark`
"""

from __future__ import annotations

from pathlib import Path

from synthetic_payload.benchmarks.runner import run_all_benchmarks, write_report
from synthetic_payload.shared import configure_logging, load_payload_config


def main() -> int:
    configure_logging()
    report = run_all_benchmarks(load_payload_config())
    written = write_report(report, output_dir=Path("benchmark_reports"), formats=("json", "md"))
    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
