"""Benchmark workloads and runners.

This package provides:
- throughput workloads for block generation and stream reads,
- a runner collecting them into one report,
- report generation (JSON/Markdown).
"""

from .runner import BenchmarkReport, run_all_benchmarks, write_report

__all__ = ["BenchmarkReport", "run_all_benchmarks", "write_report"]
