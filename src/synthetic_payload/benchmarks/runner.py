"""Benchmark runner and report generation."""

from __future__ import annotations

import json
import random
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

import structlog

from synthetic_payload.shared.config import PayloadConfig

from .workloads import run_generate_benchmark, run_ranged_read_benchmark, run_read_benchmark

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BenchmarkReport:
    created_at: str
    config: dict
    benchmarks: list[dict]

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2)

    def to_markdown(self) -> str:
        lines: list[str] = []
        lines.append("# Benchmark Report")
        lines.append("")
        lines.append(f"Generated: {self.created_at}")
        lines.append("")

        if self.config:
            lines.append("## Configuration")
            for k in sorted(self.config):
                lines.append(f"- {k}: {self.config[k]}")
            lines.append("")

        for bench in self.benchmarks:
            name = bench.get("name", "unknown")
            status = bench.get("status", "ok")
            lines.append(f"## {name}")
            lines.append("")

            if status != "ok":
                lines.append(f"Status: {status}")
                reason = bench.get("reason")
                if reason:
                    lines.append(f"Reason: {reason}")
                lines.append("")
            else:
                lines.append(f"- size: {bench.get('size')}")
                lines.append(f"- iterations: {bench.get('iterations')}")
                lines.append(f"- bytes_processed: {bench.get('bytes_processed')}")
                lines.append("")

            metrics = bench.get("metrics", {}) or {}
            if metrics:
                lines.append("### Metrics")
                for k in sorted(metrics):
                    v = metrics[k]
                    if isinstance(v, float):
                        lines.append(f"- {k}: {v:.4f}")
                    else:
                        lines.append(f"- {k}: {v}")
                lines.append("")

        return "\n".join(lines).rstrip() + "\n"


def _ok(payload: dict) -> dict:
    payload.setdefault("status", "ok")
    return payload


def _error(name: str, error: Exception) -> dict:
    return {"name": name, "status": "error", "reason": str(error), "metrics": {}}


def run_all_benchmarks(config: PayloadConfig | None = None, *, iterations: int = 10) -> BenchmarkReport:
    config = config or PayloadConfig.default()
    results: list[dict] = []

    def _run(name: str, fn) -> None:
        logger.debug("benchmark-started", benchmark=name)
        try:
            result = fn().to_dict()
        except Exception as exc:
            logger.warning("benchmark-failed", benchmark=name, error=str(exc))
            results.append(_error(name, exc))
            return
        logger.info(
            "benchmark-finished",
            benchmark=name,
            mib_per_second=round(result["metrics"]["mib_per_second"], 2),
        )
        results.append(_ok(result))

    rng = random.Random(config.filler_seed) if config.filler_seed is not None else None
    _run(
        "generate_data",
        lambda: run_generate_benchmark(
            size=config.object_size,
            seed=config.seed,
            iterations=iterations,
            rng=rng,
        ),
    )
    _run(
        "sequential_read",
        lambda: run_read_benchmark(
            size=config.object_size,
            seed=config.seed,
            iterations=iterations,
            read_size=config.read_size,
            block_size=config.block_size,
        ),
    )
    _run(
        "ranged_read",
        lambda: run_ranged_read_benchmark(
            size=config.object_size,
            seed=config.seed,
            part_size=max(config.object_size // 4, config.read_size),
            block_size=config.block_size,
        ),
    )

    created_at = datetime.now(timezone.utc).isoformat()
    return BenchmarkReport(created_at=created_at, config=asdict(config), benchmarks=results)


def write_report(
    report: BenchmarkReport,
    *,
    output_dir: Path,
    stem: str = "benchmark_report",
    formats: tuple[str, ...] = ("json", "md"),
) -> list[Path]:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    if "json" in formats:
        path = output_dir / f"{stem}.json"
        path.write_text(report.to_json(), encoding="utf-8")
        written.append(path)

    if "md" in formats:
        path = output_dir / f"{stem}.md"
        path.write_text(report.to_markdown(), encoding="utf-8")
        written.append(path)

    return written
