from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

from bench_dates.bench.parser import benchmarks_frame
from bench_dates.bench.runner import BenchmarkOutcome
from bench_dates.config import Settings
from bench_dates.utils.io import write_json, write_parquet

STDERR_TAIL_LINES = 20


def results_partition(settings: Settings, run_date: date) -> Path:
    return settings.results_root / f"bench_date={run_date.isoformat()}"


def write_results(outcome: BenchmarkOutcome, settings: Settings, stamp: str | None = None) -> Path | None:
    if not outcome.benchmarks:
        return None
    partition = results_partition(settings, outcome.run_date)
    partition.mkdir(parents=True, exist_ok=True)
    path = partition / f"run_{stamp or run_stamp()}.parquet"
    write_parquet(benchmarks_frame(outcome.benchmarks, outcome.run_date), path)
    return path


def write_run_metrics(
    outcome: BenchmarkOutcome,
    settings: Settings,
    results_path: Path | None = None,
    stamp: str | None = None,
) -> Path:
    payload = {
        **outcome.summary(),
        "results_path": None if results_path is None else str(results_path),
        "stderr_tail": outcome.stderr.splitlines()[-STDERR_TAIL_LINES:],
        "finished_at": datetime.now(timezone.utc).isoformat(),
    }
    path = settings.metrics_root / f"run_{outcome.run_date.isoformat()}_{stamp or run_stamp()}.json"
    write_json(path, payload)
    return path


def run_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
