from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from bench_dates.bench.runner import BenchmarkFailedError, BenchmarkOutcome, run_benchmark
from bench_dates.bench.writer import run_stamp, write_results, write_run_metrics
from bench_dates.config import Settings, get_settings
from bench_dates.utils.logging import get_logger
from bench_dates.utils.time import date_range

logger = get_logger(__name__)


@dataclass
class RangeReport:
    start: date
    end: date
    outcomes: list[BenchmarkOutcome] = field(default_factory=list)

    @property
    def dates(self) -> list[date]:
        return [outcome.run_date for outcome in self.outcomes]

    @property
    def failures(self) -> list[BenchmarkOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "dates_run": len(self.outcomes),
            "failed_dates": [outcome.run_date.isoformat() for outcome in self.failures],
            "outcomes": [outcome.summary() for outcome in self.outcomes],
        }


def run_for_date(run_date: date, settings: Settings | None = None) -> BenchmarkOutcome:
    cfg = settings or get_settings()
    outcome = run_benchmark(run_date, cfg)
    stamp = run_stamp()
    results_path = write_results(outcome, cfg, stamp)
    write_run_metrics(outcome, cfg, results_path, stamp)

    if outcome.ok:
        logger.info("benchmark_completed", extra=_log_fields(outcome))
    else:
        logger.warning("benchmark_failed", extra=_log_fields(outcome))
    return outcome


def run_range(
    start: date,
    end: date,
    settings: Settings | None = None,
    on_date: Callable[[date], None] | None = None,
) -> RangeReport:
    cfg = settings or get_settings()
    report = RangeReport(start=start, end=end)
    logger.info("range_started", extra={"start": start.isoformat(), "end": end.isoformat()})
    if start > end:
        logger.warning("range_empty", extra={"start": start.isoformat(), "end": end.isoformat()})

    for current in date_range(start, end):
        if on_date is not None:
            on_date(current)
        outcome = run_for_date(current, cfg)
        report.outcomes.append(outcome)
        if cfg.fail_fast and not outcome.ok:
            raise BenchmarkFailedError(outcome)

    logger.info(
        "range_completed",
        extra={"dates_run": len(report.outcomes), "failed": len(report.failures)},
    )
    return report


def _log_fields(outcome: BenchmarkOutcome) -> dict:
    return {
        "bench_date": outcome.run_date.isoformat(),
        "returncode": outcome.returncode,
        "duration_seconds": outcome.duration_seconds,
        "benchmark_count": len(outcome.benchmarks),
        "error": outcome.error,
    }
