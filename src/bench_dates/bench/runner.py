from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from datetime import date

from bench_dates.bench.parser import Benchmark, parse_lines
from bench_dates.config import Settings
from bench_dates.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BenchmarkOutcome:
    run_date: date
    command: tuple[str, ...]
    returncode: int | None
    duration_seconds: float
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    benchmarks: list[Benchmark] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.error is None

    def summary(self) -> dict:
        return {
            "run_date": self.run_date.isoformat(),
            "command": list(self.command),
            "returncode": self.returncode,
            "duration_seconds": self.duration_seconds,
            "benchmark_count": len(self.benchmarks),
            "error": self.error,
            "ok": self.ok,
        }


class BenchmarkFailedError(RuntimeError):
    def __init__(self, outcome: BenchmarkOutcome):
        reason = outcome.error or f"exit status {outcome.returncode}"
        super().__init__(f"benchmark failed for {outcome.run_date.isoformat()}: {reason}")
        self.outcome = outcome


def build_command(run_date: date, settings: Settings) -> tuple[str, ...]:
    return (*settings.bench_command, settings.date_flag, run_date.isoformat())


def run_benchmark(run_date: date, settings: Settings) -> BenchmarkOutcome:
    command = build_command(run_date, settings)
    started = time.perf_counter()
    logger.debug("benchmark_started", extra={"bench_date": run_date.isoformat(), "command": " ".join(command)})

    try:
        completed = subprocess.run(
            command,
            cwd=settings.project_root,
            capture_output=True,
            text=True,
            timeout=settings.timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        return BenchmarkOutcome(
            run_date=run_date,
            command=command,
            returncode=None,
            duration_seconds=round(time.perf_counter() - started, 4),
            stdout=_as_text(exc.stdout),
            stderr=_as_text(exc.stderr),
            error=f"timed out after {settings.timeout_seconds}s",
        )
    except OSError as exc:
        return BenchmarkOutcome(
            run_date=run_date,
            command=command,
            returncode=None,
            duration_seconds=round(time.perf_counter() - started, 4),
            error=f"{type(exc).__name__}: {exc}",
        )

    return BenchmarkOutcome(
        run_date=run_date,
        command=command,
        returncode=completed.returncode,
        duration_seconds=round(time.perf_counter() - started, 4),
        stdout=completed.stdout,
        stderr=completed.stderr,
        benchmarks=parse_lines(completed.stdout.splitlines()),
    )


def _as_text(raw: str | bytes | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw
