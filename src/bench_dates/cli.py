from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from bench_dates.bench.parser import parse_lines
from bench_dates.bench.runner import BenchmarkFailedError
from bench_dates.config import get_settings, parse_command
from bench_dates.history.builder import build_history
from bench_dates.pipeline import run_range
from bench_dates.utils.time import InvalidDateError, normalize_date, parse_range

app = typer.Typer(help="Run a benchmark command once per day over a date range")


@app.command("run")
def run_command(
    start: str = typer.Option(..., "--start", "-s", help="Start date, e.g. 2022-08-01 or 'yesterday'"),
    end: str = typer.Option("", "--end", "-e", help="End date (exclusive), defaults to today"),
    bench_cmd: Optional[str] = typer.Option(None, "--bench-cmd", help="Benchmark command, defaults to ./bench.sh"),
    date_flag: Optional[str] = typer.Option(None, "--date-flag", help="Flag that carries the date to the benchmark"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-invocation timeout in seconds"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first failing date"),
    project_root: Path = typer.Option(Path("."), help="Project root path"),
) -> None:
    try:
        start_date, end_date = parse_range(start, end)
    except InvalidDateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    try:
        settings = get_settings(
            project_root.resolve(),
            bench_command=parse_command(bench_cmd) if bench_cmd is not None else None,
            date_flag=date_flag,
            timeout_seconds=timeout,
            fail_fast=fail_fast,
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Startdate {start_date.isoformat()} Enddate {end_date.isoformat()}")
    try:
        report = run_range(start_date, end_date, settings, on_date=lambda day: typer.echo(day.isoformat()))
    except BenchmarkFailedError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not report.ok:
        failed = ", ".join(outcome.run_date.isoformat() for outcome in report.failures)
        typer.echo(f"Benchmark failed for {len(report.failures)} date(s): {failed}", err=True)
        raise typer.Exit(code=1)


@app.command("parse")
def parse_command_output(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved benchmark output"),
    date: str = typer.Option("", "--date", help="Date to attach to the parsed benchmarks"),
) -> None:
    try:
        run_date = normalize_date(date)
    except InvalidDateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    with path.open(encoding="utf-8") as handle:
        benchmarks = parse_lines(handle)
    payload = [{"run_date": run_date.isoformat(), **bench.model_dump()} for bench in benchmarks]
    typer.echo(json.dumps(payload, indent=2))


@app.command("history")
def history_command(
    project_root: Path = typer.Option(Path("."), help="Project root path"),
) -> None:
    try:
        settings = get_settings(project_root.resolve())
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(build_history(settings), indent=2))


def main() -> None:
    app()
