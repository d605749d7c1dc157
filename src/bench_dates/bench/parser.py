from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date
from functools import total_ordering

import pandas as pd
from pydantic import BaseModel, ConfigDict

BENCH_LINE_RE = re.compile(
    r"""
    test\s+(?P<name>\S+)                          # test   mod::bench_name
    \s+\.\.\.\sbench:\s+(?P<ns>[0-9,]+)\s+ns/iter # ... bench: 1,234 ns/iter
    \s+\(\+/-\s+(?P<variance>[0-9,]+)\)           # (+/- 4,321)
    (?:\s+=\s+(?P<throughput>[0-9,]+)\sMB/s)?     # = 2314 MB/s
    """,
    re.VERBOSE,
)

BENCHMARK_COLUMNS = ["run_date", "name", "shortname", "ns", "variance", "throughput"]


@total_ordering
class Benchmark(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    shortname: str
    ns: int
    variance: int
    throughput: int | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Benchmark):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Benchmark) -> bool:
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)


def parse_line(line: str) -> Benchmark | None:
    match = BENCH_LINE_RE.search(line)
    if match is None:
        return None
    ns = _parse_commas(match["ns"])
    variance = _parse_commas(match["variance"])
    if ns is None or variance is None:
        return None
    throughput = _parse_commas(match["throughput"]) if match["throughput"] else None
    name = match["name"]
    return Benchmark(
        name=name,
        shortname=name.rsplit(":", 1)[-1],
        ns=ns,
        variance=variance,
        throughput=throughput,
    )


def parse_lines(lines: Iterable[str]) -> list[Benchmark]:
    benchmarks: list[Benchmark] = []
    for line in lines:
        bench = parse_line(line)
        if bench is not None:
            benchmarks.append(bench)
    return benchmarks


def benchmarks_frame(benchmarks: Iterable[Benchmark], run_date: date) -> pd.DataFrame:
    rows = [{"run_date": run_date.isoformat(), **bench.model_dump()} for bench in benchmarks]
    if not rows:
        return pd.DataFrame(columns=BENCHMARK_COLUMNS)
    frame = pd.DataFrame(rows, columns=BENCHMARK_COLUMNS)
    frame["throughput"] = frame["throughput"].astype("Int64")
    return frame


def _parse_commas(raw: str) -> int | None:
    digits = raw.replace(",", "")
    return int(digits) if digits.isdigit() else None
