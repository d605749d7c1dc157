from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from bench_dates.config import Settings

FAKE_BENCH = textwrap.dedent(
    """
    import sys
    from pathlib import Path

    day = sys.argv[sys.argv.index("-d") + 1]
    with Path("calls.txt").open("a", encoding="utf-8") as handle:
        handle.write(day + "\\n")

    failing = Path("fail_on.txt")
    if failing.exists() and day in failing.read_text(encoding="utf-8").split():
        print("bench blew up", file=sys.stderr)
        sys.exit(3)

    print("running 2 tests")
    print("test index::bench::bench_insert ... bench:  1,200 ns/iter (+/- 30)")
    print("test index::bench::bench_lookup ... bench:  " + day[-2:] + "00 ns/iter (+/- 5) = 1,024 MB/s")
    """
)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    script = tmp_path / "fake_bench.py"
    script.write_text(FAKE_BENCH, encoding="utf-8")

    data_root = tmp_path / "data"
    results_root = data_root / "results"
    metrics_root = data_root / "metrics"
    history_root = data_root / "history"
    for path in (results_root, metrics_root, history_root):
        path.mkdir(parents=True, exist_ok=True)

    return Settings(
        project_root=tmp_path,
        data_root=data_root,
        results_root=results_root,
        metrics_root=metrics_root,
        history_root=history_root,
        bench_command=(sys.executable, str(script)),
        date_flag="-d",
        timeout_seconds=30,
        fail_fast=False,
    )


@pytest.fixture()
def invoked_dates(settings: Settings):
    def _read() -> list[str]:
        calls = settings.project_root / "calls.txt"
        if not calls.exists():
            return []
        return calls.read_text(encoding="utf-8").split()

    return _read
