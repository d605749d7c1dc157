from __future__ import annotations

import pandas as pd

from bench_dates.bench.parser import BENCHMARK_COLUMNS
from bench_dates.config import Settings
from bench_dates.utils.io import read_partitions_or_empty, write_parquet

LATEST_COLUMNS = ["name", "shortname", "run_date", "ns", "previous_run_date", "previous_ns", "ns_change", "ns_change_pct"]


def build_history(settings: Settings) -> dict[str, int]:
    settings.history_root.mkdir(parents=True, exist_ok=True)

    raw = read_partitions_or_empty(settings.results_root)
    history = _history(raw)
    latest = _latest(history)

    outputs = {
        "history": history,
        "latest": latest,
    }

    row_counts: dict[str, int] = {}
    for name, df in outputs.items():
        path = settings.history_root / f"{name}.parquet"
        write_parquet(df, path)
        row_counts[name] = int(df.shape[0])

    return row_counts


def _history(raw: pd.DataFrame) -> pd.DataFrame:
    if raw.empty:
        return pd.DataFrame(columns=BENCHMARK_COLUMNS)

    frame = raw.sort_values(["run_date", "name", "filename"])
    frame = frame.drop_duplicates(subset=["run_date", "name"], keep="last")
    return frame[BENCHMARK_COLUMNS].reset_index(drop=True)


def _latest(history: pd.DataFrame) -> pd.DataFrame:
    if history.empty:
        return pd.DataFrame(columns=LATEST_COLUMNS)

    frame = history.sort_values(["name", "run_date"]).copy()
    grouped = frame.groupby("name")
    previous_dates = grouped["run_date"].shift(1).astype(object)
    frame["previous_run_date"] = previous_dates.where(previous_dates.notna(), None)
    frame["previous_ns"] = grouped["ns"].shift(1)

    latest = frame.drop_duplicates(subset=["name"], keep="last").copy()
    latest["ns_change"] = latest["ns"] - latest["previous_ns"]
    change_pct = latest["ns_change"] / latest["previous_ns"].where(latest["previous_ns"] != 0) * 100
    latest["ns_change_pct"] = change_pct.round(2)
    return latest[LATEST_COLUMNS].sort_values("name").reset_index(drop=True)
