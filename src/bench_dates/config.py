from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_BENCH_COMMAND = "./bench.sh"
DEFAULT_DATE_FLAG = "-d"


@dataclass(frozen=True)
class Settings:
    project_root: Path
    data_root: Path
    results_root: Path
    metrics_root: Path
    history_root: Path
    bench_command: tuple[str, ...] = (DEFAULT_BENCH_COMMAND,)
    date_flag: str = DEFAULT_DATE_FLAG
    timeout_seconds: float | None = None
    fail_fast: bool = False


def get_settings(project_root: Path | None = None, **overrides) -> Settings:
    root = (project_root or Path.cwd()).resolve()
    data_root = root / "data"
    settings = Settings(
        project_root=root,
        data_root=data_root,
        results_root=data_root / "results",
        metrics_root=data_root / "metrics",
        history_root=data_root / "history",
        bench_command=parse_command(os.environ.get("BENCH_DATES_COMMAND", DEFAULT_BENCH_COMMAND)),
        date_flag=os.environ.get("BENCH_DATES_DATE_FLAG", DEFAULT_DATE_FLAG),
        timeout_seconds=_env_timeout(),
    )
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **overrides) if overrides else settings


def parse_command(raw: str) -> tuple[str, ...]:
    parts = tuple(shlex.split(raw))
    if not parts:
        raise ValueError("bench command must not be empty")
    return parts


def _env_timeout() -> float | None:
    raw = os.environ.get("BENCH_DATES_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"BENCH_DATES_TIMEOUT must be a number of seconds, got {raw!r}") from exc
    return timeout if timeout > 0 else None
