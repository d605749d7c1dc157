from __future__ import annotations

import logging
import os
import sys

_ROOT_LOGGER = "bench_dates"
_configured = False

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class KeyValueFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-5s [%(name)s] %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}
        if not fields:
            return line
        return line + " " + " ".join(f"{key}={value}" for key, value in sorted(fields.items()))


def setup_logging(level: str | int | None = None) -> None:
    global _configured
    if _configured:
        return
    _configured = True

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(KeyValueFormatter())

    root = logging.getLogger(_ROOT_LOGGER)
    resolved = level or os.environ.get("BENCH_DATES_LOG_LEVEL", "INFO")
    root.setLevel(resolved.upper() if isinstance(resolved, str) else resolved)
    root.addHandler(handler)
    root.propagate = False


def reset_logging() -> None:
    global _configured
    _configured = False
    root = logging.getLogger(_ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    root.propagate = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
