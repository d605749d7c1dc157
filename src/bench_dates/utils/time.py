from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import date, datetime, timedelta

import dateparser

_OFFSET_RE = re.compile(
    r"^(?P<base>.*?)\s*(?P<sign>[+-])\s*(?P<count>\d+)\s*(?P<unit>days?|weeks?)$",
    re.IGNORECASE,
)
_ISO_SHAPE_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})$")
_DIGITS_RE = re.compile(r"^\d+$")

# absolute dates need all of day, month and year; slashed dates are month-first as in `date -d`
_DATEPARSER_SETTINGS = {
    "DATE_ORDER": "MDY",
    "PARSERS": ["relative-time", "absolute-time"],
    "STRICT_PARSING": True,
    "RETURN_AS_TIMEZONE_AWARE": False,
}


class InvalidDateError(ValueError):
    def __init__(self, raw: str):
        super().__init__(f"invalid date: {raw!r}")
        self.raw = raw


def normalize_date(raw: str | None, today: date | None = None) -> date:
    base_day = today or date.today()
    text = (raw or "").strip()
    if not text:
        return base_day

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    iso_shape = _ISO_SHAPE_RE.match(text)
    if iso_shape:
        try:
            return date(int(iso_shape["year"]), int(iso_shape["month"]), int(iso_shape["day"]))
        except ValueError as exc:
            raise InvalidDateError(text) from exc
    if _DIGITS_RE.match(text):
        raise InvalidDateError(text)

    offset = _OFFSET_RE.match(text)
    if offset:
        try:
            anchor = normalize_date(offset.group("base"), today=base_day)
        except InvalidDateError as exc:
            raise InvalidDateError(text) from exc
        days = int(offset.group("count")) * (7 if offset.group("unit").lower().startswith("week") else 1)
        return shift_date(anchor, -days if offset.group("sign") == "-" else days)

    relative_base = datetime.combine(base_day, datetime.min.time())
    parsed = dateparser.parse(
        text,
        languages=["en"],
        settings={**_DATEPARSER_SETTINGS, "RELATIVE_BASE": relative_base},
    )
    if parsed is None:
        raise InvalidDateError(text)
    return parsed.date()


def parse_range(start_raw: str, end_raw: str | None = None, today: date | None = None) -> tuple[date, date]:
    if not (start_raw or "").strip():
        raise InvalidDateError(start_raw or "")
    start = normalize_date(start_raw, today=today)
    end = normalize_date(end_raw, today=today)
    return start, end


def shift_date(day: date, days: int = 1) -> date:
    return day + timedelta(days=days)


def date_range(start: date, end: date) -> Iterator[date]:
    current = start
    while current < end:
        yield current
        current = shift_date(current)
