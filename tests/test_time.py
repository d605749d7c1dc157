from __future__ import annotations

from datetime import date
from types import GeneratorType

import pytest

from bench_dates.utils.time import InvalidDateError, date_range, normalize_date, parse_range

TODAY = date(2022, 8, 10)


def test_normalize_iso_date() -> None:
    assert normalize_date("2022-08-01") == date(2022, 8, 1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("today", date(2022, 8, 10)),
        ("yesterday", date(2022, 8, 9)),
        ("-1 day", date(2022, 8, 9)),
        ("+2 days", date(2022, 8, 12)),
        ("2022-08-01 + 1 day", date(2022, 8, 2)),
        ("2022-08-31 +1 day", date(2022, 9, 1)),
        ("2022-08-01 - 1 week", date(2022, 7, 25)),
        ("3 days ago", date(2022, 8, 7)),
    ],
)
def test_normalize_relative_expressions(raw: str, expected: date) -> None:
    assert normalize_date(raw, today=TODAY) == expected


def test_normalize_empty_defaults_to_today() -> None:
    assert normalize_date("", today=TODAY) == TODAY
    assert normalize_date(None, today=TODAY) == TODAY


def test_normalize_rejects_garbage() -> None:
    with pytest.raises(InvalidDateError, match="not-a-date"):
        normalize_date("not-a-date", today=TODAY)


@pytest.mark.parametrize("raw", ["2022-13-01", "2022-02-30", "5", "1", "a", "20229"])
def test_normalize_rejects_impossible_or_partial_dates(raw: str) -> None:
    with pytest.raises(InvalidDateError):
        normalize_date(raw, today=TODAY)


def test_normalize_accepts_unpadded_iso_date() -> None:
    assert normalize_date("2022-8-1", today=TODAY) == date(2022, 8, 1)


def test_normalize_reads_slashed_dates_month_first() -> None:
    assert normalize_date("08/01/2022", today=TODAY) == date(2022, 8, 1)


def test_offset_error_reports_whole_expression() -> None:
    with pytest.raises(InvalidDateError, match=r"'garbage \+ 1 day'"):
        normalize_date("garbage + 1 day", today=TODAY)


def test_parse_range_defaults_end_to_today() -> None:
    assert parse_range("2022-08-01", None, today=TODAY) == (date(2022, 8, 1), TODAY)
    assert parse_range("2022-08-01", "", today=TODAY) == (date(2022, 8, 1), TODAY)


def test_parse_range_requires_start() -> None:
    with pytest.raises(InvalidDateError):
        parse_range("", "2022-08-04", today=TODAY)


def test_parse_range_rejects_bad_end() -> None:
    with pytest.raises(InvalidDateError):
        parse_range("2022-08-01", "not-a-date", today=TODAY)


def test_date_range_excludes_end() -> None:
    days = list(date_range(date(2022, 8, 1), date(2022, 8, 4)))
    assert days == [date(2022, 8, 1), date(2022, 8, 2), date(2022, 8, 3)]


def test_date_range_crosses_month_and_leap_day() -> None:
    days = list(date_range(date(2024, 2, 27), date(2024, 3, 2)))
    assert [d.isoformat() for d in days] == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"]


def test_date_range_is_lazy() -> None:
    days = date_range(date(2022, 8, 1), date(2022, 8, 4))
    assert isinstance(days, GeneratorType)
    assert next(days) == date(2022, 8, 1)


def test_date_range_empty_when_start_equals_end() -> None:
    assert list(date_range(date(2022, 8, 1), date(2022, 8, 1))) == []


def test_date_range_empty_when_start_after_end() -> None:
    assert list(date_range(date(2022, 9, 1), date(2022, 8, 1))) == []


def test_date_range_has_no_gaps_or_duplicates() -> None:
    days = list(date_range(date(2021, 12, 1), date(2022, 3, 1)))
    assert len(days) == len(set(days)) == 90
    assert all((later - earlier).days == 1 for earlier, later in zip(days, days[1:]))
