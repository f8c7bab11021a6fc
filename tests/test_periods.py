from __future__ import annotations

from datetime import date

import pytest

from app.core.exceptions import PeriodError
from app.services.periods import DateRange, resolve_period

TODAY = date(2026, 5, 15)


@pytest.mark.parametrize(
    "period, start",
    [
        ("month", date(2026, 5, 1)),
        ("quarter", date(2026, 4, 1)),
        ("year", date(2026, 1, 1)),
        (" Quarter ", date(2026, 4, 1)),
    ],
)
def test_named_periods_end_today(period: str, start: date) -> None:
    assert resolve_period(period, today=TODAY) == DateRange(start, TODAY)


def test_first_quarter_starts_in_january() -> None:
    assert resolve_period("quarter", today=date(2026, 3, 31)).start == date(2026, 1, 1)


@pytest.mark.parametrize("period", [None, "", "all"])
def test_all_or_missing_period_means_no_filter(period) -> None:
    assert resolve_period(period, today=TODAY) is None


def test_explicit_range_wins_over_period() -> None:
    result = resolve_period("month", date(2025, 1, 1), date(2025, 12, 31), today=TODAY)
    assert result == DateRange(date(2025, 1, 1), date(2025, 12, 31))
    assert date(2025, 6, 1) in result
    assert date(2026, 1, 1) not in result


def test_single_day_range_is_valid() -> None:
    assert resolve_period(start_date=TODAY, end_date=TODAY) == DateRange(TODAY, TODAY)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_date": date(2026, 1, 1)},
        {"end_date": date(2026, 1, 1)},
        {"start_date": date(2026, 2, 1), "end_date": date(2026, 1, 1)},
        {"period": "fortnight"},
    ],
)
def test_bad_period_parameters_raise(kwargs: dict) -> None:
    with pytest.raises(PeriodError):
        resolve_period(today=TODAY, **kwargs)
