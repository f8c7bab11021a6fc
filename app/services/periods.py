"""Resolution of report period parameters into a date range."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from app.core.exceptions import PeriodError


class ReportPeriod(str, Enum):
    """Named report periods, each ending today."""
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range."""
    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def resolve_period(
    period: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> Optional[DateRange]:
    """
    Turn report query parameters into a date range.

    An explicit start_date/end_date pair wins over a named period. A named
    period runs from the start of the current month/quarter/year to today.
    'all' (or nothing at all) means no date filter.

    Returns:
        DateRange, or None when the report covers all gigs

    Raises:
        PeriodError: On an unknown period, a half-open explicit range or
            an end date before the start date
    """
    if start_date is not None or end_date is not None:
        if start_date is None or end_date is None:
            raise PeriodError("start_date and end_date must be given together")
        if end_date < start_date:
            raise PeriodError("end_date must be >= start_date")
        return DateRange(start_date, end_date)

    if not period:
        return None

    try:
        named = ReportPeriod(period.strip().lower())
    except ValueError:
        raise PeriodError(
            f"Unknown period {period!r}, expected one of "
            f"{', '.join(p.value for p in ReportPeriod)}"
        ) from None

    today = today or date.today()
    if named == ReportPeriod.MONTH:
        return DateRange(today.replace(day=1), today)
    if named == ReportPeriod.QUARTER:
        quarter_start_month = (today.month - 1) // 3 * 3 + 1
        return DateRange(date(today.year, quarter_start_month, 1), today)
    if named == ReportPeriod.YEAR:
        return DateRange(date(today.year, 1, 1), today)
    return None
