from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal

from app.services.aggregator import ReportAggregator
from app.services.calculator import GigInput
from app.services.exports import (
    BAND_SUMMARY_HEADERS,
    GIGS_HEADERS,
    band_summary_csv,
    financial_report_json,
    gigs_csv,
)


def _gigs() -> list[GigInput]:
    return [
        GigInput(
            id="g1",
            date=date(2026, 1, 10),
            event_name="Jazz Night, Club 9",
            performers="The Quartet",
            performance_fee=Decimal("2000"),
            technical_fee=Decimal("300"),
            manager_bonus_type="percentage",
            manager_bonus_amount=Decimal("10"),
            number_of_musicians=4,
            claim_performance_fee=False,
            claim_technical_fee=False,
            payment_received=True,
        ),
        GigInput(
            id="g2",
            date=date(2026, 2, 1),
            event_name="Wedding",
            performers="Trio Blue",
            performance_fee=Decimal("900"),
            manager_bonus_type="fixed",
            manager_bonus_amount=Decimal("90"),
            number_of_musicians=3,
            claim_performance_fee=False,
            claim_technical_fee=False,
        ),
    ]


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_gigs_csv_has_one_line_per_gig() -> None:
    rows, _ = ReportAggregator().project(_gigs())
    lines = _parse(gigs_csv(rows, fees={"g1": (Decimal("2000"), Decimal("300"))}))

    assert lines[0] == GIGS_HEADERS
    assert len(lines) == 3
    assert lines[1] == [
        "Jazz Night, Club 9",
        "2026-01-10",
        "The Quartet",
        "2000.00",
        "300.00",
        "230.00",
        "2300.00",
        "230.00",
        "2070.00",
        "Paid",
    ]
    # no fee entry for g2, so raw fee columns stay empty
    assert lines[2][3:5] == ["", ""]
    assert lines[2][-1] == "Pending"


def test_band_summary_csv() -> None:
    bands = ReportAggregator().aggregate_by_band(_gigs())
    lines = _parse(band_summary_csv(bands))

    assert lines[0] == BAND_SUMMARY_HEADERS
    assert lines[1] == ["The Quartet", "1", "230.00", "230.00", "0.00", "2070.00"]
    assert lines[2] == ["Trio Blue", "1", "90.00", "0.00", "90.00", "810.00"]


def test_empty_csv_is_header_only() -> None:
    assert gigs_csv([]) == ",".join(GIGS_HEADERS) + "\n"


def test_financial_report_json() -> None:
    aggregator = ReportAggregator()
    report = aggregator.aggregate(_gigs())
    payload = financial_report_json(report, aggregator.aggregate_by_band(_gigs()))

    assert payload["summary"] == {
        "total_revenue": "3200.00",
        "total_earnings": "320.00",
        "total_owed": "2880.00",
        "gig_count": 2,
        "band_count": 2,
    }
    assert [m["month"] for m in payload["monthly_breakdown"]] == ["January 2026", "February 2026"]
    first = payload["gigs"][0]
    assert first["date"] == "2026-01-10"
    assert first["calc"]["amount_per_musician"] == "517.50"
