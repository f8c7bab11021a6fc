"""
CSV and JSON renderers for gig financial exports.

Pure formatting over aggregator output: no calculations happen here.
"""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Iterable, List

from app.services.aggregator import BandSummary, GigReportRow, ReportAggregate
from app.services.money import format_money


GIGS_HEADERS = [
    "Event Name",
    "Date",
    "Band",
    "Performance Fee",
    "Technical Fee",
    "Manager Bonus",
    "Total Received",
    "Your Earnings",
    "Owed to Others",
    "Status",
]

BAND_SUMMARY_HEADERS = [
    "Band",
    "Number of Gigs",
    "Total Earnings",
    "Amount Paid",
    "Outstanding",
    "Owed to Band",
]


def _date(value: date | None) -> str:
    return value.isoformat() if value else ""


def _write(headers: List[str], rows: Iterable[List[Any]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()


def gigs_csv(rows: Iterable[GigReportRow], fees: dict[Any, tuple] | None = None) -> str:
    """
    One line per gig.

    Args:
        rows: Report rows from ReportAggregator.project/aggregate
        fees: Optional {gig_id: (performance_fee, technical_fee)} for the raw
            fee columns; left blank when absent
    """
    fees = fees or {}
    lines = []
    for row in rows:
        performance_fee, technical_fee = fees.get(row.id, (None, None))
        lines.append([
            row.event_name,
            _date(row.date),
            row.performers,
            format_money(performance_fee) if performance_fee is not None else "",
            format_money(technical_fee) if technical_fee is not None else "",
            format_money(row.calculations.actual_manager_bonus),
            format_money(row.revenue),
            format_money(row.my_earnings),
            format_money(row.owed_to_band),
            "Paid" if row.client_payment_received else "Pending",
        ])
    return _write(GIGS_HEADERS, lines)


def band_summary_csv(bands: Iterable[BandSummary]) -> str:
    """One line per band with earnings, paid, outstanding and owed."""
    return _write(
        BAND_SUMMARY_HEADERS,
        (
            [
                band.band,
                band.gigs_count,
                format_money(band.earnings),
                format_money(band.paid),
                format_money(band.outstanding),
                format_money(band.owed),
            ]
            for band in bands
        ),
    )


def financial_report_json(report: ReportAggregate, bands: List[BandSummary]) -> dict:
    """JSON-ready financial report (amounts as 2-decimal strings)."""
    summary = report.summary
    return {
        "summary": {
            "total_revenue": format_money(summary.total_revenue),
            "total_earnings": format_money(summary.total_my_earnings),
            "total_owed": format_money(summary.total_owed_to_band),
            "gig_count": summary.total_gigs_count,
            "band_count": len(bands),
        },
        "by_band": [
            {
                "band": band.band,
                "gigs_count": band.gigs_count,
                "earnings": format_money(band.earnings),
                "paid": format_money(band.paid),
                "outstanding": format_money(band.outstanding),
                "owed": format_money(band.owed),
            }
            for band in bands
        ],
        "monthly_breakdown": [
            {
                "month": entry.month,
                "month_key": entry.month_key,
                "revenue": format_money(entry.revenue),
                "my_earnings": format_money(entry.my_earnings),
                "owed_to_band": format_money(entry.owed_to_band),
                "gigs_count": entry.gigs_count,
            }
            for entry in report.monthly_breakdown
        ],
        "gigs": [
            {
                "id": str(row.id) if row.id is not None else None,
                "event_name": row.event_name,
                "date": _date(row.date),
                "performers": row.performers,
                "is_charity": row.is_charity,
                "calc": {
                    name: format_money(value)
                    for name, value in row.calculations.as_dict().items()
                },
            }
            for row in report.gigs
        ],
    }
