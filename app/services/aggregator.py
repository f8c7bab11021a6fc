"""
Report aggregation over many gigs.

Rules:
1. Each gig goes through the FinancialCalculator and is projected to
   revenue (total_received), my_earnings and owed_to_band
   (amount_owed_to_others).
2. Summary totals are plain sums of the projections. Counts use the flags
   of the original records (is_charity, payment_received, band_paid).
   outstanding_to_band only counts unpaid gigs where the manager handles
   distribution.
3. Monthly breakdown is keyed on the gig's own (year, month), labelled
   "January 2026", in first-seen order. Callers wanting chronological
   order pass gigs sorted by date.
4. A structurally invalid gig is logged and skipped; it never aborts the
   report.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.core.exceptions import GigValidationError
from app.services.calculator import FinancialCalculator, GigCalculations, GigInput
from app.services.calculator import calculator as default_calculator

logger = logging.getLogger(__name__)


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

UNKNOWN_BAND = "Unknown"


def month_label(year: int, month: int) -> str:
    """Human label for a calendar month, e.g. 'January 2026'."""
    return f"{MONTH_NAMES[month - 1]} {year}"


@dataclass
class GigReportRow:
    """Per-gig projection used by reports and exports."""
    id: Any
    event_name: str
    date: Optional[date]
    performers: str
    is_charity: bool
    client_payment_received: bool
    band_payment_complete: bool
    manager_handles_distribution: bool
    revenue: Decimal
    my_earnings: Decimal
    owed_to_band: Decimal
    calculations: GigCalculations


@dataclass
class MonthlyEntry:
    """Totals for one calendar month."""
    month: str
    month_key: str
    revenue: Decimal = Decimal("0")
    my_earnings: Decimal = Decimal("0")
    owed_to_band: Decimal = Decimal("0")
    gigs_count: int = 0


@dataclass
class ReportSummary:
    """Counts and money totals across a gig set."""
    total_revenue: Decimal = Decimal("0")
    total_my_earnings: Decimal = Decimal("0")
    total_owed_to_band: Decimal = Decimal("0")
    total_earnings_received: Decimal = Decimal("0")
    total_earnings_pending: Decimal = Decimal("0")
    outstanding_to_band: Decimal = Decimal("0")
    charity_gigs_count: int = 0
    paid_gigs_count: int = 0
    total_gigs_count: int = 0
    client_paid_count: int = 0
    client_unpaid_count: int = 0
    band_paid_count: int = 0
    band_unpaid_count: int = 0


@dataclass
class ReportAggregate:
    """Result of aggregating a gig set."""
    summary: ReportSummary = field(default_factory=ReportSummary)
    monthly_breakdown: List[MonthlyEntry] = field(default_factory=list)
    gigs: List[GigReportRow] = field(default_factory=list)
    skipped_gig_ids: List[Any] = field(default_factory=list)


@dataclass
class BandSummary:
    """Totals for one band (the gig's performers field)."""
    band: str
    gigs_count: int = 0
    earnings: Decimal = Decimal("0")
    paid: Decimal = Decimal("0")
    owed: Decimal = Decimal("0")

    @property
    def outstanding(self) -> Decimal:
        return self.earnings - self.paid


class ReportAggregator:
    """
    Folds per-gig calculations into report totals.

    Holds no state between calls and performs no I/O.
    """

    def __init__(self, calculator: FinancialCalculator | None = None):
        """
        Initialize aggregator.

        Args:
            calculator: Per-gig calculator (defaults to the global calculator)
        """
        self.calculator = calculator or default_calculator

    def project(self, gigs: Iterable[GigInput]) -> tuple[List[GigReportRow], List[Any]]:
        """
        Calculate every gig and project it to a report row.

        Returns:
            (rows, skipped_gig_ids)

        Raises:
            TypeError: If gigs is not iterable
        """
        if not isinstance(gigs, Iterable) or isinstance(gigs, (str, bytes)):
            raise TypeError(f"Expected an iterable of gigs, got {type(gigs).__name__}")

        rows: List[GigReportRow] = []
        skipped: List[Any] = []

        for gig in gigs:
            if not isinstance(gig, GigInput):
                gig = GigInput.from_record(gig)
            try:
                calc = self.calculator.calculate(gig)
            except GigValidationError as e:
                logger.warning(f"Skipping gig {gig.id} in report: {e}")
                skipped.append(gig.id)
                continue

            rows.append(
                GigReportRow(
                    id=gig.id,
                    event_name=gig.event_name,
                    date=gig.date,
                    performers=gig.performers,
                    is_charity=bool(gig.is_charity),
                    client_payment_received=bool(gig.payment_received),
                    band_payment_complete=bool(gig.band_paid),
                    manager_handles_distribution=bool(gig.manager_handles_distribution),
                    revenue=calc.total_received,
                    my_earnings=calc.my_earnings,
                    owed_to_band=calc.amount_owed_to_others,
                    calculations=calc,
                )
            )

        return rows, skipped

    def aggregate(self, gigs: Iterable[GigInput]) -> ReportAggregate:
        """
        Aggregate a gig set into summary totals and a monthly breakdown.

        Args:
            gigs: Gigs already filtered by owner and period

        Returns:
            ReportAggregate (zeroed summary for an empty input)
        """
        rows, skipped = self.project(gigs)
        result = ReportAggregate(gigs=rows, skipped_gig_ids=skipped)
        summary = result.summary
        months: Dict[tuple[int, int], MonthlyEntry] = {}

        for row in rows:
            summary.total_gigs_count += 1
            summary.total_revenue += row.revenue
            summary.total_my_earnings += row.my_earnings
            summary.total_owed_to_band += row.owed_to_band

            if row.is_charity:
                summary.charity_gigs_count += 1
            else:
                summary.paid_gigs_count += 1

            if row.client_payment_received:
                summary.client_paid_count += 1
                summary.total_earnings_received += row.my_earnings
            else:
                summary.client_unpaid_count += 1
                summary.total_earnings_pending += row.my_earnings

            if row.band_payment_complete:
                summary.band_paid_count += 1
            else:
                summary.band_unpaid_count += 1
                # Bands paid directly by the client are not the manager's debt
                if row.manager_handles_distribution:
                    summary.outstanding_to_band += row.owed_to_band

            if row.date is None:
                logger.warning(f"Gig {row.id} has no date, left out of monthly breakdown")
                continue

            key = (row.date.year, row.date.month)
            entry = months.get(key)
            if entry is None:
                entry = MonthlyEntry(
                    month=month_label(*key),
                    month_key=f"{key[0]:04d}-{key[1]:02d}",
                )
                months[key] = entry
                result.monthly_breakdown.append(entry)

            entry.revenue += row.revenue
            entry.my_earnings += row.my_earnings
            entry.owed_to_band += row.owed_to_band
            entry.gigs_count += 1

        logger.info(
            f"Aggregated {summary.total_gigs_count} gigs "
            f"({len(skipped)} skipped) into {len(result.monthly_breakdown)} months, "
            f"total_revenue={summary.total_revenue}"
        )
        return result

    def aggregate_by_band(self, gigs: Iterable[GigInput]) -> List[BandSummary]:
        """
        Group gigs by performers, in first-seen order.

        Paid earnings only count gigs where the client payment was received.
        """
        rows, _ = self.project(gigs)
        bands: Dict[str, BandSummary] = {}

        for row in rows:
            name = row.performers or UNKNOWN_BAND
            band = bands.get(name)
            if band is None:
                band = bands[name] = BandSummary(band=name)
            band.gigs_count += 1
            band.earnings += row.my_earnings
            band.owed += row.owed_to_band
            if row.client_payment_received:
                band.paid += row.my_earnings

        return list(bands.values())


# Default aggregator instance
aggregator = ReportAggregator()


def aggregate(gigs: Iterable[GigInput]) -> ReportAggregate:
    """Module-level shortcut for the default aggregator."""
    return aggregator.aggregate(gigs)
