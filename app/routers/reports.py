"""
Reports Router

Financial report over a period: summary totals, monthly breakdown and
per-gig figures.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUserId
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import PeriodError
from app.schemas.reports import (
    FinancialReportResponse,
    GigReportRowResponse,
    MonthlyBreakdownResponse,
    ReportSummaryResponse,
)
from app.services import gig_store
from app.services.aggregator import aggregator
from app.services.calculator import GigInput
from app.services.periods import resolve_period

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/financial", response_model=FinancialReportResponse)
async def get_financial_report(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    period: Optional[str] = None,
) -> FinancialReportResponse:
    """
    Generate a financial report.

    Period selection:
    - start_date + end_date: explicit inclusive range
    - period: 'month', 'quarter', 'year' (each up to today) or 'all'

    The monthly breakdown follows the gig order, newest month first.
    """
    try:
        date_range = resolve_period(period, start_date, end_date)
    except PeriodError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        gigs = await gig_store.list_gigs(db, user_id, date_range=date_range)
        report = aggregator.aggregate(GigInput.from_record(gig) for gig in gigs)
    except Exception as e:
        logger.error(f"Financial report failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate financial report",
        )

    return FinancialReportResponse(
        period_start=date_range.start if date_range else None,
        period_end=date_range.end if date_range else None,
        currency=settings.DEFAULT_CURRENCY,
        summary=ReportSummaryResponse(**asdict(report.summary)),
        monthly_breakdown=[
            MonthlyBreakdownResponse(**asdict(entry)) for entry in report.monthly_breakdown
        ],
        gigs=[
            GigReportRowResponse(
                id=row.id,
                event_name=row.event_name,
                date=row.date,
                is_charity=row.is_charity,
                client_payment_received=row.client_payment_received,
                band_payment_complete=row.band_payment_complete,
                revenue=row.revenue,
                my_earnings=row.my_earnings,
                owed_to_band=row.owed_to_band,
            )
            for row in report.gigs
        ],
        skipped_gig_ids=[str(gig_id) for gig_id in report.skipped_gig_ids],
    )
