"""
Exports Router

CSV and JSON downloads of gig financials.
"""

import io
import json
import logging
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUserId
from app.core.database import get_db
from app.services import gig_store
from app.services.aggregator import aggregator
from app.services.calculator import GigInput
from app.services.exports import band_summary_csv, financial_report_json, gigs_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exports", tags=["exports"])


def _download(content: str, filename: str, media_type: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-store",
        },
    )


@router.get("/summary")
async def export_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
    type: Literal["gigs", "summary", "report"] = "gigs",
    format: Literal["csv", "json"] = "csv",
) -> StreamingResponse:
    """
    Export all of the user's gigs.

    - type=gigs: one CSV line per gig
    - type=summary: one CSV line per band
    - type=report: full financial report as JSON
    """
    gigs = await gig_store.list_gigs(db, user_id)
    if not gigs:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No gigs found")

    today = date.today().isoformat()
    inputs = [GigInput.from_record(gig) for gig in gigs]

    try:
        if type == "report" or format == "json":
            report = aggregator.aggregate(inputs)
            bands = aggregator.aggregate_by_band(inputs)
            content = json.dumps(financial_report_json(report, bands), indent=2)
            return _download(content, f"financial-report-{today}.json", "application/json")

        if type == "summary":
            content = band_summary_csv(aggregator.aggregate_by_band(inputs))
            return _download(content, f"financial-summary-{today}.csv", "text/csv")

        rows, _ = aggregator.project(inputs)
        fees = {gig.id: (gig.performance_fee, gig.technical_fee) for gig in gigs}
        content = gigs_csv(rows, fees)
        return _download(content, f"gigs-{today}.csv", "text/csv")

    except Exception as e:
        logger.error(f"Export failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate export",
        )
