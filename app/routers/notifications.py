"""
Notifications Router

Payment events computed from the user's gigs.
"""

import logging
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUserId
from app.core.config import settings
from app.core.database import get_db
from app.schemas.reports import PaymentEventResponse, PaymentEventsResponse
from app.services import gig_store
from app.services.payment_events import detect_payment_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/payment-events", response_model=PaymentEventsResponse)
async def get_payment_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
    grace_days: Annotated[Optional[int], Query(ge=0)] = None,
) -> PaymentEventsResponse:
    """Overdue client payments and bands waiting to be paid."""
    gigs = await gig_store.list_gigs(db, user_id, descending=False)
    events = detect_payment_events(
        gigs,
        today=date.today(),
        grace_days=settings.OVERDUE_GRACE_DAYS if grace_days is None else grace_days,
        currency=settings.DEFAULT_CURRENCY,
    )
    return PaymentEventsResponse(
        events=[
            PaymentEventResponse(
                event_type=event.event_type.value,
                gig_id=event.gig_id,
                event_name=event.event_name,
                amount=event.amount,
                due_date=event.due_date,
                title=event.title,
                message=event.message,
            )
            for event in events
        ],
        total_count=len(events),
    )
