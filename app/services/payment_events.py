"""
Detection of payment events to surface to the manager.

Only computes the events; delivering them (email, webhooks) is someone
else's job.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List

from app.core.exceptions import GigValidationError
from app.services.calculator import FinancialCalculator, GigInput
from app.services.calculator import calculator as default_calculator
from app.services.money import ZERO, format_money, to_money

logger = logging.getLogger(__name__)


class PaymentEventType(str, Enum):
    """Type of payment event."""
    PAYMENT_OVERDUE = "payment_overdue"  # Client has not paid after the grace period
    BAND_UNPAID = "band_unpaid"          # Client paid, band still waiting


@dataclass(frozen=True)
class PaymentEvent:
    """A computed payment event for one gig."""
    event_type: PaymentEventType
    gig_id: Any
    event_name: str
    amount: Decimal
    due_date: date
    title: str
    message: str


def detect_payment_events(
    gigs: Iterable[GigInput],
    today: date,
    grace_days: int = 30,
    currency: str = "EUR",
    calculator: FinancialCalculator | None = None,
) -> List[PaymentEvent]:
    """
    Find overdue client payments and unpaid bands.

    Rules:
    - payment_overdue: non-charity gig whose date + grace_days is before
      today, client payment not received, and something left to collect
      (total_received - advance_received_by_manager > 0)
    - band_unpaid: client paid, band not paid, amount_owed_to_others > 0

    Gigs without a date or with an invalid bonus type are skipped.
    """
    calc_service = calculator or default_calculator
    events: List[PaymentEvent] = []

    for gig in gigs:
        if not isinstance(gig, GigInput):
            gig = GigInput.from_record(gig)
        if gig.is_charity or gig.date is None:
            continue
        try:
            calc = calc_service.calculate(gig)
        except GigValidationError as e:
            logger.warning(f"Skipping gig {gig.id} in payment events: {e}")
            continue

        due_date = gig.date + timedelta(days=grace_days)

        if not gig.payment_received and due_date < today:
            outstanding = calc.total_received - to_money(gig.advance_received_by_manager)
            if outstanding > ZERO:
                events.append(PaymentEvent(
                    event_type=PaymentEventType.PAYMENT_OVERDUE,
                    gig_id=gig.id,
                    event_name=gig.event_name,
                    amount=outstanding,
                    due_date=due_date,
                    title="Payment Overdue",
                    message=(
                        f"{format_money(outstanding)} {currency} owed for "
                        f"{gig.event_name} (due {due_date.isoformat()})"
                    ),
                ))

        if gig.payment_received and not gig.band_paid and calc.amount_owed_to_others > ZERO:
            events.append(PaymentEvent(
                event_type=PaymentEventType.BAND_UNPAID,
                gig_id=gig.id,
                event_name=gig.event_name,
                amount=calc.amount_owed_to_others,
                due_date=gig.date,
                title="Band Payment Pending",
                message=(
                    f"{format_money(calc.amount_owed_to_others)} {currency} still to pay "
                    f"the band for {gig.event_name}"
                ),
            ))

    return events
