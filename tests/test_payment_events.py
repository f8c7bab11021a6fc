from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.services.calculator import GigInput
from app.services.payment_events import PaymentEventType, detect_payment_events

TODAY = date(2026, 6, 1)


def _gig(gig_id: str, day: date, **overrides) -> GigInput:
    terms = dict(
        id=gig_id,
        date=day,
        event_name=f"Gig {gig_id}",
        performance_fee=Decimal("1000"),
        manager_bonus_type="fixed",
        manager_bonus_amount=Decimal("100"),
        number_of_musicians=3,
        claim_performance_fee=False,
        claim_technical_fee=False,
    )
    terms.update(overrides)
    return GigInput(**terms)


def test_unpaid_gig_past_grace_period_is_overdue() -> None:
    events = detect_payment_events(
        [_gig("old", date(2026, 4, 1), advance_received_by_manager=Decimal("200"))],
        today=TODAY,
    )
    assert len(events) == 1
    event = events[0]
    assert event.event_type == PaymentEventType.PAYMENT_OVERDUE
    assert event.amount == Decimal("800")
    assert event.due_date == date(2026, 5, 1)
    assert event.title == "Payment Overdue"
    assert "800.00 EUR" in event.message


def test_recent_unpaid_gig_is_not_overdue() -> None:
    assert detect_payment_events([_gig("new", date(2026, 5, 20))], today=TODAY) == []


def test_grace_days_is_configurable() -> None:
    events = detect_payment_events([_gig("new", date(2026, 5, 20))], today=TODAY, grace_days=7)
    assert [e.gig_id for e in events] == ["new"]


def test_fully_advanced_gig_is_not_overdue() -> None:
    gig = _gig("advanced", date(2026, 1, 1), advance_received_by_manager=Decimal("1000"))
    assert detect_payment_events([gig], today=TODAY) == []


def test_charity_and_undated_gigs_are_ignored() -> None:
    gigs = [
        _gig("charity", date(2026, 1, 1), is_charity=True),
        _gig("undated", None),
    ]
    assert detect_payment_events(gigs, today=TODAY) == []


def test_invalid_gig_is_skipped() -> None:
    gig = _gig("bad", date(2026, 1, 1), manager_bonus_type="weird")
    assert detect_payment_events([gig], today=TODAY) == []


def test_paid_client_with_unpaid_band() -> None:
    events = detect_payment_events(
        [_gig("band", date(2026, 5, 30), payment_received=True)],
        today=TODAY,
        currency="USD",
    )
    assert len(events) == 1
    event = events[0]
    assert event.event_type == PaymentEventType.BAND_UNPAID
    assert event.amount == Decimal("900")
    assert event.due_date == date(2026, 5, 30)
    assert "USD" in event.message


def test_settled_gig_has_no_events() -> None:
    gig = _gig("done", date(2026, 1, 1), payment_received=True, band_paid=True)
    assert detect_payment_events([gig], today=TODAY) == []
