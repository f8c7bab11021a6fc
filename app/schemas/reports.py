"""Pydantic schemas for financial reports and payment events."""
from datetime import date as date_type
from decimal import Decimal
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ReportSummaryResponse(BaseModel):
    """Summary totals and counts across the selected gigs."""
    total_revenue: Decimal = Field(description="Sum of total_received")
    total_my_earnings: Decimal = Field(description="Sum of the manager's earnings net of advances")
    total_owed_to_band: Decimal = Field(description="Sum of amounts still owed to band members")
    total_earnings_received: Decimal = Field(description="Manager earnings on gigs the client paid")
    total_earnings_pending: Decimal = Field(description="Manager earnings on gigs the client has not paid")
    outstanding_to_band: Decimal = Field(description="Owed to band on gigs where the band is not paid yet")
    charity_gigs_count: int
    paid_gigs_count: int
    total_gigs_count: int
    client_paid_count: int
    client_unpaid_count: int
    band_paid_count: int
    band_unpaid_count: int

    class Config:
        from_attributes = True


class MonthlyBreakdownResponse(BaseModel):
    """Totals for one calendar month."""
    month: str = Field(description="Label such as 'January 2026'")
    month_key: str = Field(description="YYYY-MM")
    revenue: Decimal
    my_earnings: Decimal
    owed_to_band: Decimal
    gigs_count: int

    class Config:
        from_attributes = True


class GigReportRowResponse(BaseModel):
    """Per-gig figures in a report."""
    id: Optional[UUID] = None
    event_name: str
    date: Optional[date_type] = None
    is_charity: bool
    client_payment_received: bool
    band_payment_complete: bool
    revenue: Decimal
    my_earnings: Decimal
    owed_to_band: Decimal

    class Config:
        from_attributes = True


class FinancialReportResponse(BaseModel):
    """Response schema for GET /reports/financial."""
    period_start: Optional[date_type] = None
    period_end: Optional[date_type] = None
    currency: str
    summary: ReportSummaryResponse
    monthly_breakdown: List[MonthlyBreakdownResponse]
    gigs: List[GigReportRowResponse]
    skipped_gig_ids: List[Any] = Field(default_factory=list)


class PaymentEventResponse(BaseModel):
    """A computed payment event."""
    event_type: str
    gig_id: UUID
    event_name: str
    amount: Decimal
    due_date: date_type
    title: str
    message: str


class PaymentEventsResponse(BaseModel):
    """Response schema for GET /notifications/payment-events."""
    events: List[PaymentEventResponse]
    total_count: int
