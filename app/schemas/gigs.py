"""Pydantic schemas for gigs."""
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


BonusType = Literal["fixed", "percentage"]


class GigBase(BaseModel):
    """Deal terms shared by create and response schemas."""
    event_name: str = Field(..., min_length=1, max_length=255)
    date: date_type
    performers: str = Field(..., min_length=1, max_length=255)
    number_of_musicians: int = Field(default=1, ge=1, description="Band members sharing the pot")
    is_charity: bool = False
    performance_fee: Decimal = Field(default=Decimal("0"), ge=0)
    technical_fee: Decimal = Field(default=Decimal("0"), ge=0)
    manager_bonus_type: BonusType = "fixed"
    manager_bonus_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Money amount for 'fixed', percentage points (0-100) for 'percentage'",
    )
    claim_performance_fee: bool = True
    claim_technical_fee: bool = True
    technical_fee_claim_amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Part of the technical fee to claim. Null claims all of it.",
    )
    manager_handles_distribution: bool = True
    advance_received_by_manager: Decimal = Field(default=Decimal("0"), ge=0)
    advance_to_musicians: Decimal = Field(default=Decimal("0"), ge=0)
    payment_received: bool = False
    payment_received_date: Optional[date_type] = None
    band_paid: bool = False
    band_paid_date: Optional[date_type] = None
    notes: Optional[str] = None
    booking_date: Optional[date_type] = None


class GigCreate(GigBase):
    """Request schema for creating a gig."""
    band_member_ids: List[UUID] = Field(
        default_factory=list,
        description="Band members to link; each gets amount_per_musician as earned amount",
    )

    @field_validator("event_name", "performers")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def check_percentage_range(self):
        if self.manager_bonus_type == "percentage" and self.manager_bonus_amount > 100:
            raise ValueError("Percentage bonus must be <= 100")
        return self


class GigUpdate(BaseModel):
    """Request schema for updating a gig. Only sent fields change."""
    event_name: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[date_type] = None
    performers: Optional[str] = Field(None, min_length=1, max_length=255)
    number_of_musicians: Optional[int] = Field(None, ge=1)
    is_charity: Optional[bool] = None
    performance_fee: Optional[Decimal] = Field(None, ge=0)
    technical_fee: Optional[Decimal] = Field(None, ge=0)
    manager_bonus_type: Optional[BonusType] = None
    manager_bonus_amount: Optional[Decimal] = Field(None, ge=0)
    claim_performance_fee: Optional[bool] = None
    claim_technical_fee: Optional[bool] = None
    technical_fee_claim_amount: Optional[Decimal] = Field(None, ge=0)
    manager_handles_distribution: Optional[bool] = None
    advance_received_by_manager: Optional[Decimal] = Field(None, ge=0)
    advance_to_musicians: Optional[Decimal] = Field(None, ge=0)
    payment_received: Optional[bool] = None
    payment_received_date: Optional[date_type] = None
    band_paid: Optional[bool] = None
    band_paid_date: Optional[date_type] = None
    notes: Optional[str] = None
    booking_date: Optional[date_type] = None

    @field_validator(
        "event_name", "date", "performers", "number_of_musicians", "is_charity",
        "performance_fee", "technical_fee", "manager_bonus_type", "manager_bonus_amount",
        "claim_performance_fee", "claim_technical_fee", "manager_handles_distribution",
        "advance_received_by_manager", "advance_to_musicians", "payment_received",
        "band_paid",
    )
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("must not be null")
        return v

    @model_validator(mode="after")
    def check_percentage_range(self):
        if (
            self.manager_bonus_type == "percentage"
            and self.manager_bonus_amount is not None
            and self.manager_bonus_amount > 100
        ):
            raise ValueError("Percentage bonus must be <= 100")
        return self


class GigResponse(GigBase):
    """Response schema for a gig."""
    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GigsListResponse(BaseModel):
    """Paginated gig list."""
    data: List[GigResponse]
    total: int
    take: int
    skip: int


class GigCalculationsResponse(BaseModel):
    """Financial breakdown of one gig."""
    gig_id: UUID
    actual_manager_bonus: Decimal
    total_received: Decimal
    amount_per_musician: Decimal
    my_earnings: Decimal
    amount_owed_to_others: Decimal
    band_pot: Decimal
    manager_gross_earnings: Decimal


class BulkUpdateItem(BaseModel):
    """One gig update inside a bulk request."""
    id: UUID
    updates: GigUpdate


class BulkUpdateRequest(BaseModel):
    """Request schema for updating many gigs at once."""
    updates: List[BulkUpdateItem] = Field(..., min_length=1)


class BulkUpdateResponse(BaseModel):
    """Response schema for a bulk update."""
    success: bool
    updated: int
    gigs: List[GigResponse]
