"""Pydantic schemas for band members."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class BandMemberCreate(BaseModel):
    """Request schema for creating a band member."""
    name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    instrument: Optional[str] = Field(default=None, max_length=100)


class BandMemberResponse(BaseModel):
    """Response schema for a band member."""
    id: UUID
    name: str
    email: Optional[str] = None
    instrument: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class GigLinkResponse(BaseModel):
    """A gig linked to a band member with the earned snapshot."""
    gig_id: UUID
    earned_amount: Decimal
    paid_amount: Decimal

    class Config:
        from_attributes = True


class BandMemberGigsUpdate(BaseModel):
    """Request schema for replacing the set of gigs a member played."""
    gig_ids: List[UUID] = Field(default_factory=list)


class BandMemberGigsResult(BaseModel):
    """Response schema after syncing a member's gigs."""
    success: bool
    added: int
    removed: int
