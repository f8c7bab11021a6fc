"""
Band Members Router

Band members and the gigs they played.
"""

import logging
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUserId
from app.core.database import get_db
from app.schemas.band_members import (
    BandMemberCreate,
    BandMemberGigsResult,
    BandMemberGigsUpdate,
    BandMemberResponse,
    GigLinkResponse,
)
from app.services import gig_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/band-members", tags=["band-members"])


async def _get_member_or_404(db: AsyncSession, user_id: UUID, member_id: UUID):
    member = await gig_store.get_band_member(db, user_id, member_id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Band member not found",
        )
    return member


@router.get("", response_model=List[BandMemberResponse])
async def list_band_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> List[BandMemberResponse]:
    """List the user's band members by name."""
    members = await gig_store.list_band_members(db, user_id)
    return [BandMemberResponse.model_validate(member) for member in members]


@router.post("", response_model=BandMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_band_member(
    data: BandMemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> BandMemberResponse:
    """Create a band member."""
    member = await gig_store.create_band_member(db, user_id, data.model_dump())
    return BandMemberResponse.model_validate(member)


@router.get("/{member_id}/gigs", response_model=List[GigLinkResponse])
async def list_member_gigs(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> List[GigLinkResponse]:
    """Gigs linked to a band member with earned and paid amounts."""
    member = await _get_member_or_404(db, user_id, member_id)
    links = await gig_store.list_member_links(db, member)
    return [GigLinkResponse.model_validate(link) for link in links]


@router.put("/{member_id}/gigs", response_model=BandMemberGigsResult)
async def set_member_gigs(
    member_id: UUID,
    data: BandMemberGigsUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> BandMemberGigsResult:
    """
    Replace the set of gigs a band member is linked to.

    New links record the gig's current amount_per_musician as the
    member's earned amount.
    """
    member = await _get_member_or_404(db, user_id, member_id)
    added, removed = await gig_store.sync_member_gigs(db, user_id, member, data.gig_ids)
    return BandMemberGigsResult(success=True, added=added, removed=removed)
