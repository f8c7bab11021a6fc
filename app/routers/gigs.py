"""
Gigs Router

CRUD for gigs, bulk updates and per-gig financial breakdown.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUserId
from app.core.database import get_db
from app.core.exceptions import GigNotFoundError, GigOwnershipError, GigValidationError
from app.schemas.gigs import (
    BulkUpdateRequest,
    BulkUpdateResponse,
    GigCalculationsResponse,
    GigCreate,
    GigResponse,
    GigsListResponse,
    GigUpdate,
)
from app.services import gig_store
from app.services.calculator import GigInput, calculator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gigs", tags=["gigs"])


@router.get("", response_model=GigsListResponse)
async def list_gigs(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
    take: Annotated[int, Query(ge=1, le=200)] = 100,
    skip: Annotated[int, Query(ge=0)] = 0,
) -> GigsListResponse:
    """List the user's gigs, newest first."""
    gigs = await gig_store.list_gigs(db, user_id, take=take, skip=skip)
    total = await gig_store.count_gigs(db, user_id)
    return GigsListResponse(
        data=[GigResponse.model_validate(gig) for gig in gigs],
        total=total,
        take=take,
        skip=skip,
    )


@router.post("", response_model=GigResponse, status_code=status.HTTP_201_CREATED)
async def create_gig(
    data: GigCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> GigResponse:
    """
    Create a gig.

    Band members given in band_member_ids are linked with the gig's
    amount_per_musician as their earned amount.
    """
    fields = data.model_dump(exclude={"band_member_ids"})
    gig = await gig_store.create_gig(db, user_id, fields)

    if data.band_member_ids:
        linked = await gig_store.link_band_members(db, user_id, gig, data.band_member_ids)
        logger.info(f"Linked {linked} band members to gig {gig.id}")

    await db.refresh(gig)
    return GigResponse.model_validate(gig)


@router.patch("/bulk-update", response_model=BulkUpdateResponse)
async def bulk_update_gigs(
    data: BulkUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> BulkUpdateResponse:
    """
    Update many gigs in one request.

    Either all updates are applied or none: a foreign or unknown gig id
    rejects the whole request.
    """
    updates = [
        (item.id, item.updates.model_dump(exclude_unset=True))
        for item in data.updates
    ]
    try:
        gigs = await gig_store.bulk_update(db, user_id, updates)
    except GigOwnershipError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except GigValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return BulkUpdateResponse(
        success=True,
        updated=len(gigs),
        gigs=[GigResponse.model_validate(gig) for gig in gigs],
    )


@router.get("/{gig_id}", response_model=GigResponse)
async def get_gig(
    gig_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> GigResponse:
    """Get a gig by ID."""
    try:
        gig = await gig_store.get_gig(db, user_id, gig_id)
    except GigNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return GigResponse.model_validate(gig)


@router.patch("/{gig_id}", response_model=GigResponse)
async def update_gig(
    gig_id: UUID,
    data: GigUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> GigResponse:
    """Update the fields sent in the request body."""
    try:
        gig = await gig_store.get_gig(db, user_id, gig_id)
    except GigNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    try:
        gig = await gig_store.update_gig(db, gig, data.model_dump(exclude_unset=True))
    except GigValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return GigResponse.model_validate(gig)


@router.delete("/{gig_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gig(
    gig_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> None:
    """Delete a gig and its band member links."""
    try:
        gig = await gig_store.get_gig(db, user_id, gig_id)
    except GigNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    await gig_store.delete_gig(db, gig)


@router.get("/{gig_id}/calculations", response_model=GigCalculationsResponse)
async def get_gig_calculations(
    gig_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: CurrentUserId,
) -> GigCalculationsResponse:
    """Financial breakdown of one gig."""
    try:
        gig = await gig_store.get_gig(db, user_id, gig_id)
    except GigNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    try:
        calc = calculator.calculate(GigInput.from_record(gig))
    except GigValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return GigCalculationsResponse(gig_id=gig.id, **calc.as_dict())
