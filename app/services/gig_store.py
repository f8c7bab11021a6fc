"""
Gig storage queries.

All queries are scoped to the owning user. Financial figures are not
stored here: callers run the FinancialCalculator on what this returns.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import GigNotFoundError, GigOwnershipError, GigValidationError
from app.models.band_member import BandMember, GigBandMember
from app.models.gig import Gig
from app.models.user import User
from app.services.calculator import GigInput, ManagerBonusType, calculator
from app.services.periods import DateRange

logger = logging.getLogger(__name__)


async def get_or_create_user(
    db: AsyncSession,
    supabase_id: str,
    email: str,
    name: Optional[str] = None,
) -> User:
    """
    Get or create the local user for a Supabase identity.

    Args:
        db: Database session
        supabase_id: Supabase auth user id
        email: User email
        name: Optional display name

    Returns:
        User instance
    """
    result = await db.execute(select(User).where(User.supabase_id == supabase_id))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(supabase_id=supabase_id, email=email, name=name)
        db.add(user)
        await db.flush()
        logger.info(f"Created new user: {email} (id={user.id})")

    return user


async def list_gigs(
    db: AsyncSession,
    user_id: UUID,
    date_range: DateRange | None = None,
    take: int | None = None,
    skip: int = 0,
    descending: bool = True,
) -> List[Gig]:
    """
    List a user's gigs, optionally within an inclusive date range.

    Args:
        db: Database session
        user_id: Owner
        date_range: Optional inclusive range on the gig date
        take: Optional page size
        skip: Rows to skip
        descending: Newest first when True, oldest first otherwise

    Returns:
        List of gigs ordered by date
    """
    query = select(Gig).where(Gig.user_id == user_id)
    if date_range is not None:
        query = query.where(
            Gig.date >= date_range.start,
            Gig.date <= date_range.end,
        )
    order = Gig.date.desc() if descending else Gig.date.asc()
    query = query.order_by(order, Gig.created_at).offset(skip)
    if take is not None:
        query = query.limit(take)

    result = await db.execute(query)
    return list(result.scalars().all())


async def count_gigs(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(select(func.count(Gig.id)).where(Gig.user_id == user_id))
    return result.scalar() or 0


async def get_gig(db: AsyncSession, user_id: UUID, gig_id: UUID) -> Gig:
    """
    Get one of the user's gigs.

    Raises:
        GigNotFoundError: If the gig does not exist or is not owned by user
    """
    result = await db.execute(
        select(Gig).where(Gig.id == gig_id, Gig.user_id == user_id)
    )
    gig = result.scalar_one_or_none()
    if gig is None:
        raise GigNotFoundError(f"Gig {gig_id} not found")
    return gig


async def create_gig(db: AsyncSession, user_id: UUID, data: Dict[str, Any]) -> Gig:
    gig = Gig(user_id=user_id, **data)
    db.add(gig)
    await db.flush()
    logger.info(f"Created gig {gig.id} ({gig.event_name}) for user {user_id}")
    return gig


def check_deal_terms(gig: Gig) -> None:
    """
    Validate a gig's merged deal terms before they are written.

    Raises:
        GigValidationError: If a percentage bonus exceeds 100
    """
    if (
        gig.manager_bonus_type == ManagerBonusType.PERCENTAGE.value
        and gig.manager_bonus_amount is not None
        and gig.manager_bonus_amount > 100
    ):
        raise GigValidationError(
            f"Percentage bonus must be <= 100 (got {gig.manager_bonus_amount})",
            gig_id=gig.id,
        )


async def update_gig(db: AsyncSession, gig: Gig, changes: Dict[str, Any]) -> Gig:
    """
    Apply changes to a gig.

    Raises:
        GigValidationError: If the resulting deal terms are invalid
    """
    for name, value in changes.items():
        setattr(gig, name, value)
    check_deal_terms(gig)
    await db.flush()
    await db.refresh(gig)
    return gig


async def delete_gig(db: AsyncSession, gig: Gig) -> None:
    await db.delete(gig)
    await db.flush()
    logger.info(f"Deleted gig {gig.id}")


async def bulk_update(
    db: AsyncSession,
    user_id: UUID,
    updates: Sequence[Tuple[UUID, Dict[str, Any]]],
) -> List[Gig]:
    """
    Apply many gig updates in one transaction.

    Ownership of every gig is checked before anything is written, so a
    request touching a foreign gig changes nothing.

    Raises:
        GigOwnershipError: If any gig is missing or owned by someone else
        GigValidationError: If any resulting deal terms are invalid
    """
    gig_ids = [gig_id for gig_id, _ in updates]
    result = await db.execute(
        select(Gig).where(Gig.id.in_(gig_ids), Gig.user_id == user_id)
    )
    gigs = {gig.id: gig for gig in result.scalars().all()}

    if len(gigs) != len(set(gig_ids)):
        missing = [str(gig_id) for gig_id in gig_ids if gig_id not in gigs]
        raise GigOwnershipError(f"Some gigs not found or unauthorized: {', '.join(missing)}")

    updated: List[Gig] = []
    for gig_id, changes in updates:
        gig = gigs[gig_id]
        for name, value in changes.items():
            setattr(gig, name, value)
        check_deal_terms(gig)
        updated.append(gig)

    await db.flush()
    for gig in updated:
        await db.refresh(gig)

    logger.info(f"Bulk updated {len(updated)} gigs for user {user_id}")
    return updated


async def list_band_members(db: AsyncSession, user_id: UUID) -> List[BandMember]:
    result = await db.execute(
        select(BandMember).where(BandMember.user_id == user_id).order_by(BandMember.name)
    )
    return list(result.scalars().all())


async def get_band_member(db: AsyncSession, user_id: UUID, member_id: UUID) -> Optional[BandMember]:
    result = await db.execute(
        select(BandMember).where(BandMember.id == member_id, BandMember.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_band_member(db: AsyncSession, user_id: UUID, data: Dict[str, Any]) -> BandMember:
    member = BandMember(user_id=user_id, **data)
    db.add(member)
    await db.flush()
    return member


async def link_band_members(
    db: AsyncSession,
    user_id: UUID,
    gig: Gig,
    member_ids: Iterable[UUID],
) -> int:
    """
    Link band members to a freshly created gig.

    Each link snapshots the gig's amount_per_musician as earned_amount.
    Members not owned by the user are ignored.

    Returns:
        Number of links created
    """
    member_ids = list(member_ids)
    if not member_ids:
        return 0

    result = await db.execute(
        select(BandMember).where(BandMember.id.in_(member_ids), BandMember.user_id == user_id)
    )
    members = result.scalars().all()
    if not members:
        return 0

    earned = calculator.calculate(GigInput.from_record(gig)).amount_per_musician
    for member in members:
        db.add(GigBandMember(gig_id=gig.id, band_member_id=member.id, earned_amount=earned))
    await db.flush()
    return len(members)


async def list_member_links(db: AsyncSession, member: BandMember) -> List[GigBandMember]:
    result = await db.execute(
        select(GigBandMember).where(GigBandMember.band_member_id == member.id)
    )
    return list(result.scalars().all())


async def sync_member_gigs(
    db: AsyncSession,
    user_id: UUID,
    member: BandMember,
    gig_ids: Iterable[UUID],
) -> Tuple[int, int]:
    """
    Make a member's linked gigs match gig_ids.

    New links snapshot amount_per_musician; existing links keep their
    earned amount. Gig ids not owned by the user are ignored.

    Returns:
        (added, removed)
    """
    gig_ids = list(gig_ids)
    gigs: List[Gig] = []
    if gig_ids:
        result = await db.execute(
            select(Gig).where(Gig.id.in_(gig_ids), Gig.user_id == user_id)
        )
        gigs = list(result.scalars().all())

    existing_ids = {link.gig_id for link in await list_member_links(db, member)}
    target_ids = {gig.id for gig in gigs}

    to_add = [gig for gig in gigs if gig.id not in existing_ids]
    to_remove = existing_ids - target_ids

    if to_remove:
        await db.execute(
            delete(GigBandMember).where(
                GigBandMember.band_member_id == member.id,
                GigBandMember.gig_id.in_(to_remove),
            )
        )

    for gig in to_add:
        calc = calculator.calculate(GigInput.from_record(gig))
        db.add(GigBandMember(
            gig_id=gig.id,
            band_member_id=member.id,
            earned_amount=calc.amount_per_musician,
        ))

    await db.flush()
    logger.info(
        f"Synced gigs for band member {member.id}: "
        f"{len(to_add)} added, {len(to_remove)} removed"
    )
    return len(to_add), len(to_remove)
