"""Band members and their links to gigs."""
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, DateTime, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.gig import Gig


class BandMember(Base):
    """A musician the manager pays out to."""

    __tablename__ = "band_members"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    instrument: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="band_members",
    )
    gig_links: Mapped[List["GigBandMember"]] = relationship(
        "GigBandMember",
        back_populates="band_member",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<BandMember {self.id} name={self.name}>"


class GigBandMember(Base):
    """
    Link between a gig and a band member.

    earned_amount is a snapshot of the gig's amount_per_musician taken when
    the member was linked; later edits of the gig do not change it.
    """

    __tablename__ = "gig_band_members"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    gig_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("gigs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    band_member_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("band_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    earned_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )

    # Relationships
    gig: Mapped["Gig"] = relationship(
        "Gig",
        back_populates="band_member_links",
    )
    band_member: Mapped["BandMember"] = relationship(
        "BandMember",
        back_populates="gig_links",
    )

    __table_args__ = (
        UniqueConstraint("gig_id", "band_member_id", name="uq_gig_band_member"),
    )

    def __repr__(self) -> str:
        return f"<GigBandMember gig={self.gig_id} member={self.band_member_id} earned={self.earned_amount}>"
