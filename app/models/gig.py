"""
Gig model: one performance with its negotiated deal terms.

MONEY CONVENTION:
- All money columns are Numeric(12, 2), never negative (clamped on write)
- manager_bonus_amount is money for 'fixed', percentage points for 'percentage'
- technical_fee_claim_amount NULL means the whole technical fee is claimed

Financial figures (earnings, amounts owed) are never stored: they are
recomputed by the FinancialCalculator on every read.
"""
import uuid
from datetime import datetime, date as date_type
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, DateTime, Date, Numeric, Integer, Boolean, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.band_member import GigBandMember


class Gig(Base):
    """A booked performance."""

    __tablename__ = "gigs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Event
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    performers: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_musicians: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_charity: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Fees
    performance_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )
    technical_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )

    # Manager bonus: 'fixed' or 'percentage'
    manager_bonus_type: Mapped[str] = mapped_column(String(20), default="fixed", nullable=False)
    manager_bonus_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )

    # Claims
    claim_performance_fee: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    claim_technical_fee: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    technical_fee_claim_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=True,
    )
    manager_handles_distribution: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Advances
    advance_received_by_manager: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )
    advance_to_musicians: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        default=Decimal("0"),
        nullable=False,
    )

    # Settlement status
    payment_received: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    payment_received_date: Mapped[Optional[date_type]] = mapped_column(Date, nullable=True)
    band_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    band_paid_date: Mapped[Optional[date_type]] = mapped_column(Date, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    booking_date: Mapped[Optional[date_type]] = mapped_column(Date, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="gigs",
    )
    band_member_links: Mapped[List["GigBandMember"]] = relationship(
        "GigBandMember",
        back_populates="gig",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("number_of_musicians >= 1", name="check_number_of_musicians_positive"),
        CheckConstraint(
            "manager_bonus_type IN ('fixed', 'percentage')",
            name="check_manager_bonus_type",
        ),
    )

    def __repr__(self) -> str:
        return f"<Gig {self.id} event={self.event_name} date={self.date}>"
