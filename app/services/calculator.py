"""
Gig financial calculation service.

Business rules:
1. Charity gigs produce no billable revenue: every money output is 0.

2. total_received = performance_fee + technical_fee

3. Manager bonus:
   - fixed: manager_bonus_amount, clamped to [0, total_received]
   - percentage: total_received * manager_bonus_amount / 100,
     with the percentage clamped to [0, 100]

4. Claimed fees (kept by the manager on top of the bonus):
   - claimed_performance = performance_fee if claim_performance_fee
   - claimed_technical = min(technical_fee_claim_amount, technical_fee)
     if claim_technical_fee (no claim amount = the whole technical fee)
   Claims are taken from what is left after the bonus, so the pot never
   goes negative.

5. pot = total_received - bonus - claims
   amount_per_musician = pot / number_of_musicians (0 when no musicians)

6. Advances:
   - my_earnings = bonus + claims - advance_received_by_manager
   - amount_owed_to_others = pot - advance_to_musicians
   Both may be negative (over-advanced gigs) and are reported as-is.

Conservation:
   my_earnings + amount_owed_to_others
       == total_received - advance_received_by_manager - advance_to_musicians
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from app.core.exceptions import GigValidationError
from app.services.money import ZERO, HUNDRED, clamp, round_money, to_decimal, to_money

logger = logging.getLogger(__name__)


class ManagerBonusType(str, Enum):
    """How the manager bonus amount is interpreted."""
    FIXED = "fixed"             # Money amount
    PERCENTAGE = "percentage"   # Percentage points of total_received


@dataclass(frozen=True)
class GigInput:
    """Deal terms of one gig, as far as the money is concerned."""
    performance_fee: Any = ZERO
    technical_fee: Any = ZERO
    number_of_musicians: Any = 1
    manager_bonus_type: Any = ManagerBonusType.FIXED
    manager_bonus_amount: Any = ZERO
    claim_performance_fee: bool = True
    claim_technical_fee: bool = True
    technical_fee_claim_amount: Any = None
    advance_received_by_manager: Any = ZERO
    advance_to_musicians: Any = ZERO
    is_charity: bool = False
    payment_received: bool = False
    band_paid: bool = False
    manager_handles_distribution: bool = True
    # Reporting fields, unused by the calculation
    id: Any = None
    date: Optional[date] = None
    event_name: str = ""
    performers: str = ""

    @classmethod
    def from_record(cls, record: Any) -> "GigInput":
        """
        Build an input from any record exposing gig attributes.

        Works for ORM rows and pydantic schemas alike. Missing attributes
        fall back to the dataclass defaults.
        """
        defaults = cls()
        values = {
            name: getattr(record, name, getattr(defaults, name))
            for name in cls.__dataclass_fields__
        }
        gig_date = values["date"]
        if hasattr(gig_date, "date") and callable(gig_date.date):
            values["date"] = gig_date.date()
        return cls(**values)


@dataclass(frozen=True)
class GigCalculations:
    """Financial breakdown for a single gig, rounded to cents."""
    actual_manager_bonus: Decimal = ZERO
    total_received: Decimal = ZERO
    amount_per_musician: Decimal = ZERO
    my_earnings: Decimal = ZERO
    amount_owed_to_others: Decimal = ZERO
    band_pot: Decimal = ZERO
    manager_gross_earnings: Decimal = ZERO

    def as_dict(self) -> dict[str, Decimal]:
        return asdict(self)


class FinancialCalculator:
    """
    Pure per-gig earnings split.

    This service is stateless: no I/O, no caching, safe to share between
    concurrent requests.
    """

    @staticmethod
    def resolve_bonus_type(gig: GigInput) -> ManagerBonusType:
        """
        Validate the bonus type of a gig.

        Raises:
            GigValidationError: If the bonus type is missing or unknown
        """
        raw = gig.manager_bonus_type
        if isinstance(raw, ManagerBonusType):
            return raw
        if raw is None or str(raw).strip() == "":
            raise GigValidationError("manager_bonus_type is required", gig_id=gig.id)
        try:
            return ManagerBonusType(str(raw).strip().lower())
        except ValueError:
            raise GigValidationError(
                f"Unknown manager_bonus_type {raw!r}", gig_id=gig.id
            ) from None

    def calculate(self, gig: GigInput) -> GigCalculations:
        """
        Compute the financial breakdown of one gig.

        Args:
            gig: Deal terms

        Returns:
            GigCalculations with all amounts rounded to 2 decimals

        Raises:
            GigValidationError: If the bonus type is missing or unknown
        """
        bonus_type = self.resolve_bonus_type(gig)

        if gig.is_charity:
            return GigCalculations()

        performance_fee = to_money(gig.performance_fee)
        technical_fee = to_money(gig.technical_fee)
        total_received = performance_fee + technical_fee

        if bonus_type == ManagerBonusType.PERCENTAGE:
            percentage = clamp(to_decimal(gig.manager_bonus_amount), ZERO, HUNDRED)
            bonus = total_received * percentage / HUNDRED
        else:
            bonus = min(to_money(gig.manager_bonus_amount), total_received)

        remaining = total_received - bonus

        claimed_performance = ZERO
        if gig.claim_performance_fee:
            claimed_performance = min(performance_fee, remaining)
            remaining -= claimed_performance

        claimed_technical = ZERO
        if gig.claim_technical_fee:
            if gig.technical_fee_claim_amount is None:
                requested = technical_fee
            else:
                requested = min(to_money(gig.technical_fee_claim_amount), technical_fee)
            claimed_technical = min(requested, remaining)
            remaining -= claimed_technical

        pot = remaining
        musicians = int(to_decimal(gig.number_of_musicians))
        amount_per_musician = pot / musicians if musicians > 0 else ZERO
        if musicians <= 0:
            logger.warning(
                f"Gig {gig.id} has number_of_musicians={gig.number_of_musicians}, "
                f"amount_per_musician set to 0"
            )

        advance_received = to_money(gig.advance_received_by_manager)
        advance_paid = to_money(gig.advance_to_musicians)

        manager_gross = bonus + claimed_performance + claimed_technical
        my_earnings = round_money(manager_gross - advance_received)

        # Everything below is derived from exact cent totals, so rounding
        # leaves no residual between the manager and the band.
        net_total = total_received - advance_received - advance_paid
        amount_owed_to_others = round_money(net_total - my_earnings)
        manager_gross_earnings = round_money(manager_gross)
        band_pot = round_money(total_received - manager_gross_earnings)

        return GigCalculations(
            actual_manager_bonus=round_money(bonus),
            total_received=round_money(total_received),
            amount_per_musician=round_money(amount_per_musician),
            my_earnings=my_earnings,
            amount_owed_to_others=amount_owed_to_others,
            band_pot=band_pot,
            manager_gross_earnings=manager_gross_earnings,
        )


# Default calculator instance
calculator = FinancialCalculator()


def calculate(gig: GigInput) -> GigCalculations:
    """Module-level shortcut for the default calculator."""
    return calculator.calculate(gig)
