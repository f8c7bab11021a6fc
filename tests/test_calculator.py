from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.core.exceptions import GigValidationError
from app.services.calculator import FinancialCalculator, GigInput, ManagerBonusType, calculate


def _gig(**overrides) -> GigInput:
    terms = dict(
        performance_fee=Decimal("2000"),
        technical_fee=Decimal("300"),
        manager_bonus_type="percentage",
        manager_bonus_amount=Decimal("10"),
        number_of_musicians=4,
        claim_performance_fee=False,
        claim_technical_fee=False,
        is_charity=False,
    )
    terms.update(overrides)
    return GigInput(**terms)


def _assert_conserved(gig: GigInput) -> None:
    calc = calculate(gig)
    if gig.is_charity:
        expected = Decimal("0")
    else:
        expected = (
            calc.total_received
            - Decimal(str(gig.advance_received_by_manager))
            - Decimal(str(gig.advance_to_musicians))
        )
    assert calc.my_earnings + calc.amount_owed_to_others == expected


def test_percentage_bonus_split_between_four_musicians() -> None:
    calc = calculate(_gig())
    assert calc.total_received == Decimal("2300")
    assert calc.actual_manager_bonus == Decimal("230")
    assert calc.band_pot == Decimal("2070")
    assert calc.amount_per_musician == Decimal("517.50")
    assert calc.my_earnings == Decimal("230")
    assert calc.amount_owed_to_others == Decimal("2070")


def test_charity_gig_zeroes_every_amount() -> None:
    calc = calculate(_gig(
        is_charity=True,
        claim_performance_fee=True,
        advance_received_by_manager=Decimal("500"),
        advance_to_musicians=Decimal("100"),
    ))
    assert all(value == 0 for value in calc.as_dict().values())


def test_zero_musicians_gives_zero_share_without_error() -> None:
    calc = calculate(_gig(number_of_musicians=0))
    assert calc.amount_per_musician == 0
    assert calc.amount_owed_to_others == Decimal("2070")


def test_negative_musicians_gives_zero_share() -> None:
    assert calculate(_gig(number_of_musicians=-3)).amount_per_musician == 0


def test_fixed_bonus_equals_same_percentage() -> None:
    pct = calculate(_gig(manager_bonus_amount=Decimal("12.5")))
    fixed = calculate(_gig(manager_bonus_type="fixed", manager_bonus_amount=Decimal("287.5")))
    assert pct.actual_manager_bonus == fixed.actual_manager_bonus == Decimal("287.50")
    assert pct.amount_per_musician == fixed.amount_per_musician


def test_fixed_bonus_capped_at_total_received() -> None:
    calc = calculate(_gig(manager_bonus_type="fixed", manager_bonus_amount=Decimal("5000")))
    assert calc.actual_manager_bonus == Decimal("2300")
    assert calc.band_pot == 0
    assert calc.amount_per_musician == 0


@pytest.mark.parametrize("amount, expected", [("150", "2300"), ("-5", "0")])
def test_percentage_clamped_to_0_100(amount: str, expected: str) -> None:
    calc = calculate(_gig(manager_bonus_amount=Decimal(amount)))
    assert calc.actual_manager_bonus == Decimal(expected)


def test_negative_and_missing_fees_treated_as_zero() -> None:
    calc = calculate(_gig(performance_fee=Decimal("-100"), technical_fee=None, manager_bonus_amount=0))
    assert calc.total_received == 0
    assert calc.my_earnings == 0
    assert calc.amount_owed_to_others == 0


def test_technical_claim_capped_at_technical_fee() -> None:
    calc = calculate(_gig(
        manager_bonus_amount=0,
        claim_technical_fee=True,
        technical_fee_claim_amount=Decimal("500"),
    ))
    assert calc.my_earnings == Decimal("300")
    assert calc.band_pot == Decimal("2000")
    assert calc.amount_per_musician == Decimal("500")


def test_technical_claim_without_amount_claims_whole_fee() -> None:
    calc = calculate(_gig(manager_bonus_amount=0, claim_technical_fee=True))
    assert calc.manager_gross_earnings == Decimal("300")


def test_partial_technical_claim_leaves_rest_in_pot() -> None:
    calc = calculate(_gig(
        manager_bonus_amount=0,
        claim_technical_fee=True,
        technical_fee_claim_amount=Decimal("100"),
    ))
    assert calc.my_earnings == Decimal("100")
    assert calc.band_pot == Decimal("2200")


def test_claimed_performance_fee_goes_to_manager() -> None:
    calc = calculate(_gig(claim_performance_fee=True))
    # 230 bonus + 2000 performance fee, 70 left for the band
    assert calc.my_earnings == Decimal("2230")
    assert calc.band_pot == Decimal("70")
    assert calc.amount_per_musician == Decimal("17.50")


def test_claims_never_push_pot_below_zero() -> None:
    calc = calculate(_gig(
        manager_bonus_type="fixed",
        manager_bonus_amount=Decimal("2000"),
        claim_performance_fee=True,
        claim_technical_fee=True,
    ))
    assert calc.band_pot == 0
    assert calc.manager_gross_earnings == Decimal("2300")


def test_over_advanced_manager_is_reported_negative() -> None:
    calc = calculate(_gig(
        performance_fee=Decimal("1000"),
        technical_fee=Decimal("200"),
        manager_bonus_type="fixed",
        manager_bonus_amount=Decimal("100"),
        number_of_musicians=3,
        claim_technical_fee=True,
        technical_fee_claim_amount=Decimal("150"),
        advance_received_by_manager=Decimal("300"),
        advance_to_musicians=Decimal("200"),
    ))
    assert calc.my_earnings == Decimal("-50")
    assert calc.amount_owed_to_others == Decimal("750")
    assert calc.amount_per_musician == Decimal("316.67")


def test_over_advanced_band_is_reported_negative() -> None:
    calc = calculate(_gig(advance_to_musicians=Decimal("2500")))
    assert calc.amount_owed_to_others == Decimal("-430")


def test_outputs_rounded_once_without_residual() -> None:
    gig = _gig(
        performance_fee=Decimal("100"),
        technical_fee=0,
        manager_bonus_amount=Decimal("33.333"),
        number_of_musicians=3,
    )
    calc = calculate(gig)
    assert calc.actual_manager_bonus == Decimal("33.33")
    assert calc.my_earnings == Decimal("33.33")
    assert calc.amount_owed_to_others == Decimal("66.67")
    assert calc.amount_per_musician == Decimal("22.22")


def test_float_inputs_do_not_drift() -> None:
    calc = calculate(_gig(performance_fee=0.1, technical_fee=0.2, manager_bonus_amount=0))
    assert calc.total_received == Decimal("0.30")


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"claim_performance_fee": True, "claim_technical_fee": True},
        {"manager_bonus_type": "fixed", "manager_bonus_amount": Decimal("99.99")},
        {"manager_bonus_amount": Decimal("7.77"), "number_of_musicians": 7},
        {"advance_received_by_manager": Decimal("1000"), "advance_to_musicians": Decimal("333.33")},
        {"technical_fee_claim_amount": Decimal("12.34"), "claim_technical_fee": True,
         "advance_to_musicians": Decimal("5000")},
        {"is_charity": True, "advance_received_by_manager": Decimal("10")},
        {"number_of_musicians": 0, "manager_bonus_amount": Decimal("100")},
    ],
)
def test_conservation(overrides: dict) -> None:
    _assert_conserved(_gig(**overrides))


def test_calculate_is_idempotent() -> None:
    calculator = FinancialCalculator()
    gig = _gig(advance_received_by_manager=Decimal("42.42"))
    assert calculator.calculate(gig) == calculator.calculate(gig)


@pytest.mark.parametrize("bonus_type", [None, "", "bonus"])
def test_invalid_bonus_type_is_rejected(bonus_type) -> None:
    with pytest.raises(GigValidationError):
        calculate(_gig(manager_bonus_type=bonus_type))


def test_bonus_type_accepts_enum_and_mixed_case() -> None:
    assert calculate(_gig(manager_bonus_type=ManagerBonusType.PERCENTAGE)).actual_manager_bonus == 230
    assert calculate(_gig(manager_bonus_type=" Percentage ")).actual_manager_bonus == 230


def test_from_record_reads_attributes_and_defaults() -> None:
    record = SimpleNamespace(
        id="gig-1",
        date=datetime(2026, 1, 10, 20, 30),
        event_name="Jazz Night",
        performance_fee=Decimal("2000"),
        technical_fee=Decimal("300"),
        manager_bonus_type="percentage",
        manager_bonus_amount=Decimal("10"),
        number_of_musicians=4,
        claim_performance_fee=False,
        claim_technical_fee=False,
    )
    gig = GigInput.from_record(record)
    assert gig.date == date(2026, 1, 10)
    assert gig.advance_to_musicians == 0
    assert gig.is_charity is False
    assert calculate(gig).amount_per_musician == Decimal("517.50")
