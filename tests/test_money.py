from __future__ import annotations

from decimal import Decimal

import pytest

from app.services.money import format_money, round_money, to_decimal, to_money


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "0"),
        ("", "0"),
        ("abc", "0"),
        (float("nan"), "0"),
        ("Infinity", "0"),
        (True, "1"),
        (0.1, "0.1"),
        ("12.345", "12.345"),
    ],
)
def test_to_decimal(raw, expected: str) -> None:
    assert to_decimal(raw) == Decimal(expected)


def test_to_money_clamps_and_quantizes() -> None:
    assert to_money("-5") == Decimal("0.00")
    assert to_money("10.005") == Decimal("10.01")


def test_round_money_is_half_up() -> None:
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("-2.675")) == Decimal("-2.68")


def test_format_money() -> None:
    assert format_money(Decimal("517.5")) == "517.50"
    assert format_money(None) == "0.00"
