"""
Decimal helpers for money arithmetic.

All amounts are handled as Decimal. Inputs are coerced and clamped on the way
in, outputs are rounded to cents once on the way out.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import logging

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: object) -> Decimal:
    """
    Coerce a raw numeric value to Decimal.

    None, empty strings, NaN and unparsable values become 0. Floats go through
    str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, bool):
            value = int(value)
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            logger.warning(f"Unparsable numeric value {value!r}, using 0")
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def clamp(value: Decimal, low: Decimal = ZERO, high: Decimal | None = None) -> Decimal:
    """Clamp value into [low, high]; high=None means unbounded."""
    if value < low:
        return low
    if high is not None and value > high:
        return high
    return value


def to_money(value: object) -> Decimal:
    """Coerce an input money field: non-negative, quantized to cents."""
    return round_money(clamp(to_decimal(value)))


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (half up). Use only at output boundaries."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: object) -> str:
    """Format an amount to 2 decimal places."""
    return str(round_money(to_decimal(value)))
