from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    """Coerce a DB/JSON value to a two-decimal Decimal (DECIMAL(15,2) columns)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

# largest value a DECIMAL(15,2) column holds
MONEY_MAX = Decimal("9999999999999.99")
