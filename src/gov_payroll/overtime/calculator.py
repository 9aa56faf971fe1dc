from __future__ import annotations

from decimal import Decimal

from ..common.money import ZERO, to_money


def overtime_amount(total_hours: Decimal, hourly_rate: Decimal) -> Decimal:
    """hours x rate, or 0 when no hours were worked."""
    if total_hours <= 0:
        return ZERO
    return to_money(total_hours * hourly_rate)
