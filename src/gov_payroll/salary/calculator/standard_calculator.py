from __future__ import annotations

from decimal import Decimal

from ...common.money import to_money
from ..model import SalaryComponents
from .base import SalaryCalculator


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: sum of the five additive components minus deductions.

    The result is not clamped; deductions larger than the pay give a negative total.
    """

    def total(self, components: SalaryComponents) -> Decimal:
        gross = (
            components.base_pay
            + components.position_allowance
            + components.transport_allowance
            + components.meal_allowance
            + components.overtime_amount
        )
        return to_money(gross - components.deductions)
