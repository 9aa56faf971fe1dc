from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class SalaryComponents:
    """Five additive amounts and one deduction making up a salary."""

    base_pay: Decimal = ZERO
    position_allowance: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    meal_allowance: Decimal = ZERO
    overtime_amount: Decimal = ZERO
    deductions: Decimal = ZERO


@dataclass(frozen=True)
class SalaryDraft:
    """A computed salary ready to be stored."""

    employee_id: int
    month: int
    year: int
    components: SalaryComponents
    total: Decimal
    status: SalaryStatus = SalaryStatus.PENDING


@dataclass(frozen=True)
class Salary:
    salary_id: int
    employee_id: int
    month: int
    year: int
    components: SalaryComponents
    total: Decimal
    status: SalaryStatus
    employee_name: Optional[str] = None
    employee_nik: Optional[str] = None
    position_name: Optional[str] = None

    def to_dict(self) -> dict:
        c = self.components
        return {
            "id": self.salary_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_nik": self.employee_nik,
            "position_name": self.position_name,
            "month": self.month,
            "year": self.year,
            "base_pay": c.base_pay,
            "position_allowance": c.position_allowance,
            "transport_allowance": c.transport_allowance,
            "meal_allowance": c.meal_allowance,
            "overtime_amount": c.overtime_amount,
            "deductions": c.deductions,
            "total": self.total,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class BatchResult:
    month: int
    year: int
    created: int
    skipped: list[str]

    def to_dict(self) -> dict:
        return {
            "message": "Batch generation completed",
            "created": self.created,
            "skipped": list(self.skipped),
            "period": {"month": self.month, "year": self.year},
        }
