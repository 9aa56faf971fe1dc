from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalaryRecap:
    month: int
    year: int
    total_employees: int
    total_base_pay: Decimal
    total_allowances: Decimal
    total_overtime: Decimal
    total_deductions: Decimal
    total_salary: Decimal
    pending_count: int
    paid_count: int

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "total_employees": self.total_employees,
            "total_base_pay": self.total_base_pay,
            "total_allowances": self.total_allowances,
            "total_overtime": self.total_overtime,
            "total_deductions": self.total_deductions,
            "total_salary": self.total_salary,
            "pending_count": self.pending_count,
            "paid_count": self.paid_count,
        }
