from __future__ import annotations

from typing import Any, Sequence

from ..common.money import ZERO, to_money
from ..common.validators import require_month, require_year
from ..core.constants import SALARY_YEAR_MAX, SALARY_YEAR_MIN
from ..core.enums import SalaryStatus
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..salary.model import Salary
from ..salary.repository import SalaryRepository
from .model import SalaryRecap


class ReportService:
    """Read-only salary reporting.

    Period listings come back ordered by employee name, histories newest period
    first; rows already carry employee name, NIK and position name.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        *,
        year_min: int = SALARY_YEAR_MIN,
        year_max: int = SALARY_YEAR_MAX,
    ):
        self._salaries = salaries
        self._employees = employees
        self._year_min = int(year_min)
        self._year_max = int(year_max)

    def period(self, month: Any, year: Any) -> tuple[int, int]:
        return (
            require_month(month),
            require_year(year, min_year=self._year_min, max_year=self._year_max),
        )

    def salary_report(self, *, month: Any, year: Any) -> Sequence[Salary]:
        month, year = self.period(month, year)
        return self._salaries.list_for_period(month=month, year=year)

    def salary_history(self, employee_id: int) -> tuple[Employee, Sequence[Salary]]:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee, self._salaries.list_for_employee(employee_id)

    def recap(self, *, month: Any, year: Any) -> SalaryRecap:
        month, year = self.period(month, year)
        rows = self._salaries.list_for_period(month=month, year=year)

        base = allowances = overtime = deductions = total = ZERO
        for s in rows:
            c = s.components
            base += c.base_pay
            allowances += c.position_allowance + c.transport_allowance + c.meal_allowance
            overtime += c.overtime_amount
            deductions += c.deductions
            total += s.total

        return SalaryRecap(
            month=month,
            year=year,
            total_employees=len({s.employee_id for s in rows}),
            total_base_pay=to_money(base),
            total_allowances=to_money(allowances),
            total_overtime=to_money(overtime),
            total_deductions=to_money(deductions),
            total_salary=to_money(total),
            pending_count=sum(1 for s in rows if s.status == SalaryStatus.PENDING),
            paid_count=sum(1 for s in rows if s.status == SalaryStatus.PAID),
        )
