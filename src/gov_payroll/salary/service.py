from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.money import ZERO, to_money
from ..common.validators import (
    parse_decimal,
    parse_enum,
    parse_int,
    require_money_range,
    require_month,
    require_non_negative,
    require_year,
)
from ..core.constants import SALARY_YEAR_MAX, SALARY_YEAR_MIN
from ..core.enums import EmployeeStatus, Role, SalaryStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..overtime.repository import OvertimeRepository
from ..users.model import AuthenticatedUser
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import BatchResult, Salary, SalaryComponents, SalaryDraft
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_MONEY_FIELDS = (
    ("base_pay", "Base pay"),
    ("position_allowance", "Position allowance"),
    ("transport_allowance", "Transport allowance"),
    ("meal_allowance", "Meal allowance"),
    ("overtime_amount", "Overtime amount"),
    ("deductions", "Deductions"),
)


def _money(value: Any, label: str) -> Decimal:
    amount = require_non_negative(parse_decimal(value, label), label)
    return to_money(require_money_range(amount, label))


class SalaryService:
    """Use case: compute and store one salary per employee per period.

    Single creation and batch generation share the same calculator and the
    same approved-overtime aggregation.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        overtime: OvertimeRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
        year_min: int = SALARY_YEAR_MIN,
        year_max: int = SALARY_YEAR_MAX,
    ):
        self._salaries = salaries
        self._employees = employees
        self._overtime = overtime
        self._calculator = calculator or StandardSalaryCalculator()
        self._year_min = int(year_min)
        self._year_max = int(year_max)

    def _period(self, month: Any, year: Any) -> tuple[int, int]:
        return (
            require_month(month),
            require_year(year, min_year=self._year_min, max_year=self._year_max),
        )

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _total(self, components: SalaryComponents) -> Decimal:
        return require_money_range(self._calculator.total(components), "Total salary")

    def approved_overtime(self, employee_id: int, *, month: int, year: int) -> Decimal:
        """Sum of approved overtime for the period; pending and rejected rows never count."""
        return to_money(self._overtime.sum_approved_amount(employee_id, month=month, year=year))

    def list_salaries(self) -> Sequence[Salary]:
        return self._salaries.list_all()

    def get_salary(self, salary_id: int) -> Salary:
        salary = self._salaries.get_by_id(salary_id)
        if not salary:
            raise NotFoundError("Salary not found")
        return salary

    def list_for_period(self, *, month: Any, year: Any) -> Sequence[Salary]:
        month, year = self._period(month, year)
        return self._salaries.list_for_period(month=month, year=year)

    def list_for_employee(self, employee_id: int) -> Sequence[Salary]:
        return self._salaries.list_for_employee(employee_id)

    def create_salary(self, *, employee_id: Any, month: Any, year: Any, **amounts: Any) -> Salary:
        if not employee_id:
            raise ValidationError("Employee ID is required")
        employee_id = parse_int(employee_id, "Employee ID")
        month, year = self._period(month, year)
        values = {name: _money(amounts.get(name), label) for name, label in _MONEY_FIELDS}

        employee = self._require_employee(employee_id)
        if self._salaries.exists_for_period(employee.employee_id, month=month, year=year):
            raise ConflictError("Salary already exists for this period")

        if values["overtime_amount"] == ZERO:
            values["overtime_amount"] = self.approved_overtime(employee.employee_id, month=month, year=year)

        components = SalaryComponents(**values)
        salary_id = self._salaries.create(
            SalaryDraft(
                employee_id=employee.employee_id,
                month=month,
                year=year,
                components=components,
                total=self._total(components),
            )
        )
        return self.get_salary(salary_id)

    def update_salary(self, salary_id: int, **fields: Any) -> Salary:
        """Full update; omitted fields keep their stored value and the total is recomputed."""
        current = self.get_salary(salary_id)

        employee_id = current.employee_id
        if fields.get("employee_id"):
            employee_id = self._require_employee(parse_int(fields["employee_id"], "Employee ID")).employee_id

        month, year = self._period(
            fields.get("month") if fields.get("month") is not None else current.month,
            fields.get("year") if fields.get("year") is not None else current.year,
        )

        values = {}
        for name, label in _MONEY_FIELDS:
            raw = fields.get(name)
            values[name] = getattr(current.components, name) if raw is None else _money(raw, label)

        status = current.status
        if fields.get("status"):
            status = parse_enum(SalaryStatus, fields["status"], "Invalid status. Use 'pending' or 'paid'")

        components = SalaryComponents(**values)
        self._salaries.update(
            salary_id,
            SalaryDraft(
                employee_id=employee_id,
                month=month,
                year=year,
                components=components,
                total=self._total(components),
                status=status,
            ),
        )
        return self.get_salary(salary_id)

    def set_status(self, salary_id: int, status: Any) -> Salary:
        parsed = parse_enum(SalaryStatus, status, "Invalid status. Use 'pending' or 'paid'")
        self.get_salary(salary_id)
        self._salaries.set_status(salary_id, parsed)
        return self.get_salary(salary_id)

    def delete_salary(self, salary_id: int) -> None:
        self.get_salary(salary_id)
        self._salaries.delete_by_id(salary_id)

    def generate_batch(
        self,
        *,
        month: Any,
        year: Any,
        transport_allowance: Any = None,
        meal_allowance: Any = None,
    ) -> BatchResult:
        """Create pending salaries for every active employee lacking one for the period.

        Existing rows are never touched; their owners are reported in `skipped`.
        New rows are written in a single bulk insert.
        """

        month, year = self._period(month, year)
        transport = _money(transport_allowance, "Transport allowance")
        meal = _money(meal_allowance, "Meal allowance")

        drafts: list[SalaryDraft] = []
        skipped: list[str] = []
        for employee in self._employees.list_by_status(EmployeeStatus.ACTIVE):
            if self._salaries.exists_for_period(employee.employee_id, month=month, year=year):
                skipped.append(employee.name)
                continue

            position = employee.position
            components = SalaryComponents(
                base_pay=to_money(position.base_pay) if position else ZERO,
                position_allowance=to_money(position.position_allowance) if position else ZERO,
                transport_allowance=transport,
                meal_allowance=meal,
                overtime_amount=self._batch_overtime(employee, month=month, year=year),
            )
            drafts.append(
                SalaryDraft(
                    employee_id=employee.employee_id,
                    month=month,
                    year=year,
                    components=components,
                    total=self._total(components),
                )
            )

        created = self._salaries.create_many(drafts) if drafts else 0
        logger.info("Salary batch %02d/%d: %d created, %d skipped", month, year, created, len(skipped))
        return BatchResult(month=month, year=year, created=created, skipped=skipped)

    def _batch_overtime(self, employee: Employee, *, month: int, year: int) -> Decimal:
        try:
            return self.approved_overtime(employee.employee_id, month=month, year=year)
        except Exception:
            # A failed lookup counts as no overtime.
            logger.warning(
                "Overtime lookup failed for employee %s (%02d/%d); using 0",
                employee.employee_id,
                month,
                year,
                exc_info=True,
            )
            return ZERO

    def my_slips(self, user: AuthenticatedUser, *, month: Any = None, year: Any = None) -> Sequence[Salary]:
        if user.employee_id is None:
            raise NotFoundError("No employee record is linked to this account")
        return self._salaries.list_for_employee(
            user.employee_id,
            month=require_month(month) if month not in (None, "") else None,
            year=parse_int(year, "Year") if year not in (None, "") else None,
        )

    def get_slip(self, user: AuthenticatedUser, salary_id: int) -> Salary:
        salary = self.get_salary(salary_id)
        if user.role.has_permission(Role.FINANCE):
            return salary
        if user.employee_id is None or salary.employee_id != user.employee_id:
            raise AuthorizationError("You can only view your own salary slips")
        return salary
