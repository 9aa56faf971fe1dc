from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.datetime_utils import require_iso_date
from ..common.validators import optional_reference, parse_enum, require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..positions.repository import PositionRepository
from ..salary.repository import SalaryRepository
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository

NIK_MAX_LENGTH = 20


class EmployeeService:
    """Use case: maintain the employee directory."""

    def __init__(self, employees: EmployeeRepository, positions: PositionRepository, salaries: SalaryRepository):
        self._employees = employees
        self._positions = positions
        self._salaries = salaries

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def search(self, query: Optional[str]) -> Sequence[Employee]:
        query = (query or "").strip()
        if not query:
            return self._employees.list_all()
        return self._employees.search(query)

    def list_by_status(self, status: str) -> Sequence[Employee]:
        parsed = parse_enum(EmployeeStatus, status, "Invalid status. Use 'active' or 'inactive'")
        return self._employees.list_by_status(parsed)

    def _build_input(
        self,
        *,
        nik: Any,
        name: Any,
        email: Any = None,
        phone: Any = None,
        address: Any = None,
        position_id: Any = None,
        join_date: Any = None,
        status: Any = None,
    ) -> EmployeeInput:
        nik = require_non_empty(nik, "NIK")
        if len(nik) > NIK_MAX_LENGTH:
            raise ValidationError(f"NIK must be at most {NIK_MAX_LENGTH} characters")

        ref = optional_reference(position_id, "Position ID")
        if ref is not None and not self._positions.get_by_id(ref):
            raise ValidationError("Position does not exist")

        return EmployeeInput(
            nik=nik,
            name=require_non_empty(name, "Name"),
            email=_optional_text(email),
            phone=_optional_text(phone),
            address=_optional_text(address),
            position_id=ref,
            join_date=require_iso_date(join_date, "Join date") if join_date else None,
            status=parse_enum(
                EmployeeStatus,
                status or EmployeeStatus.ACTIVE.value,
                "Invalid status. Use 'active' or 'inactive'",
            ),
        )

    def create_employee(self, **fields: Any) -> Employee:
        employee_id = self._employees.create(self._build_input(**fields))
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: int, **fields: Any) -> Employee:
        self.get_employee(employee_id)
        self._employees.update(employee_id, self._build_input(**fields))
        return self.get_employee(employee_id)

    def delete_employee(self, employee_id: int) -> None:
        self.get_employee(employee_id)
        if self._salaries.count_for_employee(employee_id) > 0:
            raise ConflictError("Employee has salary records and cannot be deleted")
        self._employees.delete_by_id(employee_id)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
