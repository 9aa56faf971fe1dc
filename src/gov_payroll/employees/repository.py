from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee, EmployeeInput


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def search(self, query: str) -> Sequence[Employee]:
        raise NotImplementedError

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, data: EmployeeInput) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
