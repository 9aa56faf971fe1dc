from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import Salary, SalaryDraft


class SalaryRepository(Protocol):
    def list_all(self) -> Sequence[Salary]:
        """Newest period first."""
        raise NotImplementedError

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        raise NotImplementedError

    def list_for_period(self, *, month: int, year: int) -> Sequence[Salary]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[Salary]:
        raise NotImplementedError

    def exists_for_period(self, employee_id: int, *, month: int, year: int) -> bool:
        raise NotImplementedError

    def count_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError

    def create(self, draft: SalaryDraft) -> int:
        """Raises ConflictError if the (employee, month, year) key is taken."""
        raise NotImplementedError

    def create_many(self, drafts: Sequence[SalaryDraft]) -> int:
        """Insert all drafts in one transaction; nothing is stored if any insert fails."""
        raise NotImplementedError

    def update(self, salary_id: int, draft: SalaryDraft) -> bool:
        raise NotImplementedError

    def set_status(self, salary_id: int, status: SalaryStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, salary_id: int) -> bool:
        raise NotImplementedError
