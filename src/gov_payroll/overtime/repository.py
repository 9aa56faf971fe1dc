from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import OvertimeStatus
from .model import OvertimeDraft, OvertimeEntry


class OvertimeRepository(Protocol):
    def list_all(self) -> Sequence[OvertimeEntry]:
        raise NotImplementedError

    def get_by_id(self, overtime_id: int) -> Optional[OvertimeEntry]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[OvertimeEntry]:
        raise NotImplementedError

    def list_for_period(self, *, month: int, year: int) -> Sequence[OvertimeEntry]:
        raise NotImplementedError

    def list_zero_rate(self) -> Sequence[OvertimeEntry]:
        raise NotImplementedError

    def sum_approved_amount(self, employee_id: int, *, month: int, year: int) -> Decimal:
        """Sum of amounts for approved rows only; Decimal 0 when none."""
        raise NotImplementedError

    def create(self, draft: OvertimeDraft) -> int:
        raise NotImplementedError

    def update(self, overtime_id: int, draft: OvertimeDraft) -> bool:
        raise NotImplementedError

    def set_status(self, overtime_id: int, *, status: OvertimeStatus, approved_by: Optional[int]) -> bool:
        raise NotImplementedError

    def set_rate(self, overtime_id: int, *, hourly_rate: Decimal, amount: Decimal) -> bool:
        raise NotImplementedError

    def delete_by_id(self, overtime_id: int) -> bool:
        raise NotImplementedError
