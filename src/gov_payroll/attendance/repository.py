from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_status(self, employee_id: int, *, start_date: date, end_date: date) -> Mapping[AttendanceStatus, int]:
        """Only statuses that occur are returned; callers fill the gaps."""
        raise NotImplementedError

    def create(self, entry: AttendanceEntry) -> int:
        """Raises ConflictError when the employee already has a row for that date."""
        raise NotImplementedError

    def update(self, attendance_id: int, entry: AttendanceEntry) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError
