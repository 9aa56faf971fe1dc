from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    attendance_id: int
    employee_id: int
    work_date: date
    time_in: Optional[str]
    time_out: Optional[str]
    status: AttendanceStatus
    note: Optional[str]
    employee_name: Optional[str] = None
    employee_nik: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_nik": self.employee_nik,
            "work_date": self.work_date,
            "time_in": self.time_in or "",
            "time_out": self.time_out or "",
            "status": self.status.value,
            "note": self.note or "",
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """Validated fields for create/update."""

    employee_id: int
    work_date: date
    time_in: Optional[str]
    time_out: Optional[str]
    status: AttendanceStatus
    note: Optional[str]


def empty_recap() -> dict[str, int]:
    return {status.value: 0 for status in AttendanceStatus}
