from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local, require_iso_date
from ..common.validators import parse_enum, parse_int, require_month, require_year
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import AttendanceEntry, AttendanceRecord, empty_recap
from .repository import AttendanceRepository


@dataclass(frozen=True)
class MonthlyAttendance:
    employee: Employee
    month: int
    year: int
    records: Sequence[AttendanceRecord]
    recap: dict[str, int]


class AttendanceService:
    """Use case: daily attendance ledger and monthly recap."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    @staticmethod
    def _parse_time(value: Any, field_name: str) -> Optional[str]:
        v = str(value or "").strip()
        if not v:
            return None
        try:
            return datetime.strptime(v[:5], "%H:%M").strftime("%H:%M")
        except ValueError:
            raise ValidationError(f"Invalid {field_name} (HH:MM)")

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _build_entry(
        self,
        *,
        employee_id: Any,
        work_date: Any,
        time_in: Any = None,
        time_out: Any = None,
        status: Any = None,
        note: Any = None,
    ) -> AttendanceEntry:
        if not employee_id:
            raise ValidationError("Employee ID is required")
        employee = self._require_employee(parse_int(employee_id, "Employee ID"))
        return AttendanceEntry(
            employee_id=employee.employee_id,
            work_date=require_iso_date(work_date, "Date"),
            time_in=self._parse_time(time_in, "time in"),
            time_out=self._parse_time(time_out, "time out"),
            status=parse_enum(
                AttendanceStatus,
                status or AttendanceStatus.PRESENT.value,
                "Invalid status. Use 'present', 'leave', 'sick' or 'absent'",
            ),
            note=str(note).strip() if note else None,
        )

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance not found")
        return record

    def record(self, **fields: Any) -> AttendanceRecord:
        """Create one row; a second row for the same employee/date is a ConflictError."""
        attendance_id = self._attendance.create(self._build_entry(**fields))
        return self.get_record(attendance_id)

    def update_record(self, attendance_id: int, **fields: Any) -> AttendanceRecord:
        self.get_record(attendance_id)
        self._attendance.update(attendance_id, self._build_entry(**fields))
        return self.get_record(attendance_id)

    def delete_record(self, attendance_id: int) -> None:
        self.get_record(attendance_id)
        self._attendance.delete_by_id(attendance_id)

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Rows in [start_date, end_date]; either bound defaults to the current month."""
        first, last = month_bounds(now_local().year, now_local().month)
        start = require_iso_date(start_date, "Start date") if start_date else first
        end = require_iso_date(end_date, "End date") if end_date else last
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)

    def recap(self, employee_id: int, *, month: Optional[int] = None, year: Optional[int] = None) -> dict[str, int]:
        """Per-status counts for one month; every status is present, zero when unused."""
        month, year = _period(month, year)
        start, end = month_bounds(year, month)

        counts = empty_recap()
        for status, total in self._attendance.count_by_status(employee_id, start_date=start, end_date=end).items():
            counts[AttendanceStatus(status).value] = int(total)
        return counts

    def monthly_sheet(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> MonthlyAttendance:
        month, year = _period(month, year)
        employee = self._require_employee(employee_id)
        start, end = month_bounds(year, month)
        return MonthlyAttendance(
            employee=employee,
            month=month,
            year=year,
            records=self._attendance.list_for_employee(employee_id, start_date=start, end_date=end),
            recap=self.recap(employee_id, month=month, year=year),
        )


def _period(month: Optional[int], year: Optional[int]) -> tuple[int, int]:
    today = now_local()
    month = require_month(month if month is not None else today.month)
    year = require_year(year if year is not None else today.year, min_year=1900, max_year=9999)
    return month, year
