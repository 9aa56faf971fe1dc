from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import require_iso_date
from ..common.money import ZERO, to_money
from ..common.validators import (
    optional_reference,
    parse_decimal,
    parse_enum,
    parse_int,
    require_money_range,
    require_month,
)
from ..core.enums import OvertimeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator import overtime_amount
from .model import OvertimeDraft, OvertimeEntry
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)

# overtime.total_hours is DECIMAL(6,2)
MAX_TOTAL_HOURS = Decimal("9999.99")


@dataclass(frozen=True)
class RateBackfillResult:
    updated: int
    total: int


def _amount(hours: Decimal, rate: Decimal) -> Decimal:
    return require_money_range(overtime_amount(hours, rate), "Overtime amount")


def _rate_for(employee: Employee) -> Decimal:
    if employee.position is None:
        return ZERO
    return to_money(employee.position.overtime_rate)


class OvertimeService:
    """Use case: overtime claims, approval and rate maintenance."""

    def __init__(self, overtime: OvertimeRepository, employees: EmployeeRepository):
        self._overtime = overtime
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

    @staticmethod
    def _parse_hours(value: Any) -> Decimal:
        hours = parse_decimal(value, "Total hours")
        if hours <= 0:
            raise ValidationError("Total hours must be greater than 0")
        return require_money_range(hours, "Total hours", maximum=MAX_TOTAL_HOURS)

    def list_entries(self) -> Sequence[OvertimeEntry]:
        return self._overtime.list_all()

    def get_entry(self, overtime_id: int) -> OvertimeEntry:
        entry = self._overtime.get_by_id(overtime_id)
        if not entry:
            raise NotFoundError("Overtime not found")
        return entry

    def list_for_employee(self, employee_id: int) -> Sequence[OvertimeEntry]:
        return self._overtime.list_for_employee(employee_id)

    def list_for_period(self, *, month: Any, year: Any) -> Sequence[OvertimeEntry]:
        return self._overtime.list_for_period(month=require_month(month), year=parse_int(year, "Year"))

    def create_entry(
        self,
        *,
        employee_id: Any,
        work_date: Any,
        total_hours: Any,
        start_time: Any = None,
        end_time: Any = None,
        description: Any = None,
    ) -> OvertimeEntry:
        """Record a pending claim; the rate is a snapshot of the employee's position rate."""
        if not employee_id:
            raise ValidationError("Employee ID is required")
        day = require_iso_date(work_date, "Date")
        hours = self._parse_hours(total_hours)

        employee = self._employees.get_by_id(parse_int(employee_id, "Employee ID"))
        if not employee:
            raise NotFoundError("Employee not found")

        rate = _rate_for(employee)
        overtime_id = self._overtime.create(
            OvertimeDraft(
                employee_id=employee.employee_id,
                work_date=day,
                start_time=self._parse_time(start_time, "start time"),
                end_time=self._parse_time(end_time, "end time"),
                total_hours=hours,
                hourly_rate=rate,
                amount=_amount(hours, rate),
                description=str(description).strip() if description else None,
                status=OvertimeStatus.PENDING,
            )
        )
        return self.get_entry(overtime_id)

    def update_entry(
        self,
        overtime_id: int,
        *,
        work_date: Any = None,
        total_hours: Any = None,
        start_time: Any = None,
        end_time: Any = None,
        description: Any = None,
        status: Any = None,
    ) -> OvertimeEntry:
        """Edit a claim; the stored rate is kept and the amount recomputed."""
        entry = self.get_entry(overtime_id)
        hours = self._parse_hours(total_hours) if total_hours not in (None, "") else entry.total_hours
        self._overtime.update(
            overtime_id,
            OvertimeDraft(
                employee_id=entry.employee_id,
                work_date=require_iso_date(work_date, "Date") if work_date else entry.work_date,
                start_time=self._parse_time(start_time, "start time") if start_time is not None else entry.start_time,
                end_time=self._parse_time(end_time, "end time") if end_time is not None else entry.end_time,
                total_hours=hours,
                hourly_rate=entry.hourly_rate,
                amount=_amount(hours, entry.hourly_rate),
                description=(str(description).strip() or None) if description is not None else entry.description,
                status=(
                    parse_enum(OvertimeStatus, status, "Invalid status. Use 'pending', 'approved' or 'rejected'")
                    if status
                    else entry.status
                ),
            ),
        )
        return self.get_entry(overtime_id)

    def delete_entry(self, overtime_id: int) -> None:
        self.get_entry(overtime_id)
        self._overtime.delete_by_id(overtime_id)

    def decide(self, overtime_id: int, *, status: Any, approver_id: Any = None) -> OvertimeEntry:
        """Approve or reject a claim. Re-deciding simply overwrites the previous decision."""
        decision = parse_enum(OvertimeStatus, status, "Invalid status. Use 'approved' or 'rejected'")
        if decision == OvertimeStatus.PENDING:
            raise ValidationError("Invalid status. Use 'approved' or 'rejected'")

        self.get_entry(overtime_id)
        approver = optional_reference(approver_id, "Approver ID")
        if approver is not None and not self._employees.get_by_id(approver):
            raise NotFoundError("Approver not found")

        self._overtime.set_status(overtime_id, status=decision, approved_by=approver)
        return self.get_entry(overtime_id)

    def recalculate_rates(self) -> RateBackfillResult:
        """Backfill rows stored with a zero hourly rate from the employee's current position."""
        entries = self._overtime.list_zero_rate()
        updated = 0
        for entry in entries:
            employee = self._employees.get_by_id(entry.employee_id)
            if not employee:
                logger.warning("Overtime %s references missing employee %s", entry.overtime_id, entry.employee_id)
                continue
            rate = _rate_for(employee)
            self._overtime.set_rate(
                entry.overtime_id,
                hourly_rate=rate,
                amount=_amount(entry.total_hours, rate),
            )
            updated += 1
        return RateBackfillResult(updated=updated, total=len(entries))

