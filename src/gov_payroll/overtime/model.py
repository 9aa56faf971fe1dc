from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import OvertimeStatus


@dataclass(frozen=True)
class OvertimeEntry:
    overtime_id: int
    employee_id: int
    work_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    total_hours: Decimal
    hourly_rate: Decimal
    amount: Decimal
    description: Optional[str]
    status: OvertimeStatus
    approved_by: Optional[int] = None
    employee_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.overtime_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "work_date": self.work_date,
            "start_time": self.start_time or "",
            "end_time": self.end_time or "",
            "total_hours": self.total_hours,
            "hourly_rate": self.hourly_rate,
            "amount": self.amount,
            "description": self.description or "",
            "status": self.status.value,
            "approved_by": self.approved_by,
        }


@dataclass(frozen=True)
class OvertimeDraft:
    """Fields written on create/update; amount is already computed."""

    employee_id: int
    work_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    total_hours: Decimal
    hourly_rate: Decimal
    amount: Decimal
    description: Optional[str]
    status: OvertimeStatus
