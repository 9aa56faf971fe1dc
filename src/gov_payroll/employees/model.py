from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus
from ..positions.model import Position


@dataclass(frozen=True)
class Employee:
    """Employee record; `position` is the joined position row, if any."""

    employee_id: int
    nik: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    position_id: Optional[int]
    join_date: Optional[date]
    status: EmployeeStatus
    position: Optional[Position] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "nik": self.nik,
            "name": self.name,
            "email": self.email or "",
            "phone": self.phone or "",
            "address": self.address or "",
            "position_id": self.position_id,
            "join_date": self.join_date,
            "status": self.status.value,
            "position": self.position.to_dict() if self.position else None,
        }


@dataclass(frozen=True)
class EmployeeInput:
    """Validated fields for create/update."""

    nik: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    position_id: Optional[int]
    join_date: Optional[date]
    status: EmployeeStatus
