from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Operator roles, ordered by privilege level."""

    EMPLOYEE = "employee"
    FINANCE = "finance"
    HR = "hr"
    ADMIN = "admin"

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    def has_permission(self, required: "Role") -> bool:
        return self.level >= required.level


_ROLE_LEVELS = {
    Role.EMPLOYEE: 1,
    Role.FINANCE: 2,
    Role.HR: 3,
    Role.ADMIN: 4,
}


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the ledger."""

    PRESENT = "present"
    LEAVE = "leave"
    SICK = "sick"
    ABSENT = "absent"


class OvertimeStatus(str, Enum):
    """Overtime approval flow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SalaryStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
