from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Operator account.

    Note: password_hash stays inside the service layer; controllers serialize
    through `public_user` only.
    """

    user_id: int
    username: str
    password_hash: str
    name: str
    email: Optional[str]
    role: Role
    is_active: bool = True
    employee_id: Optional[int] = None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity carried by a verified bearer token."""

    user_id: int
    username: str
    name: str
    role: Role
    employee_id: Optional[int] = None


def public_user(user: User) -> dict:
    return {
        "id": user.user_id,
        "username": user.username,
        "name": user.name,
        "email": user.email or "",
        "role": user.role.value,
        "is_active": user.is_active,
        "employee_id": user.employee_id,
    }
