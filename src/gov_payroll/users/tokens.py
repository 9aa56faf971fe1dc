from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES, JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import AuthenticatedUser, User


class TokenService:
    """Issue and verify signed bearer tokens.

    The signing secret is injected once at startup; nothing here reads
    module-level or environment state.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
        algorithm: str = JWT_ALGORITHM,
    ):
        if not secret_key:
            raise ValueError("A token signing secret is required")
        self._secret_key = secret_key
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": str(user.user_id),
            "username": user.username,
            "name": user.name,
            "role": user.role.value,
            "employee_id": user.employee_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            employee_id = claims.get("employee_id")
            return AuthenticatedUser(
                user_id=int(claims["sub"]),
                username=str(claims["username"]),
                name=str(claims.get("name", "")),
                role=Role(claims["role"]),
                employee_id=int(employee_id) if employee_id else None,
            )
        except (JWTError, KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
