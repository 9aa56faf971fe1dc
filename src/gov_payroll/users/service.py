from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository
from .tokens import TokenService


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def _password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password_hash, password)
    except ValueError:
        # Placeholder or corrupted hashes never match.
        return False


# Marks "field not sent" where None is a meaningful value (unlinking an employee).
UNCHANGED: Any = object()


class AuthService:
    """Use case: login, current profile and password change."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, username: str, password: str) -> LoginResult:
        if not (username or "").strip() or not password:
            raise ValidationError("Username and password are required")

        user = self._users.get_by_username(username.strip())
        if not user or not user.is_active or not _password_matches(user, password):
            raise AuthenticationError("Invalid username or password")

        return LoginResult(token=self._tokens.issue(user), user=user)

    def me(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def change_password(self, *, user_id: int, old_password: str, new_password: str) -> None:
        user = self.me(user_id)
        if not _password_matches(user, old_password or ""):
            raise AuthenticationError("Old password is incorrect")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)
        self._users.update_password(user.user_id, generate_password_hash(new_password))


class UserService:
    """Use case: manage operator accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(
        self,
        *,
        username: str,
        password: str,
        name: str,
        email: Optional[str] = None,
        role: Role = Role.ADMIN,
        employee_id: Optional[int] = None,
    ) -> User:
        if not (username or "").strip() or not password or not (name or "").strip():
            raise ValidationError("Username, password, and name are required")
        username = username.strip()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=name.strip(),
            email=(email or "").strip() or None,
            role=role,
            employee_id=employee_id,
        )
        return self.get_user(user_id)

    def update_user(
        self,
        *,
        current_user_id: int,
        user_id: int,
        username: Optional[str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Role] = None,
        employee_id: Any = UNCHANGED,
        is_active: Optional[bool] = None,
        password: Optional[str] = None,
    ) -> User:
        user = self.get_user(user_id)

        new_username = require_non_empty(username, "Username") if username is not None else user.username
        if new_username != user.username:
            other = self._users.get_by_username(new_username)
            if other and other.user_id != user.user_id:
                raise ConflictError("Username already exists")

        if user_id == current_user_id:
            if is_active is False:
                raise AuthorizationError("Cannot deactivate your own account")
            if role is not None and role != user.role:
                raise AuthorizationError("Cannot change your own role")

        self._users.update_user(
            user.user_id,
            username=new_username,
            name=require_non_empty(name, "Name") if name is not None else user.name,
            email=(email.strip() or None) if email is not None else user.email,
            role=role or user.role,
            employee_id=user.employee_id if employee_id is UNCHANGED else employee_id,
            is_active=user.is_active if is_active is None else bool(is_active),
        )
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            self._users.update_password(user.user_id, generate_password_hash(password))
        return self.get_user(user.user_id)

    def delete_user(self, *, current_user_id: int, user_id: int) -> None:
        if int(user_id) == int(current_user_id):
            raise AuthorizationError("Cannot delete your own account")
        self.get_user(user_id)
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")

    def toggle_active(self, *, current_user_id: int, user_id: int) -> User:
        if int(user_id) == int(current_user_id):
            raise AuthorizationError("Cannot toggle your own account")
        user = self.get_user(user_id)
        self._users.set_active(user.user_id, is_active=not user.is_active)
        return self.get_user(user.user_id)
