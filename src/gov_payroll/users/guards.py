from __future__ import annotations

from functools import wraps

from flask import Flask, g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import AuthenticatedUser
from .tokens import TokenService


def install_token_auth(app: Flask, tokens: TokenService) -> None:
    """Resolve the bearer token (if any) once per request into `g.current_user`."""

    @app.before_request
    def load_current_user():
        g.current_user = None
        g.auth_error = None

        header = request.headers.get("Authorization", "")
        if not header:
            return None

        token = header[7:] if header.startswith("Bearer ") else header
        try:
            g.current_user = tokens.verify(token.strip())
        except AuthenticationError as e:
            g.auth_error = str(e)
        return None


def current_user() -> AuthenticatedUser:
    user = g.get("current_user")
    if user is None:
        raise AuthenticationError(g.get("auth_error") or "Authorization header required")
    return user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user()
        return view(*args, **kwargs)

    return wrapper


def role_required(required: Role):
    """Allow the view for `required` and every role above it."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if not user.role.has_permission(required):
                raise AuthorizationError("You do not have permission for this action")
            return view(*args, **kwargs)

        return wrapper

    return decorator
