from datetime import datetime, timedelta, timezone

import pytest

from gov_payroll.core.enums import Role
from gov_payroll.core.exceptions import AuthenticationError
from gov_payroll.users.model import User
from gov_payroll.users.tokens import TokenService

USER = User(
    user_id=5,
    username="fin",
    password_hash="x",
    name="Finance",
    email=None,
    role=Role.FINANCE,
    employee_id=3,
)


def test_issue_and_verify_round_trip():
    tokens = TokenService("s3cret", ttl_minutes=30)

    identity = tokens.verify(tokens.issue(USER))

    assert identity.user_id == 5
    assert identity.role == Role.FINANCE
    assert identity.employee_id == 3


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService("other").issue(USER)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("s3cret").verify(token)


def test_tampered_token_is_rejected():
    tokens = TokenService("s3cret")
    header, _, signature = tokens.issue(USER).split(".")
    admin = User(user_id=5, username="fin", password_hash="x", name="Finance", email=None, role=Role.ADMIN)
    forged_payload = TokenService("attacker").issue(admin).split(".")[1]

    with pytest.raises(AuthenticationError):
        tokens.verify(".".join([header, forged_payload, signature]))


def test_expired_token_is_rejected():
    tokens = TokenService("s3cret", ttl_minutes=1)
    token = tokens.issue(USER, now=datetime.now(timezone.utc) - timedelta(minutes=5))

    with pytest.raises(AuthenticationError):
        tokens.verify(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")
