import pytest

from gov_payroll.core.enums import Role


@pytest.mark.parametrize(
    "role, required, allowed",
    [
        (Role.ADMIN, Role.HR, True),
        (Role.HR, Role.FINANCE, True),
        (Role.FINANCE, Role.FINANCE, True),
        (Role.FINANCE, Role.HR, False),
        (Role.EMPLOYEE, Role.FINANCE, False),
        (Role.HR, Role.ADMIN, False),
        (Role.EMPLOYEE, Role.EMPLOYEE, True),
    ],
)
def test_has_permission_follows_levels(role, required, allowed):
    assert role.has_permission(required) is allowed


def test_levels_are_ordered():
    assert [r.level for r in (Role.EMPLOYEE, Role.FINANCE, Role.HR, Role.ADMIN)] == [1, 2, 3, 4]
