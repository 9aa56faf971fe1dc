from decimal import Decimal

import pytest

from gov_payroll.core.enums import EmployeeStatus
from gov_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_position_requires_positive_base_pay(container):
    with pytest.raises(ValidationError, match="Base pay must be greater than 0"):
        container.position_service.create_position(name="Staf", base_pay=0)
    with pytest.raises(ValidationError, match="Overtime rate must not be negative"):
        container.position_service.create_position(name="Staf", base_pay=1, overtime_rate=-5)


def test_position_amounts_are_stored_as_money(container):
    position = container.position_service.create_position(name="Staf", base_pay="2500000.5")

    assert position.base_pay == Decimal("2500000.50")
    assert position.overtime_rate == Decimal("0.00")


def test_deleted_position_leaves_employee_without_position(repos, container):
    position = container.position_service.create_position(name="Staf", base_pay=1000)
    eid = repos.employees.add("Budi", position_id=position.position_id)

    container.position_service.delete_position(position.position_id)

    assert container.employee_service.get_employee(eid).position is None
    with pytest.raises(NotFoundError):
        container.position_service.get_position(position.position_id)


def test_employee_requires_existing_position(container):
    with pytest.raises(ValidationError, match="Position does not exist"):
        container.employee_service.create_employee(nik="1", name="Budi", position_id=5)


def test_employee_zero_position_means_none(container):
    employee = container.employee_service.create_employee(nik="1", name="Budi", position_id=0)

    assert employee.position_id is None
    assert employee.status == EmployeeStatus.ACTIVE


def test_employee_nik_length_is_limited(container):
    with pytest.raises(ValidationError):
        container.employee_service.create_employee(nik="1" * 21, name="Budi")


def test_employee_with_salary_cannot_be_deleted(repos, container):
    eid = repos.employees.add("Budi")
    container.salary_service.create_salary(employee_id=eid, month=1, year=2024, base_pay=100)

    with pytest.raises(ConflictError):
        container.employee_service.delete_employee(eid)


def test_filter_by_status(repos, container):
    repos.employees.add("Budi")
    repos.employees.add("Citra", status=EmployeeStatus.INACTIVE)

    assert [e.name for e in container.employee_service.list_by_status("inactive")] == ["Citra"]
    with pytest.raises(ValidationError, match="Use 'active' or 'inactive'"):
        container.employee_service.list_by_status("retired")


def test_empty_search_returns_everyone(repos, container):
    repos.employees.add("Budi")
    repos.employees.add("Citra")

    assert len(container.employee_service.search("  ")) == 2
    assert [e.name for e in container.employee_service.search("cit")] == ["Citra"]


def test_position_amounts_are_bounded_by_column_size(container):
    with pytest.raises(ValidationError, match="Base pay must not exceed"):
        container.position_service.create_position(name="Staf", base_pay="1e20")
    with pytest.raises(ValidationError, match="Overtime rate must not exceed"):
        container.position_service.create_position(name="Staf", base_pay=1, overtime_rate="10000000000000")
