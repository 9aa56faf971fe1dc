from datetime import datetime

import pytest

from gov_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def service(container):
    return container.attendance_service


def test_recap_without_rows_has_every_status(repos, service):
    eid = repos.employees.add("Budi")

    assert service.recap(eid, month=2, year=2024) == {"present": 0, "leave": 0, "sick": 0, "absent": 0}


def test_recap_counts_only_the_requested_month(repos, service):
    eid = repos.employees.add("Budi")
    service.record(employee_id=eid, work_date="2024-02-01")
    service.record(employee_id=eid, work_date="2024-02-02", status="sick")
    service.record(employee_id=eid, work_date="2024-02-29", status="sick")
    service.record(employee_id=eid, work_date="2024-03-01", status="absent")

    assert service.recap(eid, month=2, year=2024) == {"present": 1, "leave": 0, "sick": 2, "absent": 0}


def test_second_row_for_same_day_is_conflict(repos, service):
    eid = repos.employees.add("Budi")
    service.record(employee_id=eid, work_date="2024-02-01", time_in="08:00")

    with pytest.raises(ConflictError):
        service.record(employee_id=eid, work_date="2024-02-01", status="leave")


def test_record_defaults_to_present_and_normalizes_times(repos, service):
    eid = repos.employees.add("Budi")

    record = service.record(employee_id=eid, work_date="2024-02-01", time_in="08:00:00", time_out="16:30")

    assert record.status.value == "present"
    assert (record.time_in, record.time_out) == ("08:00", "16:30")
    assert record.employee_name == "Budi"


@pytest.mark.parametrize(
    "fields, error",
    [
        ({"employee_id": None, "work_date": "2024-02-01"}, ValidationError),
        ({"employee_id": 99, "work_date": "2024-02-01"}, NotFoundError),
        ({"work_date": "01-02-2024"}, ValidationError),
        ({"work_date": "2024-02-01", "status": "late"}, ValidationError),
        ({"work_date": "2024-02-01", "time_in": "8am"}, ValidationError),
    ],
)
def test_invalid_input(repos, service, fields, error):
    eid = repos.employees.add("Budi")
    fields = {"employee_id": eid, **fields}

    with pytest.raises(error):
        service.record(**fields)


def test_list_for_employee_defaults_to_current_month(monkeypatch, repos, service):
    monkeypatch.setattr(
        "gov_payroll.attendance.service.now_local", lambda: datetime(2024, 2, 15, 9, 0)
    )
    eid = repos.employees.add("Budi")
    service.record(employee_id=eid, work_date="2024-01-31")
    service.record(employee_id=eid, work_date="2024-02-10")

    rows = service.list_for_employee(eid)

    assert [r.work_date.isoformat() for r in rows] == ["2024-02-10"]
    assert len(service.list_for_employee(eid, start_date="2024-01-01")) == 2


def test_monthly_sheet_bundles_rows_and_recap(repos, service):
    eid = repos.employees.add("Budi")
    service.record(employee_id=eid, work_date="2024-02-01", status="leave")

    sheet = service.monthly_sheet(eid, month=2, year=2024)

    assert sheet.employee.name == "Budi"
    assert len(sheet.records) == 1
    assert sheet.recap["leave"] == 1
