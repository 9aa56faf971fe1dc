from datetime import date

import pytest

from gov_payroll.core.enums import OvertimeStatus, Role


@pytest.fixture
def admin(make_user):
    return make_user("admin", role=Role.ADMIN, password="admin123")


def test_health_needs_no_token(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_login_never_exposes_password_hash(client, admin):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["token"]
    assert body["user"]["username"] == "admin"
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


def test_bad_login_is_401(client, admin):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid username or password"}


def test_protected_route_without_token_is_401(client):
    resp = client.get("/api/employees")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authorization header required"}


def test_garbage_token_is_401(client):
    resp = client.get("/api/employees", headers={"Authorization": "Bearer not-a-token"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


def test_lower_role_is_403(client, make_user, auth_header):
    clerk = make_user("clerk", role=Role.EMPLOYEE)

    resp = client.post("/api/positions", json={"name": "X", "base_pay": 1}, headers=auth_header(clerk))

    assert resp.status_code == 403


def test_self_delete_is_403(client, admin, auth_header):
    resp = client.delete(f"/api/auth/users/{admin}", headers=auth_header(admin))

    assert resp.status_code == 403
    assert resp.get_json() == {"error": "Cannot delete your own account"}


def test_user_listing_hides_hashes(client, admin, auth_header):
    resp = client.get("/api/auth/users", headers=auth_header(admin))

    assert resp.status_code == 200
    assert all("password_hash" not in u for u in resp.get_json())


def test_position_and_employee_flow(client, make_user, auth_header):
    hr = auth_header(make_user("hr1", role=Role.HR))

    resp = client.post(
        "/api/positions",
        json={"name": "Kepala Desa", "base_pay": 5000000, "position_allowance": 1000000, "overtime_rate": 50000},
        headers=hr,
    )
    assert resp.status_code == 201
    position = resp.get_json()
    assert position["base_pay"] == 5000000

    resp = client.post(
        "/api/employees",
        json={"nik": "3501001", "name": "Budi", "position_id": position["id"], "join_date": "2020-01-01"},
        headers=hr,
    )
    assert resp.status_code == 201
    employee = resp.get_json()
    assert employee["position"]["name"] == "Kepala Desa"
    assert employee["join_date"] == "2020-01-01"

    resp = client.post("/api/employees", json={"nik": "3501001", "name": "Other"}, headers=hr)
    assert resp.status_code == 409

    resp = client.get("/api/employees/search?q=bud", headers=hr)
    assert [e["nik"] for e in resp.get_json()] == ["3501001"]


def test_invalid_position_base_pay_is_400(client, make_user, auth_header):
    hr = auth_header(make_user("hr1", role=Role.HR))

    resp = client.post("/api/positions", json={"name": "X", "base_pay": 0}, headers=hr)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Base pay must be greater than 0"}


def test_generate_batch_and_duplicate_salary(client, repos, make_user, auth_header):
    finance = auth_header(make_user("fin", role=Role.FINANCE))
    eid = repos.employees.add("Budi")
    repos.employees.add("Citra")

    resp = client.post(
        "/api/salaries/generate-batch",
        json={"month": 6, "year": 2024, "transport_allowance": 100000, "meal_allowance": 50000},
        headers=finance,
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["created"] == 2
    assert body["skipped"] == []
    assert body["period"] == {"month": 6, "year": 2024}

    resp = client.post("/api/salaries", json={"employee_id": eid, "month": 6, "year": 2024}, headers=finance)
    assert resp.status_code == 409
    assert resp.get_json() == {"error": "Salary already exists for this period"}


def test_salary_rejects_bad_month(client, repos, make_user, auth_header):
    finance = auth_header(make_user("fin", role=Role.FINANCE))
    eid = repos.employees.add("Budi")

    resp = client.post("/api/salaries", json={"employee_id": eid, "month": 13, "year": 2024}, headers=finance)

    assert resp.status_code == 400


def test_employee_sees_only_own_slips(client, repos, container, make_user, auth_header):
    own = repos.employees.add("Budi")
    other = repos.employees.add("Citra")
    mine = container.salary_service.create_salary(employee_id=own, month=1, year=2024, base_pay=100)
    theirs = container.salary_service.create_salary(employee_id=other, month=1, year=2024, base_pay=200)
    headers = auth_header(make_user("budi", role=Role.EMPLOYEE, employee_id=own))

    resp = client.get("/api/salaries/my-slips", headers=headers)
    assert [s["id"] for s in resp.get_json()] == [mine.salary_id]
    assert resp.get_json()[0]["total"] == 100.0

    assert client.get(f"/api/salaries/slip/{mine.salary_id}", headers=headers).status_code == 200
    assert client.get(f"/api/salaries/slip/{theirs.salary_id}", headers=headers).status_code == 403
    assert client.get("/api/salaries", headers=headers).status_code == 403


def test_overtime_approval_and_recalculation(client, repos, make_user, auth_header):
    hr = auth_header(make_user("hr1", role=Role.HR))
    eid = repos.employees.add("Budi")
    oid = repos.overtime.add(eid, work_date=date(2024, 5, 3), amount="0", rate="0")

    resp = client.patch(f"/api/overtime/{oid}/approve", json={"status": "approved", "approver_id": 0}, headers=hr)
    assert resp.status_code == 200
    overtime = resp.get_json()["overtime"]
    assert overtime["status"] == OvertimeStatus.APPROVED.value
    assert overtime["approved_by"] is None

    assert client.post("/api/overtime/recalculate-rates", headers=hr).status_code == 403

    admin = auth_header(make_user("admin", role=Role.ADMIN))
    resp = client.post("/api/overtime/recalculate-rates", headers=admin)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Recalculation completed", "updated": 1, "total": 1}


def test_attendance_recap_has_every_status(client, repos, make_user, auth_header):
    headers = auth_header(make_user("hr1", role=Role.HR))
    eid = repos.employees.add("Budi")

    resp = client.get(f"/api/attendance/recap/{eid}?month=2&year=2024", headers=headers)

    assert resp.get_json() == {"present": 0, "leave": 0, "sick": 0, "absent": 0}


def test_report_excel_download(client, repos, container, make_user, auth_header):
    finance = auth_header(make_user("fin", role=Role.FINANCE))
    eid = repos.employees.add("Budi")
    container.salary_service.create_salary(employee_id=eid, month=6, year=2024, base_pay=100)

    resp = client.get("/api/reports/export/excel?month=6&year=2024", headers=finance)

    assert resp.status_code == 200
    assert "Laporan_Gaji_Juni_2024.xlsx" in resp.headers["Content-Disposition"]
    assert resp.data[:2] == b"PK"


def test_recap_report(client, repos, container, make_user, auth_header):
    finance = auth_header(make_user("fin", role=Role.FINANCE))
    eid = repos.employees.add("Budi")
    container.salary_service.create_salary(
        employee_id=eid, month=6, year=2024, base_pay=100, meal_allowance=10, deductions=5
    )

    body = client.get("/api/reports/recap?month=6&year=2024", headers=finance).get_json()

    assert body["total_employees"] == 1
    assert body["total_allowances"] == 10.0
    assert body["total_salary"] == 105.0
    assert (body["pending_count"], body["paid_count"]) == (1, 0)


def test_cors_preflight(client):
    resp = client.options("/api/employees", headers={"Origin": "http://localhost:5173"})

    assert resp.status_code == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize("flag", ["false", 0, None])
def test_user_active_flag_must_be_boolean(client, repos, admin, make_user, auth_header, flag):
    clerk = make_user("clerk", role=Role.EMPLOYEE)

    resp = client.put(f"/api/auth/users/{clerk}", json={"is_active": flag}, headers=auth_header(admin))

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "is_active must be true or false"}
    assert repos.users.get_by_id(clerk).is_active is True


def test_user_can_be_deactivated_with_false(client, repos, admin, make_user, auth_header):
    clerk = make_user("clerk", role=Role.EMPLOYEE)

    resp = client.put(f"/api/auth/users/{clerk}", json={"is_active": False}, headers=auth_header(admin))

    assert resp.status_code == 200
    assert repos.users.get_by_id(clerk).is_active is False
