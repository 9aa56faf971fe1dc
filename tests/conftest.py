from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from gov_payroll.attendance.model import AttendanceEntry, AttendanceRecord
from gov_payroll.container import wire_container
from gov_payroll.core.enums import EmployeeStatus, OvertimeStatus, Role, SalaryStatus
from gov_payroll.core.exceptions import ConflictError
from gov_payroll.employees.model import Employee, EmployeeInput
from gov_payroll.overtime.model import OvertimeDraft, OvertimeEntry
from gov_payroll.positions.model import Position
from gov_payroll.salary.model import Salary, SalaryDraft
from gov_payroll.users.model import User


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, User] = {}

    def get_by_id(self, user_id):
        return self._rows.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self._rows.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._rows.values(), key=lambda u: u.username)

    def create_user(self, *, username, password_hash, name, email, role, employee_id):
        if self.get_by_username(username):
            raise ConflictError("Username already exists")
        uid = self._next_id
        self._next_id += 1
        self._rows[uid] = User(
            user_id=uid,
            username=username,
            password_hash=password_hash,
            name=name,
            email=email,
            role=role,
            employee_id=employee_id,
        )
        return uid

    def update_user(self, user_id, *, username, name, email, role, employee_id, is_active):
        user = self._rows.get(int(user_id))
        if not user:
            return False
        self._rows[user.user_id] = replace(
            user, username=username, name=name, email=email, role=role, employee_id=employee_id, is_active=is_active
        )
        return True

    def update_password(self, user_id, password_hash):
        user = self._rows.get(int(user_id))
        if not user:
            return False
        self._rows[user.user_id] = replace(user, password_hash=password_hash)
        return True

    def set_active(self, user_id, *, is_active):
        user = self._rows.get(int(user_id))
        if not user:
            return False
        self._rows[user.user_id] = replace(user, is_active=is_active)
        return True

    def delete_by_id(self, user_id):
        return self._rows.pop(int(user_id), None) is not None


class FakePositionsRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, Position] = {}

    def list_all(self):
        return sorted(self._rows.values(), key=lambda p: p.name)

    def get_by_id(self, position_id):
        return self._rows.get(int(position_id))

    def create(self, *, name, base_pay, position_allowance, overtime_rate):
        pid = self._next_id
        self._next_id += 1
        self._rows[pid] = Position(pid, name, Decimal(base_pay), Decimal(position_allowance), Decimal(overtime_rate))
        return pid

    def update(self, position_id, *, name, base_pay, position_allowance, overtime_rate):
        if int(position_id) not in self._rows:
            return False
        self._rows[int(position_id)] = Position(int(position_id), name, base_pay, position_allowance, overtime_rate)
        return True

    def delete_by_id(self, position_id):
        return self._rows.pop(int(position_id), None) is not None


class FakeEmployeesRepo:
    def __init__(self, positions: FakePositionsRepo):
        self._positions = positions
        self._next_id = 1
        self._rows: dict[int, EmployeeInput] = {}

    def _employee(self, employee_id, data):
        position = self._positions.get_by_id(data.position_id) if data.position_id else None
        return Employee(
            employee_id=employee_id,
            nik=data.nik,
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            position_id=data.position_id if position else None,
            join_date=data.join_date,
            status=data.status,
            position=position,
        )

    def list_all(self):
        return sorted((self._employee(i, d) for i, d in self._rows.items()), key=lambda e: e.name)

    def get_by_id(self, employee_id):
        data = self._rows.get(int(employee_id))
        return self._employee(int(employee_id), data) if data else None

    def search(self, query):
        q = query.lower()
        return [
            e for e in self.list_all()
            if q in e.nik.lower() or q in e.name.lower() or q in (e.email or "").lower()
        ]

    def list_by_status(self, status):
        return [e for e in self.list_all() if e.status == status]

    def create(self, data):
        if any(d.nik == data.nik for d in self._rows.values()):
            raise ConflictError("NIK already registered")
        eid = self._next_id
        self._next_id += 1
        self._rows[eid] = data
        return eid

    def update(self, employee_id, data):
        if int(employee_id) not in self._rows:
            return False
        self._rows[int(employee_id)] = data
        return True

    def delete_by_id(self, employee_id):
        return self._rows.pop(int(employee_id), None) is not None

    def add(self, name, *, nik=None, position_id=None, status=EmployeeStatus.ACTIVE):
        return self.create(
            EmployeeInput(
                nik=nik or f"NIK{self._next_id:04d}",
                name=name,
                email=None,
                phone=None,
                address=None,
                position_id=position_id,
                join_date=date(2020, 1, 1),
                status=status,
            )
        )


class FakeAttendanceRepo:
    def __init__(self, employees: FakeEmployeesRepo):
        self._employees = employees
        self._next_id = 1
        self._rows: dict[int, AttendanceEntry] = {}

    def _record(self, attendance_id, entry):
        employee = self._employees.get_by_id(entry.employee_id)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=entry.employee_id,
            work_date=entry.work_date,
            time_in=entry.time_in,
            time_out=entry.time_out,
            status=entry.status,
            note=entry.note,
            employee_name=employee.name if employee else None,
            employee_nik=employee.nik if employee else None,
        )

    def _taken(self, entry, *, exclude=None):
        return any(
            i != exclude and e.employee_id == entry.employee_id and e.work_date == entry.work_date
            for i, e in self._rows.items()
        )

    def list_all(self):
        return sorted((self._record(i, e) for i, e in self._rows.items()), key=lambda r: r.work_date, reverse=True)

    def get_by_id(self, attendance_id):
        entry = self._rows.get(int(attendance_id))
        return self._record(int(attendance_id), entry) if entry else None

    def list_for_employee(self, employee_id, *, start_date, end_date):
        return [
            r for r in self.list_all()
            if r.employee_id == employee_id and start_date <= r.work_date <= end_date
        ]

    def count_by_status(self, employee_id, *, start_date, end_date):
        return Counter(r.status for r in self.list_for_employee(employee_id, start_date=start_date, end_date=end_date))

    def create(self, entry):
        if self._taken(entry):
            raise ConflictError("Attendance already recorded for this employee and date")
        aid = self._next_id
        self._next_id += 1
        self._rows[aid] = entry
        return aid

    def update(self, attendance_id, entry):
        if self._taken(entry, exclude=int(attendance_id)):
            raise ConflictError("Attendance already recorded for this employee and date")
        self._rows[int(attendance_id)] = entry
        return True

    def delete_by_id(self, attendance_id):
        return self._rows.pop(int(attendance_id), None) is not None


class FakeOvertimeRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, OvertimeEntry] = {}
        self.fail_sums = False

    def list_all(self):
        return list(self._rows.values())

    def get_by_id(self, overtime_id):
        return self._rows.get(int(overtime_id))

    def list_for_employee(self, employee_id):
        return [o for o in self._rows.values() if o.employee_id == employee_id]

    def list_for_period(self, *, month, year):
        return [o for o in self._rows.values() if o.work_date.month == month and o.work_date.year == year]

    def list_zero_rate(self):
        return [o for o in self._rows.values() if o.hourly_rate == 0]

    def sum_approved_amount(self, employee_id, *, month, year):
        if self.fail_sums:
            raise RuntimeError("database unavailable")
        return sum(
            (
                o.amount for o in self.list_for_period(month=month, year=year)
                if o.employee_id == employee_id and o.status == OvertimeStatus.APPROVED
            ),
            Decimal("0"),
        )

    def create(self, draft: OvertimeDraft):
        oid = self._next_id
        self._next_id += 1
        self._rows[oid] = OvertimeEntry(
            overtime_id=oid,
            employee_id=draft.employee_id,
            work_date=draft.work_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            total_hours=draft.total_hours,
            hourly_rate=draft.hourly_rate,
            amount=draft.amount,
            description=draft.description,
            status=draft.status,
        )
        return oid

    def update(self, overtime_id, draft):
        entry = self._rows[int(overtime_id)]
        self._rows[entry.overtime_id] = replace(
            entry,
            work_date=draft.work_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            total_hours=draft.total_hours,
            hourly_rate=draft.hourly_rate,
            amount=draft.amount,
            description=draft.description,
            status=draft.status,
        )
        return True

    def set_status(self, overtime_id, *, status, approved_by):
        entry = self._rows[int(overtime_id)]
        self._rows[entry.overtime_id] = replace(entry, status=status, approved_by=approved_by)
        return True

    def set_rate(self, overtime_id, *, hourly_rate, amount):
        entry = self._rows[int(overtime_id)]
        self._rows[entry.overtime_id] = replace(entry, hourly_rate=hourly_rate, amount=amount)
        return True

    def delete_by_id(self, overtime_id):
        return self._rows.pop(int(overtime_id), None) is not None

    def add(self, employee_id, *, work_date, amount, status=OvertimeStatus.PENDING, hours="1", rate=None):
        oid = self.create(
            OvertimeDraft(
                employee_id=employee_id,
                work_date=work_date,
                start_time=None,
                end_time=None,
                total_hours=Decimal(hours),
                hourly_rate=Decimal(rate if rate is not None else amount),
                amount=Decimal(amount),
                description=None,
                status=OvertimeStatus.PENDING,
            )
        )
        if status != OvertimeStatus.PENDING:
            self.set_status(oid, status=status, approved_by=None)
        return oid


class FakeSalariesRepo:
    def __init__(self, employees: FakeEmployeesRepo):
        self._employees = employees
        self._next_id = 1
        self._rows: dict[int, SalaryDraft] = {}

    def _salary(self, salary_id, draft):
        employee = self._employees.get_by_id(draft.employee_id)
        return Salary(
            salary_id=salary_id,
            employee_id=draft.employee_id,
            month=draft.month,
            year=draft.year,
            components=draft.components,
            total=draft.total,
            status=draft.status,
            employee_name=employee.name if employee else None,
            employee_nik=employee.nik if employee else None,
            position_name=employee.position.name if employee and employee.position else "-",
        )

    def _all(self):
        return [self._salary(i, d) for i, d in self._rows.items()]

    def list_all(self):
        return sorted(self._all(), key=lambda s: (s.year, s.month), reverse=True)

    def get_by_id(self, salary_id):
        draft = self._rows.get(int(salary_id))
        return self._salary(int(salary_id), draft) if draft else None

    def list_for_period(self, *, month, year):
        rows = [s for s in self._all() if s.month == month and s.year == year]
        return sorted(rows, key=lambda s: s.employee_name or "")

    def list_for_employee(self, employee_id, *, month=None, year=None):
        return [
            s for s in self.list_all()
            if s.employee_id == employee_id
            and (month is None or s.month == month)
            and (year is None or s.year == year)
        ]

    def exists_for_period(self, employee_id, *, month, year):
        return any(
            d.employee_id == employee_id and d.month == month and d.year == year for d in self._rows.values()
        )

    def count_for_employee(self, employee_id):
        return sum(1 for d in self._rows.values() if d.employee_id == employee_id)

    def create(self, draft):
        if self.exists_for_period(draft.employee_id, month=draft.month, year=draft.year):
            raise ConflictError("Salary already exists for this period")
        sid = self._next_id
        self._next_id += 1
        self._rows[sid] = draft
        return sid

    def create_many(self, drafts):
        keys = [(d.employee_id, d.month, d.year) for d in drafts]
        if len(set(keys)) != len(keys) or any(
            self.exists_for_period(e, month=m, year=y) for e, m, y in keys
        ):
            raise ConflictError("Salary already exists for this period")
        for draft in drafts:
            self.create(draft)
        return len(drafts)

    def update(self, salary_id, draft):
        if any(
            i != int(salary_id)
            and (d.employee_id, d.month, d.year) == (draft.employee_id, draft.month, draft.year)
            for i, d in self._rows.items()
        ):
            raise ConflictError("Salary already exists for this period")
        self._rows[int(salary_id)] = draft
        return True

    def set_status(self, salary_id, status: SalaryStatus):
        self._rows[int(salary_id)] = replace(self._rows[int(salary_id)], status=status)
        return True

    def delete_by_id(self, salary_id):
        return self._rows.pop(int(salary_id), None) is not None


@pytest.fixture
def repos():
    positions = FakePositionsRepo()
    employees = FakeEmployeesRepo(positions)
    return SimpleNamespace(
        users=FakeUsersRepo(),
        positions=positions,
        employees=employees,
        attendance=FakeAttendanceRepo(employees),
        overtime=FakeOvertimeRepo(),
        salaries=FakeSalariesRepo(employees),
    )


@pytest.fixture
def container(repos):
    return wire_container(
        users_repo=repos.users,
        positions_repo=repos.positions,
        employees_repo=repos.employees,
        attendance_repo=repos.attendance,
        overtime_repo=repos.overtime,
        salaries_repo=repos.salaries,
        jwt_secret="test-jwt-secret",
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from gov_payroll.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(repos):
    def _make(username="admin", *, role=Role.ADMIN, password="secret123", employee_id=None, name=None):
        return repos.users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=name or username.title(),
            email=None,
            role=role,
            employee_id=employee_id,
        )

    return _make


@pytest.fixture
def auth_header(repos, container):
    def _header(user_id):
        token = container.token_service.issue(repos.users.get_by_id(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _header
