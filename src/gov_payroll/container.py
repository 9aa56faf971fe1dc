from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_TTL_MINUTES, SALARY_YEAR_MAX, SALARY_YEAR_MIN
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .positions.mysql_position_repository import MySQLPositionRepository
from .positions.repository import PositionRepository
from .positions.service import PositionService
from .reports.exporters import PdfRenderer
from .reports.service import ReportService
from .salary.mysql_salary_repository import MySQLSalaryRepository
from .salary.repository import SalaryRepository
from .salary.service import SalaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    positions_repo: PositionRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    overtime_repo: OvertimeRepository
    salaries_repo: SalaryRepository

    token_service: TokenService
    pdf_renderer: PdfRenderer

    auth_service: AuthService
    user_service: UserService
    position_service: PositionService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    overtime_service: OvertimeService
    salary_service: SalaryService
    report_service: ReportService


def wire_container(
    *,
    users_repo: UserRepository,
    positions_repo: PositionRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    overtime_repo: OvertimeRepository,
    salaries_repo: SalaryRepository,
    jwt_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    salary_year_min: int = SALARY_YEAR_MIN,
    salary_year_max: int = SALARY_YEAR_MAX,
    wkhtmltopdf_path: Optional[str] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories (MySQL ones or test fakes)."""

    token_service = TokenService(jwt_secret, ttl_minutes=token_ttl_minutes)

    return Container(
        conn=conn,
        users_repo=users_repo,
        positions_repo=positions_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        overtime_repo=overtime_repo,
        salaries_repo=salaries_repo,
        token_service=token_service,
        pdf_renderer=PdfRenderer(wkhtmltopdf_path=wkhtmltopdf_path),
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        position_service=PositionService(positions_repo),
        employee_service=EmployeeService(employees_repo, positions_repo, salaries_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        overtime_service=OvertimeService(overtime_repo, employees_repo),
        salary_service=SalaryService(
            salaries_repo,
            employees_repo,
            overtime_repo,
            year_min=salary_year_min,
            year_max=salary_year_max,
        ),
        report_service=ReportService(
            salaries_repo,
            employees_repo,
            year_min=salary_year_min,
            year_max=salary_year_max,
        ),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    salary_year_min: int = SALARY_YEAR_MIN,
    salary_year_max: int = SALARY_YEAR_MAX,
    wkhtmltopdf_path: Optional[str] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        positions_repo=MySQLPositionRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        overtime_repo=MySQLOvertimeRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        jwt_secret=jwt_secret,
        token_ttl_minutes=token_ttl_minutes,
        salary_year_min=salary_year_min,
        salary_year_max=salary_year_max,
        wkhtmltopdf_path=wkhtmltopdf_path,
        conn=conn,
    )
