from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .core.constants import DEFAULT_AUTO_PUNCH_OUT_TIME
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .payroll.service import MonthlyAttendanceService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.service import ReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    holiday_service: HolidayService
    monthly_attendance_service: MonthlyAttendanceService
    request_service: RequestService
    task_service: TaskService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    clock: Clock = now_local,
    auto_punch_out_time: time = DEFAULT_AUTO_PUNCH_OUT_TIME,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    requests_repo = MySQLRequestRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    reports_repo = MySQLReportRepository(conn)

    return Container(
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            clock=clock,
            auto_punch_out_time=auto_punch_out_time,
        ),
        holiday_service=HolidayService(holidays_repo),
        monthly_attendance_service=MonthlyAttendanceService(attendance_repo, holidays_repo, users_repo),
        request_service=RequestService(requests_repo, attendance_repo, users_repo),
        task_service=TaskService(tasks_repo, users_repo),
        report_service=ReportService(reports_repo, tasks_repo, users_repo),
    )
