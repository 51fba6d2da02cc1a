from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.staffdesk.staffdesk.attendance.model import AttendanceRecord
from src.staffdesk.staffdesk.attendance.service import AttendanceService
from src.staffdesk.staffdesk.container import Container
from src.staffdesk.staffdesk.core.enums import (
    AccountStatus,
    AttendanceStatus,
    RequestStatus,
    Role,
    TaskStatus,
)
from src.staffdesk.staffdesk.holidays.model import Holiday
from src.staffdesk.staffdesk.holidays.service import HolidayService
from src.staffdesk.staffdesk.main import create_app
from src.staffdesk.staffdesk.payroll.service import MonthlyAttendanceService
from src.staffdesk.staffdesk.reports.model import WorkReport
from src.staffdesk.staffdesk.reports.service import ReportService
from src.staffdesk.staffdesk.requests.model import EmployeeRequest
from src.staffdesk.staffdesk.requests.service import RequestService
from src.staffdesk.staffdesk.tasks.model import Task
from src.staffdesk.staffdesk.tasks.service import TaskService
from src.staffdesk.staffdesk.users.model import User
from src.staffdesk.staffdesk.users.service import AuthService, UserService

PASSWORD = "secret123"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_approved(self, user_id: int) -> Optional[User]:
        user = self.get_by_id(user_id)
        return user if user and user.is_approved else None

    def list_by_role_and_status(self, *, role, status, name_contains=None):
        out = [u for u in self._users.values() if u.role == role and u.status == status]
        if name_contains:
            out = [u for u in out if name_contains.lower() in u.name.lower()]
        return sorted(out, key=lambda u: u.name)

    def create_user(self, *, email, password_hash, name, role, status, phone=None, address=None, position=None, salary=0.0):
        self._id += 1
        self._users[self._id] = User(
            user_id=self._id,
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            status=status,
            phone=phone,
            address=address,
            position=position,
            salary=float(salary),
            created_at=datetime(2025, 1, 1, 9, 0),
        )
        return self._id

    def _update(self, user_id: int, **changes) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, **changes)
        return True

    def update_profile(self, user_id, *, name, phone, address, position) -> bool:
        return self._update(user_id, name=name, phone=phone, address=address, position=position)

    def update_password(self, user_id, *, password_hash) -> bool:
        return self._update(user_id, password_hash=password_hash)

    def update_status(self, user_id, *, status) -> bool:
        return self._update(user_id, status=status)

    def update_salary(self, user_id, *, salary) -> bool:
        if not self.get_approved(user_id):
            return False
        return self._update(user_id, salary=salary)


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.fail_upserts = False

    def add(self, user_id: int, work_date: date, **fields) -> AttendanceRecord:
        self._id += 1
        record = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            status=fields.pop("status", AttendanceStatus.PRESENT),
            **fields,
        )
        self._by_user_date[(user_id, work_date)] = record
        return record

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_user_date.values())

    def get_for_user_and_date(self, user_id, work_date):
        return self._by_user_date.get((int(user_id), work_date))

    def list_for_user_between(self, user_id, *, start_date, end_date):
        out = [
            r for (uid, day), r in self._by_user_date.items() if uid == int(user_id) and start_date <= day <= end_date
        ]
        return sorted(out, key=lambda r: r.work_date, reverse=True)

    def list_for_date(self, work_date):
        return [r for (_, day), r in self._by_user_date.items() if day == work_date]

    def record_punch_in(self, *, user_id, work_date, punch_in):
        existing = self.get_for_user_and_date(user_id, work_date)
        if existing is None:
            self.add(int(user_id), work_date, status=AttendanceStatus.PRESENT, punch_in=punch_in)
        elif existing.punch_in is None:
            self._by_user_date[(existing.user_id, work_date)] = replace(
                existing, status=AttendanceStatus.PRESENT, punch_in=punch_in
            )

    def record_punch_out(self, *, attendance_id, punch_out, total_hours) -> bool:
        for key, r in self._by_user_date.items():
            if r.attendance_id == attendance_id and r.punch_out is None:
                self._by_user_date[key] = replace(r, punch_out=punch_out, total_hours=total_hours)
                return True
        return False

    def list_open_punches(self, work_date):
        return [r for r in self.list_for_date(work_date) if r.punch_in and r.punch_out is None]

    def upsert_days(self, *, user_id, days, status, work_type) -> int:
        days = list(days)
        if self.fail_upserts:
            raise RuntimeError("database unavailable")
        for day in days:
            existing = self.get_for_user_and_date(user_id, day)
            if existing:
                self._by_user_date[(existing.user_id, day)] = replace(existing, status=status, work_type=work_type)
            else:
                self.add(int(user_id), day, status=status, work_type=work_type)
        return len(days)


class InMemoryHolidays:
    def __init__(self):
        self._by_date: dict[date, Holiday] = {}

    def get_by_date(self, holiday_date):
        return self._by_date.get(holiday_date)

    def list_between(self, *, start_date, end_date):
        return sorted(
            (h for d, h in self._by_date.items() if start_date <= d <= end_date),
            key=lambda h: h.holiday_date,
        )

    def create(self, *, holiday_date, description=None) -> int:
        holiday_id = len(self._by_date) + 1
        self._by_date[holiday_date] = Holiday(holiday_id=holiday_id, holiday_date=holiday_date, description=description)
        return holiday_id


class InMemoryRequests:
    def __init__(self):
        self._requests: dict[int, EmployeeRequest] = {}

    def create(self, *, user_id, category, message, from_date=None, to_date=None) -> int:
        request_id = len(self._requests) + 1
        self._requests[request_id] = EmployeeRequest(
            request_id=request_id,
            user_id=int(user_id),
            category=category,
            message=message,
            status=RequestStatus.PENDING,
            from_date=from_date,
            to_date=to_date,
            created_at=datetime(2025, 3, 1, 10, request_id % 60),
        )
        return request_id

    def get_by_id(self, request_id):
        return self._requests.get(int(request_id))

    def list_for_user(self, user_id, *, limit=200):
        out = [r for r in self._requests.values() if r.user_id == int(user_id)]
        return sorted(out, key=lambda r: r.request_id, reverse=True)[:limit]

    def list_for_users(self, user_ids, *, limit=500):
        ids = set(user_ids)
        out = [r for r in self._requests.values() if r.user_id in ids]
        return sorted(out, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id, status, admin_reply) -> bool:
        req = self._requests.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._requests[req.request_id] = replace(req, status=status, admin_reply=admin_reply)
        return True

    def reopen(self, *, request_id, status) -> bool:
        req = self._requests.get(int(request_id))
        if not req or req.status != status:
            return False
        self._requests[req.request_id] = replace(req, status=RequestStatus.PENDING, admin_reply=None)
        return True


class InMemoryTasks:
    def __init__(self):
        self._tasks: dict[int, Task] = {}

    def create(self, *, title, description, created_by, assigned_to) -> int:
        task_id = len(self._tasks) + 1
        self._tasks[task_id] = Task(
            task_id=task_id,
            title=title,
            description=description,
            created_by=int(created_by),
            status=TaskStatus.ONGOING,
            assigned_to=tuple(assigned_to),
            created_at=datetime(2025, 3, task_id, 9, 0),
        )
        return task_id

    def get_assigned(self, *, task_id, user_id):
        task = self._tasks.get(int(task_id))
        return task if task and int(user_id) in task.assigned_to else None

    def list_tasks(self, *, status=None, created_from=None, created_to=None):
        out = list(self._tasks.values())
        if status is not None:
            out = [t for t in out if t.status == status]
        if created_from is not None:
            out = [t for t in out if t.created_at >= created_from]
        if created_to is not None:
            out = [t for t in out if t.created_at <= created_to]
        return sorted(out, key=lambda t: t.created_at, reverse=True)

    def list_for_assignee(self, user_id):
        return [t for t in self.list_tasks() if int(user_id) in t.assigned_to]

    def update_status(self, task_id, *, status) -> bool:
        task = self._tasks.get(int(task_id))
        if not task:
            return False
        self._tasks[task.task_id] = replace(task, status=status)
        return True


class InMemoryReports:
    def __init__(self):
        self._reports: list[WorkReport] = []

    def create(self, *, user_id, summary, status, task_id=None, task_title=None) -> int:
        report_id = len(self._reports) + 1
        self._reports.append(
            WorkReport(
                report_id=report_id,
                user_id=int(user_id),
                summary=summary,
                status=status,
                task_id=task_id,
                task_title=task_title,
                created_at=datetime(2025, 3, 10, 17, report_id % 60),
            )
        )
        return report_id

    def list_for_users(self, user_ids, *, status=None):
        ids = set(user_ids)
        out = [r for r in self._reports if r.user_id in ids and (status is None or r.status == status)]
        return sorted(out, key=lambda r: r.report_id, reverse=True)


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2025, 3, 12, 9, 30)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    pw = generate_password_hash(PASSWORD)
    repo.create_user(
        email="admin@staffdesk.local", password_hash=pw, name="Admin", role=Role.ADMIN, status=AccountStatus.APPROVED
    )
    repo.create_user(
        email="asha@staffdesk.local",
        password_hash=pw,
        name="Asha Rao",
        role=Role.EMPLOYEE,
        status=AccountStatus.APPROVED,
        position="Developer",
        salary=30000,
    )
    repo.create_user(
        email="ben@staffdesk.local",
        password_hash=pw,
        name="Ben Cole",
        role=Role.EMPLOYEE,
        status=AccountStatus.APPROVED,
        salary=31000,
    )
    repo.create_user(
        email="priya@staffdesk.local", password_hash=pw, name="Priya Nair", role=Role.EMPLOYEE, status=AccountStatus.PENDING
    )
    repo.create_user(
        email="omar@staffdesk.local", password_hash=pw, name="Omar Haddad", role=Role.EMPLOYEE, status=AccountStatus.REJECTED
    )
    return repo


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def holidays_repo() -> InMemoryHolidays:
    return InMemoryHolidays()


@pytest.fixture
def requests_repo() -> InMemoryRequests:
    return InMemoryRequests()


@pytest.fixture
def tasks_repo() -> InMemoryTasks:
    return InMemoryTasks()


@pytest.fixture
def reports_repo() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def container(users_repo, attendance_repo, holidays_repo, requests_repo, tasks_repo, reports_repo, clock) -> Container:
    return Container(
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, clock=clock),
        holiday_service=HolidayService(holidays_repo),
        monthly_attendance_service=MonthlyAttendanceService(attendance_repo, holidays_repo, users_repo),
        request_service=RequestService(requests_repo, attendance_repo, users_repo),
        task_service=TaskService(tasks_repo, users_repo),
        report_service=ReportService(reports_repo, tasks_repo, users_repo),
    )


@pytest.fixture
def app(container):
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()
