from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.access import ensure_active, ensure_admin
from ..common.datetime_utils import Clock, hours_between, now_local
from ..core.constants import DEFAULT_AUTO_PUNCH_OUT_TIME
from ..core.enums import AccountStatus, Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch ledger use cases: punching in/out and the day views built on it."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Clock = now_local,
        auto_punch_out_time: time = DEFAULT_AUTO_PUNCH_OUT_TIME,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock
        self._auto_punch_out_time = auto_punch_out_time

    def punch_in(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> datetime:
        ensure_active(current_role, current_status)
        now = self._clock()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(int(user_id), today)
        if existing and existing.punch_in:
            raise ValidationError("Already punched in today")

        self._attendance.record_punch_in(user_id=int(user_id), work_date=today, punch_in=now)
        logger.info("User %s punched in at %s", user_id, now.isoformat(timespec="seconds"))
        return now

    def punch_out(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> tuple[datetime, float]:
        ensure_active(current_role, current_status)
        now = self._clock()
        today = now.date()

        record = self._attendance.get_for_user_and_date(int(user_id), today)
        if not record or not record.punch_in:
            raise ValidationError("No punch in record found")
        if record.punch_out is not None:
            raise ValidationError("Already punched out today")

        total_hours = hours_between(record.punch_in, now)
        if not self._attendance.record_punch_out(
            attendance_id=record.attendance_id, punch_out=now, total_hours=total_hours
        ):
            # Lost a race with another punch-out for the same day.
            raise ValidationError("Already punched out today")

        logger.info("User %s punched out at %s (%.2f h)", user_id, now.isoformat(timespec="seconds"), total_hours)
        return now, total_hours

    def get_today_attendance(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> Optional[dict]:
        ensure_active(current_role, current_status)
        record = self._attendance.get_for_user_and_date(int(user_id), self._clock().date())
        return record.to_dict() if record else None

    def get_today_overview(self, *, current_role: Role, current_status: AccountStatus) -> dict:
        ensure_admin(current_role, current_status)
        today = self._clock().date()

        employees = self._users.list_by_role_and_status(role=Role.EMPLOYEE, status=AccountStatus.APPROVED)
        employee_ids = {u.user_id for u in employees}
        present = sum(
            1 for r in self._attendance.list_for_date(today) if r.is_present and r.user_id in employee_ids
        )
        return {
            "totalEmployees": len(employees),
            "presentToday": present,
            "absentToday": len(employees) - present,
        }

    def get_today_attendance_list(self, *, current_role: Role, current_status: AccountStatus) -> dict:
        ensure_admin(current_role, current_status)
        today = self._clock().date()

        employees = self._users.list_by_role_and_status(role=Role.EMPLOYEE, status=AccountStatus.APPROVED)
        by_user = {r.user_id: r for r in self._attendance.list_for_date(today)}

        present: list[dict] = []
        absent: list[dict] = []
        for emp in employees:
            record = by_user.get(emp.user_id)
            if record and record.is_present:
                present.append(
                    {
                        "name": emp.name,
                        "punchIn": record.punch_in.isoformat() if record.punch_in else None,
                        "workType": record.to_dict()["workType"],
                    }
                )
            else:
                absent.append({"name": emp.name})
        return {"present": present, "absent": absent}

    def close_open_punches(self, work_date: Optional[date] = None) -> int:
        """Punch out everyone still punched in on work_date at the configured closing time.

        Defaults to the day before today, so a nightly run closes the previous day.
        """
        if work_date is None:
            work_date = self._clock().date() - timedelta(days=1)

        closing = datetime.combine(work_date, self._auto_punch_out_time)
        closed = 0
        for record in self._attendance.list_open_punches(work_date):
            punch_out = max(closing, record.punch_in)
            if self._attendance.record_punch_out(
                attendance_id=record.attendance_id,
                punch_out=punch_out,
                total_hours=hours_between(record.punch_in, punch_out),
            ):
                closed += 1

        logger.info("Auto punch-out for %s closed %d open record(s)", work_date.isoformat(), closed)
        return closed
