from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.access import ensure_active, ensure_admin
from ..common.datetime_utils import iter_days
from ..common.validators import require_date_range, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import AccountStatus, AttendanceStatus, RequestCategory, RequestStatus, Role, WorkType
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import EmployeeRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)

# Attendance written for every day of an approved date-range request.
CASCADE_OUTCOME = {
    RequestCategory.WFH: (AttendanceStatus.PRESENT, WorkType.WFH),
    RequestCategory.LEAVE: (AttendanceStatus.ABSENT, WorkType.LEAVE),
}

DECISION_STATUSES = {RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.REPLIED}


class RequestService:
    def __init__(self, requests: RequestRepository, attendance: AttendanceRepository, users: UserRepository):
        self._requests = requests
        self._attendance = attendance
        self._users = users

    def create_request(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        category: RequestCategory,
        message: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> int:
        ensure_active(current_role, current_status)
        message = require_non_empty(message, "Message")

        if category.has_date_range:
            from_date, to_date = require_date_range(from_date, to_date)
        else:
            from_date = to_date = None

        request_id = self._requests.create(
            user_id=int(user_id),
            category=category,
            message=message,
            from_date=from_date,
            to_date=to_date,
        )
        logger.info("User %s created %s request %s", user_id, category.value, request_id)
        return request_id

    def list_my_requests(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> list[dict]:
        ensure_active(current_role, current_status)
        return [r.to_dict() for r in self._requests.list_for_user(int(user_id))]

    def list_requests(self, *, current_role: Role, current_status: AccountStatus) -> list[dict]:
        """All requests raised by approved employees, with the employee's name."""
        ensure_admin(current_role, current_status)
        employees = self._users.list_by_role_and_status(role=Role.EMPLOYEE, status=AccountStatus.APPROVED)
        names = {u.user_id: u.name for u in employees}

        out: list[dict] = []
        for r in self._requests.list_for_users(list(names), limit=DEFAULT_LIST_LIMIT):
            row = r.to_dict()
            row["employeeName"] = names.get(r.user_id, "Unknown")
            out.append(row)
        return out

    def update_request_status(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        request_id: int,
        status: RequestStatus,
        admin_reply: str,
    ) -> None:
        ensure_admin(current_role, current_status)
        if status not in DECISION_STATUSES:
            raise ValidationError("Status must be approved, rejected or replied")
        admin_reply = require_non_empty(admin_reply, "Admin reply")

        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Request not found")

        employee = self._users.get_by_id(req.user_id)
        if not employee or employee.role != Role.EMPLOYEE or not employee.is_approved:
            raise ValidationError("Request belongs to unapproved employee")

        if req.is_decided:
            raise ValidationError("Request has already been processed")

        # Claim the request before touching attendance; only one decision can win.
        if not self._requests.decide(request_id=req.request_id, status=status, admin_reply=admin_reply):
            raise ValidationError("Request has already been processed")

        if status == RequestStatus.APPROVED and req.category in CASCADE_OUTCOME:
            try:
                self.apply_leave_cascade(req)
            except Exception:
                logger.exception("Cascade failed for request %s, reopening it", req.request_id)
                self._requests.reopen(request_id=req.request_id, status=status)
                raise
        logger.info("Request %s (%s) -> %s", req.request_id, req.category.value, status.value)

    def apply_leave_cascade(self, req: EmployeeRequest) -> int:
        """Write one attendance record per day of an approved leave/wfh request.

        Idempotent: running it again for the same request yields the same records.
        Returns the number of days written.
        """
        outcome = CASCADE_OUTCOME.get(req.category)
        if outcome is None or not req.from_date or not req.to_date:
            return 0

        status, work_type = outcome
        days = list(iter_days(req.from_date, req.to_date))
        written = self._attendance.upsert_days(
            user_id=req.user_id,
            days=days,
            status=status,
            work_type=work_type,
        )
        logger.info(
            "Cascade for request %s: %d day(s) %s..%s as %s/%s",
            req.request_id,
            written,
            req.from_date.isoformat(),
            req.to_date.isoformat(),
            status.value,
            work_type.value,
        )
        return written
