from __future__ import annotations

import logging
from typing import Optional

from ..common.access import ensure_active, ensure_admin
from ..common.validators import optional_text, require_non_empty
from ..core.enums import AccountStatus, Role, TaskStatus
from ..core.exceptions import NotFoundError
from ..tasks.repository import TaskRepository
from ..users.repository import UserRepository
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, reports: ReportRepository, tasks: TaskRepository, users: UserRepository):
        self._reports = reports
        self._tasks = tasks
        self._users = users

    def submit_report(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        summary: str,
        status: TaskStatus,
        task_id: Optional[int] = None,
        task_title: Optional[str] = None,
    ) -> int:
        """Report progress. A report on an assigned task also moves the task to the report status."""
        ensure_active(current_role, current_status)
        summary = require_non_empty(summary, "Summary")

        title = optional_text(task_title)
        if task_id:
            task = self._tasks.get_assigned(task_id=int(task_id), user_id=int(user_id))
            if not task:
                raise NotFoundError("Task not found or not assigned to you")
            title = task.title
            self._tasks.update_status(task.task_id, status=status)

        report_id = self._reports.create(
            user_id=int(user_id),
            summary=summary,
            status=status,
            task_id=int(task_id) if task_id else None,
            task_title=title,
        )
        logger.info("User %s submitted report %s (task=%s, status=%s)", user_id, report_id, task_id, status.value)
        return report_id

    def list_reports(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        search_name: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> list[dict]:
        ensure_admin(current_role, current_status)
        employees = self._users.list_by_role_and_status(
            role=Role.EMPLOYEE,
            status=AccountStatus.APPROVED,
            name_contains=optional_text(search_name),
        )
        names = {u.user_id: u.name for u in employees}

        out: list[dict] = []
        for r in self._reports.list_for_users(list(names), status=status):
            row = r.to_dict()
            row["employeeName"] = names.get(r.user_id, "Unknown")
            out.append(row)
        return out
