from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.access import ensure_active, ensure_admin
from ..common.validators import require_non_empty
from ..core.enums import AccountStatus, Role, TaskStatus
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self._tasks = tasks
        self._users = users

    def create_task(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        admin_user_id: int,
        title: str,
        description: str,
        assigned_to: Sequence[int],
    ) -> int:
        """Create a task; assignees that are not approved users are silently dropped."""
        ensure_admin(current_role, current_status)
        title = require_non_empty(title, "Title")
        description = require_non_empty(description, "Description")

        valid: list[int] = []
        for user_id in dict.fromkeys(int(u) for u in assigned_to):
            if self._users.get_approved(user_id):
                valid.append(user_id)

        task_id = self._tasks.create(
            title=title,
            description=description,
            created_by=int(admin_user_id),
            assigned_to=valid,
        )
        logger.info("Task %s created by %s for %d assignee(s)", task_id, admin_user_id, len(valid))
        return task_id

    def list_tasks(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[dict]:
        ensure_admin(current_role, current_status)

        status_filter: Optional[TaskStatus] = None
        if status and status != "all":
            try:
                status_filter = TaskStatus(status)
            except ValueError:
                raise ValidationError("Invalid task status")

        tasks = self._tasks.list_tasks(
            status=status_filter,
            created_from=datetime.combine(start_date, time.min) if start_date else None,
            created_to=datetime.combine(end_date, time.max) if end_date else None,
        )
        return [t.to_dict() for t in tasks]

    def get_my_tasks(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> list[dict]:
        ensure_active(current_role, current_status)

        creators: dict[int, str] = {}
        out: list[dict] = []
        for task in self._tasks.list_for_assignee(int(user_id)):
            if task.created_by not in creators:
                creator = self._users.get_by_id(task.created_by)
                creators[task.created_by] = creator.name if creator else "Unknown"
            row = task.to_dict()
            row["createdBy"] = creators[task.created_by]
            out.append(row)
        return out
