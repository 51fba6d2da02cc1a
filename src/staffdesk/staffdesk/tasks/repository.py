from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def create(self, *, title: str, description: str, created_by: int, assigned_to: Sequence[int]) -> int:
        raise NotImplementedError

    def get_assigned(self, *, task_id: int, user_id: int) -> Optional[Task]:
        """The task, only if it is assigned to user_id."""

        raise NotImplementedError

    def list_tasks(
        self,
        *,
        status: Optional[TaskStatus] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Sequence[Task]:
        raise NotImplementedError

    def list_for_assignee(self, user_id: int) -> Sequence[Task]:
        """Newest first."""

        raise NotImplementedError

    def update_status(self, task_id: int, *, status: TaskStatus) -> bool:
        raise NotImplementedError
