from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import WorkReport


class ReportRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        summary: str,
        status: TaskStatus,
        task_id: Optional[int] = None,
        task_title: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_for_users(
        self,
        user_ids: Sequence[int],
        *,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[WorkReport]:
        raise NotImplementedError
