from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class WorkReport:
    """Progress report. Without task_id it is an "Other" report with a free-text title."""

    report_id: int
    user_id: int
    summary: str
    status: TaskStatus
    task_id: Optional[int] = None
    task_title: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "_id": str(self.report_id),
            "taskId": str(self.task_id) if self.task_id else None,
            "taskTitle": self.task_title,
            "summary": self.summary,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
