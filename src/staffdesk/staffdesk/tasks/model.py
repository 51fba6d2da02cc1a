from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: int
    title: str
    description: str
    created_by: int
    status: TaskStatus
    assigned_to: tuple[int, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "_id": str(self.task_id),
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "assignedTo": [str(u) for u in self.assigned_to],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
