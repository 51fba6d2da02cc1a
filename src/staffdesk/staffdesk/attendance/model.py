from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, WorkType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    total_hours: Optional[float] = None
    work_type: Optional[WorkType] = None

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT

    def to_dict(self) -> dict:
        return {
            "_id": str(self.attendance_id),
            "date": self.work_date.isoformat(),
            "punchIn": self.punch_in.isoformat() if self.punch_in else None,
            "punchOut": self.punch_out.isoformat() if self.punch_out else None,
            "totalHours": self.total_hours,
            "status": self.status.value,
            "workType": (self.work_type or WorkType.OFFICE).value,
        }
