from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestCategory, RequestStatus


@dataclass(frozen=True)
class EmployeeRequest:
    """Leave, WFH, query or complaint raised by an employee.

    from_date/to_date are set only for leave and wfh.
    """

    request_id: int
    user_id: int
    category: RequestCategory
    message: str
    status: RequestStatus
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    admin_reply: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_decided(self) -> bool:
        return self.status != RequestStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "_id": str(self.request_id),
            "category": self.category.value,
            "message": self.message,
            "fromDate": self.from_date.isoformat() if self.from_date else None,
            "toDate": self.to_date.isoformat() if self.to_date else None,
            "status": self.status.value,
            "adminReply": self.admin_reply,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
