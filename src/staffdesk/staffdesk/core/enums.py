from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AccountStatus(str, Enum):
    """Registration approval state of an account."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class WorkType(str, Enum):
    """How a day was worked. A record without work type is an office day."""

    OFFICE = "office"
    WFH = "wfh"
    LEAVE = "leave"


class RequestCategory(str, Enum):
    LEAVE = "leave"
    WFH = "wfh"
    QUERY = "query"
    COMPLAINT = "complaint"

    @property
    def has_date_range(self) -> bool:
        return self in {RequestCategory.LEAVE, RequestCategory.WFH}


class RequestStatus(str, Enum):
    """Request workflow state. Anything but PENDING is final."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REPLIED = "replied"


class TaskStatus(str, Enum):
    ONGOING = "ongoing"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
