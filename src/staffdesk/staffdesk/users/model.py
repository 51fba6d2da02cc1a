from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AccountStatus, Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account (admin or employee).

    Note: plain data object, no DB access code here.
    """

    user_id: int
    email: str
    password_hash: str
    name: str
    role: Role
    status: AccountStatus
    phone: Optional[str] = None
    address: Optional[str] = None
    position: Optional[str] = None
    salary: float = 0.0
    created_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == AccountStatus.APPROVED

    def to_profile(self) -> dict:
        return {
            "_id": str(self.user_id),
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "status": self.status.value,
            "phone": self.phone,
            "address": self.address,
            "position": self.position,
            "salary": self.salary,
        }
