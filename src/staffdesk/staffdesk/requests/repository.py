from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestCategory, RequestStatus
from .model import EmployeeRequest


class RequestRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        category: RequestCategory,
        message: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[EmployeeRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[EmployeeRequest]:
        """Newest first."""

        raise NotImplementedError

    def list_for_users(self, user_ids: Sequence[int], *, limit: int = 500) -> Sequence[EmployeeRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_reply: str,
    ) -> bool:
        """Move a PENDING request to its final status. False if it was not pending."""

        raise NotImplementedError

    def reopen(self, *, request_id: int, status: RequestStatus) -> bool:
        """Put a request decided as `status` back to PENDING and clear the reply."""

        raise NotImplementedError
