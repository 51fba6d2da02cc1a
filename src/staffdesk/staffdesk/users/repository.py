from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AccountStatus, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_approved(self, user_id: int) -> Optional[User]:
        """Only returns the user when status is approved."""

        raise NotImplementedError

    def list_by_role_and_status(
        self,
        *,
        role: Role,
        status: AccountStatus,
        name_contains: Optional[str] = None,
    ) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: Role,
        status: AccountStatus,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        position: Optional[str] = None,
        salary: float = 0.0,
    ) -> int:
        raise NotImplementedError

    def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        phone: Optional[str],
        address: Optional[str],
        position: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def update_status(self, user_id: int, *, status: AccountStatus) -> bool:
        raise NotImplementedError

    def update_salary(self, user_id: int, *, salary: float) -> bool:
        """Only updates approved users."""

        raise NotImplementedError
