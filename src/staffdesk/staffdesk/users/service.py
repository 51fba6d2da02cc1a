from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.access import ensure_active, ensure_admin
from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AccountStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    status: AccountStatus


class AuthService:
    """Use cases: register, login, change password."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        email: str,
        password: str,
        name: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        position: Optional[str] = None,
    ) -> int:
        """Self-registration. The account waits for admin approval and gets no session."""
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        name = require_non_empty(name, "Name")

        if self._users.get_by_email(email):
            raise ValidationError("Email already registered")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            role=Role.EMPLOYEE,
            status=AccountStatus.PENDING,
            phone=optional_text(phone),
            address=optional_text(address),
            position=optional_text(position),
            salary=0.0,
        )
        logger.info("Registered employee %s (id=%s), awaiting approval", email, user_id)
        return user_id

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        if user.role == Role.EMPLOYEE and user.status != AccountStatus.APPROVED:
            if user.status == AccountStatus.PENDING:
                raise AuthorizationError("Your account is awaiting admin approval")
            raise AuthorizationError("Your account has been rejected by admin")

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
        )

    def session_user(self, user_id: int) -> Optional[SessionUser]:
        """Current role and status of a logged-in user; None once the account is gone."""
        user = self._users.get_by_id(int(user_id))
        if not user:
            return None
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
        )

    def change_password(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        ensure_active(current_role, current_status)
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if not check_password_hash(user.password_hash, current_password or ""):
            raise ValidationError("Current password is incorrect")

        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password))
        logger.info("Password changed for user %s", user.user_id)


class UserService:
    """Use cases: own profile (any user) and employee directory management (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, *, current_role: Role, current_status: AccountStatus, user_id: int) -> dict:
        ensure_active(current_role, current_status)
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user.to_profile()

    def update_profile(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        name: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        position: Optional[str] = None,
    ) -> None:
        ensure_active(current_role, current_status)
        name = require_non_empty(name, "Name")
        ok = self._users.update_profile(
            int(user_id),
            name=name,
            phone=optional_text(phone),
            address=optional_text(address),
            position=optional_text(position),
        )
        if not ok:
            raise NotFoundError("User not found")

    def list_employees(self, *, current_role: Role, current_status: AccountStatus) -> list[dict]:
        ensure_admin(current_role, current_status)
        employees = self._users.list_by_role_and_status(role=Role.EMPLOYEE, status=AccountStatus.APPROVED)
        return [
            {
                "_id": str(u.user_id),
                "email": u.email,
                "name": u.name,
                "phone": u.phone,
                "address": u.address,
                "position": u.position,
                "salary": u.salary,
            }
            for u in employees
        ]

    def list_pending_employees(self, *, current_role: Role, current_status: AccountStatus) -> list[dict]:
        ensure_admin(current_role, current_status)
        pending = self._users.list_by_role_and_status(role=Role.EMPLOYEE, status=AccountStatus.PENDING)
        return [
            {
                "_id": str(u.user_id),
                "name": u.name,
                "email": u.email,
                "phone": u.phone,
                "position": u.position,
                "createdAt": u.created_at,
            }
            for u in pending
        ]

    def update_employee_status(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        status: AccountStatus,
    ) -> None:
        ensure_admin(current_role, current_status)
        if status not in {AccountStatus.APPROVED, AccountStatus.REJECTED}:
            raise ValidationError("Status must be approved or rejected")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts can not be approved or rejected")

        self._users.update_status(user.user_id, status=status)
        logger.info("Employee %s status -> %s", user.user_id, status.value)

    def update_salary(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        salary: float,
    ) -> None:
        ensure_admin(current_role, current_status)
        try:
            salary = round(float(salary), 2)
        except (TypeError, ValueError):
            raise ValidationError("Salary must be a number")
        if salary < 0:
            raise ValidationError("Salary can not be negative")

        if not self._users.update_salary(int(user_id), salary=salary):
            raise NotFoundError("Approved employee not found")
        logger.info("Employee %s salary -> %.2f", user_id, salary)
