"""Caller checks shared by services.

Every service operation receives the caller's verified role and account status
explicitly; these helpers keep the rules in one place.
"""
from __future__ import annotations

from ..core.enums import AccountStatus, Role
from ..core.exceptions import AuthorizationError


def ensure_active(current_role: Role, current_status: AccountStatus) -> None:
    """Employees must be approved before using the system; admins always pass."""
    if current_role == Role.EMPLOYEE and current_status != AccountStatus.APPROVED:
        raise AuthorizationError("Your account is pending admin approval")


def ensure_admin(current_role: Role, current_status: AccountStatus) -> None:
    ensure_active(current_role, current_status)
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")
