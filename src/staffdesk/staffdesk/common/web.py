"""Flask glue shared by every controller: session caller, guards, JSON parsing, error mapping."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import AccountStatus, Role
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caller:
    """The logged-in user as recorded in the session at login."""

    user_id: int
    role: Role
    status: AccountStatus

    @property
    def context(self) -> dict:
        """Keyword arguments every service call takes."""
        return {"current_role": self.role, "current_status": self.status}


def current_caller() -> Caller:
    if "user_id" not in session:
        raise AuthenticationError("Not authenticated")
    return Caller(
        user_id=int(session["user_id"]),
        role=Role(session["role"]),
        status=AccountStatus(session["status"]),
    )


def _refresh_session() -> bool:
    """Reload role and status from the user store; False when there is no live account."""
    if "user_id" not in session:
        return False
    container = current_app.extensions["staffdesk.container"]
    user = container.auth_service.session_user(int(session["user_id"]))
    if user is None:
        session.clear()
        return False
    session["role"] = user.role.value
    session["status"] = user.status.value
    return True


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _refresh_session():
            return jsonify({"error": "Not authenticated"}), 401
        return view(*args, **kwargs)

    return wrapper


def approved_required(view):
    """Logged in and, for employees, approved by an admin."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _refresh_session():
            return jsonify({"error": "Not authenticated"}), 401
        if session.get("role") != Role.ADMIN.value and session.get("status") != AccountStatus.APPROVED.value:
            return jsonify({"error": "Your account is pending admin approval"}), 403
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _refresh_session():
            return jsonify({"error": "Not authenticated"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"error": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("JSON object expected")
    return data


def parse_date_value(value: Any, field_name: str) -> Optional[date]:
    """Accepts YYYY-MM-DD or a full ISO timestamp (only the day part is kept)."""
    if value in (None, ""):
        return None
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_int(value: Any, field_name: str, *, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
        raise ValidationError(f"{field_name} is out of range")
    return number


def month_and_year(source: dict) -> tuple[int, int]:
    month = parse_int(source.get("month"), "month", minimum=1, maximum=12)
    year = parse_int(source.get("year"), "year", minimum=1900, maximum=9999)
    return month, year


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": str(e)}), e.http_status

    @app.errorhandler(404)
    def handle_not_found(_e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(_e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"error": f"Internal error: {e}"}), 500
        return jsonify({"error": "Internal server error"}), 500
