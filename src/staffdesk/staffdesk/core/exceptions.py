class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    http_status = 400


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the caller is not logged in."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist (or is not visible)."""

    http_status = 404
