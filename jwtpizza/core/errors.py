"""
Service-layer errors.

Each error carries the HTTP status it is rendered with and the message
clients see. Messages are deliberately terse: login failures never say
whether the account exists, and admin-only endpoints answer non-admins with
the same 404 an unknown route gets.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors mapped to HTTP responses."""

    status_code: int = 500
    message: str = "an internal error occurred"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequest(ServiceError):
    """A required input field is missing (400)."""
    status_code = 400
    message = "bad request"


class Unauthorized(ServiceError):
    """No valid, non-revoked token is attached to the request (401)."""
    status_code = 401
    message = "unauthorized"


class Forbidden(ServiceError):
    """Authenticated, but not the target user and lacking the role (403)."""
    status_code = 403
    message = "unauthorized"


class InvalidCredentials(ServiceError):
    """Login failed. Same error for unknown email and wrong password."""
    status_code = 404
    message = "unknown user"


class UnknownUser(ServiceError):
    """The user being updated does not exist (404)."""
    status_code = 404
    message = "unknown user"


class ObscuredNotFound(ServiceError):
    """Admin-only capability hidden from callers without the role (404)."""
    status_code = 404
    message = "unknown endpoint"


class DuplicateEmail(ServiceError):
    """Email already registered to a different user (409)."""
    status_code = 409
    message = "That account already exists"


class InvalidEmailFormat(ServiceError):
    """Email fails the format check (422)."""
    status_code = 422
    message = "Invalid Email Formatting"


class InvalidSignature(Exception):
    """
    Token failed verification.

    Not a ServiceError: the auth resolver absorbs it and the request simply
    proceeds unauthenticated.
    """
