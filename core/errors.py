"""
core/errors.py -- Domain error taxonomy for DevConnector.

Services raise these; they never raise HTTPException. api/main.py registers a
single handler for AppError that turns any subclass into the shared
ErrorResponse envelope, using the class-level status_code and code.

Status codes follow what the web client already expects: ownership mismatch is
401 (not 403), and a failed GitHub lookup is 404.

Layer rule: core/ is the kernel. No imports from api/, auth/, profiles/, posts/.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for every error that maps onto an HTTP response."""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None) -> None:
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    """One or more input fields failed validation.

    fields holds every failure, not just the first: [{"field": ..., "message": ...}].
    """

    status_code = 400
    code = "validation_error"
    message = "Request validation failed."

    def __init__(self, fields: list[dict[str, str]], message: Optional[str] = None) -> None:
        super().__init__(message)
        self.fields = fields

    @classmethod
    def from_pydantic(cls, errors: list[dict]) -> "ValidationError":
        """Build from pydantic's errors() list.

        loc is ("body", "email") for request bodies; the leading location
        segment is dropped so clients see just the field name.
        """
        fields = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            fields.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
        return cls(fields)


class DuplicateUser(AppError):
    status_code = 400
    code = "user_exists"
    message = "User already exists"


class InvalidCredentials(AppError):
    """Login failed. reason is for server logs only and never serialized."""

    status_code = 400
    code = "invalid_credentials"
    message = "Invalid credentials"

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason


class Unauthenticated(AppError):
    status_code = 401
    code = "no_token"
    message = "No token, authorization denied"


class InvalidToken(AppError):
    status_code = 401
    code = "invalid_token"
    message = "Token is not valid"


class Forbidden(AppError):
    status_code = 401
    code = "not_authorized"
    message = "User not authorized"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class AlreadyLiked(AppError):
    status_code = 400
    code = "already_liked"
    message = "Post already liked"


class NotLiked(AppError):
    status_code = 400
    code = "not_liked"
    message = "Post has not yet been liked"


class UpstreamUnavailable(AppError):
    status_code = 404
    code = "github_not_found"
    message = "No Github profile found"


class StorageError(AppError):
    status_code = 500
    code = "storage_error"
    message = "Server error"
