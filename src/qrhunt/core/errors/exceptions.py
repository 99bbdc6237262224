"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details merged into the response body
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Also used for rows that exist but belong to another tenant, so the
    two cases cannot be told apart by the caller.

    Example:
        raise NotFoundError("Station not found", error_code="station_not_found")
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        redirect_to: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        if redirect_to:
            details["redirect_to"] = redirect_to
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when there's a conflict with existing data.

    Example:
        raise ConflictError("Slug already exists", error_code="slug_exists")
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when request data fails validation.

    Example:
        raise ValidationError(
            "Invalid branding",
            errors=[{"field": "primary", "message": "must be a hex color"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class _LoginRedirectError(AppException):
    """Base for errors the UI turns into a redirect to a login page."""

    def __init__(
        self,
        message: str | None = None,
        login_url: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if login_url:
            details["login_url"] = login_url
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(_LoginRedirectError):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid access token", login_url="/login")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(_LoginRedirectError):
    """Raised when the principal lacks the role for a tenant or platform action.

    Example:
        raise ForbiddenError("Staff access required", login_url="/admin/login")
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class BadRequestError(AppException):
    """Raised for general client errors.

    Example:
        raise BadRequestError("No tenant context", error_code="tenant_required")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class RateLimitError(AppException):
    """Raised when rate limit is exceeded."""

    message = "Rate limit exceeded"
    error_code = "rate_limit_exceeded"
    status_code = 429
