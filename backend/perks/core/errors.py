"""Error taxonomy for the API.

Every workflow failure is raised as one of these classes and rendered once, at
the HTTP boundary, into the envelope ``{"error": {"code", "message", "details"}}``.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code = 500
    code = "INTERNAL_ERROR"
    message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        code: Optional[str] = None,
    ):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details
        if code:
            self.code = code

    def to_body(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request data"


class AuthError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Authentication required"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "A record with this data already exists"


class RateLimitError(AppError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"
    message = "Too many requests. Please slow down."

    def __init__(self, message: Optional[str] = None, retry_after_s: int = 0):
        super().__init__(message)
        self.retry_after_s = retry_after_s


class InternalError(AppError):
    pass


# Workflow-specific members.


class InvalidAccessLevel(ValidationError):
    code = "INVALID_ACCESS_LEVEL"
    message = "Invalid accessLevel. Must be 'public' or 'locked'"


class InvalidCredentials(AuthError):
    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password"


class InvalidToken(AuthError):
    code = "INVALID_TOKEN"
    message = "Invalid or expired token"


class VerificationRequired(ForbiddenError):
    code = "VERIFICATION_REQUIRED"
    message = "This deal requires a verified account. Please verify your email to claim locked deals."


class DealNotFound(NotFoundError):
    code = "DEAL_NOT_FOUND"
    message = "Deal not found or is no longer active"


class DuplicateClaim(ConflictError):
    code = "DUPLICATE_CLAIM"
    message = "You have already claimed this deal"


class UserExists(ConflictError):
    code = "USER_EXISTS"
    message = "User with this email already exists"


def field_violations(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``[{"field", "message"}]``."""
    out: list[dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in (err.get("loc") or ()) if part not in ("body", "query", "path")]
        out.append({"field": ".".join(loc), "message": str(err.get("msg") or "Invalid value")})
    return out
