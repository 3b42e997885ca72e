"""
DevConnector Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the Auth Gate, services and repositories.
When:  During request processing.

Exception Hierarchy:
    DevConnectorError (base)
    ├── ValidationError              → 400 {"errors": [...]} field-level list
    │   ├── InvalidCredentialsError  → 400 (login: unknown email OR wrong password)
    │   └── UserExistsError          → 400 (registration with a taken email)
    ├── InvalidActionError           → 400 {"msg": ...} (already liked, no profile, ...)
    ├── AuthError                    → 401
    │   ├── NoTokenError
    │   ├── InvalidTokenError
    │   └── ExpiredTokenError
    ├── UnauthorizedError            → 401 (actor is not the resource owner)
    ├── NotFoundError                → 404
    ├── RateLimitExceededError       → 429
    └── DatabaseError                → 500 (generic message; details logged only)
"""

from typing import Any, Dict, List, Optional


class DevConnectorError(Exception):
    """
    Base exception for all DevConnector application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevConnectorError):
    """
    Raised when client input fails validation.

    Carries a list of field errors in the express-validator shape the frontend
    already consumes:

        {"errors": [{"msg": "Text is required", "param": "text", "location": "body"}]}

    Errors that are not tied to a single field omit `param` and `location`.
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.field = field
        if errors is not None:
            self.errors = errors
        elif field:
            self.errors = [{"msg": message, "param": field, "location": "body"}]
        else:
            self.errors = [{"msg": message}]


class InvalidCredentialsError(ValidationError):
    """
    Raised by login for an unknown email and for a wrong password alike.

    The two cases share one message so a caller cannot probe which emails
    are registered.
    """

    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid Credentials", context=context)


class UserExistsError(ValidationError):
    error_code = "user_exists"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="User already exists", context=context)


class InvalidActionError(DevConnectorError):
    """
    Raised when a well-formed request cannot be applied to the current state.

    Examples: liking a post twice, unliking a post that was never liked,
    asking for the profile of a user who has none.
    HTTP: 400 Bad Request with a single {"msg": ...} body.
    """

    error_code = "invalid_action"


class AuthError(DevConnectorError):
    """Base for token failures raised by the Auth Gate. HTTP 401."""

    error_code = "auth_error"


class NoTokenError(AuthError):
    error_code = "no_token"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="No token, authorization denied", context=context)


class InvalidTokenError(AuthError):
    error_code = "invalid_token"

    def __init__(
        self,
        message: str = "Token is not valid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ExpiredTokenError(AuthError):
    error_code = "expired_token"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Token has expired", context=context)


class UnauthorizedError(DevConnectorError):
    """
    Raised when the acting user does not own the resource being mutated.

    HTTP: 401 (kept from the original API contract; the frontend treats any
    401 as "not allowed").
    """

    error_code = "not_authorized"

    def __init__(
        self,
        message: str = "User not authorized.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DevConnectorError):
    """
    Raised when a requested resource does not exist.

    Also raised for malformed ids: a path segment that is not a valid UUID
    cannot name an existing record, so it is reported the same way.
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found.", context=ctx)


class RateLimitExceededError(DevConnectorError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header with the seconds until the
    oldest request leaves the window.
    """

    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(DevConnectorError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic ("Server error.").
    The original error type and the operation are kept in `context` and
    logged server-side only.
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "Server error.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
