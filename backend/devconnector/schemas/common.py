"""
Shared schemas: required-field validators, error and health responses.
"""

from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field


def require_text(value: Any, message: str) -> str:
    """Reject missing, non-string and whitespace-only values with `message`."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value


def require_email(value: Any, message: str = "Please include a valid email") -> str:
    """
    Validate an email address and return its normalized form.

    Normalization lowercases the domain, so registration and login agree on
    the stored value. Deliverability (DNS) is not checked.
    """
    if not isinstance(value, str):
        raise ValueError(message)
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        raise ValueError(message)


class MessageResponse(BaseModel):
    msg: str = Field(description="Human-readable result message")


class FieldError(BaseModel):
    msg: str
    param: Optional[str] = None
    location: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by the global exception handlers.

    Field-level failures fill `errors`; every other failure fills `msg`.
    `error` is a machine-readable code, `request_id` matches the X-Request-ID
    response header.
    """
    error: str = Field(description="Machine-readable error code")
    msg: Optional[str] = Field(default=None, description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None, description="Field-level errors")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
