"""
Schemas for login, registration and the current-user endpoint.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.schemas.common import require_email, require_text


class LoginRequest(BaseModel):
    """Body of POST /api/auth."""
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_field(cls, v):
        return require_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        # Any non-empty password is accepted here; length rules apply at registration
        if not isinstance(v, str) or v == "":
            raise ValueError("Password is required")
        return v


class RegisterRequest(BaseModel):
    """Body of POST /api/users."""
    name: str = Field(default="", validate_default=True)
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_field(cls, v):
        return require_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        if not isinstance(v, str) or len(v) < 6:
            raise ValueError("Please enter a password with 6 or more characters")
        return v


class TokenResponse(BaseModel):
    token: str = Field(description="Signed token to send back in the x-auth-token header")


class UserResponse(BaseModel):
    """A user as returned by GET /api/auth. Never includes the password hash."""
    id: uuid.UUID
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime = Field(validation_alias="created_at")

    model_config = {"from_attributes": True, "populate_by_name": True}
