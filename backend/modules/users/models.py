"""
Users module data models.

These models define the data structures used by the users module
and exposed to other modules through the interfaces.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """
    A stored user.

    ``password`` always holds the digest produced by the security service,
    never plaintext.
    """

    id: str = Field(..., description="Stable user identifier")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    email: str = Field(..., description="Email address, unique per store")
    password: str = Field(..., description="Password digest")
    created_by: str = Field(..., description="Actor that created the record")
    updated_by: str = Field(..., description="Actor that last updated the record")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class UserUpdate(BaseModel):
    """
    Partial-overwrite payload for a user.

    Password is deliberately absent; rotation goes through
    IUserRepository.update_password.
    """

    first_name: str
    last_name: str
    email: str
    updated_by: str
    updated_at: datetime


class TokenPayload(BaseModel):
    """Claims carried by an issued access token."""

    email: str = Field(..., description="Subject's email address")
    exp: int = Field(..., description="Expiration timestamp (unix seconds)")

    model_config = {"frozen": True, "extra": "ignore"}


# ---------------------------------------------------------------------------
# Request / response shapes used by the service and API layers
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request to register a new user."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=256)


class ProfileUpdateRequest(BaseModel):
    """Request to overwrite a user's profile fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class PasswordChangeRequest(BaseModel):
    """Request to rotate a user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=256)


class LoginRequest(BaseModel):
    """Credentials exchanged for an access token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public view of a user; never carries the password digest."""

    id: str
    first_name: str
    last_name: str
    email: str
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump(exclude={"password"}))


class UserListResponse(BaseModel):
    """A page of users."""

    total: int
    items: list[UserResponse]
    limit: int
    offset: int
    has_more: bool = Field(..., description="Whether rows exist past this page")
