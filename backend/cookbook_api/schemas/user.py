"""
User schemas: registration and login bodies, profile output, updates,
pagination envelope and the token models.

No outbound model declares a password field, so serializing a User row
through any of them drops the hash.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from cookbook_api.core.constants import MIN_PASSWORD_LENGTH
from cookbook_api.models.user import UserRole


# ============================================================================
# Credentials
# ============================================================================

class UserCreate(BaseModel):
    """
    Body of POST /api/v1/auth/register.

    Example:
        {"name": "Julia", "email": "julia@example.com", "password": "pomodoro-2024"}
    """
    name: str = Field(..., min_length=1, max_length=255, examples=["Julia"])
    email: EmailStr = Field(..., examples=["julia@example.com"])
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"Plain password, at least {MIN_PASSWORD_LENGTH} characters",
        examples=["pomodoro-2024"]
    )


class LoginRequest(BaseModel):
    """Body of POST /api/v1/auth/login."""
    email: EmailStr = Field(..., examples=["julia@example.com"])
    password: str = Field(..., min_length=1, examples=["pomodoro-2024"])


class Token(BaseModel):
    """
    Login result. Send it back as `Authorization: Bearer <access_token>`.
    """
    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    """Decoded claims of a valid access token."""
    sub: str = Field(..., description="User id")
    exp: int = Field(..., description="Expiry, Unix seconds")
    type: str


# ============================================================================
# Profiles
# ============================================================================

class UserResponse(BaseModel):
    """
    Public view of an account, returned by every endpoint that yields users.

    Example:
        {
            "id": "3f2b8c1e-6a4d-4e0b-9d59-2b7f4f1c9a10",
            "name": "Julia",
            "email": "julia@example.com",
            "avatar_url": "https://res.cloudinary.com/demo/image/upload/v1/avatars/julia.png",
            "role": "user",
            "created_at": "2024-03-02T18:04:11Z",
            "updated_at": "2024-03-02T18:04:11Z"
        }
    """
    id: UUID
    name: str
    email: str
    avatar_url: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """
    Body of PUT /api/v1/users/{id}.

    Omitted (or null) fields keep their stored value. Password and role
    are changed through their own flows.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class UserRoleUpdate(BaseModel):
    """Body of PUT /api/v1/users/{id}/role (admin only)."""
    role: UserRole = Field(..., examples=["editor"])


class AvatarUpload(BaseModel):
    """
    Body of POST /api/v1/users/{id}/avatar.

    `image` is forwarded to the image host as is: a data URI, a bare
    base64 payload or a remote URL.
    """
    image: str = Field(..., min_length=1, examples=["data:image/png;base64,iVBORw0KGgo..."])


# ============================================================================
# Results
# ============================================================================

class PaginatedUsers(BaseModel):
    """
    One page of users.

    item_count is the requested limit when one was given, otherwise the
    number of returned users. items_per_page is the number of users that
    actually fit on this page.
    """
    users: List[UserResponse]
    total_items: int = Field(..., description="Number of users in the store")
    item_count: int = Field(..., description="Requested page size")
    items_per_page: int = Field(..., description="Users available on this page")
    current_page: int = Field(..., description="Offset the page starts at")


class AffectedResult(BaseModel):
    """Number of rows matched by an update or delete."""
    affected: int = Field(..., ge=0, examples=[1])
