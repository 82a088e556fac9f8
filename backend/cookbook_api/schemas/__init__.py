"""
Pydantic Schemas Module
Contains request/response schemas for API validation and serialization.

Pydantic schemas are used for:
- Validating incoming request data
- Serializing database models to JSON responses
- Auto-generating OpenAPI documentation
"""

from cookbook_api.schemas.user import (
    UserCreate,
    UserUpdate,
    UserRoleUpdate,
    UserResponse,
    LoginRequest,
    Token,
    TokenPayload,
    AvatarUpload,
    PaginatedUsers,
    AffectedResult,
)
from cookbook_api.schemas.recipe import (
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    PaginatedRecipes,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserRoleUpdate",
    "UserResponse",
    "LoginRequest",
    "Token",
    "TokenPayload",
    "AvatarUpload",
    "PaginatedUsers",
    "AffectedResult",
    # Recipe schemas
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "PaginatedRecipes",
]
