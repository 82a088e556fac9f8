"""
User Endpoints
Handles user listing, lookup, profile and role updates, deletion and avatars.

Endpoints:
- GET /users - List users (paginated) or search by exact name
- GET /users/me - Get current user profile
- GET /users/{id} - Get a user profile
- PUT /users/{id} - Update own profile
- PUT /users/{id}/role - Change a user's role (admin only)
- DELETE /users/{id} - Delete a user (admin only)
- POST /users/{id}/avatar - Upload own avatar

All endpoints require authentication via JWT token.
"""

from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cookbook_api.api.v1.deps import (
    get_current_user,
    get_image_uploader,
    require_admin,
    require_same_user,
)
from cookbook_api.core.constants import MAX_OFFSET, MAX_PAGE_SIZE
from cookbook_api.db.session import get_db
from cookbook_api.models.user import User
from cookbook_api.schemas.user import (
    AffectedResult,
    AvatarUpload,
    PaginatedUsers,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from cookbook_api.services import user_service


# Create router for user endpoints
# This router will be included in the main app with prefix /api/v1/users
router = APIRouter()


@router.get(
    "",
    response_model=Union[PaginatedUsers, List[UserResponse]],
    summary="List or search users",
)
def list_users(
    name: Optional[str] = Query(None, description="Exact display name to search for"),
    limit: int = Query(0, ge=0, le=MAX_PAGE_SIZE, description="Users per page (0 = all)"),
    offset: int = Query(0, ge=0, le=MAX_OFFSET, description="Users to skip"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List users.

    With `name`, returns the plain list of users with exactly that
    display name. Otherwise returns one page of users.

    Example:
        GET /api/v1/users?limit=10&offset=20
        GET /api/v1/users?name=Julia
    """
    if name is not None:
        return user_service.search_users(db, name)
    return user_service.find_users(db, limit=limit, offset=offset)


@router.get("/me", response_model=UserResponse, summary="Get current user profile")
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    """Return the profile of the authenticated user."""
    return current_user


@router.get("/{user_id}", response_model=UserResponse, summary="Get user profile")
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get a user by id.

    Errors:
        404 Not Found: No user with this id
    """
    return user_service.find_user(db, user_id)


@router.put("/{user_id}", response_model=AffectedResult, summary="Update own profile")
def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_same_user)
):
    """
    Update name and/or email of the caller's own account.

    Returns:
        {"affected": 1}

    Errors:
        403 Forbidden: Target is another account
        409 Conflict: Email belongs to another user
    """
    return AffectedResult(affected=user_service.update_user(db, user_id, user_data))


@router.put("/{user_id}/role", response_model=AffectedResult, summary="Change user role")
def update_user_role(
    user_id: UUID,
    role_data: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Change the role of any user. Admin only.

    Returns:
        {"affected": 0} if the user does not exist, {"affected": 1} otherwise
    """
    return AffectedResult(affected=user_service.update_user_role(db, user_id, role_data))


@router.delete("/{user_id}", response_model=AffectedResult, summary="Delete user")
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Delete a user and their recipes. Admin only.

    Returns:
        {"affected": 0} if the user does not exist, {"affected": 1} otherwise
    """
    return AffectedResult(affected=user_service.delete_user(db, user_id))


@router.post("/{user_id}/avatar", response_model=UserResponse, summary="Upload avatar")
async def upload_avatar(
    user_id: UUID,
    avatar: AvatarUpload,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_same_user),
    uploader=Depends(get_image_uploader)
):
    """
    Upload a new avatar for the caller's own account.

    Request Body:
        {"image": "data:image/png;base64,..."}

    Returns:
        Updated profile with the new avatar_url

    Errors:
        400 Bad Request: The image host did not create the asset
        403 Forbidden: Target is another account
        502 Bad Gateway: The image host is unreachable or refused the image
        503 Service Unavailable: Image upload is not configured
    """
    return await user_service.upload_avatar(db, user_id, avatar.image, uploader)
