"""
User Service
Business logic for user accounts.

This service provides:
- Registration with password hashing
- Lookup by id, paginated listing and exact-name search
- Partial profile and role updates, deletion
- Avatar upload through the image host
- Credential validation and login (JWT issuance)

Functions raise the exceptions from cookbook_api.core.exceptions and
never build HTTP responses. Every user leaving this module is a
UserResponse, which has no password field; ORM rows stay internal.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cookbook_api.core.exceptions import BadRequestError, ConflictError, NotFoundError
from cookbook_api.core.security import hash_password, password_needs_rehash, verify_password
from cookbook_api.models.user import User
from cookbook_api.schemas.user import (
    PaginatedUsers,
    Token,
    UserCreate,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from cookbook_api.services import auth_service
from cookbook_api.services.pagination import fetch_page, page_meta


logger = logging.getLogger("cookbook_api.users")
auth_logger = logging.getLogger("auth")


# ============================================================================
# User CRUD Functions
# ============================================================================

def _public(user: User) -> UserResponse:
    """Outbound view of a user row, without the password hash."""
    return UserResponse.model_validate(user)


def _load_user(db: Session, user_id: UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def create_user(db: Session, user_data: UserCreate) -> UserResponse:
    """
    Create a new user account.

    Hashes the password before storing and creates a new user record.

    Args:
        db: Database session
        user_data: UserCreate schema with name, email and password

    Returns:
        The new profile, with generated id and timestamps

    Raises:
        ConflictError: If email already exists in database
    """
    if get_user_by_email(db, user_data.email):
        raise ConflictError("Email already registered")

    user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
    )

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)

    auth_logger.info(f"USER_CREATED | user_id={user.id} | email={user.email}")
    return _public(user)


def get_user_by_email(db: Session, email: str):
    """Get user by email address, or None."""
    return db.query(User).filter(User.email == email).first()


def find_user(db: Session, user_id: UUID) -> UserResponse:
    """
    Get user by ID.

    Raises:
        NotFoundError: If no user has this id
    """
    return _public(_load_user(db, user_id))


def find_users(db: Session, limit: int = 0, offset: int = 0) -> PaginatedUsers:
    """
    Get one page of users, oldest accounts first.

    Args:
        db: Database session
        limit: Maximum users on the page, 0 for all
        offset: Number of users to skip

    Returns:
        PaginatedUsers envelope
    """
    query = db.query(User).order_by(User.created_at, User.id)
    users, total = fetch_page(query, limit, offset)

    return PaginatedUsers(
        users=[_public(user) for user in users],
        current_page=offset,
        **page_meta(total, len(users), limit, offset),
    )


def search_users(db: Session, name: str) -> List[UserResponse]:
    """
    Find users whose display name is exactly `name`.

    Example:
        users = search_users(db, "Julia")
    """
    users = (
        db.query(User)
        .filter(User.name == name)
        .order_by(User.created_at)
        .all()
    )
    return [_public(user) for user in users]


def _apply_update(db: Session, user_id: UUID, values: Dict[str, Any]) -> int:
    """Bulk-update one user and return the number of matched rows."""
    query = db.query(User).filter(User.id == user_id)
    if not values:
        return query.count()

    try:
        affected = query.update(values, synchronize_session="fetch")
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")

    return affected


def update_user(db: Session, user_id: UUID, user_data: UserUpdate) -> int:
    """
    Update user profile.

    Only fields present in the request are written. A missing user is not
    an error: the returned count is simply 0.

    Returns:
        Number of affected rows (0 or 1)

    Raises:
        ConflictError: If the new email belongs to another user
    """
    # name and email are NOT NULL; an explicit null keeps the old value
    values = {
        field: value
        for field, value in user_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    affected = _apply_update(db, user_id, values)
    logger.info(f"USER_UPDATED | user_id={user_id} | affected={affected}")
    return affected


def update_user_role(db: Session, user_id: UUID, role_data: UserRoleUpdate) -> int:
    """Change a user's role. Returns the number of affected rows."""
    affected = _apply_update(db, user_id, {"role": role_data.role})
    logger.info(f"USER_ROLE_UPDATED | user_id={user_id} | role={role_data.role.value} | affected={affected}")
    return affected


def delete_user(db: Session, user_id: UUID) -> int:
    """
    Delete a user and, through the relationship cascade, their recipes.

    Returns:
        Number of affected rows (0 or 1)
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return 0

    db.delete(user)
    db.commit()

    logger.info(f"USER_DELETED | user_id={user_id}")
    return 1


# ============================================================================
# Avatar
# ============================================================================

async def upload_avatar(db: Session, user_id: UUID, image: str, uploader) -> UserResponse:
    """
    Upload a new avatar and store its URL on the user.

    Flow:
    1. Load the user (nothing is uploaded for an unknown id)
    2. Send the image to the image host
    3. Check the host actually created the asset
    4. Store the secure URL and return the refreshed user

    Args:
        db: Database session
        user_id: UUID of the user
        image: Data URI, base64 string or remote URL
        uploader: Client exposing `async upload(image) -> dict`

    Returns:
        Updated profile

    Raises:
        NotFoundError: If the user does not exist
        BadRequestError: If the host answered without a creation timestamp
        ImageUploadError: If the host could not be reached or refused the upload
    """
    user = _load_user(db, user_id)

    response = await uploader.upload(image)

    if not response.get("created_at") or not response.get("secure_url"):
        logger.warning(f"AVATAR_REJECTED | user_id={user_id} | response_keys={sorted(response)}")
        raise BadRequestError("Sorry, couldn't add an avatar")

    user.avatar_url = response["secure_url"]
    db.commit()
    db.refresh(user)

    logger.info(f"AVATAR_UPDATED | user_id={user_id} | url={user.avatar_url}")
    return _public(user)


# ============================================================================
# Authentication
# ============================================================================

def validate_user(db: Session, email: str, password: str) -> UserResponse:
    """
    Check an email/password pair.

    Args:
        db: Database session
        email: User's email address
        password: Plain text password to verify

    Returns:
        The matching profile

    Raises:
        NotFoundError: If no user has this email
        BadRequestError: If the password does not match
    """
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User wasn't found")

    if not verify_password(password, user.password_hash):
        raise BadRequestError("Password is not correct")

    if password_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        db.commit()
        auth_logger.info(f"PASSWORD_REHASHED | user_id={user.id}")

    return _public(user)


def login(db: Session, email: str, password: str) -> Token:
    """
    Validate credentials and issue an access token.

    Example:
        token = login(db, "julia@example.com", "SecurePass123!")
        # token.access_token -> "eyJhbGciOiJIUzI1NiIs..."
    """
    user = validate_user(db, email, password)
    return Token(access_token=auth_service.create_access_token(user.id))
