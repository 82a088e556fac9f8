"""
Endpoint dependencies: authentication, guards and the image uploader.

Guards run before the endpoint body, so a rejected request never
touches the store:

    get_current_user      401 unless a valid bearer token names an existing user
    require_same_user     403 unless {user_id} is the caller
    require_admin         403 unless the caller is an admin
    require_recipe_owner  403 unless a new recipe's author_id is the caller
    get_authored_recipe   404 for a missing recipe, 403 unless the caller wrote it
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cookbook_api.db.session import get_db
from cookbook_api.integrations.cloudinary import cloudinary_client
from cookbook_api.models.recipe import Recipe
from cookbook_api.models.user import User
from cookbook_api.schemas.recipe import RecipeCreate
from cookbook_api.services.auth_service import verify_token
from cookbook_api.services.recipe_service import find_recipe


# auto_error=False so a missing header gets the same 401 as a bad token
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to a User.

    The user is also stored on request.state so that the error handlers
    can attach it to logged failures.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = UUID(payload.sub)
    except ValueError:
        raise _unauthorized("Invalid token payload")

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User no longer exists")

    request.state.user = user
    return user


def require_same_user(user_id: UUID, current_user: User = Depends(get_current_user)) -> User:
    if current_user.id != user_id:
        raise _forbidden("You can only modify your own account")
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise _forbidden("Admin role required")
    return current_user


def require_recipe_owner(
    recipe_data: RecipeCreate,
    current_user: User = Depends(get_current_user)
) -> RecipeCreate:
    """Pass the validated body through when its author is the caller."""
    if recipe_data.author_id != current_user.id:
        raise _forbidden("You can only create recipes as yourself")
    return recipe_data


def get_authored_recipe(
    recipe_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Recipe:
    """
    Load {recipe_id} for a mutating endpoint.

    A missing recipe raises NotFoundError (404) through the service.
    """
    recipe = find_recipe(db, recipe_id)
    if not recipe.is_authored_by(current_user.id):
        raise _forbidden("Only the author can modify this recipe")
    return recipe


def get_image_uploader():
    """Client used for avatar uploads; tests override it with a fake."""
    return cloudinary_client
