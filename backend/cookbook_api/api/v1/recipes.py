"""
Recipes API Endpoints
Provides CRUD operations for recipes.

Endpoints:
    - GET /recipes - Single recipe (?id=), an author's recipes (?userId=) or all recipes
    - POST /recipes - Create new recipe (as yourself)
    - PUT /recipes/{id} - Update recipe (author only)
    - DELETE /recipes/{id} - Delete recipe (author only)

All endpoints require authentication.
"""

from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cookbook_api.api.v1.deps import get_authored_recipe, get_current_user, require_recipe_owner
from cookbook_api.core.constants import MAX_PAGE_INDEX, MAX_PAGE_SIZE
from cookbook_api.db.session import get_db
from cookbook_api.models.recipe import Recipe
from cookbook_api.models.user import User
from cookbook_api.schemas.recipe import (
    PaginatedRecipes,
    RecipeCreate,
    RecipeResponse,
    RecipeUpdate,
)
from cookbook_api.schemas.user import AffectedResult
from cookbook_api.services import recipe_service


# Create router for recipes endpoints
# Prefix will be added in main router: /api/v1/recipes
router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.get("", response_model=Union[RecipeResponse, PaginatedRecipes])
def find_recipes(
    id: Optional[UUID] = Query(None, description="Return this single recipe"),
    user_id: Optional[UUID] = Query(None, alias="userId", description="Only recipes by this author"),
    page: int = Query(0, ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    limit: int = Query(0, ge=0, le=MAX_PAGE_SIZE, description="Recipes per page (0 = all)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Find recipes.

    Query Parameters (first match wins):
        - id: return one recipe
        - userId: return one page of that author's recipes
        - neither: return one page of all recipes

    Errors:
        404 Not Found: ?id= names a missing recipe

    Example:
        GET /api/v1/recipes?userId=uuid&page=1&limit=10
    """
    if id:
        return RecipeResponse.model_validate(recipe_service.find_recipe(db, id))
    if user_id:
        return recipe_service.find_recipes_by_user(db, user_id, limit=limit, page=page)
    return recipe_service.find_recipes(db, limit=limit, page=page)


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_new_recipe(
    recipe_data: RecipeCreate = Depends(require_recipe_owner),
    db: Session = Depends(get_db)
):
    """
    Create a new recipe.

    Request Body:
        RecipeCreate schema; author_id must be the caller's id.

    Errors:
        400 Bad Request: Validation error
        401 Unauthorized: Missing or invalid authentication
        403 Forbidden: author_id is someone else
    """
    return recipe_service.create_recipe(db, recipe_data)


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_existing_recipe(
    recipe_data: RecipeUpdate,
    recipe: Recipe = Depends(get_authored_recipe),
    db: Session = Depends(get_db)
):
    """
    Update an existing recipe. Only provided fields are changed.

    Errors:
        403 Forbidden: Caller is not the author
        404 Not Found: Recipe not found
    """
    return recipe_service.update_recipe(db, recipe, recipe_data)


@router.delete("/{recipe_id}", response_model=AffectedResult)
def delete_existing_recipe(
    recipe: Recipe = Depends(get_authored_recipe),
    db: Session = Depends(get_db)
):
    """
    Delete a recipe.

    Returns:
        {"affected": 1}

    Errors:
        403 Forbidden: Caller is not the author
        404 Not Found: Recipe not found
    """
    return AffectedResult(affected=recipe_service.delete_recipe(db, recipe.id))
