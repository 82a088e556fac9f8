"""
Recipe Service
Business logic for recipe-related operations.

This service provides reusable functions for:
    - Creating, reading, updating, deleting recipes
    - Listing recipes globally or per author, one page at a time

Authorship is checked by the API layer (see api/v1/deps.py) before any
of the mutating functions here are called.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Query, Session

from cookbook_api.core.exceptions import NotFoundError
from cookbook_api.models.recipe import Recipe
from cookbook_api.schemas.recipe import (
    PaginatedRecipes,
    RecipeCreate,
    RecipeResponse,
    RecipeUpdate,
)
from cookbook_api.services.pagination import fetch_page, page_meta


logger = logging.getLogger("cookbook_api.recipes")

NON_NULLABLE_FIELDS = {"title", "ingredients", "tags"}


# ============================================================================
# RECIPE CRUD FUNCTIONS
# ============================================================================

def create_recipe(db: Session, recipe_data: RecipeCreate) -> Recipe:
    """
    Create a new recipe.

    Args:
        db: Database session
        recipe_data: Validated recipe data, including author_id

    Returns:
        Recipe: Created recipe record

    Example:
        recipe = create_recipe(
            db=db,
            recipe_data=RecipeCreate(
                author_id=current_user.id,
                title="Pasta al Pomodoro",
                ingredients=["100 g pasta", "200 g tomatoes"],
                difficulty="easy"
            )
        )
    """
    db_recipe = Recipe(**recipe_data.model_dump())

    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)

    logger.info(f"RECIPE_CREATED | recipe_id={db_recipe.id} | author_id={db_recipe.author_id}")
    return db_recipe


def find_recipe(db: Session, recipe_id: UUID) -> Recipe:
    """
    Get a single recipe by ID.

    Raises:
        NotFoundError: If the recipe does not exist
    """
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if recipe is None:
        raise NotFoundError(f"Recipe {recipe_id} not found")
    return recipe


def _paginate(query: Query, limit: int, page: int) -> PaginatedRecipes:
    """Slice a recipe query into page number `page` of size `limit`."""
    skip = page * limit
    recipes, total = fetch_page(
        query.order_by(Recipe.created_at.desc(), Recipe.id),
        limit,
        skip,
    )

    return PaginatedRecipes(
        recipes=[RecipeResponse.model_validate(recipe) for recipe in recipes],
        current_page=page,
        **page_meta(total, len(recipes), limit, skip),
    )


def find_recipes(db: Session, limit: int = 0, page: int = 0) -> PaginatedRecipes:
    """
    Get one page of all recipes, newest first.

    Args:
        db: Database session
        limit: Recipes per page, 0 for all
        page: Zero-based page index (ignored when limit is 0)
    """
    return _paginate(db.query(Recipe), limit, page)


def find_recipes_by_user(db: Session, user_id: UUID, limit: int = 0, page: int = 0) -> PaginatedRecipes:
    """Get one page of the recipes written by `user_id`, newest first."""
    return _paginate(db.query(Recipe).filter(Recipe.author_id == user_id), limit, page)


def update_recipe(db: Session, recipe: Recipe, recipe_data: RecipeUpdate) -> Recipe:
    """
    Update an existing recipe.

    Only fields present in the request are written.

    Args:
        db: Database session
        recipe: Recipe already loaded (and authorship-checked) by the caller
        recipe_data: Partial update

    Returns:
        Updated recipe
    """
    for field, value in recipe_data.model_dump(exclude_unset=True).items():
        # title, ingredients and tags are NOT NULL; an explicit null keeps the old value
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(recipe, field, value)

    db.commit()
    db.refresh(recipe)

    logger.info(f"RECIPE_UPDATED | recipe_id={recipe.id}")
    return recipe


def delete_recipe(db: Session, recipe_id: UUID) -> int:
    """
    Delete a recipe.

    Returns:
        Number of affected rows (0 or 1)
    """
    affected = db.query(Recipe).filter(Recipe.id == recipe_id).delete(synchronize_session=False)
    db.commit()

    logger.info(f"RECIPE_DELETED | recipe_id={recipe_id} | affected={affected}")
    return affected
