"""
Recipe schemas.

Input is normalized on the way in: difficulty and tags are lowercased,
blank tags and ingredient lines are dropped.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cookbook_api.core.constants import VALID_DIFFICULTIES


class RecipeBase(BaseModel):
    """Fields an author can write."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    body: Optional[str] = Field(None, description="Preparation steps, free text")
    ingredients: List[str] = Field(default=[], description="One line per ingredient, e.g. '200 g spaghetti'")
    servings: Optional[int] = Field(None, ge=1)
    preparation_time_min: Optional[int] = Field(None, ge=0, description="Minutes")
    difficulty: Optional[str] = Field(None, description=f"One of: {', '.join(VALID_DIFFICULTIES)}")
    tags: List[str] = []

    @field_validator('difficulty')
    @classmethod
    def normalize_difficulty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        level = v.strip().lower()
        if level not in VALID_DIFFICULTIES:
            raise ValueError(f"Difficulty must be one of: {', '.join(VALID_DIFFICULTIES)}")
        return level

    @field_validator('tags')
    @classmethod
    def normalize_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [tag.strip().lower() for tag in v if tag.strip()]

    @field_validator('ingredients')
    @classmethod
    def drop_blank_ingredients(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [line.strip() for line in v if line.strip()]


class RecipeCreate(RecipeBase):
    """
    Body of POST /api/v1/recipes.

    author_id must be the caller's own id; anything else is answered
    with 403 before the recipe is stored.

    Example:
        {
            "author_id": "3f2b8c1e-6a4d-4e0b-9d59-2b7f4f1c9a10",
            "title": "Risotto alla milanese",
            "ingredients": ["320 g carnaroli rice", "1 l beef broth", "1 sachet saffron"],
            "servings": 4,
            "difficulty": "medium",
            "tags": ["italian", "comfort"]
        }
    """
    author_id: UUID


class RecipeUpdate(RecipeBase):
    """
    Body of PUT /api/v1/recipes/{id}.

    Partial: omitted fields are left alone, and an explicit null on
    title, ingredients or tags is ignored. The author cannot change.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    ingredients: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class RecipeResponse(BaseModel):
    """A stored recipe."""
    id: UUID
    author_id: UUID
    title: str
    description: Optional[str] = None
    body: Optional[str] = None
    ingredients: List[str] = []
    servings: Optional[int] = None
    preparation_time_min: Optional[int] = None
    difficulty: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedRecipes(BaseModel):
    """
    One page of recipes.

    Same envelope as PaginatedUsers; current_page is the zero-based page
    index that was requested.
    """
    recipes: List[RecipeResponse]
    total_items: int = Field(..., description="Number of matching recipes")
    item_count: int = Field(..., description="Requested page size")
    items_per_page: int = Field(..., description="Recipes available on this page")
    current_page: int = Field(..., description="Zero-based page index")
