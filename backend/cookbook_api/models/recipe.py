"""
Recipe Model
Represents recipes shared by users.

Each recipe contains:
- Basic information (title, description, instructions)
- List of ingredients as free text lines (stored in JSON)
- Preparation metadata (servings, time, difficulty, tags)

Recipes belong to the user who wrote them. Everyone signed in can read
them; only the author can change or delete them.
"""

from sqlalchemy import Column, String, Text, Integer, JSON, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship

from cookbook_api.models.base import BaseModel


class Recipe(BaseModel):
    """
    Recipe model for storing user-written recipes.

    Fields:
        id (UUID): Primary key, inherited from BaseModel
        author_id (UUID): User who wrote the recipe
        title (str): Recipe title (e.g., "Pasta al Pomodoro")
        description (str): Short description of the recipe
        body (str): Step-by-step cooking instructions
        ingredients (list[str]): Ingredient lines, e.g. "200 g spaghetti"
        servings (int): Number of portions
        preparation_time_min (int): Time needed to prepare in minutes
        difficulty (str): Difficulty level (easy, medium, hard)
        tags (list[str]): Tags for categorization (e.g., ["quick", "vegetarian"])
        created_at (datetime): Recipe creation timestamp
        updated_at (datetime): Last recipe update timestamp

    Relationships:
        author: Many-to-one with User

    Example usage:
        recipe = Recipe(
            author_id=user.id,
            title="Pasta al Pomodoro",
            body="1. Boil water\\n2. Cook pasta\\n3. Add sauce",
            ingredients=["100 g pasta", "200 g tomatoes"],
            difficulty="easy",
            tags=["quick", "vegetarian"],
        )
        db.add(recipe)
        db.commit()
    """

    __tablename__ = "recipes"

    # Ownership
    # Recipes disappear together with their author
    author_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who wrote this recipe"
    )

    title = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Recipe title"
    )

    description = Column(
        Text,
        nullable=True,
        comment="Short recipe description"
    )

    body = Column(
        Text,
        nullable=True,
        comment="Cooking instructions"
    )

    # Free text lines, in the order the author wrote them
    ingredients = Column(
        JSON,
        nullable=False,
        default=list,
        comment="Ingredient lines"
    )

    servings = Column(
        Integer,
        nullable=True,
        comment="Number of portions"
    )

    preparation_time_min = Column(
        Integer,
        nullable=True,
        comment="Preparation time in minutes"
    )

    difficulty = Column(
        String(50),
        nullable=True,
        comment="Difficulty level (easy, medium, hard)"
    )

    tags = Column(
        JSON,
        nullable=False,
        default=list,
        comment="Recipe tags for categorization"
    )

    author = relationship("User", back_populates="recipes")

    def __repr__(self):
        """String representation for debugging."""
        return f"<Recipe(id={self.id}, title='{self.title}', author_id={self.author_id})>"

    def is_authored_by(self, user_id) -> bool:
        """Check whether the given user wrote this recipe."""
        return self.author_id == user_id


# Listing a user's recipes newest first
Index(
    'idx_recipes_author_created',
    Recipe.author_id,
    Recipe.created_at
)
