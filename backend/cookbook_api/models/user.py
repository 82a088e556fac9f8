"""
User accounts.

A user signs in with email and password, may have an avatar hosted on
Cloudinary, holds one role and authors any number of recipes. Deleting
a user deletes their recipes.
"""

import enum

from sqlalchemy import Column, Enum as SQLEnum, String
from sqlalchemy.orm import relationship

from cookbook_api.core.constants import ROLE_ADMIN, ROLE_EDITOR, ROLE_USER
from cookbook_api.models.base import BaseModel


class UserRole(str, enum.Enum):
    ADMIN = ROLE_ADMIN
    EDITOR = ROLE_EDITOR
    USER = ROLE_USER


class User(BaseModel):
    """
    Columns:
        name: display name, searched by exact match
        email: login identifier, unique
        password_hash: bcrypt hash, never serialized
        avatar_url: secure URL returned by the image host
        role: admin, editor or user (default)

    Example:
        user = User(name="Julia", email="julia@example.com", password_hash=hash_password(pw))
    """

    __tablename__ = "users"

    name = Column(String(255), nullable=False, index=True)

    email = Column(String(255), unique=True, nullable=False, index=True)

    password_hash = Column(String(255), nullable=False)

    avatar_url = Column(String(500), nullable=True)

    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)

    # ORM-level cascade; SQLite does not enforce the FK's ON DELETE CASCADE
    recipes = relationship(
        "Recipe",
        back_populates="author",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
