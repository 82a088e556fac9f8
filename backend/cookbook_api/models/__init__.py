"""
Database Models Module
Contains SQLAlchemy ORM models for all database tables.

All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from cookbook_api.db.base import Base
from cookbook_api.models.base import BaseModel
from cookbook_api.models.user import User, UserRole
from cookbook_api.models.recipe import Recipe
from cookbook_api.models.error_log import ErrorLog

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "UserRole",
    "Recipe",
    "ErrorLog",
]
