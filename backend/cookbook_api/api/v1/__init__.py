"""
API v1 routers.
"""

from cookbook_api.api.v1 import auth, recipes, users

__all__ = ["auth", "recipes", "users"]
