"""
Version 1 router: everything under /api/v1.

    /auth     register, login (public)
    /users    listing, profiles, roles, avatars (token required)
    /recipes  recipe CRUD (token required, mutations limited to the author)
"""

from fastapi import APIRouter

from cookbook_api.api.v1 import auth, recipes, users


api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
# recipes.router carries its own /recipes prefix
api_router.include_router(recipes.router)
