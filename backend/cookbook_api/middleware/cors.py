"""
CORS for browser frontends served from another origin.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cookbook_api.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """Allow settings.CORS_ORIGINS to call the API with credentials."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
