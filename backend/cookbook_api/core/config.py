"""
Configuration
Settings read from the environment or a .env file with pydantic-settings.

DATABASE_URL and SECRET_KEY have no default; startup fails without them.
Avatar upload stays disabled until all three Cloudinary credentials are set.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings; import the `settings` instance below."""

    # Store
    DATABASE_URL: str  # e.g. postgresql://cookbook:pw@localhost:5432/cookbook or sqlite:///./cookbook.db

    # Tokens
    SECRET_KEY: str  # HS256 signing key
    JWT_EXPIRATION: int = 3600  # seconds

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "avatars"
    CLOUDINARY_API_URL: str = "https://api.cloudinary.com/v1_1"
    UPLOAD_TIMEOUT: float = 30.0  # seconds

    # Logging
    LOG_DIR: str = "logs"  # errors.log lives here

    # HTTP surface
    API_VERSION: str = "v1"  # routes are mounted under /api/{API_VERSION}
    PROJECT_NAME: str = "Cookbook API"
    DEBUG: bool = False  # echoes SQL when True
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:4200",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


settings = Settings()
