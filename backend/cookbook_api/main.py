"""
Cookbook API application.

Builds the FastAPI app: CORS, the catch-all error middleware, the
service-error handlers and the /api/v1 routers.

Run with:
    uvicorn cookbook_api.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from cookbook_api import __version__
from cookbook_api.api.v1.router import api_router
from cookbook_api.core.config import settings
from cookbook_api.db.session import SessionLocal, engine
from cookbook_api.middleware.cors import setup_cors
from cookbook_api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from cookbook_api.models import Base
from cookbook_api.services.error_logging import configure_error_logging


logger = logging.getLogger("cookbook_api")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    description="""
    Recipe sharing API.

    - Accounts with JWT bearer authentication and admin/editor/user roles
    - Profile avatars stored on Cloudinary
    - Recipes readable by every signed-in user, editable by their author
    """
)

setup_cors(app)
app.add_middleware(ErrorHandlerMiddleware)
register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    """
    Create missing tables and turn on file/database error logging.

    create_all only adds tables that do not exist yet; schema changes
    to existing tables need a migration.
    """
    Base.metadata.create_all(bind=engine)
    configure_error_logging(SessionLocal)
    logger.info(f"STARTUP | project={settings.PROJECT_NAME} | version={__version__}")


@app.on_event("shutdown")
async def shutdown_event():
    engine.dispose()
    logger.info("SHUTDOWN")


@app.get("/health", tags=["Health"], summary="Health Check")
def health_check():
    """
    Report whether the API and its database are reachable.

    Answers 503 with "database": "unreachable" when a trivial query fails.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"HEALTH_DB_FAILED | error={e}")
        database = "unreachable"

    return JSONResponse(
        status_code=200 if database == "ok" else 503,
        content={
            "status": "ok" if database == "ok" else "degraded",
            "database": database,
            "version": __version__,
            "api": settings.PROJECT_NAME,
        }
    )


@app.get("/", tags=["Root"], summary="API Root")
async def root():
    """Name, version and documentation links."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")
