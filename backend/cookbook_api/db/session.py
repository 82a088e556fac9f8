"""
Engine, session factory and the get_db dependency.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from cookbook_api.core.config import settings


# Sync endpoints run in a threadpool, so SQLite connections must be shareable
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,  # drop connections the server closed
    pool_recycle=3600,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request, closed when the response is done.

    Services commit explicitly; nothing is committed here.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
