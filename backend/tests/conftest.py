"""
Shared fixtures: a throwaway SQLite database per test, a TestClient wired
to it, and a fake image uploader.
"""
import os
import tempfile
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="cookbook-tests-"))

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP / 'default.sqlite3'}")
os.environ.setdefault("SECRET_KEY", "tests-secret-key")
os.environ.setdefault("LOG_DIR", str(_TMP / "logs"))
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cookbook_api.api.v1.deps import get_image_uploader
from cookbook_api.core.security import hash_password
from cookbook_api.db.session import get_db
from cookbook_api.main import app
from cookbook_api.models import Base, User, UserRole
from cookbook_api.models.recipe import Recipe
from cookbook_api.services.auth_service import create_access_token


PASSWORD = "super-secret-password"


class FakeUploader:
    """Stands in for CloudinaryClient; records every image it receives."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/avatars/new.png",
            "created_at": "2024-01-13T10:30:00Z",
            "public_id": "avatars/new",
        }
        self.error = error
        self.calls = []

    async def upload(self, image):
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.sqlite3'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    yield factory

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def uploader():
    return FakeUploader()


@pytest.fixture()
def client(session_factory, uploader):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_uploader] = lambda: uploader

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(name="Julia", email="julia@example.com", role=UserRole.USER, password=PASSWORD):
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_recipe(db):
    def _make_recipe(author, title="Pasta al Pomodoro", **fields):
        recipe = Recipe(author_id=author.id, title=title, **fields)
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make_recipe


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for():
    return auth_headers
