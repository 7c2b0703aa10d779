import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")

import pytest
from fastapi.testclient import TestClient

from streamai.api.deps import create_access_token, get_password_hash, get_signing_config
from streamai.config import SigningConfig
from streamai.db import JsonStore, get_store
from streamai.main import app
from streamai.models.user import User, UserRole

EDGE = "https://edge.example.com"
SECRET = "S"


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


@pytest.fixture
def signing_config():
    return SigningConfig(
        secret=SECRET,
        edge_base_url=EDGE,
        internal_host_pattern=r"(.+\.)?storage\.internal",
    )


@pytest.fixture
def client(store, signing_config):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_signing_config] = lambda: signing_config
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


async def _add_user(store: JsonStore, user_id: str, role: UserRole, **kw) -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@example.com",
        name=user_id.title(),
        hashed_password=get_password_hash("secret123"),
        role=role,
        **kw,
    )
    await store.insert("users", user.model_dump(mode="json", by_alias=True))
    return user


@pytest.fixture
def add_user(store):
    import asyncio

    def _add(user_id: str, role: UserRole = UserRole.USER, **kw) -> User:
        return asyncio.run(_add_user(store, user_id, role, **kw))

    return _add


@pytest.fixture
def auth_headers(add_user):
    def _headers(user_id: str = "viewer", role: UserRole = UserRole.USER, **kw) -> dict:
        user = add_user(user_id, role, **kw)
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def add_movie(store):
    import asyncio

    def _add(movie_id: str, video_url: str = "", **kw) -> dict:
        doc = {"id": movie_id, "title": kw.pop("title", f"Movie {movie_id}"), "videoUrl": video_url, **kw}
        asyncio.run(store.insert("movies", doc))
        return doc

    return _add
