# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count
from pathlib import Path

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="ideaboard-uploads-"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ideaboard.core.security import create_access_token, hash_password
from ideaboard.db import Base
from ideaboard.db import get_db as app_get_session
from ideaboard.db.session import build_engine
from ideaboard.main import app as fastapi_app
from ideaboard.models import ROLE_ADMIN, ROLE_USER, Comment, Post, User
from ideaboard.services.avatars import AvatarStorage, get_avatar_storage

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def avatar_storage(app: FastAPI, tmp_path: Path) -> Iterator[AvatarStorage]:
    """Route avatar writes into a per-test directory."""
    storage = AvatarStorage(root=tmp_path, max_bytes=1024)
    app.dependency_overrides[get_avatar_storage] = lambda: storage
    try:
        yield storage
    finally:
        app.dependency_overrides.pop(get_avatar_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_header(user: User) -> dict[str, str]:
    """Return an Authorization header carrying a fresh token for ``user``."""
    token = create_access_token(user.id, username=user.username, avatar=user.avatar)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting accounts with the shared test password."""

    def _make(
        username: str | None = None,
        *,
        role: str = ROLE_USER,
        is_active: bool = True,
        password: str = TEST_PASSWORD,
    ) -> User:
        username = username or f"user{next(_USER_COUNTER)}"
        user = User(
            username=username,
            email=f"{username.lower()}@example.com",
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
            social_links={},
        )
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("bob")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("root", role=ROLE_ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_header(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_header(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return auth_header(admin_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Factory persisting posts directly, bypassing the API."""

    def _make(
        author: User,
        *,
        title: str = "A question about tests",
        content: str = "Some content that is long enough.",
        type: str = "question",
        tags: list[str] | None = None,
        views: int = 0,
        is_active: bool = True,
        is_pinned: bool = False,
        created_at: datetime | None = None,
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            type=type,
            author_id=author.id,
            views=views,
            is_active=is_active,
            is_pinned=is_pinned,
        )
        if created_at is not None:
            post.created_at = created_at
        post.tags = tags or []
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post(test_user, title="Baseline post", tags=["python", "testing"])


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make(post: Post, author: User, content: str = "Nice post", is_active: bool = True) -> Comment:
        comment = Comment(content=content, author_id=author.id, post_id=post.id, is_active=is_active)
        db_session.add(comment)
        db_session.flush()
        db_session.refresh(comment)
        db_session.expire(post, ["comments"])
        return comment

    return _make
