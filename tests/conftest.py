# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from safepath_community.core.settings import settings
from safepath_community.db.session import Base
from safepath_community.db.session import get_db as app_get_session
from safepath_community.main import app as fastapi_app
from safepath_community.models import Discussion
from safepath_community.schemas.category import get_category
from safepath_community.schemas.discussion import DiscussionResponse

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

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
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_access_token(
    user_id: str | None = "user-1",
    *,
    expires_in: timedelta = timedelta(minutes=15),
    secret: str | None = None,
    claim: str = "userId",
) -> str:
    """Sign an access token the way the auth service issues them."""
    payload: dict[str, Any] = {"exp": datetime.now(UTC) + expires_in}
    if user_id is not None:
        payload[claim] = user_id
    return jwt.encode(
        payload,
        secret or settings.jwt_access_secret,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture()
def token_factory() -> Callable[..., str]:
    """Return a helper that signs access tokens for tests."""
    return make_access_token


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {make_access_token('user-1')}"}


@pytest.fixture()
def other_auth_headers() -> dict[str, str]:
    """Return authorization headers for a second test user."""
    return {"Authorization": f"Bearer {make_access_token('user-2')}"}


@pytest.fixture()
def discussion_factory() -> Callable[..., DiscussionResponse]:
    """Build in-memory discussions for ranking and controller tests."""

    def _build(
        discussion_id: str,
        *,
        title: str = "Untitled",
        content: str = "",
        category: str = "general",
        tags: list[str] | None = None,
        upvotes: int = 0,
        downvotes: int = 0,
        reply_count: int = 0,
        is_pinned: bool = False,
        created_minutes: int = 0,
        updated_minutes: int | None = None,
    ) -> DiscussionResponse:
        created_at = BASE_TIME + timedelta(minutes=created_minutes)
        updated_at = BASE_TIME + timedelta(
            minutes=created_minutes if updated_minutes is None else updated_minutes
        )
        return DiscussionResponse(
            id=discussion_id,
            title=title,
            content=content,
            category=get_category(category),
            tags=tags or [],
            upvotes=upvotes,
            downvotes=downvotes,
            reply_count=reply_count,
            is_pinned=is_pinned,
            created_at=created_at,
            updated_at=updated_at,
        )

    return _build


@pytest.fixture()
def test_discussion(db_session: Session) -> Iterator[Discussion]:
    """Create a baseline persisted discussion."""
    discussion = Discussion(
        title="Flood warning on the river walk",
        content="Water is rising near the underpass.",
        category_id="incidents",
        tags=["flood"],
        author_id="user-1",
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    db_session.add(discussion)
    db_session.flush()
    db_session.refresh(discussion)
    yield discussion
