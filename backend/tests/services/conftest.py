"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - Identity travels as X-User-Id / X-User-Name headers, as behind the proxy

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Helpers are fixtures returning coroutines: test dirs are not packages,
      so shared helpers cannot be imported
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from songquiz.db.base import Base
from songquiz.infrastructure.database import get_db, DatabaseSessionManager
import songquiz.infrastructure.database as db_module
from songquiz.main import app


def as_user(user_id: str, name: str | None = None) -> dict[str, str]:
    headers = {"X-User-Id": user_id}
    if name:
        headers["X-User-Name"] = name
    return headers


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def users():
    """Header sets for the cast used across route tests."""
    return {
        "alice": as_user("alice", "Alice"),
        "bob": as_user("bob", "Bob"),
        "carol": as_user("carol", "Carol"),
        "dave": as_user("dave", "Dave"),
        "mallory": as_user("mallory", "Mallory"),
    }


@pytest.fixture
def create_quiz(client, users):
    """Create a quiz as alice (or owner) and return its JSON."""
    async def _create(name: str = "Friday mix", owner: str = "alice") -> dict:
        resp = await client.post(
            "/api/v1/quizzes", json={"name": name}, headers=users[owner],
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture
def advance(client, users):
    """Walk a quiz forward through the given statuses as its owner."""
    async def _advance(quiz_id: int, *targets: str, owner: str = "alice") -> dict:
        body = None
        for target in targets:
            resp = await client.post(
                f"/api/v1/quizzes/{quiz_id}/transition",
                json={"target_status": target}, headers=users[owner],
            )
            assert resp.status_code == 200, resp.text
            body = resp.json()
        return body
    return _advance


@pytest.fixture
def join(client, users):
    async def _join(quiz_id: int, *names: str) -> None:
        for name in names:
            resp = await client.post(
                f"/api/v1/quizzes/{quiz_id}/participants", headers=users[name],
            )
            assert resp.status_code == 201, resp.text
    return _join


@pytest.fixture
def submit(client, users):
    async def _submit(quiz_id: int, name: str, link: str = "https://example.com/s") -> dict:
        resp = await client.post(
            f"/api/v1/quizzes/{quiz_id}/submissions",
            json={"song_link": link}, headers=users[name],
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _submit


@pytest.fixture
def guess(client, users):
    async def _guess(quiz_id: int, name: str, submission_id: int, accused: str):
        return await client.post(
            f"/api/v1/quizzes/{quiz_id}/guesses",
            json={"song_submission_id": submission_id, "guessed_user_id": accused},
            headers=users[name],
        )
    return _guess
