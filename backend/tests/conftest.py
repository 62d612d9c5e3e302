"""
Pokedex Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment overrides run before any `app` import, so the settings
       singleton and module-level engine see the test values.

Fixtures:
    ├── db_engine:     In-memory SQLite (aiosqlite) with the schema created
    ├── db_session:    AsyncSession on that engine
    ├── store:         PokemonStore on db_session
    ├── mock_store:    AsyncMock shaped like PokemonStore (no database)
    ├── make_pokemon:  Factory for detached Pokemon rows
    └── test_client:   HTTPX AsyncClient wired to the app and db_engine
"""

import os
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEFAULT_LIMIT"] = "5"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api/v2"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.models.pokemon import Pokemon
from app.repositories.pokemon_repository import PokemonStore


@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps one connection, so every session sees the same memory DB.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session) -> PokemonStore:
    return PokemonStore(db_session)


@pytest.fixture
def mock_store():
    """
    Store double for service unit tests.

    Every async method of PokemonStore becomes an AsyncMock; find_* default
    to "no match" so each test only configures the lookups it cares about.
    """
    store = AsyncMock(spec=PokemonStore)
    store.find_by_no.return_value = None
    store.find_by_id.return_value = None
    store.find_by_name.return_value = None
    return store


@pytest.fixture
def make_pokemon():
    """Build a detached Pokemon as the store would return it."""

    def _make(name: str = "bulbasaur", no: Any = 1, **attributes: Any) -> Pokemon:
        return Pokemon(id=uuid4(), name=name, no=no, attributes=attributes, version=1)

    return _make


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden so each request gets its own session on the
    test engine, committing on success like the real dependency.
    """
    from app.main import app

    async def _test_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
