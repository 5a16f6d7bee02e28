"""Service test fixtures — async DB, repository, service and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes hit the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the repository uses no
      PostgreSQL-only features
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import OperationalError
from httpx import ASGITransport, AsyncClient

import budget_planner.models  # noqa: F401
from budget_planner.db.base import Base
from budget_planner.infrastructure.budget_repository import SqlBudgetRepository
from budget_planner.infrastructure.database import get_db, DatabaseSessionManager
import budget_planner.infrastructure.database as db_module
from budget_planner.main import app
from budget_planner.services.budget_service import BudgetService


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
async def repository(test_db):
    return SqlBudgetRepository(test_db, expense_write_attempts=3)


@pytest.fixture
async def service(repository):
    return BudgetService(repository)


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
def budget_payload():
    return {
        "month": "2024-01",
        "name": "January",
        "income": 1000,
        "categories": [{"name": "Food", "planned": 200}],
    }


@pytest.fixture
def expense_payload():
    return {
        "date": "2024-01-05",
        "category": "Food",
        "description": "Groceries",
        "amount": 50,
    }


class UnreachableSession:
    """Session double whose every statement fails like a dropped connection."""

    def __init__(self):
        self.rolled_back = False
        self.closed = False

    async def execute(self, *args, **kwargs):
        raise OperationalError(
            "SELECT 1", {}, ConnectionRefusedError("connection refused"),
        )

    async def commit(self):
        raise OperationalError(
            "COMMIT", {}, ConnectionRefusedError("connection refused"),
        )

    async def rollback(self):
        self.rolled_back = True

    async def close(self):
        self.closed = True


@pytest.fixture
def unreachable_session():
    return UnreachableSession()


@pytest.fixture
def unreachable_db_manager(unreachable_session):
    """DatabaseSessionManager wired to a store that refuses every statement."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = None
    manager._session_factory = lambda: unreachable_session
    return manager
