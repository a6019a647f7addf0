"""
Test suite configuration and shared fixtures.
"""
import os
import tempfile
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Test environment, set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "true"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="defect-monitor-logs-"))

from defect_monitor.config.constants import CauseCategory, ProcessStep
from defect_monitor.core.database import Base, get_db
from defect_monitor.models import DefectRecord
from defect_monitor.schemas.defect_record_schema import DefectRecordCreate

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _memory_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with the schema created."""
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh database, one per test."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def broken_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a database without tables: every record query fails."""
    engine = _memory_engine()
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db_session):
    """API client whose requests share ``db_session``."""
    from defect_monitor.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client(broken_session):
    """API client whose record store always fails."""
    from defect_monitor.main import app

    async def override_get_db():
        yield broken_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_candidate():
    """Build a complete candidate; keyword arguments override fields."""
    def _make(**overrides) -> DefectRecordCreate:
        data = {
            "date": date.today(),
            "respondent": "田中",
            "process_step": ProcessStep.EXTRUSION,
            "cause_category": CauseCategory.EQUIPMENT,
            "comment": "表面に傷",
        }
        data.update(overrides)
        return DefectRecordCreate(**data)

    return _make


@pytest.fixture
def seed_records(db_session):
    """Insert rows directly, bypassing the duplicate check."""
    async def _seed(*rows: dict) -> list[DefectRecord]:
        records = []
        for i, row in enumerate(rows):
            data = {
                "date": date.today(),
                "respondent": "佐藤",
                "process_step": ProcessStep.CUTTING,
                "cause_category": CauseCategory.OPERATOR,
                "comment": f"seed_{i}",
            }
            data.update(row)
            records.append(DefectRecord(**data))
        db_session.add_all(records)
        await db_session.commit()
        return records

    return _seed
