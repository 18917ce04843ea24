"""In-memory SQLite fixtures for repository and service scenario tests.

Every test gets a fresh schema built from Base.metadata on a single shared
connection, with foreign keys enforced so ON DELETE CASCADE applies.
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import discussion.infrastructure.persistence  # noqa: F401
from discussion.infrastructure.database import Base
from discussion.infrastructure.persistence.repositories import get_repositories


def _enable_foreign_keys(dbapi_connection, _record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db_session:
        yield db_session

    await engine.dispose()


@pytest.fixture
def repos(session):
    return get_repositories(session)
