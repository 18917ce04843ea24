"""Unit tests for discussion/infrastructure/database.py.

Tests cover Settings defaults, env var override, and object types.
No database connection is required.
"""

import inspect

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from discussion.infrastructure.database import (
    AsyncSessionLocal,
    Base,
    Settings,
    engine,
    get_session,
)


def test_settings_default_url_uses_asyncpg():
    assert "postgresql+asyncpg" in Settings().database_url


def test_settings_default_url_targets_localhost():
    assert "localhost" in Settings().database_url


def test_settings_reads_database_url_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@myhost/mydb")
    assert Settings().database_url == "postgresql+asyncpg://u:p@myhost/mydb"


def test_settings_reads_echo_and_pool_size_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_ECHO", "true")
    monkeypatch.setenv("DATABASE_POOL_SIZE", "12")
    settings = Settings()
    assert settings.database_echo is True
    assert settings.database_pool_size == 12


def test_base_is_declarative_base():
    assert issubclass(Base, DeclarativeBase)


def test_engine_is_async():
    assert isinstance(engine, AsyncEngine)


def test_session_factory_produces_async_sessions():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)
    assert AsyncSessionLocal.class_ is AsyncSession


def test_get_session_is_async_generator():
    assert inspect.isasyncgenfunction(get_session)


def test_all_discussion_tables_registered():
    import discussion.infrastructure.persistence  # noqa: F401

    assert {"threads", "messages", "discussion_participants", "users_profile"} <= set(
        Base.metadata.tables
    )
