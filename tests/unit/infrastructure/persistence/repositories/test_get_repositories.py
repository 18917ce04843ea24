"""Tests for the get_repositories() DI factory."""

from unittest.mock import AsyncMock

from discussion.infrastructure.persistence.repositories import (
    Repositories,
    SqlMessageRepository,
    SqlParticipantRepository,
    SqlThreadRepository,
    get_repositories,
)


def _repos():
    return get_repositories(AsyncMock())


def test_get_repositories_returns_repositories_instance():
    assert isinstance(_repos(), Repositories)


def test_repositories_threads_is_correct_type():
    assert isinstance(_repos().threads, SqlThreadRepository)


def test_repositories_messages_is_correct_type():
    assert isinstance(_repos().messages, SqlMessageRepository)


def test_repositories_participants_is_correct_type():
    assert isinstance(_repos().participants, SqlParticipantRepository)


def test_repositories_share_one_session():
    session = AsyncMock()
    repos = get_repositories(session)
    assert repos.threads._session is repos.messages._session is repos.participants._session is session


def test_repositories_dataclass_has_three_fields():
    assert len(Repositories.__dataclass_fields__) == 3
