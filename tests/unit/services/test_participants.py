"""Tests for ParticipantService with a mocked repository."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from discussion.domain.errors import ConflictError, ValidationError
from discussion.domain.models.participants import Participant, ParticipantKey
from discussion.domain.models.query import Filter, QueryOptions
from discussion.services.participants import ParticipantService


async def test_add_participant_sets_timestamps():
    repo = AsyncMock()
    repo.find_one.return_value = None
    repo.create.side_effect = lambda participant: participant
    added = await ParticipantService(repo).add_participant(
        Participant(thread_id=uuid4(), user_id=uuid4())
    )
    assert added.joined_at is not None
    assert added.updated_at == added.joined_at


async def test_add_existing_participant_raises_conflict():
    repo = AsyncMock()
    repo.find_one.return_value = object()
    with pytest.raises(ConflictError):
        await ParticipantService(repo).add_participant(
            Participant(thread_id=uuid4(), user_id=uuid4())
        )
    repo.create.assert_not_awaited()


async def test_add_participant_concurrent_duplicate_raises_conflict():
    repo = AsyncMock()
    repo.find_one.return_value = None
    repo.create.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
    with pytest.raises(ConflictError):
        await ParticipantService(repo).add_participant(
            Participant(thread_id=uuid4(), user_id=uuid4())
        )


async def test_get_participant_uses_composite_key():
    repo = AsyncMock()
    thread_id, user_id = uuid4(), uuid4()
    await ParticipantService(repo).get_participant(str(thread_id), str(user_id))
    repo.find_by_id.assert_awaited_once_with(ParticipantKey(thread_id, user_id))


async def test_get_participants_by_thread():
    repo = AsyncMock()
    repo.find_by_thread.return_value = []
    thread_id = uuid4()
    assert await ParticipantService(repo).get_participants_by_thread(thread_id) == []
    repo.find_by_thread.assert_awaited_once_with(thread_id)


async def test_update_participant_refreshes_updated_at():
    repo = AsyncMock()
    repo.update.side_effect = lambda participant: participant
    updated = await ParticipantService(repo).update_participant(
        Participant(thread_id=uuid4(), user_id=uuid4())
    )
    assert updated.updated_at is not None


async def test_remove_participant_parses_ids():
    repo = AsyncMock()
    thread_id, user_id = uuid4(), uuid4()
    await ParticipantService(repo).remove_participant(str(thread_id), str(user_id))
    repo.remove.assert_awaited_once_with(thread_id, user_id)


async def test_remove_participant_invalid_id_raises():
    repo = AsyncMock()
    with pytest.raises(ValidationError):
        await ParticipantService(repo).remove_participant("x", uuid4())
    repo.remove.assert_not_awaited()


async def test_count_participants_passes_filters():
    repo = AsyncMock()
    repo.count.return_value = 4
    filters = [Filter.equal("thread_id", str(uuid4()))]
    assert await ParticipantService(repo).count_participants(filters) == 4
    repo.count.assert_awaited_once_with(filters)


async def test_search_participants_returns_pagination():
    repo = AsyncMock()
    repo.search.return_value = ([], 0)
    rows, pagination = await ParticipantService(repo).search_participants(
        "ayu", QueryOptions.build()
    )
    assert rows == []
    assert pagination.total_pages == 0
