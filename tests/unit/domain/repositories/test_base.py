"""Tests for discussion/domain/repositories/base.py."""

import pytest

from discussion.domain.repositories.base import Repository
from discussion.domain.repositories.messages import MessageRepository
from discussion.domain.repositories.threads import ThreadRepository


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(Repository):
        async def create(self, entity): return entity
        async def find_by_id(self, id): return None
        # missing update, delete, list, search, count, exists, find_by_field, bulk_*

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    class _Full(Repository):
        async def create(self, entity): return entity
        async def find_by_id(self, id): return None
        async def update(self, entity): return entity
        async def delete(self, id): return None
        async def list(self, options): return []
        async def search(self, options): return [], 0
        async def count(self, filters=()): return 0
        async def exists(self, id): return False
        async def find_by_field(self, field, value): return []
        async def bulk_create(self, entities): return list(entities)
        async def bulk_update(self, entities): return list(entities)
        async def bulk_delete(self, ids): return None

    assert _Full() is not None


def test_thread_repository_requires_entity_operations():
    assert {"find_by_event", "find_active", "join"} <= ThreadRepository.__abstractmethods__


def test_repository_requires_bulk_operations():
    assert {"bulk_create", "bulk_update", "bulk_delete"} <= Repository.__abstractmethods__


def test_message_repository_requires_entity_operations():
    assert {
        "find_by_thread",
        "find_by_user",
        "find_recent",
        "count_by_thread",
        "create_if_participant",
    } <= MessageRepository.__abstractmethods__
