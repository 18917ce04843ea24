"""Tests for the concrete helpers on ParticipantRepository."""

from uuid import uuid4

from discussion.domain.models.participants import ParticipantKey
from discussion.domain.repositories.participants import ParticipantRepository


class _Recording(ParticipantRepository):
    def __init__(self):
        self.deleted = []
        self.threads = []

    async def create(self, entity): return entity
    async def find_by_id(self, id): return None
    async def update(self, entity): return entity
    async def delete(self, id): self.deleted.append(id)
    async def list(self, options): return []
    async def search(self, options): return [], 0
    async def count(self, filters=()): return 0
    async def exists(self, id): return False
    async def find_by_field(self, field, value): return []
    async def bulk_create(self, entities): return list(entities)
    async def bulk_update(self, entities): return list(entities)
    async def bulk_delete(self, ids): return None
    async def find_one(self, thread_id, user_id): return None

    async def find_by_thread(self, thread_id):
        self.threads.append(thread_id)
        return ["p"]


async def test_remove_deletes_by_composite_key():
    repo = _Recording()
    thread_id, user_id = uuid4(), uuid4()
    await repo.remove(thread_id, user_id)
    assert repo.deleted == [ParticipantKey(thread_id, user_id)]


async def test_find_thread_participants_delegates_to_find_by_thread():
    repo = _Recording()
    thread_id = uuid4()
    assert await repo.find_thread_participants(thread_id) == ["p"]
    assert repo.threads == [thread_id]
