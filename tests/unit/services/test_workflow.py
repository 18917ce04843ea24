"""End-to-end service flows against the in-memory SQLite repositories."""

from uuid import uuid4

import pytest

from discussion.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from discussion.domain.models.enums import ThreadStatus
from discussion.domain.models.messages import Message
from discussion.domain.models.participants import Participant
from discussion.domain.models.query import QueryOptions
from discussion.domain.models.threads import Thread
from discussion.services import MessageService, ParticipantService, ThreadService


@pytest.fixture
def services(repos):
    return (
        ThreadService(repos.threads, repos.participants),
        MessageService(repos.messages, repos.threads),
        ParticipantService(repos.participants),
    )


def _thread(**overrides):
    fields = {
        "title": "Discussion about Monas History",
        "event_id": uuid4(),
        "creator_id": uuid4(),
    }
    fields.update(overrides)
    return Thread(**fields)


async def test_join_then_post_message(services):
    threads, messages, _ = services
    thread = await threads.create_thread(_thread())
    member = uuid4()
    await threads.join_thread(thread.id, member)

    posted = await messages.create_message(
        Message(thread_id=thread.id, sender_id=member, content="Who designed Monas?")
    )
    rows = await messages.get_messages_by_thread(thread.id)
    assert [m.id for m in rows] == [posted.id]


async def test_non_participant_cannot_post(services):
    threads, messages, _ = services
    thread = await threads.create_thread(_thread())
    with pytest.raises(AuthorizationError):
        await messages.create_message(
            Message(thread_id=thread.id, sender_id=uuid4(), content="hello?")
        )
    assert await messages.count_messages() == 0


async def test_second_thread_for_event_is_rejected(services):
    threads, _, _ = services
    first = await threads.create_thread(_thread())
    with pytest.raises(ConflictError):
        await threads.create_thread(_thread(event_id=first.event_id))


async def test_join_twice_is_rejected(services):
    threads, _, _ = services
    thread = await threads.create_thread(_thread())
    user_id = uuid4()
    await threads.join_thread(thread.id, user_id)
    with pytest.raises(ConflictError):
        await threads.join_thread(thread.id, user_id)


async def test_join_closed_thread_is_rejected(services):
    threads, _, _ = services
    thread = await threads.create_thread(_thread(status=ThreadStatus.CLOSED))
    with pytest.raises(ValidationError):
        await threads.join_thread(thread.id, uuid4())


async def test_join_missing_thread_raises_not_found(services):
    threads, _, _ = services
    with pytest.raises(NotFoundError):
        await threads.join_thread(uuid4(), uuid4())


async def test_leave_thread(services):
    threads, _, participants = services
    thread = await threads.create_thread(_thread())
    user_id = uuid4()
    await threads.join_thread(thread.id, user_id)
    await participants.remove_participant(thread.id, user_id)
    assert await participants.get_participants_by_thread(thread.id) == []


async def test_creator_can_close_thread(services):
    threads, _, _ = services
    thread = await threads.create_thread(_thread())
    await threads.update_thread(
        thread.model_copy(update={"status": ThreadStatus.CLOSED}), actor_id=thread.creator_id
    )
    assert (await threads.get_thread(thread.id)).status is ThreadStatus.CLOSED
    assert await threads.get_active_threads() == []


async def test_search_threads_paginates(services):
    threads, _, _ = services
    for i in range(12):
        await threads.create_thread(_thread(title=f"Monas tour {i}"))
    await threads.create_thread(_thread(title="Kota Tua walk"))

    rows, pagination = await threads.search_threads("monas", QueryOptions.build(per_page=5))
    assert len(rows) == 5
    assert pagination.total == 12
    assert pagination.total_pages == 3
    assert pagination.has_next_page is True


async def test_thread_creator_can_delete_any_message(services):
    threads, messages, _ = services
    thread = await threads.create_thread(_thread())
    member = uuid4()
    await threads.join_thread(thread.id, member)
    posted = await messages.create_message(
        Message(thread_id=thread.id, sender_id=member, content="off-topic")
    )
    await messages.delete_message(posted.id, actor_id=thread.creator_id)
    with pytest.raises(NotFoundError):
        await messages.get_message(posted.id)


async def test_add_participant_twice_in_one_session_is_rejected(services):
    threads, _, participants = services
    thread = await threads.create_thread(_thread())
    member = Participant(thread_id=thread.id, user_id=uuid4())
    await participants.add_participant(member)
    with pytest.raises(ConflictError):
        await participants.add_participant(member)
    assert len(await participants.get_participants_by_thread(thread.id)) == 1
