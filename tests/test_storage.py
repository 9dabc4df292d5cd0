"""Contract tests shared by MemStorage and DatabaseStorage, plus the known divergences."""
import datetime
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import IntegrityError


def test_create_conversation_stamps_equal_timestamps(storage):
    conversation = storage.create_conversation("Switching to UX design")

    assert conversation.id >= 1
    assert conversation.title == "Switching to UX design"
    assert conversation.created_at == conversation.updated_at


def test_ids_are_unique(storage):
    ids = {storage.create_conversation(f"c{i}").id for i in range(5)}
    assert len(ids) == 5


def test_get_conversation_unknown_id_returns_none(storage):
    assert storage.get_conversation(12345) is None


def test_get_conversation_returns_stored_record(storage):
    created = storage.create_conversation("Resume review")
    fetched = storage.get_conversation(created.id)

    assert fetched.id == created.id
    assert fetched.title == "Resume review"


def test_create_message_touches_conversation(storage):
    conversation = storage.create_conversation("Networking")
    before = storage.get_conversation(conversation.id).updated_at
    time.sleep(0.01)

    storage.create_message(conversation.id, "user", "How do I network on LinkedIn?")

    after = storage.get_conversation(conversation.id)
    assert after.updated_at >= before
    assert after.updated_at >= after.created_at


def test_message_content_round_trips_unchanged(storage):
    conversation = storage.create_conversation("Whitespace")
    content = "  leading and trailing spaces \n and a newline  "

    message = storage.create_message(conversation.id, "user", content)
    stored = storage.get_messages_by_conversation(conversation.id)

    assert message.content == content
    assert [m.content for m in stored] == [content]
    assert stored[0].role == "user"
    assert stored[0].conversation_id == conversation.id


def test_messages_listed_in_creation_order(storage):
    conversation = storage.create_conversation("Order")
    for i in range(6):
        storage.create_message(conversation.id, "user" if i % 2 == 0 else "assistant", f"m{i}")

    messages = storage.get_messages_by_conversation(conversation.id)

    assert [m.content for m in messages] == [f"m{i}" for i in range(6)]
    for earlier, later in zip(messages, messages[1:]):
        assert earlier.created_at <= later.created_at


def test_messages_only_for_requested_conversation(storage):
    first = storage.create_conversation("first")
    second = storage.create_conversation("second")
    storage.create_message(first.id, "user", "for first")
    storage.create_message(second.id, "user", "for second")

    assert [m.content for m in storage.get_messages_by_conversation(first.id)] == ["for first"]


def test_messages_for_unknown_conversation_is_empty_list(storage):
    assert storage.get_messages_by_conversation(999) == []


def test_conversations_listed_most_recently_updated_first(storage):
    older = storage.create_conversation("older")
    time.sleep(0.01)
    newer = storage.create_conversation("newer")
    time.sleep(0.01)
    storage.create_message(older.id, "user", "bump")

    conversations = storage.get_conversations()

    assert [c.id for c in conversations] == [older.id, newer.id]
    for earlier, later in zip(conversations, conversations[1:]):
        assert earlier.updated_at >= later.updated_at


def test_update_conversation_title(storage):
    conversation = storage.create_conversation("Old title")
    time.sleep(0.01)

    storage.update_conversation_title(conversation.id, "New title")

    updated = storage.get_conversation(conversation.id)
    assert updated.title == "New title"
    assert updated.created_at == conversation.created_at
    assert updated.updated_at >= conversation.updated_at


def test_update_title_of_unknown_conversation_is_silent(storage):
    storage.update_conversation_title(404, "Nobody home")

    assert storage.get_conversation(404) is None
    assert storage.get_conversations() == []


def test_memory_backend_keeps_dangling_message(mem_storage):
    message = mem_storage.create_message(77, "user", "orphan")

    assert message.conversation_id == 77
    assert mem_storage.get_conversation(77) is None
    assert [m.content for m in mem_storage.get_messages_by_conversation(77)] == ["orphan"]


def test_database_backend_rejects_dangling_message(db_storage):
    with pytest.raises(IntegrityError):
        db_storage.create_message(77, "user", "orphan")

    assert db_storage.get_messages_by_conversation(77) == []


def test_timestamps_are_utc_aware(storage):
    conversation = storage.create_conversation("Timezones")
    message = storage.create_message(conversation.id, "user", "hi")

    stored = storage.get_conversation(conversation.id)
    listed = storage.get_conversations()[0]
    replayed = storage.get_messages_by_conversation(conversation.id)[0]
    for value in (
        conversation.created_at,
        stored.created_at,
        stored.updated_at,
        listed.updated_at,
        message.created_at,
        replayed.created_at,
    ):
        assert value.utcoffset() == datetime.timedelta(0)


def test_memory_backend_concurrent_renames_and_appends(mem_storage):
    conversation = mem_storage.create_conversation("start")

    def append(i):
        mem_storage.create_message(conversation.id, "user", f"m{i}")

    def rename(i):
        mem_storage.update_conversation_title(conversation.id, f"title {i}")

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = []
        for i in range(200):
            futures.append(pool.submit(append, i))
            futures.append(pool.submit(rename, i))
            futures.append(pool.submit(mem_storage.get_messages_by_conversation, conversation.id))
        for future in futures:
            future.result()

    final = mem_storage.get_conversation(conversation.id)
    messages = mem_storage.get_messages_by_conversation(conversation.id)
    assert len(messages) == 200
    assert len({m.id for m in messages}) == 200
    assert final.title.startswith("title ")
    assert final.updated_at >= max(m.created_at for m in messages)
