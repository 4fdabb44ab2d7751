"""Tests for ConversationStore."""

from datetime import datetime, timedelta

import pytest

from oraclio.db.database_models import ChatMessageDO
from oraclio.db.repositories import ChatMessageRepository
from oraclio.services.conversation_store import ConversationStore


@pytest.fixture
def store(db_conn):
    return ConversationStore(ChatMessageRepository(db_conn.conn))


class TestConversationStore:
    """Tests for ConversationStore."""

    async def test_create_message_assigns_id(self, store):
        record = await store.create_message(1, "hi", "hello")
        assert record.id is not None

        messages = await store.get_messages(1)
        assert [(m.message, m.response) for m in messages] == [("hi", "hello")]

    async def test_failed_write_still_returns_exchange(self):
        class BrokenRepository:
            def add(self, message):
                return None

        record = await ConversationStore(BrokenRepository()).create_message(1, "hi", "hello")
        assert record.id is None
        assert record.response == "hello"

    async def test_history_is_bounded_and_chronological(self, store):
        base = datetime(2024, 1, 1)
        for i in range(5):
            store.repository.add(ChatMessageDO(
                user_id=1, message=f"q{i}", response=f"a{i}", timestamp=base + timedelta(minutes=i)
            ))

        turns = await store.get_history(1, limit=2)

        assert [(t.role, t.content) for t in turns] == [
            ("user", "q3"), ("assistant", "a3"),
            ("user", "q4"), ("assistant", "a4"),
        ]

    async def test_history_for_unknown_user(self, store):
        assert await store.get_history(99) == []
