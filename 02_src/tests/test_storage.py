"""Tests for Storage backends."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from eventbot.models import ConversationState, DialogInstance, TraceEvent
from eventbot.storage import MemoryStorage, SqliteStorage


@pytest_asyncio.fixture(params=["sqlite", "memory"])
async def any_storage(request):
    """Each storage backend, initialized and empty."""
    st = SqliteStorage(":memory:") if request.param == "sqlite" else MemoryStorage()
    await st.init()
    yield st
    await st.close()


def _event(event_id: str, event_type: str, actor: str, ts: datetime) -> TraceEvent:
    return TraceEvent(
        id=event_id, event_type=event_type, actor=actor, data={"n": event_id}, timestamp=ts
    )


class TestSqliteStorageInit:
    """Tests for SqliteStorage initialization."""

    @pytest.mark.asyncio
    async def test_init_creates_tables(self, storage):
        """Test that init creates all tables."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "conversation_states" in tables
            assert "trace_events" in tables

    @pytest.mark.asyncio
    async def test_use_before_init_raises(self):
        """Test that using storage before init raises."""
        st = SqliteStorage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.load_state("c1")

    @pytest.mark.asyncio
    async def test_file_database_persists_across_connections(self, tmp_path):
        """Test that a file database keeps state after reopening."""
        db_path = tmp_path / "nested" / "bot.db"
        st = SqliteStorage(db_path)
        await st.init()
        await st.save_state(ConversationState("c1", properties={"welcomed_user": True}))
        await st.close()

        reopened = SqliteStorage(db_path)
        await reopened.init()
        state = await reopened.load_state("c1")
        await reopened.close()

        assert state is not None
        assert state.properties == {"welcomed_user": True}


class TestConversationStates:
    """Tests for conversation state persistence."""

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self, any_storage):
        """Test loading an unknown conversation returns None."""
        assert await any_storage.load_state("nonexistent") is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, any_storage):
        """Test saving and loading a conversation state."""
        state = ConversationState("c1", properties={"welcomed_user": True})
        state.dialog_stack.push(DialogInstance("main_menu", cursor=2))
        state.dialog_stack.push(
            DialogInstance("area_prompt", options={"prompt": "Where?"}, state={"attempts": 1})
        )
        await any_storage.save_state(state)

        loaded = await any_storage.load_state("c1")
        assert loaded.conversation_id == "c1"
        assert loaded.dialog_stack.ids() == ["main_menu", "area_prompt"]
        assert loaded.dialog_stack.top.state == {"attempts": 1}
        assert loaded.properties == {"welcomed_user": True}

    @pytest.mark.asyncio
    async def test_save_replaces_previous(self, any_storage):
        """Test saving twice keeps only the latest state."""
        first = ConversationState("c1")
        first.dialog_stack.push(DialogInstance("main_menu"))
        await any_storage.save_state(first)

        await any_storage.save_state(ConversationState("c1"))

        loaded = await any_storage.load_state("c1")
        assert loaded.dialog_stack.is_empty

    @pytest.mark.asyncio
    async def test_loaded_state_is_a_copy(self, any_storage):
        """Test mutating a loaded state does not change what is stored."""
        state = ConversationState("c1")
        state.dialog_stack.push(DialogInstance("main_menu"))
        await any_storage.save_state(state)

        loaded = await any_storage.load_state("c1")
        loaded.dialog_stack.clear()

        again = await any_storage.load_state("c1")
        assert again.dialog_stack.depth == 1

    @pytest.mark.asyncio
    async def test_conversations_are_independent(self, any_storage):
        """Test states are keyed by conversation id."""
        a = ConversationState("a")
        a.dialog_stack.push(DialogInstance("main_menu"))
        await any_storage.save_state(a)
        await any_storage.save_state(ConversationState("b"))

        assert (await any_storage.load_state("a")).dialog_stack.depth == 1
        assert (await any_storage.load_state("b")).dialog_stack.depth == 0


class TestTraceEvents:
    """Tests for TraceEvent storage."""

    @pytest.mark.asyncio
    async def test_get_trace_events_newest_first(self, any_storage):
        """Test trace events come back newest first."""
        base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        await any_storage.save_trace_event(_event("e1", "a", "x", base))
        await any_storage.save_trace_event(_event("e2", "b", "x", base + timedelta(minutes=1)))

        events = await any_storage.get_trace_events()
        assert [e.id for e in events] == ["e2", "e1"]
        assert events[0].data == {"n": "e2"}
        assert events[0].timestamp == base + timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_filters(self, any_storage):
        """Test after, event type and actor filters."""
        base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        await any_storage.save_trace_event(_event("e1", "turn_completed", "router", base))
        await any_storage.save_trace_event(
            _event("e2", "dialog_started", "engine", base + timedelta(minutes=1))
        )
        await any_storage.save_trace_event(
            _event("e3", "turn_completed", "router", base + timedelta(minutes=2))
        )

        after = await any_storage.get_trace_events(after=base + timedelta(seconds=30))
        assert {e.id for e in after} == {"e2", "e3"}

        typed = await any_storage.get_trace_events(event_types=["turn_completed"])
        assert {e.id for e in typed} == {"e1", "e3"}

        by_actor = await any_storage.get_trace_events(actor="engine")
        assert [e.id for e in by_actor] == ["e2"]

    @pytest.mark.asyncio
    async def test_limit(self, any_storage):
        """Test the limit caps the result size."""
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(5):
            await any_storage.save_trace_event(
                _event(f"e{i}", "t", "a", base + timedelta(seconds=i))
            )

        events = await any_storage.get_trace_events(limit=2)
        assert [e.id for e in events] == ["e4", "e3"]


class TestClear:
    """Tests for clearing storage."""

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, any_storage):
        """Test clear drops states and trace events."""
        await any_storage.save_state(ConversationState("c1"))
        await any_storage.save_trace_event(
            _event("e1", "t", "a", datetime.now(timezone.utc))
        )

        await any_storage.clear()

        assert await any_storage.load_state("c1") is None
        assert await any_storage.get_trace_events() == []
