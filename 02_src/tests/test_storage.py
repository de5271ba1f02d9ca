"""Tests for Storage."""

from datetime import datetime, timedelta, timezone

import pytest

from chatbot.models import TraceEvent


def make_event(event_id, event_type="test", actor="test", data=None, timestamp=None):
    return TraceEvent(
        id=event_id,
        event_type=event_type,
        actor=actor,
        data=data or {},
        timestamp=timestamp or datetime.now(timezone.utc),
    )


class TestStorageInit:
    """Tests for Storage initialization."""

    @pytest.mark.asyncio
    async def test_init_creates_tables(self, storage):
        """Test that init creates the trace table."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "trace_events" in tables

    @pytest.mark.asyncio
    async def test_uninitialized_storage_raises(self):
        from chatbot.storage import Storage

        storage = Storage(":memory:")

        with pytest.raises(RuntimeError):
            await storage.get_trace_events()


class TestStorageTraceEvents:
    """Tests for TraceEvent storage."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, storage):
        """Test saving and reading back a trace event."""
        await storage.save_trace_event(
            make_event("trace1", "message_recorded", "router", {"chat_id": "c1", "group_messages": 3})
        )

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].id == "trace1"
        assert events[0].event_type == "message_recorded"
        assert events[0].actor == "router"
        assert events[0].data == {"chat_id": "c1", "group_messages": 3}

    @pytest.mark.asyncio
    async def test_newest_first(self, storage):
        base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        for i in range(3):
            await storage.save_trace_event(make_event(f"trace{i}", timestamp=base + timedelta(minutes=i)))

        events = await storage.get_trace_events()
        assert [e.id for e in events] == ["trace2", "trace1", "trace0"]

    @pytest.mark.asyncio
    async def test_get_trace_events_with_limit(self, storage):
        """Test retrieving trace events with limit."""
        for i in range(10):
            await storage.save_trace_event(make_event(f"trace{i}"))

        events = await storage.get_trace_events(limit=5)
        assert len(events) == 5

    @pytest.mark.asyncio
    async def test_get_trace_events_by_actor(self, storage):
        """Test filtering trace events by actor."""
        await storage.save_trace_event(make_event("trace1", actor="router"))
        await storage.save_trace_event(make_event("trace2", actor="handler:chat"))

        events = await storage.get_trace_events(actor="router")
        assert len(events) == 1
        assert events[0].actor == "router"

    @pytest.mark.asyncio
    async def test_get_trace_events_by_type(self, storage):
        """Test filtering trace events by type."""
        await storage.save_trace_event(make_event("trace1", event_type="type1"))
        await storage.save_trace_event(make_event("trace2", event_type="type2"))
        await storage.save_trace_event(make_event("trace3", event_type="type3"))

        events = await storage.get_trace_events(event_types=["type1", "type3"])
        assert {e.event_type for e in events} == {"type1", "type3"}

    @pytest.mark.asyncio
    async def test_get_trace_events_after(self, storage):
        ts1 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        ts2 = datetime(2024, 1, 1, 12, 1, 0, tzinfo=timezone.utc)
        ts3 = datetime(2024, 1, 1, 12, 2, 0, tzinfo=timezone.utc)
        for event_id, ts in (("a", ts1), ("b", ts2), ("c", ts3)):
            await storage.save_trace_event(make_event(event_id, timestamp=ts))

        events = await storage.get_trace_events(after=ts2)
        assert [e.id for e in events] == ["c"]

    @pytest.mark.asyncio
    async def test_naive_after_is_treated_as_utc(self, storage):
        await storage.save_trace_event(
            make_event("a", timestamp=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
        )

        assert await storage.get_trace_events(after=datetime(2024, 1, 1, 11, 0, 0)) != []
        assert await storage.get_trace_events(after=datetime(2024, 1, 1, 13, 0, 0)) == []


class TestStorageIncidents:
    """Tests for looking up backend errors by correlation id."""

    @pytest.mark.asyncio
    async def test_find_incident(self, storage):
        await storage.save_trace_event(
            make_event("t1", "backend_error", "handler:chat", {"error_id": "abc", "cause": "timeout"})
        )
        await storage.save_trace_event(
            make_event("t2", "backend_error", "handler:image", {"error_id": "def", "cause": "nsfw"})
        )

        incident = await storage.find_incident("def")

        assert incident.id == "t2"
        assert incident.data["cause"] == "nsfw"

    @pytest.mark.asyncio
    async def test_find_incident_ignores_other_event_types(self, storage):
        await storage.save_trace_event(make_event("t1", "command_dispatched", "router", {"error_id": "abc"}))

        assert await storage.find_incident("abc") is None


class TestStorageIncidentList:
    """Tests for listing backend errors."""

    @pytest.mark.asyncio
    async def test_list_incidents_by_chat(self, storage):
        base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        await storage.save_trace_event(
            make_event("t1", "backend_error", "handler:chat", {"error_id": "a", "chat_id": "c1"}, base)
        )
        await storage.save_trace_event(
            make_event("t2", "backend_error", "handler:image", {"error_id": "b", "chat_id": "c2"}, base)
        )
        await storage.save_trace_event(
            make_event(
                "t3", "backend_error", "handler:group", {"error_id": "c", "chat_id": "c1"},
                base + timedelta(minutes=1),
            )
        )
        await storage.save_trace_event(make_event("t4", "message_recorded", "router", {"chat_id": "c1"}))

        # same timestamp: later insert first
        assert [e.id for e in await storage.list_incidents()] == ["t3", "t2", "t1"]
        assert [e.id for e in await storage.list_incidents(chat_id="c1")] == ["t3", "t1"]
        assert [e.id for e in await storage.list_incidents(chat_id="c1", limit=1)] == ["t3"]


class TestStorageClear:
    """Tests for clearing storage."""

    @pytest.mark.asyncio
    async def test_clear_all_data(self, storage):
        """Test clearing all data."""
        await storage.save_trace_event(make_event("trace1"))

        await storage.clear()

        assert await storage.get_trace_events() == []
