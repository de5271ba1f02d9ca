"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import TraceEvent


class IStorage(Protocol):
    """Persistent storage for trace events (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    async def find_incident(self, error_id: str) -> TraceEvent | None:
        """Get the backend_error event recorded for a correlation id."""
        ...

    async def list_incidents(self, chat_id: str | None = None, limit: int = 50) -> list[TraceEvent]:
        """Get backend_error events, newest first, optionally for one chat."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, default=str),
                event.timestamp.astimezone(timezone.utc).isoformat(),
            ),
        )
        await self._conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        conditions = []
        params: list = []

        if after:
            if after.tzinfo is None:
                after = after.replace(tzinfo=timezone.utc)
            conditions.append("timestamp > ?")
            params.append(after.astimezone(timezone.utc).isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        return [self._row_to_event(row) for row in rows]

    async def find_incident(self, error_id: str) -> TraceEvent | None:
        """Get the backend_error event recorded for a correlation id."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            WHERE event_type = 'backend_error'
              AND json_extract(data, '$.error_id') = ?
            LIMIT 1
            """,
            (error_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_event(row) if row else None

    async def list_incidents(self, chat_id: str | None = None, limit: int = 50) -> list[TraceEvent]:
        """Get backend_error events, newest first, optionally for one chat."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        query = """
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            WHERE event_type = 'backend_error'
        """
        params: list = []
        if chat_id is not None:
            query += " AND json_extract(data, '$.chat_id') = ?"
            params.append(chat_id)
        query += " ORDER BY timestamp DESC, rowid DESC LIMIT ?"
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()
        return [self._row_to_event(row) for row in rows]

    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute("DELETE FROM trace_events")
        await self._conn.commit()

    @staticmethod
    def _row_to_event(row) -> TraceEvent:
        return TraceEvent(
            id=row[0],
            event_type=row[1],
            actor=row[2],
            data=json.loads(row[3]),
            timestamp=datetime.fromisoformat(row[4]),
        )
