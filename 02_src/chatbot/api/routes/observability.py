"""Observability API routes."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ...app import Application


class HealthResponse(BaseModel):
    """Which components are up."""

    started: bool
    text_provider: str
    telegram: bool
    chats: int


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


def _to_response(event) -> dict:
    return {
        "id": event.id,
        "event_type": event.event_type,
        "actor": event.actor,
        "data": event.data,
        "timestamp": event.timestamp.isoformat(),
    }


def create_observability_router(app: Application) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(
                    status_code=400, detail="Invalid after timestamp format"
                )

        event_types = [event_type] if event_type else None

        try:
            events = await app.storage.get_trace_events(
                after=after_dt,
                event_types=event_types,
                actor=actor,
                limit=limit,
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [_to_response(e) for e in events]

    @router.get("/incidents", response_model=list[TraceEventResponse])
    async def list_incidents(
        chat_id: str | None = Query(None, description="Only failures in this chat"),
        limit: int = Query(50, ge=1, le=500),
    ) -> list[dict]:
        """Recent backend failures, newest first."""
        events = await app.storage.list_incidents(chat_id=chat_id, limit=limit)
        return [_to_response(e) for e in events]

    @router.get("/incidents/{error_id}", response_model=TraceEventResponse)
    async def get_incident(error_id: str) -> dict:
        """Look up the cause logged for a correlation id shown to a user."""
        event = await app.storage.find_incident(error_id)
        if event is None:
            raise HTTPException(status_code=404, detail="Unknown error id")
        return _to_response(event)

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        """Component summary."""
        return app.status()

    return router
