"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event."""

    id: str
    event_type: str  # e.g. "command_dispatched", "backend_error"
    actor: str  # who created this event
    data: dict  # self-contained payload for display
    timestamp: datetime
