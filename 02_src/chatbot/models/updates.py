"""Inbound updates and outbound messages exchanged with a transport."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal


@dataclass(frozen=True)
class IncomingUpdate:
    """A message observed in a chat."""

    chat_id: str
    text: str | None = None
    sender_name: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class OutboundMessage:
    """Something a handler sent back to a chat."""

    chat_id: str
    kind: Literal["text", "action", "media"]
    text: str | None = None
    action: str | None = None
    urls: list[str] = field(default_factory=list)
