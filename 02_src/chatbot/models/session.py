"""Session-related data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Role of a turn in the assistant dialogue."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class SessionState(str, Enum):
    """Whether a chat session accepts commands."""

    OFFLINE = "offline"
    ONLINE = "online"


@dataclass(frozen=True)
class Turn:
    """One unit of the structured assistant dialogue."""

    role: Role
    content: str
    speaker_name: str | None = None  # absent for synthetic system turns


@dataclass(frozen=True)
class GroupEntry:
    """A raw message observed in a chat."""

    timestamp: datetime
    sender_name: str | None = None
    text: str | None = None
