"""Core data models for the chat bot."""

from .commands import (
    ChatCommand,
    Command,
    GroupCommand,
    ImageCommand,
    ResetCommand,
    command_descriptions,
    command_name,
    parse_command,
)
from .completions import Choice, Completion, ImageResult, Usage
from .session import GroupEntry, Role, SessionState, Turn
from .tracing import TraceEvent
from .updates import IncomingUpdate, OutboundMessage

__all__ = [
    # Session
    "Role",
    "SessionState",
    "Turn",
    "GroupEntry",
    # Commands
    "Command",
    "ChatCommand",
    "ImageCommand",
    "GroupCommand",
    "ResetCommand",
    "command_descriptions",
    "command_name",
    "parse_command",
    # Backends
    "Choice",
    "Completion",
    "ImageResult",
    "Usage",
    # Transport
    "IncomingUpdate",
    "OutboundMessage",
    # Tracing
    "TraceEvent",
]
