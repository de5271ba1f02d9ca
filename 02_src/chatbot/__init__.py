"""Chat assistant bot core."""

from .app import Application, IApplication
from .config import Settings
from .handlers import ChatHandler, GroupHandler, ImageHandler, NoopHandler, ResetHandler
from .imaging import IImageBackend, ReplicateProvider
from .llm import AnthropicProvider, ITextBackend, OpenAIProvider
from .models import (
    ChatCommand,
    Completion,
    GroupCommand,
    GroupEntry,
    ImageCommand,
    ImageResult,
    IncomingUpdate,
    ResetCommand,
    Role,
    SessionState,
    TraceEvent,
    Turn,
    Usage,
)
from .router import CommandRouter, RouteOutcome
from .session import ChatSession, History, SessionHandle, SessionRegistry
from .storage import IStorage, Storage
from .tracker import ErrorReporter, ITracker, Tracker
from .transport import ChatAction, ITransport, RecordingTransport

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Role",
    "SessionState",
    "Turn",
    "GroupEntry",
    "ChatCommand",
    "ImageCommand",
    "GroupCommand",
    "ResetCommand",
    "Completion",
    "Usage",
    "ImageResult",
    "IncomingUpdate",
    "TraceEvent",
    # Sessions
    "History",
    "ChatSession",
    "SessionHandle",
    "SessionRegistry",
    # Routing
    "CommandRouter",
    "RouteOutcome",
    "ChatHandler",
    "GroupHandler",
    "ImageHandler",
    "ResetHandler",
    "NoopHandler",
    # Backends
    "ITextBackend",
    "OpenAIProvider",
    "AnthropicProvider",
    "IImageBackend",
    "ReplicateProvider",
    # Transport
    "ChatAction",
    "ITransport",
    "RecordingTransport",
    # Observability
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "ErrorReporter",
]
