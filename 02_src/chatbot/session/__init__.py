"""Session module."""

from .history import History
from .registry import ChatSession, SessionHandle, SessionRegistry

__all__ = ["History", "ChatSession", "SessionHandle", "SessionRegistry"]
