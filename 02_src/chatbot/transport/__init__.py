"""Transport module."""

from .base import ChatAction, ITransport, RecordingTransport
from .formatting import code, escape

__all__ = ["ChatAction", "ITransport", "RecordingTransport", "code", "escape"]
