"""Command handlers."""

from .base import ICommandHandler, NoopHandler
from .chat import ChatHandler, format_chat_reply
from .group import GroupHandler, build_group_prompt, format_transcript
from .image import ImageHandler
from .reset import ResetHandler

__all__ = [
    "ICommandHandler",
    "NoopHandler",
    "ChatHandler",
    "GroupHandler",
    "ImageHandler",
    "ResetHandler",
    "build_group_prompt",
    "format_chat_reply",
    "format_transcript",
]
