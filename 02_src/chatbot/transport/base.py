"""Transport abstraction used by handlers."""

from enum import Enum
from typing import Protocol

from ..models import OutboundMessage


class ChatAction(str, Enum):
    """Progress indicators shown while a command is processed."""

    TYPING = "typing"
    UPLOAD_PHOTO = "upload_photo"


class ITransport(Protocol):
    """Send-only view of a chat transport."""

    @property
    def bot_name(self) -> str | None:
        """Display name of the bot on this transport."""
        ...

    async def send_action(self, chat_id: str, action: ChatAction) -> None:
        """Show a progress indicator in the chat."""
        ...

    async def send_text(self, chat_id: str, text: str) -> None:
        """Send a MarkdownV2 message."""
        ...

    async def send_media_group(self, chat_id: str, urls: list[str]) -> None:
        """Send images by URL as one grouped attachment."""
        ...


class RecordingTransport:
    """Transport that keeps everything it is asked to send."""

    def __init__(self, bot_name: str | None = "assistant"):
        self._bot_name = bot_name
        self.sent: list[OutboundMessage] = []

    @property
    def bot_name(self) -> str | None:
        return self._bot_name

    async def send_action(self, chat_id: str, action: ChatAction) -> None:
        self.sent.append(OutboundMessage(chat_id=chat_id, kind="action", action=action.value))

    async def send_text(self, chat_id: str, text: str) -> None:
        self.sent.append(OutboundMessage(chat_id=chat_id, kind="text", text=text))

    async def send_media_group(self, chat_id: str, urls: list[str]) -> None:
        self.sent.append(OutboundMessage(chat_id=chat_id, kind="media", urls=list(urls)))

    @property
    def texts(self) -> list[str]:
        """Text messages sent so far."""
        return [m.text for m in self.sent if m.kind == "text" and m.text is not None]

    @property
    def media(self) -> list[list[str]]:
        """URL groups sent so far."""
        return [m.urls for m in self.sent if m.kind == "media"]
