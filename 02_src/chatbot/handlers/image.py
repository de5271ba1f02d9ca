"""/image: generate pictures from a prompt."""

from urllib.parse import urlsplit

from ..errors import BackendError
from ..imaging import IImageBackend
from ..models import ImageCommand, IncomingUpdate
from ..session import SessionHandle
from ..tracker import ErrorReporter
from ..transport import ChatAction, ITransport


def is_media_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class ImageHandler:
    """Stateless: forwards the prompt and relays the produced images."""

    command_name = "image"

    def __init__(self, backend: IImageBackend, reporter: ErrorReporter):
        self._backend = backend
        self._reporter = reporter

    async def handle(
        self,
        command: ImageCommand,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        await transport.send_action(update.chat_id, ChatAction.UPLOAD_PHOTO)

        try:
            result = await self._backend.generate(command.text)
        except BackendError as e:
            message = await self._reporter.report(e, chat_id=update.chat_id, command=self.command_name)
            await transport.send_text(update.chat_id, message)
            return

        urls = [url for url in result.urls if is_media_url(url)]
        if not urls:
            # An empty result is reported exactly like a failed request
            cause = result.error or "image backend produced no output"
            message = await self._reporter.report(cause, chat_id=update.chat_id, command=self.command_name)
            await transport.send_text(update.chat_id, message)
            return

        await transport.send_media_group(update.chat_id, urls)
