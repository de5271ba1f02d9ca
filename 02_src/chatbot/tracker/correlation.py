"""Error correlation: opaque ids for backend failures."""

import uuid

from ..logging_config import get_logger
from ..transport.formatting import code
from .tracker import ITracker

logger = get_logger(__name__)

ERROR_MESSAGE = (
    "there was an error processing your request, "
    "you can use this ID to track the issue {error_id}"
)


class ErrorReporter:
    """Logs a backend failure under a fresh id and builds the user-facing text.

    The user only ever sees the id; the cause stays in the log and the
    backend_error trace event.
    """

    def __init__(self, tracker: ITracker | None = None):
        self._tracker = tracker

    async def report(
        self,
        cause: BaseException | str,
        *,
        chat_id: str,
        command: str,
    ) -> str:
        """Record the failure and return the MarkdownV2 message for the chat."""
        error_id = uuid.uuid4().hex
        detail = repr(cause) if isinstance(cause, BaseException) else cause

        logger.error(
            "Backend failure %s in /%s for chat %s: %s",
            error_id,
            command,
            chat_id,
            detail,
            exc_info=cause if isinstance(cause, BaseException) else None,
            extra={"context": {"error_id": error_id, "chat_id": chat_id, "cause": detail}},
        )

        if self._tracker:
            await self._tracker.track(
                event_type="backend_error",
                actor=f"handler:{command}",
                data={
                    "error_id": error_id,
                    "chat_id": chat_id,
                    "cause": detail,
                },
            )

        return ERROR_MESSAGE.format(error_id=code(error_id))
