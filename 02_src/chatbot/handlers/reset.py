"""/reset: forget the assistant dialogue."""

from ..models import IncomingUpdate, ResetCommand
from ..session import SessionHandle
from ..tracker import ITracker
from ..transport import ChatAction, ITransport

RESET_CONFIRMATION = "`Bot chat history has been erased` ✅"


class ResetHandler:
    """Clears dialogue_log, keeps group_log."""

    command_name = "reset"

    def __init__(self, tracker: ITracker | None = None):
        self._tracker = tracker

    async def handle(
        self,
        command: ResetCommand,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        await transport.send_action(update.chat_id, ChatAction.TYPING)

        session.history.reset_dialogue()
        session.commit()

        if self._tracker:
            await self._tracker.track(
                event_type="history_reset",
                actor=f"handler:{self.command_name}",
                data={"chat_id": update.chat_id},
            )

        await transport.send_text(update.chat_id, RESET_CONFIRMATION)
