"""/chat: multi-turn conversation with accumulated context."""

from ..config import USAGE_ADVISORY_THRESHOLD
from ..errors import BackendError
from ..llm import ITextBackend
from ..logging_config import get_logger
from ..models import ChatCommand, Completion, IncomingUpdate, Role, Turn
from ..session import SessionHandle
from ..tracker import ErrorReporter, ITracker
from ..transport import ChatAction, ITransport, escape

logger = get_logger(__name__)

USAGE_LINE = "\n\n`usage {total} tokens = {prompt} prompt + {completion} completion`"
ADVISORY_LINE = "\n`Reaching 8k limit, consider running /reset soon`"


def format_chat_reply(
    completion: Completion,
    advisory_threshold: int = USAGE_ADVISORY_THRESHOLD,
) -> str:
    """Escaped reply text followed by the usage line and, past the threshold, the advisory."""
    reply = escape(completion.text)

    if completion.usage is not None:
        usage = completion.usage
        reply += USAGE_LINE.format(
            total=usage.total_tokens,
            prompt=usage.prompt_tokens,
            completion=usage.completion_tokens,
        )
        if usage.total_tokens > advisory_threshold:
            reply += ADVISORY_LINE

    return reply


class ChatHandler:
    """Appends the user turn, sends the whole dialogue, stores the answers."""

    command_name = "chat"

    def __init__(
        self,
        backend: ITextBackend,
        reporter: ErrorReporter,
        tracker: ITracker | None = None,
        model: str | None = None,
        advisory_threshold: int = USAGE_ADVISORY_THRESHOLD,
    ):
        self._backend = backend
        self._reporter = reporter
        self._tracker = tracker
        self._model = model
        self._advisory_threshold = advisory_threshold

    async def handle(
        self,
        command: ChatCommand,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        history = session.history
        # Lives only in the working copy until commit
        history.append_turn(Turn(Role.USER, command.text, update.sender_name))

        await transport.send_action(update.chat_id, ChatAction.TYPING)

        try:
            completion = await self._backend.complete(history.dialogue_log, model=self._model)
            if not completion.choices:
                raise BackendError("completion returned no choices")
        except BackendError as e:
            message = await self._reporter.report(e, chat_id=update.chat_id, command=self.command_name)
            await transport.send_text(update.chat_id, message)
            return

        bot_name = transport.bot_name
        for choice in completion.choices:
            history.append_turn(Turn(Role.ASSISTANT, choice.content, bot_name))

        session.commit()
        logger.debug("Chat %s dialogue now has %s turns", update.chat_id, len(history.dialogue_log))

        if self._tracker:
            await self._tracker.track(
                event_type="dialogue_extended",
                actor=f"handler:{self.command_name}",
                data={
                    "chat_id": update.chat_id,
                    "dialogue_turns": len(history.dialogue_log),
                    "total_tokens": completion.usage.total_tokens if completion.usage else None,
                },
            )

        await transport.send_text(
            update.chat_id,
            format_chat_reply(completion, self._advisory_threshold),
        )
