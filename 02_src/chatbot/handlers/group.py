"""/group: one-shot question about the observed chat transcript."""

from ..errors import BackendError
from ..llm import ITextBackend
from ..models import GroupCommand, GroupEntry, IncomingUpdate, Role, Turn
from ..session import SessionHandle
from ..tracker import ErrorReporter
from ..transport import ChatAction, ITransport, escape

GROUP_SYSTEM_PROMPT = (
    "You are a Telegram chat bot that helps humans to understand "
    "what is happening or has happened in group chats"
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_transcript(entries: list[GroupEntry]) -> str:
    """One ``name [timestamp]: text`` line per entry that has both a sender and text."""
    lines = []
    for entry in entries:
        if entry.sender_name and entry.text:
            lines.append(
                f"{entry.sender_name} [{entry.timestamp.strftime(TIMESTAMP_FORMAT)}]: {entry.text}\n"
            )
    return "".join(lines)


def build_group_prompt(entries: list[GroupEntry], question: str) -> str:
    return (
        "Use the following conversation as context: \n\n "
        f"###{format_transcript(entries)}###  \n\n {question} "
    )


class GroupHandler:
    """Answers a question using the group transcript as context. Never mutates history."""

    command_name = "group"

    def __init__(
        self,
        backend: ITextBackend,
        reporter: ErrorReporter,
        model: str | None = None,
    ):
        self._backend = backend
        self._reporter = reporter
        self._model = model

    async def handle(
        self,
        command: GroupCommand,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        await transport.send_action(update.chat_id, ChatAction.TYPING)

        prompt = build_group_prompt(session.history.group_log, command.text)

        try:
            completion = await self._backend.complete(
                [Turn(Role.USER, prompt)],
                system=GROUP_SYSTEM_PROMPT,
                model=self._model,
            )
            if not completion.choices:
                raise BackendError("completion returned no choices")
        except BackendError as e:
            message = await self._reporter.report(e, chat_id=update.chat_id, command=self.command_name)
            await transport.send_text(update.chat_id, message)
            return

        await transport.send_text(update.chat_id, escape(completion.text))
