"""Command handler interface."""

from typing import Protocol

from ..models import Command, IncomingUpdate
from ..session import SessionHandle
from ..transport import ITransport


class ICommandHandler(Protocol):
    """Handles one kind of command for a chat holding an exclusive session."""

    command_name: str

    async def handle(
        self,
        command: Command,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        """Run the command, commit history changes, reply through the transport."""
        ...


class NoopHandler:
    """Used while a chat is offline: no side effects, no reply."""

    command_name = "noop"

    async def handle(
        self,
        command: Command | None,
        session: SessionHandle,
        update: IncomingUpdate,
        transport: ITransport,
    ) -> None:
        return None
