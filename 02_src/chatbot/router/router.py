"""CommandRouter implementation."""

from enum import Enum
from typing import Protocol

from ..handlers import ICommandHandler, NoopHandler
from ..logging_config import get_logger
from ..models import GroupEntry, IncomingUpdate, SessionState, command_name, parse_command
from ..session import SessionRegistry
from ..tracker import ITracker
from ..transport import ITransport

logger = get_logger(__name__)


class RouteOutcome(str, Enum):
    """What the router did with an update."""

    DISCARDED = "discarded"
    DISPATCHED = "dispatched"
    RECORDED = "recorded"


class ICommandRouter(Protocol):
    """Routes transport updates to handlers."""

    async def route(self, update: IncomingUpdate, transport: ITransport) -> RouteOutcome:
        """Classify the update against its chat's state and act on it."""
        ...


class CommandRouter:
    """Dispatches each update to exactly one handler, records it, or drops it.

    Policy, first match wins:
      1. chat offline -> discard
      2. recognized command -> its handler
      3. anything else -> append to group_log
    The chat's session lock is held for the whole update.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        handlers: list[ICommandHandler],
        tracker: ITracker | None = None,
    ):
        self._registry = registry
        self._handlers: dict[str, ICommandHandler] = {h.command_name: h for h in handlers}
        self._noop = NoopHandler()
        self._tracker = tracker

    async def route(self, update: IncomingUpdate, transport: ITransport) -> RouteOutcome:
        async with self._registry.acquire(update.chat_id) as session:
            if session.state is SessionState.OFFLINE:
                await self._noop.handle(None, session, update, transport)
                return RouteOutcome.DISCARDED

            command = parse_command(update.text, transport.bot_name)
            if command is not None:
                handler = self._handlers.get(command_name(command))
                if handler is None:
                    logger.debug("No handler for %s in chat %s", type(command).__name__, update.chat_id)
                    return RouteOutcome.DISCARDED

                if self._tracker:
                    await self._tracker.track(
                        event_type="command_dispatched",
                        actor="router",
                        data={"chat_id": update.chat_id, "command": handler.command_name},
                    )
                await handler.handle(command, session, update, transport)
                return RouteOutcome.DISPATCHED

            session.history.append_group(
                GroupEntry(
                    timestamp=update.timestamp,
                    sender_name=update.sender_name,
                    text=update.text,
                )
            )
            session.commit()

            if self._tracker:
                await self._tracker.track(
                    event_type="message_recorded",
                    actor="router",
                    data={
                        "chat_id": update.chat_id,
                        "group_messages": len(session.history.group_log),
                    },
                )
            return RouteOutcome.RECORDED
