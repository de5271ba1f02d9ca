"""Session registry: per-chat state machine with serialized access."""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterable

from ..errors import SessionStateError
from ..logging_config import get_logger
from ..models import SessionState
from .history import History

logger = get_logger(__name__)


@dataclass
class ChatSession:
    """State and memory of one chat. history is None while offline."""

    state: SessionState
    history: History | None = None

    @classmethod
    def online(cls, history: History | None = None) -> "ChatSession":
        return cls(state=SessionState.ONLINE, history=history or History())

    @classmethod
    def offline(cls) -> "ChatSession":
        return cls(state=SessionState.OFFLINE)

    def copy(self) -> "ChatSession":
        return ChatSession(
            state=self.state,
            history=self.history.copy() if self.history is not None else None,
        )


class SessionHandle:
    """Exclusive, mutable view of one chat session for a single command.

    Mutations go to a private working copy of the history and become visible
    only through commit(), which swaps the copy into the registry in one step.
    """

    def __init__(self, registry: "SessionRegistry", chat_id: str, session: ChatSession):
        self._registry = registry
        self._chat_id = chat_id
        self._state = session.state
        self._generation = registry._generation
        self._history = session.history.copy() if session.history is not None else None
        self._released = False

    @property
    def chat_id(self) -> str:
        return self._chat_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> History:
        """Working copy of the history."""
        self._check_active()
        if self._history is None:
            raise SessionStateError(f"Chat {self._chat_id} is offline and has no history")
        return self._history

    def commit(self) -> None:
        """Store the working copy as the session's current history."""
        self._check_active()
        if self._state is not SessionState.ONLINE or self._history is None:
            raise SessionStateError(f"Cannot commit history for offline chat {self._chat_id}")
        if self._generation != self._registry._generation:
            raise SessionStateError(
                f"Sessions were cleared while chat {self._chat_id} was being handled"
            )
        self._registry._store(self._chat_id, ChatSession.online(self._history.copy()))

    def release(self) -> None:
        """End the handle's lifetime. Uncommitted changes are dropped."""
        self._released = True

    def _check_active(self) -> None:
        if self._released:
            raise SessionStateError(f"Session handle for chat {self._chat_id} was released")


class SessionRegistry:
    """Keyed store chat_id -> ChatSession with one lock per chat."""

    def __init__(self, offline_chat_ids: Iterable[str] = ()):
        self._sessions: dict[str, ChatSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._offline_chat_ids = set(offline_chat_ids)
        # Bumped by clear(); handles from an older generation cannot commit
        self._generation = 0

    @asynccontextmanager
    async def acquire(self, chat_id: str) -> AsyncIterator[SessionHandle]:
        """Hold the chat exclusively, creating its session on first use.

        Waiters are served in arrival order, so commands for one chat observe
        history in the order their updates were received.
        """
        async with self._lock(chat_id):
            handle = SessionHandle(self, chat_id, self._resolve(chat_id))
            try:
                yield handle
            finally:
                handle.release()

    async def set_state(self, chat_id: str, state: SessionState) -> ChatSession:
        """Operator override of a chat's state.

        Going offline drops the history; coming back online starts a fresh one.
        Setting the current state again is a no-op.
        """
        async with self._lock(chat_id):
            session = self._resolve(chat_id)
            if session.state is state:
                return session.copy()

            session = ChatSession.online() if state is SessionState.ONLINE else ChatSession.offline()
            self._store(chat_id, session)
            logger.info("Chat %s switched to %s", chat_id, state.value)
            return session.copy()

    def snapshot(self, chat_id: str) -> ChatSession | None:
        """Copy of the last committed session, or None if the chat is unknown."""
        session = self._sessions.get(chat_id)
        return session.copy() if session is not None else None

    def chat_ids(self) -> list[str]:
        return list(self._sessions)

    def clear(self) -> None:
        """Forget all sessions. In-flight handles can no longer commit."""
        self._generation += 1
        self._sessions.clear()

    def _lock(self, chat_id: str) -> asyncio.Lock:
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        return lock

    def _resolve(self, chat_id: str) -> ChatSession:
        session = self._sessions.get(chat_id)
        if session is None:
            if chat_id in self._offline_chat_ids:
                session = ChatSession.offline()
            else:
                session = ChatSession.online()
            self._sessions[chat_id] = session
        return session

    def _store(self, chat_id: str, session: ChatSession) -> None:
        self._sessions[chat_id] = session
