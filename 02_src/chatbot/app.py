"""Application bootstrap and lifecycle management."""

import asyncio
from typing import Protocol

from .config import Settings, resolve_db_path
from .handlers import ChatHandler, GroupHandler, ImageHandler, ResetHandler
from .imaging import IImageBackend, ReplicateProvider
from .llm import ITextBackend, create_text_backend
from .logging_config import get_logger
from .router import CommandRouter
from .session import SessionRegistry
from .storage import IStorage, Storage
from .tracker import ErrorReporter, ITracker, Tracker
from .transport import RecordingTransport
from .transport.telegram_bot import TelegramTransport

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Forget all sessions and trace events."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        db_path: str | None = None,
        text_backend: ITextBackend | None = None,
        image_backend: IImageBackend | None = None,
    ):
        self._settings = settings or Settings.from_env()
        env_db_path = self._settings.database_url if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)

        # Injected backends are owned by the caller
        self._text_backend = text_backend
        self._image_backend = image_backend
        self._owns_image_backend = image_backend is None

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._registry: SessionRegistry | None = None
        self._router: CommandRouter | None = None
        self._telegram: TelegramTransport | None = None
        self._telegram_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Backends (no internal dependencies)
        if self._text_backend is None:
            self._text_backend = create_text_backend(self._settings)
        if self._image_backend is None:
            self._image_backend = ReplicateProvider(
                model=self._settings.replicate_model,
                version=self._settings.replicate_model_version,
            )
        logger.info("Backends initialized (text provider: %s)", self._settings.text_provider)

        # 4. Sessions
        self._registry = SessionRegistry(self._settings.offline_chat_ids)

        # 5. Router with its handlers (depends on everything above)
        reporter = ErrorReporter(self._tracker)
        self._router = CommandRouter(
            registry=self._registry,
            handlers=[
                ChatHandler(self._text_backend, reporter, self._tracker),
                GroupHandler(self._text_backend, reporter),
                ImageHandler(self._image_backend, reporter),
                ResetHandler(self._tracker),
            ],
            tracker=self._tracker,
        )
        logger.info("CommandRouter initialized")

        # 6. Transport (depends on Router)
        if self._settings.telegram_token:
            self._telegram = TelegramTransport(self._router, self._settings.telegram_token)
            self._telegram_task = asyncio.create_task(self._telegram.start())
            self._telegram_task.add_done_callback(self._on_telegram_done)
            logger.info("Telegram transport started")
        else:
            logger.info("TELEGRAM_TOKEN not set, only the HTTP API accepts updates")

        logger.info("All components initialized successfully")

    def _on_telegram_done(self, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is None:
            return
        error = task.exception()
        logger.error("Telegram transport stopped: %s", error, exc_info=error)
        self._telegram = None

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._telegram:
            await self._telegram.stop()
        if self._telegram_task:
            if not self._telegram_task.done():
                await self._telegram_task
            self._telegram_task = None
        if self._owns_image_backend and isinstance(self._image_backend, ReplicateProvider):
            await self._image_backend.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Forget all sessions and trace events."""
        if self._registry:
            self._registry.clear()
        if self._storage:
            await self._storage.clear()
        logger.info("Reset complete")

    def status(self) -> dict:
        """Component summary for the health endpoint."""
        return {
            "started": self._router is not None,
            "text_provider": self._settings.text_provider,
            "telegram": self._telegram is not None,
            "chats": len(self._registry.chat_ids()) if self._registry else 0,
        }

    def recording_transport(self) -> RecordingTransport:
        """Transport that collects replies, for updates injected over HTTP."""
        return RecordingTransport(bot_name=self._settings.bot_name)

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def tracker(self) -> ITracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def registry(self) -> SessionRegistry:
        """Get session registry."""
        if not self._registry:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def router(self) -> CommandRouter:
        """Get command router."""
        if not self._router:
            raise RuntimeError("Application not started")
        return self._router
