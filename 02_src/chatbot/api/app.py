"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application
from .routes import control, messaging, observability


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def set_app(application: Application) -> None:
    """Replace the global application instance."""
    global _app
    _app = application


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    application = get_app()
    await application.start()
    sim_instance = control.get_sim_instance()
    if sim_instance and hasattr(sim_instance, "set_tracker"):
        sim_instance.set_tracker(application.tracker)
    yield
    await application.stop()


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if application is not None:
        set_app(application)

    fastapi_app = FastAPI(
        title="Chatbot API",
        description="Operator API for the chat assistant bot",
        version="0.1.0",
        lifespan=lifespan,
    )

    application = get_app()
    fastapi_app.include_router(messaging.create_messaging_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    return fastapi_app
