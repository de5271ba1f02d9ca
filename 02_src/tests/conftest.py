"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chatbot.models import Choice, Completion, ImageResult, Usage  # noqa: E402

BOT_NAME = "gptbot"


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from chatbot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from chatbot.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def reporter(tracker):
    """Create ErrorReporter backed by the tracker."""
    from chatbot.tracker import ErrorReporter

    return ErrorReporter(tracker)


@pytest.fixture
def registry():
    """Create an empty session registry."""
    from chatbot.session import SessionRegistry

    return SessionRegistry()


@pytest.fixture
def transport():
    """Create a transport that records outbound messages."""
    from chatbot.transport import RecordingTransport

    return RecordingTransport(bot_name=BOT_NAME)


@pytest.fixture
def mock_text_backend():
    """Create mock text backend answering "Test response"."""
    backend = Mock()
    backend.complete = AsyncMock(
        return_value=Completion(
            choices=[Choice(content="Test response")],
            usage=Usage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
        )
    )
    return backend


@pytest.fixture
def mock_image_backend():
    """Create mock image backend producing one picture."""
    backend = Mock()
    backend.generate = AsyncMock(
        return_value=ImageResult(urls=["https://replicate.delivery/out-0.png"])
    )
    return backend


@pytest.fixture
def router(registry, tracker, reporter, mock_text_backend, mock_image_backend):
    """Create CommandRouter wired with all handlers."""
    from chatbot.handlers import ChatHandler, GroupHandler, ImageHandler, ResetHandler
    from chatbot.router import CommandRouter

    return CommandRouter(
        registry=registry,
        handlers=[
            ChatHandler(mock_text_backend, reporter, tracker),
            GroupHandler(mock_text_backend, reporter),
            ImageHandler(mock_image_backend, reporter),
            ResetHandler(tracker),
        ],
        tracker=tracker,
    )
