"""SIM implementation - scripted group chat scenario."""

import asyncio
import random
from typing import Protocol

import httpx

from chatbot.logging_config import get_logger
from chatbot.tracker import ITracker

logger = get_logger(__name__)

SIM_CHAT_ID = "-1000000000001"

# (sender, text): plain chatter first, then one of each command
SCENARIO = [
    ("alice", "left at 5"),
    ("bob", "arrived at 6"),
    ("charlie", "who brought the cake?"),
    ("alice", "/group what happened"),
    ("bob", "/chat hello"),
    ("bob", "/chat what did I just say?"),
    ("charlie", "/image a red cat"),
    ("alice", "/reset"),
]


class ISim(Protocol):
    """Generate test traffic against the HTTP API."""

    async def start(self) -> None:
        """Start the scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop the scenario."""
        ...


class Sim:
    """SIM that replays a scripted conversation through /api/updates."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        chat_id: str = SIM_CHAT_ID,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._chat_id = chat_id
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start the scripted scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        """Replay SCENARIO with short random pauses."""
        summary = {
            "scenario": "group_chat",
            "chat_id": self._chat_id,
            "message_count": len(SCENARIO),
        }

        try:
            if self._tracker:
                await self._tracker.track("sim_started", "sim", summary)

            for sender, text in SCENARIO:
                if not self._running:
                    break
                await self._send_update(sender, text)
                await asyncio.sleep(random.uniform(0.5, 1.5))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track("sim_completed", "sim", summary)

    async def _send_update(self, sender: str, text: str) -> None:
        """Send one chat message via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/api/updates",
                json={"chat_id": self._chat_id, "sender_name": sender, "text": text},
                timeout=90.0,
            )

            if response.status_code == 200:
                data = response.json()
                logger.info("SIM: %s -> %s (%s)", sender, text, data.get("outcome"))
                for message in data.get("messages", []):
                    if message.get("kind") != "action":
                        logger.info("SIM: Reply: %s", message.get("text") or message.get("urls"))
            else:
                logger.error("SIM: Error sending update: %s", response.status_code)

        except Exception as e:
            logger.error("SIM: Failed to send update: %s", e)
