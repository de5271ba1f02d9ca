"""Image generation provider using the Replicate HTTP API."""

import asyncio
import os
from typing import Protocol

import httpx

from ..config import DEFAULT_REPLICATE_MODEL
from ..errors import ImageBackendError
from ..logging_config import get_logger
from ..models import ImageResult

logger = get_logger(__name__)

REPLICATE_API_URL = "https://api.replicate.com"
PENDING_STATUSES = ("starting", "processing")


class IImageBackend(Protocol):
    """Abstraction for image generation."""

    async def generate(self, prompt: str) -> ImageResult:
        """Generate images for a prompt. Raises ImageBackendError on failure."""
        ...


def _output_urls(output) -> list[str]:
    if output is None:
        return []
    if isinstance(output, str):
        return [output]
    return [item for item in output if isinstance(item, str)]


class ReplicateProvider:
    """Runs a prediction on Replicate and waits for its output URLs."""

    def __init__(
        self,
        api_token: str | None = None,
        model: str = DEFAULT_REPLICATE_MODEL,
        version: str | None = None,
        poll_interval: float = 1.0,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_token = api_token or os.getenv("REPLICATE_API_TOKEN")
        if not self._api_token and client is None:
            raise ValueError("REPLICATE_API_TOKEN environment variable not set")

        self._model = model
        self._version = version
        self._poll_interval = poll_interval
        self._client = client or httpx.AsyncClient(
            base_url=REPLICATE_API_URL,
            headers={"Authorization": f"Bearer {self._api_token}"},
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def generate(self, prompt: str) -> ImageResult:
        """Create a prediction and poll it until it settles."""
        if self._version:
            path = "/v1/predictions"
            body = {"version": self._version, "input": {"prompt": prompt}}
        else:
            path = f"/v1/models/{self._model}/predictions"
            body = {"input": {"prompt": prompt}}

        try:
            response = await self._client.post(path, json=body, headers={"Prefer": "wait"})
            response.raise_for_status()
            prediction = response.json()

            while prediction.get("status") in PENDING_STATUSES:
                await asyncio.sleep(self._poll_interval)
                response = await self._client.get(prediction["urls"]["get"])
                response.raise_for_status()
                prediction = response.json()
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise ImageBackendError(f"Replicate API error: {e!r}") from e

        status = prediction.get("status")
        logger.debug("Prediction %s finished with status %s", prediction.get("id"), status)

        error = prediction.get("error")
        if not error and status != "succeeded":
            error = f"prediction {status}"

        return ImageResult(urls=_output_urls(prediction.get("output")), error=error)
