"""Tests for ReplicateProvider."""

import json

import httpx
import pytest

from chatbot.errors import ImageBackendError
from chatbot.imaging import ReplicateProvider

API_URL = "https://api.replicate.com"


def make_provider(handler, **kwargs):
    client = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(handler))
    return ReplicateProvider(client=client, poll_interval=0, **kwargs)


class TestReplicateProvider:
    """Tests for prediction creation and polling."""

    def test_init_without_token(self, monkeypatch):
        monkeypatch.delenv("REPLICATE_API_TOKEN", raising=False)

        with pytest.raises(ValueError):
            ReplicateProvider()

    @pytest.mark.asyncio
    async def test_immediate_success(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(
                201,
                json={"id": "p1", "status": "succeeded", "output": ["https://replicate.delivery/a.png"]},
            )

        provider = make_provider(handler)
        result = await provider.generate("a red cat")
        await provider.close()

        assert result.urls == ["https://replicate.delivery/a.png"]
        assert result.error is None
        assert requests[0].url.path == "/v1/models/stability-ai/stable-diffusion/predictions"
        assert requests[0].headers["Prefer"] == "wait"
        assert json.loads(requests[0].content) == {"input": {"prompt": "a red cat"}}

    @pytest.mark.asyncio
    async def test_pinned_version(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(201, json={"id": "p1", "status": "succeeded", "output": []})

        provider = make_provider(handler, version="abc123")
        await provider.generate("a red cat")

        assert requests[0].url.path == "/v1/predictions"
        assert json.loads(requests[0].content) == {"version": "abc123", "input": {"prompt": "a red cat"}}

    @pytest.mark.asyncio
    async def test_polls_until_settled(self):
        polls = []

        def handler(request):
            if request.method == "POST":
                return httpx.Response(
                    201,
                    json={"id": "p1", "status": "starting", "urls": {"get": f"{API_URL}/v1/predictions/p1"}},
                )
            polls.append(request)
            if len(polls) < 2:
                return httpx.Response(
                    200,
                    json={"id": "p1", "status": "processing", "urls": {"get": f"{API_URL}/v1/predictions/p1"}},
                )
            return httpx.Response(
                200, json={"id": "p1", "status": "succeeded", "output": "https://replicate.delivery/b.png"}
            )

        provider = make_provider(handler)
        result = await provider.generate("a red cat")

        assert len(polls) == 2
        assert result.urls == ["https://replicate.delivery/b.png"]

    @pytest.mark.asyncio
    async def test_failed_prediction_carries_error(self):
        def handler(request):
            return httpx.Response(
                201, json={"id": "p1", "status": "failed", "output": None, "error": "NSFW content detected"}
            )

        result = await make_provider(handler).generate("something")

        assert result.urls == []
        assert result.error == "NSFW content detected"

    @pytest.mark.asyncio
    async def test_canceled_prediction(self):
        def handler(request):
            return httpx.Response(201, json={"id": "p1", "status": "canceled"})

        result = await make_provider(handler).generate("something")

        assert result.urls == []
        assert result.error == "prediction canceled"

    @pytest.mark.asyncio
    async def test_http_error_is_wrapped(self):
        def handler(request):
            return httpx.Response(401, json={"detail": "Unauthenticated"})

        with pytest.raises(ImageBackendError):
            await make_provider(handler).generate("a red cat")

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ImageBackendError):
            await make_provider(handler).generate("a red cat")

    @pytest.mark.asyncio
    async def test_invalid_json_is_wrapped(self):
        def handler(request):
            return httpx.Response(201, content=b"<html>bad gateway</html>")

        with pytest.raises(ImageBackendError):
            await make_provider(handler).generate("a red cat")
