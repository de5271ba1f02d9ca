"""Messaging API routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ...app import Application
from ...models import IncomingUpdate


class UpdateRequest(BaseModel):
    """Request model for injecting a chat update."""

    chat_id: str
    text: str | None = None
    sender_name: str | None = None
    timestamp: datetime | None = None


class OutboundMessageResponse(BaseModel):
    """One thing the bot sent back."""

    kind: str
    text: str | None = None
    action: str | None = None
    urls: list[str] = Field(default_factory=list)


class UpdateResponse(BaseModel):
    """Response model for an injected update."""

    outcome: str
    messages: list[OutboundMessageResponse]


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/updates", response_model=UpdateResponse)
    async def post_update(request: UpdateRequest) -> dict:
        """Run one update through the command router and return the replies."""
        update = IncomingUpdate(
            chat_id=request.chat_id,
            text=request.text,
            sender_name=request.sender_name,
            timestamp=request.timestamp or datetime.now(timezone.utc),
        )
        transport = app.recording_transport()
        try:
            outcome = await app.router.route(update, transport)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return {
            "outcome": outcome.value,
            "messages": [
                {
                    "kind": m.kind,
                    "text": m.text,
                    "action": m.action,
                    "urls": m.urls,
                }
                for m in transport.sent
            ],
        }

    return router
