"""Control API routes."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import Application
from ...models import SessionState
from ...session import ChatSession


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class ChatStateRequest(BaseModel):
    """Request model for switching a chat on or off."""

    state: SessionState


class ChatStateResponse(BaseModel):
    """Current state of one chat."""

    chat_id: str
    state: SessionState
    dialogue_turns: int
    group_messages: int


# Global SIM instance (will be set by main app)
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Set the global SIM instance."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Get the global SIM instance."""
    return _sim_instance


def _chat_state(chat_id: str, session: ChatSession) -> dict:
    history = session.history
    return {
        "chat_id": chat_id,
        "state": session.state,
        "dialogue_turns": len(history.dialogue_log) if history else 0,
        "group_messages": len(history.group_log) if history else 0,
    }


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.get("/chats/{chat_id}", response_model=ChatStateResponse)
    async def get_chat(chat_id: str) -> dict:
        """Current state and log sizes of a chat."""
        session = app.registry.snapshot(chat_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Unknown chat")
        return _chat_state(chat_id, session)

    @router.put("/chats/{chat_id}/state", response_model=ChatStateResponse)
    async def set_chat_state(chat_id: str, request: ChatStateRequest) -> dict:
        """Mute (offline) or unmute (online) the bot in a chat."""
        session = await app.registry.set_state(chat_id, request.state)
        await app.tracker.track(
            event_type="session_state_changed",
            actor="control_api",
            data={"chat_id": chat_id, "state": request.state.value},
        )
        return _chat_state(chat_id, session)

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Forget all sessions and trace events."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start SIM scenario."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.start()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop SIM scenario."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.stop()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
