"""FastAPI application exposing Simon Says sessions to a frontend."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from ..core.ranges import ConfigurationError
from ..core.schemas import validate_settings
from .web_session import SESSION_MANAGER, WebGameSession


class RangePayload(BaseModel):
    min: Any
    max: Any


class SessionCreate(BaseModel):
    """Payload for creating a new game session."""

    model_config = ConfigDict(populate_by_name=True)

    number_range: Optional[RangePayload] = Field(None, alias="numberRange", description="Inclusive secret bounds")
    pacing_interval: Optional[int] = Field(None, alias="pacingInterval", description="Milliseconds between announcements")
    seed: Optional[int] = Field(None, description="Deterministic RNG seed")


class GuessSubmit(BaseModel):
    """Payload carrying a single guess."""

    guess: int


app = FastAPI(title="Simon Says Web API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _get_session(session_id: str) -> WebGameSession:
    try:
        return await SESSION_MANAGER.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/api/sessions")
async def create_session(payload: SessionCreate) -> Dict[str, Any]:
    """Create a new game session in the initial status."""

    data = payload.model_dump(exclude_none=True)
    try:
        settings = validate_settings(data)
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    session = await SESSION_MANAGER.create_session(settings)
    return {"sessionId": session.session_id}


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str) -> Dict[str, Any]:
    """Fetch the latest state for a session."""

    session = await _get_session(session_id)
    return session.status()


@app.post("/api/sessions/{session_id}/run")
async def run_session(session_id: str) -> Dict[str, Any]:
    """Start the game or the next round."""

    session = await _get_session(session_id)
    session.run()
    return session.status()


@app.post("/api/sessions/{session_id}/check")
async def check_guess(session_id: str, payload: GuessSubmit) -> Dict[str, Any]:
    """Submit a guess; ignored unless the session is listening."""

    session = await _get_session(session_id)
    answer = session.check(payload.guess)
    if answer is None:
        return {"accepted": False, "status": session.game.status.value}
    return {
        "accepted": True,
        "isRight": answer.is_right,
        "isVictory": answer.is_victory,
        "isDefeat": answer.is_defeat,
        "status": session.game.status.value,
    }


@app.post("/api/sessions/{session_id}/reset")
async def reset_session(session_id: str) -> Dict[str, Any]:
    """Abandon the current game."""

    session = await _get_session(session_id)
    session.reset()
    return session.status()


@app.delete("/api/sessions/{session_id}")
async def stop_session(session_id: str) -> Dict[str, Any]:
    """Remove a session from the registry."""

    try:
        await SESSION_MANAGER.stop(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "stopped", "sessionId": session_id}
