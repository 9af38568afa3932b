"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from classic_snake.engine import InvalidPlayerName
from classic_snake.render import render_frame
from classic_snake.server.models import (
    ErrorResponse,
    ResultsResponse,
    SessionSummary,
    StartRequest,
    StatusResponse,
)
from classic_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])
results_router = APIRouter(tags=["results"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_START_ERRORS = {**_NOT_FOUND, 422: {"model": ErrorResponse}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _require(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


def _status(session: GameSession) -> StatusResponse:
    return StatusResponse(
        session_id=session.session_id, status=session.engine.status,
    )


@router.post("", status_code=201)
async def create_session(request: Request) -> SessionSummary:
    """Create a new game session."""
    return _get_manager(request).create_session().summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Get the current frame and raw state of a session."""
    session = _require(request, session_id)
    snapshot = session.engine.snapshot()
    return {
        "session_id": session.session_id,
        "frame": render_frame(snapshot).to_dict(),
        "state": snapshot.to_dict(),
    }


@router.post("/{session_id}/start", responses=_START_ERRORS)
async def start_session(
    session_id: str, body: StartRequest, request: Request,
) -> StatusResponse:
    """Start the game for the given player name."""
    manager = _get_manager(request)
    try:
        session = manager.start(session_id, body.name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    except InvalidPlayerName as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _status(session)


@router.post("/{session_id}/pause", responses=_NOT_FOUND)
async def pause_session(session_id: str, request: Request) -> StatusResponse:
    session = _require(request, session_id)
    session.engine.pause()
    return _status(session)


@router.post("/{session_id}/resume", responses=_NOT_FOUND)
async def resume_session(session_id: str, request: Request) -> StatusResponse:
    session = _require(request, session_id)
    session.engine.resume()
    return _status(session)


@router.post("/{session_id}/stop", responses=_NOT_FOUND)
async def stop_session(session_id: str, request: Request) -> StatusResponse:
    session = _require(request, session_id)
    session.engine.stop()
    return _status(session)


@router.delete(
    "/{session_id}", status_code=204, responses=_NOT_FOUND,
)
async def delete_session(session_id: str, request: Request) -> Response:
    """Remove a session and cancel its timer."""
    try:
        _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)


@results_router.get("/results")
async def recent_results(request: Request) -> ResultsResponse:
    """Return the last completed game scores."""
    return ResultsResponse(recent=_get_manager(request).store.load_recent())
