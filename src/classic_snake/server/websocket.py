"""WebSocket handler for real-time play in the browser."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from classic_snake.engine import InvalidPlayerName
from classic_snake.server.session_manager import (
    GameSession,
    SessionManager,
    encode_event,
)

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_ACTIONS = ("pause", "resume", "stop")


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def handle_message(session: GameSession, msg: dict) -> None:
    """Apply one decoded client message to the session.

    Recognised keys: ``name``, ``direction``, ``key``, ``button`` and
    ``action`` (``start``, ``pause``, ``resume``, ``stop``). Anything else is
    ignored. ``InvalidPlayerName`` propagates to the caller.
    """
    name = msg.get("name")
    if isinstance(name, str):
        session.controls.set_name(name)

    direction = msg.get("direction")
    if isinstance(direction, str):
        session.engine.change_direction(direction)

    key = msg.get("key")
    if isinstance(key, str):
        session.controls.handle_key(key)

    button = msg.get("button")
    if isinstance(button, str):
        session.controls.handle_button(button)

    action = msg.get("action")
    if action == "start":
        session.engine.start(session.controls.name)
    elif action in _ACTIONS:
        getattr(session.engine, action)()


async def _pump(websocket: WebSocket, outbox: asyncio.Queue) -> None:
    while True:
        payload = await outbox.get()
        await websocket.send_text(payload)


def _log_sender_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("Frame sender stopped: %r", exc)


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send input, receive a frame after each engine event."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    outbox = session.attach()
    logger.info("Client connected to session %s.", session_id)

    # Initial frame so the client can draw before the first event.
    await websocket.send_text(
        encode_event("connect", session.engine.snapshot()),
    )
    sender = asyncio.create_task(_pump(websocket, outbox))
    sender.add_done_callback(_log_sender_exit)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            try:
                handle_message(session, msg)
            except InvalidPlayerName as exc:
                await websocket.send_text(json.dumps({"error": str(exc)}))
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        session.detach(outbox)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
