"""In-memory session registry wiring engines to timers and live sockets."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from classic_snake.config import GameConfig
from classic_snake.controls import InputAdapter
from classic_snake.engine import GameEngine, GameSnapshot
from classic_snake.render import render_frame
from classic_snake.results import ResultStore
from classic_snake.server.models import SessionSummary
from classic_snake.timing import AsyncioTimer

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100
_OUTBOX_SIZE = 256


def encode_event(event: str, snapshot: GameSnapshot) -> str:
    """Serialize an engine event as a compact JSON message."""
    message = {
        "event": event,
        "frame": render_frame(snapshot).to_dict(),
        "state": snapshot.to_dict(),
    }
    return json.dumps(message, separators=(",", ":"))


@dataclass
class GameSession:
    """One browser's game: engine, input adapter and connected outboxes."""

    session_id: str
    engine: GameEngine
    controls: InputAdapter
    outboxes: list[asyncio.Queue] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.engine.status,
            player_name=self.engine.player_name,
            score=self.engine.score,
            high_score=self.engine.high_score,
            interval_ms=self.engine.interval_ms,
        )

    def attach(self) -> asyncio.Queue:
        """Register a new outbox for a connected socket."""
        outbox: asyncio.Queue = asyncio.Queue(maxsize=_OUTBOX_SIZE)
        self.outboxes.append(outbox)
        return outbox

    def detach(self, outbox: asyncio.Queue) -> None:
        if outbox in self.outboxes:
            self.outboxes.remove(outbox)

    def publish(self, event: str, snapshot: GameSnapshot) -> None:
        """Engine listener: queue the event for every connected socket."""
        if not self.outboxes:
            return
        payload = encode_event(event, snapshot)
        for outbox in list(self.outboxes):
            try:
                outbox.put_nowait(payload)
            except asyncio.QueueFull:
                logger.warning(
                    "Dropping '%s' for a slow client in session %s.",
                    event, self.session_id,
                )


class SessionManager:
    """Central registry managing all game sessions.

    All sessions share one :class:`ResultStore`, matching a single browser's
    local storage.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: ResultStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else ResultStore(
            key=self.config.results_key, limit=self.config.results_limit,
        )
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(self, seed: int | None = None) -> GameSession:
        """Create a new, not-yet-started session."""
        self._evict_overflow()
        engine = GameEngine(
            self.config, timer=AsyncioTimer(), store=self.store, seed=seed,
        )
        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            session_id=session_id,
            engine=engine,
            controls=InputAdapter(engine),
        )
        engine.add_listener(session.publish)
        self._sessions[session_id] = session
        logger.info("Session %s created.", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def start(self, session_id: str, name: str) -> GameSession:
        """Start the session's game; propagates ``InvalidPlayerName``."""
        session = self.require_session(session_id)
        session.controls.set_name(name)
        session.engine.start(name)
        return session

    def remove_session(self, session_id: str) -> None:
        session = self.require_session(session_id)
        self._close(session)
        del self._sessions[session_id]
        logger.info("Session %s removed.", session_id)

    def _close(self, session: GameSession) -> None:
        session.engine.timer.cancel()
        session.engine.remove_listener(session.publish)

    def _evict_overflow(self) -> None:
        """Drop the oldest sessions so one more fits under the bound."""
        overflow = len(self._sessions) - self._max_sessions + 1
        if overflow <= 0:
            return
        oldest = sorted(self._sessions.values(), key=lambda s: s.created_at)
        for stale in oldest[:overflow]:
            self._close(stale)
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Evicted %d sessions (retaining up to %d).",
            overflow, self._max_sessions,
        )

    async def cleanup(self) -> None:
        """Cancel every session timer."""
        for session in self._sessions.values():
            self._close(session)
        self._sessions.clear()
        logger.info("SessionManager cleanup complete.")
