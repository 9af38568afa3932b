"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from classic_snake.engine import GameStatus


class StartRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/start."""

    name: str = Field(default="", max_length=32)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: GameStatus
    player_name: str
    score: int
    high_score: int
    interval_ms: int


class StatusResponse(BaseModel):
    """Result of a lifecycle request."""

    session_id: str
    status: GameStatus


class ResultsResponse(BaseModel):
    """The most recent completed game scores, oldest first."""

    recent: list[int]


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
