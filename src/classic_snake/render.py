"""Pure rendering from engine snapshots to frame descriptions."""

from __future__ import annotations

from dataclasses import dataclass

from classic_snake.engine import GameSnapshot, GameStatus

START_INSTRUCTION = "Press Enter to start"
PAUSED_INSTRUCTION = 'Paused. Press "P" to resume.'
RESULT_SLOTS = 3


@dataclass(frozen=True)
class Cell:
    """One drawn board cell."""

    x: int
    y: int
    kind: str


@dataclass(frozen=True)
class Frame:
    """Everything a view needs to draw one frame."""

    grid_size: int
    cells: tuple[Cell, ...]
    score_label: str
    high_score_label: str
    result_labels: tuple[str, ...]
    instruction: str
    status: str

    def to_dict(self) -> dict:
        return {
            "grid_size": self.grid_size,
            "cells": [
                {"x": c.x, "y": c.y, "kind": c.kind} for c in self.cells
            ],
            "score_label": self.score_label,
            "high_score_label": self.high_score_label,
            "result_labels": list(self.result_labels),
            "instruction": self.instruction,
            "status": self.status,
        }


def pad_score(score: int) -> str:
    """Zero-pad a score to three digits."""
    return str(score).zfill(3)


def result_labels(recent: tuple[int, ...] | list[int]) -> tuple[str, ...]:
    """Label each recent-result slot, oldest first; empty slots read 000."""
    labels = []
    for i in range(RESULT_SLOTS):
        value = str(recent[i]) if i < len(recent) else "000"
        labels.append(f"Last Game {i + 1}: {value}")
    return tuple(labels)


def render_frame(snapshot: GameSnapshot) -> Frame:
    """Build the frame for *snapshot*. The snake head is the first cell."""
    cells = [Cell(x, y, "snake") for x, y in snapshot.snake]
    if snapshot.status != GameStatus.NOT_STARTED:
        cells.append(Cell(snapshot.food[0], snapshot.food[1], "food"))

    if snapshot.status == GameStatus.NOT_STARTED:
        instruction = START_INSTRUCTION
    elif snapshot.status == GameStatus.PAUSED:
        instruction = PAUSED_INSTRUCTION
    else:
        instruction = ""

    return Frame(
        grid_size=snapshot.grid_size,
        cells=tuple(cells),
        score_label=f"{snapshot.player_name}: {pad_score(snapshot.score)}",
        high_score_label=pad_score(snapshot.high_score),
        result_labels=result_labels(snapshot.recent_results),
        instruction=instruction,
        status=snapshot.status.value,
    )


def render_text(frame: Frame) -> str:
    """Draw a frame as plain text: ``#`` snake, ``*`` food, ``.`` empty."""
    rows = [["."] * frame.grid_size for _ in range(frame.grid_size)]
    for cell in frame.cells:
        if not (1 <= cell.x <= frame.grid_size and 1 <= cell.y <= frame.grid_size):
            continue
        mark = "#" if cell.kind == "snake" else "*"
        # Snake segments win over food drawn underneath them.
        if rows[cell.y - 1][cell.x - 1] != "#":
            rows[cell.y - 1][cell.x - 1] = mark
    lines = ["".join(row) for row in rows]
    lines.append(frame.score_label)
    return "\n".join(lines)
