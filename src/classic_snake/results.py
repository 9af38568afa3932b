"""Recent-result persistence over a small key-value store."""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_KEY = "gameResults"
DEFAULT_RESULTS_LIMIT = 3


def _is_score(value: object) -> bool:
    """Accept ints and finite floats; JSON allows NaN and Infinity."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


class KeyValueStorage(Protocol):
    """String key to string value storage, modelled on browser localStorage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage. Lost when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage:
    """Storage backed by a single JSON object on disk.

    Writes go to a temporary file that then replaces the target, so a crash
    mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except ValueError:
            # Covers both invalid JSON and bytes that are not UTF-8.
            logger.warning("Ignoring unreadable storage file %s.", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=self.path.name, suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w") as fh:
                json.dump(items, fh)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class ResultStore:
    """Keeps the last *limit* completed game scores, oldest dropped first.

    Scores are stored as a JSON list under a fixed key.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        key: str = DEFAULT_RESULTS_KEY,
        limit: int = DEFAULT_RESULTS_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1.")
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key
        self.limit = limit

    def load_recent(self) -> list[int]:
        """Return up to *limit* most recent scores, oldest first."""
        try:
            raw = self.storage.get_item(self.key)
        except OSError:
            logger.warning("Could not read results under '%s'.", self.key)
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed results under '%s'.", self.key)
            return []
        if not isinstance(data, list):
            return []
        scores = [int(v) for v in data if _is_score(v)]
        if len(scores) != len(data):
            logger.warning(
                "Skipped %d invalid entries under '%s'.",
                len(data) - len(scores), self.key,
            )
        return scores[-self.limit:]

    def save_recent(self, score: int) -> list[int]:
        """Append *score*, truncate to the newest *limit*, and persist.

        Returns the stored list. A storage fault is logged and the in-memory
        result is still returned.
        """
        results = self.load_recent()
        results.append(int(score))
        while len(results) > self.limit:
            results.pop(0)
        try:
            self.storage.set_item(self.key, json.dumps(results))
        except OSError:
            logger.warning(
                "Failed to persist results under '%s'.", self.key,
                exc_info=True,
            )
        return results
