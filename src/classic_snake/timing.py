"""Single logical tick timer.

The engine holds exactly one timer. Arming it always replaces the previous
schedule, so a speed change can never leave two tick streams running.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class TickTimer(Protocol):
    """Periodic timer driving ``GameEngine.tick``."""

    @property
    def armed(self) -> bool: ...

    @property
    def interval_ms(self) -> int | None: ...

    def arm(self, interval_ms: int, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class ManualTimer:
    """Timer that only fires when told to. Used for deterministic play."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self._interval_ms: int | None = None
        self.arm_count = 0

    @property
    def armed(self) -> bool:
        return self._callback is not None

    @property
    def interval_ms(self) -> int | None:
        return self._interval_ms

    def arm(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.cancel()
        self._interval_ms = interval_ms
        self._callback = callback
        self.arm_count += 1

    def cancel(self) -> None:
        self._callback = None
        self._interval_ms = None

    def fire(self) -> bool:
        """Run the callback once if armed. Returns True if it ran."""
        if self._callback is None:
            return False
        self._callback()
        return True


class AsyncioTimer:
    """Periodic timer built on ``loop.call_later``.

    Each arm/cancel bumps a generation counter. A callback that re-arms or
    cancels during its own run therefore stops the old schedule from
    rescheduling itself.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: TickCallback | None = None
        self._interval_ms: int | None = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._callback is not None

    @property
    def interval_ms(self) -> int | None:
        return self._interval_ms

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def arm(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.cancel()
        self._interval_ms = interval_ms
        self._callback = callback
        self._schedule(self._generation)

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None
        self._interval_ms = None

    def _schedule(self, generation: int) -> None:
        assert self._interval_ms is not None  # noqa: S101
        self._handle = self._get_loop().call_later(
            self._interval_ms / 1000.0, self._fire, generation,
        )

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._callback is None:
            return
        self._handle = None
        try:
            self._callback()
        except Exception:
            logger.exception("Tick callback failed.")
        # The callback may have re-armed or cancelled this timer.
        if generation == self._generation and self._callback is not None:
            self._schedule(generation)
