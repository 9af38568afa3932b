"""Tick-interval ramp applied each time food is eaten."""

from __future__ import annotations

DEFAULT_MIN_INTERVAL_MS = 25

# (threshold, decrement): while the interval is above the threshold it drops
# by the decrement. Checked in order.
SPEED_STEPS: tuple[tuple[int, int], ...] = (
    (150, 5),
    (100, 3),
    (50, 2),
    (25, 1),
)


def next_interval(
    interval_ms: int, floor_ms: int = DEFAULT_MIN_INTERVAL_MS,
) -> int:
    """Return the tick interval after one food-eat event.

    ``200 -> 195``, ``150 -> 147``, ``100 -> 98``, ``50 -> 49``; at or below
    the floor the interval no longer changes.
    """
    if interval_ms <= floor_ms:
        return interval_ms
    for threshold, decrement in SPEED_STEPS:
        if interval_ms > threshold:
            return max(interval_ms - decrement, floor_ms)
    return interval_ms
