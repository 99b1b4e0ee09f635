"""Per-frame bookkeeping of the main loop: mouse deltas and frame timing."""

from __future__ import annotations


class MouseTracker:
    """Turns absolute cursor positions into look offsets."""

    def __init__(self, width: int, height: int) -> None:
        self.last_x = width / 2.0
        self.last_y = height / 2.0
        self.first = True

    def move(self, x: float, y: float) -> tuple[float, float]:
        """Return (x offset, y offset) since the last position; y grows upward.
        The first movement only records the position."""
        if self.first:
            self.last_x = x
            self.last_y = y
            self.first = False
        x_offset = x - self.last_x
        y_offset = self.last_y - y
        self.last_x = x
        self.last_y = y
        return x_offset, y_offset


class FrameClock:
    """Measures the time between frames."""

    def __init__(self) -> None:
        self.last_frame = 0.0
        self.delta_time = 0.0

    def tick(self, now: float) -> float:
        """Record a frame at time ``now`` and return the time since the last one."""
        self.delta_time = now - self.last_frame
        self.last_frame = now
        return self.delta_time