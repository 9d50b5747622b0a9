"""components.ambient — Purely cosmetic, time-driven actors.

Neither kind interacts with the player or the tile grid; both are owned
and stepped by ``logic.ambient.AmbientEntityManager``.  Timers are
relative: each field counts seconds since its last event.
"""

from __future__ import annotations

from core.constants import CLOUD_FRAMES


class Cloud:
    __slots__ = ("x", "y", "dx", "dy", "frame", "frame_timer", "turn_timer")

    def __init__(self, x: float, y: float, dx: float, dy: float):
        self.x = x
        self.y = y
        self.dx = dx              # m/s
        self.dy = dy              # m/s
        self.frame = 0
        self.frame_timer = 0.0    # s since last frame change
        self.turn_timer = 0.0     # s since last heading change

    @property
    def glyph(self) -> str:
        return CLOUD_FRAMES[self.frame % len(CLOUD_FRAMES)]

    @property
    def speed(self) -> float:
        return (self.dx * self.dx + self.dy * self.dy) ** 0.5

    def __repr__(self) -> str:
        return f"Cloud(x={self.x:.2f}, y={self.y:.2f}, frame={self.frame})"


class Poop:
    __slots__ = ("x", "y", "age", "opacity")

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y
        self.age = 0.0            # s since spawn
        self.opacity = 1.0

    def __repr__(self) -> str:
        return f"Poop(x={self.x:.2f}, y={self.y:.2f}, age={self.age:.2f})"
