"""components.resources — World-level singletons (not per-object)."""

from __future__ import annotations
from dataclasses import dataclass, field

from components.objects import ResourceType
from core.constants import PLAYER_SPEED


@dataclass
class GameClock:
    """Monotonic game time — accumulated ``dt`` since session start.

    Advanced once per frame at the top of ``World.update()``.  Only
    used to timestamp message history; gameplay timers are relative.
    """
    time: float = 0.0


@dataclass
class Camera:
    x: float = 0.0
    y: float = 0.0


@dataclass
class GatheringState:
    """Where the player is in a gather cycle.

    ``progress`` runs 0 → 1 over one cycle.  ``session_total`` counts
    units gathered since the interaction key went down and is cleared on
    release.
    """
    active: bool = False
    progress: float = 0.0
    elapsed: float = 0.0       # s into the current cycle
    session_total: int = 0

    def reset(self) -> None:
        self.active = False
        self.progress = 0.0
        self.elapsed = 0.0


def _empty_inventory() -> dict[ResourceType, int]:
    return {r: 0 for r in ResourceType}


@dataclass
class Player:
    """The single player — position, speed and carried resources."""
    x: float = 0.0             # m
    y: float = 0.0             # m
    speed: float = PLAYER_SPEED
    inventory: dict[ResourceType, int] = field(default_factory=_empty_inventory)
    gathering: GatheringState = field(default_factory=GatheringState)

    @property
    def tile(self) -> tuple[int, int]:
        return int(self.x // 1), int(self.y // 1)

    def carried(self) -> int:
        return sum(self.inventory.values())
