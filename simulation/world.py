"""simulation/world.py — The World aggregate.

Owns every piece of simulation state for one run and exposes the
command / query surface used by the viewer and by tests:

    world = World(seed=42)
    world.update(dt, move=(1.0, 0.0), interact=False)
    for tv in world.visible_tiles(x0, y0, x1, y1): ...
    for view in world.visible_objects(x0, y0, x1, y1): ...

One ``update()`` is one frame.  Inside it the frame's ``dt`` is the only
notion of time: messages age, the interaction engine advances (and may
root the player), the movement candidate is validated, then clouds and
poops step.  Nothing re-reads a clock mid-frame.
"""

from __future__ import annotations
import random
from typing import Iterator

from components.ambient import Cloud, Poop
from components.messages import MessageLog
from components.objects import ObjectType, ResourceType, WorldObject
from components.resources import GameClock, Player
from core import tuning
from core.collision import find_safe_spawn
from core.constants import (
    WORLD_WIDTH, WORLD_HEIGHT, PLAYER_SPEED, MESSAGE_LIFETIME, MESSAGE_FADE,
)
from core.grid import TileGrid
from core.rng import init_rng, cosmetic_rng
from logic.ambient import AmbientEntityManager
from logic.interaction import InteractionEngine
from logic.movement import can_move, movement_step
from logic.registry import ObjectRegistry
from logic.visuals import ObjectView, TileView, view_of
from logic.worldgen import WorldGenerator


class World:
    def __init__(self, width: int | None = None, height: int | None = None,
                 seed: int | None = None, *, generate: bool = True,
                 rng: random.Random | None = None,
                 cosmetic: random.Random | None = None):
        if width is None:
            width = tuning.integer("world", "width", WORLD_WIDTH)
        if height is None:
            height = tuning.integer("world", "height", WORLD_HEIGHT)
        if seed is None:
            seed = tuning.get("world", "seed", None)
        if seed is None and rng is None:
            # Pick one so the world can be reproduced from the log
            seed = random.randrange(1 << 31)
        self.seed = seed
        self.rng = rng or init_rng(seed)
        self.cosmetic = cosmetic or cosmetic_rng()

        self.grid = TileGrid(width, height, self.rng)
        self.registry = ObjectRegistry(self.grid)
        self.clock = GameClock()
        self.messages = MessageLog()
        self.player = Player()
        self.ambient = AmbientEntityManager(width, height, self.cosmetic)
        self.interaction = InteractionEngine(self.registry, self.player, self.messages)
        self.gen_stats: dict[str, int] = {}
        self.apply_tuning()

        if generate:
            print(f"[WORLDGEN] seed={self.seed}")
            self.gen_stats = WorldGenerator(self.grid, self.registry, self.rng, self.cosmetic).run()
        self.respawn_player()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    # ── frame ────────────────────────────────────────────────────────

    def update(self, dt: float, move: tuple[float, float] = (0.0, 0.0),
               interact: bool = False) -> None:
        """Advance the simulation by *dt* seconds.

        *move* is the held direction (each axis -1, 0 or 1); *interact*
        is whether the interaction key is down this frame.
        """
        self.clock.time += dt
        self.messages.update(dt)
        self.interaction.now = self.clock.time
        self.interaction.update(dt, interact)
        movement_step(self.player, move, dt, self.grid, self.registry,
                      rooted=self.interaction.rooted)
        self.ambient.update(dt, self.player.x, self.player.y)

    # ── commands ─────────────────────────────────────────────────────

    def apply_tuning(self) -> None:
        """Push the current ``core.tuning`` values into the live world.

        Covers player speed, messages, gathering and ambient rates.  World
        size and generation settings only take effect on a new World.
        """
        self.player.speed = tuning.number("player", "speed", PLAYER_SPEED)
        self.messages.max_entries = tuning.integer("messages", "history", 100)
        self.messages.lifetime = tuning.number("messages", "lifetime", MESSAGE_LIFETIME)
        self.messages.fade = tuning.number("messages", "fade", MESSAGE_FADE)
        self.interaction.apply_tuning()
        self.ambient.apply_tuning()

    def can_move(self, x: float, y: float) -> bool:
        return can_move(self.grid, self.registry, x, y, rooted=self.interaction.rooted)

    def try_move(self, x: float, y: float) -> bool:
        """Move the player to ``(x, y)`` if allowed.  Returns True on success."""
        if not self.can_move(x, y):
            return False
        self.player.x = x
        self.player.y = y
        return True

    def respawn_player(self, col: int | None = None, row: int | None = None) -> None:
        """Put the player on the nearest free tile to ``(col, row)`` (default: centre)."""
        if col is None:
            col = tuning.integer("player", "spawn_x", self.width // 2)
        if row is None:
            row = tuning.integer("player", "spawn_y", self.height // 2)
        self.player.x, self.player.y = find_safe_spawn(self.grid, self.registry, col, row)

    def place_object(self, x: int, y: int, kind: ObjectType) -> int | None:
        return self.registry.place(x, y, kind)

    def remove_object(self, oid: int) -> bool:
        return self.registry.remove(oid)

    def deposit(self) -> bool:
        return self.interaction.deposit()

    # ── queries (read-only, per frame) ───────────────────────────────

    def visible_tiles(self, x0: int, y0: int, x1: int, y1: int) -> Iterator[TileView]:
        """Tiles in the half-open rect ``[x0, x1) × [y0, y1)``, clipped to the grid."""
        for x, y, tile in self.grid.iter_area(x0, y0, x1, y1):
            yield TileView(x, y, tile.biome, tuple(tile.decorations), tile.shows_texture)

    def visible_objects(self, x0: int, y0: int, x1: int, y1: int) -> list[ObjectView]:
        """Objects touching the rect, sorted back-to-front (ascending y)."""
        objs = self.registry.objects_in_area(x0, y0, x1 - x0, y1 - y0)
        objs.sort(key=lambda o: o.y)
        return [view_of(o) for o in objs]

    def object_at(self, x: int, y: int) -> WorldObject | None:
        return self.registry.object_at(x, y)

    @property
    def clouds(self) -> set[Cloud]:
        return self.ambient.clouds

    @property
    def poops(self) -> set[Poop]:
        return self.ambient.poops

    @property
    def inventory(self) -> dict[ResourceType, int]:
        return self.player.inventory

    @property
    def gather_progress(self) -> float:
        return self.player.gathering.progress

    def message(self) -> tuple[str, float] | None:
        """``(text, opacity)`` of the live message, or None."""
        return self.messages.visible()
