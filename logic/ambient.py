"""logic/ambient.py — Clouds and poops.

Two independent cosmetic populations stepped by one ``update(dt, ...)``
call per frame:

    clouds   spawn off a random grid edge, drift with a slowly wandering
             heading, cycle three frames, vanish 10 m past any edge
    poops    dropped at the player's feet, fade out after 10 s and are
             gone at 15 s

Usage:
    ambient = AmbientEntityManager(grid.width, grid.height)
    ambient.update(dt, player.x, player.y)
    for cloud in ambient.clouds: ...

Drawing is handled by scenes/world_draw (draw_clouds, draw_poops).
"""

from __future__ import annotations
import math
import random

from components.ambient import Cloud, Poop
from core import tuning
from core.constants import (
    CLOUD_SPAWN_INTERVAL, CLOUD_SPAWN_CHANCE, CLOUD_SPEED, CLOUD_EDGE_MARGIN,
    CLOUD_DESPAWN_MARGIN, CLOUD_TURN_INTERVAL, CLOUD_TURN_SPREAD,
    CLOUD_FRAME_INTERVAL, CLOUD_FRAMES,
    POOP_SPAWN_INTERVAL, POOP_SPAWN_CHANCE, POOP_FADE_START, POOP_FADE_DURATION,
)


def poop_opacity(age: float, fade_start: float = POOP_FADE_START,
                 fade_duration: float = POOP_FADE_DURATION) -> float:
    if age <= fade_start:
        return 1.0
    return max(0.0, 1.0 - (age - fade_start) / fade_duration)


class AmbientEntityManager:
    """Owns every live Cloud and Poop.  Stored on the World facade."""

    def __init__(self, width: int, height: int, rng: random.Random | None = None):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.clouds: set[Cloud] = set()
        self.poops: set[Poop] = set()
        self.apply_tuning()

        # Seconds since the last spawn.  Start "overdue" so the first
        # eligible frame may already spawn.
        self._since_cloud = self.cloud_interval
        self._since_poop = self.poop_interval

    def apply_tuning(self) -> None:
        """(Re)read every rate and timing from ``core.tuning``."""
        c = "ambient.clouds"
        self.cloud_interval = tuning.number(c, "spawn_interval", CLOUD_SPAWN_INTERVAL)
        self.cloud_chance = tuning.number(c, "spawn_chance", CLOUD_SPAWN_CHANCE)
        self.cloud_speed = tuning.number(c, "speed", CLOUD_SPEED)
        self.edge_margin = tuning.number(c, "edge_margin", CLOUD_EDGE_MARGIN)
        self.despawn_margin = tuning.number(c, "despawn_margin", CLOUD_DESPAWN_MARGIN)
        self.turn_interval = tuning.number(c, "turn_interval", CLOUD_TURN_INTERVAL)
        self.turn_spread = tuning.number(c, "turn_spread", CLOUD_TURN_SPREAD)
        self.frame_interval = tuning.number(c, "frame_interval", CLOUD_FRAME_INTERVAL)

        p = "ambient.poops"
        self.poop_interval = tuning.number(p, "spawn_interval", POOP_SPAWN_INTERVAL)
        self.poop_chance = tuning.number(p, "spawn_chance", POOP_SPAWN_CHANCE)
        self.fade_start = tuning.number(p, "fade_start", POOP_FADE_START)
        self.fade_duration = tuning.number(p, "fade_duration", POOP_FADE_DURATION)

    # ── tick ─────────────────────────────────────────────────────────

    def update(self, dt: float, player_x: float, player_y: float) -> None:
        self.update_clouds(dt)
        self.update_poops(dt, player_x, player_y)

    def update_clouds(self, dt: float) -> None:
        self._since_cloud += dt
        if self._since_cloud > self.cloud_interval and self.rng.random() < self.cloud_chance:
            self.spawn_cloud()
            self._since_cloud = 0.0

        gone: list[Cloud] = []
        for cloud in self.clouds:
            self._step_cloud(cloud, dt)
            if self._outside(cloud):
                gone.append(cloud)
        for cloud in gone:
            self.clouds.discard(cloud)

    def update_poops(self, dt: float, player_x: float, player_y: float) -> None:
        self._since_poop += dt
        if self._since_poop > self.poop_interval and self.rng.random() < self.poop_chance:
            self.spawn_poop(player_x, player_y)
            self._since_poop = 0.0

        gone: list[Poop] = []
        for poop in self.poops:
            poop.age += dt
            poop.opacity = poop_opacity(poop.age, self.fade_start, self.fade_duration)
            if self.expired(poop):
                gone.append(poop)
        for poop in gone:
            self.poops.discard(poop)

    # ── spawners ─────────────────────────────────────────────────────

    def spawn_cloud(self, edge: int | None = None) -> Cloud:
        """Spawn a cloud just outside one grid edge (0=top 1=right 2=bottom 3=left)."""
        if edge is None:
            edge = int(self.rng.random() * 4)
        m = self.edge_margin
        if edge == 0:
            x, y = self.rng.random() * self.width, -m
        elif edge == 1:
            x, y = self.width + m, self.rng.random() * self.height
        elif edge == 2:
            x, y = self.rng.random() * self.width, self.height + m
        else:
            x, y = -m, self.rng.random() * self.height
        angle = self.rng.random() * math.pi * 2
        cloud = Cloud(x, y, math.cos(angle) * self.cloud_speed, math.sin(angle) * self.cloud_speed)
        self.clouds.add(cloud)
        return cloud

    def spawn_poop(self, x: float, y: float) -> Poop:
        poop = Poop(x, y)
        self.poops.add(poop)
        return poop

    # ── internals ────────────────────────────────────────────────────

    def _step_cloud(self, cloud: Cloud, dt: float) -> None:
        cloud.turn_timer += dt
        if cloud.turn_timer > self.turn_interval:
            speed = cloud.speed
            heading = math.atan2(cloud.dy, cloud.dx)
            heading += (self.rng.random() - 0.5) * self.turn_spread
            cloud.dx = math.cos(heading) * speed
            cloud.dy = math.sin(heading) * speed
            cloud.turn_timer = 0.0

        cloud.x += cloud.dx * dt
        cloud.y += cloud.dy * dt

        cloud.frame_timer += dt
        if cloud.frame_timer > self.frame_interval:
            cloud.frame = (cloud.frame + 1) % len(CLOUD_FRAMES)
            cloud.frame_timer = 0.0

    def expired(self, poop: Poop) -> bool:
        return poop.age >= self.fade_start + self.fade_duration

    def _outside(self, cloud: Cloud) -> bool:
        m = self.despawn_margin
        return (cloud.x < -m or cloud.x > self.width + m
                or cloud.y < -m or cloud.y > self.height + m)
