"""
scenes/world_scene.py — Top-down tile view

Renders the generated world and the player on top of it.
Camera follows the player, clamped to the world edges.
WASD / arrows to move, E / Space (held) to gather; releasing it next to
the basecamp deposits the load.

Tab toggles debug overlay, G the tile grid.  F5 reloads tuning into
the running world (size and generation settings wait for F6), F6 rolls
a fresh world.
"""

from __future__ import annotations
import pygame
from core.scene import Scene, Viewport, clamp_camera
from core.app import App
from core.constants import TILE_SIZE
from components.resources import Camera
from logic.input_manager import InputManager
from scenes.world_draw import (
    draw_tiles, draw_objects, draw_poops, draw_clouds, draw_player,
    draw_hud, draw_debug_overlay,
)
from simulation.world import World
from core import tuning as tuning_mod


class WorldScene(Scene):
    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.world: World | None = None
        self.camera = Camera()
        self.input = InputManager()
        self.show_debug = False
        self.show_grid = False

    def on_enter(self, app: App):
        if self.world is None:
            self._build_world()

    def _build_world(self):
        self.world = World(seed=self.seed)
        self.camera.x = self.world.player.x
        self.camera.y = self.world.player.y

    # ── event handler ────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        self.input.end_frame()

        if self.input.just("toggle_debug"):
            self.show_debug = not self.show_debug
        if self.input.just("toggle_grid"):
            self.show_grid = not self.show_grid
        if self.input.just("reload_tuning"):
            tuning_mod.reload()
            self.world.apply_tuning()
        if self.input.just("regenerate"):
            self.seed = None
            self._build_world()

        self.world.update(dt, move=self.input.movement(),
                          interact=self.input.held("interact"))
        self.input.begin_frame()

        sw, sh = app.screen.get_size()
        self.camera.x = self.world.player.x
        self.camera.y = self.world.player.y
        clamp_camera(self.camera, self.world.width, self.world.height,
                     sw / TILE_SIZE, sh / TILE_SIZE)

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((20, 20, 25))
        world = self.world
        vp = Viewport.centred_on(self.camera.x, self.camera.y, *surface.get_size())

        draw_tiles(surface, app, world, vp, self.show_grid)
        draw_poops(surface, app, world, vp)
        draw_objects(surface, app, world, vp, show_debug=self.show_debug)
        draw_player(surface, app, world, vp)
        draw_clouds(surface, app, world, vp)
        draw_hud(surface, app, world)

        if self.show_debug:
            draw_debug_overlay(surface, app, world, self.camera)
