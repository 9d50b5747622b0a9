"""scenes/world_draw.py — Rendering helpers for the world scene.

All pure-draw functions live here so that WorldScene.draw() stays thin.
Every function receives the data it needs as parameters — no implicit
coupling to the scene object beyond what is explicitly passed.

Positions come out of the World in tiles; every helper goes through a
``Viewport`` to reach screen pixels.
"""

from __future__ import annotations
import math
import pygame
from core.app import App
from core.constants import (
    BIOME_COLORS, BIOME_TEXTURE, POOP_GLYPH, POOP_SCALE, PLAYER_GLYPH,
)
from components.objects import ResourceType
from components.resources import Camera
from core.scene import Viewport
from simulation.world import World


def _blend(a, b, t: float):
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


def _borders_other_biome(world: World, x: int, y: int, biome) -> bool:
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        other = world.grid.biome(x + dx, y + dy)
        if other is not None and other is not biome:
            return True
    return False


def _blit_centered(surface: pygame.Surface, img: pygame.Surface,
                   cx: float, cy: float, alpha: int = 255):
    if alpha < 255:
        img = img.copy()
        img.set_alpha(alpha)
    w, h = img.get_size()
    surface.blit(img, (int(cx - w / 2), int(cy - h / 2)))


# ── Tiles ───────────────────────────────────────────────────────────

def draw_tiles(surface: pygame.Surface, app: App, world: World, vp: Viewport,
               show_grid: bool = False):
    ts = vp.tile_size
    for tv in world.visible_tiles(*vp.bounds(world.width, world.height)):
        main, edge = BIOME_COLORS[tv.biome]
        color = main
        if _borders_other_biome(world, tv.x, tv.y, tv.biome):
            blend = (math.sin(tv.x / 10) * math.cos(tv.y / 10) + 1) / 2 * 0.3
            color = _blend(main, edge, blend)
        sx, sy = vp.to_screen(tv.x, tv.y)
        rect = pygame.Rect(int(sx), int(sy), ts, ts)
        pygame.draw.rect(surface, color, rect)
        if tv.show_texture:
            img = app.glyph(BIOME_TEXTURE[tv.biome], ts // 2)
            _blit_centered(surface, img, rect.centerx, rect.centery, alpha=90)
        for deco in tv.decorations:
            img = app.glyph(deco.glyph, ts * deco.scale)
            _blit_centered(surface, img, rect.centerx, rect.centery)
        if show_grid:
            pygame.draw.rect(surface, (255, 255, 255), rect, 1)


# ── Objects ─────────────────────────────────────────────────────────

def draw_objects(surface: pygame.Surface, app: App, world: World, vp: Viewport,
                 show_debug: bool = False):
    ts = vp.tile_size
    # Tall glyphs reach past their footprint, so query a padded rect.
    # The World returns them back-to-front already.
    for view in world.visible_objects(*vp.bounds(world.width, world.height, pad=4)):
        obj = view.obj
        size = obj.width * ts * view.scale
        sx, sy = vp.to_screen(*obj.center)
        _blit_centered(surface, app.glyph(obj.glyph, size), sx, sy + view.y_offset(size))
        if show_debug:
            x, y = vp.to_screen(obj.x, obj.y)
            rect = pygame.Rect(int(x), int(y), obj.width * ts, obj.height * ts)
            color = (0, 255, 255) if obj.collidable else (255, 255, 0)
            pygame.draw.rect(surface, color, rect, 1)


# ── Ambient (clouds + poops) ───────────────────────────────────────

def draw_poops(surface: pygame.Surface, app: App, world: World, vp: Viewport):
    img = app.glyph(POOP_GLYPH, vp.tile_size * POOP_SCALE)
    for p in world.poops:
        sx, sy = vp.to_screen(p.x, p.y)
        _blit_centered(surface, img, sx, sy, alpha=int(255 * p.opacity))


def draw_clouds(surface: pygame.Surface, app: App, world: World, vp: Viewport):
    for c in world.clouds:
        sx, sy = vp.to_screen(c.x, c.y)
        _blit_centered(surface, app.glyph(c.glyph, vp.tile_size * 3), sx, sy, alpha=200)


# ── Player ─────────────────────────────────────────────────────────

def draw_player(surface: pygame.Surface, app: App, world: World, vp: Viewport):
    ts = vp.tile_size
    sx, sy = vp.to_screen(world.player.x, world.player.y)
    _blit_centered(surface, app.glyph(PLAYER_GLYPH, ts), sx, sy)

    # Gather progress bar above the head
    if world.interaction.gathering:
        bar_w = ts * 2
        bar_h = 4
        bar_x = int(sx - bar_w / 2)
        bar_y = int(sy - ts)
        fill_w = int(bar_w * world.gather_progress)
        pygame.draw.rect(surface, (40, 40, 40), (bar_x, bar_y, bar_w, bar_h))
        pygame.draw.rect(surface, (120, 220, 80), (bar_x, bar_y, fill_w, bar_h))
        pygame.draw.rect(surface, (80, 80, 80), (bar_x, bar_y, bar_w, bar_h), 1)


# ── HUD ────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, world: World):
    hud_y = 8
    inv = world.inventory
    app.draw_text_bg(surface, f"Wood: {inv[ResourceType.WOOD]}", 8, hud_y, (220, 180, 120))
    hud_y += 18
    app.draw_text_bg(surface, f"Stone: {inv[ResourceType.STONE]}", 8, hud_y, (200, 200, 210))

    msg = world.message()
    if msg:
        text, opacity = msg
        sw, sh = surface.get_size()
        w, _ = app.font_lg.size(text)
        app.draw_text_bg(surface, text, (sw - w) // 2, sh - 48, font=app.font_lg,
                         alpha=int(255 * opacity))


def draw_debug_overlay(surface: pygame.Surface, app: App, world: World, cam: Camera):
    panel_bg = pygame.Surface((300, 140), pygame.SRCALPHA)
    panel_bg.fill((0, 0, 0, 140))
    surface.blit(panel_bg, (2, 50))

    y = 56
    p = world.player
    lines = [
        f"FPS: {int(app.clock.get_fps())}",
        f"Seed: {world.seed}",
        f"Camera: ({cam.x:.1f}, {cam.y:.1f})",
        f"Player: ({p.x:.1f}, {p.y:.1f})  {world.grid.biome(*p.tile).value}",
        f"Objects: {len(world.registry)}  Tiles used: {world.grid.occupied_count()}",
        f"Carrying: {p.carried()}",
        f"Clouds: {len(world.clouds)}  Poops: {len(world.poops)}",
        f"GameClock: {world.clock.time:.1f}s",
    ]
    for line in lines:
        app.draw_text(surface, line, 8, y, (0, 255, 0), app.font_sm)
        y += 14
