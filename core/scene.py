"""
core/scene.py — Scene interface and tile-view projection

The app drives exactly one active Scene per frame:

    handle_event(event)   every pygame event not eaten by the app
    update(dt)            advance; dt is seconds since the last frame
    draw(surface)         render to the window

``Viewport`` is the camera projection shared by anything that draws the
tile map: world positions are in tiles, the camera sits at the centre
of the window, and ``bounds`` gives the half-open tile rect that is on
screen.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.constants import TILE_SIZE

if TYPE_CHECKING:
    import pygame
    from core.app import App


@dataclass(frozen=True)
class Viewport:
    ox: int                 # screen px of world x = 0
    oy: int                 # screen px of world y = 0
    screen_w: int
    screen_h: int
    tile_size: int = TILE_SIZE

    @classmethod
    def centred_on(cls, cam_x: float, cam_y: float, screen_w: int, screen_h: int,
                   tile_size: int = TILE_SIZE) -> "Viewport":
        return cls(screen_w // 2 - int(cam_x * tile_size),
                   screen_h // 2 - int(cam_y * tile_size),
                   screen_w, screen_h, tile_size)

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.ox + x * self.tile_size, self.oy + y * self.tile_size

    def bounds(self, width: int, height: int, pad: int = 0) -> tuple[int, int, int, int]:
        """Visible tiles ``(x0, y0, x1, y1)`` clipped to a *width* × *height* map."""
        ts = self.tile_size
        x0 = max(0, -self.ox // ts - pad)
        y0 = max(0, -self.oy // ts - pad)
        x1 = min(width, (self.screen_w - self.ox) // ts + 1 + pad)
        y1 = min(height, (self.screen_h - self.oy) // ts + 1 + pad)
        return x0, y0, x1, y1


def clamp_camera(cam, map_w: int, map_h: int, view_w: float, view_h: float) -> None:
    """Keep a view of *view_w* × *view_h* tiles inside the map.

    An axis where the map is smaller than the view is centred instead.
    """
    half_w = view_w / 2
    half_h = view_h / 2
    if map_w <= view_w:
        cam.x = map_w / 2
    else:
        cam.x = min(max(cam.x, half_w), map_w - half_w)
    if map_h <= view_h:
        cam.y = map_h / 2
    else:
        cam.y = min(max(cam.y, half_h), map_h - half_h)


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is replaced."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
