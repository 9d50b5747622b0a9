"""
core/app.py — Pygame application shell

Handles the window, main loop, and scene stack.  The simulation never
sees pygame: scenes translate input into World commands and draw the
World's read-only views.

    app = App(title="Wildgrid", width=960, height=640)
    app.push_scene(MyScene())
    app.run()
"""

from __future__ import annotations
import pygame
from core import tuning
from core.scene import Scene

# Fonts tried in order for emoji glyphs; pygame picks the first installed
EMOJI_FONTS = "notocoloremoji,notoemoji,segoeuiemoji,applecoloremoji,symbola"

MAX_FRAME_DT = 0.1         # s


class App:
    def __init__(self, title: str = "Wildgrid", width: int = 960, height: int = 640):
        pygame.init()
        self._windowed_size = (width, height)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fullscreen = False
        self.fps = 60
        self.dt = 0.0

        # Scene stack; only the top scene is active
        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)
        self._glyph_fonts: dict[int, pygame.font.Font] = {}
        self._glyph_cache: dict[tuple[str, int], pygame.Surface] = {}

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    # -- Main loop --

    def run(self):
        max_dt = tuning.number("viewer", "max_dt", MAX_FRAME_DT)
        while self.running:
            # One time sample per frame, capped so a stalled window does
            # not hand the simulation a multi-second step
            self.dt = min(self.clock.tick(self.fps) / 1000.0, max_dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    self.toggle_fullscreen()
                elif event.type == pygame.VIDEORESIZE and not self.fullscreen:
                    self._windowed_size = (event.w, event.h)
                    self.screen = pygame.display.set_mode(
                        (event.w, event.h), pygame.RESIZABLE)
                elif self.scene:
                    self.scene.handle_event(event, self)

            if self.scene:
                self.scene.update(self.dt, self)
                self.scene.draw(self.screen, self)

            pygame.display.flip()

        pygame.quit()

    def toggle_fullscreen(self):
        """Switch between windowed and fullscreen (F11)."""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(
                self._windowed_size, pygame.RESIZABLE)

    # -- Convenience --

    def glyph(self, text: str, size: int) -> pygame.Surface:
        """Render an emoji glyph at *size* px (cached)."""
        size = max(4, int(size))
        key = (text, size)
        surf = self._glyph_cache.get(key)
        if surf is None:
            font = self._glyph_fonts.get(size)
            if font is None:
                font = pygame.font.SysFont(EMOJI_FONTS, size)
                self._glyph_fonts[size] = font
            surf = font.render(text, True, (255, 255, 255))
            self._glyph_cache[key] = surf
        return surf

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        rect = surface.blit(img, (x, y))
        return rect

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2, alpha: int = 255):
        """Draw text with a semi-transparent background box."""
        f = font or self.font
        img = f.render(text, True, color)
        w, h = img.get_size()
        box = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        box.blit(img, (pad, pad))
        if alpha < 255:
            box.set_alpha(alpha)
        return surface.blit(box, (x - pad, y - pad))
