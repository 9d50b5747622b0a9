"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and the World.  The scene feeds in raw
events; the manager maps them to *intents*.  The simulation only ever
sees a movement vector and the interaction key level — it never touches
raw keycodes.

Usage (in world_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)
    self.input.end_frame()          # captures held-key state

    if self.input.just("toggle_debug"):   # discrete press
        ...
    move = self.input.movement()          # → (dx, dy), each -1/0/1
    interact = self.input.held("interact")
"""

from __future__ import annotations
import pygame


# ── Intent names ────────────────────────────────────────────────────
# Held:      move_up  move_down  move_left  move_right  interact
# Pressed:   toggle_debug  toggle_grid  reload_tuning  regenerate

_BINDS: dict[str, list[int]] = {
    "move_up":       [pygame.K_w, pygame.K_UP],
    "move_down":     [pygame.K_s, pygame.K_DOWN],
    "move_left":     [pygame.K_a, pygame.K_LEFT],
    "move_right":    [pygame.K_d, pygame.K_RIGHT],
    "interact":      [pygame.K_e, pygame.K_SPACE],
    "toggle_debug":  [pygame.K_TAB],
    "toggle_grid":   [pygame.K_g],
    "reload_tuning": [pygame.K_F5],
    "regenerate":    [pygame.K_F6],
}


class InputManager:
    """Maps keys to intents.

    Call ``begin_frame()`` before processing events,
    ``feed(event)`` for each pygame event,
    ``end_frame()`` after all events.

    Then use ``just(intent)`` for discrete presses and
    ``held(intent)`` for continuous holds.
    """

    def __init__(self, binds: dict[str, list[int]] | None = None):
        self.binds = binds or _BINDS
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Intents currently held (key is down right now)
        self._held: set[str] = set()
        # Stash for unhandled raw events the scene still needs (e.g. QUIT)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  OS key-repeat KEYDOWNs are ignored."""
        if event.type == pygame.KEYDOWN:
            for intent, keys in self.binds.items():
                if event.key in keys and intent not in self._held:
                    self._pressed.add(intent)
        else:
            self.raw_events.append(event)

    def end_frame(self):
        """Snapshot held-key state for continuous intents."""
        self._held.clear()
        keys = pygame.key.get_pressed()
        for intent, key_list in self.binds.items():
            if any(keys[k] for k in key_list):
                self._held.add(intent)

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True if the intent is continuously held down."""
        return intent in self._held

    def movement(self) -> tuple[float, float]:
        """Return the (dx, dy) direction from held keys.

        Axes are independent: a diagonal is simply both axes at full
        speed, the same as pressing them one after the other.
        """
        dx = 0.0
        dy = 0.0
        if self.held("move_up"):
            dy -= 1.0
        if self.held("move_down"):
            dy += 1.0
        if self.held("move_left"):
            dx -= 1.0
        if self.held("move_right"):
            dx += 1.0
        return dx, dy
