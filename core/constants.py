"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Most gameplay values can be overridden from ``data/tuning.toml``; the
numbers here are the defaults every ``core.tuning`` lookup falls back to.

Unit System
-----------
All gameplay distances are measured in **tiles**, where:

    1 tile = 1 metre   (the canonical spatial unit)

    Distance / position     m       (tiles)
    Speed                   m/s     (tiles per second)
    Time                    s       (real seconds, ``dt`` per frame)
    Counts                  —       (unitless)

Rendering converts to pixels via ``TILE_SIZE`` (px per tile).
No gameplay code should reference pixels — only the renderer.
"""

from __future__ import annotations
import math
from enum import Enum


# Render
TILE_SIZE = 20


# ── Biomes ──────────────────────────────────────────────────────────

class Biome(Enum):
    FOREST = "forest"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    PLAINS = "plains"
    ISLAND = "island"


# Ground palette: biome → (main colour, transition colour)
BIOME_COLORS: dict[Biome, tuple[tuple[int, int, int], tuple[int, int, int]]] = {
    Biome.FOREST:   ((45, 90, 39),    (58, 112, 52)),
    Biome.MOUNTAIN: ((107, 107, 107), (131, 131, 131)),
    Biome.DESERT:   ((212, 180, 131), (224, 196, 154)),
    Biome.PLAINS:   ((144, 182, 87),  (166, 199, 108)),
    Biome.ISLAND:   ((133, 193, 126), (155, 211, 148)),
}

# Ground texture glyph drawn on tiles whose texture phase is low
BIOME_TEXTURE: dict[Biome, str] = {
    Biome.FOREST:   "\U0001F33F",   # herb
    Biome.MOUNTAIN: "\U0001FAA8",   # rock
    Biome.DESERT:   "\U0001F335",   # cactus
    Biome.PLAINS:   "\U0001F33E",   # sheaf
    Biome.ISLAND:   "\U0001F33A",   # hibiscus
}

# Decoration glyph sets.  Order matters: the first glyph picks the scale.
BIOME_DECORATIONS: dict[Biome, tuple[str, ...]] = {
    Biome.DESERT:   ("\U0001F335",),
    Biome.PLAINS:   ("\U0001F33E", "\U0001F33F"),
    Biome.FOREST:   ("\U0001F342", "\U0001F33F"),
    Biome.MOUNTAIN: ("\U0001FAA8",),
    Biome.ISLAND:   ("\U0001F33A",),
}

DECORATION_SCALES: dict[str, float] = {
    "\U0001F33A": 0.3,   # hibiscus
    "\U0001F342": 0.4,   # fallen leaves
    "\U0001F33F": 0.6,   # herb
    "\U0001F33E": 0.6,   # sheaf
    "\U0001F335": 1.0,   # cactus
    "\U0001FAA8": 0.8,   # rock
}

# Texture phase below this value shows ground texture / gets a decoration
TEXTURE_THRESHOLD = 0.1


# ── World ───────────────────────────────────────────────────────────
WORLD_WIDTH = 200
WORLD_HEIGHT = 200
CAMP_X = 10
CAMP_Y = 10


# ── Ambient entities (seconds, tiles) ───────────────────────────────
CLOUD_SPAWN_INTERVAL = 8.0
CLOUD_SPAWN_CHANCE = 0.15
CLOUD_SPEED = 1.0              # m/s
CLOUD_EDGE_MARGIN = 5.0        # spawn this far outside an edge
CLOUD_DESPAWN_MARGIN = 10.0    # removed this far outside any edge
CLOUD_TURN_INTERVAL = 4.0
CLOUD_TURN_SPREAD = math.pi / 16.0   # heading jitter spans this arc (±π/32)
CLOUD_FRAME_INTERVAL = 1.0
CLOUD_FRAMES = ("\U0001F327", "☁", "⛈")

POOP_SPAWN_INTERVAL = 10.0
POOP_SPAWN_CHANCE = 0.9
POOP_FADE_START = 10.0
POOP_FADE_DURATION = 5.0
POOP_GLYPH = "\U0001F4A9"
POOP_SCALE = 0.5


# ── Player / interaction ───────────────────────────────────────────
PLAYER_SPEED = 6.0             # m/s
PLAYER_GLYPH = "\U0001F9CD"
GATHER_DURATION = 2.0          # seconds of holding for one unit
GATHER_RANGE = 3.0             # fixed gather reach, see InteractionEngine
DEPOSIT_RANGE = 2.0

MESSAGE_LIFETIME = 3.0
MESSAGE_FADE = 1.5
