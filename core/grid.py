"""core/grid.py — The fixed-size tile grid.

One ``Tile`` per integer coordinate in ``[0, width) × [0, height)``.
Tiles are addressed ``(x, y)`` — column first — and stored row-major
(``rows[y][x]``).

The grid is the sole source of biome and occupancy truth.  Occupancy
itself is written only by ``logic.registry.ObjectRegistry``; a tile's
``object_id`` is a lookup key into the registry, never an owning
reference.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator
import random

from core.constants import Biome, TEXTURE_THRESHOLD


@dataclass(frozen=True)
class Decoration:
    """Cosmetic glyph stamped on a tile during generation."""
    glyph: str
    scale: float = 1.0


@dataclass
class Tile:
    texture_phase: float                 # [0, 1), fixed at creation
    biome: Biome | None = None
    object_id: int | None = None
    decorations: list[Decoration] = field(default_factory=list)

    @property
    def occupied(self) -> bool:
        return self.object_id is not None

    @property
    def shows_texture(self) -> bool:
        return self.texture_phase < TEXTURE_THRESHOLD


class TileGrid:
    """Width × height array of ``Tile`` records, created once."""

    def __init__(self, width: int, height: int, rng: random.Random | None = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid size must be positive, got {width}x{height}")
        rng = rng or random.Random()
        self.width = width
        self.height = height
        self.rows: list[list[Tile]] = [
            [Tile(texture_phase=rng.random()) for _ in range(width)]
            for _ in range(height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def area_in_bounds(self, x: int, y: int, w: int, h: int) -> bool:
        return x >= 0 and y >= 0 and x + w <= self.width and y + h <= self.height

    def tile(self, x: int, y: int) -> Tile | None:
        """Return the tile at ``(x, y)`` or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def biome(self, x: int, y: int) -> Biome | None:
        t = self.tile(x, y)
        return t.biome if t else None

    def tile_at_pos(self, px: float, py: float) -> Tile | None:
        """Tile under a float world position (floor of each axis)."""
        return self.tile(int(px // 1), int(py // 1))

    def iter_area(self, x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int, Tile]]:
        """Yield ``(x, y, tile)`` for the half-open rect, clipped to the grid."""
        x0 = max(0, x0)
        y0 = max(0, y0)
        x1 = min(self.width, x1)
        y1 = min(self.height, y1)
        for y in range(y0, y1):
            row = self.rows[y]
            for x in range(x0, x1):
                yield x, y, row[x]

    def __iter__(self) -> Iterator[tuple[int, int, Tile]]:
        return self.iter_area(0, 0, self.width, self.height)

    def occupied_count(self) -> int:
        return sum(1 for _, _, t in self if t.occupied)
