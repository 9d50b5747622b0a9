"""core/collision.py — Tile-grid blocking and safe-spawn primitives.

These live in ``core/`` (not ``logic/``) because both world setup
(spawn resolution) and gameplay (movement) need them.  The registry is
passed in rather than imported at module level to keep ``core`` free of
``logic`` imports.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.grid import TileGrid

if TYPE_CHECKING:
    from logic.registry import ObjectRegistry


def is_blocked(grid: TileGrid, registry: "ObjectRegistry", x: float, y: float) -> bool:
    """True if world position ``(x, y)`` is out of bounds or on a collidable object."""
    tile = grid.tile_at_pos(x, y)
    if tile is None:
        return True
    if tile.object_id is None:
        return False
    obj = registry.get(tile.object_id)
    return obj is not None and obj.collidable


def find_safe_spawn(grid: TileGrid, registry: "ObjectRegistry",
                    col: int, row: int, max_radius: int = 10) -> tuple[float, float]:
    """Return ``(x, y)`` at the centre of the nearest free tile to ``(col, row)``.

    *col* / *row* are clamped into the grid first.  Tries that tile, then
    expanding square rings.  Falls back to the clamped tile if every ring
    up to *max_radius* is blocked.
    """
    col = min(max(col, 0), grid.width - 1)
    row = min(max(row, 0), grid.height - 1)
    off = 0.5
    if not is_blocked(grid, registry, col + off, row + off):
        return col + off, row + off
    for radius in range(1, max_radius + 1):
        for dr in range(-radius, radius + 1):
            for dc in range(-radius, radius + 1):
                if abs(dr) != radius and abs(dc) != radius:
                    continue
                tx = col + dc + off
                ty = row + dr + off
                if not is_blocked(grid, registry, tx, ty):
                    return tx, ty
    return col + off, row + off
