"""logic/movement.py — Player movement validation.

The player moves by whole candidate positions: the frame's displacement
is applied to both axes at once and the result is either accepted or
dropped.  A candidate is rejected when

- the player is rooted by a gather cycle, or
- the tile under the candidate is outside the grid, or
- that tile belongs to a collidable object.
"""

from __future__ import annotations

from components.resources import Player
from core.collision import is_blocked
from core.grid import TileGrid
from logic.registry import ObjectRegistry


def can_move(grid: TileGrid, registry: ObjectRegistry, x: float, y: float,
             rooted: bool = False) -> bool:
    if rooted:
        return False
    return not is_blocked(grid, registry, x, y)


def movement_step(player: Player, move: tuple[float, float], dt: float,
                  grid: TileGrid, registry: ObjectRegistry,
                  rooted: bool = False) -> bool:
    """Try to move *player* by ``move * speed * dt``.  Returns True if moved."""
    dx, dy = move
    if dx == 0.0 and dy == 0.0:
        return False
    nx = player.x + dx * player.speed * dt
    ny = player.y + dy * player.speed * dt
    if not can_move(grid, registry, nx, ny, rooted):
        return False
    player.x = nx
    player.y = ny
    return True
