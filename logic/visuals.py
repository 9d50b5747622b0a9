"""logic/visuals.py — Per-frame read-only views for the renderer.

Nothing here draws; these are the shapes the simulation hands to
``scenes/world_draw``.  Object scale and vertical offset depend only on
the object's type (and, for trees, its position), so an object looks
the same on every frame and every run.
"""

from __future__ import annotations
from dataclasses import dataclass

from components.objects import ObjectType, WorldObject
from core.constants import Biome
from core.grid import Decoration
from core.rng import position_hash

_SCALES = {
    ObjectType.MOUNTAIN: 3.0,
    ObjectType.SMALL_MOUNTAIN: 1.8,
    ObjectType.PALM_TREE: 1.5,
}

# Fraction of the drawn footprint size to lift the glyph by
_Y_OFFSETS = {
    ObjectType.MOUNTAIN: -0.5,
    ObjectType.SMALL_MOUNTAIN: -0.3,
}


def object_scale(obj: WorldObject) -> float:
    if obj.kind is ObjectType.TREE:
        # 0.5 .. 2.0, stable per position
        return 0.5 + position_hash(obj.x, obj.y) * 1.5
    return _SCALES.get(obj.kind, 1.0)


def object_y_offset(obj: WorldObject, size: float) -> float:
    """Vertical draw offset for an object drawn *size* pixels wide."""
    return _Y_OFFSETS.get(obj.kind, 0.0) * size


@dataclass(frozen=True)
class TileView:
    x: int
    y: int
    biome: Biome
    decorations: tuple[Decoration, ...]
    show_texture: bool


@dataclass(frozen=True)
class ObjectView:
    obj: WorldObject
    scale: float
    y_offset_factor: float

    def y_offset(self, size: float) -> float:
        return self.y_offset_factor * size


def view_of(obj: WorldObject) -> ObjectView:
    return ObjectView(obj, object_scale(obj), _Y_OFFSETS.get(obj.kind, 0.0))
