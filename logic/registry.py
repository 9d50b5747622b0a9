"""logic/registry.py — Object registry and tile occupancy.

Owns every ``WorldObject`` and keeps the grid's occupancy in step with
them.  Invariants maintained by ``place`` / ``remove``:

- every tile under an object's footprint has ``object_id == obj.id``;
- no two footprints overlap;
- every footprint lies fully inside the grid.

Refusals are signalled with ``None`` / ``False``, never exceptions —
generation passes simply skip a refused spot.

    reg = ObjectRegistry(grid)
    oid = reg.place(10, 10, ObjectType.BASECAMP)
    for obj in reg.objects_in_area(8, 8, 5, 5):
        ...
"""

from __future__ import annotations
from typing import Iterator

from components.objects import ObjectType, OBJECT_SPECS, WorldObject, make_object
from core.grid import TileGrid


class ObjectRegistry:
    def __init__(self, grid: TileGrid):
        self.grid = grid
        self._next_id = 0
        self._objects: dict[int, WorldObject] = {}

    # -- Placement --

    def is_area_available(self, x: int, y: int, w: int, h: int) -> bool:
        """True if the rect is inside the grid and no tile is occupied."""
        if not self.grid.area_in_bounds(x, y, w, h):
            return False
        rows = self.grid.rows
        for ty in range(y, y + h):
            row = rows[ty]
            for tx in range(x, x + w):
                if row[tx].object_id is not None:
                    return False
        return True

    def place(self, x: int, y: int, kind: ObjectType) -> int | None:
        """Place a *kind* object with its top-left at ``(x, y)``.

        Returns the new object id, or None if the footprint is blocked
        or leaves the grid.
        """
        spec = OBJECT_SPECS[kind]
        if not self.is_area_available(x, y, spec.width, spec.height):
            return None
        self._next_id += 1
        obj = make_object(self._next_id, kind, x, y)
        for tx, ty in obj.footprint():
            self.grid.rows[ty][tx].object_id = obj.id
        self._objects[obj.id] = obj
        return obj.id

    def remove(self, oid: int) -> bool:
        """Remove object *oid* and free its tiles.  False if unknown."""
        obj = self._objects.pop(oid, None)
        if obj is None:
            return False
        for tx, ty in obj.footprint():
            tile = self.grid.tile(tx, ty)
            if tile is not None and tile.object_id == oid:
                tile.object_id = None
        return True

    # -- Lookup --

    def get(self, oid: int | None) -> WorldObject | None:
        if oid is None:
            return None
        return self._objects.get(oid)

    def object_at(self, x: int, y: int) -> WorldObject | None:
        """Object covering tile ``(x, y)``, or None (also when out of bounds)."""
        tile = self.grid.tile(x, y)
        if tile is None:
            return None
        return self.get(tile.object_id)

    def objects_in_area(self, x: int, y: int, w: int, h: int) -> list[WorldObject]:
        """Distinct objects whose footprint intersects the rect.

        The rect is clipped to the grid; results keep first-seen order
        (row-major scan).
        """
        seen: dict[int, WorldObject] = {}
        for _, _, tile in self.grid.iter_area(x, y, x + w, y + h):
            oid = tile.object_id
            if oid is not None and oid not in seen:
                obj = self._objects.get(oid)
                if obj is not None:
                    seen[oid] = obj
        return list(seen.values())

    def of_kind(self, kind: ObjectType) -> Iterator[WorldObject]:
        for obj in self._objects.values():
            if obj.kind is kind:
                yield obj

    def count(self, kind: ObjectType | None = None) -> int:
        if kind is None:
            return len(self._objects)
        return sum(1 for _ in self.of_kind(kind))

    def __contains__(self, oid: int) -> bool:
        return oid in self._objects

    def __iter__(self) -> Iterator[WorldObject]:
        return iter(list(self._objects.values()))

    def __len__(self) -> int:
        return len(self._objects)
