"""components.objects — Placed world objects.

Every object is a ``WorldObject`` with a rectangular footprint whose
top-left corner is ``(x, y)``.  Two variants carry extra state:

    ResourceNode   Tree / Rock — a depleting stock of one resource
    Basecamp       storage map the player deposits into

Everything else (House, Bush, Mountain, SmallMountain, PalmTree) is a
plain ``WorldObject``.  Build instances through ``make_object`` so the
type table below stays the single description of each kind.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from core import tuning


class ObjectType(Enum):
    TREE = "tree"
    ROCK = "rock"
    HOUSE = "house"
    BASECAMP = "basecamp"
    BUSH = "bush"
    MOUNTAIN = "mountain"
    SMALL_MOUNTAIN = "small_mountain"
    PALM_TREE = "palm_tree"


class ResourceType(Enum):
    WOOD = "wood"
    STONE = "stone"


@dataclass(frozen=True)
class ObjectSpec:
    width: int
    height: int
    glyph: str
    collidable: bool = True
    interactive: bool = False
    resource: ResourceType | None = None
    resource_amount: int = 0


OBJECT_SPECS: dict[ObjectType, ObjectSpec] = {
    ObjectType.TREE:           ObjectSpec(2, 2, "\U0001F333", interactive=True,
                                          resource=ResourceType.WOOD, resource_amount=15),
    ObjectType.ROCK:           ObjectSpec(1, 1, "\U0001FAA8", interactive=True,
                                          resource=ResourceType.STONE, resource_amount=15),
    ObjectType.HOUSE:          ObjectSpec(4, 4, "\U0001F3E0", interactive=True),
    ObjectType.BASECAMP:       ObjectSpec(3, 3, "\U0001F3D5", interactive=True),
    ObjectType.BUSH:           ObjectSpec(1, 1, "\U0001F33F", collidable=False),
    ObjectType.MOUNTAIN:       ObjectSpec(4, 4, "⛰"),
    ObjectType.SMALL_MOUNTAIN: ObjectSpec(2, 2, "⛰"),
    ObjectType.PALM_TREE:      ObjectSpec(2, 2, "\U0001F334", interactive=True),
}

STRUCTURES = frozenset({ObjectType.HOUSE, ObjectType.BASECAMP})


@dataclass
class WorldObject:
    id: int
    kind: ObjectType
    x: int
    y: int
    width: int
    height: int
    collidable: bool = True
    interactive: bool = False

    @property
    def glyph(self) -> str:
        return OBJECT_SPECS[self.kind].glyph

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0

    def covers(self, tx: int, ty: int) -> bool:
        return self.x <= tx < self.x + self.width and self.y <= ty < self.y + self.height

    def footprint(self):
        """Yield every ``(x, y)`` tile under this object."""
        for dy in range(self.height):
            for dx in range(self.width):
                yield self.x + dx, self.y + dy


@dataclass
class ResourceNode(WorldObject):
    """A Tree or Rock.  Removed from the world when ``amount`` hits 0."""
    resource: ResourceType = ResourceType.WOOD
    amount: int = 0

    @property
    def depleted(self) -> bool:
        return self.amount <= 0


@dataclass
class Basecamp(WorldObject):
    storage: dict[ResourceType, int] = field(default_factory=dict)

    def store(self, resource: ResourceType, count: int) -> None:
        self.storage[resource] = self.storage.get(resource, 0) + count


def resource_amount(kind: ObjectType) -> int:
    """Starting stock for *kind*, overridable via ``[objects.<kind>]``."""
    default = OBJECT_SPECS[kind].resource_amount
    return tuning.integer(f"objects.{kind.value}", "resource_amount", default)


def make_object(oid: int, kind: ObjectType, x: int, y: int) -> WorldObject:
    """Build the right variant for *kind* at tile ``(x, y)``."""
    spec = OBJECT_SPECS[kind]
    common = dict(id=oid, kind=kind, x=x, y=y, width=spec.width, height=spec.height,
                  collidable=spec.collidable, interactive=spec.interactive)
    if spec.resource is not None:
        return ResourceNode(resource=spec.resource, amount=resource_amount(kind), **common)
    if kind is ObjectType.BASECAMP:
        return Basecamp(**common)
    return WorldObject(**common)
