"""components — Plain data records, organised by domain.

Submodules
----------
objects     ObjectType, ResourceType, WorldObject, ResourceNode, Basecamp
ambient     Cloud, Poop
resources   GameClock, Camera, GatheringState, Player
messages    TransientMessage, MessageLog

All public names are re-exported here so code can do
``from components import Player``.
"""

# ── Objects ──────────────────────────────────────────────────────────
from components.objects import (
    ObjectType, ResourceType, ObjectSpec, OBJECT_SPECS, STRUCTURES,
    WorldObject, ResourceNode, Basecamp, make_object,
)

# ── Ambient ──────────────────────────────────────────────────────────
from components.ambient import Cloud, Poop

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, Camera, GatheringState, Player

# ── Messages ─────────────────────────────────────────────────────────
from components.messages import TransientMessage, MessageLog

__all__ = [
    # objects
    "ObjectType", "ResourceType", "ObjectSpec", "OBJECT_SPECS", "STRUCTURES",
    "WorldObject", "ResourceNode", "Basecamp", "make_object",
    # ambient
    "Cloud", "Poop",
    # resources
    "GameClock", "Camera", "GatheringState", "Player",
    # messages
    "TransientMessage", "MessageLog",
]
