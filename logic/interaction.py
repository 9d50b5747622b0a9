"""logic/interaction.py — Gathering and deposit state machine.

States
------
    Idle        nothing in progress
    Gathering   the interaction key is held next to a resource; the
                player is rooted while ``progress`` climbs 0 → 1

Transitions
-----------
    Idle → Gathering        key-down edge (or: a cycle just completed
                            and the key is still held — cycles chain)
    Gathering → Idle        cycle completes (1 unit moves to inventory)
    Gathering → Idle        nothing gatherable in the 3×3 neighbourhood,
                            or a candidate is out of reach (message shown;
                            a chain that runs dry ends without one)
    any → Idle              key-up edge; also attempts a deposit

The engine is fed the *level* of the interaction key every frame and
derives the edges itself, so callers just pass ``held``::

    engine.update(dt, held=input.held("interact"))

Reach
-----
Gathering always uses ``GATHER_RANGE`` (3 m) regardless of any range a
caller might have in mind; deposits use ``DEPOSIT_RANGE`` (2 m).  Both
are measured from the player's position to the nearest point of the
object's footprint.
"""

from __future__ import annotations
import math

from components.messages import MessageLog
from components.objects import Basecamp, ObjectType, ResourceNode, ResourceType, WorldObject
from components.resources import Player
from core import tuning
from core.constants import GATHER_DURATION, GATHER_RANGE, DEPOSIT_RANGE
from logic.registry import ObjectRegistry

# Completion tolerance for summed frame times
_EPS = 1e-9


def distance_to(obj: WorldObject, px: float, py: float) -> float:
    """Distance from ``(px, py)`` to the closest point of *obj*'s footprint."""
    dx = max(obj.x - px, 0.0, px - (obj.x + obj.width))
    dy = max(obj.y - py, 0.0, py - (obj.y + obj.height))
    return math.hypot(dx, dy)


def is_nearby(player: Player, obj: WorldObject, max_distance: float) -> bool:
    return distance_to(obj, player.x, player.y) <= max_distance


class InteractionEngine:
    def __init__(self, registry: ObjectRegistry, player: Player,
                 messages: MessageLog | None = None):
        self.registry = registry
        self.player = player
        self.messages = messages if messages is not None else MessageLog()
        self.now = 0.0              # game time, stamped by the World each frame
        self._held = False
        self._chain = False         # last cycle completed while the key was held
        self.apply_tuning()

    def apply_tuning(self) -> None:
        self.duration = tuning.number("gathering", "duration", GATHER_DURATION)
        self.gather_range = tuning.number("gathering", "gather_range", GATHER_RANGE)
        self.deposit_range = tuning.number("gathering", "deposit_range", DEPOSIT_RANGE)

    # ── queries ──────────────────────────────────────────────────────

    @property
    def gathering(self) -> bool:
        return self.player.gathering.active

    @property
    def progress(self) -> float:
        return self.player.gathering.progress

    @property
    def rooted(self) -> bool:
        """True while movement must be refused (mid-cycle or chaining)."""
        return self.gathering or (self._held and self._chain)

    # ── per-frame ────────────────────────────────────────────────────

    def update(self, dt: float, held: bool) -> None:
        pressed = held and not self._held
        released = self._held and not held
        self._held = held

        if released:
            self.cancel()
            self.deposit()
            return
        if not held:
            return

        g = self.player.gathering
        chained = False
        if pressed:
            self.start()
        elif not g.active:
            if not self._chain:
                return
            self.start(keep_total=True)
            chained = True

        target = self.find_target(quiet=chained)
        if target is None:
            return

        g.elapsed += dt
        g.progress = min(1.0, g.elapsed / self.duration)
        if g.elapsed + _EPS >= self.duration:
            self._complete(target)

    # ── commands ─────────────────────────────────────────────────────

    def start(self, keep_total: bool = False) -> None:
        g = self.player.gathering
        g.reset()
        g.active = True
        if not keep_total:
            g.session_total = 0
        self._chain = False

    def cancel(self) -> None:
        """Abandon the current cycle without credit."""
        g = self.player.gathering
        g.reset()
        g.session_total = 0
        self._chain = False

    def find_target(self, quiet: bool = False) -> ResourceNode | None:
        """Pick the resource to work on, or drop to Idle with a message.

        With *quiet* an empty neighbourhood ends the chain without a
        message, so the last "+1" stays on screen.
        """
        tx, ty = self.player.tile
        candidates = [
            obj for obj in self.registry.objects_in_area(tx - 1, ty - 1, 3, 3)
            if isinstance(obj, ResourceNode) and obj.interactive and obj.amount > 0
        ]
        if not candidates:
            if quiet:
                self.player.gathering.reset()
                self._chain = False
            else:
                self._fail("Nothing to gather here")
            return None
        for obj in candidates:
            if not is_nearby(self.player, obj, self.gather_range):
                self._fail(f"Too far from the {obj.kind.value.replace('_', ' ')}")
                return None
        return candidates[0]

    def deposit(self) -> bool:
        """Unload the inventory into a basecamp within reach.

        Returns True if anything was stored.
        """
        camp = self._find_basecamp()
        if camp is None:
            return False
        if not is_nearby(self.player, camp, self.deposit_range):
            self._post("Too far from the basecamp")
            return False
        stored = False
        inv = self.player.inventory
        for res in ResourceType:
            count = inv.get(res, 0)
            if count <= 0:
                continue
            camp.store(res, count)
            inv[res] = 0
            stored = True
            self._post(f"Deposited {count} {res.value} (camp: {camp.storage[res]})")
        return stored

    # ── internals ────────────────────────────────────────────────────

    def _complete(self, target: ResourceNode) -> None:
        g = self.player.gathering
        target.amount -= 1
        inv = self.player.inventory
        inv[target.resource] = inv.get(target.resource, 0) + 1
        g.session_total += 1
        if target.depleted:
            self.registry.remove(target.id)
            print(f"[GATHER] {target.kind.value} #{target.id} at ({target.x},{target.y}) depleted")
        self._post(f"+1 {target.resource.value} ({g.session_total} this trip)")
        g.reset()
        self._chain = True

    def _find_basecamp(self) -> Basecamp | None:
        tx, ty = self.player.tile
        r = int(math.ceil(self.deposit_range))
        camp = self.registry.object_at(tx, ty)
        if isinstance(camp, Basecamp):
            return camp
        for obj in self.registry.objects_in_area(tx - r, ty - r, 2 * r + 1, 2 * r + 1):
            if obj.kind is ObjectType.BASECAMP and isinstance(obj, Basecamp):
                return obj
        return None

    def _fail(self, text: str) -> None:
        self._post(text)
        self.player.gathering.reset()
        self._chain = False

    def _post(self, text: str) -> None:
        self.messages.post(text, t=self.now)
