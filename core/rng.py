"""core/rng.py — Random sources and deterministic hashes.

Two kinds of randomness exist in the simulation:

* **Generation** — the seedable ``random.Random`` returned by
  ``init_rng()``.  Everything that shapes the world at construction
  (texture phases, palm / forest / mountain / rock rolls) draws from it,
  so one seed reproduces one world.
* **Cosmetic** — an unseeded ``random.Random()`` used for live,
  throw-away rolls: decoration glyph pick, cloud spawns and drift,
  poop spawns.

``position_hash`` is neither: it is a pure function of integer
coordinates and gives the same answer on every run.
"""

from __future__ import annotations
import math
import random


def init_rng(seed: int | None = None) -> random.Random:
    """Return the RNG used for world generation."""
    return random.Random(seed)


def cosmetic_rng() -> random.Random:
    """Return a fresh unseeded RNG for ephemeral rolls."""
    return random.Random()


def position_hash(x: int, y: int) -> float:
    """Stable pseudo-random value in ``[0, 1)`` for tile ``(x, y)``.

    ``fract(sin(x * 12.9898 + y * 78.233) * 43758.5453)``
    """
    h = math.sin(x * 12.9898 + y * 78.233) * 43758.5453
    return h - math.floor(h)
