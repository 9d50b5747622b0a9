"""logic/worldgen.py — One-shot world population.

``WorldGenerator.run()`` paints and populates a fresh ``TileGrid`` in a
fixed order; later passes see the occupancy left by earlier ones:

1. biomes       classify every tile, stamp decorations, roll palm trees
2. forests      clustered tree placement driven by a density signal
3. mountains    short random-walk ranges of (small) mountains
4. rocks        sparse rocks on mountain and desert ground
5. camp         clear the camp site and place the Basecamp

Placement refusals are never errors here — a blocked spot is skipped.
All world-shaping rolls use the seeded generation RNG; only the
decoration glyph pick uses the cosmetic RNG.
"""

from __future__ import annotations
import math
import random

from components.objects import ObjectType, OBJECT_SPECS, STRUCTURES
from core import tuning
from core.constants import (
    Biome, BIOME_DECORATIONS, DECORATION_SCALES, TEXTURE_THRESHOLD, CAMP_X, CAMP_Y,
)
from core.grid import Decoration, TileGrid
from logic.biomes import classify
from logic.registry import ObjectRegistry


def forest_density(x: float, y: float) -> float:
    """Tree-cluster signal: medium, small and large blobs summed."""
    return (math.sin(x / 6) * math.cos(y / 6) * 1.0
            + math.sin(x / 3) * math.cos(y / 3) * 0.8
            + math.sin(x / 40) * math.cos(y / 40) * 0.6)


def pick_decoration(biome: Biome, rng: random.Random) -> Decoration:
    glyphs = BIOME_DECORATIONS[biome]
    glyph = glyphs[int(rng.random() * len(glyphs))]
    # Scale comes from the set's first glyph, whichever one was picked
    return Decoration(glyph, DECORATION_SCALES.get(glyphs[0], 1.0))


class WorldGenerator:
    def __init__(self, grid: TileGrid, registry: ObjectRegistry,
                 rng: random.Random, cosmetic: random.Random | None = None):
        self.grid = grid
        self.registry = registry
        self.rng = rng
        self.cosmetic = cosmetic or random.Random()
        self.stats: dict[str, int] = {}

        g = "worldgen"
        self.decoration_threshold = tuning.number(g, "decoration_threshold", TEXTURE_THRESHOLD)
        self.palm_chance = tuning.number(g, "palm_chance", 0.05)
        self.forest_threshold = tuning.number(g, "forest_threshold", 0.2)
        self.forest_gate = tuning.number(g, "forest_gate", 0.995)
        self.forest_jitter = tuning.number(g, "forest_jitter", 0.02)
        self.cluster_radius = tuning.integer(g, "cluster_radius", 2)
        self.dense_cutoff = tuning.number(g, "dense_cutoff", 0.6)
        self.dense_cap = tuning.integer(g, "dense_cap", 20)
        self.sparse_cap = tuning.integer(g, "sparse_cap", 12)
        self.mountain_chance = tuning.number(g, "mountain_chance", 0.04)
        self.large_range_chance = tuning.number(g, "large_range_chance", 0.2)
        self.rock_chance = tuning.number(g, "rock_chance", 0.006)
        self.camp_x = tuning.integer(g, "camp_x", CAMP_X)
        self.camp_y = tuning.integer(g, "camp_y", CAMP_Y)

    def run(self) -> dict[str, int]:
        self.paint_biomes()
        self.plant_forests()
        self.raise_mountains()
        self.scatter_rocks()
        self.seed_camp()
        print("[WORLDGEN] {}x{} — ".format(self.grid.width, self.grid.height)
              + ", ".join(f"{k}={v}" for k, v in self.stats.items()))
        return self.stats

    # ── 1. Biomes ────────────────────────────────────────────────────

    def paint_biomes(self) -> None:
        palms = 0
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                tile = self.grid.rows[y][x]
                biome = classify(x, y)
                tile.biome = biome
                if tile.texture_phase < self.decoration_threshold:
                    tile.decorations.append(pick_decoration(biome, self.cosmetic))
                if biome is Biome.ISLAND and self.rng.random() < self.palm_chance:
                    if self.registry.place(x, y, ObjectType.PALM_TREE) is not None:
                        palms += 1
        self.stats["palms"] = palms

    # ── 2. Forests ───────────────────────────────────────────────────

    def plant_forests(self) -> None:
        trees = 0
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if self.grid.rows[y][x].biome is not Biome.FOREST:
                    continue
                density = forest_density(x, y)
                jitter = self.rng.random() * self.forest_jitter
                if density + jitter <= self.forest_threshold:
                    continue
                if self.rng.random() >= self.forest_gate:
                    continue
                cap = self.dense_cap if density > self.dense_cutoff else self.sparse_cap
                if self._nearby_tree_tiles(x, y) < cap:
                    if self.registry.place(x, y, ObjectType.TREE) is not None:
                        trees += 1
        self.stats["trees"] = trees

    def _nearby_tree_tiles(self, x: int, y: int) -> int:
        """Count tree-covered tiles within the cluster radius of ``(x, y)``."""
        r = self.cluster_radius
        count = 0
        for dy in range(-r, r + 1):
            for dx in range(-r, r + 1):
                if dx * dx + dy * dy > r * r:
                    continue
                obj = self.registry.object_at(x + dx, y + dy)
                if obj is not None and obj.kind is ObjectType.TREE:
                    count += 1
        return count

    # ── 3. Mountains ─────────────────────────────────────────────────

    def raise_mountains(self) -> None:
        placed = 0
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if self.grid.rows[y][x].biome is not Biome.MOUNTAIN:
                    continue
                if self.rng.random() < self.mountain_chance:
                    placed += self.mountain_range(x, y)
        self.stats["mountains"] = placed

    def mountain_range(self, x: int, y: int) -> int:
        """Random-walk a range eastward from ``(x, y)``.  Returns objects placed."""
        length = int(self.rng.random() * 3) + 2
        large = self.rng.random() < self.large_range_chance
        kind = ObjectType.MOUNTAIN if large else ObjectType.SMALL_MOUNTAIN
        spacing = 3 if large else 2
        placed = 0
        for _ in range(length):
            if self.grid.in_bounds(x, y):
                if self.registry.place(x, y, kind) is not None:
                    placed += 1
            roll = self.rng.random()
            x += spacing
            if roll < 0.4:
                y -= 1
            elif roll < 0.8:
                y += 1
        return placed

    # ── 4. Rocks ─────────────────────────────────────────────────────

    def scatter_rocks(self) -> None:
        rocks = 0
        if self.rock_chance > 0:
            for x, y, tile in self.grid:
                if tile.biome not in (Biome.MOUNTAIN, Biome.DESERT) or tile.occupied:
                    continue
                if self.rng.random() < self.rock_chance:
                    if self.registry.place(x, y, ObjectType.ROCK) is not None:
                        rocks += 1
        self.stats["rocks"] = rocks

    # ── 5. Camp ──────────────────────────────────────────────────────

    def seed_camp(self) -> int | None:
        spec = OBJECT_SPECS[ObjectType.BASECAMP]
        x, y = self.camp_x, self.camp_y
        if not self.grid.area_in_bounds(x, y, spec.width, spec.height):
            print(f"[WORLDGEN] camp site ({x},{y}) lies outside the grid — skipped")
            self.stats["camps"] = 0
            return None
        for obj in self.registry.objects_in_area(x, y, spec.width, spec.height):
            if obj.kind not in STRUCTURES:
                self.registry.remove(obj.id)
        oid = self.registry.place(x, y, ObjectType.BASECAMP)
        self.stats["camps"] = 0 if oid is None else 1
        return oid
