"""test_worldgen.py — Biome classification and world generation passes.

Run:  python test_worldgen.py      (or: pytest test_worldgen.py)
"""
from __future__ import annotations
import sys, random, traceback

from core import tuning
tuning.use({})

from components.objects import ObjectType, ResourceNode
from core.constants import Biome, DECORATION_SCALES, BIOME_DECORATIONS
from core.grid import TileGrid
from logic.biomes import classify, classify_values, elevation, moisture
from logic.registry import ObjectRegistry
from logic.worldgen import WorldGenerator, pick_decoration, forest_density


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label} {detail}".strip())


def _generate(w: int, h: int, seed: int):
    grid = TileGrid(w, h, random.Random(seed))
    reg = ObjectRegistry(grid)
    gen = WorldGenerator(grid, reg, random.Random(seed), random.Random(0))
    stats = gen.run()
    return grid, reg, stats


# ═══════════════════════════════════════════════════════════════════════
#  1. Classification
# ═══════════════════════════════════════════════════════════════════════

def test_classification_rules():
    print("\n=== 1: Biome classification ===")
    check(classify_values(-0.5, 0.5) is Biome.ISLAND,
          "1a: low + wet is Island, not Forest")
    check(classify_values(-0.5, 0.3) is Biome.FOREST, "1b: low + damp is Forest")
    check(classify_values(-0.5, -0.1) is Biome.DESERT, "1c: low + dry is Desert")
    check(classify_values(0.35, 0.9) is Biome.MOUNTAIN, "1d: high is Mountain")
    check(classify_values(0.0, 0.25) is Biome.FOREST, "1e: mid + wet is Forest")
    check(classify_values(0.0, -0.25) is Biome.DESERT, "1f: mid + dry is Desert")
    check(classify_values(0.0, 0.0) is Biome.PLAINS, "1g: everything else is Plains")
    check(classify_values(0.3, 0.2) is Biome.PLAINS, "1h: thresholds are strict")


def test_classification_is_pure():
    print("\n=== 2: Classification is a pure function ===")
    rng = random.Random(5)
    same = True
    for _ in range(500):
        x = int(rng.random() * 400)
        y = int(rng.random() * 400)
        if classify(x, y) is not classify(x, y):
            same = False
    check(same, "2a: repeated calls agree")
    check(elevation(37, 81) == elevation(37, 81) and moisture(37, 81) == moisture(37, 81),
          "2b: noise fields are deterministic")

    seen = {classify(x, y) for x in range(0, 400, 3) for y in range(0, 400, 3)}
    check(len(seen) >= 4, f"2c: a large map shows several biomes ({len(seen)})")


# ═══════════════════════════════════════════════════════════════════════
#  3. Decorations
# ═══════════════════════════════════════════════════════════════════════

def test_decorations():
    print("\n=== 3: Decorations ===")
    rng = random.Random(3)
    scales = {pick_decoration(Biome.FOREST, rng).scale for _ in range(50)}
    check(scales == {DECORATION_SCALES[BIOME_DECORATIONS[Biome.FOREST][0]]},
          "3a: scale follows the set's first glyph", f"got {scales}")
    glyphs = {pick_decoration(Biome.PLAINS, rng).glyph for _ in range(200)}
    check(glyphs == set(BIOME_DECORATIONS[Biome.PLAINS]),
          "3b: every glyph in the set gets picked")

    grid, _, _ = _generate(40, 40, 11)
    good = all(bool(t.decorations) == (t.texture_phase < 0.1) for _, _, t in grid)
    check(good, "3c: decorated exactly where texture phase < 0.1")
    check(all(len(t.decorations) <= 1 for _, _, t in grid), "3d: at most one per tile")


# ═══════════════════════════════════════════════════════════════════════
#  4. Generation passes
# ═══════════════════════════════════════════════════════════════════════

def test_generation():
    print("\n=== 4: World generation ===")
    grid, reg, stats = _generate(80, 80, 7)

    check(all(t.biome is not None for _, _, t in grid), "4a: every tile classified")
    check(all(t.biome is classify(x, y) for x, y, t in grid),
          "4b: painted biome matches classify()")

    camp = reg.object_at(10, 10)
    check(camp is not None and camp.kind is ObjectType.BASECAMP
          and (camp.x, camp.y) == (10, 10),
          "4c: basecamp sits at (10, 10)")
    check(stats["camps"] == 1 and reg.count(ObjectType.BASECAMP) == 1, "4d: exactly one camp")

    palms_ok = all(grid.biome(o.x, o.y) is Biome.ISLAND for o in reg.of_kind(ObjectType.PALM_TREE))
    check(palms_ok, "4e: palms rooted on island tiles")
    trees_ok = all(grid.biome(o.x, o.y) is Biome.FOREST for o in reg.of_kind(ObjectType.TREE))
    check(trees_ok, "4f: trees rooted on forest tiles")
    rocks_ok = all(grid.biome(o.x, o.y) in (Biome.MOUNTAIN, Biome.DESERT)
                   for o in reg.of_kind(ObjectType.ROCK))
    check(rocks_ok, "4g: rocks on mountain or desert ground")
    check(all(isinstance(o, ResourceNode) and o.amount == 15 for o in reg.of_kind(ObjectType.TREE)),
          "4h: every tree starts with 15 wood")

    check(set(stats) == {"palms", "trees", "mountains", "rocks", "camps"},
          "4i: per-pass stats reported", f"{stats}")


def test_seeded_determinism():
    print("\n=== 5: Same seed → same world ===")

    def fingerprint(grid, reg):
        tiles = [(t.biome, t.texture_phase, t.object_id) for _, _, t in grid]
        objs = sorted((o.id, o.kind.value, o.x, o.y) for o in reg)
        return tiles, objs

    a = fingerprint(*_generate(50, 50, 1234)[:2])
    b = fingerprint(*_generate(50, 50, 1234)[:2])
    check(a == b, "5a: identical tiles, objects and ids")
    c = fingerprint(*_generate(50, 50, 4321)[:2])
    check(a != c, "5b: different seed → different world")


def test_mountain_range():
    print("\n=== 6: Mountain ranges ===")
    grid = TileGrid(40, 40, random.Random(2))
    reg = ObjectRegistry(grid)
    gen = WorldGenerator(grid, reg, random.Random(2))
    placed = gen.mountain_range(2, 20)
    check(1 <= placed <= 4 and placed == len(reg),
          f"6a: a range places 1..4 peaks (got {placed})")
    kinds = {o.kind for o in reg}
    check(len(kinds) == 1 and kinds <= {ObjectType.MOUNTAIN, ObjectType.SMALL_MOUNTAIN},
          "6b: one peak size per range")
    spacing = 3 if kinds == {ObjectType.MOUNTAIN} else 2
    xs = sorted(o.x for o in reg)
    check(all((x - 2) % spacing == 0 for x in xs),
          "6c: peaks march east on a fixed stride", f"xs={xs}")
    check(all(abs(o.y - 20) <= 4 for o in reg), "6d: walk drifts at most one row per step")


def test_forest_density_signal():
    print("\n=== 7: Forest density ===")
    check(abs(forest_density(0, 0)) < 1e-12, "7a: zero at the origin")
    peak = max(forest_density(x, y) for x in range(0, 120) for y in range(0, 120))
    check(peak > 0.6, "7b: dense clusters exist", f"peak={peak:.3f}")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Classification rules", test_classification_rules),
        ("Classification purity", test_classification_is_pure),
        ("Decorations", test_decorations),
        ("Generation", test_generation),
        ("Determinism", test_seeded_determinism),
        ("Mountain ranges", test_mountain_range),
        ("Forest density", test_forest_density_signal),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Worldgen Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
