"""test_world.py — The World aggregate: movement, views and messages.

Run:  python test_world.py      (or: pytest test_world.py)
"""
from __future__ import annotations
import sys, tempfile, traceback
from pathlib import Path

from core import tuning
tuning.use({})

from components.objects import ObjectType
from components.resources import Camera
from core.scene import Viewport, clamp_camera
from core.collision import is_blocked, find_safe_spawn
from core.rng import position_hash
from logic.visuals import object_scale, view_of
from simulation.world import World


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


def _empty(w: int = 20, h: int = 20) -> World:
    return World(w, h, seed=1, generate=False)


# ═══════════════════════════════════════════════════════════════════════
#  1. Movement
# ═══════════════════════════════════════════════════════════════════════

def test_movement():
    print("\n=== 1: Movement ===")
    w = _empty()
    w.player.x, w.player.y = 10.5, 10.5
    w.update(0.1, move=(1.0, 0.0))
    check(abs(w.player.x - 11.1) < 1e-9 and w.player.y == 10.5,
          "1a: 6 m/s for 0.1 s moves 0.6 m")

    w.player.x, w.player.y = 10.5, 10.5
    w.update(0.1, move=(1.0, 1.0))
    check(abs(w.player.x - 11.1) < 1e-9 and abs(w.player.y - 11.1) < 1e-9,
          "1b: diagonals are not normalised")

    w.player.x, w.player.y = 0.5, 5.5
    w.update(0.5, move=(-1.0, 0.0))
    check((w.player.x, w.player.y) == (0.5, 5.5), "1c: leaving the grid is refused")

    w.place_object(8, 5, ObjectType.ROCK)
    w.player.x, w.player.y = 7.5, 5.5
    w.update(0.1, move=(1.0, 0.0))
    check(w.player.x == 7.5, "1d: collidable object blocks the step")
    w.update(0.1, move=(0.0, 1.0))
    check(abs(w.player.y - 6.1) < 1e-9, "1e: other directions stay open")

    w.place_object(3, 3, ObjectType.BUSH)
    check(w.try_move(3.5, 3.5), "1f: bushes can be walked through")
    check(not w.try_move(8.2, 5.9), "1g: try_move refuses a rock tile")
    check(not w.can_move(20.0, 3.0) and not w.can_move(-0.01, 3.0),
          "1h: edges are exclusive on the far side")


def test_safe_spawn():
    print("\n=== 2: Safe spawn ===")
    w = _empty()
    check((w.player.x, w.player.y) == (10.5, 10.5), "2a: default spawn is the centre tile")

    w.place_object(9, 9, ObjectType.HOUSE)
    w.respawn_player()
    check(not is_blocked(w.grid, w.registry, w.player.x, w.player.y),
          "2b: spawn steps off a blocked centre")
    check(max(abs(w.player.x - 10.5), abs(w.player.y - 10.5)) <= 3.0,
          "2c: nearest free ring is used")

    x, y = find_safe_spawn(w.grid, w.registry, 2, 17)
    check((x, y) == (2.5, 17.5), "2d: free tile returned as its centre")
    check(find_safe_spawn(w.grid, w.registry, -5, 3) == (0.5, 3.5),
          "2e: requested tile clamped into the grid")

    tuning.use({"player": {"spawn_x": 50, "spawn_y": 50}})
    try:
        w = _empty()
        check((w.player.x, w.player.y) == (19.5, 19.5) and w.grid.in_bounds(19, 19),
              "2f: off-grid spawn setting lands on the nearest corner")
        w.update(0.1, move=(-1.0, 0.0))
        check(abs(w.player.x - 18.9) < 1e-9, "2g: player can walk from there")
    finally:
        tuning.use({})


# ═══════════════════════════════════════════════════════════════════════
#  3. Views
# ═══════════════════════════════════════════════════════════════════════

def test_visible_objects():
    print("\n=== 3: Visible objects ===")
    w = _empty()
    w.place_object(2, 12, ObjectType.TREE)
    w.place_object(10, 3, ObjectType.ROCK)
    w.place_object(5, 7, ObjectType.HOUSE)
    w.place_object(15, 0, ObjectType.SMALL_MOUNTAIN)

    views = w.visible_objects(0, 0, 20, 20)
    ys = [v.obj.y for v in views]
    check(ys == sorted(ys) and len(views) == 4, "3a: sorted back-to-front by y", f"{ys}")

    views = w.visible_objects(0, 0, 9, 9)
    check({v.obj.kind for v in views} == {ObjectType.HOUSE},
          "3b: only objects touching the rect")

    tree = next(w.registry.of_kind(ObjectType.TREE))
    s1 = object_scale(tree)
    s2 = view_of(tree).scale
    check(s1 == s2 and 0.5 <= s1 <= 2.0, "3c: tree scale stable and in [0.5, 2]")
    check(s1 == 0.5 + position_hash(2, 12) * 1.5, "3d: tree scale keyed on position")

    peak = next(w.registry.of_kind(ObjectType.SMALL_MOUNTAIN))
    view = view_of(peak)
    check(view.scale == 1.8 and abs(view.y_offset(100) + 30.0) < 1e-9,
          "3e: small mountains drawn large and lifted")
    rock = next(w.registry.of_kind(ObjectType.ROCK))
    check(view_of(rock).scale == 1.0 and view_of(rock).y_offset(40) == 0.0,
          "3f: default scale and offset")


def test_visible_tiles():
    print("\n=== 4: Visible tiles ===")
    w = World(40, 40, seed=8)
    tiles = list(w.visible_tiles(-5, -5, 3, 2))
    check(len(tiles) == 6, "4a: rect clipped to the grid", f"{len(tiles)}")
    check(all(t.biome is w.grid.biome(t.x, t.y) for t in tiles), "4b: biome carried")
    check(all(t.show_texture == (w.grid.tile(t.x, t.y).texture_phase < 0.1) for t in tiles),
          "4c: texture flag follows the phase")


# ═══════════════════════════════════════════════════════════════════════
#  5. Messages and clock
# ═══════════════════════════════════════════════════════════════════════

def test_messages():
    print("\n=== 5: Transient messages ===")
    w = _empty()
    check(w.message() is None, "5a: nothing shown at start")
    w.messages.post("hello", t=w.clock.time)
    check(w.message() == ("hello", 1.0), "5b: fully opaque when posted")
    w.update(0.75)
    text, alpha = w.message()
    check(text == "hello" and abs(alpha - 0.5) < 1e-9, "5c: fades over 1.5 s")
    w.update(1.0)
    check(w.message()[1] == 0.0, "5d: fully faded but still live")
    w.update(1.25)
    check(w.message() is None, "5e: gone after 3 s")

    w.messages.post("first")
    w.messages.post("second")
    check(w.message()[0] == "second", "5f: newest message replaces the old one")
    check([e["msg"] for e in w.messages.entries] == ["hello", "first", "second"],
          "5g: history keeps every post")


def test_clock_and_generation():
    print("\n=== 6: Clock and generated world ===")
    w = World(60, 60, seed=3)
    for _ in range(10):
        w.update(0.1)
    check(abs(w.clock.time - 1.0) < 1e-9, "6a: clock sums frame dt")
    check(w.gen_stats.get("camps") == 1, "6b: camp placed during generation")
    check(not is_blocked(w.grid, w.registry, w.player.x, w.player.y),
          "6c: player starts on open ground")
    check(w.width == 60 and w.height == 60, "6d: size reported")

    raised = False
    try:
        World(0, 10, generate=False)
    except ValueError:
        raised = True
    check(raised, "6e: zero-width world rejected")


# ═══════════════════════════════════════════════════════════════════════
#  7. Tuning overrides
# ═══════════════════════════════════════════════════════════════════════

def test_tuning_overrides():
    print("\n=== 7: Tuning overrides ===")
    try:
        tuning.use({"gathering": {"duration": "slow", "gather_range": 4},
                    "worldgen": {"dense_cap": 3.0, "sparse_cap": 2.5},
                    "ambient": {"clouds": {"speed": 2.0}}})
        check(tuning.number("gathering", "duration", 2.0) == 2.0,
              "7a: non-numeric value falls back to the default")
        check(tuning.number("gathering", "gather_range", 3.0) == 4.0,
              "7b: ints read as floats")
        check(tuning.integer("worldgen", "dense_cap", 20) == 3, "7c: whole floats read as ints")
        check(tuning.integer("worldgen", "sparse_cap", 12) == 12,
              "7d: fractional int falls back")
        check(tuning.number("ambient.clouds", "speed", 1.0) == 2.0, "7e: dotted sections")
        check(tuning.number("ambient.poops", "fade_start", 10.0) == 10.0,
              "7f: missing section → default")

        tuning.use({"player": {"speed": 3.0}, "world": {"width": 16, "height": 12}})
        w = World(seed=5, generate=False)
        check((w.width, w.height) == (16, 12), "7g: world size from tuning")
        w.player.x, w.player.y = 5.5, 5.5
        w.update(1.0, move=(1.0, 0.0))
        check(abs(w.player.x - 8.5) < 1e-9, "7h: player speed from tuning")

        with tempfile.TemporaryDirectory() as tmp:
            bad = Path(tmp) / "tuning.toml"
            bad.write_text("[world\nwidth = ")
            tuning.load(bad)
            check(tuning.get("player", "speed") is None, "7i: malformed file → defaults")
            tuning.load(Path(tmp) / "missing.toml")
            check(tuning.get("world", "width", 200) == 200, "7j: missing file → defaults")
            good = Path(tmp) / "good.toml"
            good.write_text("[messages]\nlifetime = 5.0\n")
            tuning.load(good)
            check(tuning.number("messages", "lifetime", 3.0) == 5.0, "7k: file values applied")

        w = _empty()
        tuning.use({"player": {"speed": 2.0}, "gathering": {"duration": 1.0},
                    "messages": {"lifetime": 4.0},
                    "ambient": {"poops": {"fade_start": 1.0}}})
        w.apply_tuning()
        check(w.player.speed == 2.0 and w.interaction.duration == 1.0,
              "7l: live world picks up reloaded values")
        check(w.messages.lifetime == 4.0 and w.ambient.fade_start == 1.0,
              "7m: messages and ambient re-read too")
    finally:
        tuning.use({})


# ═══════════════════════════════════════════════════════════════════════
#  8. Camera projection
# ═══════════════════════════════════════════════════════════════════════

def test_viewport():
    print("\n=== 8: Viewport and camera clamp ===")
    vp = Viewport.centred_on(10.0, 10.0, 200, 100, tile_size=20)
    check((vp.ox, vp.oy) == (-100, -150), "8a: camera lands at the window centre")
    check(vp.to_screen(10.0, 10.0) == (100.0, 50.0), "8b: camera position maps to centre px")
    check(vp.bounds(100, 100) == (5, 7, 16, 13), "8c: visible tile rect", f"{vp.bounds(100, 100)}")
    check(vp.bounds(12, 10) == (5, 7, 12, 10), "8d: rect clipped to the map")
    check(vp.bounds(100, 100, pad=10) == (0, 0, 26, 23), "8e: padding clipped at zero")

    cam = Camera(x=1.0, y=99.0)
    clamp_camera(cam, 100, 100, 10.0, 5.0)
    check((cam.x, cam.y) == (5.0, 97.5), "8f: camera held inside the map")
    cam = Camera(x=3.0, y=3.0)
    clamp_camera(cam, 8, 100, 10.0, 5.0)
    check((cam.x, cam.y) == (4.0, 3.0), "8g: narrow map centred on that axis")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Movement", test_movement),
        ("Safe spawn", test_safe_spawn),
        ("Visible objects", test_visible_objects),
        ("Visible tiles", test_visible_tiles),
        ("Messages", test_messages),
        ("Clock and generation", test_clock_and_generation),
        ("Tuning overrides", test_tuning_overrides),
        ("Viewport", test_viewport),
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
    print(f"  World Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
