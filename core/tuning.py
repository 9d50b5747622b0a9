"""core/tuning.py — Data-driven tuning constants.

Spawn rates, generation thresholds, timings and ranges live in
``data/tuning.toml`` and are loaded once at startup.  Every call site
passes its built-in default, so a missing file (or a missing key)
leaves the world behaving exactly as the constants in
``core.constants`` describe::

    from core import tuning
    chance = tuning.number("ambient.clouds", "spawn_chance", CLOUD_SPAWN_CHANCE)
    cap = tuning.integer("worldgen", "dense_cap", 20)

A value of the wrong type is reported once with a ``[TUNING]`` line and
the default is used instead.

Hot-reload: call ``reload()`` to re-read the file.  In-game, press F5.
Tests can swap in a table with ``use({...})`` and restore with
``use({})``.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # Python < 3.11


_data: dict = {}
_path: Path | None = None
_warned: set[tuple[str, str]] = set()


def default_path() -> Path:
    """``data/tuning.toml`` next to the ``core/`` package."""
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path* (default: ``default_path()``)."""
    global _path
    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        use({})
        return

    try:
        with open(path, "rb") as f:
            table = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        print(f"[TUNING] {path} is malformed ({exc}), using defaults")
        use({})
        return

    use(table)
    print(f"[TUNING] Loaded {_count_leaves(table)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def use(data: dict) -> None:
    """Replace the active table in memory (no file involved)."""
    global _data
    _data = dict(data)
    _warned.clear()


def get(section: str, key: str, default=None):
    """Read a raw tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"ambient.clouds"`` looks up ``[ambient.clouds]``.

    >>> get("gathering", "duration", 2.0)
    2.0
    """
    node = _data
    for part in section.split("."):
        node = node.get(part) if isinstance(node, dict) else None
        if node is None:
            return default
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def number(section: str, key: str, default: float) -> float:
    """Read a float; ints are accepted, anything else falls back to *default*."""
    value = get(section, key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _reject(section, key, value, "a number")
        return float(default)
    return float(value)


def integer(section: str, key: str, default: int) -> int:
    """Read an int; whole floats (``3.0``) are accepted."""
    value = get(section, key, default)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        _reject(section, key, value, "an integer")
        return int(default)
    return value


def _reject(section: str, key: str, value, expected: str) -> None:
    if (section, key) in _warned:
        return
    _warned.add((section, key))
    print(f"[TUNING] {section}.{key} should be {expected}, got {value!r}; using default")


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
