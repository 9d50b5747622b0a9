"""logic/biomes.py — Noise fields and biome classification.

Three band-limited signals are sampled per tile:

    elevation   0.6·s(80) + 0.3·s(40) + 0.1·s(20)     s(f) = sin(x/f)·cos(y/f)
    moisture    0.6·c(60) + 0.4·c(30)                 c(f) = cos(x/f)·sin(y/f)
    jitter      0.03·(sin(x/5)·cos(y/5) + sin(1.3x)·cos(1.3y))

The jitter is added to both elevation and moisture so biome borders
fray instead of following the smooth contours.  Everything here is a
pure function of ``(x, y)``.
"""

from __future__ import annotations
import math

from core.constants import Biome


def elevation(x: float, y: float) -> float:
    return (math.sin(x / 80) * math.cos(y / 80) * 0.6
            + math.sin(x / 40) * math.cos(y / 40) * 0.3
            + math.sin(x / 20) * math.cos(y / 20) * 0.1)


def moisture(x: float, y: float) -> float:
    return (math.cos(x / 60) * math.sin(y / 60) * 0.6
            + math.cos(x / 30) * math.sin(y / 30) * 0.4)


def boundary_jitter(x: float, y: float) -> float:
    return (math.sin(x / 5) * math.cos(y / 5)
            + math.sin(x * 1.3) * math.cos(y * 1.3)) * 0.03


def classify_values(elev: float, moist: float) -> Biome:
    """Apply the threshold rules to already-jittered samples."""
    # Island overrides every other rule
    if elev < -0.4 and moist > 0.4:
        return Biome.ISLAND
    if elev > 0.3:
        return Biome.MOUNTAIN
    if elev < -0.3:
        return Biome.FOREST if moist > 0 else Biome.DESERT
    if moist > 0.2:
        return Biome.FOREST
    if moist < -0.2:
        return Biome.DESERT
    return Biome.PLAINS


def classify(x: float, y: float) -> Biome:
    j = boundary_jitter(x, y)
    return classify_values(elevation(x, y) + j, moisture(x, y) + j)
