from __future__ import annotations

"""Terrain classification, climate and habitability helpers used by the world generator."""

import math
import random
from typing import Dict, Tuple

from .hex import TerrainType
from .settings import WorldSettings

# Chance that a tile of the given terrain starts with people on it
HABITABILITY: Dict[TerrainType, float] = {
    TerrainType.PLAINS: 0.6,
    TerrainType.SAVANNA: 0.5,
    TerrainType.COAST: 0.5,
    TerrainType.SHRUBLAND: 0.2,
    TerrainType.DESERT: 0.1,
    TerrainType.TUNDRA: 0.1,
}
DEFAULT_HABITABILITY = 0.3
UNINHABITABLE = frozenset({TerrainType.OCEAN, TerrainType.MOUNTAINS})
MAX_STARTING_POPULATION = 2


def axial_to_plane(q: int, r: int) -> Tuple[float, float]:
    """Project axial (q, r) onto a flat-topped hex layout with unit size."""
    return 1.5 * q, math.sqrt(3) * (r + q / 2)


def latitude_distance(q: int, r: int, radius: int) -> float:
    """
    Normalized distance of the tile's row from the map equator.
    0 on the equator, 1 at the poles of a hexagon of the given radius.
    """
    return abs(r + q / 2) / radius if radius > 0 else 0.0


def adjust_temperature(temperature: float, dist: float, settings: WorldSettings | None = None) -> float:
    """Cool a raw temperature sample toward the poles."""
    s = settings or WorldSettings()
    return temperature * (1 - dist * s.polar_damping) - dist * s.polar_chill


def classify_terrain(
    elevation: float,
    moisture: float,
    temperature: float,
    settings: WorldSettings | None = None,
) -> TerrainType:
    """
    Determine terrain from elevation, moisture and latitude-adjusted temperature.
    Order of checks (first match wins):
      1. Low elevation → ocean, then coast
      2. High elevation → mountains, then hill
      3. Cold → tundra
      4. Very dry → desert
      5. Dry → shrubland (hot) or plains
      6. Very wet → swamp (hot) or forest
      7. Moderate → savanna (hot), forest (wetter half) or plains
    """
    s = settings or WorldSettings()

    if elevation < s.coast_elev:
        return TerrainType.OCEAN if elevation < s.ocean_elev else TerrainType.COAST

    if elevation > s.mountain_elev:
        return TerrainType.MOUNTAINS
    if elevation > s.hill_elev:
        return TerrainType.HILL

    if temperature < s.tundra_temp:
        return TerrainType.TUNDRA
    if moisture < s.desert_moisture:
        return TerrainType.DESERT
    if moisture < s.dry_moisture:
        return TerrainType.SHRUBLAND if temperature > 0.5 else TerrainType.PLAINS
    if moisture > s.wet_moisture:
        return TerrainType.SWAMP if temperature > 0.6 else TerrainType.FOREST
    if temperature > 0.65:
        return TerrainType.SAVANNA
    if moisture > s.forest_moisture:
        return TerrainType.FOREST
    return TerrainType.PLAINS


def habitability(terrain: TerrainType) -> float:
    if terrain in UNINHABITABLE:
        return 0.0
    return HABITABILITY.get(terrain, DEFAULT_HABITABILITY)


def roll_population(rng: random.Random, terrain: TerrainType) -> int:
    """Starting population for a freshly generated tile (0 to 2 people)."""
    if terrain in UNINHABITABLE:
        return 0
    if rng.random() < habitability(terrain):
        return rng.randint(0, MAX_STARTING_POPULATION)
    return 0


__all__ = [
    "DEFAULT_HABITABILITY",
    "HABITABILITY",
    "UNINHABITABLE",
    "adjust_temperature",
    "axial_to_plane",
    "classify_terrain",
    "habitability",
    "latitude_distance",
    "roll_population",
]
