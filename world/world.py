from __future__ import annotations

"""
world.py

Procedural generation of the hexagonal world map.

Every tile inside a hexagon of ``WorldSettings.radius`` around the origin is
sampled from three noise layers (elevation, moisture, temperature), classified
into a terrain, given at most one resource and a starting population, and a
handful of eligible tiles are then promoted to natural wonders.

All randomness flows through one ``random.Random``; passing a seed (or a
seeded rng) reproduces the same map.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .generation import (
    adjust_temperature,
    axial_to_plane,
    classify_terrain,
    latitude_distance,
    roll_population,
)
from .hex import Coordinate, Tile
from .noise import NoiseField
from .resources import roll_resource
from .settings import WorldSettings
from .wonders import place_natural_wonders

if TYPE_CHECKING:
    from game.units import Unit

logger = logging.getLogger("chronos.World")
logger.addHandler(logging.NullHandler())

# Range of the random offset that shifts the sampling window per map
SAMPLE_OFFSET_RANGE = 1000.0


def tile_count(radius: int) -> int:
    """Number of tiles in a hexagonal map of the given radius: 3R(R+1) + 1."""
    return 3 * radius * (radius + 1) + 1


def iter_coords(radius: int) -> Iterator[Coordinate]:
    """Yield every axial coordinate of the map, q ascending then r ascending."""
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            yield q, r


@dataclass
class MapResult:
    tiles: List[Tile]
    units: List["Unit"] = field(default_factory=list)


class WorldGenerator:
    """
    Builds a fresh list of tiles from a ``WorldSettings`` and an RNG.

    The generator draws, in order: one sampling offset for the whole map, then
    for each tile a cosmetic variation, a resource roll and (for habitable
    terrain) the population rolls, and finally the wonder picks.
    """

    __slots__ = ("settings", "rng", "offset", "field")

    def __init__(
        self,
        settings: Optional[WorldSettings] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings: WorldSettings = settings if settings is not None else WorldSettings()
        if rng is None:
            rng = random.Random(self.settings.seed)
        self.rng = rng
        self.offset: float = self.rng.random() * SAMPLE_OFFSET_RANGE
        self.field = NoiseField(self.offset)

    def sample_point(self, q: int, r: int) -> Tuple[float, float]:
        px, py = axial_to_plane(q, r)
        s = self.settings.scale
        return px * s + self.offset, py * s + self.offset

    def layers(self, q: int, r: int) -> Tuple[float, float, float]:
        """Return (elevation, moisture, latitude-adjusted temperature) at (q, r)."""
        s = self.settings
        x, y = self.sample_point(q, r)

        elevation = self.field.fbm(x, y, s.elevation_octaves)
        elevation += self.field.noise(x * s.detail_frequency, y * s.detail_frequency) * s.detail_weight
        elevation = max(0.0, min(1.0, elevation))

        moisture = self.field.fbm(x + s.layer_offset, y + s.layer_offset, s.climate_octaves)
        temperature = self.field.fbm(x - s.layer_offset, y - s.layer_offset, s.climate_octaves)
        temperature = adjust_temperature(temperature, latitude_distance(q, r, s.radius), s)
        return elevation, moisture, temperature

    def generate_tile(self, q: int, r: int) -> Tile:
        elevation, moisture, temperature = self.layers(q, r)
        terrain = classify_terrain(elevation, moisture, temperature, self.settings)

        variation = self.rng.random()
        resource = roll_resource(self.rng, terrain)
        population = roll_population(self.rng, terrain)

        return Tile(
            q=q,
            r=r,
            terrain=terrain,
            resource=resource,
            population=population,
            elevation=elevation,
            moisture=moisture,
            temperature=temperature,
            variation=variation,
        )

    def generate(self) -> MapResult:
        radius = self.settings.radius
        tiles = [self.generate_tile(q, r) for q, r in iter_coords(radius)]
        place_natural_wonders(tiles, self.rng, self.settings.wonder_count)
        logger.info(
            "Generated world of radius %d with %d tiles (offset %.3f)",
            radius,
            len(tiles),
            self.offset,
        )
        return MapResult(tiles=tiles)


def generate_map(
    settings: Optional[WorldSettings] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> MapResult:
    """
    Generate a complete map.

    ``rng`` takes precedence over ``seed``, which takes precedence over
    ``settings.seed``. With none of them given the map is different every call.
    """
    settings = settings if settings is not None else WorldSettings()
    if rng is None:
        rng = random.Random(seed if seed is not None else settings.seed)
    return WorldGenerator(settings, rng=rng).generate()


__all__ = [
    "MapResult",
    "SAMPLE_OFFSET_RANGE",
    "WorldGenerator",
    "generate_map",
    "iter_coords",
    "tile_count",
]
