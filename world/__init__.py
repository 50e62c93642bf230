from __future__ import annotations

from .generation import (
    adjust_temperature,
    classify_terrain,
    habitability,
    latitude_distance,
)
from .hex import (
    HEX_DIRECTIONS,
    TerrainType,
    Tile,
    hex_distance,
    index_by_coord,
    neighbors,
    tile_id,
)
from .noise import NoiseField
from .resource_types import ResourceType
from .resources import roll_resource
from .settings import WorldSettings
from .wonders import place_natural_wonders
from .world import MapResult, WorldGenerator, generate_map, tile_count

__all__ = [
    "HEX_DIRECTIONS",
    "MapResult",
    "NoiseField",
    "ResourceType",
    "TerrainType",
    "Tile",
    "WorldGenerator",
    "WorldSettings",
    "adjust_temperature",
    "classify_terrain",
    "generate_map",
    "habitability",
    "hex_distance",
    "index_by_coord",
    "latitude_distance",
    "neighbors",
    "place_natural_wonders",
    "roll_resource",
    "tile_id",
    "tile_count",
]
