from __future__ import annotations

"""Natural wonder placement applied after the base terrain pass."""

import logging
import random
from typing import Dict, List, Sequence

from .hex import TerrainType, Tile
from .resource_types import ResourceType

logger = logging.getLogger("chronos.World")
logger.addHandler(logging.NullHandler())

WONDER_TERRAINS = frozenset(
    {
        TerrainType.MOUNTAINS,
        TerrainType.FOREST,
        TerrainType.DESERT,
        TerrainType.COAST,
        TerrainType.SWAMP,
        TerrainType.SHRUBLAND,
    }
)

WONDER_NAMES: Dict[TerrainType, List[str]] = {
    TerrainType.MOUNTAINS: ["Titan's Peak", "Cloudpiercer", "Dragon's Roost"],
    TerrainType.DESERT: ["Sands of Time", "Sunken Oasis", "Glass Plains"],
    TerrainType.FOREST: ["Whispering Grove", "Yggdrasil's Root", "Eternal Canopy"],
    TerrainType.COAST: ["Siren's Cove", "Pearl Lagoon", "Kraken's Deep"],
    TerrainType.SWAMP: ["Mirror Marshes", "Witch's Bog"],
    TerrainType.HILL: ["Golden Highlands", "Windy Barrows"],
    TerrainType.PLAINS: ["Fields of Elysium"],
    TerrainType.TUNDRA: ["Frostfang", "Crystal Glacier"],
    TerrainType.SHRUBLAND: ["Thorn Maze", "Singing Stones"],
    TerrainType.SAVANNA: ["Lion's Rock", "Great Migration Path"],
    TerrainType.OCEAN: ["The Abyss"],
}
FALLBACK_WONDER_NAME = "Mystic Nexus"

# Resource granted to a wonder tile that rolled none
WONDER_DEFAULT_RESOURCE: Dict[TerrainType, ResourceType] = {
    TerrainType.MOUNTAINS: ResourceType.PRECIOUS_METAL,
    TerrainType.FOREST: ResourceType.MANDRAKE,
}


def random_wonder_name(terrain: TerrainType, rng: random.Random) -> str:
    names = WONDER_NAMES.get(terrain) or [FALLBACK_WONDER_NAME]
    return names[rng.randrange(len(names))]


def place_natural_wonders(tiles: Sequence[Tile], rng: random.Random, count: int = 3) -> List[Tile]:
    """
    Flag up to ``count`` distinct eligible tiles as natural wonders, in place.

    Candidates are drawn uniformly without replacement from the tiles whose
    terrain is in WONDER_TERRAINS. Each pick is named from its terrain's pool
    and, when it has no resource yet, receives a default one. Returns the
    tiles that were flagged.
    """
    candidates = [t for t in tiles if t.terrain in WONDER_TERRAINS]
    placed: List[Tile] = []
    while len(placed) < count and candidates:
        tile = candidates.pop(rng.randrange(len(candidates)))
        tile.is_natural_wonder = True
        tile.wonder_name = random_wonder_name(tile.terrain, rng)
        if tile.resource is None:
            tile.resource = WONDER_DEFAULT_RESOURCE.get(tile.terrain, ResourceType.GRAIN)
        placed.append(tile)
        logger.debug("Placed natural wonder %s at %s", tile.wonder_name, tile.id)

    if len(placed) < count:
        logger.warning("Only %d of %d natural wonders could be placed", len(placed), count)
    return placed


__all__ = [
    "FALLBACK_WONDER_NAME",
    "WONDER_DEFAULT_RESOURCE",
    "WONDER_NAMES",
    "WONDER_TERRAINS",
    "place_natural_wonders",
    "random_wonder_name",
]
