from __future__ import annotations

"""Resource placement rules and helpers."""

import random
from typing import Dict, List, Optional, Tuple

from .hex import TerrainType
from .resource_types import ResourceType

R = ResourceType

_HIGHLAND_HEAD: List[Tuple[float, ResourceType]] = [
    (0.95, R.URANIUM),
    (0.92, R.PRECIOUS_STONES),
    (0.85, R.PRECIOUS_METAL),
    (0.80, R.COAL),
    (0.75, R.IRON),
]
_HIGHLAND_TAIL: List[Tuple[float, ResourceType]] = [
    (0.65, R.ALUMINUM),
    (0.60, R.ORE),
    (0.50, R.STONE),
]
_GRASSLAND_HEAD: List[Tuple[float, ResourceType]] = [
    (0.96, R.FLOWERS),
    (0.94, R.HORSE),
    (0.90, R.CATTLE),
    (0.85, R.COTTON),
    (0.80, R.GRAPE),
    (0.50, R.GRAIN),
]

# Terrain -> descending (threshold, resource) pairs. A roll strictly above a
# threshold wins that resource; the first match is taken.
RESOURCE_RULES: Dict[TerrainType, List[Tuple[float, ResourceType]]] = {
    TerrainType.MOUNTAINS: _HIGHLAND_HEAD + _HIGHLAND_TAIL,
    TerrainType.HILL: _HIGHLAND_HEAD + [(0.72, R.SAFFRON)] + _HIGHLAND_TAIL,
    TerrainType.FOREST: [
        (0.92, R.SILK),
        (0.88, R.MANDRAKE),
        (0.85, R.RUBBER),
        (0.82, R.DYE),
        (0.75, R.FUR),
        (0.50, R.WOOD),
    ],
    TerrainType.DESERT: [
        (0.90, R.SPICE),
        (0.85, R.SAFFRON),
        (0.75, R.CRUDE_OIL),
        (0.70, R.SILICATES),
        (0.60, R.SALT),
    ],
    TerrainType.SWAMP: [
        (0.92, R.VANILLA),
        (0.88, R.TEA_LEAVES),
        (0.85, R.RUBBER),
        (0.80, R.HOGS),
        (0.75, R.CRUDE_OIL),
        (0.60, R.CLAY),
    ],
    TerrainType.PLAINS: _GRASSLAND_HEAD + [(0.40, R.SHEEP)],
    TerrainType.SAVANNA: _GRASSLAND_HEAD + [(0.40, R.GOAT)],
    TerrainType.SHRUBLAND: [
        (0.88, R.SAFFRON),
        (0.85, R.DYE),
        (0.75, R.GOAT),
        (0.70, R.ALUMINUM),
        (0.60, R.CLAY),
    ],
    TerrainType.TUNDRA: [
        (0.90, R.URANIUM),
        (0.85, R.CRUDE_OIL),
        (0.80, R.ALUMINUM),
        (0.70, R.FUR),
    ],
    TerrainType.COAST: [
        (0.85, R.SILICATES),
        (0.70, R.FISH),
        (0.60, R.CLAY),
    ],
    TerrainType.OCEAN: [
        (0.95, R.CRUDE_OIL),
        (0.85, R.FISH),
    ],
}


def resource_for_roll(terrain: TerrainType, roll: float) -> Optional[ResourceType]:
    """Look up the resource a uniform ``roll`` in [0, 1) yields on ``terrain``."""
    for threshold, resource in RESOURCE_RULES.get(terrain, []):
        if roll > threshold:
            return resource
    return None


def roll_resource(rng: random.Random, terrain: TerrainType) -> Optional[ResourceType]:
    """Draw exactly one number from ``rng`` and return the resulting resource, if any."""
    return resource_for_roll(terrain, rng.random())


__all__ = ["RESOURCE_RULES", "resource_for_roll", "roll_resource"]
