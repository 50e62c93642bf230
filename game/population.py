from __future__ import annotations

"""Housing capacity and population growth limits for tiles."""

from world.hex import Tile

from . import settings
from .improvements import DistrictType


def housing_cap(tile: Tile) -> int:
    """
    Maximum population ``tile`` can house.

    A bare tile (no city, no improvement) houses one person on plains,
    savanna, forest or coast and nobody elsewhere. Otherwise a city adds 5,
    a civic improvement adds its housing and a residential district adds 5.
    """
    if not tile.is_city and tile.improvement is None:
        if tile.terrain.value in settings.WILD_HABITABLE_TERRAINS:
            return settings.WILD_HOUSING
        return 0

    cap = 0
    if tile.is_city:
        cap += settings.CITY_HOUSING
    if tile.improvement is not None:
        cap += tile.improvement.housing_provided()
    if DistrictType.RESIDENTIAL in tile.districts:
        cap += settings.RESIDENTIAL_HOUSING
    return cap


def can_grow(tile: Tile) -> bool:
    return tile.population < housing_cap(tile)


__all__ = ["can_grow", "housing_cap"]
