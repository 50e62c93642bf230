from __future__ import annotations

"""Single-hop movement rules: where a unit may step and what it costs."""

from typing import Dict, List

from world.hex import Coordinate, TerrainType, Tile, hex_distance, neighbors

from .units import MovementClass, Unit
from .weather import WeatherType

WEATHER_MOVE_COST: Dict[WeatherType, float] = {
    WeatherType.CLEAR: 1.0,
    WeatherType.RAIN: 1.5,
    WeatherType.SNOW: 2.0,
    WeatherType.STORM: 3.0,
}
ROAD_FACTOR = 0.5
ROAD_MIN_COST = 0.5
FAST_TRANSIT_COST = 0.1

_WATER = (TerrainType.OCEAN, TerrainType.COAST)


def is_valid_move(unit: Unit, tile: Tile) -> bool:
    """
    Whether ``unit`` may enter ``tile``. Adjacency is the caller's concern.

    Land units stay off ocean and coast. Water units stay on ocean, coast or
    a coastal city. Air and space units go anywhere.
    """
    movement = unit.movement
    if movement is MovementClass.LAND:
        return tile.terrain not in _WATER
    if movement is MovementClass.WATER:
        return tile.terrain in _WATER or (tile.is_city and tile.terrain is TerrainType.COAST)
    return True


def movement_cost(weather: WeatherType, has_road: bool = False, has_fast_transit: bool = False) -> float:
    """Movement points needed to step onto a tile."""
    if has_fast_transit:
        return FAST_TRANSIT_COST
    cost = WEATHER_MOVE_COST[weather]
    if has_road:
        cost = max(ROAD_MIN_COST, cost * ROAD_FACTOR)
    return cost


def tile_move_cost(weather: WeatherType, tile: Tile) -> float:
    return movement_cost(weather, tile.has_road, tile.has_fast_transit)


def valid_neighbors(unit: Unit, tile: Tile, by_coord: Dict[Coordinate, Tile]) -> List[Tile]:
    """Adjacent tiles ``unit`` may enter, in HEX_DIRECTIONS order."""
    return [n for n in neighbors(tile, by_coord) if is_valid_move(unit, n)]


def is_adjacent(a: Tile, b: Tile) -> bool:
    return hex_distance(a.coord, b.coord) == 1


__all__ = [
    "FAST_TRANSIT_COST",
    "WEATHER_MOVE_COST",
    "is_adjacent",
    "is_valid_move",
    "movement_cost",
    "tile_move_cost",
    "valid_neighbors",
]
