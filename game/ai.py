from __future__ import annotations

"""Basic AI heuristics for computer-controlled units."""

import logging
import random
from typing import Dict, List, Optional, Tuple

from world.hex import Coordinate, Tile, index_by_coord

from . import settings
from .movement import valid_neighbors
from .units import Unit, UnitType

logger = logging.getLogger("chronos.AI")
logger.addHandler(logging.NullHandler())


def is_ai_unit(unit: Unit) -> bool:
    return unit.owner != settings.PLAYER_ID


def can_settle(unit: Unit, tile: Tile) -> bool:
    """
    An AI settler founds a city on a tile that is not already a city, is
    unowned or owned by its own civilization, and has settleable terrain.
    """
    return (
        unit.type is UnitType.SETTLER
        and not tile.is_city
        and tile.owner in (None, unit.owner)
        and tile.terrain.value in settings.AI_SETTLE_TERRAINS
    )


def found_ai_city(unit: Unit, tile: Tile) -> Tile:
    return tile.evolve(
        is_city=True,
        owner=unit.owner,
        population=max(tile.population, settings.AI_FOUND_MIN_POPULATION),
    )


def choose_step(
    unit: Unit,
    tile: Tile,
    by_coord: Dict[Coordinate, Tile],
    rng: random.Random,
) -> Optional[Tile]:
    """Pick a uniformly random neighbour the unit may enter, or None if boxed in."""
    options = valid_neighbors(unit, tile, by_coord)
    if not options:
        return None
    return options[rng.randrange(len(options))]


def take_ai_turns(
    tiles: List[Tile],
    units: List[Unit],
    rng: random.Random,
    logs: List[str],
) -> Tuple[List[Tile], List[Unit]]:
    """
    Let every non-player unit act once.

    ``tiles`` and ``units`` must be private working copies: units are moved in
    place, tiles that change are swapped for new objects. Settlers that found
    a city are dropped from the returned unit list.
    """
    by_id: Dict[str, int] = {t.id: i for i, t in enumerate(tiles)}
    by_coord = index_by_coord(tiles)
    settled = set()

    for unit in units:
        if not is_ai_unit(unit):
            continue
        idx = by_id.get(unit.tile_id)
        if idx is None:
            logger.debug("Unit %s stands on unknown tile %s", unit.id, unit.tile_id)
            continue
        tile = tiles[idx]

        if can_settle(unit, tile):
            city = found_ai_city(unit, tile)
            tiles[idx] = city
            by_coord[city.coord] = city
            settled.add(unit.id)
            logs.append(f"{unit.owner} founded a new city!")
            logger.info("%s founded a city at %s", unit.owner, city.id)
            continue

        target = choose_step(unit, tile, by_coord, rng)
        if target is None:
            logger.debug("Unit %s has nowhere to go", unit.id)
            continue
        unit.tile_id = target.id

    return tiles, [u for u in units if u.id not in settled]


__all__ = ["can_settle", "choose_step", "found_ai_city", "is_ai_unit", "take_ai_turns"]
