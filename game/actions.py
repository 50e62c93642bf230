from __future__ import annotations

"""
Player commands that change a GameState outside of turn resolution.

Affordability, tech and terrain checks belong to the caller; these functions
assume they passed. Treasury, science and inventory are deducted without a
floor. Each command returns a new GameState and records what happened at the
front of ``logs``.
"""

import logging
import random
import uuid
from dataclasses import replace
from typing import Any, List, Optional

from world.hex import Tile

from . import settings
from .civilizations import get_civilization, initialize_civilizations
from .improvements import DISTRICTS, DistrictType, Infrastructure, get_improvement
from .models import GameState
from .movement import is_adjacent, is_valid_move, tile_move_cost
from .technology import get_tech
from .units import UNIT_DEFINITIONS, Unit, UnitType, spawn_unit

logger = logging.getLogger("chronos.Actions")
logger.addHandler(logging.NullHandler())


def _derive(state: GameState, message: str, **changes: Any) -> GameState:
    """Copy ``state`` with fresh containers, apply ``changes`` and log ``message``."""
    changes.setdefault("tiles", list(state.tiles))
    changes.setdefault("units", list(state.units))
    changes.setdefault("inventory", dict(state.inventory))
    changes.setdefault("researched_techs", list(state.researched_techs))
    changes["logs"] = [message] + list(state.logs)
    return replace(state, **changes)


def _tile_index(state: GameState, tile_id: str) -> int:
    for i, tile in enumerate(state.tiles):
        if tile.id == tile_id:
            return i
    raise KeyError(f"No tile with id {tile_id!r}")


def _require_unit(state: GameState, unit_id: str) -> Unit:
    unit = state.unit_by_id(unit_id)
    if unit is None:
        raise KeyError(f"No unit with id {unit_id!r}")
    return unit


def _with_tile(state: GameState, index: int, tile: Tile) -> List[Tile]:
    tiles = list(state.tiles)
    tiles[index] = tile
    return tiles


def move_unit(state: GameState, unit_id: str, target_id: str) -> GameState:
    """Step a unit onto an adjacent tile, paying the weather and road cost."""
    unit = _require_unit(state, unit_id)
    origin = state.tiles[_tile_index(state, unit.tile_id)]
    target = state.tiles[_tile_index(state, target_id)]

    if unit.moves <= 0:
        return _derive(state, "Unit has no moves left this turn.")
    if not is_adjacent(origin, target):
        return _derive(state, "Cannot move there. Too far.")
    if not is_valid_move(unit, target):
        return _derive(state, "Unit cannot enter this terrain.")

    cost = tile_move_cost(state.weather, target)
    if unit.moves < cost:
        return _derive(state, f"Not enough movement points. Need {cost:g}.")

    moved = replace(unit, tile_id=target.id, moves=unit.moves - cost)
    units = [moved if u.id == unit.id else u for u in state.units]
    logger.debug("Unit %s moved %s -> %s for %s", unit.id, origin.id, target.id, cost)
    return _derive(state, f"Unit moved to {target.id} (Cost: {cost:g})", units=units)


def found_city(state: GameState, unit_id: str) -> GameState:
    """Turn the settler's tile into a player city and consume the settler."""
    unit = _require_unit(state, unit_id)
    idx = _tile_index(state, unit.tile_id)
    tile = state.tiles[idx]
    city = tile.evolve(
        is_city=True,
        owner=settings.PLAYER_ID,
        population=max(tile.population, settings.PLAYER_FOUND_MIN_POPULATION),
        districts=[],
    )
    logger.info("Player founded a city at %s", city.id)
    return _derive(
        state,
        f"City founded at {city.id}!",
        tiles=_with_tile(state, idx, city),
        units=[u for u in state.units if u.id != unit_id],
    )


def build_improvement(state: GameState, tile_id: str, key: str) -> GameState:
    """
    Build ``key`` on a tile. Roads and fast transit only set their tile flag;
    anything else replaces the current improvement.
    """
    imp = get_improvement(key)
    idx = _tile_index(state, tile_id)
    tile = state.tiles[idx]

    inventory = dict(state.inventory)
    for res, amount in imp.build_cost.items():
        inventory[res] = inventory.get(res, 0) - amount

    if isinstance(imp, Infrastructure) and (imp.road or imp.fast_transit):
        built = tile.evolve(
            has_road=tile.has_road or imp.road,
            has_fast_transit=tile.has_fast_transit or imp.fast_transit,
        )
        message = f"Constructed {imp.name} for ${imp.cost}"
    else:
        built = tile.evolve(improvement=imp)
        message = f"Built {imp.name} for ${imp.cost}"

    return _derive(
        state,
        message,
        tiles=_with_tile(state, idx, built),
        inventory=inventory,
        treasury=state.treasury - imp.cost,
    )


def build_district(state: GameState, tile_id: str, district_type: DistrictType) -> GameState:
    district = DISTRICTS[district_type]
    idx = _tile_index(state, tile_id)
    tile = state.tiles[idx]

    if not tile.is_city:
        return _derive(state, "Districts can only be built in a city.")
    if district_type in tile.districts:
        return _derive(state, f"{district.name} already exists in this city.")

    built = tile.evolve(districts=list(tile.districts) + [district_type])
    return _derive(
        state,
        f"Constructed {district.name} in city for ${district.cost}",
        tiles=_with_tile(state, idx, built),
        treasury=state.treasury - district.cost,
    )


def train_unit(
    state: GameState,
    tile_id: str,
    unit_type: UnitType,
    *,
    unit_id: Optional[str] = None,
) -> GameState:
    definition = UNIT_DEFINITIONS[unit_type]
    _tile_index(state, tile_id)
    unit = spawn_unit(unit_id or f"u_{uuid.uuid4().hex[:12]}", unit_type, tile_id, settings.PLAYER_ID)
    return _derive(
        state,
        f"Trained {definition.name} for ${definition.cost}",
        units=list(state.units) + [unit],
        treasury=state.treasury - definition.cost,
    )


def research_tech(state: GameState, tech_id: str) -> GameState:
    tech = get_tech(tech_id)
    researched = list(state.researched_techs)
    if tech.id not in researched:
        researched.append(tech.id)
    return _derive(
        state,
        f"Researched {tech.name}!",
        science=state.science - tech.cost,
        researched_techs=researched,
    )


def choose_civilization(
    state: GameState,
    name: str,
    *,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Seed every civilization on the map with ``name`` as the player's."""
    civ = get_civilization(name)
    tiles, units = initialize_civilizations(state.tiles, name, rng=rng)

    researched = list(state.researched_techs)
    for tech_id in civ.starting_techs:
        if tech_id not in researched:
            researched.append(tech_id)

    return _derive(
        state,
        f"The {civ.name} civilization rises! {civ.description}",
        tiles=tiles,
        units=units,
        researched_techs=researched,
        player_civilization=civ.name,
    )


__all__ = [
    "build_district",
    "build_improvement",
    "choose_civilization",
    "found_city",
    "move_unit",
    "research_tech",
    "train_unit",
]
