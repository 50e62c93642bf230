from __future__ import annotations

"""
Resolution of one full turn.

``process_turn`` runs the phases below in order on private copies and
returns a brand new GameState:

  1. weather          advance the weather chain
  2. moves            every unit gets its full move allowance back
  3. ai               computer units settle or wander
  4. gathering        player gathering improvements harvest their tile
  5. passive          player improvements add their flat per-turn yields
  6. cities           player cities add base yields plus district yields
  7. growth           computer cities may grow
  8. manufacturing    player workshops convert inputs into outputs
  9. commit

Phases 4 to 8 share one inventory, so a workshop can consume what was
harvested earlier in the same turn.
"""

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from world.hex import Tile
from world.resource_types import ResourceType

from . import settings
from .ai import take_ai_turns
from .improvements import DISTRICTS, Gathering, Manufacturing, PerTurnYields, Wonder
from .models import GameState, Inventory
from .population import can_grow
from .weather import WEATHER_EFFECTS, WeatherType, next_weather

logger = logging.getLogger("chronos.Turn")
logger.addHandler(logging.NullHandler())


@dataclass
class Ledger:
    """Running totals for the production phases of a single turn."""

    inventory: Inventory
    science: int = 0
    gold: int = 0

    def add(self, resource: ResourceType, amount: int) -> None:
        self.inventory[resource] = self.inventory.get(resource, 0) + amount

    def take(self, resource: ResourceType, amount: int = 1) -> None:
        self.inventory[resource] = self.inventory.get(resource, 0) - amount

    def has(self, resource: ResourceType, amount: int = 1) -> bool:
        return self.inventory.get(resource, 0) >= amount

    def add_yields(self, yields: PerTurnYields) -> None:
        self.science += yields.science
        self.gold += yields.gold
        for res, amount in yields.resources.items():
            self.add(res, amount)


def _is_player(tile: Tile) -> bool:
    return tile.owner == settings.PLAYER_ID


# ----------------------------------------------------------------------
# Phase 1: weather
# ----------------------------------------------------------------------
def advance_weather(current: WeatherType, rng: random.Random, logs: List[str]) -> WeatherType:
    weather = next_weather(current, rng)
    if weather is not current:
        logs.append(f"Weather changed from {current.value.upper()} to {weather.value.upper()}.")
    logs.append(WEATHER_EFFECTS[weather])
    return weather


# ----------------------------------------------------------------------
# Phase 4: gathering
# ----------------------------------------------------------------------
def gathering_amount(
    improvement: Gathering,
    resource: ResourceType,
    tile: Tile,
    weather: WeatherType,
) -> int:
    """
    Harvest of one output resource:
    rate + floor(population * 0.1 * rate) + 2 on a natural wonder,
    then the weather adjustment, then the plantation bonus.
    """
    rate = improvement.rate
    amount = rate + math.floor(tile.population * settings.POP_YIELD_FACTOR * rate)
    if tile.is_natural_wonder:
        amount += settings.WONDER_GATHER_BONUS

    if weather is WeatherType.RAIN and resource in (ResourceType.GRAIN, ResourceType.COTTON):
        amount += 1
    if weather is WeatherType.STORM:
        amount = math.floor(amount * 0.5)
    if weather is WeatherType.SNOW and resource is ResourceType.WOOD:
        amount = max(0, amount - 1)

    if improvement.key == "plantation":
        amount += settings.PLANTATION_BONUS
    return amount


def gather_yields(tiles: Iterable[Tile], weather: WeatherType, ledger: Ledger) -> None:
    for tile in tiles:
        imp = tile.improvement
        if not _is_player(tile) or not isinstance(imp, Gathering):
            continue
        for res in imp.output:
            ledger.add(res, gathering_amount(imp, res, tile, weather))


# ----------------------------------------------------------------------
# Phases 5 and 6: passive and city yields
# ----------------------------------------------------------------------
def passive_yields(tiles: Iterable[Tile], ledger: Ledger) -> None:
    for tile in tiles:
        if _is_player(tile) and tile.improvement is not None:
            ledger.add_yields(tile.improvement.per_turn())


def city_gold(population: int) -> int:
    return settings.CITY_BASE_GOLD + settings.CITY_GOLD_PER_POP * population


def city_yields(tiles: Iterable[Tile], ledger: Ledger) -> None:
    for tile in tiles:
        if not (tile.is_city and _is_player(tile)):
            continue
        ledger.add(ResourceType.GRAIN, settings.CITY_GRAIN)
        ledger.add(ResourceType.WOOD, settings.CITY_WOOD)
        ledger.add(ResourceType.FOOD, settings.CITY_FOOD)
        ledger.science += settings.CITY_SCIENCE
        ledger.gold += city_gold(tile.population)
        for district in tile.districts:
            ledger.add_yields(DISTRICTS[district].yields)


# ----------------------------------------------------------------------
# Phase 7: growth
# ----------------------------------------------------------------------
def grow_ai_cities(tiles: List[Tile], rng: random.Random) -> List[Tile]:
    """
    Give each computer-owned city its growth roll. One draw per city; the
    gain is only applied while the city is below its housing cap.
    """
    grown: List[Tile] = []
    for tile in tiles:
        if tile.is_city and not _is_player(tile):
            roll = rng.random()
            if roll < settings.AI_CITY_GROWTH_CHANCE and can_grow(tile):
                tile = tile.evolve(population=tile.population + 1)
                logger.debug("City at %s grew to %d", tile.id, tile.population)
        grown.append(tile)
    return grown


# ----------------------------------------------------------------------
# Phase 8: manufacturing
# ----------------------------------------------------------------------
def _produced(rate: int, weather: WeatherType) -> int:
    if weather is WeatherType.STORM:
        return math.floor(rate * 0.5)
    return rate


def manufacture(tiles: Iterable[Tile], weather: WeatherType, ledger: Ledger) -> None:
    for tile in tiles:
        imp = tile.improvement
        if not _is_player(tile) or not isinstance(imp, (Manufacturing, Wonder)):
            continue

        if imp.inputs:
            if not all(ledger.has(res) for res in imp.inputs):
                logger.debug("%s at %s is missing inputs", imp.name, tile.id)
                continue
            for res in imp.inputs:
                ledger.take(res)
            for res in imp.outputs:
                ledger.add(res, _produced(imp.rate, weather))
        elif imp.outputs and isinstance(imp, Manufacturing):
            for res in imp.outputs:
                ledger.add(res, _produced(imp.rate, weather))


# ----------------------------------------------------------------------
# Driver
# ----------------------------------------------------------------------
def process_turn(state: GameState, *, rng: Optional[random.Random] = None) -> GameState:
    """Resolve one turn and return the resulting state. ``state`` is left untouched."""
    rng = rng or random.Random()
    report: List[str] = [f"Turn {state.turn + 1} Report:"]

    weather = advance_weather(state.weather, rng, report)

    units = [replace(u, moves=u.max_moves) for u in state.units]
    tiles = list(state.tiles)
    tiles, units = take_ai_turns(tiles, units, rng, report)

    ledger = Ledger(inventory=dict(state.inventory))
    gather_yields(tiles, weather, ledger)
    passive_yields(tiles, ledger)
    city_yields(tiles, ledger)
    tiles = grow_ai_cities(tiles, rng)
    manufacture(tiles, weather, ledger)

    if ledger.gold:
        report.append(f"Treasury +{ledger.gold} gold.")
    if ledger.science:
        report.append(f"Research +{ledger.science} science.")

    logger.info(
        "Turn %d resolved: weather=%s gold=+%d science=+%d units=%d",
        state.turn,
        weather.value,
        ledger.gold,
        ledger.science,
        len(units),
    )

    return replace(
        state,
        turn=state.turn + 1,
        weather=weather,
        treasury=state.treasury + ledger.gold,
        science=state.science + ledger.science,
        researched_techs=list(state.researched_techs),
        tiles=tiles,
        units=units,
        inventory=ledger.inventory,
        processing_turn=False,
        logs=report + list(state.logs),
    )


__all__ = [
    "Ledger",
    "advance_weather",
    "city_gold",
    "city_yields",
    "gather_yields",
    "gathering_amount",
    "grow_ai_cities",
    "manufacture",
    "passive_yields",
    "process_turn",
]
