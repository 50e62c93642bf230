from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from world.hex import Tile
from world.resource_types import EDIBLE_RESOURCES, ResourceType

from . import settings
from .technology import Era
from .units import Unit
from .weather import WeatherType

Inventory = Dict[ResourceType, int]

# Resources shown in the inventory from turn one, even at zero
STARTING_INVENTORY = (
    ResourceType.GRAIN,
    ResourceType.WOOD,
    ResourceType.ORE,
    ResourceType.FOOD,
    ResourceType.LUMBER,
    ResourceType.TOOLS,
    ResourceType.AMENITIES,
    ResourceType.FABRIC,
    ResourceType.SALTED_FISH,
    ResourceType.METAL_TOOL,
)


def starting_inventory() -> Inventory:
    return {res: 0 for res in STARTING_INVENTORY}


@dataclass
class GameState:
    """
    Everything that makes up one moment of a game.

    A turn never edits a state in place: ``process_turn`` and the command
    mutators build a new GameState and leave the one they were given alone.
    ``logs`` is newest first.
    """

    turn: int = 1
    era: Era = Era.DAWN
    treasury: int = settings.STARTING_TREASURY
    science: int = settings.STARTING_SCIENCE
    researched_techs: List[str] = field(default_factory=lambda: list(settings.STARTING_TECHS))
    weather: WeatherType = WeatherType.CLEAR
    tiles: List[Tile] = field(default_factory=list)
    units: List[Unit] = field(default_factory=list)
    inventory: Inventory = field(default_factory=starting_inventory)
    processing_turn: bool = False
    logs: List[str] = field(default_factory=list)
    player_civilization: Optional[str] = None

    def tile_by_id(self, tile_id: str) -> Optional[Tile]:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def unit_by_id(self, unit_id: str) -> Optional[Unit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None

    def units_at(self, tile_id: str) -> List[Unit]:
        return [u for u in self.units if u.tile_id == tile_id]

    def player_units(self) -> List[Unit]:
        return [u for u in self.units if u.owner == settings.PLAYER_ID]

    def player_cities(self) -> List[Tile]:
        return [t for t in self.tiles if t.is_city and t.owner == settings.PLAYER_ID]

    def total_food(self) -> int:
        """Sum of every edible resource in the inventory."""
        return sum(self.inventory.get(res, 0) for res in EDIBLE_RESOURCES)


def new_game_state(tiles: Optional[List[Tile]] = None, units: Optional[List[Unit]] = None) -> GameState:
    """A fresh turn-one state over the given map."""
    return GameState(
        tiles=list(tiles or []),
        units=list(units or []),
        logs=["New Game Started. Choose your Civilization."],
    )


__all__ = ["GameState", "Inventory", "STARTING_INVENTORY", "new_game_state", "starting_inventory"]
