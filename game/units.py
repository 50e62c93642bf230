from __future__ import annotations

"""Unit definitions and the per-instance unit record."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class MovementClass(Enum):
    LAND = "land"
    WATER = "water"
    AIR = "air"
    SPACE = "space"


class UnitType(Enum):
    SETTLER = "settler"
    SCOUT = "scout"
    WARRIOR = "warrior"
    SPEARMAN = "spearman"
    ARCHER = "archer"
    TRIREME = "trireme"
    BOMBER = "bomber"
    STARSHIP = "starship"


@dataclass(frozen=True)
class UnitDefinition:
    name: str
    cost: int
    moves: int
    strength: int
    movement: MovementClass = MovementClass.LAND
    tech_required: Optional[str] = None


UNIT_DEFINITIONS: Mapping[UnitType, UnitDefinition] = MappingProxyType(
    {
        UnitType.SETTLER: UnitDefinition("Settler", 100, 2, 0),
        UnitType.SCOUT: UnitDefinition("Scout", 30, 3, 5),
        UnitType.WARRIOR: UnitDefinition("Warrior", 40, 2, 10),
        UnitType.SPEARMAN: UnitDefinition("Spearman", 50, 2, 15, tech_required="bronze_working"),
        UnitType.ARCHER: UnitDefinition("Archer", 60, 2, 10, tech_required="archery"),
        UnitType.TRIREME: UnitDefinition("Trireme", 70, 3, 12, MovementClass.WATER, "sailing"),
        UnitType.BOMBER: UnitDefinition("Bomber", 400, 6, 60, MovementClass.AIR, "flight"),
        UnitType.STARSHIP: UnitDefinition("Starship", 2000, 10, 100, MovementClass.SPACE),
    }
)


@dataclass
class Unit:
    """A unit on the map. ``tile_id`` refers to a tile by id, never by object."""

    id: str
    type: UnitType
    tile_id: str
    moves: float
    max_moves: int
    owner: str

    @property
    def definition(self) -> UnitDefinition:
        return UNIT_DEFINITIONS[self.type]

    @property
    def movement(self) -> MovementClass:
        return self.definition.movement

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "tile_id": self.tile_id,
            "moves": self.moves,
            "max_moves": self.max_moves,
            "owner": self.owner,
        }


def spawn_unit(unit_id: str, unit_type: UnitType, tile_id: str, owner: str) -> Unit:
    """Create a unit at full move allowance."""
    moves = UNIT_DEFINITIONS[unit_type].moves
    return Unit(id=unit_id, type=unit_type, tile_id=tile_id, moves=moves, max_moves=moves, owner=owner)


__all__ = [
    "MovementClass",
    "UNIT_DEFINITIONS",
    "Unit",
    "UnitDefinition",
    "UnitType",
    "spawn_unit",
]
