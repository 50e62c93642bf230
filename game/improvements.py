from __future__ import annotations

"""
Tile improvements and city districts.

Every improvement is one of a fixed set of kinds, each with only the fields
that make sense for it:

  Gathering       harvests ``output`` at ``rate`` from the tile it sits on
  Manufacturing   turns one of each ``inputs`` into ``rate`` of each ``outputs``
  Passive         adds fixed per-turn ``yields``
  Infrastructure  changes movement on its tile (road, fast transit)
  Civic           raises the housing cap and may add ``yields``
  Wonder          adds ``yields`` and may also manufacture like a workshop

The registries below are immutable and looked up by key.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from world.hex import TerrainType
from world.resource_types import ResourceType

R = ResourceType
T = TerrainType


@dataclass(frozen=True)
class PerTurnYields:
    """Flat science, gold and resources added every turn."""

    science: int = 0
    gold: int = 0
    resources: Mapping[ResourceType, int] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.science or self.gold or self.resources)


NO_YIELDS = PerTurnYields()


@dataclass(frozen=True)
class Improvement:
    """Base class for all improvements."""

    key: str
    name: str
    cost: int
    build_cost: Mapping[ResourceType, int] = field(default_factory=dict)
    tech_required: str | None = None
    terrain_required: Tuple[TerrainType, ...] = ()
    description: str = ""

    def per_turn(self) -> PerTurnYields:
        return NO_YIELDS

    def housing_provided(self) -> int:
        return 0

    def allowed_on(self, terrain: TerrainType) -> bool:
        return not self.terrain_required or terrain in self.terrain_required


@dataclass(frozen=True)
class Gathering(Improvement):
    output: Tuple[ResourceType, ...] = ()
    rate: int = 1


@dataclass(frozen=True)
class Manufacturing(Improvement):
    inputs: Tuple[ResourceType, ...] = ()
    outputs: Tuple[ResourceType, ...] = ()
    rate: int = 1


@dataclass(frozen=True)
class Passive(Improvement):
    yields: PerTurnYields = NO_YIELDS

    def per_turn(self) -> PerTurnYields:
        return self.yields


@dataclass(frozen=True)
class Infrastructure(Improvement):
    # Infrastructure that only flips a tile flag never replaces what is built
    road: bool = False
    fast_transit: bool = False


@dataclass(frozen=True)
class Civic(Improvement):
    housing: int = 0
    yields: PerTurnYields = NO_YIELDS

    def per_turn(self) -> PerTurnYields:
        return self.yields

    def housing_provided(self) -> int:
        return self.housing


@dataclass(frozen=True)
class Wonder(Improvement):
    yields: PerTurnYields = NO_YIELDS
    inputs: Tuple[ResourceType, ...] = ()
    outputs: Tuple[ResourceType, ...] = ()
    rate: int = 1

    def per_turn(self) -> PerTurnYields:
        return self.yields


_IMPROVEMENT_LIST = [
    # Infrastructure
    Infrastructure("road", "Road", 10, description="Reduces movement cost.", road=True),
    Infrastructure(
        "magrail",
        "Magrail",
        250,
        build_cost={R.STEEL: 2},
        tech_required="electronics",
        description="Near instant travel.",
        fast_transit=True,
    ),
    # Gathering
    Gathering("farm", "Farm", 20, terrain_required=(T.PLAINS, T.SAVANNA), description="Produces food.", output=(R.GRAIN,), rate=2),
    Gathering("mine", "Mine", 50, terrain_required=(T.HILL, T.MOUNTAINS), description="Extracts minerals.", output=(R.ORE,), rate=2),
    Gathering("plantation", "Plantation", 40, output=(R.COTTON,), rate=1),
    Gathering("camp", "Camp", 30, output=(R.FUR,), rate=1),
    Gathering("pasture", "Pasture", 30, output=(R.CATTLE,), rate=1),
    Gathering("fishing_net", "Fishing Net", 25, terrain_required=(T.COAST,), output=(R.FISH,), rate=2),
    Gathering("lumber_mill", "Lumber Mill", 40, terrain_required=(T.FOREST,), output=(R.LUMBER,), rate=2),
    # Manufacturing
    Manufacturing(
        "bakery", "Bakery", 60, tech_required="pottery", description="Bakes grain into bread.",
        inputs=(R.GRAIN,), outputs=(R.BREAD,), rate=2,
    ),
    Manufacturing(
        "smelter", "Smelter", 80, build_cost={R.WOOD: 5}, tech_required="iron_working",
        description="Smelts ore into ingots.", inputs=(R.ORE,), outputs=(R.METAL_INGOT,), rate=1,
    ),
    Manufacturing(
        "blacksmith", "Blacksmith", 90, build_cost={R.LUMBER: 5}, tech_required="iron_working",
        description="Forges tools from ingots and lumber.",
        inputs=(R.METAL_INGOT, R.LUMBER), outputs=(R.METAL_TOOL,), rate=1,
    ),
    Manufacturing(
        "weaver", "Weaver", 60, tech_required="weaving", description="Weaves cotton into fabric.",
        inputs=(R.COTTON,), outputs=(R.FABRIC,), rate=1,
    ),
    Manufacturing(
        "fish_salter", "Fish Salter", 50, tech_required="sailing", description="Preserves fish.",
        inputs=(R.FISH, R.SALT), outputs=(R.SALTED_FISH,), rate=2,
    ),
    Manufacturing(
        "workshop", "Workshop", 70, tech_required="bronze_working", description="Makes simple tools.",
        outputs=(R.TOOLS,), rate=1,
    ),
    # Passive
    Passive("library", "Library", 90, tech_required="education", yields=PerTurnYields(science=3)),
    Passive("trading_post", "Trading Post", 80, tech_required="currency", yields=PerTurnYields(gold=4)),
    Passive("altar", "Altar", 40, tech_required="mysticism", yields=PerTurnYields(resources={R.AMENITIES: 1})),
    # Civic
    Civic("dwelling", "Dwelling", 30, description="Homes for a growing people.", housing=3),
    Civic(
        "granary", "Granary", 60, tech_required="pottery", description="Stores food.",
        housing=2, yields=PerTurnYields(resources={R.FOOD: 1}),
    ),
    # Wonders
    Wonder(
        "stonehenge", "Stonehenge", 300, build_cost={R.STONE: 10}, tech_required="mysticism",
        yields=PerTurnYields(science=2, gold=2),
    ),
    Wonder(
        "hanging_gardens", "Hanging Gardens", 350, tech_required="horticulture",
        yields=PerTurnYields(resources={R.FOOD: 3}),
    ),
    Wonder(
        "great_library", "Great Library", 400, tech_required="education",
        yields=PerTurnYields(science=5), inputs=(R.WOOD,), outputs=(R.PAPER,), rate=2,
    ),
]

IMPROVEMENTS: Mapping[str, Improvement] = MappingProxyType({i.key: i for i in _IMPROVEMENT_LIST})


def get_improvement(key: str) -> Improvement:
    try:
        return IMPROVEMENTS[key]
    except KeyError:
        raise KeyError(f"Unknown improvement: {key!r}") from None


# --------------------------------------------------------------------
# Districts
# --------------------------------------------------------------------
class DistrictType(Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    MILITARY = "military"
    GOVERNMENT = "government"


@dataclass(frozen=True)
class District:
    type: DistrictType
    name: str
    cost: int
    tech_required: str
    bonuses: Tuple[str, ...] = ()
    yields: PerTurnYields = NO_YIELDS


DISTRICTS: Mapping[DistrictType, District] = MappingProxyType(
    {
        DistrictType.RESIDENTIAL: District(
            DistrictType.RESIDENTIAL, "Residential District", 100, "masonry", ("+5 Housing",)
        ),
        DistrictType.COMMERCIAL: District(
            DistrictType.COMMERCIAL, "Commercial District", 150, "writing", ("+2 Gold/turn",),
            PerTurnYields(gold=2),
        ),
        DistrictType.INDUSTRIAL: District(
            DistrictType.INDUSTRIAL, "Industrial District", 200, "engineering", ("+2 Production",),
            PerTurnYields(resources={R.TOOLS: 1}),
        ),
        DistrictType.MILITARY: District(
            DistrictType.MILITARY, "Military District", 180, "military_tactics", ("Unit Training Speed",)
        ),
        DistrictType.GOVERNMENT: District(
            DistrictType.GOVERNMENT, "Government District", 300, "civil_service", ("+1 Influence",)
        ),
    }
)


__all__ = [
    "Civic",
    "DISTRICTS",
    "District",
    "DistrictType",
    "Gathering",
    "IMPROVEMENTS",
    "Improvement",
    "Infrastructure",
    "Manufacturing",
    "NO_YIELDS",
    "Passive",
    "PerTurnYields",
    "Wonder",
    "get_improvement",
]
