from __future__ import annotations

"""
Data model for a single map tile plus the axial hex geometry shared by
world generation, civilization seeding, movement and the AI.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .resource_types import ResourceType

if TYPE_CHECKING:
    from game.improvements import DistrictType, Improvement

Coordinate = Tuple[int, int]

# Axial hex directions: E, SE, SW, W, NW, NE
HEX_DIRECTIONS: List[Coordinate] = [
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
]


class TerrainType(Enum):
    OCEAN = "ocean"
    COAST = "coast"
    PLAINS = "plains"
    HILL = "hill"
    MOUNTAINS = "mountains"
    FOREST = "forest"
    SWAMP = "swamp"
    DESERT = "desert"
    TUNDRA = "tundra"
    SHRUBLAND = "shrubland"
    SAVANNA = "savanna"


WATER_TERRAIN = frozenset({TerrainType.OCEAN, TerrainType.COAST})


def tile_id(q: int, r: int) -> str:
    """Canonical string id of the tile at axial (q, r)."""
    return f"{q},{r}"


def hex_distance(a: Coordinate, b: Coordinate) -> int:
    """
    Number of hex steps between two axial coordinates.
    (|dq| + |dq + dr| + |dr|) // 2 = hex distance in axial coords.
    """
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def within_radius(q: int, r: int, radius: int) -> bool:
    """True if (q, r) lies inside a hexagon of the given radius around the origin."""
    return abs(q) <= radius and abs(r) <= radius and abs(q + r) <= radius


@dataclass
class Tile:
    """
    Represents a single hex tile on the map.

    Core Attributes:
      q, r: Axial grid coordinate of this tile.
      terrain: One of TerrainType; fixed once the map is generated.
      resource: The resource found here, if any; fixed once generated.
      population: Number of people living on the tile (never negative).
      owner: "player", a civilization name, or None when unclaimed.
      improvement: At most one built improvement (a registry entry).
      districts: Districts built in this city, without duplicates.
      is_city: True once a city has been founded here.
      has_road / has_fast_transit: Movement infrastructure flags.
      is_natural_wonder / wonder_name: Landmark marker set at generation.
      elevation, moisture, temperature: Generation layers, kept for inspection.
      variation: Cosmetic jitter for renderers.
    """

    q: int
    r: int
    terrain: TerrainType = TerrainType.PLAINS
    resource: Optional[ResourceType] = None
    population: int = 0
    owner: Optional[str] = None
    improvement: Optional["Improvement"] = None
    districts: List["DistrictType"] = field(default_factory=list)
    is_city: bool = False
    has_road: bool = False
    has_fast_transit: bool = False
    is_natural_wonder: bool = False
    wonder_name: Optional[str] = None
    elevation: float = 0.0
    moisture: float = 0.0
    temperature: float = 0.0
    variation: float = 0.0

    def __post_init__(self):
        if not isinstance(self.terrain, TerrainType):
            raise TypeError(f"terrain must be a TerrainType, not {type(self.terrain)}")
        if self.population < 0:
            raise ValueError("population cannot be negative.")

    @property
    def id(self) -> str:
        return tile_id(self.q, self.r)

    @property
    def coord(self) -> Coordinate:
        return (self.q, self.r)

    @property
    def is_water(self) -> bool:
        return self.terrain in WATER_TERRAIN

    def evolve(self, **changes: Any) -> "Tile":
        """Return a copy with ``changes`` applied. The copy never shares its districts list."""
        changes.setdefault("districts", list(self.districts))
        return replace(self, **changes)

    def __repr__(self) -> str:
        base = f"Tile(id={self.id}, terrain={self.terrain.value}"
        if self.resource:
            base += f", resource={self.resource.value}"
        if self.population:
            base += f", population={self.population}"
        if self.owner:
            base += f", owner={self.owner}"
        if self.is_city:
            base += ", CITY"
        if self.is_natural_wonder:
            base += f", WONDER={self.wonder_name}"
        base += ")"
        return base

    def to_json(self) -> Dict[str, Any]:
        """
        Serializes the tile to a JSON-friendly dict. Registry entries
        (improvement, districts) are written by key.
        """
        return {
            "q": self.q,
            "r": self.r,
            "terrain": self.terrain.value,
            "resource": self.resource.value if self.resource else None,
            "population": self.population,
            "owner": self.owner,
            "improvement": self.improvement.key if self.improvement else None,
            "districts": [d.value for d in self.districts],
            "is_city": self.is_city,
            "has_road": self.has_road,
            "has_fast_transit": self.has_fast_transit,
            "is_natural_wonder": self.is_natural_wonder,
            "wonder_name": self.wonder_name,
            "elevation": self.elevation,
            "moisture": self.moisture,
            "temperature": self.temperature,
            "variation": self.variation,
        }


def index_by_coord(tiles: List[Tile]) -> Dict[Coordinate, Tile]:
    """Map each tile's (q, r) to the tile."""
    return {t.coord: t for t in tiles}


def neighbors(tile: Tile, by_coord: Dict[Coordinate, Tile]) -> List[Tile]:
    """Return the existing tiles adjacent to ``tile``."""
    result: List[Tile] = []
    for dq, dr in HEX_DIRECTIONS:
        n = by_coord.get((tile.q + dq, tile.r + dr))
        if n is not None:
            result.append(n)
    return result


__all__ = [
    "Coordinate",
    "HEX_DIRECTIONS",
    "TerrainType",
    "Tile",
    "WATER_TERRAIN",
    "hex_distance",
    "index_by_coord",
    "neighbors",
    "tile_id",
    "within_radius",
]
