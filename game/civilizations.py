from __future__ import annotations

"""Playable civilizations and the placement of their starting units."""

import logging
import math
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from world.hex import Tile, hex_distance

from . import settings
from .units import Unit, UnitType, spawn_unit

logger = logging.getLogger("chronos.Civilizations")
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Civilization:
    name: str
    description: str
    bonus: str
    starting_techs: Tuple[str, ...]


CIVILIZATIONS: Mapping[str, Civilization] = MappingProxyType(
    {
        "Africa": Civilization(
            "Africa",
            "Cradle of humanity, rich in resources and culture.",
            "+2 Gold from Mines",
            ("agriculture", "mining"),
        ),
        "Polynesia": Civilization(
            "Polynesia",
            "Masters of the sea and island navigation.",
            "Units ignore movement penalty on Coast",
            ("agriculture", "sailing"),
        ),
        "Rome": Civilization(
            "Rome",
            "Legions, engineering, and the glory of empire.",
            "+10% Science generation",
            ("agriculture", "writing"),
        ),
        "China": Civilization(
            "China",
            "Ancient dynasties with disciplined armies.",
            "+10% Combat Strength in friendly territory",
            ("agriculture", "archery"),
        ),
        "Inca": Civilization(
            "Inca",
            "Builders of mountain citadels and terrace farms.",
            "Farms on Hills provide +1 Food",
            ("agriculture", "masonry"),
        ),
        "United States": Civilization(
            "United States",
            "Vast plains and industrial potential.",
            "Industrial Zones cost 20% less",
            ("agriculture", "pottery"),
        ),
        "Scotland": Civilization(
            "Scotland",
            "Highlanders fierce in defense of their freedom.",
            "Hills provide +1 Defense to units",
            ("agriculture", "animal_husbandry"),
        ),
    }
)

# Civilizations whose starting escort is a spearman instead of a warrior
SPEARMAN_ESCORT = frozenset({"China", "Scotland"})


def get_civilization(name: str) -> Civilization:
    try:
        return CIVILIZATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown civilization: {name!r}") from None


def start_order(chosen: str) -> List[str]:
    """The chosen civilization first, then every other one in registry order."""
    get_civilization(chosen)
    return [chosen] + [name for name in CIVILIZATIONS if name != chosen]


def owner_id(civ_name: str, chosen: str) -> str:
    return settings.PLAYER_ID if civ_name == chosen else civ_name


def escort_type(civ_name: str) -> UnitType:
    return UnitType.SPEARMAN if civ_name in SPEARMAN_ESCORT else UnitType.WARRIOR


def is_start_candidate(tile: Tile) -> bool:
    return (
        tile.terrain.value in settings.START_TERRAINS
        and not tile.is_natural_wonder
        and tile.population > 0
    )


def _min_distance(tile: Tile, claimed: Sequence[Tile]) -> float:
    if not claimed:
        return math.inf
    return min(hex_distance(tile.coord, other.coord) for other in claimed)


def pick_start(
    candidates: Sequence[Tile],
    claimed: Sequence[Tile],
    rng: random.Random,
    attempts: int = settings.SEED_ATTEMPTS,
    min_distance: int = settings.MIN_START_DISTANCE,
) -> Optional[Tile]:
    """
    Draw up to ``attempts`` random candidates and return the first one that is
    more than ``min_distance`` hexes from every claimed tile, or else the draw
    that came furthest. Returns None only when there are no candidates.
    """
    best: Optional[Tile] = None
    best_distance = -1.0
    for _ in range(attempts):
        if not candidates:
            break
        tile = candidates[rng.randrange(len(candidates))]
        distance = _min_distance(tile, claimed)
        if distance > min_distance:
            return tile
        if distance > best_distance:
            best_distance = distance
            best = tile
    return best


def initialize_civilizations(
    tiles: Sequence[Tile],
    chosen: str,
    *,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Tile], List[Unit]]:
    """
    Give every civilization a starting tile and its settler plus escort.

    Returns a new tile list (claimed tiles are replaced by owned copies, the
    input tiles are left untouched) and the spawned units. A civilization
    that finds no eligible tile gets no start.
    """
    rng = rng or random.Random()
    order = start_order(chosen)

    updated: List[Tile] = list(tiles)
    index_of: Dict[str, int] = {t.id: i for i, t in enumerate(updated)}
    claimed: List[Tile] = []
    units: List[Unit] = []

    for civ_name in order:
        claimed_ids = {t.id for t in claimed}
        candidates = [t for t in updated if t.id not in claimed_ids and is_start_candidate(t)]
        start = pick_start(candidates, claimed, rng)
        if start is None:
            logger.warning("No eligible start tile for %s; it begins without units", civ_name)
            continue

        owner = owner_id(civ_name, chosen)
        owned = start.evolve(owner=owner)
        updated[index_of[start.id]] = owned
        claimed.append(owned)

        units.append(spawn_unit(f"u_{civ_name}_settler", UnitType.SETTLER, owned.id, owner))
        units.append(spawn_unit(f"u_{civ_name}_warrior", escort_type(civ_name), owned.id, owner))
        logger.info("%s starts at %s (%s)", civ_name, owned.id, owned.terrain.value)

    return updated, units


__all__ = [
    "CIVILIZATIONS",
    "Civilization",
    "SPEARMAN_ESCORT",
    "escort_type",
    "get_civilization",
    "initialize_civilizations",
    "is_start_candidate",
    "owner_id",
    "pick_start",
    "start_order",
]
