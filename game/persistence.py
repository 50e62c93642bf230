from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from world.hex import TerrainType, Tile
from world.resource_types import ResourceType

from .improvements import IMPROVEMENTS, DistrictType
from .models import GameState, Inventory
from .technology import Era
from .units import Unit, UnitType
from .weather import WeatherType

logger = logging.getLogger("chronos.Persistence")
logger.addHandler(logging.NullHandler())


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------
SAVE_FILE: Path = Path("chronos_save.json")


# -----------------------------------------------------------------------------
# Custom Exceptions
# -----------------------------------------------------------------------------
class GameSaveError(Exception):
    """Exception raised when saving the game state fails."""


class GameLoadError(Exception):
    """Exception raised when loading the game state fails."""


# -----------------------------------------------------------------------------
# Serialization / Deserialization Helpers
# -----------------------------------------------------------------------------
def serialize_inventory(inventory: Inventory) -> Dict[str, int]:
    return {res.value: int(count) for res, count in inventory.items()}


def deserialize_inventory(data: Any) -> Inventory:
    """Convert a JSON inventory mapping back into ResourceType keys."""
    result: Inventory = {}
    if not isinstance(data, dict):
        logger.warning("'inventory' in save file is not a dict; starting empty.")
        return result
    for key, value in data.items():
        try:
            result[ResourceType(key)] = int(value)
        except (ValueError, TypeError):
            logger.warning("Skipping invalid inventory entry: %s:%s", key, value)
    return result


def tile_from_dict(data: Dict[str, Any]) -> Tile:
    """
    Rebuild a tile from ``Tile.to_json`` output.

    Raises ValueError/KeyError/TypeError for a tile that cannot be rebuilt;
    an unknown improvement or district is dropped with a warning.
    """
    improvement = None
    imp_key = data.get("improvement")
    if imp_key is not None:
        improvement = IMPROVEMENTS.get(imp_key)
        if improvement is None:
            logger.warning("Unknown improvement '%s' on tile %s,%s; dropping it", imp_key, data.get("q"), data.get("r"))

    districts: List[DistrictType] = []
    for raw in data.get("districts") or []:
        try:
            district = DistrictType(raw)
        except ValueError:
            logger.warning("Skipping unknown district '%s'", raw)
            continue
        if district not in districts:
            districts.append(district)

    resource = data.get("resource")
    return Tile(
        q=int(data["q"]),
        r=int(data["r"]),
        terrain=TerrainType(data["terrain"]),
        resource=ResourceType(resource) if resource else None,
        population=int(data.get("population", 0)),
        owner=data.get("owner"),
        improvement=improvement,
        districts=districts,
        is_city=bool(data.get("is_city", False)),
        has_road=bool(data.get("has_road", False)),
        has_fast_transit=bool(data.get("has_fast_transit", False)),
        is_natural_wonder=bool(data.get("is_natural_wonder", False)),
        wonder_name=data.get("wonder_name"),
        elevation=float(data.get("elevation", 0.0)),
        moisture=float(data.get("moisture", 0.0)),
        temperature=float(data.get("temperature", 0.0)),
        variation=float(data.get("variation", 0.0)),
    )


def unit_from_dict(data: Dict[str, Any]) -> Unit:
    return Unit(
        id=str(data["id"]),
        type=UnitType(data["type"]),
        tile_id=str(data["tile_id"]),
        moves=data["moves"],
        max_moves=int(data["max_moves"]),
        owner=str(data["owner"]),
    )


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Plain JSON-compatible snapshot of the whole game state."""
    return {
        "turn": int(state.turn),
        "era": state.era.value,
        "treasury": state.treasury,
        "science": state.science,
        "researched_techs": list(state.researched_techs),
        "weather": state.weather.value,
        "tiles": [t.to_json() for t in state.tiles],
        "units": [u.to_json() for u in state.units],
        "inventory": serialize_inventory(state.inventory),
        "processing_turn": bool(state.processing_turn),
        "logs": list(state.logs),
        "player_civilization": state.player_civilization,
    }


def _enum_or_default(enum_cls, raw: Any, default, label: str):
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning("Invalid %s '%s' in save; using %s", label, raw, default.value)
        return default


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        logger.warning("'%s' in save file is not a list; resetting.", key)
        return []
    return value


def _number_field(data: Dict[str, Any], key: str, default: int) -> Union[int, float]:
    """Read a numeric scalar; anything non-numeric makes the whole save unreadable."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GameLoadError(f"'{key}' in save file must be a number, got {value!r}")
    return value


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """
    Inverse of ``state_to_dict``. Malformed tiles and units are skipped with a
    warning; a non-numeric turn, treasury or science raises GameLoadError.
    """
    if not isinstance(data, dict):
        raise GameLoadError("Save data must be a JSON object")

    turn = _number_field(data, "turn", 1)
    treasury = _number_field(data, "treasury", 0)
    science = _number_field(data, "science", 0)

    tiles: List[Tile] = []
    for entry in _list_field(data, "tiles"):
        try:
            tiles.append(tile_from_dict(entry))
        except (AttributeError, KeyError, ValueError, TypeError) as e:
            logger.warning("Skipping invalid tile entry %s: %s", entry, e)

    units: List[Unit] = []
    for entry in _list_field(data, "units"):
        try:
            units.append(unit_from_dict(entry))
        except (AttributeError, KeyError, ValueError, TypeError) as e:
            logger.warning("Skipping invalid unit entry %s: %s", entry, e)

    return GameState(
        turn=int(turn),
        era=_enum_or_default(Era, data.get("era"), Era.DAWN, "era"),
        treasury=treasury,
        science=science,
        researched_techs=[str(t) for t in _list_field(data, "researched_techs")],
        weather=_enum_or_default(WeatherType, data.get("weather"), WeatherType.CLEAR, "weather"),
        tiles=tiles,
        units=units,
        inventory=deserialize_inventory(data.get("inventory", {})),
        processing_turn=bool(data.get("processing_turn", False)),
        logs=[str(line) for line in _list_field(data, "logs")],
        player_civilization=data.get("player_civilization"),
    )


# -----------------------------------------------------------------------------
# Save / Load
# -----------------------------------------------------------------------------
def save_state(state: GameState, file_path: Optional[Union[str, Path]] = None) -> None:
    """
    Persist the game state to disk in an atomic manner.

    Raises:
        GameSaveError: if writing or renaming fails.
    """
    path = Path(file_path) if file_path is not None else SAVE_FILE
    temp_file = path.with_suffix(".json.tmp")
    data = state_to_dict(state)

    # Write to a temporary file first
    try:
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except (OSError, TypeError, ValueError) as e:
        raise GameSaveError(f"Failed to write to temporary save file: {e}") from e

    # Atomically move temp -> final
    try:
        shutil.move(str(temp_file), str(path))
    except OSError as e:
        try:
            temp_file.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove leftover temp save file %s", temp_file)
        raise GameSaveError(f"Failed to rename temporary save file to final: {e}") from e

    logger.info("Game saved to %s (turn %d)", path, state.turn)


def load_state(file_path: Optional[Union[str, Path]] = None) -> Optional[GameState]:
    """
    Load a saved game, or return None when there is no save file.

    Raises:
        GameLoadError: if the file cannot be read or parsed.
    """
    path = Path(file_path) if file_path is not None else SAVE_FILE
    if not path.exists():
        logger.info("No save file at %s", path)
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise GameLoadError(f"Failed to read or parse save file: {e}") from e

    state = state_from_dict(raw_data)
    logger.info("Game loaded from %s (turn %d)", path, state.turn)
    return state


__all__ = [
    "GameLoadError",
    "GameSaveError",
    "SAVE_FILE",
    "deserialize_inventory",
    "load_state",
    "save_state",
    "serialize_inventory",
    "state_from_dict",
    "state_to_dict",
    "tile_from_dict",
    "unit_from_dict",
]
