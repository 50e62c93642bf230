"""Game package exposing core classes."""

from .game import Game
from .models import GameState, new_game_state
from .technology import Era, TECHS
from .improvements import (
    DISTRICTS,
    IMPROVEMENTS,
    Civic,
    DistrictType,
    Gathering,
    Infrastructure,
    Manufacturing,
    Passive,
    PerTurnYields,
    Wonder,
)
from .units import UNIT_DEFINITIONS, MovementClass, Unit, UnitType
from .civilizations import CIVILIZATIONS, initialize_civilizations
from .weather import WeatherChain, WeatherType, next_weather
from .movement import is_valid_move, movement_cost
from .population import housing_cap
from .turn import process_turn
from .persistence import GameLoadError, GameSaveError, state_from_dict, state_to_dict

__all__ = [
    "CIVILIZATIONS",
    "Civic",
    "DISTRICTS",
    "DistrictType",
    "Era",
    "Game",
    "GameLoadError",
    "GameSaveError",
    "GameState",
    "Gathering",
    "IMPROVEMENTS",
    "Infrastructure",
    "Manufacturing",
    "MovementClass",
    "Passive",
    "PerTurnYields",
    "TECHS",
    "UNIT_DEFINITIONS",
    "Unit",
    "UnitType",
    "WeatherChain",
    "WeatherType",
    "Wonder",
    "housing_cap",
    "initialize_civilizations",
    "is_valid_move",
    "movement_cost",
    "new_game_state",
    "next_weather",
    "process_turn",
    "state_from_dict",
    "state_to_dict",
]
