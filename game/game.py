import logging
import random
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from world.settings import WorldSettings
from world.world import generate_map

from . import actions
from . import settings
from .improvements import DISTRICTS, DistrictType, get_improvement
from .models import GameState, new_game_state
from .persistence import SAVE_FILE, load_state, save_state
from .technology import can_research, get_tech
from .turn import process_turn
from .units import UNIT_DEFINITIONS, UnitType

logger = logging.getLogger("chronos.Game")
logger.addHandler(logging.NullHandler())


# --------------------------------------------------------------------
# “Game” Class: one running game, its RNG and the command checks
# --------------------------------------------------------------------
class Game:
    """
    Owns the current GameState and the random source that drives it.

    The command methods (``move``, ``build``, ``train`` ...) check that the
    player can afford and is allowed to do what is asked before delegating
    to ``game.actions``. A refused command adds a log line and returns False.
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        *,
        seed: Optional[int] = None,
        world_settings: Optional[WorldSettings] = None,
        save_file: Optional[Union[str, Path]] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.world_settings = world_settings if world_settings is not None else WorldSettings()
        self.save_file = Path(save_file) if save_file is not None else SAVE_FILE
        self.state: GameState = state if state is not None else GameState()

    # Lifecycle -------------------------------------------------------------
    def new_game(self) -> GameState:
        result = generate_map(self.world_settings, rng=self.rng)
        self.state = new_game_state(result.tiles, result.units)
        logger.info("New game with %d tiles", len(self.state.tiles))
        return self.state

    def choose_civilization(self, name: str) -> GameState:
        self.state = actions.choose_civilization(self.state, name, rng=self.rng)
        logger.info("Player chose %s", name)
        return self.state

    def end_turn(self) -> GameState:
        self.state = process_turn(replace(self.state, processing_turn=True), rng=self.rng)
        return self.state

    def save(self) -> None:
        save_state(self.state, self.save_file)
        self._log("Game saved successfully.")

    def load(self) -> bool:
        """Replace the current state with the saved one. False when there is no save."""
        loaded = load_state(self.save_file)
        if loaded is None:
            return False
        self.state = loaded
        self._log("Game loaded from save.")
        return True

    # Commands --------------------------------------------------------------
    def _log(self, message: str) -> None:
        self.state = replace(self.state, logs=[message] + list(self.state.logs))

    def _refuse(self, message: str) -> bool:
        logger.debug("Refused: %s", message)
        self._log(message)
        return False

    def move(self, unit_id: str, target_id: str) -> bool:
        before = self.state.unit_by_id(unit_id)
        self.state = actions.move_unit(self.state, unit_id, target_id)
        after = self.state.unit_by_id(unit_id)
        return before is not None and after is not None and after.tile_id != before.tile_id

    def found_city(self, unit_id: str) -> bool:
        unit = self.state.unit_by_id(unit_id)
        if unit is None or unit.type is not UnitType.SETTLER or unit.owner != settings.PLAYER_ID:
            return self._refuse("Only your settlers can found cities.")
        tile = self.state.tile_by_id(unit.tile_id)
        if tile is not None and tile.is_city:
            return self._refuse("There is already a city here.")
        self.state = actions.found_city(self.state, unit_id)
        return True

    def found_capital(self) -> bool:
        """Found a city with the player's first settler, if there is one."""
        for unit in self.state.player_units():
            if unit.type is UnitType.SETTLER:
                return self.found_city(unit.id)
        return False

    def build(self, tile_id: str, key: str) -> bool:
        imp = get_improvement(key)
        tile = self.state.tile_by_id(tile_id)
        if tile is None:
            return False
        if not imp.allowed_on(tile.terrain):
            names = " or ".join(t.value for t in imp.terrain_required)
            return self._refuse(f"Must build on {names}")
        if imp.tech_required and imp.tech_required not in self.state.researched_techs:
            return self._refuse(f"Requires {get_tech(imp.tech_required).name}.")
        if self.state.treasury < imp.cost:
            return self._refuse("Insufficient funds!")
        missing = [
            f"{amount} {res.value}"
            for res, amount in imp.build_cost.items()
            if self.state.inventory.get(res, 0) < amount
        ]
        if missing:
            return self._refuse(f"Insufficient resources: {', '.join(missing)}")
        self.state = actions.build_improvement(self.state, tile_id, key)
        return True

    def build_district(self, tile_id: str, district_type: DistrictType) -> bool:
        district = DISTRICTS[district_type]
        if district.tech_required not in self.state.researched_techs:
            return self._refuse(f"Requires {get_tech(district.tech_required).name}.")
        if self.state.treasury < district.cost:
            return self._refuse("Insufficient funds!")
        before = self.state.tile_by_id(tile_id)
        self.state = actions.build_district(self.state, tile_id, district_type)
        after = self.state.tile_by_id(tile_id)
        return before is not None and after is not None and after.districts != before.districts

    def train(self, tile_id: str, unit_type: UnitType) -> bool:
        definition = UNIT_DEFINITIONS[unit_type]
        if definition.tech_required and definition.tech_required not in self.state.researched_techs:
            return self._refuse(f"Requires {get_tech(definition.tech_required).name}.")
        if self.state.treasury < definition.cost:
            return self._refuse("Insufficient funds!")
        self.state = actions.train_unit(self.state, tile_id, unit_type)
        return True

    def research(self, tech_id: str) -> bool:
        tech = get_tech(tech_id)
        if not can_research(tech_id, self.state.researched_techs):
            return self._refuse(f"{tech.name} cannot be researched yet.")
        if self.state.science < tech.cost:
            return self._refuse("Insufficient Science!")
        self.state = actions.research_tech(self.state, tech_id)
        return True

    # Reporting -------------------------------------------------------------
    def summary(self) -> Dict[str, Any]:
        s = self.state
        return {
            "turn": s.turn,
            "era": s.era.value,
            "civilization": s.player_civilization,
            "weather": s.weather.value,
            "treasury": s.treasury,
            "science": s.science,
            "cities": len(s.player_cities()),
            "units": len(s.player_units()),
            "food": s.total_food(),
        }

    def recent_logs(self, count: int = 5) -> List[str]:
        return list(self.state.logs[:count])


__all__ = ["Game"]
