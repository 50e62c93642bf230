import copy
import os
import random
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from game import turn
from game.improvements import IMPROVEMENTS, DistrictType, Gathering
from game.models import new_game_state
from game.turn import city_gold, gathering_amount, process_turn
from game.units import UnitType, spawn_unit
from game.weather import WeatherType
from world.hex import TerrainType, Tile
from world.resource_types import ResourceType
from world.settings import WorldSettings
from world.world import generate_map

R = ResourceType
W = WeatherType


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def _tile(q=0, improvement=None, owner="player", **kwargs):
    imp = IMPROVEMENTS[improvement] if improvement else None
    return Tile(q=q, r=0, owner=owner, improvement=imp, **kwargs)


def _state(*tiles, inventory=None, units=()):
    state = new_game_state(list(tiles), list(units))
    if inventory:
        state.inventory.update(inventory)
    return state


@pytest.fixture
def fixed_weather(monkeypatch):
    """Pin the weather the next turn rolls to."""

    def pin(weather):
        monkeypatch.setattr(turn, "next_weather", lambda current, rng: weather)

    pin(W.CLEAR)
    return pin


# --- Gathering -----------------------------------------------------------------

def test_farm_yield_scales_with_population(fixed_weather):
    state = _state(_tile(improvement="farm", population=5))
    assert process_turn(state).inventory[R.GRAIN] == 3

    state = _state(_tile(improvement="farm", population=10))
    assert process_turn(state).inventory[R.GRAIN] == 4


@pytest.mark.parametrize("weather, expected", [(W.CLEAR, 3), (W.RAIN, 4), (W.STORM, 1), (W.SNOW, 3)])
def test_farm_weather(fixed_weather, weather, expected):
    fixed_weather(weather)
    state = _state(_tile(improvement="farm", population=5))
    assert process_turn(state).inventory[R.GRAIN] == expected


@pytest.mark.parametrize("weather, expected", [(W.CLEAR, 2), (W.RAIN, 3), (W.STORM, 1)])
def test_plantation_bonus_after_weather(fixed_weather, weather, expected):
    fixed_weather(weather)
    state = _state(_tile(improvement="plantation"))
    assert process_turn(state).inventory[R.COTTON] == expected


def test_natural_wonder_gather_bonus(fixed_weather):
    state = _state(_tile(improvement="farm", is_natural_wonder=True, wonder_name="Fields of Elysium"))
    assert process_turn(state).inventory[R.GRAIN] == 4


def test_snow_reduces_wood_only():
    woodcutter = Gathering("woodcutter", "Woodcutter", 10, output=(R.WOOD,), rate=2)
    tile = Tile(q=0, r=0)
    assert gathering_amount(woodcutter, R.WOOD, tile, W.SNOW) == 1
    assert gathering_amount(woodcutter, R.WOOD, tile, W.CLEAR) == 2
    mill = IMPROVEMENTS["lumber_mill"]
    assert gathering_amount(mill, R.LUMBER, tile, W.SNOW) == 2


def test_only_player_tiles_produce(fixed_weather):
    state = _state(_tile(improvement="farm", owner="Rome", population=5), _tile(q=1, improvement="library", owner=None))
    result = process_turn(state)
    assert result.inventory[R.GRAIN] == 0
    assert result.science == 0


# --- Passive and city yields ---------------------------------------------------

@pytest.mark.parametrize(
    "key, science, gold, resource, amount",
    [
        ("library", 3, 0, None, 0),
        ("trading_post", 0, 4, None, 0),
        ("altar", 0, 0, R.AMENITIES, 1),
        ("granary", 0, 0, R.FOOD, 1),
        ("stonehenge", 2, 2, None, 0),
        ("hanging_gardens", 0, 0, R.FOOD, 3),
    ],
)
def test_passive_yields(fixed_weather, key, science, gold, resource, amount):
    result = process_turn(_state(_tile(improvement=key)))
    assert result.science == science
    assert result.treasury == 500 + gold
    if resource is not None:
        assert result.inventory[resource] == amount


def test_city_base_yields(fixed_weather):
    state = _state(_tile(is_city=True, population=3))
    result = process_turn(state)

    assert result.inventory[R.GRAIN] == 2
    assert result.inventory[R.WOOD] == 1
    assert result.inventory[R.FOOD] == 2
    assert result.science == 4
    assert result.treasury == 500 + city_gold(3)
    assert city_gold(3) == 16
    assert "Treasury +16 gold." in result.logs
    assert "Research +4 science." in result.logs


def test_district_yields(fixed_weather):
    city = _tile(is_city=True, population=3, districts=[DistrictType.COMMERCIAL, DistrictType.INDUSTRIAL])
    result = process_turn(_state(city))
    assert result.treasury == 500 + 16 + 2
    assert result.inventory[R.TOOLS] == 1


def test_computer_cities_pay_the_player_nothing(fixed_weather):
    result = process_turn(_state(_tile(is_city=True, owner="Rome", population=3)))
    assert result.treasury == 500
    assert result.science == 0


# --- Growth --------------------------------------------------------------------

def test_ai_city_grows_on_low_roll(fixed_weather):
    state = _state(_tile(is_city=True, owner="Rome", population=1))
    assert process_turn(state, rng=FixedRandom(0.05)).tiles[0].population == 2
    assert process_turn(state, rng=FixedRandom(0.5)).tiles[0].population == 1


def test_ai_city_growth_capped_by_housing(fixed_weather):
    state = _state(_tile(is_city=True, owner="Rome", population=5))
    assert process_turn(state, rng=FixedRandom(0.05)).tiles[0].population == 5


def test_player_cities_do_not_grow(fixed_weather):
    state = _state(_tile(is_city=True, population=1))
    assert process_turn(state, rng=FixedRandom(0.0)).tiles[0].population == 1


# --- Manufacturing -------------------------------------------------------------

def test_manufacturing_needs_every_input(fixed_weather):
    result = process_turn(_state(_tile(improvement="bakery")))
    assert result.inventory[R.GRAIN] == 0
    assert result.inventory.get(R.BREAD, 0) == 0

    result = process_turn(_state(_tile(improvement="blacksmith"), inventory={R.METAL_INGOT: 1}))
    assert result.inventory[R.METAL_INGOT] == 1
    assert result.inventory.get(R.METAL_TOOL, 0) == 0


def test_manufacturing_consumes_and_produces(fixed_weather):
    result = process_turn(_state(_tile(improvement="bakery"), inventory={R.GRAIN: 1}))
    assert result.inventory[R.GRAIN] == 0
    assert result.inventory[R.BREAD] == 2


def test_storm_halves_manufacturing(fixed_weather):
    fixed_weather(W.STORM)
    result = process_turn(_state(_tile(improvement="bakery"), inventory={R.GRAIN: 1}))
    assert result.inventory[R.BREAD] == 1


def test_same_turn_harvest_feeds_workshop(fixed_weather):
    state = _state(_tile(improvement="farm"), _tile(q=1, improvement="bakery"))
    result = process_turn(state)
    assert result.inventory[R.GRAIN] == 1
    assert result.inventory[R.BREAD] == 2


def test_workshop_without_inputs(fixed_weather):
    result = process_turn(_state(_tile(improvement="workshop")))
    assert result.inventory[R.TOOLS] == 1


def test_wonder_with_inputs_manufactures(fixed_weather):
    result = process_turn(_state(_tile(improvement="great_library"), inventory={R.WOOD: 1}))
    assert result.inventory[R.WOOD] == 0
    assert result.inventory[R.PAPER] == 2
    assert result.science == 5

    result = process_turn(_state(_tile(improvement="great_library")))
    assert result.inventory.get(R.PAPER, 0) == 0
    assert result.science == 5


# --- Whole turn ----------------------------------------------------------------

def test_moves_are_restored(fixed_weather):
    unit = spawn_unit("u1", UnitType.WARRIOR, "0,0", "player")
    unit.moves = 0
    result = process_turn(_state(_tile(), units=[unit]))
    assert result.units[0].moves == 2
    assert unit.moves == 0


def test_input_state_is_not_modified():
    tiles = generate_map(WorldSettings(radius=6), seed=5).tiles
    tiles[0] = tiles[0].evolve(owner="player", improvement=IMPROVEMENTS["farm"])
    settler = spawn_unit("ai_settler", UnitType.SETTLER, tiles[10].id, "Rome")
    state = _state(*tiles, units=[settler])
    snapshot = copy.deepcopy(state)

    process_turn(state, rng=random.Random(1))
    assert state == snapshot


def test_report_is_newest_first():
    state = _state(_tile())
    result = process_turn(state, rng=random.Random(0))
    assert result.logs[0] == "Turn 2 Report:"
    assert result.logs[-1] == "New Game Started. Choose your Civilization."
    assert result.turn == 2


def test_weather_change_is_reported(fixed_weather):
    fixed_weather(W.RAIN)
    result = process_turn(_state(_tile()))
    assert result.weather is W.RAIN
    assert "Weather changed from CLEAR to RAIN." in result.logs


def test_ten_turns():
    tiles = generate_map(WorldSettings(radius=6), seed=1).tiles
    state = _state(*tiles)
    rng = random.Random(3)
    for _ in range(10):
        state = process_turn(state, rng=rng)
        assert state.weather in WeatherType
        assert not state.processing_turn
    assert state.turn == 11
