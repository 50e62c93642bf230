import dataclasses
import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from game.improvements import (
    DISTRICTS,
    IMPROVEMENTS,
    Civic,
    DistrictType,
    Gathering,
    Infrastructure,
    Manufacturing,
    Passive,
    Wonder,
    get_improvement,
)
from game.technology import TECHS, Era, available_techs, can_research, get_tech
from game.units import UNIT_DEFINITIONS, MovementClass, UnitType
from world.hex import TerrainType
from world.resource_types import ResourceType


# --- Technology -----------------------------------------------------------------

def test_every_prerequisite_exists():
    for tech in TECHS.values():
        for prereq in tech.prerequisites:
            assert prereq in TECHS, f"{tech.id} needs unknown {prereq}"


def test_tree_is_reachable_from_agriculture():
    known = {"agriculture"}
    while True:
        nxt = {t.id for t in available_techs(known)}
        if not nxt:
            break
        known |= nxt
    assert known == set(TECHS)


def test_can_research():
    assert can_research("mining", ["agriculture"])
    assert not can_research("mathematics", ["agriculture", "writing"])
    assert not can_research("agriculture", ["agriculture"])
    with pytest.raises(KeyError):
        can_research("warp_drive", [])


def test_tech_lookup():
    assert get_tech("agriculture").cost == 0
    assert get_tech("mining").era is Era.DAWN
    with pytest.raises(KeyError):
        get_tech("time_travel")


def test_ten_eras():
    eras = list(Era)
    assert len(eras) == 10
    assert eras[0].value == "Act I: The Dawn"


# --- Improvements -------------------------------------------------------------

@pytest.mark.parametrize(
    "key, cls",
    [
        ("road", Infrastructure),
        ("farm", Gathering),
        ("bakery", Manufacturing),
        ("library", Passive),
        ("dwelling", Civic),
        ("stonehenge", Wonder),
    ],
)
def test_improvement_kinds(key, cls):
    imp = get_improvement(key)
    assert isinstance(imp, cls)
    assert imp.key == key


def test_registries_are_read_only():
    with pytest.raises(TypeError):
        IMPROVEMENTS["farm"] = IMPROVEMENTS["mine"]
    with pytest.raises(TypeError):
        TECHS["mining"] = TECHS["pottery"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        IMPROVEMENTS["farm"].cost = 0


def test_terrain_restrictions():
    farm = IMPROVEMENTS["farm"]
    assert farm.allowed_on(TerrainType.PLAINS)
    assert not farm.allowed_on(TerrainType.DESERT)
    assert IMPROVEMENTS["library"].allowed_on(TerrainType.TUNDRA)


def test_every_tech_requirement_is_known():
    for imp in IMPROVEMENTS.values():
        if imp.tech_required:
            assert imp.tech_required in TECHS, imp.key
    for district in DISTRICTS.values():
        assert district.tech_required in TECHS
    for definition in UNIT_DEFINITIONS.values():
        if definition.tech_required:
            assert definition.tech_required in TECHS


def test_manufacturing_recipes():
    smelter = IMPROVEMENTS["smelter"]
    assert smelter.inputs == (ResourceType.ORE,)
    assert smelter.outputs == (ResourceType.METAL_INGOT,)
    assert smelter.build_cost == {ResourceType.WOOD: 5}
    assert IMPROVEMENTS["workshop"].inputs == ()


def test_yields_only_on_kinds_that_have_them():
    assert not IMPROVEMENTS["farm"].per_turn()
    assert IMPROVEMENTS["library"].per_turn().science == 3
    assert IMPROVEMENTS["granary"].housing_provided() == 2
    assert IMPROVEMENTS["road"].housing_provided() == 0


def test_districts():
    assert set(DISTRICTS) == set(DistrictType)
    assert DISTRICTS[DistrictType.COMMERCIAL].yields.gold == 2
    assert DISTRICTS[DistrictType.RESIDENTIAL].cost == 100


# --- Units --------------------------------------------------------------------

def test_unit_definitions():
    assert set(UNIT_DEFINITIONS) == set(UnitType)
    assert UNIT_DEFINITIONS[UnitType.SETTLER].moves == 2
    assert UNIT_DEFINITIONS[UnitType.TRIREME].movement is MovementClass.WATER
    assert UNIT_DEFINITIONS[UnitType.WARRIOR].movement is MovementClass.LAND
