import os
import random
import sys
from collections import defaultdict

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from game import settings
from game.civilizations import (
    CIVILIZATIONS,
    get_civilization,
    initialize_civilizations,
    pick_start,
    start_order,
)
from game.units import UnitType
from world.hex import TerrainType, Tile, hex_distance
from world.settings import WorldSettings
from world.world import generate_map


@pytest.fixture(scope="module")
def world_tiles():
    return generate_map(WorldSettings(seed=42)).tiles


def test_seven_civilizations():
    assert len(CIVILIZATIONS) == 7
    for name, civ in CIVILIZATIONS.items():
        assert civ.name == name
        assert "agriculture" in civ.starting_techs


def test_unknown_civilization_rejected():
    with pytest.raises(ValueError):
        get_civilization("Atlantis")
    with pytest.raises(ValueError):
        initialize_civilizations([], "Atlantis")


def test_chosen_civ_starts_first():
    order = start_order("Inca")
    assert order[0] == "Inca"
    assert sorted(order) == sorted(CIVILIZATIONS)


def test_every_civ_gets_distinct_start(world_tiles):
    tiles, units = initialize_civilizations(world_tiles, "Rome", rng=random.Random(1))

    assert len(units) == 2 * len(CIVILIZATIONS)
    by_tile = defaultdict(list)
    for unit in units:
        by_tile[unit.tile_id].append(unit)
    assert len(by_tile) == len(CIVILIZATIONS)

    tiles_by_id = {t.id: t for t in tiles}
    for tile_id, pair in by_tile.items():
        types = sorted(u.type.value for u in pair)
        assert types[0] == "settler"
        assert types[1] in ("spearman", "warrior")
        assert pair[0].owner == pair[1].owner
        tile = tiles_by_id[tile_id]
        assert tile.owner == pair[0].owner
        assert tile.terrain.value in settings.START_TERRAINS
        assert tile.population > 0
        assert not tile.is_natural_wonder


def test_player_owner_and_escorts(world_tiles):
    _, units = initialize_civilizations(world_tiles, "China", rng=random.Random(2))
    owners = {u.owner for u in units}
    assert settings.PLAYER_ID in owners
    assert "China" not in owners

    player = [u for u in units if u.owner == settings.PLAYER_ID]
    assert {u.type for u in player} == {UnitType.SETTLER, UnitType.SPEARMAN}
    scots = [u for u in units if u.owner == "Scotland"]
    assert {u.type for u in scots} == {UnitType.SETTLER, UnitType.SPEARMAN}
    romans = [u for u in units if u.owner == "Rome"]
    assert {u.type for u in romans} == {UnitType.SETTLER, UnitType.WARRIOR}


def test_unit_ids_name_the_civilization(world_tiles):
    _, units = initialize_civilizations(world_tiles, "Rome", rng=random.Random(3))
    ids = {u.id for u in units}
    assert "u_Rome_settler" in ids
    assert "u_Rome_warrior" in ids
    assert len(ids) == len(units)


def test_input_tiles_untouched(world_tiles):
    before = [t.owner for t in world_tiles]
    tiles, _ = initialize_civilizations(world_tiles, "Africa", rng=random.Random(4))
    assert [t.owner for t in world_tiles] == before
    assert all(owner is None for owner in before)
    assert sum(1 for t in tiles if t.owner) == len(CIVILIZATIONS)


def test_same_rng_same_starts(world_tiles):
    _, a = initialize_civilizations(world_tiles, "Rome", rng=random.Random(9))
    _, b = initialize_civilizations(world_tiles, "Rome", rng=random.Random(9))
    assert [(u.id, u.tile_id) for u in a] == [(u.id, u.tile_id) for u in b]


def test_no_eligible_tiles_means_no_units():
    tiles = [Tile(q=i, r=0, terrain=TerrainType.OCEAN) for i in range(5)]
    new_tiles, units = initialize_civilizations(tiles, "Rome", rng=random.Random(0))
    assert units == []
    assert new_tiles == tiles


def test_unpopulated_tiles_are_not_starts():
    tiles = [Tile(q=i, r=0, terrain=TerrainType.PLAINS, population=0) for i in range(5)]
    _, units = initialize_civilizations(tiles, "Rome", rng=random.Random(0))
    assert units == []


def test_fewer_tiles_than_civs():
    tiles = [Tile(q=i * 20, r=0, terrain=TerrainType.PLAINS, population=1) for i in range(3)]
    new_tiles, units = initialize_civilizations(tiles, "Rome", rng=random.Random(0))
    assert len(units) == 6
    assert len({u.tile_id for u in units}) == 3
    assert {t.owner for t in new_tiles} == {settings.PLAYER_ID, "Africa", "Polynesia"}


def test_pick_start_prefers_distant_tile():
    claimed = [Tile(q=0, r=0)]
    far = Tile(q=20, r=0)
    assert pick_start([far], claimed, random.Random(0)) is far


def test_pick_start_falls_back_to_furthest_draw():
    claimed = [Tile(q=0, r=0)]
    near = Tile(q=2, r=0)
    nearer = Tile(q=1, r=0)
    chosen = pick_start([near, nearer], claimed, random.Random(0))
    # 25 draws over two candidates hit both with overwhelming odds
    assert chosen is near
    assert hex_distance(chosen.coord, (0, 0)) == 2


def test_pick_start_without_candidates():
    assert pick_start([], [], random.Random(0)) is None
