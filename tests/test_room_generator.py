import pytest

from mapgen.generation.cells import CORRIDOR, Hexagon
from mapgen.generation.config import GenerationOptions, GrowthPolicy
from mapgen.generation.hexgrid import ORIGIN, HexCoordinate
from mapgen.generation.rooms import RoomGenerator, room_centroid
from mapgen.generation.seed import SeedManager


def _map_of(coords):
    hexagons = {}
    for c in coords:
        h = Hexagon(c, CORRIDOR)
        hexagons[h.id] = h
    return hexagons


def _gen(seed, logger=None):
    return RoomGenerator(SeedManager(seed), GenerationOptions(), logger=logger)


@pytest.mark.parametrize("seed", ["r1", "r2", "r3", "room-seed", "test123"])
@pytest.mark.parametrize("target", [1, 4, 8, 12])
def test_room_shape(seed, target):
    hexagons = _map_of([ORIGIN])
    frontier = {nb: None for nb in ORIGIN.neighbors()}
    room = _gen(seed).generate_room(frontier, hexagons, target)

    assert 1 <= len(room) <= target
    assert len(set(room)) == len(room)
    assert all(c.to_id() not in hexagons for c in room)
    assert room[0] in frontier
    for i, cell in enumerate(room[1:], start=1):
        assert any(cell.distance_to(prev) == 1 for prev in room[:i])


@pytest.mark.parametrize("target", [0, -1])
def test_non_positive_target_is_empty(target):
    hexagons = _map_of([ORIGIN])
    frontier = {nb: None for nb in ORIGIN.neighbors()}
    assert _gen("empty").generate_room(frontier, hexagons, target) == []


def test_no_valid_start_returns_empty_and_warns(sink):
    hexagons = _map_of([ORIGIN])
    frontier = {HexCoordinate(9, -9): None}
    assert _gen("nowhere", logger=sink).generate_room(frontier, hexagons, 5) == []
    assert "no_valid_start" in sink.events("warn")


# (0,0) is wedged between four occupied cells; (2,0) touches only one of them.
CROWDED = HexCoordinate(0, 0)
OPEN = HexCoordinate(2, 0)
WALLS = [HexCoordinate(1, 0), HexCoordinate(1, -1), HexCoordinate(0, -1), HexCoordinate(-1, 0)]


@pytest.mark.parametrize("seed", ["p1", "p2", "p3", "p4", "p5"])
def test_start_prefers_sparse_frontier_cells(seed):
    hexagons = _map_of(WALLS)
    frontier = {CROWDED: None, OPEN: None}
    room = _gen(seed).generate_room(frontier, hexagons, 3)
    assert room[0] == OPEN


def test_start_relaxes_when_every_cell_is_crowded():
    hexagons = _map_of(WALLS)
    room = _gen("relaxed").generate_room({CROWDED: None}, hexagons, 3)
    assert room[0] == CROWDED


def test_growth_candidates_exclude_dense_cells():
    hexagons = _map_of(WALLS)
    gen = _gen("cands")
    cands = gen.growth_candidates(CROWDED, hexagons, {CROWDED})
    for c in cands:
        assert c.to_id() not in hexagons
        assert sum(1 for nb in c.neighbors() if nb.to_id() in hexagons) <= 2


def test_room_centroid():
    assert room_centroid([HexCoordinate(0, 0), HexCoordinate(1, 0), HexCoordinate(2, 0)]) == HexCoordinate(1, 0)
    # truncates toward zero
    assert room_centroid([HexCoordinate(-1, 0), HexCoordinate(0, 0)]) == HexCoordinate(0, 0)
    assert room_centroid([]) == HexCoordinate(0, 0)


@pytest.mark.parametrize("seed", ["jit-1", "jit-2", "jit-3", "jit-4"])
def test_jittered_selection_never_repeats_a_candidate(seed):
    gen = RoomGenerator(SeedManager(seed), GenerationOptions(), GrowthPolicy(selection_jitter_probability=1.0))
    room = [ORIGIN]
    candidates = list(ORIGIN.neighbors())
    picked = gen._select_positions(candidates, len(candidates), room, set(room))
    assert len(picked) == len(candidates)
    assert set(picked) == set(candidates)
