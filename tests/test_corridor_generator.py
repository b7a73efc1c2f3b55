import pytest

from mapgen.generation.cells import CORRIDOR, Hexagon
from mapgen.generation.config import GenerationOptions, GrowthPolicy
from mapgen.generation.corridors import CorridorGenerator, is_similar_direction
from mapgen.generation.hexgrid import ORIGIN, HexCoordinate
from mapgen.generation.seed import SeedManager


def _origin_map():
    h = Hexagon(ORIGIN, CORRIDOR)
    return {h.id: h}, {nb: None for nb in ORIGIN.neighbors()}


def _gen(seed, widths=(1, 2), logger=None):
    return CorridorGenerator(SeedManager(seed), GenerationOptions(corridor_widths=widths), logger=logger)


@pytest.mark.parametrize("seed", ["c1", "c2", "c3", "test123", "corridor-test-seed"])
@pytest.mark.parametrize("max_length", [1, 3, 8])
def test_corridor_shape(seed, max_length):
    hexagons, frontier = _origin_map()
    path = _gen(seed).generate_corridor(frontier, hexagons, max_length)

    assert 1 <= len(path) <= max_length
    assert len(set(path)) == len(path)
    assert all(c.to_id() not in hexagons for c in path)
    assert path[0] in frontier
    # every later cell grows from something already laid down
    for i, cell in enumerate(path[1:], start=1):
        assert any(cell.distance_to(prev) == 1 for prev in path[:i])


def test_max_length_one_gives_single_frontier_cell():
    hexagons, frontier = _origin_map()
    path = _gen("single").generate_corridor(frontier, hexagons, 1)
    assert len(path) == 1 and path[0] in frontier


@pytest.mark.parametrize("max_length", [0, -3])
def test_non_positive_length_is_empty(max_length):
    hexagons, frontier = _origin_map()
    assert _gen("zero").generate_corridor(frontier, hexagons, max_length) == []


def test_no_valid_start_returns_empty_and_warns(sink):
    hexagons, _ = _origin_map()
    frontier = {HexCoordinate(5, 5): None}
    assert _gen("lonely", logger=sink).generate_corridor(frontier, hexagons, 5) == []
    assert "no_valid_start" in sink.events("warn")


def test_same_seed_same_corridor():
    h1, f1 = _origin_map()
    h2, f2 = _origin_map()
    assert _gen("repeat").generate_corridor(f1, h1, 8) == _gen("repeat").generate_corridor(f2, h2, 8)


def test_thin_corridor_respects_density():
    # width 1: every walked cell saw at most two occupied-or-walked neighbours when chosen
    hexagons, frontier = _origin_map()
    gen = _gen("thin", widths=(1,))
    path = gen.generate_corridor(frontier, hexagons, 8)
    for i, cell in enumerate(path[1:], start=1):
        earlier = set(path[:i])
        touching = sum(1 for nb in cell.neighbors() if nb in earlier or nb.to_id() in hexagons)
        assert touching <= 2


def test_valid_extensions_skip_occupied_and_dense_cells():
    hexagons, _ = _origin_map()
    gen = _gen("ext")
    start = HexCoordinate(1, 0)
    visited = {start}
    ext = gen.valid_extensions(start, hexagons, visited)
    assert ORIGIN not in ext
    assert start not in ext
    for c in ext:
        assert c.distance_to(start) == 1


def test_similar_direction():
    assert is_similar_direction(HexCoordinate(1, 0), HexCoordinate(1, 0))
    assert is_similar_direction(HexCoordinate(1, 0), HexCoordinate(1, -1))
    assert not is_similar_direction(HexCoordinate(1, 0), HexCoordinate(-1, 0))


# Pocket around (0,0): its only open exits are (1,0) and (-1,0), on opposite
# sides, and every cell beyond either exit already touches three or more
# occupied-or-walked cells. Whichever exit the walk takes first is a dead end.
POCKET_START = HexCoordinate(0, 0)
POCKET_EXITS = {HexCoordinate(1, 0), HexCoordinate(-1, 0)}
POCKET_WALLS = [
    (0, -1), (2, -2), (1, -2), (-2, 2), (-1, 2), (0, 2), (3, -2),
    (3, 0), (3, -1), (1, 2), (-1, -2), (-2, -1), (-3, 0), (-3, 2),
]


def _pocket():
    hexagons = {}
    for q, r in POCKET_WALLS:
        h = Hexagon(HexCoordinate(q, r), CORRIDOR)
        hexagons[h.id] = h
    return hexagons


def _pocket_walk(seed, branch_probability):
    policy = GrowthPolicy(branch_probability=branch_probability)
    gen = CorridorGenerator(SeedManager(seed), GenerationOptions(corridor_widths=(1,)), policy)
    return gen.generate_corridor({POCKET_START: None}, _pocket(), 8)


@pytest.mark.parametrize("seed", ["branch-1", "branch-2", "branch-3"])
def test_dead_end_branches_from_an_earlier_cell(seed):
    path = _pocket_walk(seed, 1.0)
    assert len(path) == 3
    assert path[0] == POCKET_START
    assert set(path[1:]) == POCKET_EXITS
    # the branch cell grows off the start, not off the dead end before it
    assert path[2].distance_to(path[0]) == 1
    assert path[2].distance_to(path[1]) == 2


def test_dead_end_without_branch_stops():
    path = _pocket_walk("branch-1", 0.0)
    assert len(path) == 2
    assert path[1] in POCKET_EXITS


def test_pocket_exits_are_the_only_extensions():
    gen = _gen("pocket")
    assert set(gen.valid_extensions(POCKET_START, _pocket(), {POCKET_START})) == POCKET_EXITS
