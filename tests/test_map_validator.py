import pytest

from mapgen.generation.cells import CORRIDOR, ROOM
from mapgen.generation.validator import MapValidator, ValidationResult
from tests.map_test_utils import build_map


def _line(kinds):
    cells = [(i, 0, k) for i, k in enumerate(kinds)]
    edges = [((i, 0), (i + 1, 0)) for i in range(len(kinds) - 1)]
    return build_map(cells, edges)


def test_valid_line_passes_every_check():
    hexagons = _line([CORRIDOR, CORRIDOR, CORRIDOR, ROOM])
    res = MapValidator().validate_map(hexagons.values(), 0.75)
    assert res.is_valid
    assert res.errors == []
    assert res.to_dict()["isValid"] is True


def test_single_and_empty_maps_are_connected():
    v = MapValidator()
    assert v.connectivity([])
    assert v.connectivity(list(_line([CORRIDOR]).values()))


def test_disconnected_map_fails_connectivity(sink):
    hexagons = _line([CORRIDOR, CORRIDOR, CORRIDOR])
    a, b = hexagons["hex_1_0"], hexagons["hex_2_0"]
    a.remove_connection(b.id)
    b.remove_connection(a.id)
    res = MapValidator(sink).validate_map(hexagons.values(), 1.0)
    assert not res.is_connected
    assert res.has_bidirectional_connections
    assert not res.is_valid
    assert "connectivity_failed" in sink.events("error")
    assert "validation_failed" in sink.events("warn")


def test_one_way_connection_fails_bidirectional():
    hexagons = _line([CORRIDOR, CORRIDOR])
    hexagons["hex_1_0"].remove_connection("hex_0_0")
    errors = []
    assert not MapValidator().bidirectional_connections(list(hexagons.values()), errors)
    assert "not bidirectional" in errors[0]


def test_dangling_connection_fails_bidirectional():
    hexagons = _line([CORRIDOR, CORRIDOR])
    hexagons["hex_1_0"].add_connection("hex_2_0")
    errors = []
    assert not MapValidator().bidirectional_connections(list(hexagons.values()), errors)
    assert "missing hexagon" in errors[0]


def test_non_adjacent_connection_fails():
    hexagons = build_map([(0, 0, CORRIDOR), (2, 0, CORRIDOR)], [((0, 0), (2, 0))])
    res = MapValidator().validate_map(hexagons.values(), 1.0)
    assert res.is_connected
    assert res.has_bidirectional_connections
    assert not res.has_valid_adjacent_connections


def test_malformed_connection_id_fails_adjacency():
    hexagons = _line([CORRIDOR, CORRIDOR])
    hexagons["hex_0_0"].connections.append("not-a-hex")
    assert not MapValidator().adjacent_connections(list(hexagons.values()))


@pytest.mark.parametrize(
    "kinds,expected,ok",
    [
        ([CORRIDOR] * 7 + [ROOM] * 3, 0.7, True),
        ([CORRIDOR] * 8 + [ROOM] * 2, 0.7, True),
        ([CORRIDOR] * 5 + [ROOM] * 5, 0.7, False),
        ([CORRIDOR] * 10, 0.7, False),
    ],
)
def test_ratio_check(kinds, expected, ok):
    hexagons = _line(kinds)
    assert MapValidator().corridor_room_ratio(list(hexagons.values()), expected, 0.15) is ok


def test_result_defaults_are_invalid():
    res = ValidationResult()
    assert not res.is_valid
    assert set(res.to_dict()) == {
        "isValid",
        "isConnected",
        "hasBidirectionalConnections",
        "hasValidAdjacentConnections",
        "hasValidRatio",
        "errors",
    }
