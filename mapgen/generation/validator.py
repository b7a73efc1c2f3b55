"""Structural checks over a finished hexagon collection.

Every check is pure: it reads the hexagons, reports, and never repairs.

Checks:
1. connectivity: BFS from the first hexagon reaches every hexagon.
2. bidirectional_connections: every connection id exists and links back.
3. adjacent_connections: every connection joins coordinates at distance 1.
4. corridor_room_ratio: corridor fraction within tolerance of the expected ratio.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .cells import CORRIDOR, Hexagon
from .connectivity import reachable_ids
from .hexgrid import HexCoordinate


def _index(hexagons: Iterable[Hexagon]) -> Dict[str, Hexagon]:
    return {h.id: h for h in hexagons}


@dataclass
class ValidationResult:
    is_connected: bool = False
    has_bidirectional_connections: bool = False
    has_valid_adjacent_connections: bool = False
    has_valid_ratio: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return (
            self.is_connected
            and self.has_bidirectional_connections
            and self.has_valid_adjacent_connections
            and self.has_valid_ratio
        )

    def to_dict(self):
        return {
            "isValid": self.is_valid,
            "isConnected": self.is_connected,
            "hasBidirectionalConnections": self.has_bidirectional_connections,
            "hasValidAdjacentConnections": self.has_valid_adjacent_connections,
            "hasValidRatio": self.has_valid_ratio,
            "errors": list(self.errors),
        }


class MapValidator:
    def __init__(self, logger=None):
        self.logger = logger

    def connectivity(self, hexagons: List[Hexagon], errors: List[str] = None) -> bool:
        if len(hexagons) <= 1:
            return True
        index = _index(hexagons)
        reached = reachable_ids(index, hexagons[0].id)
        unreachable = [h.id for h in hexagons if h.id not in reached]
        if unreachable:
            msg = f"{len(hexagons) - len(unreachable)} of {len(hexagons)} hexagons reachable"
            if errors is not None:
                errors.append(msg)
            if self.logger:
                self.logger.error(event="connectivity_failed", detail=msg, unreachable=",".join(unreachable[:10]))
            return False
        return True

    def bidirectional_connections(self, hexagons: List[Hexagon], errors: List[str] = None) -> bool:
        index = _index(hexagons)
        for h in hexagons:
            for cid in h.connections:
                other = index.get(cid)
                if other is None:
                    return self._fail(errors, f"{h.id} references missing hexagon {cid}")
                if h.id not in other.connections:
                    return self._fail(errors, f"connection {h.id} -> {cid} is not bidirectional")
        return True

    def adjacent_connections(self, hexagons: List[Hexagon], errors: List[str] = None) -> bool:
        for h in hexagons:
            center = h.coordinate
            for cid in h.connections:
                try:
                    target = HexCoordinate.from_id(cid)
                except ValueError:
                    return self._fail(errors, f"{h.id} has malformed connection id {cid}")
                if center.distance_to(target) != 1:
                    return self._fail(errors, f"{h.id} has non-adjacent connection to {cid}")
        return True

    def corridor_room_ratio(self, hexagons: List[Hexagon], expected: float, tolerance: float,
                            errors: List[str] = None) -> bool:
        if not hexagons:
            return True
        corridors = sum(1 for h in hexagons if h.hex_type == CORRIDOR)
        actual = corridors / len(hexagons)
        if abs(actual - expected) > tolerance:
            return self._fail(errors, f"corridor ratio {actual:.3f} outside {expected}+/-{tolerance}")
        return True

    def validate_map(self, hexagons: List[Hexagon], expected_ratio: float, tolerance: float = 0.15) -> ValidationResult:
        hexagons = list(hexagons)
        res = ValidationResult()
        res.is_connected = self.connectivity(hexagons, res.errors)
        res.has_bidirectional_connections = self.bidirectional_connections(hexagons, res.errors)
        res.has_valid_adjacent_connections = self.adjacent_connections(hexagons, res.errors)
        res.has_valid_ratio = self.corridor_room_ratio(hexagons, expected_ratio, tolerance, res.errors)
        if self.logger:
            if res.is_valid:
                self.logger.info(event="validation_passed", hexagons=len(hexagons))
            else:
                self.logger.warn(event="validation_failed", errors=len(res.errors))
        return res

    def _fail(self, errors, msg: str) -> bool:
        if errors is not None:
            errors.append(msg)
        if self.logger:
            self.logger.error(event="validation_error", detail=msg)
        return False
