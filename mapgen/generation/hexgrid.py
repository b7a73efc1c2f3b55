"""Axial hex coordinates for a flat-top grid.

The third cube component is derived (s = -q - r) so q + r + s == 0 always holds.
"""
from __future__ import annotations
import re
from typing import List, NamedTuple

# Flat-top neighbor offsets; order is part of generation determinism.
DIRECTIONS = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))

_ID_RE = re.compile(r"hex_(-?\d+)_(-?\d+)")


class HexCoordinate(NamedTuple):
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def neighbors(self) -> List["HexCoordinate"]:
        return [HexCoordinate(self.q + dq, self.r + dr) for dq, dr in DIRECTIONS]

    def neighbor(self, direction: int) -> "HexCoordinate":
        if direction < 0 or direction >= len(DIRECTIONS):
            raise ValueError("Direction must be between 0 and 5")
        dq, dr = DIRECTIONS[direction]
        return HexCoordinate(self.q + dq, self.r + dr)

    def distance_to(self, other: "HexCoordinate") -> int:
        dq = self.q - other.q
        dr = self.r - other.r
        return (abs(dq) + abs(dq + dr) + abs(dr)) // 2

    def direction_to(self, other: "HexCoordinate") -> "HexCoordinate":
        """Difference vector from this coordinate to `other`."""
        return HexCoordinate(other.q - self.q, other.r - self.r)

    def to_id(self) -> str:
        return f"hex_{self.q}_{self.r}"

    @classmethod
    def from_id(cls, hex_id: str) -> "HexCoordinate":
        m = _ID_RE.fullmatch(hex_id or "")
        if not m:
            raise ValueError(f"Malformed hexagon id: {hex_id!r}")
        return cls(int(m.group(1)), int(m.group(2)))


ORIGIN = HexCoordinate(0, 0)


def count_occupied(coord: HexCoordinate, occupied, extra=()) -> int:
    """Number of neighbors of `coord` present in `occupied` (ids) or `extra` (coords)."""
    n = 0
    for nb in coord.neighbors():
        if nb.to_id() in occupied or nb in extra:
            n += 1
    return n


def has_occupied_neighbor(coord: HexCoordinate, occupied) -> bool:
    return any(nb.to_id() in occupied for nb in coord.neighbors())


__all__ = ["DIRECTIONS", "HexCoordinate", "ORIGIN", "count_occupied", "has_occupied_neighbor"]
