from typing import Dict, List, Optional

from .hexgrid import HexCoordinate

CORRIDOR = "corridor"
ROOM = "room"
HEX_TYPES = (CORRIDOR, ROOM)


class Hexagon:
    """A placed map cell. Identity, coordinate and type never change; only connections do."""
    __slots__ = ("id", "q", "r", "hex_type", "connections")

    def __init__(self, coordinate: HexCoordinate, hex_type: str):
        if hex_type not in HEX_TYPES:
            raise ValueError(f"Unknown hexagon type: {hex_type!r}")
        self.id = coordinate.to_id()
        self.q = coordinate.q
        self.r = coordinate.r
        self.hex_type = hex_type
        self.connections: List[str] = []

    @property
    def coordinate(self) -> HexCoordinate:
        return HexCoordinate(self.q, self.r)

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def add_connection(self, hex_id: str, position: Optional[int] = None) -> None:
        if hex_id in self.connections:
            return
        if position is None:
            self.connections.append(hex_id)
        else:
            self.connections.insert(position, hex_id)

    def remove_connection(self, hex_id: str) -> None:
        if hex_id in self.connections:
            self.connections.remove(hex_id)

    def is_connected_to(self, hex_id: str) -> bool:
        return hex_id in self.connections

    def to_dict(self):
        return {
            "id": self.id,
            "q": self.q,
            "r": self.r,
            "type": self.hex_type,
            "connections": list(self.connections),
        }

    def __repr__(self):
        return f"Hexagon({self.id}, {self.hex_type}, connections={len(self.connections)})"


HexMap = Dict[str, Hexagon]
