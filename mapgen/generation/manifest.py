"""Generation result containers and their wire representation.

Keys are camelCase on the wire; the `hex_{q}_{r}` id format is a stable
contract for consumers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .hexgrid import HexCoordinate

# Wall-clock / build fields left out of determinism comparisons.
VOLATILE_METADATA_KEYS = ("generationTimeMs", "generatedAt", "version")


@dataclass(frozen=True)
class BoundingBox:
    min_q: int = 0
    max_q: int = 0
    min_r: int = 0
    max_r: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"minQ": self.min_q, "maxQ": self.max_q, "minR": self.min_r, "maxR": self.max_r}


@dataclass(frozen=True)
class Statistics:
    actual_count: int
    corridor_count: int
    room_count: int
    average_connections: float
    max_connections: int
    longest_path: int
    bounding_box: BoundingBox

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actualCount": self.actual_count,
            "corridorCount": self.corridor_count,
            "roomCount": self.room_count,
            "averageConnections": self.average_connections,
            "maxConnections": self.max_connections,
            "longestPath": self.longest_path,
            "boundingBox": self.bounding_box.to_dict(),
        }


@dataclass(frozen=True)
class Metadata:
    seed: str
    requested_count: int
    generation_time_ms: int
    statistics: Statistics
    generated_at: str = ""
    version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "requestedCount": self.requested_count,
            "generationTimeMs": self.generation_time_ms,
            "generatedAt": self.generated_at,
            "version": self.version,
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class HexagonRecord:
    """Immutable snapshot of a hexagon as it leaves the generator."""
    id: str
    q: int
    r: int
    type: str
    connections: Tuple[str, ...]

    # Same read surface as Hexagon so validators accept either.
    @property
    def hex_type(self) -> str:
        return self.type

    @property
    def coordinate(self) -> HexCoordinate:
        return HexCoordinate(self.q, self.r)

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "q": self.q, "r": self.r, "type": self.type, "connections": list(self.connections)}


@dataclass(frozen=True)
class Manifest:
    metadata: Metadata
    hexagons: Tuple[HexagonRecord, ...]

    @classmethod
    def build(cls, metadata: Metadata, hexagons) -> "Manifest":
        records = tuple(
            HexagonRecord(h.id, h.q, h.r, h.hex_type, tuple(h.connections)) for h in hexagons
        )
        return cls(metadata=metadata, hexagons=records)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "hexagons": [h.to_dict() for h in self.hexagons],
        }

    def deterministic_dict(self) -> Dict[str, Any]:
        data = self.to_dict()
        for key in VOLATILE_METADATA_KEYS:
            data["metadata"].pop(key, None)
        return data

    @property
    def hexagon_ids(self) -> List[str]:
        return [h.id for h in self.hexagons]


__all__ = ["BoundingBox", "Statistics", "Metadata", "HexagonRecord", "Manifest", "VOLATILE_METADATA_KEYS"]
