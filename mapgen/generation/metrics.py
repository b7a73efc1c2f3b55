from __future__ import annotations
from typing import Dict, List

from .cells import CORRIDOR, ROOM, HexMap
from .connectivity import max_depth
from .manifest import BoundingBox, Statistics
from .seed import SeedManager


def init_metrics() -> Dict[str, int | float]:
    return {
        'corridor_segments': 0,
        'room_clusters': 0,
        'empty_segments': 0,
        'connections_removed': 0,
        'corridors_processed': 0,
        'frontier_exhausted': 0,
        'runtime_ms': 0,
    }


def bounding_box(hexagons: HexMap) -> BoundingBox:
    if not hexagons:
        return BoundingBox()
    qs = [h.q for h in hexagons.values()]
    rs = [h.r for h in hexagons.values()]
    return BoundingBox(min(qs), max(qs), min(rs), max(rs))


def longest_path(hexagons: HexMap, seeds: SeedManager) -> int:
    """Approximate longest path: max BFS depth from one randomly drawn hexagon.

    This is not the graph diameter; it deliberately consumes exactly one draw.
    """
    if not hexagons:
        return 0
    ids: List[str] = list(hexagons)
    return max_depth(hexagons, ids[seeds.next_int(len(ids))])


def compute_statistics(hexagons: HexMap, seeds: SeedManager) -> Statistics:
    values = list(hexagons.values())
    degrees = [h.connection_count for h in values]
    avg = round(sum(degrees) / len(degrees), 2) if degrees else 0.0
    return Statistics(
        actual_count=len(values),
        corridor_count=sum(1 for h in values if h.hex_type == CORRIDOR),
        room_count=sum(1 for h in values if h.hex_type == ROOM),
        average_connections=avg,
        max_connections=max(degrees) if degrees else 0,
        longest_path=longest_path(hexagons, seeds),
        bounding_box=bounding_box(hexagons),
    )
