"""Corridor decongestion pass.

Corridor hexagons pick up a connection to every occupied neighbour while the
map grows, which turns corridor runs into blobs. This pass walks corridors
with 3+ connections (busiest first) and removes their least "in-line"
connections one at a time, keeping a removal only when a full BFS shows the
map is still connected and no nearby corridor is left stuck above 3
connections. Target degree is 2; 3 survives only when every further removal
would split the map. Corridors still above 3 after the first pass get
revisited.
"""
from __future__ import annotations
import math
from typing import Dict, Iterable, List, Set, Tuple

from .cells import CORRIDOR, Hexagon, HexMap
from .config import DEFAULT_POLICY, GrowthPolicy
from .connectivity import is_connected, neighbour_groups
from .hexgrid import HexCoordinate
from .seed import SeedManager


def linearity(p1: HexCoordinate, center: HexCoordinate, p2: HexCoordinate) -> float:
    """Negated cosine of the angle p1-center-p2: 1.0 when opposite, 0.0 when perpendicular."""
    v1x, v1y = p1.q - center.q, p1.r - center.r
    v2x, v2y = p2.q - center.q, p2.r - center.r
    mag1 = math.hypot(v1x, v1y)
    mag2 = math.hypot(v2x, v2y)
    if mag1 == 0 or mag2 == 0:
        return 0.0
    cos_angle = (v1x * v2x + v1y * v2y) / (mag1 * mag2)
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return -cos_angle


def connection_importance(center: HexCoordinate, target: HexCoordinate, others: List[HexCoordinate],
                          seeds: SeedManager, policy: GrowthPolicy = DEFAULT_POLICY) -> float:
    best = 0.0
    for other in others:
        if other != target:
            best = max(best, linearity(target, center, other))
    importance = best * policy.linearity_weight
    importance += 1.0 / (center.distance_to(target) + 1.0)
    importance += seeds.next_double() * policy.pruning_jitter
    return importance


def _detach(a: Hexagon, b: Hexagon) -> Tuple[int, int]:
    ia = a.connections.index(b.id)
    ib = b.connections.index(a.id)
    a.remove_connection(b.id)
    b.remove_connection(a.id)
    return ia, ib


def _stranded(hexagons: HexMap, ids: Iterable[str], policy: GrowthPolicy) -> Set[str]:
    """Corridors among `ids` that are over the degree cap and can no longer be pruned under it."""
    out = set()
    for hid in ids:
        h = hexagons.get(hid)
        if h is None or h.hex_type != CORRIDOR or h.connection_count <= policy.pruning_max_degree:
            continue
        if neighbour_groups(hexagons, hid) > policy.pruning_max_degree:
            out.add(hid)
    return out


def reduce_corridor_connections(corridor: Hexagon, hexagons: HexMap, seeds: SeedManager,
                                policy: GrowthPolicy = DEFAULT_POLICY, logger=None) -> int:
    """Drop removable connections from one corridor; returns how many were removed.

    A removal is rolled back when it splits the map, or when it leaves a
    neighbouring corridor above the degree cap with its links spread over more
    groups than the cap allows (every further cut there would split the map).
    """
    if corridor.connection_count <= policy.pruning_target_degree:
        return 0
    center = corridor.coordinate
    linked = [hexagons[cid] for cid in corridor.connections if cid in hexagons]
    coords = [h.coordinate for h in linked]

    ranked = [
        (connection_importance(center, h.coordinate, coords, seeds, policy), h.id)
        for h in linked
    ]
    ranked.sort(key=lambda t: t[0])

    removed = 0
    for _, cid in ranked:
        if corridor.connection_count <= policy.pruning_target_degree:
            break
        other = hexagons[cid]
        # X-Y can only cut cycles through corridors touching either end
        nearby = (set(corridor.connections) | set(other.connections)) - {corridor.id, other.id}
        before = _stranded(hexagons, nearby, policy)
        ia, ib = _detach(corridor, other)
        if is_connected(hexagons) and not (_stranded(hexagons, nearby, policy) - before):
            removed += 1
            if logger:
                logger.debug(event="connection_removed", corridor=corridor.id, target=cid)
        else:
            corridor.add_connection(cid, ia)
            other.add_connection(corridor.id, ib)
    return removed


def prune_corridors(hexagons: HexMap, seeds: SeedManager, policy: GrowthPolicy = DEFAULT_POLICY,
                    logger=None) -> Dict[str, int]:
    """Run the decongestion pass over every corridor; returns counters for metrics.

    The first pass visits every corridor with pruning_min_degree+ links. Later
    passes revisit only corridors still above the cap, and stop once a pass
    removes nothing.
    """
    corridors = [h for h in hexagons.values() if h.hex_type == CORRIDOR]
    removed = 0
    processed = 0
    passes = 0
    threshold = policy.pruning_min_degree
    while passes < policy.pruning_max_passes:
        passes += 1
        queue = sorted(corridors, key=lambda h: -h.connection_count)
        pass_removed = 0
        for corridor in queue:
            if corridor.connection_count < threshold:
                continue
            before = corridor.connection_count
            n = reduce_corridor_connections(corridor, hexagons, seeds, policy, logger)
            if n and logger:
                logger.debug(event="corridor_pruned", corridor=corridor.id, before=before, after=corridor.connection_count)
            pass_removed += n
            processed += 1
        removed += pass_removed
        threshold = policy.pruning_max_degree + 1
        if not pass_removed or not any(h.connection_count >= threshold for h in corridors):
            break
    over = [h.id for h in corridors if h.connection_count > policy.pruning_max_degree]
    if over and logger:
        logger.warn(event="corridors_over_degree", count=len(over), corridors=",".join(over[:10]))
    if logger:
        logger.info(event="pruning_complete", removed=removed, processed=processed, passes=passes,
                    corridors=len(corridors))
    return {"connections_removed": removed, "corridors_processed": processed}


__all__ = ["linearity", "connection_importance", "reduce_corridor_connections", "prune_corridors"]
