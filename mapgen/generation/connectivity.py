"""Breadth-first reachability over hexagon connections.

Shared by corridor pruning (guarded edge removal), the validator, and the
longest-path statistic.
"""
from __future__ import annotations
from collections import deque
from typing import Dict, Optional, Set

from .cells import HexMap


def bfs_depths(hexagons: HexMap, start_id: str) -> Dict[str, int]:
    """Hop distance from `start_id` to every reachable hexagon.

    Connections to ids missing from `hexagons` are followed into the result but
    not expanded further.
    """
    depths = {start_id: 0}
    q = deque([start_id])
    while q:
        cur = q.popleft()
        hexagon = hexagons.get(cur)
        if hexagon is None:
            continue
        d = depths[cur] + 1
        for nid in hexagon.connections:
            if nid not in depths:
                depths[nid] = d
                q.append(nid)
    return depths


def reachable_ids(hexagons: HexMap, start_id: Optional[str] = None) -> Set[str]:
    if not hexagons:
        return set()
    if start_id is None:
        start_id = next(iter(hexagons))
    return set(bfs_depths(hexagons, start_id))


def is_connected(hexagons: HexMap) -> bool:
    """True when every hexagon is reachable from the first one; empty maps are connected."""
    if len(hexagons) <= 1:
        return True
    reached = reachable_ids(hexagons)
    return all(h in reached for h in hexagons)


def max_depth(hexagons: HexMap, start_id: str) -> int:
    depths = bfs_depths(hexagons, start_id)
    return max(depths.values()) if depths else 0


def neighbour_groups(hexagons: HexMap, hex_id: str) -> int:
    """How many separate components the neighbours of `hex_id` fall into once it is removed.

    This is the lowest degree `hex_id` can be pruned to without splitting the map.
    """
    linked = [cid for cid in hexagons[hex_id].connections if cid in hexagons]
    pending = set(linked)
    seen = {hex_id}
    groups = 0
    for start in linked:
        if start not in pending:
            continue
        groups += 1
        pending.discard(start)
        seen.add(start)
        q = deque([start])
        while q and pending:
            for nid in hexagons[q.popleft()].connections:
                if nid in seen or nid not in hexagons:
                    continue
                seen.add(nid)
                pending.discard(nid)
                q.append(nid)
    return groups
