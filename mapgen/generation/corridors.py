"""Corridor segments: thin random walks that may branch and widen.

A corridor call starts on the frontier next to the existing map and walks
outward, refusing cells that would touch more than two occupied-or-walked
neighbors so the result stays thin.
"""
from collections import deque
from typing import Deque, Iterable, List, Optional, Set

from .cells import HexMap
from .config import DEFAULT_POLICY, GenerationOptions, GrowthPolicy
from .hexgrid import HexCoordinate, count_occupied, has_occupied_neighbor
from .seed import SeedManager


class CorridorGenerator:
    def __init__(self, seeds: SeedManager, options: GenerationOptions, policy: GrowthPolicy = DEFAULT_POLICY, logger=None):
        self.seeds = seeds
        self.options = options
        self.policy = policy
        self.logger = logger

    def generate_corridor(self, frontier: Iterable[HexCoordinate], hexagons: HexMap, max_length: int) -> List[HexCoordinate]:
        if max_length <= 0:
            return []
        start = self._select_start(frontier, hexagons)
        if start is None:
            return []
        width = self.seeds.random_choice(self.options.corridor_widths)
        path = self._walk(start, hexagons, max_length, width)
        if self.logger:
            self.logger.debug(event="corridor_generated", size=len(path), width=width)
        return path

    def _select_start(self, frontier, hexagons: HexMap) -> Optional[HexCoordinate]:
        valid = [c for c in frontier if has_occupied_neighbor(c, hexagons)]
        if not valid:
            if self.logger:
                self.logger.warn(event="no_valid_start", generator="corridor")
            return None
        return valid[self.seeds.next_int(len(valid))]

    def _walk(self, start: HexCoordinate, hexagons: HexMap, max_length: int, width: int) -> List[HexCoordinate]:
        path: List[HexCoordinate] = [start]
        visited: Set[HexCoordinate] = {start}
        queue: Deque[HexCoordinate] = deque([start])
        length = 1
        last_direction: Optional[HexCoordinate] = None

        while queue and length < max_length:
            current = queue.popleft()
            options = self.valid_extensions(current, hexagons, visited)

            if not options:
                # dead end: maybe branch from an earlier cell
                if len(path) > 1 and self.seeds.next_double() < self.policy.branch_probability:
                    branch_point = path[self.seeds.next_int(max(1, len(path) - 2))]
                    branch_options = self.valid_extensions(branch_point, hexagons, visited)
                    if branch_options:
                        branch_next = branch_options[self.seeds.next_int(len(branch_options))]
                        queue.append(branch_next)
                        path.append(branch_next)
                        visited.add(branch_next)
                        length += 1
                        last_direction = branch_point.direction_to(branch_next)
                        continue
                break

            nxt = self._choose_next(current, options, last_direction)
            extra = self._widen(nxt, hexagons, visited, width)

            queue.append(nxt)
            path.append(nxt)
            visited.add(nxt)
            length += 1
            for pos in extra:
                if length >= max_length:
                    break
                path.append(pos)
                visited.add(pos)
                length += 1

            last_direction = current.direction_to(nxt)
            if self.seeds.next_double() < self.policy.direction_reset_probability:
                last_direction = None

        return path

    def valid_extensions(self, current: HexCoordinate, hexagons: HexMap, visited: Set[HexCoordinate]) -> List[HexCoordinate]:
        out = []
        for nb in current.neighbors():
            if nb in visited or nb.to_id() in hexagons:
                continue
            if count_occupied(nb, hexagons, visited) > self.policy.corridor_max_density:
                continue
            out.append(nb)
        return out

    def _choose_next(self, current: HexCoordinate, options: List[HexCoordinate], last_direction: Optional[HexCoordinate]) -> HexCoordinate:
        if len(options) == 1:
            return options[0]
        if last_direction is not None:
            for pos in options:
                if is_similar_direction(last_direction, current.direction_to(pos)):
                    return pos
        return options[self.seeds.next_int(len(options))]

    def _widen(self, center: HexCoordinate, hexagons: HexMap, visited: Set[HexCoordinate], width: int) -> List[HexCoordinate]:
        if width <= 1:
            return []
        wanted = min(width - 1, self.policy.max_extra_width)
        available = [nb for nb in center.neighbors() if nb not in visited and nb.to_id() not in hexagons]
        self.seeds.shuffle(available)
        return available[:wanted]


def is_similar_direction(a: HexCoordinate, b: HexCoordinate) -> bool:
    """Same vector, or off by at most one step on each axis."""
    return abs(a.q - b.q) <= 1 and abs(a.r - b.r) <= 1
