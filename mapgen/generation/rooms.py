"""Organic room clusters grown breadth-first from a frontier cell."""
from collections import deque
from typing import Deque, Iterable, List, Optional, Set, Tuple

from .cells import HexMap
from .config import DEFAULT_POLICY, GenerationOptions, GrowthPolicy
from .hexgrid import HexCoordinate, count_occupied, has_occupied_neighbor
from .seed import SeedManager


class RoomGenerator:
    def __init__(self, seeds: SeedManager, options: GenerationOptions, policy: GrowthPolicy = DEFAULT_POLICY, logger=None):
        self.seeds = seeds
        self.options = options
        self.policy = policy
        self.logger = logger

    def generate_room(self, frontier: Iterable[HexCoordinate], hexagons: HexMap, target_size: int) -> List[HexCoordinate]:
        if target_size <= 0:
            return []
        start = self._select_start(frontier, hexagons)
        if start is None:
            return []
        room = self._grow(start, hexagons, target_size)
        if self.logger:
            self.logger.debug(event="room_generated", size=len(room), target=target_size)
        return room

    def _select_start(self, frontier, hexagons: HexMap) -> Optional[HexCoordinate]:
        touching = [c for c in frontier if has_occupied_neighbor(c, hexagons)]
        # Prefer starts that do not butt into dense existing structure.
        valid = [c for c in touching if count_occupied(c, hexagons) <= self.policy.room_start_max_neighbors]
        if not valid:
            valid = touching
        if not valid:
            if self.logger:
                self.logger.warn(event="no_valid_start", generator="room")
            return None
        return valid[self.seeds.next_int(len(valid))]

    def _grow(self, start: HexCoordinate, hexagons: HexMap, target_size: int) -> List[HexCoordinate]:
        room: List[HexCoordinate] = [start]
        visited: Set[HexCoordinate] = {start}
        queue: Deque[HexCoordinate] = deque([start])

        while queue and len(room) < target_size:
            current = queue.popleft()
            candidates = self.growth_candidates(current, hexagons, visited)
            if not candidates:
                continue
            amount = self._growth_amount(len(candidates), target_size - len(room))
            for pos in self._select_positions(candidates, amount, room, visited):
                room.append(pos)
                visited.add(pos)
                if self._should_continue(len(room), target_size):
                    queue.append(pos)
        return room

    def growth_candidates(self, current: HexCoordinate, hexagons: HexMap, visited: Set[HexCoordinate]) -> List[HexCoordinate]:
        out = []
        for nb in current.neighbors():
            if nb in visited or nb.to_id() in hexagons:
                continue
            if count_occupied(nb, hexagons) > self.policy.room_candidate_max_neighbors:
                continue
            out.append(nb)
        return out

    def _growth_amount(self, available: int, remaining: int) -> int:
        if available <= 0 or remaining <= 0:
            return 0
        factor = self.seeds.next_double()
        cap = min(available, remaining)
        if factor < self.policy.slow_growth_threshold:
            return 1
        if factor < self.policy.medium_growth_threshold:
            return min(cap, 2 + self.seeds.next_int(2))
        return min(cap, 3 + self.seeds.next_int(3))

    def _select_positions(self, candidates: List[HexCoordinate], count: int, room: List[HexCoordinate], visited: Set[HexCoordinate]) -> List[HexCoordinate]:
        if not candidates or count <= 0:
            return []
        scored: List[Tuple[float, HexCoordinate]] = [(self.growth_score(c, room, visited), c) for c in candidates]
        scored.sort(key=lambda t: -t[0])

        picked: List[HexCoordinate] = []
        taken: Set[int] = set()
        last = len(scored) - 1
        for i in range(min(count, len(scored))):
            index = i
            if self.seeds.next_double() < self.policy.selection_jitter_probability and i < last:
                index = min(i + 1 + self.seeds.next_int(2), last)
            # slot already taken: fall back to the best-scored free one, which may rank above the jittered pick
            if index in taken:
                index = next(j for j in range(len(scored)) if j not in taken)
            taken.add(index)
            picked.append(scored[index][1])
        return picked

    def growth_score(self, candidate: HexCoordinate, room: List[HexCoordinate], visited: Set[HexCoordinate]) -> float:
        score = 0.0
        room_neighbors = sum(1 for nb in candidate.neighbors() if nb in visited)
        if room_neighbors in (2, 3):
            score += 2.0
        elif room_neighbors == 1:
            score += 1.0
        elif room_neighbors >= 4:
            score += 0.5
        score += self.seeds.next_double() * self.policy.score_jitter
        if room:
            dist = candidate.distance_to(room_centroid(room))
            score += max(0.0, self.policy.centroid_radius - dist) * self.policy.centroid_weight
        return score

    def _should_continue(self, size: int, target_size: int) -> bool:
        if size >= target_size:
            return False
        probability = self.policy.continue_base - (size / target_size) * self.policy.continue_decay
        return self.seeds.next_double() < probability


def room_centroid(room: List[HexCoordinate]) -> HexCoordinate:
    """Integer mean of the room's coordinates (truncated toward zero)."""
    if not room:
        return HexCoordinate(0, 0)
    n = len(room)
    return HexCoordinate(int(sum(c.q for c in room) / n), int(sum(c.r for c in room) / n))
