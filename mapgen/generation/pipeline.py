"""Pipeline orchestration for hex map generation.

One MapGenerator instance runs one generation call through ordered phases:

  init         single corridor hexagon at the origin, frontier = its neighbours
  growth       alternate corridor / room segments against the shared frontier
  post_process corridor decongestion (connectivity-guarded edge pruning)
  validate     final connectivity proof; failure raises MapInvariantError
  statistics   counts, degrees, approximate longest path, bounding box

Every random decision draws from the generator's single SeedManager stream in
a fixed order, so (seed, options, target) fully determines the manifest apart
from wall-clock fields.
"""
from __future__ import annotations
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from ..logging_utils import get_logger
from ..version import __version__
from .cells import CORRIDOR, ROOM, Hexagon, HexMap
from .config import DEFAULT_POLICY, GenerationOptions, GrowthPolicy
from .corridors import CorridorGenerator
from .errors import MapInvariantError
from .hexgrid import ORIGIN, HexCoordinate
from .manifest import Manifest, Metadata
from .metrics import compute_statistics, init_metrics
from .pruning import prune_corridors
from .rooms import RoomGenerator
from .seed import SeedManager
from .validator import MapValidator


class MapGenerator:
    def __init__(self, seed: Optional[str] = None, options: Optional[GenerationOptions] = None,
                 policy: Optional[GrowthPolicy] = None, logger=None):
        self.options = options or GenerationOptions()
        self.policy = policy or DEFAULT_POLICY
        self.logger = logger or get_logger("mapgen.generation")
        self.seeds = SeedManager(seed)
        self.corridors = CorridorGenerator(self.seeds, self.options, self.policy, self.logger)
        self.rooms = RoomGenerator(self.seeds, self.options, self.policy, self.logger)
        self.validator = MapValidator(self.logger)

        self.hexagons: HexMap = {}
        # dict used as an insertion-ordered set so frontier iteration is reproducible
        self.frontier: Dict[HexCoordinate, None] = {}
        self.metrics: Dict[str, Any] = init_metrics()
        self._used = False

    @property
    def seed(self) -> str:
        return self.seeds.seed

    @property
    def count(self) -> int:
        return len(self.hexagons)

    def generate(self, target_count: int) -> Manifest:
        if self._used:
            raise RuntimeError("MapGenerator instances are single use; create a new one per map")
        self._used = True
        self.logger.info(event="generator_init", seed=self.seed, target=target_count)

        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r

        _phase('init', self._initialize)
        _phase('growth', self._grow, target_count)
        counters = _phase('post_process', prune_corridors, self.hexagons, self.seeds, self.policy, self.logger)
        self.metrics.update(counters)
        _phase('validate', self._validate)
        statistics = _phase('statistics', compute_statistics, self.hexagons, self.seeds)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        self.metrics['runtime_ms'] = elapsed_ms
        self.metrics['phase_ms'] = phase_times

        metadata = Metadata(
            seed=self.seed,
            requested_count=target_count,
            generation_time_ms=elapsed_ms,
            statistics=statistics,
            generated_at=datetime.now(timezone.utc).isoformat(),
            version=__version__,
        )
        manifest = Manifest.build(metadata, self.hexagons.values())
        self.logger.info(
            event="generation_complete",
            seed=self.seed,
            hexagons=statistics.actual_count,
            corridors=statistics.corridor_count,
            rooms=statistics.room_count,
            runtime_ms=elapsed_ms,
        )
        return manifest

    def _initialize(self) -> None:
        self._commit(ORIGIN, CORRIDOR)

    def _grow(self, target_count: int) -> None:
        stalled = 0
        while self.count < target_count and self.frontier:
            remaining = target_count - self.count
            if self.seeds.should_generate_corridor(self.options.corridor_ratio):
                added = self._corridor_segment(remaining)
                self.metrics['corridor_segments'] += 1
            else:
                added = self._room_cluster(remaining)
                self.metrics['room_clusters'] += 1
            if added:
                stalled = 0
                continue
            self.metrics['empty_segments'] += 1
            stalled += 1
            if stalled >= self.policy.max_stalled_rounds:
                self.logger.warn(event="growth_stalled", hexagons=self.count, target=target_count)
                break
        if self.count < target_count and not self.frontier:
            self.metrics['frontier_exhausted'] = 1
            self.logger.warn(event="frontier_exhausted", hexagons=self.count, target=target_count)
        self.logger.info(event="growth_complete", hexagons=self.count)

    def _corridor_segment(self, remaining: int) -> int:
        coords = self.corridors.generate_corridor(
            self.frontier, self.hexagons, min(remaining, self.policy.corridor_segment_max))
        return self._add_all(coords, CORRIDOR)

    def _room_cluster(self, remaining: int) -> int:
        max_size = min(self.options.room_size_max, remaining)
        min_size = min(self.options.room_size_min, max_size)
        size = min_size if min_size == max_size else self.seeds.next_int(min_size, max_size + 1)
        coords = self.rooms.generate_room(self.frontier, self.hexagons, size)
        return self._add_all(coords, ROOM)

    def _add_all(self, coords: Iterable[HexCoordinate], hex_type: str) -> int:
        added = 0
        for coord in coords:
            if coord.to_id() not in self.hexagons:
                self._commit(coord, hex_type)
                added += 1
        return added

    def _commit(self, coord: HexCoordinate, hex_type: str) -> Hexagon:
        """Place one hexagon, wire it to every present neighbour and update the frontier."""
        hexagon = Hexagon(coord, hex_type)
        neighbours = [self.hexagons.get(nb.to_id()) for nb in coord.neighbors()]
        for other in neighbours:
            if other is not None:
                hexagon.add_connection(other.id)
                other.add_connection(hexagon.id)
        self.hexagons[hexagon.id] = hexagon
        self.frontier.pop(coord, None)
        for nb in coord.neighbors():
            if nb.to_id() not in self.hexagons:
                self.frontier[nb] = None
        return hexagon

    def _validate(self) -> None:
        errors = []
        if not self.validator.connectivity(list(self.hexagons.values()), errors):
            self.logger.error(event="validation_failed", seed=self.seed, detail="; ".join(errors))
            raise MapInvariantError("Generated map failed connectivity validation", seed=self.seed, details=errors)


def generate(seed: Optional[str], target_count: int, options: Optional[GenerationOptions] = None,
             policy: Optional[GrowthPolicy] = None, logger=None) -> Manifest:
    """Generate one map manifest; options are assumed already validated."""
    return MapGenerator(seed=seed, options=options, policy=policy, logger=logger).generate(target_count)


__all__ = ["MapGenerator", "generate"]
