from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass
class GenerationOptions:
    corridor_ratio: float = 0.7
    room_size_min: int = 4
    room_size_max: int = 8
    corridor_widths: Tuple[int, ...] = (1, 2)

    def __post_init__(self):
        self.corridor_widths = tuple(self.corridor_widths)

    def validate(self) -> None:
        """Raise ValueError when the options fall outside the supported ranges.

        The generator assumes legal options; callers at the service edge run this first.
        """
        if not 0.0 <= self.corridor_ratio <= 1.0:
            raise ValueError("Corridor ratio must be between 0.0 and 1.0")
        if self.room_size_min < 1 or self.room_size_min > self.room_size_max:
            raise ValueError("Room size min must be positive and less than or equal to max")
        if self.room_size_max < 1 or self.room_size_max > 20:
            raise ValueError("Room size max must be between 1 and 20")
        if not self.corridor_widths:
            raise ValueError("Corridor width list cannot be empty")
        for width in self.corridor_widths:
            if width < 1 or width > 3:
                raise ValueError("Corridor width must be between 1 and 3")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GenerationOptions":
        """Build options from wire-format keys, falling back to defaults for missing ones."""
        data = data or {}
        defaults = cls()
        widths = data.get("corridorWidths", data.get("corridorWidth"))
        return cls(
            corridor_ratio=float(data.get("corridorRatio", defaults.corridor_ratio)),
            room_size_min=int(data.get("roomSizeMin", defaults.room_size_min)),
            room_size_max=int(data.get("roomSizeMax", defaults.room_size_max)),
            corridor_widths=tuple(int(w) for w in widths) if widths is not None else defaults.corridor_widths,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "corridorRatio": self.corridor_ratio,
            "roomSizeMin": self.room_size_min,
            "roomSizeMax": self.room_size_max,
            "corridorWidths": list(self.corridor_widths),
        }


@dataclass(frozen=True)
class GrowthPolicy:
    # growth loop
    max_stalled_rounds: int = 100
    # corridors
    corridor_segment_max: int = 8
    corridor_max_density: int = 2
    branch_probability: float = 0.3
    direction_reset_probability: float = 0.2
    max_extra_width: int = 2
    # rooms
    room_start_max_neighbors: int = 3
    room_candidate_max_neighbors: int = 2
    slow_growth_threshold: float = 0.3
    medium_growth_threshold: float = 0.7
    selection_jitter_probability: float = 0.2
    score_jitter: float = 0.5
    centroid_radius: float = 3.0
    centroid_weight: float = 0.1
    continue_base: float = 0.8
    continue_decay: float = 0.3
    # corridor decongestion
    linearity_weight: float = 3.0
    pruning_jitter: float = 0.05
    pruning_target_degree: int = 2
    pruning_min_degree: int = 3
    pruning_max_degree: int = 3
    pruning_max_passes: int = 4
    # validation
    ratio_tolerance: float = 0.15


DEFAULT_POLICY = GrowthPolicy()

__all__ = ["GenerationOptions", "GrowthPolicy", "DEFAULT_POLICY"]
