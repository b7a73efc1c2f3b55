"""Public generation package interface."""

from .cells import CORRIDOR, ROOM, Hexagon  # noqa: F401
from .config import DEFAULT_POLICY, GenerationOptions, GrowthPolicy  # noqa: F401
from .corridors import CorridorGenerator  # noqa: F401
from .errors import MapInvariantError  # noqa: F401
from .hexgrid import DIRECTIONS, HexCoordinate  # noqa: F401
from .manifest import BoundingBox, Manifest, Metadata, Statistics  # noqa: F401
from .pipeline import MapGenerator, generate  # noqa: F401
from .rooms import RoomGenerator  # noqa: F401
from .seed import SeedManager  # noqa: F401
from .validator import MapValidator, ValidationResult  # noqa: F401

__all__ = [
    "CORRIDOR",
    "ROOM",
    "Hexagon",
    "HexCoordinate",
    "DIRECTIONS",
    "GenerationOptions",
    "GrowthPolicy",
    "DEFAULT_POLICY",
    "SeedManager",
    "CorridorGenerator",
    "RoomGenerator",
    "MapGenerator",
    "generate",
    "MapValidator",
    "ValidationResult",
    "MapInvariantError",
    "Manifest",
    "Metadata",
    "Statistics",
    "BoundingBox",
]
