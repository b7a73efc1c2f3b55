"""Seed handling and the single random stream shared by every generation step.

String seeds are hashed the same way the seed API used to coerce them
(SHA-256, first 8 bytes big-endian), so the stream is a pure function of the
seed string and independent of PYTHONHASHSEED.
"""
from __future__ import annotations
import hashlib
import random
import secrets
import string
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")

SEED_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
SEED_LENGTH = 10


def generate_seed() -> str:
    return "".join(secrets.choice(SEED_ALPHABET) for _ in range(SEED_LENGTH))


def seed_to_int(seed: str) -> int:
    h = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big")


class SeedManager:
    def __init__(self, seed: Optional[str] = None):
        if seed is not None and seed.strip():
            self.seed = seed.strip()
        else:
            self.seed = generate_seed()
        self._rng = random.Random(seed_to_int(self.seed))

    def next_int(self, a: int, b: Optional[int] = None) -> int:
        """next_int(bound) -> [0, bound); next_int(min, max) -> [min, max)."""
        if b is None:
            if a <= 0:
                raise ValueError("Bound must be positive")
            return self._rng.randrange(a)
        if a >= b:
            raise ValueError("Min must be less than max")
        return self._rng.randrange(b - a) + a

    def next_boolean(self) -> bool:
        return self._rng.random() < 0.5

    def next_double(self) -> float:
        return self._rng.random()

    def random_choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Sequence cannot be empty")
        return seq[self.next_int(len(seq))]

    def shuffle(self, items: MutableSequence) -> None:
        self._rng.shuffle(items)

    def should_generate_corridor(self, corridor_ratio: float) -> bool:
        return self.next_double() < corridor_ratio


__all__ = ["SeedManager", "generate_seed", "seed_to_int"]
