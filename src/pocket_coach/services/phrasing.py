"""Random phrase selection."""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def pick(pool: Sequence[T], rng: random.Random) -> T:
    """Pick one variant from a non-empty phrase pool."""
    return pool[rng.randrange(len(pool))]
