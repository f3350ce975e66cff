import random
from typing import Protocol


class RandomSource(Protocol):
    """
    Source of the random draws used for weighted selection.

    ``random.Random`` and ``random.SystemRandom`` both satisfy it, so
    tests can pass a seeded ``random.Random`` for repeatable orderings.
    """

    def randint(self, a: int, b: int) -> int: ...


def default_random_source() -> RandomSource:
    # SystemRandom keeps no state of its own, so callers can share it freely.
    return random.SystemRandom()
